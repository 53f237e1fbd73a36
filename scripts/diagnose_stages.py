#!/usr/bin/env python3
"""Stage structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_stages.py --rooms 8 20 21

If no seeds are provided as CLI args, seeds 1..20 are checked. Small room
counts are the interesting ones: with 8 rooms seed 20 walls the walk into a
dead state and reports a stall instead of a stage.
Exits with non-zero status if structural issues are detected or a
generation stalls.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from stagegen.stage import GenerationFailed, generate_stage  # noqa: E402 import after path fix
from stagegen.stage.debug_checks import analyze  # noqa: E402 import after path fix

DEFAULT_SEEDS = list(range(1, 21))
DEFAULT_ROOMS = 8


def run_for_seed(seed: int, rooms: int) -> dict:
    try:
        stage = generate_stage(rooms, seed=seed)
    except GenerationFailed as exc:
        return {"seed": seed, "error": str(exc), "ok": False}
    issues = {k: len(v) for k, v in analyze(stage).items()}
    return {
        "seed": seed,
        "issues": issues,
        "attempts": stage.metrics.get("attempts"),
        "max_stall": stage.metrics.get("max_stall"),
        "dead_ends": stage.metrics.get("dead_ends"),
        "ok": all(v == 0 for v in issues.values()),
    }


def main(argv: List[str]) -> int:
    parser = argparse.ArgumentParser(description="Check stage invariants for a list of seeds")
    parser.add_argument("--rooms", type=int, default=DEFAULT_ROOMS)
    parser.add_argument("seeds", nargs="*", type=int)
    args = parser.parse_args(argv)
    seeds = args.seeds or DEFAULT_SEEDS
    results = [run_for_seed(s, args.rooms) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
