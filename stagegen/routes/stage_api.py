"""
project: stagegen
module: stage_api.py
License: MIT

Stage generation API routes.

GET /api/stage generates (or returns a cached) stage and serves it as JSON
or as rendered text. Seeds may be integers or arbitrary strings; strings are
hashed into a stable 63-bit integer so the same text always yields the same
stage.
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from stagegen.logging_utils import get_logger
from stagegen.stage import (
    GenerationFailed,
    InvalidStageInfo,
    StageConfig,
    generate_stage,
    render_minimal,
    render_stage,
    stage_to_dict,
)

bp_stage = Blueprint("stage_api", __name__)
log = get_logger("stagegen.api")

MAX_SEED = 9223372036854775807
TEXT_FORMATS = {"text": render_stage, "minimal": render_minimal}


def _coerce_seed(raw_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if raw_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw_seed, int):
        return raw_seed % MAX_SEED
    s = str(raw_seed).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isascii() and s.isdigit():
        return int(s) % MAX_SEED
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % MAX_SEED


def _stage_config() -> StageConfig:
    cfg = current_app.config
    return StageConfig(
        stall_budget_factor=cfg.get("STAGE_STALL_FACTOR"),
        enable_metrics=bool(cfg.get("STAGE_ENABLE_GENERATION_METRICS", True)),
    )


# Small in-process cache keyed by (rooms, seed, stall factor, metrics flag).
_stage_cache = {}
_stage_cache_lock = threading.Lock()
_STAGE_CACHE_MAX = 8


def get_cached_stage(rooms_count: int, seed: int, config: StageConfig):
    if os.environ.get("STAGE_DISABLE_CACHE") == "1":
        return generate_stage(rooms_count, seed=seed, config=config)
    key = (rooms_count, seed, config.stall_budget_factor, config.enable_metrics)
    with _stage_cache_lock:
        stage = _stage_cache.get(key)
    if stage is not None:
        return stage
    stage = generate_stage(rooms_count, seed=seed, config=config)
    with _stage_cache_lock:
        if len(_stage_cache) >= _STAGE_CACHE_MAX:
            _stage_cache.pop(next(iter(_stage_cache)))
        _stage_cache[key] = stage
    return stage


def _error(message: str, status: int):
    return jsonify({"error": message}), status


@bp_stage.route("/api/stage", methods=["GET"])
def get_stage():
    """Generate a stage.

    Query params (all optional):
      rooms=<int>   room count (default STAGE_DEFAULT_ROOMS)
      seed=<int|str>
      format=json|text|minimal
    """
    fmt = (request.args.get("format") or "json").lower()
    if fmt != "json" and fmt not in TEXT_FORMATS:
        return _error(f"unknown format: {fmt}", 400)

    raw_rooms = request.args.get("rooms")
    if raw_rooms is None:
        rooms_count = int(current_app.config["STAGE_DEFAULT_ROOMS"])
    else:
        try:
            rooms_count = int(raw_rooms)
        except ValueError:
            return _error(f"rooms must be an integer (got {raw_rooms!r})", 400)
    max_rooms = int(current_app.config["STAGE_MAX_ROOMS"])
    if rooms_count > max_rooms:
        return _error(f"rooms must be <= {max_rooms}", 400)

    seed = _coerce_seed(request.args.get("seed"))
    try:
        stage = get_cached_stage(rooms_count, seed, _stage_config())
    except InvalidStageInfo as exc:
        return _error(str(exc), 400)
    except GenerationFailed as exc:
        log.bind(rooms=rooms_count, seed=seed).warn(
            event="api_generation_failed", placed=exc.rooms_placed, attempts=exc.attempts
        )
        return _error(str(exc), 503)

    if fmt in TEXT_FORMATS:
        resp = Response(TEXT_FORMATS[fmt](stage) + "\n", mimetype="text/plain")
        resp.headers["X-Stage-Seed"] = str(seed)
        return resp
    payload = stage_to_dict(stage)
    payload["seed"] = seed
    return jsonify(payload)


@bp_stage.route("/healthz", methods=["GET"])
def healthz():
    return jsonify({"status": "ok"})
