"""Pipeline orchestration for stage generation.

StageFactory runs the two phases (shape walk, room graph derivation) against
an injected RandomSource and records lightweight metrics. The factory keeps no
reference to the produced Stage; the caller owns it.
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

from stagegen.logging_utils import get_logger

from .config import StageConfig
from .errors import GenerationFailed, validate_rooms_count
from .graph import RoomGraphBuilder
from .metrics import init_metrics
from .random_source import RandomSource, SeededRandomSource
from .shape import ShapeGenerator
from .stage import Stage, StageInfo

log = get_logger("stagegen.stage")


class StageFactory:
    def __init__(self, random_source: RandomSource, config: Optional[StageConfig] = None):
        self.random = random_source
        self.config = config or StageConfig()

    def create(self, info: StageInfo) -> Stage:
        rooms_count = validate_rooms_count(info.rooms_count)
        enable_metrics = self.config.enable_metrics
        metrics: Dict[str, Any] = init_metrics() if enable_metrics else {}
        phase_times: Dict[str, int] = {}
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            if not enable_metrics:
                return fn(*a, **k)
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        shapes = ShapeGenerator(self.random, self.config.stall_budget_factor)
        try:
            shape = _phase('shape', shapes.generate, rooms_count, metrics if enable_metrics else None)
        except GenerationFailed as exc:
            log.warn(
                event="stage_generation_failed",
                rooms=rooms_count,
                placed=exc.rooms_placed,
                attempts=exc.attempts,
            )
            raise
        stage = _phase('graph', RoomGraphBuilder().build, shape, info)

        if enable_metrics:
            metrics['dead_ends'] = stage.metrics.get('dead_ends', 0)
            metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            metrics['phase_ms'] = phase_times
            stage.metrics = metrics
        else:
            stage.metrics = {}
        log.info(
            event="stage_generated",
            rooms=rooms_count,
            grid=stage.grid_size,
            exit=stage.exit,
            attempts=metrics.get('attempts'),
            phase_ms=phase_times or None,
        )
        return stage


def generate_stage(rooms_count: int, seed: Optional[int] = None, config: Optional[StageConfig] = None) -> Stage:
    """Generate a stage with a fresh SeededRandomSource."""
    return StageFactory(SeededRandomSource(seed), config).create(StageInfo(rooms_count=rooms_count))


__all__ = ["StageFactory", "generate_stage"]
