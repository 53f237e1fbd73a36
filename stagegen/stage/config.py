import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_STALL_BUDGET_FACTOR = 32


@dataclass
class StageConfig:
    # Consecutive rejected walk steps allowed per grid cell before giving up.
    # None keeps the loop unbounded.
    stall_budget_factor: Optional[int] = DEFAULT_STALL_BUDGET_FACTOR
    enable_metrics: bool = True

    @classmethod
    def from_env(cls) -> "StageConfig":
        """Build a config honouring STAGE_STALL_FACTOR / STAGE_ENABLE_GENERATION_METRICS."""
        config = cls()
        raw_factor = os.environ.get("STAGE_STALL_FACTOR")
        if raw_factor is not None:
            raw_factor = raw_factor.strip().lower()
            if raw_factor in {"", "none", "off", "unbounded"}:
                config.stall_budget_factor = None
            else:
                try:
                    config.stall_budget_factor = int(raw_factor)
                except ValueError:
                    raise ValueError(f"STAGE_STALL_FACTOR must be an integer or 'none', got {raw_factor!r}") from None
        if "STAGE_ENABLE_GENERATION_METRICS" in os.environ:
            val = os.environ.get("STAGE_ENABLE_GENERATION_METRICS", "").lower()
            config.enable_metrics = val not in {"0", "false", "no", ""}
        return config


__all__ = ["StageConfig", "DEFAULT_STALL_BUDGET_FACTOR"]
