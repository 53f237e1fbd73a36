from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'attempts': 0,
        'rooms_placed': 0,
        'rejected_occupied': 0,
        'rejected_crowded': 0,
        'rejected_isolated': 0,
        'max_stall': 0,
        'dead_ends': 0,
        'runtime_ms': 0.0,
    }
