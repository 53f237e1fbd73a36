"""Structured event logging for stage generation.

Each call writes one line to stderr, either as key=value pairs or as a JSON
object. Stdout stays free for rendered stages and JSON output from the CLI.

Usage:
    from stagegen.logging_utils import get_logger
    log = get_logger("stagegen.stage")
    log.info(event="stage_generated", rooms=100, exit=GridCoordinate(3, 7))

    req_log = log.bind(seed=42)          # seed=42 is added to every line
    req_log.warn(event="stall", attempts=900)

Values are flattened for key=value output: coordinates and other tuples become
``r,c``, dicts expand into dotted keys (``phase_ms.shape=3``), floats keep three
decimals and spaces in strings become underscores. ``None`` values are dropped.

STAGEGEN_LOG_LEVEL (debug/info/warn/error, default warn) and STAGEGEN_LOG_JSON
are read on every call. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "warning": 30, "error": 40}
DEFAULT_LEVEL = "warn"


def _threshold() -> int:
    name = os.getenv("STAGEGEN_LOG_LEVEL", DEFAULT_LEVEL).strip().lower()
    return LEVELS.get(name, LEVELS[DEFAULT_LEVEL])


def _json_mode() -> bool:
    return os.getenv("STAGEGEN_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _flatten(key: str, value, out: dict):
    if value is None:
        return
    if isinstance(value, dict):
        for sub_key, sub_value in value.items():
            _flatten(f"{key}.{sub_key}", sub_value, out)
    elif isinstance(value, tuple):
        out[key] = ",".join(str(v) for v in value)
    elif isinstance(value, bool):
        out[key] = "true" if value else "false"
    elif isinstance(value, float):
        out[key] = f"{value:.3f}"
    elif isinstance(value, int):
        out[key] = str(value)
    else:
        out[key] = str(value).replace(" ", "_")


def _jsonable(value):
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items() if v is not None}
    return value


def format_record(level: str, name: str, fields: dict) -> str:
    ts = int(time.time())
    if _json_mode():
        rec = {k: _jsonable(v) for k, v in fields.items() if v is not None}
        rec.update(level=level, ts=ts, logger=name)
        return json.dumps(rec, separators=(",", ":"), default=str)
    flat: dict = {}
    for key, value in fields.items():
        _flatten(key, value, flat)
    parts = [f"level={level}", f"ts={ts}", f"logger={name}"]
    parts.extend(f"{k}={v}" for k, v in flat.items())
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that adds ``fields`` to every record."""
        return _Logger(self.name, {**self.context, **fields})

    def _log(self, lvl: str, fields: dict):
        if LEVELS[lvl] < _threshold():
            return
        print(format_record(lvl, self.name, {**self.context, **fields}), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", fields)

    def info(self, **fields):
        self._log("info", fields)

    def warn(self, **fields):
        self._log("warn", fields)

    def error(self, **fields):
        self._log("error", fields)


_LOGGER_CACHE: dict = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("stagegen")
