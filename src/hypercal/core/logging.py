"""Structured JSON-line logging for hypercal.

Library code only emits DEBUG records (geometry results, batch timings,
bindings written by ``apply``); callers raise the level to see them.
"""

from __future__ import annotations

import json
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TextIO

LEVELS: dict[str, int] = {"DEBUG": 0, "INFO": 1, "WARN": 2, "ERROR": 3}
_ALIASES = {"WARNING": "WARN"}
DEFAULT_LEVEL = "INFO"


def normalize_level(level: str) -> str:
    """Canonical level name; accepts any case and the WARNING alias."""
    key = level.upper()
    key = _ALIASES.get(key, key)
    if key not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {sorted(LEVELS)}")
    return key


@dataclass
class LogRecord:
    """One structured log line."""

    level: str
    logger: str
    message: str
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "logger": self.logger,
            "message": self.message,
            "timestamp": self.timestamp,
            **self.data,
        }

    def to_json(self) -> str:
        # default=str keeps numpy scalars and parameter spaces printable
        return json.dumps(self.to_dict(), default=str)


class StructuredLogger:
    """Logger writing one JSON object per line."""

    def __init__(
        self,
        name: str,
        output: TextIO | None = None,
        min_level: str = DEFAULT_LEVEL,
    ) -> None:
        self.name = name
        self.output = output
        self.min_level = normalize_level(min_level)

    @property
    def min_level(self) -> str:
        return self._min_level

    @min_level.setter
    def min_level(self, level: str) -> None:
        self._min_level = normalize_level(level)

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS[normalize_level(level)] >= LEVELS[self._min_level]

    def _log(self, level: str, message: str, **data: Any) -> None:
        if not self.is_enabled_for(level):
            return
        record = LogRecord(level=level, logger=self.name, message=message, data=data)
        # Resolve stdout lazily so pytest's capsys sees the output
        print(record.to_json(), file=self.output or sys.stdout)

    def debug(self, message: str, **data: Any) -> None:
        """Log at DEBUG level."""
        self._log("DEBUG", message, **data)

    def info(self, message: str, **data: Any) -> None:
        """Log at INFO level."""
        self._log("INFO", message, **data)

    def warn(self, message: str, **data: Any) -> None:
        """Log at WARN level."""
        self._log("WARN", message, **data)

    def error(self, message: str, **data: Any) -> None:
        """Log at ERROR level."""
        self._log("ERROR", message, **data)

    @contextmanager
    def timer(self, operation: str, **data: Any):
        """Time a block and log its duration at DEBUG.

        Usage:
            with logger.timer("evaluate_batch", n=len(batch)):
                scores = [evaluator.evaluate_score(c) for c in batch]
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.debug(f"{operation} completed", elapsed_ms=elapsed * 1000, **data)


_loggers: dict[str, StructuredLogger] = {}
_global_level = DEFAULT_LEVEL


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance shared by all callers using ``name``.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, min_level=_global_level)
    return _loggers[name]


def set_log_level(level: str) -> None:
    """Set minimum log level for existing and future loggers.

    Args:
        level: One of DEBUG, INFO, WARN (or WARNING), ERROR.
    """
    global _global_level
    _global_level = normalize_level(level)
    for logger in _loggers.values():
        logger.min_level = _global_level
