"""Diagnostics sinks that receive raw errors before normalization."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any


class ErrorSink(ABC):
    """Receives ``(description, raw_error)`` pairs for diagnostics."""

    @abstractmethod
    def record(self, description: str, raw: Any) -> None: ...


class LoggingErrorSink(ErrorSink):
    """Writes raw errors to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or logging.getLogger("providerbridge.errors")
        self.level = level

    def record(self, description: str, raw: Any) -> None:
        self.logger.log(self.level, "%s: %r", description, raw)


class NullErrorSink(ErrorSink):
    """Discards everything."""

    def record(self, description: str, raw: Any) -> None:
        return None


__all__ = ["ErrorSink", "LoggingErrorSink", "NullErrorSink"]
