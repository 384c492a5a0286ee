"""Append-only trace sinks.

Sink failures never propagate: the trace is diagnostic and must not abort a
benchmark run. Failures are logged and kept on ``failures`` for the caller to
inspect at shutdown.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from threading import Lock
from typing import TextIO

from packages.tracer_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    exception_to_error,
)
from packages.tracer_shared.logging import get_logger

_LOGGER = get_logger(__name__)


class TraceSink(ABC):
    """Destination for trace lines shared by every client in a session."""

    @abstractmethod
    def open(self) -> None:
        """Prepare the sink for writes."""

    @abstractmethod
    def write(self, line: str) -> None:
        """Append one complete trace line."""

    @abstractmethod
    def close(self) -> None:
        """Release the sink."""

    @property
    @abstractmethod
    def failures(self) -> list[ErrorDetail]:
        """Return errors recorded so far."""


class FileTraceSink(TraceSink):
    """Trace sink appending to one text file, writes serialized by a lock."""

    def __init__(self, *, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = Lock()
        self._handle: TextIO | None = None
        self._failures: list[ErrorDetail] = []

    @property
    def path(self) -> Path:
        """Return the trace file path."""
        return self._path

    @property
    def failures(self) -> list[ErrorDetail]:
        with self._lock:
            return list(self._failures)

    def open(self) -> None:
        """Create the trace file if absent and open it for appending."""
        with self._lock:
            if self._handle is not None:
                return
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._handle = self._path.open("a", encoding="utf-8", newline="")
            except OSError as exc:
                self._record_exception(
                    stage="open", code=codes.TRACE_SINK_OPEN_FAILED, exc=exc
                )
                return
        _LOGGER.info("trace sink opened: path=%s", self._path)

    def write(self, line: str) -> None:
        with self._lock:
            if self._handle is None:
                self._failures.append(
                    dependency_error(
                        "trace sink is not open",
                        code=codes.TRACE_SINK_WRITE_FAILED,
                        metadata={"path": str(self._path)},
                    )
                )
                _LOGGER.warning(
                    "trace line dropped, sink not open: path=%s", self._path
                )
                return
            try:
                self._handle.write(line)
            except OSError as exc:
                self._record_exception(
                    stage="write", code=codes.TRACE_SINK_WRITE_FAILED, exc=exc
                )

    def close(self) -> None:
        with self._lock:
            handle = self._handle
            self._handle = None
            if handle is None:
                return
            try:
                handle.close()
            except OSError as exc:
                self._record_exception(
                    stage="close", code=codes.TRACE_SINK_CLOSE_FAILED, exc=exc
                )
                return
        _LOGGER.info("trace sink closed: path=%s", self._path)

    def _record_exception(self, *, stage: str, code: str, exc: OSError) -> None:
        """Log and keep one sink failure; caller holds the lock."""
        _LOGGER.warning(
            "trace sink %s failed: path=%s exception_type=%s",
            stage,
            self._path,
            type(exc).__name__,
            exc_info=exc,
        )
        error = exception_to_error(exc, code=code)
        self._failures.append(
            replace(
                error,
                metadata={**error.metadata, "path": str(self._path), "stage": stage},
            )
        )
