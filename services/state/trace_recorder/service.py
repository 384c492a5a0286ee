"""Harness-facing Python API for the trace recorder binding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping

from packages.tracer_shared.config import TracerSettings
from services.state.trace_recorder.domain import Status
from services.state.trace_recorder.identity import SelectorCounter
from services.state.trace_recorder.sink import TraceSink

if TYPE_CHECKING:
    from services.state.trace_recorder.session import TraceSession


class TraceClient(ABC):
    """Operation callbacks invoked by the benchmark harness.

    ``table`` is accepted for interface compatibility and ignored. Every
    operation reports ``Status.OK``.
    """

    @abstractmethod
    def read(
        self,
        table: str,
        key: str,
        fields: set[str] | None = None,
        result: dict[str, Any] | None = None,
    ) -> Status:
        """Trace a single-record read."""

    @abstractmethod
    def read_meta(
        self,
        table: str,
        fieldnum: int,
        condition: str,
        keymatch: str,
        result: list[dict[str, Any]] | None = None,
    ) -> Status:
        """Trace a read of records matching one metadata condition."""

    @abstractmethod
    def insert(self, table: str, key: str, values: Mapping[str, object]) -> Status:
        """Trace a record insert."""

    @abstractmethod
    def insert_ttl(
        self, table: str, key: str, values: Mapping[str, object], ttl: int
    ) -> Status:
        """Trace a record insert carrying an expiry."""

    @abstractmethod
    def delete(self, table: str, key: str) -> Status:
        """Trace a single-record delete."""

    @abstractmethod
    def delete_meta(
        self, table: str, fieldnum: int, condition: str, keymatch: str
    ) -> Status:
        """Trace a delete of records matching one metadata condition."""

    @abstractmethod
    def update(self, table: str, key: str, values: Mapping[str, object]) -> Status:
        """Trace a record update."""

    @abstractmethod
    def update_meta(
        self,
        table: str,
        fieldnum: int,
        condition: str,
        keymatch: str,
        field_name: str,
        field_value: str,
    ) -> Status:
        """Trace a metadata rewrite on records matching one condition."""

    @abstractmethod
    def scan(
        self,
        table: str,
        startkey: str,
        recordcount: int,
        fields: set[str] | None = None,
        result: list[dict[str, Any]] | None = None,
    ) -> Status:
        """Trace a range scan."""

    @abstractmethod
    def verify_ttl(self, table: str, recordcount: int) -> Status:
        """Accept an expiry verification request."""

    @abstractmethod
    def read_log(self, table: str, logcount: int) -> Status:
        """Trace a monitoring log read."""


def build_trace_session(
    *,
    settings: TracerSettings,
    sink: TraceSink | None = None,
    counter: SelectorCounter | None = None,
) -> TraceSession:
    """Build a trace session with a file sink unless one is supplied."""
    from services.state.trace_recorder.session import TraceSession
    from services.state.trace_recorder.sink import FileTraceSink

    return TraceSession(
        settings=settings,
        sink=sink or FileTraceSink(path=settings.trace.file),
        counter=counter or SelectorCounter(),
    )
