"""Trace session: shared sink and selector counter across client threads.

The harness builds one client per worker thread and calls its init/cleanup
hooks per thread. The session maps those hooks onto ``attach``/``detach`` so
the trace file is opened once on the first attach and closed once on the
last detach.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from threading import RLock
from types import TracebackType
from uuid import uuid4

from packages.tracer_shared.config import TracerSettings
from packages.tracer_shared.errors import ErrorDetail
from packages.tracer_shared.logging import get_logger, session_context
from services.state.trace_recorder.identity import SelectorCounter
from services.state.trace_recorder.implementation import DefaultTraceClient
from services.state.trace_recorder.sink import TraceSink

_LOGGER = get_logger(__name__)


class TraceSession:
    """One capture run: immutable settings plus the shared resources."""

    def __init__(
        self,
        *,
        settings: TracerSettings,
        sink: TraceSink,
        counter: SelectorCounter,
    ) -> None:
        self._settings = settings
        self._sink = sink
        self._counter = counter
        self._lock = RLock()
        self._attached = 0
        self.session_id = uuid4().hex

    @property
    def settings(self) -> TracerSettings:
        return self._settings

    @property
    def counter(self) -> SelectorCounter:
        return self._counter

    @property
    def attached(self) -> int:
        """Return the number of clients currently attached."""
        with self._lock:
            return self._attached

    @property
    def failures(self) -> list[ErrorDetail]:
        """Return sink failures recorded during this session."""
        return self._sink.failures

    def attach(self) -> DefaultTraceClient:
        """Return a new client, opening the sink for the first one."""
        with self._lock:
            if self._attached == 0:
                with self._session_context():
                    _LOGGER.info("trace session starting")
                    self._sink.open()
            self._attached += 1
            return DefaultTraceClient(
                settings=self._settings,
                sink=self._sink,
                counter=self._counter,
            )

    def detach(self) -> None:
        """Release one client, closing the sink after the last one."""
        with self._lock:
            if self._attached == 0:
                _LOGGER.warning(
                    "trace session detach without attach: session_id=%s",
                    self.session_id,
                )
                return
            self._attached -= 1
            if self._attached > 0:
                return
            with self._session_context():
                self._sink.close()
                _LOGGER.info(
                    "trace session finished: selectors=%d failures=%d",
                    self._counter.value,
                    len(self._sink.failures),
                )

    def __enter__(self) -> DefaultTraceClient:
        return self.attach()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.detach()

    def _session_context(self) -> AbstractContextManager[None]:
        return session_context(
            session_id=self.session_id, trace_file=self._settings.trace.file
        )
