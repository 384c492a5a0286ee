"""Structured fields attached to every log line of a trace session.

Fields live in a ``contextvars`` variable, so worker threads started by the
harness each see the fields bound in their own context.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator

from . import fields

_FIELDS: ContextVar[dict[str, str]] = ContextVar("tracer_log_fields", default={})


def get_context() -> dict[str, str]:
    """Return a copy of the fields bound in the current context."""
    return dict(_FIELDS.get())


def bind_context(**values: object) -> None:
    """Bind fields as strings; ``None`` values are skipped."""
    merged = dict(_FIELDS.get())
    merged.update({key: str(value) for key, value in values.items() if value is not None})
    _FIELDS.set(merged)


def clear_context(*keys: str) -> None:
    """Drop the named fields, or every field when none are named."""
    if not keys:
        _FIELDS.set({})
        return
    _FIELDS.set({key: value for key, value in _FIELDS.get().items() if key not in keys})


@contextmanager
def log_context(**values: object) -> Iterator[None]:
    """Bind fields for the duration of a block, then restore the previous set."""
    token = _FIELDS.set(dict(_FIELDS.get()))
    try:
        bind_context(**values)
        yield
    finally:
        _FIELDS.reset(token)


def session_context(
    *, session_id: str, trace_file: str | Path
) -> AbstractContextManager[None]:
    """Bind the identifying fields of one trace session."""
    return log_context(**{fields.SESSION_ID: session_id, fields.TRACE_FILE: trace_file})
