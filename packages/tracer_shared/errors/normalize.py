"""Exception normalization utilities for shared error contracts."""

from __future__ import annotations

from . import codes
from .factories import dependency_error, internal_error, validation_error
from .types import ErrorDetail


def exception_to_error(exc: Exception, *, code: str | None = None) -> ErrorDetail:
    """Normalize a Python exception into a shared ``ErrorDetail``.

    ``code`` overrides the generic code chosen for the exception type so
    callers can tag which stage failed while keeping the category mapping.
    """
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, OSError):
        return dependency_error(
            str(exc) or "i/o failure",
            code=code or codes.DEPENDENCY_UNAVAILABLE,
            metadata=metadata,
        )

    if isinstance(exc, ValueError):
        return validation_error(
            str(exc), code=code or codes.INVALID_ARGUMENT, metadata=metadata
        )

    return internal_error(
        str(exc) or "unexpected exception",
        code=code or codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )
