"""Drive a trace client from recorded harness operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from pydantic import ValidationError

from packages.tracer_shared.errors import ErrorDetail, codes, validation_error
from packages.tracer_shared.logging import get_logger
from services.state.trace_recorder.service import TraceClient
from services.state.trace_recorder.validation import parse_operation

_LOGGER = get_logger(__name__)


@dataclass
class ReplayReport:
    """Outcome of one replay pass."""

    applied: int = 0
    skipped: int = 0
    rejected: list[ErrorDetail] = field(default_factory=list)


def replay_lines(client: TraceClient, lines: Iterable[str]) -> ReplayReport:
    """Apply every valid operation line in order.

    Blank lines and ``#`` comments are skipped. Invalid lines are rejected
    with a validation error naming the line number and do not stop the replay.
    """
    report = ReplayReport()
    for number, raw in enumerate(lines, start=1):
        text = raw.strip()
        if text == "" or text.startswith("#"):
            report.skipped += 1
            continue
        try:
            operation = parse_operation(text)
        except ValidationError as exc:
            issue = exc.errors()[0]
            location = ".".join(str(item) for item in issue.get("loc", ()))
            message = f"line {number}: {location or 'payload'}: {issue.get('msg', 'invalid value')}"
            _LOGGER.warning("replay line rejected: %s", message)
            report.rejected.append(
                validation_error(
                    message,
                    code=codes.INVALID_OPERATION,
                    metadata={"line": str(number)},
                )
            )
            continue
        operation.apply(client)
        report.applied += 1
    return report
