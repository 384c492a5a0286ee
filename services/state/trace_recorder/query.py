"""Trace line grammar: ``query(OP("arg",...))[&predicate...]``."""

from __future__ import annotations

from services.state.trace_recorder.domain import QueryOp
from services.state.trace_recorder.predicates import SEPARATOR, escape_text


def format_query(op: QueryOp, *args: object, predicates: str = "") -> str:
    """Render one newline-terminated trace line."""
    quoted = ",".join(f'"{escape_text(arg)}"' for arg in args)
    line = f"query({op.value}({quoted}))"
    if predicates:
        line = f"{line}{SEPARATOR}{predicates}"
    return f"{line}\n"
