"""Trace recorder binding native package exports."""

from packages.tracer_shared.errors import ErrorCategory, ErrorDetail
from services.state.trace_recorder.domain import (
    FieldKind,
    Identity,
    PredicateFlavor,
    QueryOp,
    Status,
)
from services.state.trace_recorder.identity import (
    IdentityResolver,
    SelectorCounter,
    seed_from_text,
)
from services.state.trace_recorder.implementation import DefaultTraceClient
from services.state.trace_recorder.predicates import (
    build_predicates,
    field_to_predicate,
    join_predicates,
)
from services.state.trace_recorder.query import format_query
from services.state.trace_recorder.replay import ReplayReport, replay_lines
from services.state.trace_recorder.service import TraceClient, build_trace_session
from services.state.trace_recorder.session import TraceSession
from services.state.trace_recorder.sink import FileTraceSink, TraceSink

__all__ = [
    "DefaultTraceClient",
    "ErrorCategory",
    "ErrorDetail",
    "FieldKind",
    "FileTraceSink",
    "Identity",
    "IdentityResolver",
    "PredicateFlavor",
    "QueryOp",
    "ReplayReport",
    "SelectorCounter",
    "Status",
    "TraceClient",
    "TraceSession",
    "TraceSink",
    "build_predicates",
    "build_trace_session",
    "field_to_predicate",
    "format_query",
    "join_predicates",
    "replay_lines",
    "seed_from_text",
]
