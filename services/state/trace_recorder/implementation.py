"""Concrete trace recorder client."""

from __future__ import annotations

from typing import Any, Mapping

from packages.tracer_shared.config import TracerSettings
from packages.tracer_shared.logging import get_logger
from services.state.trace_recorder.domain import (
    FieldKind,
    Identity,
    PredicateFlavor,
    QueryOp,
    Status,
)
from services.state.trace_recorder.identity import IdentityResolver, SelectorCounter
from services.state.trace_recorder.predicates import (
    SEPARATOR,
    build_predicates,
    field_to_predicate,
    join_predicates,
    value_text,
)
from services.state.trace_recorder.query import format_query
from services.state.trace_recorder.service import TraceClient
from services.state.trace_recorder.sink import TraceSink

_LOGGER = get_logger(__name__)

# Keys of records carrying GDPR metadata; other keys are plain YCSB records.
METADATA_KEY_PREFIX = "key"
MOCK_VALUE = "VAL"


class DefaultTraceClient(TraceClient):
    """Trace client writing one query line per harness operation."""

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
        self._resolver = IdentityResolver(workload=settings.workload)

    def read(
        self,
        table: str,
        key: str,
        fields: set[str] | None = None,
        result: dict[str, Any] | None = None,
    ) -> Status:
        identity = self._resolver.identity_from_key(key)
        return self._emit(
            QueryOp.GET,
            format_query(QueryOp.GET, key, predicates=_context(identity, "")),
        )

    def read_meta(
        self,
        table: str,
        fieldnum: int,
        condition: str,
        keymatch: str,
        result: list[dict[str, Any]] | None = None,
    ) -> Status:
        return self._emit(
            QueryOp.GETM,
            format_query(
                QueryOp.GETM,
                keymatch,
                predicates=self._condition_clause(fieldnum, condition),
            ),
        )

    def insert(self, table: str, key: str, values: Mapping[str, object]) -> Status:
        return self._emit(QueryOp.PUT, self._put_line(key, values))

    def insert_ttl(
        self, table: str, key: str, values: Mapping[str, object], ttl: int
    ) -> Status:
        return self._emit(QueryOp.PUT, self._put_line(key, values, ttl=ttl))

    def delete(self, table: str, key: str) -> Status:
        identity = self._resolver.identity_from_key(key)
        return self._emit(
            QueryOp.DELETE,
            format_query(QueryOp.DELETE, key, predicates=_context(identity, "")),
        )

    def delete_meta(
        self, table: str, fieldnum: int, condition: str, keymatch: str
    ) -> Status:
        return self._emit(
            QueryOp.DELETEM,
            format_query(
                QueryOp.DELETEM,
                keymatch,
                predicates=self._condition_clause(fieldnum, condition),
            ),
        )

    def update(self, table: str, key: str, values: Mapping[str, object]) -> Status:
        return self._emit(QueryOp.PUT, self._put_line(key, values))

    def update_meta(
        self,
        table: str,
        fieldnum: int,
        condition: str,
        keymatch: str,
        field_name: str,
        field_value: str,
    ) -> Status:
        return self._emit(
            QueryOp.PUTM,
            format_query(
                QueryOp.PUTM,
                keymatch,
                predicates=self._condition_clause(
                    fieldnum,
                    condition,
                    assignment=field_to_predicate(
                        field_name, field_value, PredicateFlavor.SET
                    ),
                ),
            ),
        )

    def scan(
        self,
        table: str,
        startkey: str,
        recordcount: int,
        fields: set[str] | None = None,
        result: list[dict[str, Any]] | None = None,
    ) -> Status:
        return self._emit(
            QueryOp.SCAN, format_query(QueryOp.SCAN, startkey, recordcount)
        )

    def verify_ttl(self, table: str, recordcount: int) -> Status:
        return Status.OK

    def read_log(self, table: str, logcount: int) -> Status:
        return self._emit(QueryOp.GET_LOGS, format_query(QueryOp.GET_LOGS, logcount))

    def _emit(self, op: QueryOp, line: str) -> Status:
        """Hand one line to the sink; the harness always sees success."""
        _LOGGER.debug("trace line emitted: operation=%s", op.value)
        self._sink.write(line)
        return Status.OK

    def _condition_clause(
        self, fieldnum: int, condition: str, *, assignment: str = ""
    ) -> str:
        """Build ``condition[&assignment]&context`` for a metadata operation."""
        kind = FieldKind.from_index(fieldnum)
        selector = self._counter.increment()
        identity = self._resolver.identity_from_condition(condition, kind, selector)
        clause = join_predicates(
            field_to_predicate(kind, condition, PredicateFlavor.CONDITION),
            assignment,
        )
        return join_predicates(clause, _context(identity, clause))

    def _put_line(
        self, key: str, values: Mapping[str, object], *, ttl: int | None = None
    ) -> str:
        """Render a PUT for a plain record or a metadata-carrying record."""
        if not key.startswith(METADATA_KEY_PREFIX):
            return format_query(QueryOp.PUT, key, self._merge_values(values))

        clause = build_predicates(values, PredicateFlavor.SET)
        if ttl is not None and not _has_field(values, FieldKind.TTL):
            clause = join_predicates(
                clause, field_to_predicate(FieldKind.TTL, ttl, PredicateFlavor.SET)
            )
        identity = self._resolver.identity_from_key(key)
        return format_query(
            QueryOp.PUT,
            key,
            self._data_value(values),
            predicates=join_predicates(clause, _context(identity, clause)),
        )

    def _merge_values(self, values: Mapping[str, object]) -> str:
        if self._settings.trace.mock_values:
            return MOCK_VALUE
        return "".join(value_text(value) for value in values.values())

    def _data_value(self, values: Mapping[str, object]) -> str:
        for name, value in values.items():
            if FieldKind.parse(name) is FieldKind.DATA:
                if self._settings.trace.mock_values:
                    return MOCK_VALUE
                return value_text(value)
        return ""


def _has_field(values: Mapping[str, object], kind: FieldKind) -> bool:
    return any(FieldKind.parse(name) is kind for name in values)


def _context(identity: Identity, clause: str) -> str:
    """Render the access context, skipping tokens already in ``clause``."""
    present = set(clause.split(SEPARATOR)) if clause else set()
    tokens = (
        field_to_predicate(FieldKind.USER, identity.user, PredicateFlavor.CONDITION),
        field_to_predicate(
            FieldKind.PURPOSE, identity.purpose, PredicateFlavor.CONDITION
        ),
    )
    return join_predicates(*(token for token in tokens if token not in present))
