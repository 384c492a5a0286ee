"""Tests for predicate assembly and trace line formatting."""

from __future__ import annotations

import pytest

from services.state.trace_recorder.domain import FieldKind, PredicateFlavor, QueryOp
from services.state.trace_recorder.predicates import (
    build_predicates,
    field_to_predicate,
    join_predicates,
)
from services.state.trace_recorder.query import format_query


@pytest.mark.parametrize(
    ("kind", "condition", "assignment"),
    [
        (FieldKind.DECLARATION, "DEC", "DEC"),
        (FieldKind.USER, "session-key-is(v1)", "session-key(v1)"),
        (FieldKind.SOURCE, "origin-is(v1)", "origin(v1)"),
        (FieldKind.OBJECTION, "objections-is(v1)", "objections(v1)"),
        (FieldKind.LOG, "monitor(v1)", "monitor(v1)"),
        (FieldKind.ACCESS_CONTROL, "ACL", "ACL"),
        (FieldKind.DATA, "", ""),
        (FieldKind.PURPOSE, "purpose-is(v1)", "purpose(v1)"),
        (FieldKind.SHARE, "share-is(v1)", "share(v1)"),
        (FieldKind.TTL, "expiry-is(v1)", "expiry(v1)"),
    ],
)
def test_field_to_predicate_token_table(
    kind: FieldKind, condition: str, assignment: str
) -> None:
    """Each kind renders its fixed condition and set tokens."""
    assert field_to_predicate(kind, "v1", PredicateFlavor.CONDITION) == condition
    assert field_to_predicate(kind, "v1", PredicateFlavor.SET) == assignment


@pytest.mark.parametrize("flavor", list(PredicateFlavor))
def test_unknown_field_kind_emits_error_token(flavor: PredicateFlavor) -> None:
    """Unknown tags surface inline as an error token."""
    assert field_to_predicate("ZZZ", "v", flavor) == "error"


def test_field_to_predicate_accepts_tags_and_names() -> None:
    """Harness tags and descriptive names select the same token."""
    assert field_to_predicate("USR", "u1", PredicateFlavor.SET) == "session-key(u1)"
    assert field_to_predicate("user", "u1", PredicateFlavor.SET) == "session-key(u1)"


def test_field_to_predicate_decodes_byte_values() -> None:
    """Byte values from the harness render as text."""
    assert field_to_predicate("SRC", b"web", PredicateFlavor.SET) == "origin(web)"


def test_build_predicates_empty_collection_has_no_separator() -> None:
    """Empty input yields an empty clause."""
    assert build_predicates([], PredicateFlavor.CONDITION) == ""
    assert build_predicates({}, PredicateFlavor.SET) == ""


def test_build_predicates_skips_data_field() -> None:
    """The data field contributes nothing and leaves no dangling separator."""
    clause = build_predicates(
        [("user", "u3"), ("data", "v")], PredicateFlavor.CONDITION
    )

    assert clause == "session-key-is(u3)"


def test_build_predicates_only_data_is_empty() -> None:
    """A data-only record has no predicates."""
    assert build_predicates({"Data": "payload"}, PredicateFlavor.SET) == ""


def test_build_predicates_follows_field_order() -> None:
    """Tokens follow the input order."""
    fields = {"PUR": "p1", "USR": "u2", "Data": "x", "TTL": "30"}

    assert (
        build_predicates(fields, PredicateFlavor.SET)
        == "purpose(p1)&session-key(u2)&expiry(30)"
    )
    assert (
        build_predicates(list(reversed(list(fields.items()))), PredicateFlavor.SET)
        == "expiry(30)&session-key(u2)&purpose(p1)"
    )


def test_build_predicates_keeps_error_tokens_in_place() -> None:
    """Unknown tags stay at their position in the clause."""
    clause = build_predicates(
        [("PUR", "p1"), ("ZZZ", "x"), ("ACL", "ignored")], PredicateFlavor.CONDITION
    )

    assert clause == "purpose-is(p1)&error&ACL"


def test_join_predicates_skips_empty_clauses() -> None:
    """Empty clauses never produce separators."""
    assert join_predicates("", "a", "", "b&c", "") == "a&b&c"
    assert join_predicates("", "") == ""


def test_field_kind_parse_and_index() -> None:
    """Kinds resolve from tags, names, and harness field indexes."""
    assert FieldKind.parse("access-control") is FieldKind.ACCESS_CONTROL
    assert FieldKind.parse("Data") is FieldKind.DATA
    assert FieldKind.parse("TTL") is FieldKind.TTL
    assert FieldKind.parse("ZZZ") is None
    assert FieldKind.parse(7) is None
    assert FieldKind.from_index(0) is FieldKind.PURPOSE
    assert FieldKind.from_index(9) is FieldKind.DATA
    assert FieldKind.from_index(10) is None
    assert FieldKind.from_index(-1) is None


def test_format_query_without_predicates() -> None:
    """Lines without predicates end right after the verb."""
    assert format_query(QueryOp.SCAN, "user1", 10) == 'query(SCAN("user1","10"))\n'
    assert format_query(QueryOp.GET_LOGS, 5) == 'query(getLogs("5"))\n'


def test_format_query_with_predicates() -> None:
    """Predicates follow the verb with one separator."""
    line = format_query(QueryOp.GETM, "key*", predicates="purpose-is(p1)&ACL")

    assert line == 'query(GETM("key*"))&purpose-is(p1)&ACL\n'


def test_format_query_escapes_quotes_and_line_breaks() -> None:
    line = format_query(QueryOp.GET, 'key"1\n', predicates="purpose-is(p)")

    assert line == 'query(GET("key\\"1\\n"))&purpose-is(p)\n'
