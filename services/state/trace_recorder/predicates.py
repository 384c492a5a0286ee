"""Field-to-predicate translation for trace lines."""

from __future__ import annotations

from typing import Iterable, Mapping

from services.state.trace_recorder.domain import FieldKind, PredicateFlavor

SEPARATOR = "&"
ERROR_TOKEN = "error"

# Characters that would split a trace line or unbalance a quoted argument.
_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"})

FieldPairs = Mapping[str, object] | Iterable[tuple[object, object]]

_CONDITION_FORMS: dict[FieldKind, str] = {
    FieldKind.DECLARATION: "DEC",
    FieldKind.USER: "session-key-is({value})",
    FieldKind.SOURCE: "origin-is({value})",
    FieldKind.OBJECTION: "objections-is({value})",
    FieldKind.LOG: "monitor({value})",
    FieldKind.ACCESS_CONTROL: "ACL",
    FieldKind.DATA: "",
    FieldKind.PURPOSE: "purpose-is({value})",
    FieldKind.SHARE: "share-is({value})",
    FieldKind.TTL: "expiry-is({value})",
}

_SET_FORMS: dict[FieldKind, str] = {
    FieldKind.DECLARATION: "DEC",
    FieldKind.USER: "session-key({value})",
    FieldKind.SOURCE: "origin({value})",
    FieldKind.OBJECTION: "objections({value})",
    FieldKind.LOG: "monitor({value})",
    FieldKind.ACCESS_CONTROL: "ACL",
    FieldKind.DATA: "",
    FieldKind.PURPOSE: "purpose({value})",
    FieldKind.SHARE: "share({value})",
    FieldKind.TTL: "expiry({value})",
}


def value_text(value: object) -> str:
    """Render one harness field value as text."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def escape_text(value: object) -> str:
    """Render a value so it stays inside one trace line."""
    return value_text(value).translate(_ESCAPES)


def field_to_predicate(
    field_kind: FieldKind | str | None,
    value: object,
    flavor: PredicateFlavor,
) -> str:
    """Return the predicate token for one field.

    Unknown kinds produce ``error`` inline so the trace shows the bad tag.
    The data field never contributes a token.
    """
    kind = FieldKind.parse(field_kind)
    if kind is None:
        return ERROR_TOKEN
    forms = _CONDITION_FORMS if flavor is PredicateFlavor.CONDITION else _SET_FORMS
    return forms[kind].format(value=escape_text(value))


def join_predicates(*clauses: str) -> str:
    """Join non-empty predicate clauses with the conjunction separator."""
    return SEPARATOR.join(clause for clause in clauses if clause)


def build_predicates(fields: FieldPairs, flavor: PredicateFlavor) -> str:
    """Build a conjunctive clause from fields in their iteration order."""
    pairs = fields.items() if isinstance(fields, Mapping) else fields
    return join_predicates(
        *(field_to_predicate(name, value, flavor) for name, value in pairs)
    )
