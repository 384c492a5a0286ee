"""Domain contracts for the trace recorder binding."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Status(str, Enum):
    """Operation outcome reported back to the benchmark harness."""

    OK = "OK"


class QueryOp(str, Enum):
    """Query verbs emitted in trace lines."""

    GET = "GET"
    GETM = "GETM"
    PUT = "PUT"
    DELETE = "DELETE"
    DELETEM = "DELETEM"
    PUTM = "PUTM"
    SCAN = "SCAN"
    GET_LOGS = "getLogs"


class PredicateFlavor(str, Enum):
    """Predicate form: match an existing value or assign a new one."""

    CONDITION = "condition"
    SET = "set"


class FieldKind(str, Enum):
    """Closed set of metadata field kinds, valued by harness field tag.

    Declaration order matches the harness field index used by metadata
    operations.
    """

    PURPOSE = "PUR"
    TTL = "TTL"
    USER = "USR"
    OBJECTION = "OBJ"
    DECLARATION = "DEC"
    ACCESS_CONTROL = "ACL"
    SHARE = "SHR"
    SOURCE = "SRC"
    LOG = "LOG"
    DATA = "Data"

    @classmethod
    def parse(cls, name: object) -> FieldKind | None:
        """Resolve a harness tag or descriptive name; ``None`` when unknown."""
        if isinstance(name, FieldKind):
            return name
        if not isinstance(name, str):
            return None
        try:
            return cls(name)
        except ValueError:
            return _BY_LABEL.get(name.strip().lower())

    @classmethod
    def from_index(cls, index: int) -> FieldKind | None:
        """Resolve a harness field index; ``None`` when out of range."""
        kinds = list(cls)
        if 0 <= index < len(kinds):
            return kinds[index]
        return None


_LABELS: dict[FieldKind, str] = {
    FieldKind.PURPOSE: "purpose",
    FieldKind.TTL: "ttl",
    FieldKind.USER: "user",
    FieldKind.OBJECTION: "objection",
    FieldKind.DECLARATION: "declaration",
    FieldKind.ACCESS_CONTROL: "access-control",
    FieldKind.SHARE: "share",
    FieldKind.SOURCE: "source",
    FieldKind.LOG: "log",
    FieldKind.DATA: "data",
}
_BY_LABEL: dict[str, FieldKind] = {label: kind for kind, label in _LABELS.items()}


class Identity(BaseModel):
    """Synthetic access-control context for one traced operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user: str
    purpose: str
