"""Validation models for recorded harness operations.

A replay file holds one JSON object per line, discriminated by ``op``::

    {"op": "insert", "key": "key42", "values": {"PUR": "purpose1", "Data": "x"}}
    {"op": "read_meta", "fieldnum": 0, "condition": "purpose7", "keymatch": "key*"}
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from services.state.trace_recorder.domain import Status
from services.state.trace_recorder.service import TraceClient

DEFAULT_TABLE = "usertable"


class _Operation(BaseModel):
    """Base replayed operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    table: str = DEFAULT_TABLE

    @abstractmethod
    def apply(self, client: TraceClient) -> Status:
        """Invoke the matching client callback."""


class _KeyedOperation(_Operation):
    key: str = Field(min_length=1)


class _MetadataOperation(_Operation):
    fieldnum: int = Field(ge=0)
    condition: str
    keymatch: str = Field(min_length=1)


class ReadOperation(_KeyedOperation):
    op: Literal["read"]

    def apply(self, client: TraceClient) -> Status:
        return client.read(self.table, self.key)


class ReadMetaOperation(_MetadataOperation):
    op: Literal["read_meta"]

    def apply(self, client: TraceClient) -> Status:
        return client.read_meta(self.table, self.fieldnum, self.condition, self.keymatch)


class InsertOperation(_KeyedOperation):
    op: Literal["insert"]
    values: dict[str, str] = Field(default_factory=dict)

    def apply(self, client: TraceClient) -> Status:
        return client.insert(self.table, self.key, self.values)


class InsertTtlOperation(_KeyedOperation):
    op: Literal["insert_ttl"]
    values: dict[str, str] = Field(default_factory=dict)
    ttl: int = Field(ge=0)

    def apply(self, client: TraceClient) -> Status:
        return client.insert_ttl(self.table, self.key, self.values, self.ttl)


class DeleteOperation(_KeyedOperation):
    op: Literal["delete"]

    def apply(self, client: TraceClient) -> Status:
        return client.delete(self.table, self.key)


class DeleteMetaOperation(_MetadataOperation):
    op: Literal["delete_meta"]

    def apply(self, client: TraceClient) -> Status:
        return client.delete_meta(
            self.table, self.fieldnum, self.condition, self.keymatch
        )


class UpdateOperation(_KeyedOperation):
    op: Literal["update"]
    values: dict[str, str] = Field(default_factory=dict)

    def apply(self, client: TraceClient) -> Status:
        return client.update(self.table, self.key, self.values)


class UpdateMetaOperation(_MetadataOperation):
    op: Literal["update_meta"]
    field_name: str
    field_value: str

    def apply(self, client: TraceClient) -> Status:
        return client.update_meta(
            self.table,
            self.fieldnum,
            self.condition,
            self.keymatch,
            self.field_name,
            self.field_value,
        )


class ScanOperation(_Operation):
    op: Literal["scan"]
    startkey: str = Field(min_length=1)
    recordcount: int = Field(ge=0)

    def apply(self, client: TraceClient) -> Status:
        return client.scan(self.table, self.startkey, self.recordcount)


class VerifyTtlOperation(_Operation):
    op: Literal["verify_ttl"]
    recordcount: int = Field(ge=0)

    def apply(self, client: TraceClient) -> Status:
        return client.verify_ttl(self.table, self.recordcount)


class ReadLogOperation(_Operation):
    op: Literal["read_log"]
    logcount: int = Field(ge=0)

    def apply(self, client: TraceClient) -> Status:
        return client.read_log(self.table, self.logcount)


HarnessOperation = Annotated[
    Union[
        ReadOperation,
        ReadMetaOperation,
        InsertOperation,
        InsertTtlOperation,
        DeleteOperation,
        DeleteMetaOperation,
        UpdateOperation,
        UpdateMetaOperation,
        ScanOperation,
        VerifyTtlOperation,
        ReadLogOperation,
    ],
    Field(discriminator="op"),
]

_OPERATION_ADAPTER: TypeAdapter[HarnessOperation] = TypeAdapter(HarnessOperation)


def parse_operation(raw: str) -> HarnessOperation:
    """Validate one JSON-encoded operation; raises ``ValidationError``."""
    return _OPERATION_ADAPTER.validate_json(raw)
