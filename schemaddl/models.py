# File: schemaddl/models.py
"""
schemaddl - Core Schema Model
==============================
Pydantic V2 models describing a relational database schema: a ``Database``
holds ``Table`` objects, which own their ``Column``, ``Index`` and
``ForeignKey`` entries.

The models are plain value holders.  They do not enforce cross-entity
consistency (a primary key may name a column that does not exist); the
opt-in checks live in ``schemaddl.validators`` and the DDL renderer emits
whatever the grammar produces.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from schemaddl.actions import ForeignKeyAction, action_phrase, parse_action
from schemaddl.errors import MissingTablesError
from schemaddl.literals import Literal, parse_literal

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemaddl.models")

# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    arbitrary_types_allowed=True,
    frozen=False,
    extra="forbid",
)


class ColumnType:
    """
    Well-known column type names.

    Column types are opaque strings (drivers report whatever the database
    declared, e.g. ``INT`` or ``int64``); these constants only save typing.
    """

    UNTYPED: str = ""
    INT: str = "int"
    INT64: str = "int64"
    REAL: str = "real"
    TEXT: str = "text"
    BLOB: str = "blob"
    BOOLEAN: str = "boolean"
    UUID: str = "uuid"
    TIMESTAMP: str = "timestamp"


class GeneratedStorage(str, Enum):
    """Storage mode of a generated column."""

    VIRTUAL = "virtual"
    STORED = "stored"


class Generated(BaseModel):
    """``generated always as (<expression>) <storage>`` clause."""

    model_config = _SHARED_CONFIG

    expression: str = Field(..., min_length=1, description="SQL expression.")
    storage: GeneratedStorage = Field(
        default=GeneratedStorage.VIRTUAL, description="virtual or stored."
    )


class Column(BaseModel):
    """A single table column."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., description="Column name.")
    type: str = Field(default=ColumnType.UNTYPED, description="Declared type; empty = untyped.")
    nullable: bool = Field(default=False, description="Whether NULL is allowed.")
    default: Optional[Literal] = Field(default=None, description="Default literal.")
    generated: Optional[Generated] = Field(default=None, description="Generated column clause.")
    comment: str = Field(default="", description="Free text; never rendered into SQL.")

    @field_validator("default", mode="before")
    @classmethod
    def _decode_default(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_literal(v)
        return v

    @field_serializer("default", when_used="json")
    def _encode_default(self, v: Optional[Literal]) -> Optional[str]:
        # SQL text keeps null distinct from "no default" and re-parses to the same kind.
        return None if v is None else v.sql_literal()

    def __repr__(self) -> str:
        null_flag: str = " NULL" if self.nullable else " NOT NULL"
        return f"<Column {self.name} {self.type or '-'}{null_flag}>"


class Index(BaseModel):
    """A table index.  An empty name is derived at render time."""

    model_config = _SHARED_CONFIG

    name: str = Field(default="", description="Index name.")
    unique: bool = Field(default=False, description="UNIQUE index?")
    columns: List[str] = Field(default_factory=list, description="Ordered column names.")


class ForeignKey(BaseModel):
    """A foreign-key constraint from child columns to a parent table."""

    model_config = _SHARED_CONFIG

    child_key: List[str] = Field(default_factory=list, description="Child column names.")
    parent_table: str = Field(..., description="Referenced table.")
    parent_key: List[str] = Field(
        default_factory=list,
        description="Referenced columns; empty references the parent's primary key.",
    )
    on_delete: ForeignKeyAction = Field(default=ForeignKeyAction.UNSET)
    on_update: ForeignKeyAction = Field(default=ForeignKeyAction.UNSET)

    @field_validator("on_delete", "on_update", mode="before")
    @classmethod
    def _decode_action(cls, v: Any) -> ForeignKeyAction:
        return parse_action(v)

    @field_serializer("on_delete", "on_update", when_used="json")
    def _encode_action(self, v: ForeignKeyAction) -> str:
        return action_phrase(v)

    def __repr__(self) -> str:
        return (
            f"<FK ({', '.join(self.child_key)}) → "
            f"{self.parent_table}({', '.join(self.parent_key)})>"
        )


class Table(BaseModel):
    """A table together with its columns, indices and constraints."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., description="Table name.")
    columns: List[Column] = Field(default_factory=list)
    indices: List[Index] = Field(default_factory=list)
    pk: List[str] = Field(default_factory=list, description="Primary key column names.")
    foreign_keys: List[ForeignKey] = Field(default_factory=list)
    without_rowid: bool = Field(default=False)
    strict: bool = Field(default=False)

    def find_column(self, name: str) -> Optional[Column]:
        """Return the first column called *name*, or ``None``."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def column_mapping(self) -> Dict[str, Column]:
        return {c.name: c for c in self.columns}

    def find_index(self, name: str) -> Optional[Index]:
        for index in self.indices:
            if index.name == name:
                return index
        return None

    def index_mapping(self) -> Dict[str, Index]:
        return {i.name: i for i in self.indices}

    def __repr__(self) -> str:
        return (
            f"<Table {self.name} "
            f"({len(self.columns)} cols, {len(self.indices)} indices, "
            f"{len(self.foreign_keys)} FKs)>"
        )


class MissingTables(list):
    """
    Names reported missing by ``Database.check_tables``.

    An empty instance means every table was found.
    """

    def raise_for_missing(self) -> None:
        if self:
            raise MissingTablesError(self)

    def __str__(self) -> str:
        return f"missing tables: {', '.join(self)}"


class Database(BaseModel):
    """
    Root of the model: the tables of one database, in the order provided.

    Table names are not deduplicated.
    """

    model_config = _SHARED_CONFIG

    tables: List[Table] = Field(default_factory=list)

    def has_table(self, name: str) -> bool:
        return any(t.name == name for t in self.tables)

    def find_table(self, name: str) -> Optional[Table]:
        """Return the first table called *name*, or ``None``."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def check_tables(self, *names: str) -> MissingTables:
        """
        Report every name in *names* that has no table.

        All misses are collected; the check does not stop at the first one.
        """
        missing: MissingTables = MissingTables(n for n in names if not self.has_table(n))
        if missing:
            logger.debug("check_tables: %d missing (%s).", len(missing), ", ".join(missing))
        return missing

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]

    def __repr__(self) -> str:
        return f"<Database {len(self.tables)} tables>"


__all__: List[str] = [
    "ColumnType",
    "GeneratedStorage",
    "Generated",
    "Column",
    "Index",
    "ForeignKey",
    "Table",
    "MissingTables",
    "Database",
]
