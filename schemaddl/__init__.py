# File: schemaddl/__init__.py
"""
schemaddl — Relational Schema Model & DDL Renderer
===================================================

An in-memory model of a relational database schema that renders back into
column-aligned SQL DDL and round-trips through YAML / JSON documents.

Architecture overview::

    ┌────────────┐     ┌──────────┐     ┌───────────┐
    │  scanner   │────▶│  models  │────▶│    ddl    │──▶ create table ...
    │ (external) │     │          │     │  + grid   │
    └────────────┘     └────┬─────┘     └───────────┘
                            │
               ┌────────────┼────────────┐
               ▼            ▼            ▼
         ┌──────────┐ ┌───────────┐ ┌───────────┐
         │ literals │ │  actions  │ │ documents │──▶ YAML / JSON
         └──────────┘ └───────────┘ └───────────┘

Usage::

    from schemaddl import Column, Table, create_statements, parse_literal

    t = Table(name="t", columns=[Column(name="n", type="int",
                                        default=parse_literal("42"))])
    print(create_statements(t))
"""

from __future__ import annotations

__version__: str = "1.0.0"

from schemaddl.actions import ACTION_PHRASES, ForeignKeyAction, action_phrase, parse_action
from schemaddl.config import DocumentConfig, DocumentFormat
from schemaddl.ddl import (
    CreateFlag,
    create_database_statements,
    create_index_statement,
    create_statements,
)
from schemaddl.documents import (
    column_from_document,
    dump_document,
    dump_file,
    dump_json,
    dump_yaml,
    load_document,
    load_file,
    load_json,
    load_yaml,
    to_document,
)
from schemaddl.errors import (
    DocumentError,
    InvalidForeignKeyActionError,
    MissingTablesError,
    SchemaError,
)
from schemaddl.literals import (
    NULL,
    Literal,
    LiteralKind,
    Null,
    Numeric,
    QuotedString,
    RawExpression,
    parse_literal,
)
from schemaddl.models import (
    Column,
    ColumnType,
    Database,
    ForeignKey,
    Generated,
    GeneratedStorage,
    Index,
    MissingTables,
    Table,
)
from schemaddl.scanner import SchemaScanner, column_from_driver, scan_database
from schemaddl.utils import configure_logging
from schemaddl.validators import ValidationResult, validate_database, validate_table

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    "__version__",
    # Literals
    "Literal",
    "LiteralKind",
    "Null",
    "NULL",
    "Numeric",
    "QuotedString",
    "RawExpression",
    "parse_literal",
    # Foreign-key actions
    "ForeignKeyAction",
    "ACTION_PHRASES",
    "action_phrase",
    "parse_action",
    # Models
    "Column",
    "ColumnType",
    "Database",
    "ForeignKey",
    "Generated",
    "GeneratedStorage",
    "Index",
    "MissingTables",
    "Table",
    # DDL
    "CreateFlag",
    "create_statements",
    "create_index_statement",
    "create_database_statements",
    # Documents
    "DocumentConfig",
    "DocumentFormat",
    "to_document",
    "column_from_document",
    "dump_yaml",
    "dump_json",
    "dump_document",
    "dump_file",
    "load_yaml",
    "load_json",
    "load_document",
    "load_file",
    # Scanning
    "SchemaScanner",
    "column_from_driver",
    "scan_database",
    # Validation
    "ValidationResult",
    "validate_table",
    "validate_database",
    # Errors
    "SchemaError",
    "InvalidForeignKeyActionError",
    "MissingTablesError",
    "DocumentError",
    # Logging
    "configure_logging",
]
