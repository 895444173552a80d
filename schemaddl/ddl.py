# File: schemaddl/ddl.py
"""
schemaddl - DDL Statement Generator
====================================
Renders a ``Table`` as a ``create table`` statement followed by one
``create index`` statement per index::

    create table MyTable (
        uid         uuid       not null,
        name        text       not null,
        deleted_at  timestamp,
        primary key (uid),
        foreign key (uid) references other_table(uid) on delete cascade
    ) without rowid;
    create unique index idx_name on MyTable(name);

The column block is aligned through ``TableGrid``.  Output is a pure function
of the input: columns, keys and indices are emitted in stored order and the
text is byte-for-byte reproducible.

No validation happens here.  A primary key naming a missing column is
rendered as-is; see ``schemaddl.validators`` for the opt-in checks.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import List, Optional, TextIO

from schemaddl.actions import ForeignKeyAction, action_phrase
from schemaddl.grid import TableGrid
from schemaddl.models import Column, Database, ForeignKey, Index, Table

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemaddl.ddl")

_INDENT: str = "    "


class CreateFlag(IntEnum):
    """Options for ``create_statements``."""

    TEMPORARY_TABLE = 1


# ---------------------------------------------------------------------------
# Clause builders
# ---------------------------------------------------------------------------


def column_row(column: Column) -> List[str]:
    """
    Grid cells for one column: ``[name, type?, attributes?]``.

    An empty type cell is kept as a placeholder when attributes follow, so
    the attribute clause stays in the third grid column.
    """
    row: List[str] = [column.name]
    if column.type:
        row.append(column.type)

    attrs: List[str] = []
    if not column.nullable:
        attrs.append("not null")
    if column.default is not None:
        attrs.append("default " + column.default.sql_literal())
    if column.generated is not None:
        attrs.append(
            f"generated always as ({column.generated.expression}) "
            f"{column.generated.storage.value}"
        )

    if attrs:
        if len(row) < 2:
            row.append("")
        row.append(" ".join(attrs))
    return row


def primary_key_clause(pk: List[str]) -> str:
    return "primary key (" + ",".join(pk) + ")"


def foreign_key_clause(fk: ForeignKey) -> str:
    parts: List[str] = [
        "foreign key (" + ", ".join(fk.child_key) + ")",
        " references " + fk.parent_table,
    ]
    if fk.parent_key:
        parts.append("(" + ", ".join(fk.parent_key) + ")")
    if fk.on_delete is not ForeignKeyAction.UNSET:
        parts.append(" on delete " + action_phrase(fk.on_delete))
    if fk.on_update is not ForeignKeyAction.UNSET:
        parts.append(" on update " + action_phrase(fk.on_update))
    return "".join(parts)


def table_options(table: Table) -> List[str]:
    options: List[str] = []
    if table.without_rowid:
        options.append("without rowid")
    if table.strict:
        options.append("strict")
    return options


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def index_name(table: Table, index: Index) -> str:
    """Explicit index name, or ``<table>_<col1>_<col2>_index``."""
    if index.name:
        return index.name
    return table.name + "_" + "_".join(index.columns) + "_index"


def create_index_statement(table: Table, index: Index) -> str:
    """
    Render one ``create index`` statement (no trailing newline).

    The derived name is never written back to *index*.
    """
    unique: str = "unique " if index.unique else ""
    return (
        f"create {unique}index {index_name(table, index)} "
        f"on {table.name}({','.join(index.columns)});"
    )


def create_statements(
    table: Table,
    *flags: CreateFlag,
    out: Optional[TextIO] = None,
) -> str:
    """
    Render the ``create table`` statement and its indices.

    Args:
        table: Table to render.
        *flags: ``CreateFlag`` options.
        out: Optional text stream that also receives the result.

    Returns:
        The full statement text, each statement terminated by a newline.
    """
    temporary: str = "temporary " if CreateFlag.TEMPORARY_TABLE in flags else ""

    grid: TableGrid = TableGrid(column_row(c) for c in table.columns)

    clauses: List[str] = grid.render()
    if table.pk:
        clauses.append(primary_key_clause(table.pk))
    for fk in table.foreign_keys:
        clauses.append(foreign_key_clause(fk))

    lines: List[str] = [f"create {temporary}table {table.name} ("]
    lines.append(",".join("\n" + _INDENT + clause for clause in clauses))
    lines.append("\n)")

    options: List[str] = table_options(table)
    if options:
        lines.append(" " + ", ".join(options))
    lines.append(";\n")

    for index in table.indices:
        lines.append(create_index_statement(table, index) + "\n")

    text: str = "".join(lines)
    logger.debug(
        "Rendered table '%s': %d clauses, %d indices.",
        table.name,
        len(clauses),
        len(table.indices),
    )
    if out is not None:
        out.write(text)
    return text


def create_database_statements(
    database: Database,
    *flags: CreateFlag,
    out: Optional[TextIO] = None,
) -> str:
    """Render every table of *database*, in stored order."""
    text: str = "".join(create_statements(t, *flags) for t in database.tables)
    if out is not None:
        out.write(text)
    return text


__all__: List[str] = [
    "CreateFlag",
    "column_row",
    "primary_key_clause",
    "foreign_key_clause",
    "table_options",
    "index_name",
    "create_index_statement",
    "create_statements",
    "create_database_statements",
]
