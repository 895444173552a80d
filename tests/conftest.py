"""
tests/conftest.py
Shared fixtures for the schemaddl test suite.

Model fixtures are function-scoped so each test can mutate freely.  No
external mocking libraries are used; file I/O happens inside pytest's
tmp_path directories.
"""

from __future__ import annotations

from typing import List

import pytest

from schemaddl.actions import ForeignKeyAction
from schemaddl.models import (
    Column,
    ColumnType,
    Database,
    ForeignKey,
    Generated,
    GeneratedStorage,
    Index,
    Table,
)
from schemaddl.scanner import column_from_driver


# ---------------------------------------------------------------------------
# Reference table
# ---------------------------------------------------------------------------


@pytest.fixture()
def my_table() -> Table:
    """The reference table used by the DDL rendering tests."""
    return Table(
        name="MyTable",
        columns=[
            Column(name="uid", type=ColumnType.UUID, comment="key"),
            Column(name="name", type=ColumnType.TEXT),
            Column(name="created_at", type=ColumnType.TIMESTAMP),
            Column(name="deleted_at", type=ColumnType.TIMESTAMP, nullable=True),
            Column(name="untyped", nullable=True),
            Column(name="age", type=ColumnType.INT, nullable=True),
        ],
        pk=["uid"],
        foreign_keys=[
            ForeignKey(
                child_key=["uid"],
                parent_table="other_table",
                parent_key=["uid"],
                on_delete=ForeignKeyAction.CASCADE,
                on_update=ForeignKeyAction.CASCADE,
            )
        ],
        without_rowid=True,
        indices=[Index(name="idx_name", columns=["name"], unique=True)],
    )


@pytest.fixture()
def my_table_with_generated(my_table: Table) -> Table:
    """The reference table plus a virtual generated column."""
    my_table.columns.append(
        Column(
            name="gen",
            generated=Generated(
                expression='name + " " + age', storage=GeneratedStorage.VIRTUAL
            ),
        )
    )
    return my_table


# ---------------------------------------------------------------------------
# Scanned database
# ---------------------------------------------------------------------------


@pytest.fixture()
def scanned_t1() -> Table:
    """A table as a SQLite scanner would report it, raw defaults included."""
    return Table(
        name="t1",
        columns=[
            column_from_driver("id", "int64"),
            column_from_driver("uid", "uuid", not_null=True),
            column_from_driver("n1", "INT", default_text="42"),
            column_from_driver("n2", "INT", default_text="null"),
            column_from_driver("n3", "INT"),
            column_from_driver("nn1", "INT", not_null=True, default_text="42"),
            column_from_driver("s1", "TEXT", default_text='"42"'),
            column_from_driver("s2", "TEXT", default_text='"null"'),
            column_from_driver("s5", "TEXT", not_null=True, default_text="'42'"),
            column_from_driver("f1", "timestamp", not_null=True, default_text="CURRENT_TIMESTAMP"),
        ],
        indices=[
            Index(name="sqlite_autoindex_t1_2", unique=True),
            Index(name="sqlite_autoindex_t1_1", unique=True),
        ],
        pk=["id"],
    )


@pytest.fixture()
def scanned_t2() -> Table:
    return Table(
        name="t2",
        columns=[
            column_from_driver("id", "int64", not_null=True),
            column_from_driver("t_id", "int64", not_null=True),
        ],
        indices=[Index(name="sqlite_autoindex_t2_1", unique=True)],
        pk=["id"],
        foreign_keys=[
            ForeignKey(
                child_key=["t_id"],
                parent_table="t1",
                parent_key=["id"],
                on_delete=ForeignKeyAction.CASCADE,
                on_update=ForeignKeyAction.CASCADE,
            )
        ],
    )


@pytest.fixture()
def scanned_database(scanned_t1: Table, scanned_t2: Table) -> Database:
    """Tables in reverse declaration order, as the SQLite scanner returns them."""
    return Database(tables=[scanned_t2, scanned_t1])


@pytest.fixture()
def all_actions() -> List[ForeignKeyAction]:
    return list(ForeignKeyAction)
