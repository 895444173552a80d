"""
tests/test_ddl.py
Unit tests for schemaddl.ddl (create table / create index rendering).
"""

from __future__ import annotations

import io

import pytest

from schemaddl.actions import ForeignKeyAction
from schemaddl.ddl import (
    CreateFlag,
    column_row,
    create_database_statements,
    create_index_statement,
    create_statements,
    foreign_key_clause,
    index_name,
)
from schemaddl.literals import NULL, Numeric, QuotedString, RawExpression
from schemaddl.models import Column, Database, ForeignKey, Generated, GeneratedStorage, Index, Table


MY_TABLE_DDL: str = (
    "create table MyTable (\n"
    "    uid         uuid       not null,\n"
    "    name        text       not null,\n"
    "    created_at  timestamp  not null,\n"
    "    deleted_at  timestamp,\n"
    "    untyped,\n"
    "    age         int,\n"
    "    primary key (uid),\n"
    "    foreign key (uid) references other_table(uid) on delete cascade on update cascade\n"
    ") without rowid;\n"
    "create unique index idx_name on MyTable(name);\n"
)


# ===========================================================================
# Reference output
# ===========================================================================


class TestCreateStatements:
    def test_reference_table(self, my_table: Table) -> None:
        assert create_statements(my_table) == MY_TABLE_DDL

    def test_generated_column(self, my_table_with_generated: Table) -> None:
        expected: str = MY_TABLE_DDL.replace(
            "    age         int,\n",
            "    age         int,\n"
            "    gen" + " " * 20 + 'not null generated always as (name + " " + age) virtual,\n',
        )
        assert create_statements(my_table_with_generated) == expected

    def test_deterministic(self, my_table: Table) -> None:
        assert create_statements(my_table) == create_statements(my_table)

    def test_comment_not_rendered(self) -> None:
        table = Table(name="T", columns=[Column(name="a", comment="audit trail")])
        assert "audit" not in create_statements(table)

    def test_temporary_flag(self, my_table: Table) -> None:
        text: str = create_statements(my_table, CreateFlag.TEMPORARY_TABLE)
        assert text.startswith("create temporary table MyTable (\n")

    def test_empty_table(self) -> None:
        assert create_statements(Table(name="T")) == "create table T (\n);\n"

    def test_options_joined(self) -> None:
        table = Table(
            name="T",
            columns=[Column(name="a", type="int")],
            without_rowid=True,
            strict=True,
        )
        assert create_statements(table) == (
            "create table T (\n"
            "    a  int  not null\n"
            ") without rowid, strict;\n"
        )

    def test_missing_pk_column_rendered_as_is(self) -> None:
        table = Table(name="T", columns=[Column(name="a", type="int")], pk=["nope"])
        assert "    primary key (nope)\n" in create_statements(table)

    def test_composite_primary_key(self) -> None:
        table = Table(
            name="T",
            columns=[Column(name="a"), Column(name="b")],
            pk=["a", "b"],
        )
        assert "    primary key (a,b)\n" in create_statements(table)

    def test_writes_to_stream(self, my_table: Table) -> None:
        buf = io.StringIO()
        text: str = create_statements(my_table, out=buf)
        assert buf.getvalue() == text == MY_TABLE_DDL

    def test_stored_order_is_kept(self) -> None:
        table = Table(
            name="T",
            columns=[Column(name="z", nullable=True), Column(name="a", nullable=True)],
        )
        assert create_statements(table) == "create table T (\n    z,\n    a\n);\n"

    def test_database(self, my_table: Table) -> None:
        other = Table(name="other_table", columns=[Column(name="uid", type="uuid")])
        buf = io.StringIO()
        text: str = create_database_statements(Database(tables=[other, my_table]), out=buf)
        assert text == create_statements(other) + MY_TABLE_DDL
        assert buf.getvalue() == text


# ===========================================================================
# Column rows
# ===========================================================================


class TestColumnRow:
    @pytest.mark.parametrize(
        "column, row",
        [
            (Column(name="a", type="int"), ["a", "int", "not null"]),
            (Column(name="a", type="int", nullable=True), ["a", "int"]),
            (Column(name="a", nullable=True), ["a"]),
            (Column(name="a"), ["a", "", "not null"]),
            (
                Column(name="a", type="int", nullable=True, default=Numeric("42")),
                ["a", "int", "default 42"],
            ),
            (
                Column(name="a", type="int", nullable=True, default=NULL),
                ["a", "int", "default null"],
            ),
            (
                Column(name="a", type="text", default=QuotedString("x", "'")),
                ["a", "text", 'not null default "x"'],
            ),
            (
                Column(name="a", type="timestamp", default=RawExpression("CURRENT_TIMESTAMP")),
                ["a", "timestamp", "not null default CURRENT_TIMESTAMP"],
            ),
            (
                Column(
                    name="a",
                    type="int",
                    nullable=True,
                    generated=Generated(expression="b * 2", storage=GeneratedStorage.STORED),
                ),
                ["a", "int", "generated always as (b * 2) stored"],
            ),
        ],
    )
    def test_cells(self, column: Column, row: list) -> None:
        assert column_row(column) == row

    def test_placeholder_keeps_attributes_aligned(self) -> None:
        table = Table(
            name="T",
            columns=[
                Column(name="aa", type="text"),
                Column(name="b", default=Numeric("1")),
            ],
        )
        assert create_statements(table) == (
            "create table T (\n"
            "    aa  text  not null,\n"
            "    b         not null default 1\n"
            ");\n"
        )


# ===========================================================================
# Foreign keys and indices
# ===========================================================================


class TestForeignKeyClause:
    def test_without_parent_key(self) -> None:
        fk = ForeignKey(child_key=["a"], parent_table="p")
        assert foreign_key_clause(fk) == "foreign key (a) references p"

    def test_composite_keys_use_comma_space(self) -> None:
        fk = ForeignKey(child_key=["a", "b"], parent_table="p", parent_key=["x", "y"])
        assert foreign_key_clause(fk) == "foreign key (a, b) references p(x, y)"

    def test_only_on_update(self) -> None:
        fk = ForeignKey(
            child_key=["a"],
            parent_table="p",
            on_update=ForeignKeyAction.SET_NULL,
        )
        assert foreign_key_clause(fk) == "foreign key (a) references p on update set null"

    def test_on_delete_before_on_update(self) -> None:
        fk = ForeignKey(
            child_key=["a"],
            parent_table="p",
            parent_key=["id"],
            on_delete=ForeignKeyAction.RESTRICT,
            on_update=ForeignKeyAction.NO_ACTION,
        )
        assert foreign_key_clause(fk) == (
            "foreign key (a) references p(id) on delete restrict on update no action"
        )


class TestIndexStatements:
    def test_derived_name(self) -> None:
        table = Table(name="T", columns=[Column(name="a"), Column(name="b")])
        index = Index(columns=["a", "b"])
        assert create_index_statement(table, index) == "create index T_a_b_index on T(a,b);"

    def test_derived_name_not_written_back(self) -> None:
        table = Table(name="T")
        index = Index(columns=["a"])
        assert index_name(table, index) == "T_a_index"
        create_index_statement(table, index)
        assert index.name == ""

    def test_unique(self) -> None:
        table = Table(name="T")
        index = Index(name="ix", unique=True, columns=["a"])
        assert create_index_statement(table, index) == "create unique index ix on T(a);"

    def test_indices_follow_table_in_order(self) -> None:
        table = Table(
            name="T",
            columns=[Column(name="a", type="int")],
            indices=[Index(name="i2", columns=["a"]), Index(name="i1", columns=["a"])],
        )
        lines = create_statements(table).splitlines()
        assert lines[-2:] == ["create index i2 on T(a);", "create index i1 on T(a);"]
