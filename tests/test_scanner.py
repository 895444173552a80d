"""
tests/test_scanner.py
Unit tests for the introspection boundary (schemaddl.scanner).

No live database is involved: scanners are small in-test fakes.
"""

from __future__ import annotations

from typing import Any

import pytest

from schemaddl.ddl import create_statements
from schemaddl.literals import NULL, Numeric, QuotedString, RawExpression
from schemaddl.models import Column, Database, Table
from schemaddl.scanner import SchemaScanner, column_from_driver, scan_database


class _FakeScanner:
    def __init__(self, database: Any) -> None:
        self.database = database
        self.seen: Any = None

    def scan(self, connection: Any) -> Any:
        self.seen = connection
        return self.database


class _BrokenScanner:
    def scan(self, connection: Any) -> Database:
        raise ConnectionError("connection refused")


class TestColumnFromDriver:
    def test_no_default(self) -> None:
        col = column_from_driver("a", "INT")
        assert col == Column(name="a", type="INT", nullable=True)

    def test_not_null(self) -> None:
        assert column_from_driver("a", "INT", not_null=True).nullable is False

    def test_missing_type_is_untyped(self) -> None:
        assert column_from_driver("a").type == ""

    @pytest.mark.parametrize(
        "raw, literal",
        [
            ("NULL", NULL),
            ("42", Numeric("42")),
            ("'42'", QuotedString("42")),
            ('"null"', QuotedString("null")),
            ("CURRENT_TIMESTAMP", RawExpression("CURRENT_TIMESTAMP")),
        ],
    )
    def test_default_text_is_classified(self, raw: str, literal: object) -> None:
        assert column_from_driver("a", default_text=raw).default == literal

    def test_scanned_defaults_render(self, scanned_t1: Table) -> None:
        text: str = create_statements(scanned_t1)
        assert "default 42," in text
        assert "default null," in text
        assert 'default "42",' in text
        assert 'default "null",' in text
        assert "not null default CURRENT_TIMESTAMP," in text


class TestScanDatabase:
    def test_protocol(self) -> None:
        assert isinstance(_FakeScanner(Database()), SchemaScanner)
        assert not isinstance(object(), SchemaScanner)

    def test_returns_database(self, scanned_database: Database) -> None:
        scanner = _FakeScanner(scanned_database)
        connection = object()
        assert scan_database(scanner, connection) is scanned_database
        assert scanner.seen is connection

    def test_rejects_wrong_result(self) -> None:
        with pytest.raises(TypeError):
            scan_database(_FakeScanner(["t1"]), None)

    def test_errors_propagate(self) -> None:
        with pytest.raises(ConnectionError, match="connection refused"):
            scan_database(_BrokenScanner(), None)
