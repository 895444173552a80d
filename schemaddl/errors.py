# File: schemaddl/errors.py
"""
schemaddl - Exception Hierarchy
================================
Every error raised by the package derives from ``SchemaError`` so callers
can catch the whole family with a single ``except`` clause.
"""

from __future__ import annotations

from typing import Any, List, Sequence


class SchemaError(Exception):
    """Base class for all schemaddl errors."""


class InvalidForeignKeyActionError(SchemaError):
    """
    Raised whenever a foreign-key action code is not in the canonical table.

    Not a ``ValueError`` subclass, so pydantic validators re-raise it
    unchanged instead of folding it into a ``ValidationError``.
    """

    message: str = "invalid foreign key action"

    def __init__(self, value: Any = None) -> None:
        self.value: Any = value
        super().__init__(self.message if value is None else f"{self.message}: {value!r}")


class MissingTablesError(SchemaError):
    """One or more referenced tables do not exist in the database."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names: List[str] = list(names)
        super().__init__(f"missing tables: {', '.join(self.names)}")


class DocumentError(SchemaError, ValueError):
    """A YAML / JSON document could not be decoded into the schema model."""


__all__: List[str] = [
    "SchemaError",
    "InvalidForeignKeyActionError",
    "MissingTablesError",
    "DocumentError",
]
