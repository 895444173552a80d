# File: schemaddl/scanner.py
"""
schemaddl - Introspection Boundary
===================================
Live database introspection is not part of this package.  A scanner is any
object with a ``scan(connection)`` method returning a populated
``Database``; drivers implement it on their side.

Scanners map native type names, nullability and raw default text into
``Column`` objects.  ``column_from_driver`` is the helper for that last step
so ``parse_literal`` stays the single place where raw default text is
normalised.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, runtime_checkable

from schemaddl.literals import parse_literal
from schemaddl.models import Column, Database
from schemaddl.utils import Timer

logger: logging.Logger = logging.getLogger("schemaddl.scanner")


@runtime_checkable
class SchemaScanner(Protocol):
    """Produces a populated ``Database`` from a live connection handle."""

    def scan(self, connection: Any) -> Database:
        ...


def column_from_driver(
    name: str,
    type_name: Optional[str] = None,
    not_null: bool = False,
    default_text: Optional[str] = None,
    comment: str = "",
) -> Column:
    """
    Build a ``Column`` from catalog values as drivers report them.

    ``default_text`` of ``None`` means the catalog has no default at all;
    the text ``"NULL"`` is an explicit null default.
    """
    return Column(
        name=name,
        type=type_name or "",
        nullable=not not_null,
        default=None if default_text is None else parse_literal(default_text),
        comment=comment,
    )


def scan_database(scanner: SchemaScanner, connection: Any) -> Database:
    """
    Run *scanner* against *connection*.

    Any table order is accepted.  Scanner errors propagate unchanged after
    being logged.
    """
    with Timer(f"scan via {type(scanner).__name__}"):
        try:
            database: Database = scanner.scan(connection)
        except Exception:
            logger.exception("Schema scan failed.")
            raise

    if not isinstance(database, Database):
        raise TypeError(
            f"{type(scanner).__name__}.scan() returned {type(database).__name__}, "
            f"expected Database."
        )
    logger.info("Scanned %d table(s): %s", len(database.tables), ", ".join(database.table_names))
    return database


__all__: List[str] = [
    "SchemaScanner",
    "column_from_driver",
    "scan_database",
]
