# File: schemaddl/validators.py
"""
schemaddl - Schema Consistency Checks
======================================
Opt-in, caller-invoked validation of a schema model.

The models and the DDL renderer accept structurally inconsistent input (a
primary key naming a column that does not exist renders as-is).  Callers
that want to catch such mistakes before emitting SQL run ``validate_table``
or ``validate_database`` and inspect the returned ``ValidationResult``.

Usage:
    from schemaddl.validators import validate_database
    result = validate_database(db)
    if not result:
        print(result.format_report())
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Set

from schemaddl.ddl import index_name
from schemaddl.models import Database, Table

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemaddl.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationIssue(NamedTuple):
    level: str  # "error" | "warning"
    code: str
    message: str
    context: Dict[str, Any]


class ValidationResult:
    """Accumulates ``ValidationIssue`` entries; truthy when there are no errors."""

    __slots__ = ("issues",)

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def add_error(
        self, code: str, message: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.issues.append(ValidationIssue("error", code, message, context or {}))

    def add_warning(
        self, code: str, message: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.issues.append(ValidationIssue("warning", code, message, context or {}))

    def merge(self, other: "ValidationResult") -> None:
        self.issues.extend(other.issues)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        return f"Validation: {len(self.errors)} error(s), {len(self.warnings)} warning(s)."

    def format_report(self) -> str:
        lines: List[str] = [self.summary()]
        lines.extend(f"  [{i.level}] {i.code}: {i.message}" for i in self.issues)
        return "\n".join(lines)

    def __bool__(self) -> bool:
        return self.is_valid

    def __len__(self) -> int:
        return len(self.issues)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def _duplicates(names: Sequence[str]) -> List[str]:
    return sorted(n for n, count in Counter(names).items() if count > 1)


def _unknown(names: Sequence[str], known: Set[str]) -> List[str]:
    return [n for n in names if n not in known]


def validate_table(table: Table) -> ValidationResult:
    """
    Check one table for internal consistency.

    Errors: duplicate column or index names, primary key / index / foreign
    key child columns that are not columns of the table, foreign keys whose
    explicit parent key length differs from the child key length.

    Warnings: generated columns that also carry a default.
    """
    result: ValidationResult = ValidationResult()
    ctx: Dict[str, Any] = {"table": table.name}
    column_names: Set[str] = {c.name for c in table.columns}

    for name in _duplicates([c.name for c in table.columns]):
        result.add_error(
            "DUPLICATE_COLUMN_NAME",
            f"Column '{name}' is defined more than once in table '{table.name}'.",
            {**ctx, "column": name},
        )

    for name in _duplicates([index_name(table, i) for i in table.indices]):
        result.add_error(
            "DUPLICATE_INDEX_NAME",
            f"Index '{name}' is defined more than once on table '{table.name}'.",
            {**ctx, "index": name},
        )

    missing_pk: List[str] = _unknown(table.pk, column_names)
    if missing_pk:
        result.add_error(
            "UNKNOWN_PRIMARY_KEY_COLUMN",
            f"Primary key of '{table.name}' references non-existent columns: {missing_pk}",
            {**ctx, "columns": missing_pk},
        )

    for index in table.indices:
        missing: List[str] = _unknown(index.columns, column_names)
        if missing:
            result.add_error(
                "UNKNOWN_INDEX_COLUMN",
                f"Index '{index_name(table, index)}' on '{table.name}' references "
                f"non-existent columns: {missing}",
                {**ctx, "index": index_name(table, index), "columns": missing},
            )

    for fk in table.foreign_keys:
        fk_ctx: Dict[str, Any] = {**ctx, "parent_table": fk.parent_table}
        missing = _unknown(fk.child_key, column_names)
        if missing:
            result.add_error(
                "UNKNOWN_FOREIGN_KEY_COLUMN",
                f"Foreign key on '{table.name}' references non-existent "
                f"child columns: {missing}",
                {**fk_ctx, "columns": missing},
            )
        if fk.parent_key and len(fk.parent_key) != len(fk.child_key):
            result.add_error(
                "FOREIGN_KEY_ARITY_MISMATCH",
                f"Foreign key ({', '.join(fk.child_key)}) on '{table.name}' has "
                f"{len(fk.child_key)} child and {len(fk.parent_key)} parent columns.",
                fk_ctx,
            )

    for column in table.columns:
        if column.generated is not None and column.default is not None:
            result.add_warning(
                "GENERATED_COLUMN_DEFAULT",
                f"Generated column '{column.name}' in '{table.name}' also has a default.",
                {**ctx, "column": column.name},
            )

    logger.debug("validate_table '%s': %d issue(s).", table.name, len(result))
    return result


def validate_database(database: Database) -> ValidationResult:
    """
    Check every table plus cross-table references.

    Adds duplicate table names and foreign keys whose parent table is not in
    *database* (collected through ``Database.check_tables``).
    """
    result: ValidationResult = ValidationResult()

    for name in _duplicates(database.table_names):
        result.add_error(
            "DUPLICATE_TABLE_NAME",
            f"Table '{name}' is defined more than once.",
            {"table": name},
        )

    for table in database.tables:
        result.merge(validate_table(table))
        parents: List[str] = [fk.parent_table for fk in table.foreign_keys]
        for name in database.check_tables(*parents):
            result.add_error(
                "UNKNOWN_PARENT_TABLE",
                f"Table '{table.name}' has a foreign key to missing table '{name}'.",
                {"table": table.name, "parent_table": name},
            )

    if result.is_valid:
        logger.info("Schema valid: %d table(s).", len(database.tables))
    else:
        logger.warning(result.summary())
    return result


__all__: List[str] = [
    "ValidationIssue",
    "ValidationResult",
    "validate_table",
    "validate_database",
]
