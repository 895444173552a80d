# File: schemaddl/documents.py
"""
schemaddl - Structured Document Codec
======================================
Encode / decode hooks between the schema model and YAML or JSON documents.

Encoding goes through plain-data projections (``*_to_document``): dicts and
lists using the document field names, with zero-valued optional fields left
out.  The YAML dumper renders ``Column`` and ``Index`` entries in flow style
by re-projecting them and asking for a flow mapping; the surrounding
structure stays in block style::

    - table: t1
      columns:
        - {name: id, type: int64, nullable: true}
        - {name: s1, type: TEXT, default: '"42"'}
      pk: [id]

Decoding goes the other way through ``*_from_document``.  Only
``column_from_document`` special-cases a field: ``default`` is turned back
into text and re-classified with ``parse_literal``, because the generic
scalar decode cannot tell ``"42"`` (quoted) from ``42`` (numeric).
Numbers are read back as their source text (``SchemaLoader`` for YAML,
``parse_int``/``parse_float`` for JSON) so ``1e999`` or a 20-digit decimal
keeps both its kind and its digits.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from schemaddl.actions import ForeignKeyAction, action_phrase, parse_action
from schemaddl.config import DocumentConfig, DocumentFormat
from schemaddl.errors import DocumentError
from schemaddl.literals import Literal, Numeric, parse_literal
from schemaddl.models import Column, Database, ForeignKey, Index, Table
from schemaddl.utils import read_file, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemaddl.documents")

_MAP_TAG: str = "tag:yaml.org,2002:map"
_SEQ_TAG: str = "tag:yaml.org,2002:seq"
_INT_TAG: str = "tag:yaml.org,2002:int"
_FLOAT_TAG: str = "tag:yaml.org,2002:float"

# Table keys copied straight onto the model.
_TABLE_FLAGS: Tuple[str, ...] = ("without_rowid", "strict")

# Flow mappings must stay on one line.
_LINE_WIDTH: int = 1 << 16


class FlowList(list):
    """A list the YAML dumper renders inline: ``[a, b]``."""


# ---------------------------------------------------------------------------
# Encode: model → plain data
# ---------------------------------------------------------------------------


def column_to_document(column: Column) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"name": column.name}
    if column.type:
        doc["type"] = column.type
    if column.nullable:
        doc["nullable"] = True
    if column.default is not None:
        doc["default"] = column.default.document_value()
    if column.generated is not None:
        doc["generated"] = {
            "expression": column.generated.expression,
            "storage": column.generated.storage.value,
        }
    if column.comment:
        doc["comment"] = column.comment
    return doc


def index_to_document(index: Index) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"name": index.name}
    if index.unique:
        doc["unique"] = True
    if index.columns:
        doc["columns"] = list(index.columns)
    return doc


def foreign_key_to_document(fk: ForeignKey) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "child_key": FlowList(fk.child_key),
        "parent_table": fk.parent_table,
    }
    if fk.parent_key:
        doc["parent_key"] = FlowList(fk.parent_key)
    if fk.on_delete is not ForeignKeyAction.UNSET:
        doc["on_delete"] = action_phrase(fk.on_delete)
    if fk.on_update is not ForeignKeyAction.UNSET:
        doc["on_update"] = action_phrase(fk.on_update)
    return doc


def _table_fields(table: Table, project_leaves: bool) -> Dict[str, Any]:
    """
    Table fields in document order.

    With *project_leaves* False, columns and indices stay model objects so
    the YAML dumper can give them their flow-style representers.
    """
    doc: Dict[str, Any] = {"table": table.name}
    if table.columns:
        doc["columns"] = [
            column_to_document(c) if project_leaves else c for c in table.columns
        ]
    if table.indices:
        doc["indices"] = [
            index_to_document(i) if project_leaves else i for i in table.indices
        ]
    if table.pk:
        doc["pk"] = FlowList(table.pk)
    if table.foreign_keys:
        doc["foreign_keys"] = [foreign_key_to_document(fk) for fk in table.foreign_keys]
    if table.without_rowid:
        doc["without_rowid"] = True
    if table.strict:
        doc["strict"] = True
    return doc


def table_to_document(table: Table) -> Dict[str, Any]:
    return _table_fields(table, project_leaves=True)


def database_to_document(database: Database) -> Dict[str, Any]:
    return {"tables": [table_to_document(t) for t in database.tables]}


def to_document(obj: Any) -> Any:
    """
    Project any model object (or a list of them) onto plain data.

    Raises:
        TypeError: *obj* is not part of the schema model.
    """
    if isinstance(obj, Database):
        return database_to_document(obj)
    if isinstance(obj, Table):
        return table_to_document(obj)
    if isinstance(obj, Column):
        return column_to_document(obj)
    if isinstance(obj, Index):
        return index_to_document(obj)
    if isinstance(obj, ForeignKey):
        return foreign_key_to_document(obj)
    if isinstance(obj, ForeignKeyAction):
        return action_phrase(obj)
    if isinstance(obj, Literal):
        return obj.document_value()
    if isinstance(obj, (list, tuple)):
        return [to_document(item) for item in obj]
    raise TypeError(f"Cannot project {type(obj).__name__} onto a schema document.")


# ---------------------------------------------------------------------------
# YAML dumper
# ---------------------------------------------------------------------------


class SchemaDumper(yaml.SafeDumper):
    """SafeDumper that indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)

    def ignore_aliases(self, data: Any) -> bool:
        # NULL is a shared instance; literals are values, never anchors.
        return isinstance(data, Literal) or super().ignore_aliases(data)


class SchemaLoader(yaml.SafeLoader):
    """SafeLoader that keeps the source text of int and float scalars."""


def _construct_number_text(loader: SchemaLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


SchemaLoader.add_constructor(_INT_TAG, _construct_number_text)
SchemaLoader.add_constructor(_FLOAT_TAG, _construct_number_text)


def _represent_flow_list(dumper: SchemaDumper, data: FlowList) -> yaml.Node:
    return dumper.represent_sequence(_SEQ_TAG, data, flow_style=True)


def _represent_column(dumper: SchemaDumper, column: Column) -> yaml.Node:
    doc: Dict[str, Any] = column_to_document(column)
    if column.default is not None:
        doc["default"] = column.default
    return dumper.represent_mapping(_MAP_TAG, doc, flow_style=True)


def _represent_index(dumper: SchemaDumper, index: Index) -> yaml.Node:
    return dumper.represent_mapping(_MAP_TAG, index_to_document(index), flow_style=True)


def _represent_foreign_key(dumper: SchemaDumper, fk: ForeignKey) -> yaml.Node:
    return dumper.represent_mapping(_MAP_TAG, foreign_key_to_document(fk))


def _represent_table(dumper: SchemaDumper, table: Table) -> yaml.Node:
    return dumper.represent_mapping(_MAP_TAG, _table_fields(table, project_leaves=False))


def _represent_database(dumper: SchemaDumper, database: Database) -> yaml.Node:
    return dumper.represent_mapping(_MAP_TAG, {"tables": list(database.tables)})


def _represent_action(dumper: SchemaDumper, action: ForeignKeyAction) -> yaml.Node:
    return dumper.represent_str(action_phrase(action))


def _represent_literal(dumper: SchemaDumper, literal: Literal) -> yaml.Node:
    if isinstance(literal, Numeric):
        tag: str = _INT_TAG if literal.is_integer else _FLOAT_TAG
        return dumper.represent_scalar(tag, literal.text)
    return dumper.represent_data(literal.document_value())


SchemaDumper.add_representer(FlowList, _represent_flow_list)
SchemaDumper.add_representer(Column, _represent_column)
SchemaDumper.add_representer(Index, _represent_index)
SchemaDumper.add_representer(ForeignKey, _represent_foreign_key)
SchemaDumper.add_representer(Table, _represent_table)
SchemaDumper.add_representer(Database, _represent_database)
SchemaDumper.add_representer(ForeignKeyAction, _represent_action)
SchemaDumper.add_multi_representer(Literal, _represent_literal)


def dump_yaml(obj: Any, indent: int = 2, explicit_start: bool = False) -> str:
    """Serialise a model object (or list of them) as YAML."""
    return yaml.dump(
        obj,
        Dumper=SchemaDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        indent=indent,
        width=_LINE_WIDTH,
        explicit_start=explicit_start,
    )


def dump_json(obj: Any, indent: Optional[int] = 2) -> str:
    """Serialise a model object (or list of them) as JSON."""
    return json.dumps(to_document(obj), indent=indent, ensure_ascii=False)


def dump_document(obj: Any, config: Optional[DocumentConfig] = None) -> str:
    """Serialise *obj* according to *config* (YAML with defaults)."""
    cfg: DocumentConfig = config or DocumentConfig()
    if cfg.format is DocumentFormat.JSON:
        return dump_json(obj, indent=cfg.indent)
    return dump_yaml(obj, indent=cfg.indent, explicit_start=cfg.explicit_start)


# ---------------------------------------------------------------------------
# Decode: plain data → model
# ---------------------------------------------------------------------------


def _expect_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DocumentError(
            f"Expected a mapping for {what}, got {type(data).__name__}."
        )
    return data


def _expect_list(data: Any, what: str) -> List[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise DocumentError(f"Expected a list for {what}, got {type(data).__name__}.")
    return data


def _scalar_text(value: Any) -> str:
    """Recover the source text of a decoded document scalar."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def column_from_document(data: Any) -> Column:
    """
    Decode a column entry.

    ``default`` is re-parsed through ``parse_literal``: a document string
    ``'"42"'`` becomes a quoted string, ``42`` a number and ``null`` the null
    literal.  Unknown keys are ignored.
    """
    doc: Mapping[str, Any] = _expect_mapping(data, "column")
    if "name" not in doc:
        raise DocumentError(f"Column entry without a name: {dict(doc)!r}")

    fields: Dict[str, Any] = {}
    for key, value in doc.items():
        if key == "name":
            fields["name"] = _scalar_text(value)
        elif key == "type":
            fields["type"] = "" if value is None else _scalar_text(value)
        elif key == "nullable":
            fields["nullable"] = value is True or value == "true"
        elif key == "default":
            fields["default"] = parse_literal(_scalar_text(value))
        elif key == "generated":
            fields["generated"] = value
        elif key == "comment":
            fields["comment"] = "" if value is None else _scalar_text(value)
        else:
            logger.debug("Ignoring unknown column key '%s'.", key)

    try:
        return Column(**fields)
    except ValidationError as exc:
        raise DocumentError(f"Invalid column {fields.get('name')!r}: {exc}") from exc


def index_from_document(data: Any) -> Index:
    try:
        return Index.model_validate(_expect_mapping(data, "index"))
    except ValidationError as exc:
        raise DocumentError(f"Invalid index: {exc}") from exc


def foreign_key_from_document(data: Any) -> ForeignKey:
    doc: Dict[str, Any] = dict(_expect_mapping(data, "foreign key"))
    for key in ("on_delete", "on_update"):
        if key in doc:
            doc[key] = parse_action(doc[key])
    try:
        return ForeignKey.model_validate(doc)
    except ValidationError as exc:
        raise DocumentError(f"Invalid foreign key: {exc}") from exc


def table_from_document(data: Any) -> Table:
    doc: Dict[str, Any] = dict(_expect_mapping(data, "table"))
    if "table" not in doc:
        raise DocumentError("Table entry without a 'table' name.")
    name: Any = doc.pop("table")

    columns: List[Any] = _expect_list(doc.pop("columns", None), "columns")
    indices: List[Any] = _expect_list(doc.pop("indices", None), "indices")

    fields: Dict[str, Any] = {
        "name": name,
        "columns": [column_from_document(c) for c in columns],
        "indices": [index_from_document(i) for i in indices],
        "pk": _expect_list(doc.pop("pk", None), "pk"),
        "foreign_keys": [
            foreign_key_from_document(fk)
            for fk in _expect_list(doc.pop("foreign_keys", None), "foreign_keys")
        ],
    }
    unknown: List[str] = [k for k in doc if k not in _TABLE_FLAGS]
    if unknown:
        raise DocumentError(f"Unknown keys in table {name!r}: {unknown}")
    fields.update(doc)

    try:
        return Table(**fields)
    except ValidationError as exc:
        raise DocumentError(f"Invalid table {name!r}: {exc}") from exc


def database_from_document(data: Any) -> Database:
    """
    Decode a whole database.

    Accepts either ``{"tables": [...]}`` or a bare list of table entries.
    """
    if isinstance(data, list):
        entries: List[Any] = data
    else:
        doc: Mapping[str, Any] = _expect_mapping(data, "database")
        unknown: List[str] = [k for k in doc if k != "tables"]
        if unknown:
            raise DocumentError(f"Unknown database keys: {unknown}")
        entries = _expect_list(doc.get("tables"), "tables")

    database: Database = Database(tables=[table_from_document(t) for t in entries])
    logger.debug("Decoded database with %d tables.", len(database.tables))
    return database


# ---------------------------------------------------------------------------
# Text entry points
# ---------------------------------------------------------------------------


def load_yaml(text: str) -> Database:
    try:
        data: Any = yaml.load(text, Loader=SchemaLoader)
    except yaml.YAMLError as exc:
        raise DocumentError(f"Invalid YAML: {exc}") from exc
    return database_from_document(data)


def load_json(text: str) -> Database:
    try:
        data: Any = json.loads(text, parse_int=str, parse_float=str)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"Invalid JSON: {exc}") from exc
    return database_from_document(data)


def load_document(text: str, fmt: DocumentFormat = DocumentFormat.YAML) -> Database:
    if fmt is DocumentFormat.JSON:
        return load_json(text)
    return load_yaml(text)


def load_file(path: Union[str, Path]) -> Database:
    """
    Load a database document from disk.

    The format is chosen from the file extension.

    Raises:
        FileNotFoundError: *path* does not exist.
        DocumentError: the content cannot be decoded.
    """
    p: Path = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Schema document not found: {p}")
    fmt: DocumentFormat = DocumentFormat.from_path(p)
    logger.info("Loading %s document from %s", fmt.value, p)
    return load_document(read_file(p), fmt)


def dump_file(
    obj: Any,
    path: Union[str, Path],
    config: Optional[DocumentConfig] = None,
) -> int:
    """
    Write *obj* to *path*; returns the number of bytes written.

    Without *config*, the format follows the file extension.
    """
    p: Path = Path(path)
    cfg: DocumentConfig = config or DocumentConfig(format=DocumentFormat.from_path(p))
    return write_file(p, dump_document(obj, cfg))


__all__: List[str] = [
    "FlowList",
    "column_to_document",
    "index_to_document",
    "foreign_key_to_document",
    "table_to_document",
    "database_to_document",
    "to_document",
    "SchemaDumper",
    "dump_yaml",
    "dump_json",
    "dump_document",
    "column_from_document",
    "index_from_document",
    "foreign_key_from_document",
    "table_from_document",
    "database_from_document",
    "load_yaml",
    "load_json",
    "load_document",
    "load_file",
    "dump_file",
]
