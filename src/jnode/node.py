"""Flattening a JSON node into editable field rows."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Literal

from ._jsonpath import format_path, get_value_at_path, load_json

RowType = Literal["string", "number", "boolean", "null", "array", "object"]

CONTAINER_TYPES = ("array", "object")


class NodeNotFound(KeyError):
    """The path does not point at a value in the document."""


@dataclass
class FieldRow:
    """One direct child of a node.

    For ``array``/``object`` rows the value is only a marker; the nested
    content lives in the document.
    """

    key: str | None
    value: object
    type: RowType


@dataclass
class NodeData:
    rows: list[FieldRow] = field(default_factory=list)
    path: list[str | int] = field(default_factory=list)
    type: RowType = "object"


def value_type(value: object) -> RowType:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def _row(key: str | None, value: object) -> FieldRow:
    kind = value_type(value)
    if kind in CONTAINER_TYPES:
        # marker: child count, as shown next to collapsed containers
        return FieldRow(key, len(value), kind)
    return FieldRow(key, value, kind)


def node_rows(value: object) -> list[FieldRow]:
    """Flatten a decoded value into the rows of its node.

    Objects give one row per key, scalars a single keyless row and arrays
    one keyless row per element (each element is its own node).
    """
    if isinstance(value, dict):
        return [_row(k, v) for k, v in value.items()]
    if isinstance(value, list):
        return [_row(None, v) for v in value]
    return [_row(None, value)]


def select_node(content: str, path: list[str | int]) -> NodeData:
    """Read the node at ``path`` from the JSON text ``content``."""
    data = load_json(content)
    try:
        value = get_value_at_path(data, path)
    except KeyError:
        raise NodeNotFound(format_path(path)) from None
    return NodeData(rows=node_rows(value), path=list(path), type=value_type(value))


def _display_scalar(value: object) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def normalize_node(rows: list[FieldRow] | None) -> str:
    """Return the editable text for a node's rows.

    Array and object rows are left out; they are edited as their own nodes.
    """
    if not rows:
        return "{}"
    if len(rows) == 1 and not rows[0].key:
        return _display_scalar(rows[0].value)

    obj: dict[str, object] = {}
    for row in rows:
        if row.type in CONTAINER_TYPES:
            continue
        if row.key:
            obj[row.key] = row.value
    return json.dumps(obj, indent=2, ensure_ascii=False)
