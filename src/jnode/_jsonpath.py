"""JSON path utilities shared by the node, update and modal modules."""

from __future__ import annotations

import json


def format_path(path: list[str | int] | None) -> str:
    """Render a path in bracket notation for display.

    Integers become bare indices and strings become quoted keys:
    ``["customer", 0, "id"]`` -> ``$["customer"][0]["id"]``.
    An empty or missing path is the root ``$``.
    """
    if not path:
        return "$"
    segments = [
        str(seg) if is_index(seg) else f'"{seg}"'
        for seg in path
    ]
    return "$[" + "][".join(segments) + "]"


def is_index(selector: object) -> bool:
    return isinstance(selector, int) and not isinstance(selector, bool)


def _reject_constant(name: str) -> object:
    raise ValueError(f"{name} is not valid JSON")


def load_json(text: str) -> object:
    """Strict json.loads: NaN, Infinity and -Infinity raise ValueError."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_edited_text(text: str) -> object:
    """Parse edited node text into a Python object.

    Text that is not valid JSON is kept as the raw string.
    """
    try:
        return load_json(text)
    except ValueError:
        return text


def dump_json(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)


def get_value_at_path(data: object, path: list[str | int]) -> object:
    """Get the value at a given path in data.

    Raises KeyError when a selector does not exist.
    """
    current = data
    for key in path:
        if isinstance(current, dict) and str(key) in current:
            current = current[str(key)]
        elif isinstance(current, list) and is_index(key):
            if 0 <= key < len(current):
                current = current[key]
            else:
                raise KeyError(key)
        else:
            raise KeyError(key)
    return current
