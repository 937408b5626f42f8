"""Writing edited node fields back into a JSON document."""

from __future__ import annotations

import logging

from ._jsonpath import dump_json, is_index, load_json

_LOG = logging.getLogger(__name__)


class PathConflict(TypeError):
    """A path selector cannot be applied to the value it reaches."""


def _lookup(container: dict | list, key: str | int) -> tuple[bool, object]:
    if isinstance(container, dict):
        k = str(key)
        return (k in container, container.get(k))
    if is_index(key):
        if 0 <= key < len(container):
            return (True, container[key])
        return (False, None)
    raise PathConflict(f"cannot index an array with {key!r}")


def _store(container: dict | list, key: str | int, value: object) -> None:
    if isinstance(container, dict):
        container[str(key)] = value
        return
    if not is_index(key) or key < 0:
        raise PathConflict(f"cannot index an array with {key!r}")
    if key >= len(container):
        container.extend([None] * (key + 1 - len(container)))
    container[key] = value


def resolve_parent(
    root: object, path: list[str | int]
) -> tuple[dict | list, str | int]:
    """Walk ``path`` down to the container that holds its last selector.

    Missing intermediate containers are created on the way: a list when
    the following selector is an index, a dict otherwise. The final slot is
    not created.
    """
    if not path:
        raise ValueError("path must not be empty")

    current = root
    for i, key in enumerate(path[:-1]):
        if not isinstance(current, (dict, list)):
            raise PathConflict(f"cannot descend into {type(current).__name__} at {key!r}")
        found, child = _lookup(current, key)
        if not found:
            child = [] if is_index(path[i + 1]) else {}
            _store(current, key, child)
        current = child

    if not isinstance(current, (dict, list)):
        raise PathConflict(f"cannot descend into {type(current).__name__} at {path[-1]!r}")
    return current, path[-1]


def _is_leaf(value: object) -> bool:
    return not isinstance(value, (dict, list))


def apply_edit(root: object, path: list[str | int], edited_fields: object) -> object:
    """Apply edited fields to the node at ``path`` and return the new root.

    An object node keeps every key the edit does not name, and only leaf
    values from an edited mapping are written into it. A raw string edit
    replaces an object node; any other non-mapping edit leaves it as is.
    Nodes that are not objects are replaced.
    """
    if not path:
        return edited_fields

    parent, key = resolve_parent(root, path)
    _, target = _lookup(parent, key)

    if isinstance(target, dict) and not isinstance(edited_fields, str):
        merged = dict(target)
        if isinstance(edited_fields, dict):
            for k, v in edited_fields.items():
                if _is_leaf(v):
                    merged[k] = v
        _store(parent, key, merged)
    else:
        _store(parent, key, edited_fields)
    return root


def update_json_by_path(
    content: str, path: list[str | int], edited_fields: object
) -> str:
    """Return ``content`` with ``edited_fields`` written at ``path``.

    If ``content`` is not valid JSON, or the path runs through a scalar,
    the original text is returned unchanged.
    """
    try:
        data = load_json(content)
        data = apply_edit(data, path, edited_fields)
        return dump_json(data)
    except (ValueError, PathConflict) as exc:
        _LOG.warning("Error updating JSON at %r: %s", path, exc)
        return content
