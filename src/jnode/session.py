"""Save flow for one node edit: merge, re-validate, commit."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ._jsonpath import load_json, parse_edited_text
from .node import NodeData
from .update import update_json_by_path

_LOG = logging.getLogger(__name__)

SAVE_OK_MESSAGE = "Changes saved successfully!"
SAVE_FAILED_MESSAGE = "Invalid JSON format. Please check your input."


@dataclass
class FileContents:
    """Persisted file contents as last recorded by the editor."""

    contents: str = ""
    has_changes: bool = False
    skip_update: bool = False


class DocumentStore:
    """Holds the authoritative JSON text and its persisted-contents record."""

    def __init__(self, content: str = "{}") -> None:
        self._json = content
        self.file = FileContents(contents=content)

    def get_json(self) -> str:
        return self._json

    def set_json(self, content: str) -> None:
        self._json = content

    def set_contents(
        self, contents: str, *, has_changes: bool, skip_update: bool = False
    ) -> None:
        self.file = FileContents(contents, has_changes, skip_update)


@dataclass
class SaveResult:
    ok: bool
    content: str
    message: str
    error: str = ""
    changed: bool = False


def save_node_edit(store: DocumentStore, node: NodeData, edited_text: str) -> SaveResult:
    """Merge ``edited_text`` into the node's document and commit it.

    The store is written only when the merged text parses as JSON.
    """
    current = store.get_json()
    edited_fields = parse_edited_text(edited_text)
    updated = update_json_by_path(current, node.path, edited_fields)

    try:
        load_json(updated)
    except ValueError as exc:
        _LOG.error("Error saving changes at %r: %s", node.path, exc)
        return SaveResult(False, current, SAVE_FAILED_MESSAGE, str(exc))

    # an unchanged result is still committed; the updater does not report no-ops
    changed = updated != current
    store.set_json(updated)
    store.set_contents(updated, has_changes=True, skip_update=False)
    _LOG.debug("Saved node %r (changed=%s)", node.path, changed)
    return SaveResult(True, updated, SAVE_OK_MESSAGE, changed=changed)
