"""Tests for the node save flow and the node modal."""

import json

from jnode.modal import NodeModal
from jnode.node import FieldRow, NodeData, select_node
from jnode.session import (
    SAVE_FAILED_MESSAGE,
    SAVE_OK_MESSAGE,
    DocumentStore,
    FileContents,
    save_node_edit,
)


class TestDocumentStore:
    """Document text and persisted-contents record."""

    def test_initial(self):
        store = DocumentStore('{"a": 1}')
        assert store.get_json() == '{"a": 1}'
        assert store.file == FileContents('{"a": 1}', False, False)

    def test_set_contents(self):
        store = DocumentStore()
        store.set_contents("{}", has_changes=True)
        assert store.file.has_changes is True
        assert store.file.skip_update is False


class TestSaveNodeEdit:
    """Parse, merge, re-validate, commit."""

    def test_success_commits(self):
        store = DocumentStore('{"x": {"a": 1, "nested": {"z": 9}}}')
        node = select_node(store.get_json(), ["x"])
        result = save_node_edit(store, node, '{\n  "a": 2\n}')

        assert result.ok
        assert result.changed
        assert result.message == SAVE_OK_MESSAGE
        assert json.loads(store.get_json()) == {"x": {"a": 2, "nested": {"z": 9}}}
        assert store.file.contents == store.get_json()
        assert store.file.has_changes is True
        assert store.file.skip_update is False

    def test_raw_text_replaces_scalar(self):
        store = DocumentStore('{"name": "Ada"}')
        node = select_node(store.get_json(), ["name"])
        result = save_node_edit(store, node, "Grace Hopper")

        assert result.ok
        assert json.loads(store.get_json()) == {"name": "Grace Hopper"}

    def test_malformed_document_not_committed(self):
        store = DocumentStore('{"a": ')
        node = NodeData(rows=[FieldRow("a", 1, "number")], path=["a"])
        result = save_node_edit(store, node, '{"a": 2}')

        assert not result.ok
        assert result.message == SAVE_FAILED_MESSAGE
        assert result.error
        assert store.get_json() == '{"a": '
        assert store.file.has_changes is False

    def test_path_conflict_is_unchanged(self):
        store = DocumentStore('{"a": 1}')
        node = NodeData(rows=[], path=["a", "b", "c"])
        result = save_node_edit(store, node, '{"v": 1}')

        assert result.ok
        assert not result.changed
        assert store.get_json() == '{"a": 1}'

    def test_nan_text_stored_as_string(self):
        store = DocumentStore('{"score": 1}')
        node = select_node(store.get_json(), ["score"])
        result = save_node_edit(store, node, "NaN")

        assert result.ok
        assert json.loads(store.get_json()) == {"score": "NaN"}

    def test_nan_document_not_committed(self):
        store = DocumentStore('{"a": NaN, "b": 1}')
        node = NodeData(rows=[FieldRow(None, 1, "number")], path=["b"])
        result = save_node_edit(store, node, "2")

        assert not result.ok
        assert store.get_json() == '{"a": NaN, "b": 1}'
        assert store.file.has_changes is False

    def test_number_over_object_keeps_children(self):
        store = DocumentStore('{"x": {"a": 1, "n": {"z": 9}}}')
        node = select_node(store.get_json(), ["x"])
        result = save_node_edit(store, node, "5")

        assert result.ok
        assert json.loads(store.get_json()) == {"x": {"a": 1, "n": {"z": 9}}}

    def test_root_replace(self):
        store = DocumentStore('{"a": 1}')
        node = select_node(store.get_json(), [])
        result = save_node_edit(store, node, '{"b": 2}')

        assert result.ok
        assert store.get_json() == '{\n  "b": 2\n}'


class TestNodeModal:
    """Modal state before mounting."""

    def test_initial_value(self):
        node = NodeData(
            rows=[FieldRow("id", 1, "number"), FieldRow("tags", 2, "array")],
            path=["customer", 0],
        )
        modal = NodeModal(node, DocumentStore())
        assert modal.edited_value == '{\n  "id": 1\n}'
        assert modal.path_text == '$["customer"][0]'
        assert modal.editing is False

    def test_scalar_node(self):
        node = NodeData(rows=[FieldRow(None, "hello", "string")], path=["greeting"], type="string")
        modal = NodeModal(node, DocumentStore(), read_only=True)
        assert modal.edited_value == "hello"
        assert modal.read_only is True

    def test_root_save_needs_confirmation(self):
        modal = NodeModal(NodeData(rows=[], path=[]), DocumentStore())
        assert modal.confirm_root_save() is False
        assert modal.confirm_root_save() is True

    def test_non_root_save_not_confirmed(self):
        node = NodeData(rows=[FieldRow("a", 1, "number")], path=["x"])
        modal = NodeModal(node, DocumentStore())
        assert modal.confirm_root_save() is True
