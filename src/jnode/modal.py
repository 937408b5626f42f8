"""Modal dialog for viewing and editing one JSON node."""

from __future__ import annotations

from rich.syntax import Syntax
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Static, TextArea

from ._jsonpath import format_path
from .node import NodeData, normalize_node
from .session import DocumentStore, SaveResult, save_node_edit


class NodeModal(ModalScreen[SaveResult | None]):
    """Shows a node's flat fields and JSON path; Edit/Save writes them back.

    Dismisses with the SaveResult of a successful save, or None when closed.
    """

    DEFAULT_CSS = """
    NodeModal {
        align: center middle;
    }
    #node-dialog {
        width: 80;
        max-width: 90%;
        height: auto;
        max-height: 90%;
        border: thick $accent;
        background: $surface;
        padding: 0 1;
    }
    .node-header {
        height: auto;
    }
    .node-label {
        width: 1fr;
        text-style: bold;
    }
    #content-view {
        max-height: 15;
        height: auto;
    }
    #content-edit {
        height: 15;
    }
    #path-view {
        height: auto;
    }
    #node-buttons {
        height: auto;
        align-horizontal: right;
        margin-top: 1;
    }
    .hidden {
        display: none;
    }
    """

    BINDINGS = [("escape", "close", "Close")]

    def __init__(
        self,
        node: NodeData,
        store: DocumentStore,
        *,
        read_only: bool = False,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.node = node
        self.store = store
        self.read_only = read_only
        self.editing: bool = False
        self.edited_value: str = normalize_node(node.rows)
        self.path_text: str = format_path(node.path)
        self.root_save_confirmed: bool = False

    def compose(self) -> ComposeResult:
        with Vertical(id="node-dialog"):
            with Horizontal(classes="node-header"):
                yield Static("Content", classes="node-label")
                yield Button("Copy", id="copy-content")
                yield Button("✕", id="close", variant="error")
            with VerticalScroll(id="content-view"):
                yield Static(self._highlight(self.edited_value), id="content-code")
            yield TextArea(self.edited_value, id="content-edit", classes="hidden")
            with Horizontal(classes="node-header"):
                yield Static("JSON Path", classes="node-label")
                yield Button("Copy", id="copy-path")
            yield Static(self._highlight(self.path_text), id="path-view")
            with Horizontal(id="node-buttons"):
                yield Button("Cancel", id="cancel", classes="hidden")
                yield Button("Save", id="save", variant="success", classes="hidden")
                yield Button("Edit", id="edit", variant="primary", disabled=self.read_only)

    @staticmethod
    def _highlight(code: str) -> Syntax:
        return Syntax(code, "json", theme="monokai", word_wrap=True)

    # -- Mode switching ----------------------------------------------------

    def _set_editing(self, editing: bool) -> None:
        self.editing = editing
        self.query_one("#content-view").set_class(editing, "hidden")
        self.query_one("#content-edit").set_class(not editing, "hidden")
        self.query_one("#cancel").set_class(not editing, "hidden")
        self.query_one("#save").set_class(not editing, "hidden")
        self.query_one("#edit").set_class(editing, "hidden")
        if editing:
            self.query_one("#content-edit", TextArea).focus()

    def _show_value(self, value: str) -> None:
        self.edited_value = value
        self.query_one("#content-code", Static).update(self._highlight(value))
        self.query_one("#content-edit", TextArea).load_text(value)

    # -- Event handlers ----------------------------------------------------

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.editing:
            self.edited_value = event.text_area.text

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "edit":
            self._set_editing(True)
        elif button_id == "cancel":
            self.root_save_confirmed = False
            self._show_value(normalize_node(self.node.rows))
            self._set_editing(False)
        elif button_id == "save":
            self._save()
        elif button_id == "copy-content":
            self.app.copy_to_clipboard(self.edited_value)
            self.notify("Copied to clipboard", severity="information")
        elif button_id == "copy-path":
            self.app.copy_to_clipboard(self.path_text)
            self.notify("Copied to clipboard", severity="information")
        elif button_id == "close":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)

    def confirm_root_save(self) -> bool:
        """Return True once a save may go ahead.

        Saving the root replaces the whole document, so the first Save on the
        root only arms the confirmation.
        """
        if self.node.path or self.root_save_confirmed:
            return True
        self.root_save_confirmed = True
        return False

    def _save(self) -> None:
        if not self.confirm_root_save():
            self.notify(
                "Saving the root replaces the whole document. Press Save again to confirm.",
                severity="warning",
                timeout=6,
            )
            return
        result = save_node_edit(self.store, self.node, self.edited_value)
        if not result.ok:
            self.notify(result.message, severity="error", timeout=6)
            return
        self._set_editing(False)
        self.dismiss(result)
