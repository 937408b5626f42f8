"""Tree browser application with a node edit modal."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, Tree
from textual.widgets.tree import TreeNode

from ._jsonpath import load_json
from .modal import NodeModal
from .node import NodeNotFound, select_node
from .session import DocumentStore, SaveResult

# Data directory path
_DATA_DIR = Path(__file__).parent / "data"

_LOG = logging.getLogger(__name__)


def _load_data(filename: str) -> str:
    """Load content from data directory."""
    return (_DATA_DIR / filename).read_text(encoding="utf-8")


def _scalar_label(key: str, value: object) -> Text:
    label = Text(key, style="bold cyan")
    label.append(": ")
    if isinstance(value, str):
        label.append(json.dumps(value, ensure_ascii=False), style="green")
    elif value is None or isinstance(value, bool):
        label.append(json.dumps(value), style="magenta")
    else:
        label.append(json.dumps(value), style="yellow")
    return label


def _container_label(key: str, value: dict | list) -> Text:
    label = Text(key, style="bold cyan")
    if isinstance(value, dict):
        label.append(f" {{{len(value)}}}", style="dim")
    else:
        label.append(f" [{len(value)}]", style="dim")
    return label


def populate_tree(node: TreeNode, value: object, path: list[str | int]) -> None:
    """Add the children of ``value`` under ``node``; each node's data is its path."""
    if isinstance(value, dict):
        items: list[tuple[str | int, object]] = list(value.items())
    elif isinstance(value, list):
        items = list(enumerate(value))
    else:
        return

    for key, child in items:
        child_path = path + [key]
        label_key = f"[{key}]" if isinstance(key, int) else key
        if isinstance(child, (dict, list)):
            branch = node.add(_container_label(label_key, child), data=child_path)
            populate_tree(branch, child, child_path)
        else:
            node.add_leaf(_scalar_label(label_key, child), data=child_path)


class JsonNodeApp(App):
    """TUI app: browse a JSON document and edit one node at a time."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #tree {
        height: 1fr;
        border: solid $accent;
    }
    """

    TITLE = "JSON Node Editor"
    BINDINGS = [
        ("e", "edit_node", "Edit node"),
        ("ctrl+s", "save_file", "Save"),
        ("q", "quit", "Quit"),
    ]
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        file_path: str = "",
        initial_content: str = "{}",
        read_only: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.file_path = file_path
        self.read_only = read_only
        self.store = DocumentStore(initial_content)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Tree("$", data=[], id="tree")
        yield Footer()

    def on_mount(self) -> None:
        self._update_title()
        self._rebuild_tree()
        self.query_one("#tree").focus()

    def _update_title(self) -> None:
        ro = " [RO]" if self.read_only else ""
        modified = " [+]" if self.store.file.has_changes else ""
        self.sub_title = (self.file_path or "[sample]") + modified + ro

    def _rebuild_tree(self) -> None:
        tree = self.query_one("#tree", Tree)
        tree.clear()
        try:
            data = load_json(self.store.get_json())
        except ValueError as exc:
            self.notify(f"Invalid JSON: {exc}", severity="error", timeout=6)
            return
        populate_tree(tree.root, data, [])
        tree.root.expand()

    # -- Event handlers ----------------------------------------------------

    def action_edit_node(self) -> None:
        """Open the node modal for the node under the tree cursor."""
        cursor = self.query_one("#tree", Tree).cursor_node
        if cursor is None or cursor.data is None:
            return
        path = cursor.data
        try:
            node = select_node(self.store.get_json(), path)
        except NodeNotFound as exc:
            self.notify(f"Node not found: {exc.args[0]}", severity="error", timeout=6)
            return
        except ValueError as exc:
            self.notify(f"Invalid JSON: {exc}", severity="error", timeout=6)
            return

        # array elements are the editable nodes, not the array itself
        if node.type == "array":
            self.notify("Select an element of the array to edit", severity="warning")
            return

        self.push_screen(
            NodeModal(node, self.store, read_only=self.read_only),
            self._on_node_modal_dismissed,
        )

    def _on_node_modal_dismissed(self, result: SaveResult | None) -> None:
        if result is None:
            return
        self.notify(result.message, severity="information")
        self._update_title()
        self._rebuild_tree()

    def action_save_file(self) -> None:
        if self.read_only:
            self.notify("Read-only mode", severity="warning")
            return
        if not self.file_path:
            self.notify("No file name, pass a file on the command line", severity="warning")
            return

        content = self.store.get_json()
        try:
            path = Path(self.file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            _LOG.error("Save failed for %s: %s", self.file_path, exc)
            self.notify(f"Save failed: {exc}", severity="error", timeout=6)
            return
        self.store.set_contents(content, has_changes=False, skip_update=True)
        self._update_title()
        self.notify(f"Saved: {self.file_path}", severity="information")


def _configure_logging(log_file: str, debug: bool) -> None:
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler = TextualHandler()
    logger = logging.getLogger("jnode")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="jnode",
        description="Browse a JSON document and edit its nodes in Textual",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="",
        help="JSON file to open",
    )
    parser.add_argument(
        "-R", "--read-only",
        action="store_true",
        default=False,
        help="open in read-only mode",
    )
    parser.add_argument(
        "--log-file",
        default="",
        help="write log records to this file instead of the Textual console",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="log debug records",
    )
    args = parser.parse_args()

    _configure_logging(args.log_file, args.debug)

    file_path: str = args.file
    initial_content: str = _load_data("sample.json")

    if file_path:
        path = Path(file_path)
        try:
            # New file starts as an empty object
            initial_content = path.read_text(encoding="utf-8") if path.exists() else "{}"
        except OSError as exc:
            print(f"jnode: {exc}", file=sys.stderr)
            sys.exit(1)

    app = JsonNodeApp(
        file_path=file_path,
        initial_content=initial_content,
        read_only=args.read_only,
    )
    app.run()


if __name__ == "__main__":
    main()
