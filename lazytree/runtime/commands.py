"""Command dispatch for the tree view.

``TreeCommands`` maps command names and key tokens onto cursor, search, index,
and file-operation calls. It owns the Idle/Searching key state machine and is
the boundary where collaborator failures become status-line messages.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from ..errors import ExternalOperationFailure, LazyTreeError
from ..input.key_registry import KeyRegistry
from ..input.keys import ABORT_KEYS, default_key_registry, is_printable_key
from ..navigation import IncrementalSearch, NavigationCursor, TraversalMode
from .file_ops import FileOperations

logger = structlog.get_logger(__name__)


def _never_confirmed(_question: str) -> bool:
    return False


def _no_destination(_label: str, _initial: str = "") -> str | None:
    return None


@dataclass(frozen=True)
class TreeCommandContext:
    """External collaborators bound into ``TreeCommands``.

    ``prompt``/``confirm`` default to refusing, so destructive commands are
    inert unless the runtime wires real dialogs.
    ``xtree_mode`` makes a panel follow every move and search with a
    working-directory change.
    """

    file_ops: FileOperations
    prompt: Callable[..., str | None] = _no_destination
    confirm: Callable[[str], bool] = _never_confirmed
    confirm_delete: bool = True
    xtree_mode: bool = False
    on_mode_changed: Callable[[TraversalMode], None] | None = None


class TreeCommands:
    """Execute named tree commands against one cursor."""

    def __init__(
        self,
        cursor: NavigationCursor,
        context: TreeCommandContext,
        *,
        registry: KeyRegistry | None = None,
    ) -> None:
        self.cursor = cursor
        self.search = IncrementalSearch(cursor)
        self.context = context
        self.registry = registry if registry is not None else default_key_registry()
        self.message = ""
        self.help_visible = False
        self.result_path: str | None = None
        self.closed = False
        self._handlers: dict[str, Callable[[], bool]] = {
            "goto_up": self.goto_up,
            "goto_down": self.goto_down,
            "goto_left": self.goto_left,
            "goto_right": self.goto_right,
            "goto_page_up": self.goto_page_up,
            "goto_page_down": self.goto_page_down,
            "goto_home": self.goto_home,
            "goto_end": self.goto_end,
            "enter": self.enter,
            "rescan": self.rescan,
            "search_begin": self.search_begin,
            "delete": self.delete,
            "copy": self.copy,
            "move": self.move,
            "forget": self.forget,
            "toggle_navigation_mode": self.toggle_navigation_mode,
            "help": self.toggle_help,
            "quit": self.quit,
        }

    def execute(self, name: str) -> bool:
        """Run command ``name``; return whether it was handled.

        Any command other than ``search_begin`` leaves searching mode first.
        Collaborator failures are reported through ``message``.
        """
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug("unknown_command", command=name)
            return False
        if name != "search_begin":
            self.search.end()
        try:
            return handler()
        except ExternalOperationFailure as exc:
            self.message = str(exc)
            logger.warning("tree_command_failed", command=name, error=str(exc))
            return True
        except LazyTreeError as exc:
            self.message = str(exc)
            logger.error("tree_command_error", command=name, error=str(exc))
            return True

    def chdir(self, path: str) -> bool:
        """Follow an external working-directory change by selecting ``path``."""
        cursor = self.cursor
        if cursor.index.lookup(path) is None:
            cursor.index.add(path)
        return cursor.select_path(path)

    def handle_key(self, key: str) -> bool:
        """Feed one key token through the state machine; ``False`` if not handled."""
        cursor = self.cursor
        if key in ABORT_KEYS:
            if cursor.is_panel:
                self.search.end()
                self.help_visible = False
                return True
            # A modal view lets its owner see the abort and close.
            return False

        if self.help_visible:
            self.help_visible = False
            return True

        if cursor.is_searching and (is_printable_key(key) or key == "BACKSPACE"):
            self._search_input(key)
            return True

        handled = self.registry.dispatch(key, self.execute)
        if handled is not None:
            return handled

        if is_printable_key(key) or key == "BACKSPACE":
            self.search.begin()
            self._search_input(key)
            return True
        return False

    def _search_input(self, key: str) -> None:
        self.message = ""
        if key == "BACKSPACE":
            self.search.backspace()
        else:
            self.search.type_char(key)
        self._follow_selection()

    def _follow_selection(self) -> None:
        """Change the working directory to the selection in an xtree-mode panel."""
        selected = self.cursor.selected
        if not (self.context.xtree_mode and self.cursor.is_panel) or selected is None:
            return
        try:
            self.context.file_ops.change_directory(selected.path)
        except ExternalOperationFailure as exc:
            self.message = str(exc)
            logger.warning("follow_selection_failed", path=selected.path, error=str(exc))

    def _page_size(self) -> int:
        return max(1, self.cursor.window_height - 1)

    def goto_up(self) -> bool:
        self.cursor.move_backward(1)
        self._follow_selection()
        return True

    def goto_down(self) -> bool:
        self.cursor.move_forward(1)
        self._follow_selection()
        return True

    def goto_left(self) -> bool:
        if self.cursor.traversal_mode is not TraversalMode.HIERARCHICAL:
            return False
        if not self.cursor.move_to_parent():
            return False
        self._follow_selection()
        return True

    def goto_right(self) -> bool:
        if self.cursor.traversal_mode is not TraversalMode.HIERARCHICAL:
            return False
        if not self.cursor.move_to_child():
            return False
        self._follow_selection()
        return True

    def goto_page_up(self) -> bool:
        self.cursor.move_backward(self._page_size())
        self._follow_selection()
        return True

    def goto_page_down(self) -> bool:
        self.cursor.move_forward(self._page_size())
        self._follow_selection()
        return True

    def goto_home(self) -> bool:
        self.cursor.move_to_top()
        self._follow_selection()
        return True

    def goto_end(self) -> bool:
        self.cursor.move_to_bottom()
        self._follow_selection()
        return True

    def enter(self) -> bool:
        selected = self.cursor.selected
        if selected is None:
            return True
        if self.cursor.is_panel:
            self.context.file_ops.change_directory(selected.path)
            self.message = f"Current directory: {selected.path}"
            return True
        self.result_path = selected.path
        self.closed = True
        return True

    def rescan(self) -> bool:
        selected = self.cursor.selected
        if selected is None:
            return True
        result = self.cursor.index.rescan(selected.path)
        if result.error is not None:
            self.message = f"Cannot rescan {result.path}: {result.error}"
        return True

    def search_begin(self) -> bool:
        if self.cursor.is_searching:
            self.search.search_next()
            self._follow_selection()
        else:
            self.search.begin()
        return True

    def forget(self) -> bool:
        selected = self.cursor.selected
        if selected is not None:
            self.cursor.index.remove(selected.path)
        return True

    def delete(self) -> bool:
        selected = self.cursor.selected
        if selected is None:
            return True
        path = selected.path
        if self.context.confirm_delete and not self.context.confirm(f"Delete {path}?"):
            return True
        self.context.file_ops.delete_dir(path)
        self.cursor.index.remove(path)
        self.message = f"Deleted {path}"
        return True

    def copy(self) -> bool:
        return self._transfer("copy")

    def move(self) -> bool:
        return self._transfer("move")

    def _transfer(self, kind: str) -> bool:
        selected = self.cursor.selected
        if selected is None:
            return True
        source = selected.path
        label = "Copy" if kind == "copy" else "Move"
        destination = self.context.prompt(f"{label} {source} to:", "")
        if destination is None:
            return True
        file_ops = self.context.file_ops
        if kind == "copy":
            target = file_ops.copy_dir(source, destination)
        else:
            target = file_ops.move_dir(source, destination)
            self.cursor.index.remove(source)
        index = self.cursor.index
        if index.lookup(destination) is not None:
            index.rescan(destination)
        self.message = f"{label} {source} -> {target}"
        return True

    def toggle_navigation_mode(self) -> bool:
        mode = self.cursor.toggle_traversal_mode()
        if self.context.on_mode_changed is not None:
            self.context.on_mode_changed(mode)
        return True

    def toggle_help(self) -> bool:
        self.help_visible = not self.help_visible
        return True

    def quit(self) -> bool:
        self.closed = True
        return True
