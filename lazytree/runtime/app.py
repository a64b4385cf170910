"""Tree browser session bootstrap and teardown.

Builds the index from the persisted cache, opens a cursor on the start
directory, wires commands, mouse handling, and the pane renderer, then either
runs the interactive loop or renders a single frame.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import structlog

from ..errors import IndexSaveError
from ..input import ABORT_KEYS, is_mouse_key, read_key
from ..navigation import NavigationCursor, TraversalMode
from ..tree_index import TreeIndex, load_index, save_index
from ..tree_pane import ASCII_GLYPHS, UNICODE_GLYPHS, TreeGlyphs, TreeMouseHandler, TreePane, TreeViewLayout
from ..ui_theme import get_theme
from .commands import TreeCommandContext, TreeCommands
from .config import TreeSettings, load_settings, save_navigation_mode
from .dialogs import StatusLineDialogs
from .file_ops import FileOperations
from .loop import RuntimeLoopCallbacks, run_main_loop
from .terminal import TerminalController

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BrowserOptions:
    """Resolved command-line options for one browser run.

    ``navigation_mode``/``theme_name`` override persisted settings when set.
    """

    start_path: str
    is_panel: bool = False
    navigation_mode: TraversalMode | None = None
    cache_path: Path | None = None
    theme_name: str | None = None


def default_glyphs(encoding: str | None = None) -> TreeGlyphs:
    """Box-drawing glyphs when the output encoding can carry them."""
    name = (encoding if encoding is not None else sys.stdout.encoding) or ""
    return UNICODE_GLYPHS if "utf" in name.lower() else ASCII_GLYPHS


class TreeSession:
    """One open tree view: index, cursor, commands, pane, and mouse handling."""

    def __init__(
        self,
        index: TreeIndex,
        cursor: NavigationCursor,
        commands: TreeCommands,
        pane: TreePane,
    ) -> None:
        self.index = index
        self.cursor = cursor
        self.commands = commands
        self.pane = pane
        self.aborted = False
        self.mouse = TreeMouseHandler(
            cursor=cursor,
            layout=lambda: self.pane.layout,
            execute=commands.execute,
        )

    @property
    def closed(self) -> bool:
        return self.commands.closed or self.aborted

    @property
    def result_path(self) -> str | None:
        return None if self.aborted else self.commands.result_path

    def handle_key(self, key: str) -> bool:
        """Route one key token; an unhandled abort closes a modal view."""
        commands = self.commands
        commands.message = ""
        if is_mouse_key(key):
            if commands.help_visible:
                commands.help_visible = False
                return True
            return self.mouse.handle(key)
        handled = commands.handle_key(key)
        if not handled and key in ABORT_KEYS and not self.cursor.is_panel:
            self.aborted = True
            return True
        return handled

    def resize(self, rows: int, cols: int) -> None:
        self.pane.resize(rows, cols)
        self.cursor.set_window_height(self.pane.layout.tree_lines)

    def render(self, message: str | None = None) -> list[str]:
        lines, _frame = self.pane.render(
            self.cursor,
            message=self.commands.message if message is None else message,
            help_visible=self.commands.help_visible,
        )
        return lines

    def close(self) -> None:
        self.cursor.close()


def build_session(
    options: BrowserOptions,
    rows: int,
    cols: int,
    *,
    settings: TreeSettings | None = None,
    index: TreeIndex | None = None,
    context: TreeCommandContext | None = None,
    glyphs: TreeGlyphs | None = None,
) -> TreeSession:
    """Create a session whose selection is the start directory."""
    active = settings if settings is not None else load_settings()
    if index is None:
        index = load_index(options.cache_path, show_hidden=active.show_hidden)
    start = os.path.abspath(options.start_path)
    index.add(start)
    index.rescan(start)

    layout = TreeViewLayout(rows=rows, cols=cols, is_panel=options.is_panel, show_mini_info=active.show_mini_info)
    mode = options.navigation_mode if options.navigation_mode is not None else active.navigation_mode
    cursor = NavigationCursor(index, layout.tree_lines, traversal_mode=mode, is_panel=options.is_panel)
    cursor.select_path(start)

    if context is None:
        context = TreeCommandContext(
            file_ops=FileOperations(),
            confirm_delete=active.confirm_delete,
            xtree_mode=active.xtree_mode,
            on_mode_changed=save_navigation_mode,
        )
    commands = TreeCommands(cursor, context)
    theme = get_theme(options.theme_name if options.theme_name is not None else active.theme)
    pane = TreePane(layout, theme=theme, glyphs=glyphs if glyphs is not None else default_glyphs())
    logger.info(
        "tree_session_started",
        start=start,
        panel=options.is_panel,
        mode=mode.value,
        entries=len(index),
    )
    return TreeSession(index, cursor, commands, pane)


def finish_session(session: TreeSession, cache_path: Path | None = None) -> None:
    """Detach the cursor and persist the index; save failures go to stderr."""
    session.close()
    try:
        save_index(session.index, cache_path)
    except IndexSaveError as exc:
        logger.error("tree_cache_save_failed", path=str(exc.path), reason=exc.reason)
        print(str(exc), file=sys.stderr)


def render_once(options: BrowserOptions, rows: int, cols: int, *, settings: TreeSettings | None = None) -> list[str]:
    """Render one frame for the start directory without touching the terminal."""
    session = build_session(options, rows, cols, settings=settings)
    try:
        return session.render()
    finally:
        finish_session(session, options.cache_path)


def run_tree_browser(options: BrowserOptions) -> str | None:
    """Run the interactive browser; return the chosen path of a modal view.

    ``None`` means the view was aborted, quit, or ran in panel mode.
    """
    stdin_fd = sys.stdin.fileno()
    # Draw on stderr when stdout is captured, as in cd "$(lazytree)".
    stdout_fd = sys.stdout.fileno() if sys.stdout.isatty() else sys.stderr.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    rows, cols = terminal.size()
    settings = load_settings()

    holder: list[TreeSession] = []

    def show(text: str) -> None:
        terminal.write_frame(holder[0].render(message=text))

    dialogs = StatusLineDialogs(read_key=lambda: read_key(stdin_fd), show=show)
    context = TreeCommandContext(
        file_ops=FileOperations(),
        prompt=dialogs.prompt,
        confirm=dialogs.confirm,
        confirm_delete=settings.confirm_delete,
        xtree_mode=settings.xtree_mode,
        on_mode_changed=save_navigation_mode,
    )
    session = build_session(options, rows, cols, settings=settings, context=context)
    holder.append(session)
    try:
        run_main_loop(
            terminal,
            stdin_fd,
            RuntimeLoopCallbacks(
                render=session.render,
                handle_key=session.handle_key,
                resize=session.resize,
                should_quit=lambda: session.closed,
            ),
        )
    finally:
        finish_session(session, options.cache_path)
    result = session.result_path
    logger.info("tree_session_finished", result=result, aborted=session.aborted)
    return result
