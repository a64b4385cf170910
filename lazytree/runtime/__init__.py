"""Runtime wiring: config, logging, commands, terminal, loop, and bootstrap."""

from .app import BrowserOptions, TreeSession, build_session, finish_session, render_once, run_tree_browser
from .commands import TreeCommandContext, TreeCommands
from .file_ops import FileOperations

__all__ = [
    "BrowserOptions",
    "TreeSession",
    "build_session",
    "finish_session",
    "render_once",
    "run_tree_browser",
    "TreeCommandContext",
    "TreeCommands",
    "FileOperations",
]
