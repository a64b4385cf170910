"""Main interactive event loop for the terminal UI.

Coordinates resize detection, rendering, and input dispatch. Feature logic
lives in the injected callbacks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from ..input import read_key
from .terminal import TerminalController

IDLE_TIMEOUT_MS = 250

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[], list[str]]
    handle_key: Callable[[str], bool]
    resize: Callable[[int, int], None]
    should_quit: Callable[[], bool]


def run_main_loop(
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
    *,
    read: Callable[[int, int | None], str] = read_key,
    idle_timeout_ms: int = IDLE_TIMEOUT_MS,
) -> None:
    """Run until ``should_quit`` reports true.

    The screen is repainted after every key and after terminal resizes; idle
    timeouts only poll the terminal size.
    """
    last_size: tuple[int, int] | None = None
    dirty = True
    with terminal.raw_mode():
        while not callbacks.should_quit():
            size = terminal.size()
            if size != last_size:
                callbacks.resize(*size)
                last_size = size
                dirty = True
            if dirty:
                terminal.write_frame(callbacks.render())
                dirty = False

            key = read(stdin_fd, idle_timeout_ms)
            if not key:
                continue
            handled = callbacks.handle_key(key)
            logger.debug("key_dispatched", key=key, handled=handled)
            dirty = True
