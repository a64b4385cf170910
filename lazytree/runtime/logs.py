"""Structured logging setup.

The terminal belongs to the TUI, so log records never go to stdout/stderr
while a session runs: everything is rendered as JSON lines into a log file.
``-v`` lowers the threshold from WARNING to INFO, ``-vv`` to DEBUG.
"""

from __future__ import annotations

import logging
from pathlib import Path

import structlog
from platformdirs import user_log_dir

APP_NAME = "lazytree"
LOG_FILENAME = "lazytree.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def verbose_to_level(verbose: int) -> int:
    levels = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    return levels.get(verbose, logging.DEBUG)


def configure_logging(log_file: Path | None = None, verbose: int = 0) -> Path | None:
    """Route structlog and stdlib logging into a JSON log file.

    Returns the log path in use, or ``None`` when the file could not be
    opened (logging is then disabled rather than written to the terminal).
    """
    logging.root.handlers.clear()
    structlog.reset_defaults()
    level = verbose_to_level(verbose)
    logging.root.setLevel(level)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    path = Path(log_file) if log_file is not None else DEFAULT_LOG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(str(path), encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
        path = None
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=shared_processors,
        )
    )
    logging.root.addHandler(handler)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return path
