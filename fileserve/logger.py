import logging
import os
from collections.abc import Generator
from contextlib import contextmanager

from rich.console import Console
from rich.highlighter import NullHighlighter
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

IN_CI = "CI" in os.environ
IN_PYTEST = "IN_PYTEST" in os.environ

COLOR_THEME = Theme(
    {
        "debug": "dim",
        "info": "",
        "warning": "bold yellow",
        "error": "bold red",
        "critical": "bold red",
    }
)


class CIAwareConsole(Console):
    @property
    def is_terminal(self) -> bool:
        """Check if the console is writing to a terminal."""
        return not IN_CI and not IN_PYTEST and super().is_terminal


class StdoutFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


class StderrFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.WARNING


class RichFormatter(logging.Formatter):
    """Colorize log messages based on log level.

    The message is escaped first: request paths may contain square brackets
    which rich would otherwise read as markup.
    """

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname.lower()
        message = escape(super().format(record))
        return f"[{levelname}]{message}[/{levelname}]"


console_stdout = CIAwareConsole(theme=COLOR_THEME)
console_stderr = CIAwareConsole(stderr=True, theme=COLOR_THEME)


def _make_handler(console: Console, log_filter: logging.Filter) -> RichHandler:
    handler = RichHandler(
        console=console,
        highlighter=NullHighlighter(),
        show_time=True,
        show_level=False,
        show_path=False,
        markup=True,
    )
    handler.setFormatter(RichFormatter("%(message)s"))
    handler.addFilter(log_filter)
    return handler


def _get_logger(log_level: int) -> logging.Logger:
    _logger = logging.getLogger("fileserve")
    _logger.setLevel(log_level)
    _logger.propagate = False

    _logger.addHandler(_make_handler(console_stdout, StdoutFilter()))
    _logger.addHandler(_make_handler(console_stderr, StderrFilter()))

    return _logger


logger = _get_logger(logging.INFO)


@contextmanager
def set_log_level(
    _logger: logging.Logger, log_level: int | bool
) -> Generator[None, None, None]:
    """Set the log level for the duration of the block.

    Parameters
    ----------
    _logger
        The logger to set the log level for.

    log_level
        If True, set the log level to DEBUG (verbose mode).
        If given an integer, set the log level to that value.
    """
    original_log_level = _logger.level

    if isinstance(log_level, bool):
        log_level = logging.DEBUG if log_level else original_log_level

    _logger.setLevel(log_level)
    try:
        yield
    finally:
        _logger.setLevel(original_log_level)
