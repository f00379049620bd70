# component_tool/utils/output.py
"""Shared console and progress logging helpers"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.markup import escape

from ..constants import EMOJI_ERROR, EMOJI_WARNING

console = Console()

_INDENT_WIDTH = 2
_indent_level = 0


def _prefix() -> str:
    return " " * (_indent_level * _INDENT_WIDTH)


@contextmanager
def log_indent() -> Iterator[None]:
    """Indent every log line printed inside the block"""
    global _indent_level
    _indent_level += 1
    try:
        yield
    finally:
        _indent_level -= 1


def log_action(action: str, subject: str) -> None:
    """Print a progress line like `Deploying components`"""
    console.print(f"{_prefix()}[bold green]{escape(action)}[/bold green] {subject}")


def log_text(message: str = "") -> None:
    """Print a plain line at the current indentation"""
    console.print(f"{_prefix()}{message}" if message else "")


def log_warn(message: str) -> None:
    """Print a warning line"""
    console.print(f"{_prefix()}[yellow]{EMOJI_WARNING} Warning:[/yellow] {message}")


def log_error(message: str) -> None:
    """Print an error line"""
    console.print(f"{_prefix()}[red]{EMOJI_ERROR} Error:[/red] {message}")


def highlight(value: str) -> str:
    """Markup for names inside log lines"""
    return f"[bold cyan]{escape(str(value))}[/bold cyan]"
