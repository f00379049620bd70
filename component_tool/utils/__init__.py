# component_tool/utils/__init__.py
"""Utility functions for component-tool"""

from .async_utils import run_async, best_effort
from .file_utils import ensure_directory, newest_mtime, read_file_bytes, format_size
from .output import (
    console,
    highlight,
    log_action,
    log_error,
    log_indent,
    log_text,
    log_warn,
)

__all__ = [
    "run_async",
    "best_effort",
    "ensure_directory",
    "newest_mtime",
    "read_file_bytes",
    "format_size",
    "console",
    "highlight",
    "log_action",
    "log_error",
    "log_indent",
    "log_text",
    "log_warn",
]
