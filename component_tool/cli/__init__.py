"""Command line interface for component-tool"""

from .main import cli, main

__all__ = ["cli", "main"]
