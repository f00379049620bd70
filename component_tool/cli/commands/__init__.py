# component_tool/cli/commands/__init__.py
"""CLI commands"""

from . import component

__all__ = [
    "component",
]
