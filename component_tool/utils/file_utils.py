# component_tool/utils/file_utils.py
"""File operation utilities"""

import os
from pathlib import Path
from typing import Iterable, Optional, Union

import aiofiles

from ..constants import DEFAULT_CHUNK_SIZE


def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure directory exists, create if not

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def newest_mtime(paths: Iterable[Path], exclude: Optional[Iterable[Path]] = None) -> float:
    """Get the newest modification time of all files under the given paths

    Args:
        paths: Files or directories to scan
        exclude: Directories to skip while scanning

    Returns:
        Newest mtime, 0.0 if no file exists
    """
    excluded = [p.resolve() for p in (exclude or [])]
    newest = 0.0

    for path in paths:
        if path.is_file():
            newest = max(newest, path.stat().st_mtime)
            continue
        if not path.is_dir():
            continue
        for root, dirs, files in os.walk(path):
            root_path = Path(root).resolve()
            dirs[:] = [d for d in dirs if (root_path / d) not in excluded and not d.startswith(".")]
            for file_name in files:
                newest = max(newest, (root_path / file_name).stat().st_mtime)

    return newest


async def read_file_bytes(path: Path) -> bytes:
    """Read a whole file without blocking the event loop

    Args:
        path: File to read

    Returns:
        File content
    """
    chunks = []
    async with aiofiles.open(path, 'rb') as src:
        while True:
            chunk = await src.read(DEFAULT_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def format_size(size_bytes: Optional[int]) -> str:
    """Format file size in human-readable format"""
    if not size_bytes:
        return "0B"

    units = ['B', 'KB', 'MB', 'GB', 'TB']
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    return f"{size:.1f}{units[unit_index]}"
