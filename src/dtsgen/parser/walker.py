"""Recursive enumeration of descriptor files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from dtsgen.exceptions import IOError_


def walk_files(root: str | Path) -> list[Path]:
    """Return absolute paths of every regular file under *root*.

    Subdirectories are descended recursively. Entries appear in the order
    the operating system lists them, which is not necessarily sorted.
    Symlinks, sockets, devices and other non-regular entries are skipped;
    symlinked directories are not followed.

    Args:
        root: Directory to scan.

    Returns:
        Absolute file paths.

    Raises:
        IOError_: If *root* does not exist, is not a directory, or a
            directory in the tree cannot be listed.
    """
    root_path = Path(root).absolute()
    if not root_path.exists():
        raise IOError_(f"Source directory not found: {root_path}", path=root_path)
    if not root_path.is_dir():
        raise IOError_(f"Source path is not a directory: {root_path}", path=root_path)
    return list(_walk(root_path))


def iter_descriptor_files(root: str | Path, suffix: str) -> Iterator[Path]:
    """Yield the files under *root* whose name ends with *suffix*."""
    for path in walk_files(root):
        if path.name.endswith(suffix):
            yield path


def _walk(directory: Path) -> Iterator[Path]:
    try:
        with os.scandir(directory) as entries:
            listing = list(entries)
    except OSError as exc:
        raise IOError_(f"Cannot read directory {directory}: {exc}", path=directory) from exc

    for entry in listing:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(Path(entry.path))
        elif entry.is_file(follow_symlinks=False):
            yield Path(entry.path)
