"""Utility helpers for walking the documentation tree and normalizing paths."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path, PurePosixPath
from typing import Iterator

LOGGER = logging.getLogger(__name__)

_RELATIVE_PREFIX = re.compile(r"^(?:\.\.?/)+")


def iter_document_paths(root: Path, *, extension: str = ".md") -> Iterator[Path]:
    """Yield document files under ``root`` in a stable, sorted order.

    The root itself must be listable; any ``OSError`` raised for it propagates.
    Unreadable subdirectories are logged and skipped. Symlinks are followed,
    with already visited directories skipped to break cycles.
    """
    root = Path(root)
    with os.scandir(root) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    visited = {os.path.realpath(root)}
    yield from _walk_entries(children, extension, visited)


def _walk_entries(entries: list[os.DirEntry], extension: str, visited: set[str]) -> Iterator[Path]:
    for entry in entries:
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            LOGGER.warning("Could not stat %s: %s", entry.path, exc)
            continue

        if is_dir:
            real = os.path.realpath(entry.path)
            if real in visited:
                continue
            visited.add(real)
            try:
                with os.scandir(entry.path) as children:
                    nested = sorted(children, key=lambda child: child.name)
            except OSError as exc:
                LOGGER.warning("Could not read directory %s: %s", entry.path, exc)
                continue
            yield from _walk_entries(nested, extension, visited)
        elif is_file and entry.name.endswith(extension):
            yield Path(entry.path)


def relative_document_path(root: Path, path: Path) -> str:
    """Corpus key for ``path``: POSIX-style and relative to ``root``."""
    return Path(path).relative_to(root).as_posix()


def normalize_reference(reference: str, root: Path) -> str:
    """Turn a ``related`` entry or link target into a corpus key.

    Absolute paths are made relative to ``root``; leading ``./`` and ``../``
    segments are stripped; a trailing ``#fragment`` is dropped.
    """
    target = reference.strip().split("#", 1)[0].replace("\\", "/")
    if not target:
        return ""
    if os.path.isabs(target):
        try:
            return Path(target).relative_to(root).as_posix()
        except ValueError:
            return PurePosixPath(os.path.relpath(target, root)).as_posix()
    return _RELATIVE_PREFIX.sub("", target)
