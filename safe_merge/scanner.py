"""Folder walking and content hashing."""

import hashlib
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import xxhash

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS = ("xxh64", "md5")


def _long_path(path: Path) -> str:
    """Convert path to long path format on Windows to handle paths > 260 chars."""
    path_str = str(path.resolve())
    if os.name == 'nt' and not path_str.startswith('\\\\?\\'):
        return '\\\\?\\' + path_str
    return path_str


def _new_hasher(algorithm: str):
    if algorithm == "xxh64":
        return xxhash.xxh64()
    if algorithm == "md5":
        # Change detection only, not security.
        return hashlib.md5(usedforsecurity=False)
    raise ValueError(
        f"Unsupported hash algorithm: {algorithm} (expected one of {', '.join(SUPPORTED_ALGORITHMS)})"
    )


def compute_file_hash(file_path: Path, algorithm: str = "xxh64", chunk_size: int = 65536) -> str:
    """Compute the lowercase hex digest of a file's full contents."""
    hasher = _new_hasher(algorithm)
    # Use long path format on Windows for paths > 260 chars
    with open(_long_path(Path(file_path)), 'rb') as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest()


@dataclass(frozen=True)
class TreeEntry:
    """A filesystem entry visited during a walk."""
    relative_path: str
    absolute_path: str
    is_dir: bool
    mode: int


def _entry(root: str, relative_path: str) -> TreeEntry:
    absolute_path = os.path.join(root, relative_path) if relative_path else root
    st = os.lstat(absolute_path)
    return TreeEntry(
        relative_path=relative_path,
        absolute_path=absolute_path,
        is_dir=stat.S_ISDIR(st.st_mode),
        mode=st.st_mode,
    )


def walk_tree(root: str | os.PathLike) -> Iterator[TreeEntry]:
    """
    Walk a folder top-down in pre-order.

    The root itself comes first (with an empty relative path), then the
    entries of each directory in lexical order, every directory immediately
    followed by its own contents. Symlinks are not followed.

    Raises:
        OSError: if any entry cannot be listed or statted.
    """
    root = os.fspath(root)
    stack = [_entry(root, "")]
    while stack:
        entry = stack.pop()
        yield entry
        if not entry.is_dir:
            continue
        names = sorted(os.listdir(entry.absolute_path))
        logger.debug("Listing %s (%d entries)", entry.absolute_path, len(names))
        children = [
            _entry(root, os.path.join(entry.relative_path, name) if entry.relative_path else name)
            for name in names
        ]
        # Reversed so the lexically first child is popped next
        stack.extend(reversed(children))
