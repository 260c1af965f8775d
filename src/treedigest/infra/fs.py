from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin abstraction over ``os`` used by the hashing core: entry classification,
one-level directory enumeration, directory identity for cycle checks, and
the absolute path shown to users.
"""

import enum
import logging
import os
import stat
from typing import List, Tuple

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# ENTRY CLASSIFICATION
# -----------------------------------------------------------------------------

class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"
    MISSING = "missing"


DirectoryIdentity = Tuple[int, int]


def classify_path(path: str, follow_symlinks: bool = True) -> EntryKind:
    """
    Determine the kind of a filesystem entry.

    A path that cannot be stat'ed (vanished, dangling link, symlink loop)
    is reported as MISSING rather than raising.

    Args:
        path: Path string to inspect.
        follow_symlinks: Inspect the link target instead of the link itself.

    Returns:
        EntryKind: Classification of the entry.
    """
    try:
        st = os.stat(path, follow_symlinks=follow_symlinks)
    except OSError as e:
        logger.debug(f"Cannot stat '{path}': {e}")
        return EntryKind.MISSING
    return _kind_from_mode(st.st_mode)


def list_directory(path: str, follow_symlinks: bool = True) -> List[Tuple[str, EntryKind]]:
    """
    Enumerate the immediate children of a directory.

    Child paths are built by joining the directory path string with the
    entry name, so they extend the caller's literal path form. The listing
    order is whatever the OS yields. The directory handle is closed before
    returning.

    Args:
        path: Directory to enumerate.
        follow_symlinks: Classify children after following symbolic links.

    Returns:
        List[Tuple[str, EntryKind]]: (child path, kind) pairs.

    Raises:
        OSError: If the directory cannot be listed.
    """
    children: List[Tuple[str, EntryKind]] = []
    with os.scandir(path) as it:
        for entry in it:
            children.append((entry.path, _entry_kind(entry, follow_symlinks)))
    return children


def directory_identity(path: str) -> DirectoryIdentity:
    """Return the (device, inode) pair identifying the resolved directory."""
    st = os.stat(path)
    return st.st_dev, st.st_ino


# -----------------------------------------------------------------------------
# PATH DISPLAY
# -----------------------------------------------------------------------------

def resolve_display_path(path: str) -> str:
    """
    Produce the absolute, symlink-resolved form of a path for display.

    Args:
        path: Raw input path string.

    Returns:
        str: Canonical absolute path.
    """
    return os.path.realpath(path)


def path_exists(path: str) -> bool:
    """True if the path exists (following symbolic links)."""
    return os.path.exists(path)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _kind_from_mode(mode: int) -> EntryKind:
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    return EntryKind.OTHER


def _entry_kind(entry: os.DirEntry, follow_symlinks: bool) -> EntryKind:
    """Classify a scandir entry, reusing the cached stat where possible."""
    try:
        if not follow_symlinks and entry.is_symlink():
            return EntryKind.SYMLINK
        if entry.is_dir(follow_symlinks=follow_symlinks):
            return EntryKind.DIRECTORY
        if entry.is_file(follow_symlinks=follow_symlinks):
            return EntryKind.FILE
    except OSError as e:
        logger.debug(f"Cannot classify '{entry.path}': {e}")
        return EntryKind.MISSING

    # Dangling links land here as well: they are neither file nor directory
    if entry.is_symlink():
        return EntryKind.SYMLINK
    return EntryKind.OTHER
