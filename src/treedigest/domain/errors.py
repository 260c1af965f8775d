from __future__ import annotations

"""
Error Taxonomy.

Exceptions raised by the hashing core and the CLI. Plain I/O failures
(permission denied, read or listing errors) are never wrapped: they surface
as the raw ``OSError`` so callers see them unmodified.
"""

import errno


class TreeDigestError(Exception):
    """Base class for errors owned by treedigest."""


class UsageError(TreeDigestError):
    """No path argument was supplied."""


class PathNotFoundError(TreeDigestError, FileNotFoundError):
    """
    The path does not exist.

    Also a ``FileNotFoundError`` so generic OS-level handlers treat it like
    any other ENOENT condition.
    """

    def __init__(self, path: str, message: str = "Path not found") -> None:
        FileNotFoundError.__init__(self, errno.ENOENT, message, path)
        self.path = path


class UnsupportedEntryError(PathNotFoundError):
    """
    A traversed entry is neither a regular file nor a directory.

    Symbolic links (when not followed), dangling links, sockets, devices and
    FIFOs end up here. It deliberately shares the "not found" condition of
    its parent class.
    """


class CycleDetectedError(TreeDigestError):
    """A directory was reached again while one of its own frames was open."""

    def __init__(self, path: str, ancestor: str) -> None:
        super().__init__(f"Directory cycle detected: '{path}' resolves to ancestor '{ancestor}'")
        self.path = path
        self.ancestor = ancestor
