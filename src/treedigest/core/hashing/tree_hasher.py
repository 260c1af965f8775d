from __future__ import annotations

"""
Merkle Tree Hasher.

Computes a single digest for a file or a whole directory subtree:
- a file digest is HASH(path bytes ++ content bytes);
- a directory digest is HASH(path bytes ++ d1 ++ d2 ++ ...) where d1, d2...
  are the children's digests ordered by byte-wise path comparison.

Traversal is depth-first but iterative: pending directories live in an arena
of frames addressed by integer handles, and a handle stack replaces the call
stack, so very deep trees cannot exhaust Python's recursion limit. With
``workers > 1`` file digests are computed on a thread pool; every directory
still waits for all its children, sorts and folds exactly as in sequential
mode, so the digest is identical.
"""

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from treedigest.core.hashing.file_hasher import hash_file
from treedigest.core.hashing.ordering import sort_nodes
from treedigest.core.hashing.primitives import ensure_supported, new_hasher
from treedigest.domain.config import HashConfig
from treedigest.domain.errors import (
    CycleDetectedError,
    PathNotFoundError,
    UnsupportedEntryError,
)
from treedigest.domain.models import Node, TraversalStats
from treedigest.infra.fs import (
    DirectoryIdentity,
    EntryKind,
    classify_path,
    directory_identity,
    list_directory,
)

logger = logging.getLogger(__name__)

PendingDigest = Union[bytes, "Future[bytes]"]


@dataclass
class _DirectoryFrame:
    """A directory whose children are still being visited."""
    path: str
    parent: Optional[int]
    pending: List[Tuple[str, EntryKind]]
    children: List[Tuple[str, PendingDigest]] = field(default_factory=list)
    identity: Optional[DirectoryIdentity] = None


class _FrameArena:
    """Frame storage indexed by handle; freed slots are reused."""

    def __init__(self) -> None:
        self._slots: List[Optional[_DirectoryFrame]] = []
        self._free: List[int] = []

    def allocate(self, frame: _DirectoryFrame) -> int:
        if self._free:
            handle = self._free.pop()
            self._slots[handle] = frame
            return handle
        self._slots.append(frame)
        return len(self._slots) - 1

    def get(self, handle: int) -> _DirectoryFrame:
        frame = self._slots[handle]
        if frame is None:
            raise KeyError(f"Frame handle {handle} was already released")
        return frame

    def release(self, handle: int) -> _DirectoryFrame:
        frame = self.get(handle)
        self._slots[handle] = None
        self._free.append(handle)
        return frame

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)


class TreeHasher:
    """
    Hashes filesystem entries according to an explicit HashConfig.

    One instance may be reused; ``stats`` accumulates across calls.
    """

    def __init__(self, config: Optional[HashConfig] = None) -> None:
        self.config = config or HashConfig()
        ensure_supported(self.config.algorithm)
        self.stats = TraversalStats()
        self._stats_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def hash(self, path: str) -> Node:
        """
        Hash a file or a directory subtree.

        The root is classified after following symbolic links, as the caller
        named it explicitly. Children obey ``follow_symlinks``.

        Raises:
            PathNotFoundError: The root does not exist.
            UnsupportedEntryError: The root, or any entry below it, is
                neither a regular file nor a directory.
            CycleDetectedError: A directory re-enters one of its ancestors.
            OSError: Any listing or read failure, unmodified.
        """
        root = self._root_path(path)
        kind = classify_path(root, follow_symlinks=True)

        if kind is EntryKind.FILE:
            return Node(root, self.hash_file(root))
        if kind is EntryKind.DIRECTORY:
            return self._hash_tree(root)
        if kind is EntryKind.MISSING:
            raise PathNotFoundError(root)
        raise UnsupportedEntryError(root)

    def hash_file(self, path: str) -> bytes:
        """Digest of a single file: HASH(path bytes ++ content bytes)."""
        local = TraversalStats()
        digest = hash_file(
            path,
            algorithm=self.config.algorithm,
            chunk_size=self.config.chunk_size,
            stats=local,
        )
        with self._stats_lock:
            self.stats.files += local.files
            self.stats.bytes_read += local.bytes_read
        return digest

    def hash_directory(self, path: str) -> bytes:
        """
        Digest of a directory subtree.

        Raises:
            OSError: If the directory cannot be listed (NotADirectoryError
                for a regular file).
        """
        return self._hash_tree(os.fspath(path)).digest

    def fold_directory(self, path: str, children: List[Node]) -> bytes:
        """
        Compose a directory digest from its already hashed children.

        The children are sorted here, so callers may pass them in any order.
        """
        h = new_hasher(self.config.algorithm)
        h.update(os.fsencode(path))
        for child in sort_nodes(children):
            h.update(child.digest)
        return h.digest()

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def _root_path(self, path: str) -> str:
        root = os.fspath(path)
        if self.config.canonicalize_root:
            return os.path.realpath(root)
        return root

    def _hash_tree(self, root: str) -> Node:
        if self.config.workers <= 1:
            node = self._run_worklist(root, None)
        else:
            executor = ThreadPoolExecutor(
                max_workers=self.config.workers,
                thread_name_prefix="treedigest",
            )
            try:
                node = self._run_worklist(root, executor)
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise
            executor.shutdown(wait=True)

        logger.info(
            f"Hashed '{root}': {self.stats.directories} directories, "
            f"{self.stats.files} files, {self.stats.bytes_read} bytes."
        )
        return node

    def _run_worklist(self, root: str, executor: Optional[ThreadPoolExecutor]) -> Node:
        arena = _FrameArena()
        active: Dict[DirectoryIdentity, str] = {}
        stack: List[int] = [self._open_frame(arena, active, root, None)]

        while stack:
            handle = stack[-1]
            frame = arena.get(handle)

            # Visit the next child of the frame on top of the stack
            if frame.pending:
                child_path, kind = frame.pending.pop()
                if kind is EntryKind.FILE:
                    frame.children.append((child_path, self._schedule_file(child_path, executor)))
                elif kind is EntryKind.DIRECTORY:
                    stack.append(self._open_frame(arena, active, child_path, handle))
                else:
                    logger.debug(f"Unsupported entry ({kind.value}): {child_path}")
                    raise UnsupportedEntryError(child_path)
                continue

            # All children visited: fold and hand the digest to the parent
            stack.pop()
            arena.release(handle)
            if frame.identity is not None:
                active.pop(frame.identity, None)

            digest = self.fold_directory(frame.path, _resolve_children(frame.children))
            logger.debug(f"Folded {len(frame.children)} children into '{frame.path}'")

            if frame.parent is None:
                return Node(frame.path, digest)
            arena.get(frame.parent).children.append((frame.path, digest))

        raise RuntimeError("Traversal ended without folding the root directory")

    def _open_frame(
            self,
            arena: _FrameArena,
            active: Dict[DirectoryIdentity, str],
            path: str,
            parent: Optional[int],
    ) -> int:
        identity: Optional[DirectoryIdentity] = None
        if self.config.detect_cycles:
            identity = directory_identity(path)
            if identity in active:
                raise CycleDetectedError(path, active[identity])
            active[identity] = path

        entries = list_directory(path, follow_symlinks=self.config.follow_symlinks)
        with self._stats_lock:
            self.stats.directories += 1

        return arena.allocate(_DirectoryFrame(path, parent, entries, identity=identity))

    def _schedule_file(self, path: str, executor: Optional[ThreadPoolExecutor]) -> PendingDigest:
        if executor is None:
            return self.hash_file(path)
        return executor.submit(self.hash_file, path)


# -----------------------------------------------------------------------------
# MODULE API
# -----------------------------------------------------------------------------

def hash_tree(path: str, config: Optional[HashConfig] = None) -> bytes:
    """Digest of a file or directory subtree."""
    return TreeHasher(config).hash(path).digest


def hash_directory(path: str, config: Optional[HashConfig] = None) -> bytes:
    """Digest of a directory subtree."""
    return TreeHasher(config).hash_directory(path)


def _resolve_children(children: List[Tuple[str, PendingDigest]]) -> List[Node]:
    """Wait for pooled file digests; a failed future re-raises its error."""
    nodes: List[Node] = []
    for path, pending in children:
        digest = pending.result() if isinstance(pending, Future) else pending
        nodes.append(Node(path, digest))
    return nodes
