from __future__ import annotations

from .file_hasher import hash_file
from .ordering import compare_paths, path_sort_key, sort_nodes
from .primitives import digest_bytes, new_hasher
from .tree_hasher import TreeHasher, hash_directory, hash_tree

__all__ = [
    "TreeHasher",
    "hash_tree",
    "hash_directory",
    "hash_file",
    "compare_paths",
    "path_sort_key",
    "sort_nodes",
    "new_hasher",
    "digest_bytes",
]
