from __future__ import annotations

"""
Canonical ordering of sibling entries.

Siblings are ordered by plain byte-wise comparison of their path strings in
the host's native path encoding: no locale collation, no natural number
ordering, no case folding. This ordering is what makes a directory digest
independent of the order the OS lists entries in.
"""

import os
from typing import Iterable, List

from treedigest.domain.models import Node


def path_sort_key(path: str) -> bytes:
    """Raw path bytes, as the OS stores them."""
    return os.fsencode(path)


def compare_paths(a: str, b: str) -> int:
    """
    Three-way byte-wise comparison of two path strings.

    Returns:
        int: -1 if a sorts first, 1 if b sorts first, 0 if equal.
    """
    ka = path_sort_key(a)
    kb = path_sort_key(b)
    return (ka > kb) - (ka < kb)


def sort_nodes(nodes: Iterable[Node]) -> List[Node]:
    return sorted(nodes, key=lambda n: path_sort_key(n.path))
