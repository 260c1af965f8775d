from __future__ import annotations

"""
Unit tests for sibling ordering.

Verifies byte-wise path comparison: no case folding, no natural number
ordering, no locale collation.
"""

from treedigest.core.hashing.ordering import compare_paths, path_sort_key, sort_nodes
from treedigest.domain.models import Node


def test_compare_paths_three_way() -> None:
    assert compare_paths("d/a", "d/b") == -1
    assert compare_paths("d/b", "d/a") == 1
    assert compare_paths("d/a", "d/a") == 0


def test_uppercase_sorts_before_lowercase() -> None:
    """'B' (0x42) precedes 'a' (0x61) byte-wise."""
    assert compare_paths("d/B", "d/a") == -1


def test_no_natural_number_ordering() -> None:
    """'10' precedes '9' because '1' < '9'."""
    assert compare_paths("d/10", "d/9") == -1


def test_non_ascii_compares_on_encoded_bytes() -> None:
    """'é' encodes to 0xC3 0xA9 and therefore follows every ASCII name."""
    assert path_sort_key("é") == "é".encode("utf-8")
    assert compare_paths("d/z", "d/é") == -1


def test_sort_nodes_orders_by_path_bytes() -> None:
    nodes = [Node("d/b", b"2"), Node("d/B", b"3"), Node("d/a", b"1")]

    ordered = [n.path for n in sort_nodes(nodes)]

    assert ordered == ["d/B", "d/a", "d/b"]
