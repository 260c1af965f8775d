from __future__ import annotations

"""
Unit tests for the Hash Primitive Registry.
"""

import hashlib

import pytest
from blake3 import blake3

from treedigest.core.hashing.primitives import digest_bytes, ensure_supported, new_hasher


@pytest.mark.parametrize("algorithm", ["blake3", "sha256"])
def test_new_hasher_yields_32_byte_digest(algorithm: str) -> None:
    h = new_hasher(algorithm)
    h.update(b"abc")
    assert len(h.digest()) == 32


def test_digest_bytes_concatenates_chunks() -> None:
    assert digest_bytes("blake3", b"ab", b"", b"c") == blake3(b"abc").digest()
    assert digest_bytes("sha256", b"a", b"bc") == hashlib.sha256(b"abc").digest()


def test_unknown_algorithm_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported algorithm"):
        new_hasher("md5")

    with pytest.raises(ValueError):
        ensure_supported("BLAKE3")
