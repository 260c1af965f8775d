from __future__ import annotations

"""
File digest routine.

A file's digest covers its path string bytes immediately followed by its
content bytes, with no separator or length prefix in between.
"""

import os
from typing import Optional

from treedigest.core.hashing.primitives import new_hasher
from treedigest.domain.constants import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE
from treedigest.domain.models import TraversalStats


def hash_file(
        path: str,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        stats: Optional[TraversalStats] = None,
) -> bytes:
    """
    Compute HASH(path bytes ++ content bytes).

    Content is streamed in chunks; the digest only depends on the
    concatenated byte stream, never on chunk boundaries. The file handle is
    released before returning.

    Args:
        path: Path string exactly as reached during traversal.
        algorithm: Hash primitive name.
        chunk_size: Read size in bytes.
        stats: Optional counters to update.

    Returns:
        bytes: 32-byte digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    h = new_hasher(algorithm)
    h.update(os.fsencode(path))

    size = 0
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
            size += len(chunk)

    if stats is not None:
        stats.files += 1
        stats.bytes_read += size

    return h.digest()
