from __future__ import annotations

"""
Hash Primitive Registry.

Maps algorithm names to streaming 256-bit hash contexts. BLAKE3 is the
default; SHA-256 from hashlib is available for environments that require a
FIPS-style primitive.
"""

import hashlib
from typing import Any, Callable, Dict

from blake3 import blake3

from treedigest.domain.constants import (
    ALGORITHM_BLAKE3,
    ALGORITHM_SHA256,
    SUPPORTED_ALGORITHMS,
)

_FACTORIES: Dict[str, Callable[[], Any]] = {
    ALGORITHM_BLAKE3: blake3,
    ALGORITHM_SHA256: hashlib.sha256,
}


def new_hasher(algorithm: str) -> Any:
    """
    Create a fresh streaming hash context.

    The returned object exposes ``update(bytes)`` and ``digest()``; the
    digest is always 32 bytes long.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    ensure_supported(algorithm)
    return _FACTORIES[algorithm]()


def ensure_supported(algorithm: str) -> None:
    if algorithm not in _FACTORIES:
        raise ValueError(
            f"Unsupported algorithm '{algorithm}'. "
            f"Supported: {', '.join(SUPPORTED_ALGORITHMS)}."
        )


def digest_bytes(algorithm: str, *chunks: bytes) -> bytes:
    """One-shot digest of the concatenation of ``chunks``."""
    h = new_hasher(algorithm)
    for chunk in chunks:
        h.update(chunk)
    return h.digest()
