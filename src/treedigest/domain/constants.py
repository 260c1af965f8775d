from __future__ import annotations

"""
Domain Constants.

Centralizes the digest geometry, supported hash primitives and the
process exit codes shared by the hashing core and the CLI.
"""

from typing import Tuple

APP_NAME = "treedigest"

# -----------------------------------------------------------------------------
# DIGEST GEOMETRY
# -----------------------------------------------------------------------------
DIGEST_SIZE = 32
HEX_DIGEST_LENGTH = DIGEST_SIZE * 2

# -----------------------------------------------------------------------------
# HASH PRIMITIVES
# -----------------------------------------------------------------------------
ALGORITHM_BLAKE3 = "blake3"
ALGORITHM_SHA256 = "sha256"
SUPPORTED_ALGORITHMS: Tuple[str, ...] = (ALGORITHM_BLAKE3, ALGORITHM_SHA256)
DEFAULT_ALGORITHM = ALGORITHM_BLAKE3

# Read size used when streaming file content into the hash context
DEFAULT_CHUNK_SIZE = 1024 * 1024

# -----------------------------------------------------------------------------
# EXIT CODES
# -----------------------------------------------------------------------------
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
