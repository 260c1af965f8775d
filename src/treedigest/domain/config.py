from __future__ import annotations

"""
Configuration Domain.

Holds the dict-based runtime configuration that drives a hashing run and
the immutable ``HashConfig`` value handed to the hashing core. Configuration
comes from defaults merged with command line overrides only; no file or
environment variable is consulted.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from treedigest.domain.constants import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target
        "input_path": "",

        # Hashing
        "algorithm": DEFAULT_ALGORITHM,
        "chunk_size": DEFAULT_CHUNK_SIZE,
        "workers": 1,

        # Traversal policy
        "follow_symlinks": True,
        "detect_cycles": True,
        "canonicalize_root": False,

        # Output
        "json_output": False,

        # Diagnostics
        "log_level": "WARNING",
        "log_file": None,
    }


# -----------------------------------------------------------------------------
# Core Configuration Value
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HashConfig:
    """
    Explicit configuration consumed by the tree hasher.

    Attributes:
        algorithm: Name of the 256-bit hash primitive.
        chunk_size: Read size when streaming file content.
        workers: Number of threads hashing files (1 means sequential).
        follow_symlinks: Classify entries after following symbolic links.
        detect_cycles: Abort when a directory re-enters one of its ancestors.
        canonicalize_root: Hash the absolute resolved root path instead of
            the literal string supplied by the caller.
    """
    algorithm: str = DEFAULT_ALGORITHM
    chunk_size: int = DEFAULT_CHUNK_SIZE
    workers: int = 1
    follow_symlinks: bool = True
    detect_cycles: bool = True
    canonicalize_root: bool = False

    @classmethod
    def from_dict(cls, cfg: Optional[Dict[str, Any]]) -> "HashConfig":
        """Build the value from a (validated) configuration dictionary."""
        data = cfg or {}
        defaults = cls()
        return cls(
            algorithm=data.get("algorithm", defaults.algorithm),
            chunk_size=int(data.get("chunk_size", defaults.chunk_size)),
            workers=int(data.get("workers", defaults.workers)),
            follow_symlinks=bool(data.get("follow_symlinks", defaults.follow_symlinks)),
            detect_cycles=bool(data.get("detect_cycles", defaults.detect_cycles)),
            canonicalize_root=bool(data.get("canonicalize_root", defaults.canonicalize_root)),
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
