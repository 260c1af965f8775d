from __future__ import annotations

"""
Hashing Domain Data Models.

Defines the transient tree node produced during traversal, the traversal
counters, and the result object handed from the hashing service to the
interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# TREE NODES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """
    A hashed filesystem entry.

    Attributes:
        path: Path string exactly as used to reach the entry.
        digest: Raw 256-bit digest.
    """
    path: str
    digest: bytes

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


@dataclass
class TraversalStats:
    """Counters accumulated while walking a tree."""
    files: int = 0
    directories: int = 0
    bytes_read: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "files": self.files,
            "directories": self.directories,
            "bytes_read": self.bytes_read,
        }

# -----------------------------------------------------------------------------
# SERVICE RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HashResult:
    """
    Outcome of a complete tree hashing run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        path: Path string that was hashed.
        display_path: Absolute form of the path, for humans only.
        algorithm: Hash primitive used.
        digest: Lowercase hexadecimal root digest (empty on failure).
        summary: Traversal statistics and execution metadata.
    """
    ok: bool
    error: str

    path: str
    display_path: str
    algorithm: str

    digest: str = ""
    summary: Dict[str, Any] = field(default_factory=dict)

    def render_line(self) -> str:
        """Return the single human-readable output line."""
        return f"{self.display_path}: {self.digest}"

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        cfg: Dict[str, Any],
        path: str,
        display_path: str,
        node: Node,
        summary_extra: Optional[Dict[str, Any]] = None
) -> HashResult:
    """
    Create a successful result from the root node.

    Args:
        cfg: Configuration used during the run.
        path: Hashed path string.
        display_path: Absolute path for display.
        node: Root node returned by the hasher.
        summary_extra: Traversal statistics.

    Returns:
        HashResult: An immutable success result.
    """
    return HashResult(
        ok=True,
        error="",
        path=path,
        display_path=display_path,
        algorithm=cfg.get("algorithm", ""),
        digest=node.hexdigest,
        summary=summary_extra or {},
    )


def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        path: str,
        display_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> HashResult:
    """
    Create a failed result. No digest is ever attached to it.

    Args:
        error: Detailed error description.
        cfg: Configuration used during the failed run.
        path: Path string that was being hashed.
        display_path: Absolute path for display, when it could be resolved.
        summary_extra: Additional metadata.

    Returns:
        HashResult: An immutable error result.
    """
    return HashResult(
        ok=False,
        error=error,
        path=path,
        display_path=display_path,
        algorithm=cfg.get("algorithm", ""),
        summary=summary_extra or {},
    )
