from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and sample trees.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'treedigest.domain.config',
    ensuring all keys expected by the service are present.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Target
        "input_path": "/tmp/test_input",

        # Hashing
        "algorithm": "blake3",
        "chunk_size": 1024 * 1024,
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


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the working directory so relative paths are stable."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_tree(in_tmp: Path) -> Path:
    """
    Create a small tree addressed by the relative path 'root'.

    Structure:
    root/
      a.txt        "alpha"
      b.txt        "bravo"
      sub/
        c.bin      b"\\x00\\x01\\x02"
      empty/
    """
    root = in_tmp / "root"
    root.mkdir()
    (root / "a.txt").write_bytes(b"alpha")
    (root / "b.txt").write_bytes(b"bravo")
    (root / "sub").mkdir()
    (root / "sub" / "c.bin").write_bytes(b"\x00\x01\x02")
    (root / "empty").mkdir()
    return root
