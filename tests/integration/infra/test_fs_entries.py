from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates entry classification, one-level enumeration, directory identity
and display path resolution against a real temporary filesystem.
"""

import os
from pathlib import Path

import pytest

from treedigest.infra.fs import (
    EntryKind,
    classify_path,
    directory_identity,
    list_directory,
    path_exists,
    resolve_display_path,
)

requires_symlinks = pytest.mark.skipif(os.name == "nt", reason="POSIX symlinks required")

# -----------------------------------------------------------------------------
# CLASSIFICATION TESTS
# -----------------------------------------------------------------------------

def test_classify_file_and_directory(sample_tree: Path) -> None:
    """TC-01: Regular files and directories are told apart."""
    assert classify_path("root") is EntryKind.DIRECTORY
    assert classify_path("root/a.txt") is EntryKind.FILE


def test_classify_missing(in_tmp: Path) -> None:
    assert classify_path("nothing-here") is EntryKind.MISSING


@requires_symlinks
def test_classify_symlink_without_following(in_tmp: Path) -> None:
    (in_tmp / "f").write_bytes(b"")
    os.symlink("f", "link")

    assert classify_path("link") is EntryKind.FILE
    assert classify_path("link", follow_symlinks=False) is EntryKind.SYMLINK


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo unavailable")
def test_classify_fifo_as_other(in_tmp: Path) -> None:
    os.mkfifo("pipe")

    assert classify_path("pipe") is EntryKind.OTHER


# -----------------------------------------------------------------------------
# ENUMERATION TESTS
# -----------------------------------------------------------------------------

def test_list_directory_joins_literal_path(sample_tree: Path) -> None:
    """TC-02: Child paths extend the caller's string form."""
    entries = dict(list_directory("root"))

    assert entries == {
        os.path.join("root", "a.txt"): EntryKind.FILE,
        os.path.join("root", "b.txt"): EntryKind.FILE,
        os.path.join("root", "sub"): EntryKind.DIRECTORY,
        os.path.join("root", "empty"): EntryKind.DIRECTORY,
    }


def test_list_directory_keeps_dot_prefix(sample_tree: Path) -> None:
    paths = [p for p, _ in list_directory("./root")]

    assert all(p.startswith("./root/") for p in paths)


@requires_symlinks
def test_list_directory_symlink_policy(in_tmp: Path) -> None:
    """TC-03: Links are followed by default and flagged when not following."""
    (in_tmp / "d").mkdir()
    (in_tmp / "d" / "real").mkdir()
    os.symlink("real", "d/alias")
    os.symlink("missing", "d/dangling")

    followed = dict(list_directory("d"))
    assert followed["d/alias"] is EntryKind.DIRECTORY
    assert followed["d/dangling"] is EntryKind.SYMLINK

    not_followed = dict(list_directory("d", follow_symlinks=False))
    assert not_followed["d/alias"] is EntryKind.SYMLINK
    assert not_followed["d/real"] is EntryKind.DIRECTORY


def test_list_directory_on_file_raises(sample_tree: Path) -> None:
    with pytest.raises(NotADirectoryError):
        list_directory("root/a.txt")


# -----------------------------------------------------------------------------
# IDENTITY AND DISPLAY TESTS
# -----------------------------------------------------------------------------

def test_directory_identity_matches_stat(sample_tree: Path) -> None:
    st = os.stat("root")

    assert directory_identity("root") == (st.st_dev, st.st_ino)
    assert directory_identity("./root") == directory_identity(str(sample_tree))


def test_resolve_display_path_is_absolute(sample_tree: Path) -> None:
    shown = resolve_display_path("./root")

    assert os.path.isabs(shown)
    assert shown == os.path.realpath(str(sample_tree))


def test_path_exists(sample_tree: Path) -> None:
    assert path_exists("root")
    assert not path_exists("root/ghost")
