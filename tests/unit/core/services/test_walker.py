from __future__ import annotations

"""
Unit tests for the Directory Tree Walker.

Verifies recursive file enumeration, hidden-entry filtering, raw entry
enumeration and the soft-fail skip policy for unreadable sub-entries.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from foldervault.core.services.walker import walk_entries, walk_files
from foldervault.domain.archive_models import WalkStats


def _rel(root: Path, paths) -> set:
    return {os.path.relpath(p, root).replace(os.sep, "/") for p in paths}


def test_walk_files_yields_only_regular_files(sample_tree: Path) -> None:
    """TC-01: Nested files are yielded; directories never are."""
    entries = list(walk_files(str(sample_tree)))

    assert _rel(sample_tree, [e.full_path for e in entries]) == {
        "a.txt", ".hidden", "docs/readme.md", "src/main.py", "src/pkg/mod.py",
    }
    assert all(not e.is_directory for e in entries)


def test_walk_files_reports_sizes(sample_tree: Path) -> None:
    """TC-02: Each entry carries the file's byte length."""
    sizes = {os.path.basename(e.full_path): e.size_in_bytes for e in walk_files(str(sample_tree))}

    assert sizes["a.txt"] == 10
    assert sizes["readme.md"] == 5
    assert sizes["mod.py"] == 4


def test_walk_files_excludes_hidden_when_requested(sample_tree: Path) -> None:
    """TC-03: Dot-prefixed files and directories are pruned."""
    (sample_tree / ".git").mkdir()
    (sample_tree / ".git" / "config").write_text("x", encoding="utf-8")

    names = _rel(sample_tree, [e.full_path for e in walk_files(str(sample_tree), include_hidden=False)])

    assert ".hidden" not in names
    assert ".git/config" not in names
    assert "a.txt" in names


def test_walk_files_is_lazy_and_single_pass(sample_tree: Path) -> None:
    """TC-04: The walker is a generator that is exhausted after one pass."""
    gen = walk_files(str(sample_tree))
    first = next(gen)
    rest = list(gen)

    assert first.full_path
    assert len(rest) == 4
    assert list(gen) == []


def test_walk_files_skips_symlinks(tmp_path: Path) -> None:
    """TC-05: Symbolic links are neither followed nor yielded."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "real.txt").write_text("data", encoding="utf-8")
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("s", encoding="utf-8")
    try:
        os.symlink(root / "real.txt", root / "link.txt")
        os.symlink(outside, root / "linkdir", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("Symlinks not supported on this platform.")

    names = _rel(root, [e.full_path for e in walk_files(str(root))])

    assert names == {"real.txt"}


def test_walk_entries_includes_directories(sample_tree: Path) -> None:
    """TC-06: Raw enumeration yields files and nested directories, not the root."""
    entries = list(walk_entries(str(sample_tree)))
    dirs = _rel(sample_tree, [e.full_path for e in entries if e.is_directory])

    assert dirs == {"docs", "docs/empty", "src", "src/pkg"}
    assert len(entries) == 9


def test_walk_skips_unreadable_directory(sample_tree: Path) -> None:
    """TC-07: A directory that cannot be listed is skipped and counted."""
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.basename(os.fspath(path)) == "src":
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    stats = WalkStats()
    with patch("os.scandir", side_effect=fake_scandir):
        names = _rel(sample_tree, [e.full_path for e in walk_files(str(sample_tree), stats=stats)])

    assert "src/main.py" not in names
    assert "src/pkg/mod.py" not in names
    assert "docs/readme.md" in names
    assert stats.skipped_count == 1
    assert stats.skipped_paths[0].endswith("src")


def test_walk_skips_file_that_cannot_be_stated(sample_tree: Path) -> None:
    """TC-08: A file whose metadata cannot be read is skipped, siblings survive."""
    real_lstat = os.lstat

    def fake_lstat(path, *args, **kwargs):
        if os.fspath(path).endswith("readme.md"):
            raise OSError(5, "Input/output error", os.fspath(path))
        return real_lstat(path, *args, **kwargs)

    stats = WalkStats()
    with patch("foldervault.core.services.walker.os.lstat", side_effect=fake_lstat):
        names = _rel(sample_tree, [e.full_path for e in walk_files(str(sample_tree), stats=stats)])

    assert "docs/readme.md" not in names
    assert "a.txt" in names
    assert stats.skipped_count == 1


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="Permission bits are not enforced for root or on this platform.",
)
def test_walk_skips_real_permission_denied(sample_tree: Path) -> None:
    """TC-09: Real chmod-based denial is handled like any other skip."""
    locked = sample_tree / "docs"
    os.chmod(locked, 0)
    try:
        stats = WalkStats()
        names = _rel(sample_tree, [e.full_path for e in walk_files(str(sample_tree), stats=stats)])
    finally:
        os.chmod(locked, 0o755)

    assert "docs/readme.md" not in names
    assert stats.skipped_count == 1
