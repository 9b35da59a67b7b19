from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared filesystem fixtures used across unit and integration tests.
"""

import os
import sys
from pathlib import Path

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
def sample_tree(tmp_path: Path) -> Path:
    """
    Create a small directory tree with known sizes.

    Structure:
        project/
            a.txt            (10 bytes)
            .hidden          (3 bytes)
            docs/
                readme.md    (5 bytes)
                empty/
            src/
                main.py      (7 bytes)
                pkg/
                    mod.py   (4 bytes)

    Returns:
        Path: The 'project' root directory.
    """
    root = tmp_path / "project"
    (root / "docs" / "empty").mkdir(parents=True)
    (root / "src" / "pkg").mkdir(parents=True)

    (root / "a.txt").write_bytes(b"0123456789")
    (root / ".hidden").write_bytes(b"abc")
    (root / "docs" / "readme.md").write_bytes(b"hello")
    (root / "src" / "main.py").write_bytes(b"print()")
    (root / "src" / "pkg" / "mod.py").write_bytes(b"x=11")

    return root
