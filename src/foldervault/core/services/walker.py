from __future__ import annotations

"""
Directory Tree Walker.

Lazy, depth-first enumeration of a directory tree shared by the archive
builder and the directory metrics. Unreadable sub-entries never abort a walk:
they are skipped together with everything beneath them and recorded in a
WalkStats object supplied by the caller.
"""

import logging
import os
import stat
from typing import Iterator, List, Optional, Tuple

from foldervault.domain.archive_models import TraversalEntry, WalkStats

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def walk_files(
        root: str,
        include_hidden: bool = True,
        stats: Optional[WalkStats] = None,
) -> Iterator[TraversalEntry]:
    """
    Yield every regular file under `root`, recursively.

    Directories are traversed but never yielded. Symbolic links are neither
    followed nor yielded.

    Args:
        root: Directory to traverse.
        include_hidden: If False, dot-prefixed files and directories are
            excluded and hidden directories are not descended into.
        stats: Optional accumulator for skipped sub-entries.

    Yields:
        TraversalEntry: One entry per regular file, with its size.
    """
    stats = stats if stats is not None else WalkStats()

    for dir_path, _dirs, files in _walk(root, include_hidden, stats):
        for name in files:
            full_path = os.path.join(dir_path, name)
            try:
                st = os.lstat(full_path)
            except OSError as e:
                _skip(stats, full_path, e)
                continue

            if not stat.S_ISREG(st.st_mode):
                continue

            yield TraversalEntry(full_path=full_path, is_directory=False, size_in_bytes=st.st_size)


def walk_entries(
        root: str,
        include_hidden: bool = True,
        stats: Optional[WalkStats] = None,
) -> Iterator[TraversalEntry]:
    """
    Yield every filesystem entry under `root`: files, directories and links.

    The root itself is not yielded. Sizes are not collected.

    Args:
        root: Directory to traverse.
        include_hidden: If False, dot-prefixed entries are excluded.
        stats: Optional accumulator for skipped sub-entries.

    Yields:
        TraversalEntry: One entry per enumerated name.
    """
    stats = stats if stats is not None else WalkStats()

    for dir_path, dirs, files in _walk(root, include_hidden, stats):
        for name in dirs:
            yield TraversalEntry(full_path=os.path.join(dir_path, name), is_directory=True)
        for name in files:
            yield TraversalEntry(full_path=os.path.join(dir_path, name), is_directory=False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _walk(
        root: str,
        include_hidden: bool,
        stats: WalkStats,
) -> Iterator[Tuple[str, List[str], List[str]]]:
    """Wrap os.walk with hidden-entry pruning, sorting and skip accounting."""

    def on_error(err: OSError) -> None:
        _skip(stats, err.filename or root, err)

    for dir_path, dirs, files in os.walk(root, topdown=True, onerror=on_error, followlinks=False):
        # In-place pruning controls which subdirectories os.walk descends into
        if not include_hidden:
            dirs[:] = [d for d in dirs if not _is_hidden(d)]
            files = [f for f in files if not _is_hidden(f)]
        dirs.sort()
        files.sort()
        yield dir_path, dirs, files


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _skip(stats: WalkStats, path: str, err: OSError) -> None:
    stats.record_skip(str(path))
    logger.warning(f"Skipping unreadable entry '{path}': {err.strerror or err}")
