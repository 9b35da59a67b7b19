from __future__ import annotations

"""
Directory Metrics Service.

Aggregate size and entry count of a directory tree. The two metrics count
different things: size sums regular files only, while count includes every
enumerated entry, nested directories among them.
"""

import logging
import os
from typing import Optional, Type

from foldervault.core.services.walker import walk_entries, walk_files
from foldervault.domain.archive_models import DirectoryMetricsRequest, Metric, WalkStats
from foldervault.domain.errors import CountError, MetricsError, MetricsNotFoundError, SizeCalculationError

logger = logging.getLogger(__name__)


def directory_size(
        root: str,
        include_hidden: bool = True,
        stats: Optional[WalkStats] = None,
) -> int:
    """
    Sum the byte lengths of every regular file under `root`.

    Args:
        root: Directory to measure.
        include_hidden: Include dot-prefixed entries (default: exhaustive).
        stats: Optional accumulator for skipped sub-entries.

    Returns:
        int: Total size in bytes.

    Raises:
        MetricsNotFoundError: `root` does not exist.
        SizeCalculationError: `root` is not a directory.
    """
    _check_root(root, SizeCalculationError)
    total = sum(e.size_in_bytes for e in walk_files(root, include_hidden, stats))
    logger.debug(f"Directory size of {root}: {total} bytes")
    return total


def count_items(
        root: str,
        include_hidden: bool = True,
        stats: Optional[WalkStats] = None,
) -> int:
    """
    Count every file and directory under `root`, excluding `root` itself.

    Raises:
        MetricsNotFoundError: `root` does not exist.
        CountError: `root` is not a directory.
    """
    _check_root(root, CountError)
    total = sum(1 for _ in walk_entries(root, include_hidden, stats))
    logger.debug(f"Item count of {root}: {total}")
    return total


def compute_metric(request: DirectoryMetricsRequest, stats: Optional[WalkStats] = None) -> int:
    if request.metric is Metric.SIZE:
        return directory_size(request.root_path, request.include_hidden, stats)
    return count_items(request.root_path, request.include_hidden, stats)


def _check_root(root: str, error_cls: Type[MetricsError]) -> None:
    if not root or not os.path.exists(root):
        logger.error(f"Metrics root does not exist: {root}")
        raise MetricsNotFoundError(root)
    if not os.path.isdir(root):
        raise error_cls(f"Not a directory: {root}", path=root)
