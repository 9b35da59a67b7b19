from __future__ import annotations

"""
Archive Builder Service.

Resolves top-level inputs (files or directories) into archive members and
writes them into a single ZIP container. Archives are always created from
scratch; an existing file at the output path is replaced, never appended to.
"""

import logging
import os
import zipfile
from typing import Dict, Iterable, List, Optional, Sequence

from foldervault.core.services.path_validator import validate_paths
from foldervault.core.services.walker import walk_files
from foldervault.domain import constants as const
from foldervault.domain.archive_models import ArchiveEntry, ArchiveJob, ArchiveResult, WalkStats
from foldervault.domain.errors import ArchiveWriteError, DirectoryCreationError
from foldervault.infra.fs import remove_file_quietly, safe_mkdir, to_archive_name

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def build_archive(
        inputs: Sequence[str],
        output_path: str,
        preserve_structure: bool = True,
        *,
        compression: str = const.DEFAULT_COMPRESSION,
        compression_level: Optional[int] = None,
        contents_only: bool = False,
) -> ArchiveResult:
    """
    Create a ZIP archive at `output_path` from the given inputs.

    Args:
        inputs: Top-level files or directories, in order.
        output_path: Destination archive path.
        preserve_structure: Keep each input's own name as the first path
            segment of its members. If False, members are flattened to their
            base names and later duplicates replace earlier ones.
        compression: Key into COMPRESSION_METHODS ('deflated' or 'stored').
        compression_level: Optional zlib level for deflated archives.
        contents_only: With preserve_structure, name members relative to the
            input directory itself instead of its parent.

    Returns:
        ArchiveResult: Output path, archive size, member and skip counts.

    Raises:
        InputNotFoundError: An input is missing or no input was given.
        DirectoryCreationError: The output directory could not be created.
        ArchiveWriteError: The container could not be written.
        ValueError: Unknown compression method.
    """
    job = ArchiveJob.create(
        inputs,
        os.path.abspath(output_path),
        preserve_structure=preserve_structure,
        compression=compression,
        compression_level=compression_level,
    )
    return run_archive_job(job, contents_only=contents_only)


def run_archive_job(job: ArchiveJob, *, contents_only: bool = False) -> ArchiveResult:
    """Execute a prepared ArchiveJob. See build_archive for semantics."""
    if job.compression not in const.COMPRESSION_METHODS:
        raise ValueError(f"Unknown compression method: {job.compression!r}")

    logger.info(
        f"Archive started: {len(job.inputs)} input(s) -> {job.output_path} "
        f"(preserve_structure={job.preserve_structure})"
    )

    # 1. Pre-flight validation (no side effects)
    validate_paths(job.inputs)

    # 2. Output location
    _ensure_parent_dir(job.output_path)
    remove_file_quietly(job.output_path)

    # 3. Member resolution
    stats = WalkStats()
    entries = plan_entries(
        job.inputs,
        job.preserve_structure,
        stats=stats,
        exclude=(job.output_path,),
        contents_only=contents_only,
    )
    logger.debug(f"Resolved {len(entries)} archive member(s).")

    # 4. Container write
    written = _write_container(job, entries, stats)

    size: Optional[int]
    try:
        size = os.path.getsize(job.output_path)
    except OSError as e:
        logger.warning(f"Archive written but could not be inspected: {e}")
        size = None

    if stats.skipped_count:
        logger.warning(f"Archive completed with {stats.skipped_count} unreadable entries skipped.")
    logger.info(f"Archive finished: {job.output_path} ({written} member(s), {size} bytes)")

    return ArchiveResult(
        output_path=job.output_path,
        total_bytes_written=size,
        entry_count=written,
        skipped_count=stats.skipped_count,
    )


def plan_entries(
        inputs: Sequence[str],
        preserve_structure: bool,
        stats: Optional[WalkStats] = None,
        *,
        exclude: Iterable[str] = (),
        contents_only: bool = False,
) -> List[ArchiveEntry]:
    """
    Compute the (source, member name) pairs for a set of top-level inputs.

    Member names are unique: when two sources map to the same name the later
    source takes over the earlier one's slot.

    Args:
        inputs: Top-level files or directories.
        preserve_structure: Name members relative to each input's parent
            (True) or by base name only (False).
        stats: Optional accumulator for unreadable sub-entries.
        exclude: Absolute source paths never to include.
        contents_only: Name directory members relative to the directory itself.

    Returns:
        List[ArchiveEntry]: Members in resolution order.
    """
    stats = stats if stats is not None else WalkStats()
    excluded = {os.path.normpath(os.path.abspath(p)) for p in exclude}
    slots: Dict[str, ArchiveEntry] = {}

    for raw in inputs:
        top = os.path.normpath(os.path.abspath(raw))
        is_dir = os.path.isdir(top)
        base_dir = top if (is_dir and contents_only) else os.path.dirname(top)

        for source in _resolve_input(top, is_dir, stats):
            if source in excluded:
                continue

            if preserve_structure:
                name = to_archive_name(os.path.relpath(source, base_dir))
            else:
                name = os.path.basename(source)

            if not name:
                continue
            if not _is_encodable(name):
                stats.record_skip(source)
                logger.warning(f"Skipping file with a non UTF-8 name: {source!r}")
                continue
            if name in slots:
                logger.debug(f"Member '{name}' replaced by {source}")
            slots[name] = ArchiveEntry(source_path=source, archive_name=name)

    return list(slots.values())


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _resolve_input(top: str, is_dir: bool, stats: WalkStats) -> Iterable[str]:
    if not is_dir:
        return [top]
    return (entry.full_path for entry in walk_files(top, include_hidden=True, stats=stats))


def _ensure_parent_dir(output_path: str) -> None:
    parent = os.path.dirname(output_path)
    if not parent or os.path.isdir(parent):
        return
    ok, err = safe_mkdir(parent)
    if not ok:
        logger.error(f"Cannot create output directory '{parent}': {err}")
        raise DirectoryCreationError(
            f"Could not create directory '{parent}': {err}", path=parent
        )


def _write_container(job: ArchiveJob, entries: List[ArchiveEntry], stats: WalkStats) -> int:
    """
    Write all entries into a fresh ZIP, removing it again on failure.

    Returns:
        int: Number of members actually written.
    """
    method = const.COMPRESSION_METHODS[job.compression]
    level = job.compression_level if method == zipfile.ZIP_DEFLATED else None
    written = 0

    try:
        with zipfile.ZipFile(
                job.output_path,
                "w",
                compression=method,
                compresslevel=level,
                strict_timestamps=False,
        ) as zf:
            for entry in entries:
                if not _is_readable(entry.source_path, stats):
                    continue
                zf.write(entry.source_path, entry.archive_name)
                written += 1
    except (OSError, ValueError) as e:
        logger.error(f"Archive write failed for '{job.output_path}': {e}")
        remove_file_quietly(job.output_path)
        raise ArchiveWriteError(
            f"Failed to write archive '{job.output_path}': {e}", path=job.output_path
        ) from e

    return written


def _is_encodable(name: str) -> bool:
    """Member headers are UTF-8; undecodable OS names arrive as lone surrogates."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _is_readable(path: str, stats: WalkStats) -> bool:
    """Probe a source file so read failures are not mistaken for write failures."""
    try:
        with open(path, "rb"):
            return True
    except OSError as e:
        stats.record_skip(path)
        logger.warning(f"Skipping unreadable file '{path}': {e.strerror or e}")
        return False
