from __future__ import annotations

"""
Archive Extraction Service.

Unpacks a ZIP archive produced by this engine (or any standard tool) into a
destination directory. Member names that would land outside the destination
are rejected before anything is written.
"""

import logging
import os
import zipfile
from typing import List

from foldervault.domain.errors import ArchiveNotFoundError, DirectoryCreationError, ExtractionError
from foldervault.infra.fs import safe_mkdir

logger = logging.getLogger(__name__)


def extract_archive(zip_path: str, destination: str) -> int:
    """
    Extract every member of `zip_path` into `destination`.

    Args:
        zip_path: Archive to read.
        destination: Target directory, created if absent.

    Returns:
        int: Number of members extracted (directories included).

    Raises:
        ArchiveNotFoundError: The archive does not exist.
        DirectoryCreationError: The destination could not be created.
        ExtractionError: The archive is corrupt, unsafe, or unwritable.
    """
    if not os.path.isfile(zip_path):
        raise ArchiveNotFoundError(f"ZIP file does not exist: {zip_path}", path=zip_path)

    dest_abs = os.path.abspath(destination)
    ok, err = safe_mkdir(dest_abs)
    if not ok:
        raise DirectoryCreationError(
            f"Could not create directory '{dest_abs}': {err}", path=dest_abs
        )

    logger.info(f"Extraction started: {zip_path} -> {dest_abs}")
    try:
        with zipfile.ZipFile(zip_path, "r") as zf:
            members = zf.infolist()
            unsafe = _unsafe_members(dest_abs, [m.filename for m in members])
            if unsafe:
                raise ExtractionError(
                    f"Archive contains members outside the destination: {', '.join(unsafe[:5])}",
                    path=zip_path,
                )
            zf.extractall(dest_abs)
    except zipfile.BadZipFile as e:
        raise ExtractionError(f"Invalid ZIP file '{zip_path}': {e}", path=zip_path) from e
    except OSError as e:
        raise ExtractionError(f"Failed to extract '{zip_path}': {e}", path=zip_path) from e

    logger.info(f"Extraction finished: {len(members)} member(s)")
    return len(members)


def _unsafe_members(dest_abs: str, names: List[str]) -> List[str]:
    unsafe: List[str] = []
    for name in names:
        if name.startswith(("/", "\\")) or os.path.isabs(name):
            unsafe.append(name)
            continue
        target = os.path.abspath(os.path.join(dest_abs, name))
        try:
            inside = os.path.commonpath([dest_abs, target]) == dest_abs
        except ValueError:
            # Different drives on Windows
            inside = False
        if not inside:
            unsafe.append(name)
    return unsafe
