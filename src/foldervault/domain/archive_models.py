from __future__ import annotations

"""
Archive Domain Data Models.

Defines the short-lived data structures exchanged between the traversal,
archiving and metrics services and the interface layers (API/CLI). None of
these objects outlive the request that created them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from foldervault.domain import constants as const

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TraversalEntry:
    """
    A single filesystem entry produced by the tree walker.

    Attributes:
        full_path: Absolute path of the entry.
        is_directory: True for directories.
        size_in_bytes: Byte length for regular files, 0 otherwise.
    """
    full_path: str
    is_directory: bool = False
    size_in_bytes: int = 0


@dataclass
class WalkStats:
    """
    Mutable record of sub-entries skipped during a traversal.

    Unreadable entries never abort a walk; they are counted here instead so
    callers can decide whether a partial result is acceptable.
    """
    skipped_count: int = 0
    skipped_paths: List[str] = field(default_factory=list)

    def record_skip(self, path: str) -> None:
        self.skipped_count += 1
        self.skipped_paths.append(path)


# -----------------------------------------------------------------------------
# ARCHIVE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ArchiveEntry:
    """
    A resolved (source file, member name) pair.

    Attributes:
        source_path: Absolute path of the file on disk.
        archive_name: Relative, '/'-separated member name inside the archive.
    """
    source_path: str
    archive_name: str


@dataclass(frozen=True)
class ArchiveJob:
    """
    Parameters of a single archive build.

    Attributes:
        inputs: Ordered top-level paths (files or directories).
        output_path: Absolute path of the archive to create.
        preserve_structure: Keep each input's own name as a path prefix.
        compression: Key into COMPRESSION_METHODS.
        compression_level: Optional zlib level (0-9) for deflated archives.
    """
    inputs: Tuple[str, ...]
    output_path: str
    preserve_structure: bool = True
    compression: str = const.DEFAULT_COMPRESSION
    compression_level: Optional[int] = None

    @classmethod
    def create(
            cls,
            inputs: Sequence[str],
            output_path: str,
            preserve_structure: bool = True,
            compression: str = const.DEFAULT_COMPRESSION,
            compression_level: Optional[int] = None,
    ) -> "ArchiveJob":
        return cls(
            inputs=tuple(inputs),
            output_path=output_path,
            preserve_structure=preserve_structure,
            compression=compression,
            compression_level=compression_level,
        )


@dataclass(frozen=True)
class ArchiveResult:
    """
    Outcome of a successful archive build.

    Attributes:
        output_path: Path of the written archive.
        total_bytes_written: Size of the archive on disk, or None if the
            archive was written but could not be stat'ed afterwards.
        entry_count: Number of members written.
        skipped_count: Source entries skipped as unreadable.
    """
    output_path: str
    total_bytes_written: Optional[int]
    entry_count: int
    skipped_count: int = 0


# -----------------------------------------------------------------------------
# METRICS MODELS
# -----------------------------------------------------------------------------

class Metric(str, Enum):
    SIZE = "size"
    COUNT = "count"


@dataclass(frozen=True)
class DirectoryMetricsRequest:
    root_path: str
    metric: Metric
    include_hidden: bool = True


# -----------------------------------------------------------------------------
# BOUNDARY RESPONSE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ServiceResponse:
    """
    Unified payload returned by every boundary operation.

    Exactly one of `data` (on success) or `code` (on failure) is meaningful.

    Attributes:
        ok: Flag indicating success or failure.
        data: Operation payload on success.
        code: Stable error code on failure.
        message: Human-readable description of the failure.
    """
    ok: bool
    data: Any = None
    code: str = ""
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": {"code": self.code, "message": self.message}}


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_response(data: Any) -> ServiceResponse:
    return ServiceResponse(ok=True, data=data)


def create_error_response(code: str, message: str) -> ServiceResponse:
    """
    Create a failed boundary response.

    Args:
        code: Stable error code from the constants vocabulary.
        message: Detailed error description.

    Returns:
        ServiceResponse: An immutable error response.
    """
    return ServiceResponse(ok=False, code=code, message=message)
