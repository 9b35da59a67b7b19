from __future__ import annotations

"""
Engine Error Hierarchy.

Every failure the engine can report is a subclass of FolderVaultError carrying
the boundary error code it maps to. The service boundary converts these into
structured responses; nothing below it returns sentinel values for failures.
"""

from typing import Optional

from foldervault.domain import constants as const


class FolderVaultError(Exception):
    """Base class for all engine failures."""

    code: str = const.COMPRESSION_ERROR

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


# -----------------------------------------------------------------------------
# INPUT (CALLER) ERRORS
# -----------------------------------------------------------------------------

class InputNotFoundError(FolderVaultError):
    """A requested input path does not exist, or no input was given."""

    code = const.FILE_NOT_FOUND

    def __init__(self, path: str) -> None:
        if path:
            message = f"Path does not exist: {path}"
        else:
            message = "No input paths were provided."
        super().__init__(message, path=path)


# -----------------------------------------------------------------------------
# ARCHIVE ERRORS
# -----------------------------------------------------------------------------

class DirectoryCreationError(FolderVaultError):
    """The parent directory of an output path could not be created."""

    code = const.DIRECTORY_CREATION_FAILED


class ArchiveWriteError(FolderVaultError):
    """Writing the archive container failed; no partial file is left behind."""

    code = const.COMPRESSION_FAILED


class ArchiveNotFoundError(FolderVaultError):
    """The archive to extract does not exist."""

    code = const.ZIP_NOT_FOUND


class ExtractionError(FolderVaultError):
    """The archive could not be read or unpacked."""

    code = const.EXTRACTION_FAILED


# -----------------------------------------------------------------------------
# METRICS ERRORS
# -----------------------------------------------------------------------------

class MetricsError(FolderVaultError):
    """A directory metric could not be computed."""

    code = const.SIZE_CALCULATION_ERROR


class SizeCalculationError(MetricsError):
    code = const.SIZE_CALCULATION_ERROR


class CountError(MetricsError):
    code = const.COUNT_ERROR


class MetricsNotFoundError(MetricsError):
    """The metrics root does not exist."""

    code = const.FILE_NOT_FOUND

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory does not exist: {path}", path=path)
