from __future__ import annotations

"""
Service Boundary.

The operations exposed to external callers (UI bridges, CLI, scripts). Each
operation validates its raw arguments, runs the engine, and converts every
outcome into a ServiceResponse; no exception crosses this boundary.
`handle_call` adds a method-name dispatcher over loosely typed argument
mappings, and `submit` runs it on a background worker.
"""

import logging
import os
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Mapping, Optional

from foldervault.core.services import archiver, extractor, metrics
from foldervault.core.services.executor import run_offline
from foldervault.core.validator import validate_config
from foldervault.domain import constants as const
from foldervault.domain.archive_models import (
    ServiceResponse,
    create_error_response,
    create_success_response,
)
from foldervault.domain.errors import FolderVaultError, InputNotFoundError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# ARCHIVE OPERATIONS
# -----------------------------------------------------------------------------

def compress_folders(
        paths: List[str],
        output_path: str,
        preserve_structure: bool = True,
        *,
        settings: Optional[Dict[str, Any]] = None,
) -> ServiceResponse:
    """
    Archive several files/folders into one ZIP.

    Args:
        paths: Absolute input paths.
        output_path: Absolute destination path of the archive.
        preserve_structure: Keep each input's own name as a path prefix.
        settings: Optional engine settings (compression method and level).

    Returns:
        ServiceResponse: data = {success, path, message, size, entry_count, skipped}.
    """
    error = _check_path_list(paths, "paths") or _check_abs_path(output_path, "outputPath")
    if error:
        return error

    cfg, _ = validate_config(settings or {})
    try:
        result = archiver.build_archive(
            paths,
            output_path,
            preserve_structure=preserve_structure,
            compression=cfg["compression"],
            compression_level=cfg["compression_level"],
        )
    except FolderVaultError as e:
        return _failure(e.code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected compression failure: {e}")
        return _failure(const.COMPRESSION_ERROR, str(e))

    message = f"Successfully compressed {len(paths)} item(s)"
    if result.total_bytes_written is None:
        message += " (archive size unavailable)"

    return create_success_response({
        "success": True,
        "path": result.output_path,
        "message": message,
        "size": result.total_bytes_written,
        "entry_count": result.entry_count,
        "skipped": result.skipped_count,
    })


def compress_folder(
        source_path: str,
        destination_path: str,
        *,
        settings: Optional[Dict[str, Any]] = None,
) -> ServiceResponse:
    """
    Archive the contents of a single folder; members are named relative to it.

    Returns:
        ServiceResponse: data = {success, zip_path, size}.
    """
    error = _check_abs_path(source_path, "sourcePath") or _check_abs_path(
        destination_path, "destinationPath"
    )
    if error:
        return error

    cfg, _ = validate_config(settings or {})
    try:
        result = archiver.build_archive(
            [source_path],
            destination_path,
            preserve_structure=True,
            compression=cfg["compression"],
            compression_level=cfg["compression_level"],
            contents_only=True,
        )
    except InputNotFoundError:
        return _failure(const.SOURCE_NOT_FOUND, "Source folder does not exist")
    except FolderVaultError as e:
        return _failure(e.code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected compression failure: {e}")
        return _failure(const.COMPRESSION_ERROR, str(e))

    data: Dict[str, Any] = {"success": True, "zip_path": result.output_path}
    if result.total_bytes_written is not None:
        data["size"] = result.total_bytes_written
    return create_success_response(data)


def extract_archive(zip_path: str, destination_path: str) -> ServiceResponse:
    """
    Unpack a ZIP archive into a directory.

    Returns:
        ServiceResponse: data = {success, extracted_path, entry_count}.
    """
    error = _check_abs_path(zip_path, "zipPath") or _check_abs_path(
        destination_path, "destinationPath"
    )
    if error:
        return error

    try:
        count = extractor.extract_archive(zip_path, destination_path)
    except FolderVaultError as e:
        return _failure(e.code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected extraction failure: {e}")
        return _failure(const.EXTRACTION_FAILED, str(e))

    return create_success_response({
        "success": True,
        "extracted_path": destination_path,
        "entry_count": count,
    })


# -----------------------------------------------------------------------------
# METRICS OPERATIONS
# -----------------------------------------------------------------------------

def get_directory_size(path: str, include_hidden: bool = True) -> ServiceResponse:
    """Total byte size of every regular file under `path`."""
    return _run_metric(metrics.directory_size, path, include_hidden, const.SIZE_CALCULATION_ERROR)


def count_items(path: str, include_hidden: bool = True) -> ServiceResponse:
    """Number of files and directories under `path`."""
    return _run_metric(metrics.count_items, path, include_hidden, const.COUNT_ERROR)


def _run_metric(
        func: Callable[..., int],
        path: str,
        include_hidden: bool,
        default_code: str,
) -> ServiceResponse:
    error = _check_abs_path(path, "path")
    if error:
        return error

    try:
        return create_success_response(func(path, include_hidden))
    except FolderVaultError as e:
        return _failure(e.code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected metrics failure for '{path}': {e}")
        return _failure(default_code, str(e))


# -----------------------------------------------------------------------------
# METHOD DISPATCH
# -----------------------------------------------------------------------------

def handle_call(
        method: str,
        arguments: Optional[Mapping[str, Any]],
        *,
        settings: Optional[Dict[str, Any]] = None,
) -> ServiceResponse:
    """
    Route a named call with a raw argument mapping to a boundary operation.

    Supported methods: compressFolders, compressFolder, extractZip,
    getDirectorySize, countItems.

    Args:
        method: Method name.
        arguments: Raw argument mapping as received from the caller.
        settings: Optional engine settings forwarded to archive operations.

    Returns:
        ServiceResponse: The operation result, INVALID_ARGS for missing or
        mistyped arguments, or NOT_IMPLEMENTED for unknown methods.
    """
    args = arguments if isinstance(arguments, Mapping) else {}
    logger.debug(f"Dispatching call '{method}'")

    if method == "compressFolders":
        paths = args.get("paths")
        output_path = args.get("outputPath")
        if not isinstance(paths, list) or not isinstance(output_path, str):
            return _failure(const.INVALID_ARGS, "Missing required arguments: paths, outputPath")
        preserve = args.get("preserveStructure", True)
        if not isinstance(preserve, bool):
            preserve = True
        return compress_folders(paths, output_path, preserve, settings=settings)

    if method == "compressFolder":
        source = args.get("sourcePath")
        destination = args.get("destinationPath")
        if not isinstance(source, str) or not isinstance(destination, str):
            return _failure(const.INVALID_ARGS, "Missing required arguments")
        return compress_folder(source, destination, settings=settings)

    if method == "extractZip":
        zip_path = args.get("zipPath")
        destination = args.get("destinationPath")
        if not isinstance(zip_path, str) or not isinstance(destination, str):
            return _failure(const.INVALID_ARGS, "Missing required arguments")
        return extract_archive(zip_path, destination)

    if method in ("getDirectorySize", "countItems"):
        path = args.get("path")
        if not isinstance(path, str):
            return _failure(const.INVALID_ARGS, "Missing required argument: path")
        include_hidden = args.get("includeHidden", True)
        if not isinstance(include_hidden, bool):
            include_hidden = True
        if method == "getDirectorySize":
            return get_directory_size(path, include_hidden)
        return count_items(path, include_hidden)

    return _failure(const.NOT_IMPLEMENTED, f"Method not implemented: {method}")


def submit(
        method: str,
        arguments: Optional[Mapping[str, Any]],
        on_complete: Optional[Callable[[ServiceResponse], None]] = None,
        *,
        settings: Optional[Dict[str, Any]] = None,
) -> "Future[ServiceResponse]":
    """Run `handle_call` on a background worker; see run_offline."""
    return run_offline(
        lambda: handle_call(method, arguments, settings=settings),
        on_complete=on_complete,
        name=f"foldervault-{method}",
    )


# -----------------------------------------------------------------------------
# ARGUMENT CHECKS
# -----------------------------------------------------------------------------

def _check_abs_path(value: Any, field: str) -> Optional[ServiceResponse]:
    if not isinstance(value, str) or not value.strip():
        return _failure(const.INVALID_ARGS, f"Missing required argument: {field}")
    if not os.path.isabs(value):
        return _failure(const.INVALID_ARGS, f"Argument '{field}' must be an absolute path: {value}")
    return None


def _check_path_list(value: Any, field: str) -> Optional[ServiceResponse]:
    if not isinstance(value, (list, tuple)):
        return _failure(const.INVALID_ARGS, f"Missing required argument: {field}")
    for item in value:
        if not isinstance(item, str):
            return _failure(const.INVALID_ARGS, f"Argument '{field}' must contain only strings.")
        if not os.path.isabs(item):
            return _failure(const.INVALID_ARGS, f"Argument '{field}' must contain absolute paths: {item}")
    return None


def _failure(code: str, message: str) -> ServiceResponse:
    logger.error(f"{code}: {message}")
    return create_error_response(code, message)
