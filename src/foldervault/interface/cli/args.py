from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (one subcommand per boundary operation) and
translates parsed namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

from foldervault.domain import constants as const

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the FolderVault CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="foldervault",
        description="Create ZIP archives from files and folders and measure directory trees.",
    )

    # --- Global Options ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the raw service response as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective settings (including this run's overrides) as the new defaults.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- compress ---
    c = sub.add_parser("compress", help="Archive files/folders into a single ZIP.")
    c.add_argument("paths", nargs="+", help="Files or folders to archive.")
    c.add_argument(
        "-o", "--output",
        dest="output_path",
        required=True,
        help="Destination archive path.",
    )
    structure = c.add_mutually_exclusive_group()
    structure.add_argument(
        "--flatten",
        dest="preserve_structure",
        action="store_false",
        default=None,
        help="Store every file by its base name only.",
    )
    structure.add_argument(
        "--preserve",
        dest="preserve_structure",
        action="store_true",
        help="Keep each input's folder name as a path prefix (default).",
    )
    c.add_argument(
        "--store",
        action="store_true",
        help="Store members without compression.",
    )
    c.add_argument(
        "--level",
        dest="compression_level",
        type=int,
        choices=range(const.MIN_COMPRESSION_LEVEL, const.MAX_COMPRESSION_LEVEL + 1),
        metavar="{0-9}",
        default=None,
        help="Deflate compression level.",
    )
    c.add_argument(
        "--contents",
        action="store_true",
        help="Archive the contents of a single folder, without the folder itself.",
    )

    # --- size / count ---
    s = sub.add_parser("size", help="Total byte size of a directory tree.")
    s.add_argument("path", help="Directory to measure.")
    s.add_argument(
        "--skip-hidden",
        action="store_true",
        help="Ignore dot-prefixed files and folders.",
    )

    n = sub.add_parser("count", help="Number of files and folders in a directory tree.")
    n.add_argument("path", help="Directory to count.")
    n.add_argument(
        "--skip-hidden",
        action="store_true",
        help="Ignore dot-prefixed files and folders.",
    )

    # --- extract ---
    x = sub.add_parser("extract", help="Extract a ZIP archive.")
    x.add_argument("zip_path", help="Archive to extract.")
    x.add_argument(
        "-d", "--dest",
        dest="destination_path",
        required=True,
        help="Destination directory.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset (None means "unset").
    """
    overrides: Dict[str, Any] = {
        "log_file": args.log_file,
    }

    if args.debug:
        overrides["log_level"] = "DEBUG"

    if args.command == "compress":
        overrides["preserve_structure"] = args.preserve_structure
        overrides["compression_level"] = args.compression_level
        if args.store:
            overrides["compression"] = "stored"

    if args.command in ("size", "count") and args.skip_hidden:
        overrides["metrics_include_hidden"] = False

    return overrides
