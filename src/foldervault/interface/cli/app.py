from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, persisted settings, CLI overrides), dispatch to the service
boundary on a background worker, and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional, Tuple

from foldervault.core.services.executor import run_offline
from foldervault.core.validator import validate_config
from foldervault.domain import constants as const
from foldervault.domain.archive_models import ServiceResponse
from foldervault.domain.config import get_default_config, load_config, save_config
from foldervault.infra.fs import normalize_path
from foldervault.infra.logging import LoggingConfig, configure_logging, get_logger
from foldervault.interface import api
from foldervault.interface.cli import args as cli_args

logger = get_logger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

_INVALID_INPUT_CODES = {
    const.INVALID_ARGS,
    const.FILE_NOT_FOUND,
    const.SOURCE_NOT_FOUND,
    const.ZIP_NOT_FOUND,
}

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (defaults vs persisted state) and overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    overrides = cli_args.args_to_overrides(args)
    settings, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    # 3. Logging bootstrap (console stderr plus optional rotating file)
    configure_logging(LoggingConfig.from_settings(settings, debug=args.debug))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(settings)
        logger.info("Effective settings saved as the new defaults.")

    # 4. Dispatch on a worker thread; the CLI simply waits for the result
    method, call_args = _build_call(args, settings)
    logger.debug(f"CLI command '{args.command}' mapped to '{method}'.")
    try:
        future = run_offline(
            lambda: api.handle_call(method, call_args, settings=settings),
            name=f"foldervault-cli-{args.command}",
        )
        response = future.result()
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(response.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(args.command, response)

    if response.ok:
        return EXIT_OK
    if response.code in _INVALID_INPUT_CODES:
        return EXIT_INVALID_INPUT
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge known, non-None override values into the base config."""
    out = dict(base)
    known = set(get_default_config())
    for k, v in overrides.items():
        if k in known and v is not None:
            out[k] = v
    return out


def _build_call(args: Any, settings: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """Translate a parsed subcommand into a (method, arguments) pair."""
    if args.command == "compress":
        paths = [normalize_path(p) for p in args.paths]
        output_path = normalize_path(args.output_path)
        if args.contents and len(paths) == 1:
            return "compressFolder", {"sourcePath": paths[0], "destinationPath": output_path}
        if args.contents:
            logger.warning("--contents applies to a single folder; ignoring it.")
        return "compressFolders", {
            "paths": paths,
            "outputPath": output_path,
            "preserveStructure": settings["preserve_structure"],
        }

    if args.command == "extract":
        return "extractZip", {
            "zipPath": normalize_path(args.zip_path),
            "destinationPath": normalize_path(args.destination_path),
        }

    method = "getDirectorySize" if args.command == "size" else "countItems"
    return method, {
        "path": normalize_path(args.path),
        "includeHidden": settings["metrics_include_hidden"],
    }

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(command: str, response: ServiceResponse) -> None:
    """
    Format and print a boundary response to the terminal.

    Args:
        command: The CLI subcommand that produced the response.
        response: The response to render.
    """
    if not response.ok:
        print(f"ERROR [{response.code}]: {response.message}", file=sys.stderr)
        return

    data = response.data
    if command == "size":
        print(f"{data} bytes ({_human_size(data)})")
        return
    if command == "count":
        print(f"{data} item(s)")
        return

    if command == "extract":
        print(f"Extracted {data['entry_count']} member(s) to {data['extracted_path']}")
        return

    path = data.get("path") or data.get("zip_path")
    print(data.get("message") or "Archive created.")
    print(f"Archive: {path}")
    size = data.get("size")
    if size is not None:
        print(f"Size: {size} bytes ({_human_size(size)})")
    if "entry_count" in data:
        print(f"Members: {data['entry_count']}")
    if data.get("skipped"):
        print(f"Unreadable entries skipped: {data['skipped']}")


def _human_size(num: float) -> str:
    for unit in ("B", "KB", "MB", "GB"):
        if abs(num) < 1024:
            return f"{num:.0f} {unit}" if unit == "B" else f"{num:.1f} {unit}"
        num /= 1024
    return f"{num:.1f} TB"

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
