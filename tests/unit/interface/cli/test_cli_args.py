from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Subcommand parsing and required arguments.
2. Mapping of CLI flags to configuration overrides.
"""

import pytest

from foldervault.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_compress_defaults_leave_settings_untouched() -> None:
    args = parse_args(["compress", "/a", "/b", "-o", "/out.zip"])
    overrides = args_to_overrides(args)

    assert args.paths == ["/a", "/b"]
    assert args.output_path == "/out.zip"
    assert overrides["preserve_structure"] is None
    assert overrides["compression_level"] is None
    assert "compression" not in overrides


def test_compress_flags_mapping() -> None:
    args = parse_args(["--debug", "compress", "/a", "-o", "/o.zip", "--flatten", "--store", "--level", "3"])
    overrides = args_to_overrides(args)

    assert overrides["preserve_structure"] is False
    assert overrides["compression"] == "stored"
    assert overrides["compression_level"] == 3
    assert overrides["log_level"] == "DEBUG"


def test_preserve_and_flatten_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        parse_args(["compress", "/a", "-o", "/o.zip", "--flatten", "--preserve"])


def test_level_out_of_range_rejected() -> None:
    with pytest.raises(SystemExit):
        parse_args(["compress", "/a", "-o", "/o.zip", "--level", "12"])


def test_compress_requires_output() -> None:
    with pytest.raises(SystemExit):
        parse_args(["compress", "/a"])


def test_metrics_skip_hidden_mapping() -> None:
    overrides = args_to_overrides(parse_args(["size", "/data", "--skip-hidden"]))

    assert overrides["metrics_include_hidden"] is False


def test_global_options_are_captured() -> None:
    args = parse_args(["--json", "--log-file", "/tmp/fv.log", "count", "/data"])

    assert args.json_output is True
    assert args_to_overrides(args)["log_file"] == "/tmp/fv.log"


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])


def test_save_config_flag() -> None:
    assert parse_args(["--save-config", "count", "/data"]).save_config is True
    assert parse_args(["count", "/data"]).save_config is False
