from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs `main()` in-process with the persisted configuration bypassed and
checks exit codes and rendered output.
"""

import json
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from foldervault.domain.config import load_config
from foldervault.infra.logging import shutdown_logging
from foldervault.interface.cli.app import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_logging()


def test_cli_compress_human_output(sample_tree: Path, tmp_path: Path, capsys) -> None:
    out = tmp_path / "out.zip"

    code = main(["--use-defaults", "compress", str(sample_tree), "-o", str(out)])

    assert code == 0
    stdout = capsys.readouterr().out
    assert "Successfully compressed 1 item(s)" in stdout
    assert "Members: 5" in stdout
    assert out.exists()


def test_cli_compress_flatten_json(sample_tree: Path, tmp_path: Path, capsys) -> None:
    out = tmp_path / "out.zip"

    code = main(["--use-defaults", "--json", "compress", str(sample_tree), "-o", str(out), "--flatten"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    with zipfile.ZipFile(out) as zf:
        assert all("/" not in n for n in zf.namelist())


def test_cli_contents_mode(sample_tree: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.zip"

    assert main(["--use-defaults", "compress", str(sample_tree), "-o", str(out), "--contents"]) == 0
    with zipfile.ZipFile(out) as zf:
        assert "a.txt" in zf.namelist()


def test_cli_missing_input_exit_code(tmp_path: Path, capsys) -> None:
    code = main(["--use-defaults", "compress", str(tmp_path / "ghost"), "-o", str(tmp_path / "o.zip")])

    assert code == 2
    assert "FILE_NOT_FOUND" in capsys.readouterr().err


def test_cli_size_and_count(sample_tree: Path, capsys) -> None:
    assert main(["--use-defaults", "--json", "size", str(sample_tree)]) == 0
    assert json.loads(capsys.readouterr().out)["data"] == 29

    assert main(["--use-defaults", "--json", "count", str(sample_tree), "--skip-hidden"]) == 0
    assert json.loads(capsys.readouterr().out)["data"] == 8


def test_cli_extract(sample_tree: Path, tmp_path: Path, capsys) -> None:
    out = tmp_path / "out.zip"
    main(["--use-defaults", "compress", str(sample_tree), "-o", str(out)])
    capsys.readouterr()

    code = main(["--use-defaults", "extract", str(out), "-d", str(tmp_path / "dest")])

    assert code == 0
    assert "Extracted 5 member(s)" in capsys.readouterr().out
    assert (tmp_path / "dest" / "project" / "a.txt").exists()


def test_cli_save_config_persists_overrides(sample_tree: Path, tmp_path: Path) -> None:
    """--save-config writes the effective settings, which later runs load."""
    data_dir = tmp_path / "FolderVault"
    data_dir.mkdir()
    out = tmp_path / "out.zip"

    with patch("foldervault.domain.config.get_user_data_dir", return_value=str(data_dir)):
        code = main([
            "--save-config", "compress", str(sample_tree), "-o", str(out), "--flatten", "--level", "9",
        ])
        loaded = load_config()

    assert code == 0
    assert (data_dir / "config.json").exists()
    assert loaded["preserve_structure"] is False
    assert loaded["compression_level"] == 9
