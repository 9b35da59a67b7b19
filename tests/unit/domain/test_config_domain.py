from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against corrupted config files.
3. Persistence (Save/Load) without touching real user data.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from foldervault.domain.config import get_default_config, load_config, save_config
from foldervault.domain.constants import CURRENT_CONFIG_VERSION


@pytest.fixture
def mock_user_data_dir(tmp_path: Path):
    """Redirect the user data directory to a temporary location."""
    config_dir = tmp_path / "FolderVault"
    config_dir.mkdir()
    with patch("foldervault.domain.config.get_user_data_dir", return_value=str(config_dir)):
        yield config_dir


def test_default_config_values() -> None:
    cfg = get_default_config()

    assert cfg["compression"] == "deflated"
    assert cfg["preserve_structure"] is True
    assert cfg["metrics_include_hidden"] is True


def test_load_fresh_state_returns_defaults(mock_user_data_dir: Path) -> None:
    """If no config file exists, the defaults are returned."""
    assert not (mock_user_data_dir / "config.json").exists()
    assert load_config() == get_default_config()


def test_load_corrupted_file_returns_defaults(mock_user_data_dir: Path) -> None:
    (mock_user_data_dir / "config.json").write_text("{ incomplete json ", encoding="utf-8")

    assert load_config() == get_default_config()


def test_load_non_dict_returns_defaults(mock_user_data_dir: Path) -> None:
    (mock_user_data_dir / "config.json").write_text("[1, 2, 3]", encoding="utf-8")

    assert load_config() == get_default_config()


def test_save_and_load_roundtrip(mock_user_data_dir: Path) -> None:
    """Saved values override defaults; the version stamp is written but not loaded."""
    cfg = get_default_config()
    cfg["compression_level"] = 9
    cfg["preserve_structure"] = False

    save_config(cfg)

    raw = json.loads((mock_user_data_dir / "config.json").read_text(encoding="utf-8"))
    assert raw["version"] == CURRENT_CONFIG_VERSION

    loaded = load_config()
    assert loaded["compression_level"] == 9
    assert loaded["preserve_structure"] is False
    assert "version" not in loaded


def test_partial_file_is_merged_with_defaults(mock_user_data_dir: Path) -> None:
    (mock_user_data_dir / "config.json").write_text('{"log_level": "DEBUG"}', encoding="utf-8")

    loaded = load_config()

    assert loaded["log_level"] == "DEBUG"
    assert loaded["compression"] == "deflated"
