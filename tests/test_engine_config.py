"""Tests for TOML-based engine config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.config import EngineConfig, load_engine_config, load_engine_configs

ROOT_DIR = Path(__file__).resolve().parents[1]


def test_load_engine_config_reads_all_sections(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        """
[engine]
name = "custom"
description = "Stricter display settings"

[ratings]
default_rating = 4500
scale_factor = 600.0
trend_window_hours = 48

[history]
synthesize_sparse_history = false
synthetic_floor = 4000
synthetic_ceiling = 9000
synthetic_below_offset = 50
synthetic_above_offset = 75
""".strip()
    )

    config = load_engine_config(config_path)

    assert config.name == "custom"
    assert config.description == "Stricter display settings"
    assert config.file_path == config_path
    assert config.default_rating == 4500
    assert config.scale_factor == pytest.approx(600.0)
    assert config.trend_window_hours == 48
    assert config.history.synthesize_sparse_history is False
    assert config.history.synthetic_floor == 4000
    assert config.history.synthetic_ceiling == 9000
    assert config.history.synthetic_below_offset == 50
    assert config.history.synthetic_above_offset == 75


def test_missing_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "minimal.toml"
    config_path.write_text('[engine]\nname = "minimal"\n')

    config = load_engine_config(config_path)

    assert config.as_config_json() == {**EngineConfig().as_config_json(), "name": "minimal"}


def test_shipped_default_config_matches_code_defaults() -> None:
    config = load_engine_config(ROOT_DIR / "configs" / "engine" / "default.toml")

    assert config.as_config_json() == EngineConfig().as_config_json()


def test_engine_name_is_required(tmp_path: Path) -> None:
    config_path = tmp_path / "nameless.toml"
    config_path.write_text("[ratings]\ndefault_rating = 5000\n")

    with pytest.raises(ValueError, match=r"\[engine\].name is required"):
        load_engine_config(config_path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("[ratings]\ndefault_rating = -1\n", "default_rating"),
        ("[ratings]\nscale_factor = 0.0\n", "scale_factor"),
        ("[ratings]\ntrend_window_hours = 0\n", "trend_window_hours"),
        ("[history]\nsynthetic_below_offset = -5\n", "synthetic_below_offset"),
        ("[history]\nsynthetic_above_offset = -5\n", "synthetic_above_offset"),
        ("[history]\nsynthetic_floor = 9000\nsynthetic_ceiling = 8000\n", "synthetic_floor"),
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, body: str, message: str) -> None:
    config_path = tmp_path / "bad.toml"
    config_path.write_text(f'[engine]\nname = "bad"\n\n{body}')

    with pytest.raises(ValueError, match=message):
        load_engine_config(config_path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_engine_config(tmp_path / "absent.toml")


def test_load_engine_configs_from_directory(tmp_path: Path) -> None:
    (tmp_path / "b.toml").write_text('[engine]\nname = "beta"\n')
    (tmp_path / "a.toml").write_text('[engine]\nname = "alpha"\n')
    (tmp_path / "notes.txt").write_text("ignored")

    configs = load_engine_configs(tmp_path)

    assert [config.name for config in configs] == ["alpha", "beta"]


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('[engine]\nname = "dup"\n')
    (tmp_path / "b.toml").write_text('[engine]\nname = "dup"\n')

    with pytest.raises(ValueError, match="Duplicate engine config names"):
        load_engine_configs(tmp_path)


def test_empty_directory_raises_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_engine_configs(tmp_path)


def test_config_path_must_be_directory(tmp_path: Path) -> None:
    file_path = tmp_path / "single.toml"
    file_path.write_text('[engine]\nname = "single"\n')

    with pytest.raises(NotADirectoryError):
        load_engine_configs(file_path)
    with pytest.raises(FileNotFoundError):
        load_engine_configs(tmp_path / "missing")
