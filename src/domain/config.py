"""Load engine settings from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import tomllib

DEFAULT_RATING = 5000


@dataclass(frozen=True)
class HistoryConfig:
    """Display affordances for sparse rating histories."""

    synthesize_sparse_history: bool = True
    synthetic_floor: int = 5000
    synthetic_ceiling: int = 9999
    synthetic_below_offset: int = 100
    synthetic_above_offset: int = 150


@dataclass(frozen=True)
class EngineConfig:
    name: str = "default"
    description: str | None = None
    file_path: Path | None = None
    default_rating: int = DEFAULT_RATING
    scale_factor: float = 400.0
    trend_window_hours: int = 24
    history: HistoryConfig = field(default_factory=HistoryConfig)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "default_rating": self.default_rating,
            "scale_factor": self.scale_factor,
            "trend_window_hours": self.trend_window_hours,
            "synthesize_sparse_history": self.history.synthesize_sparse_history,
            "synthetic_floor": self.history.synthetic_floor,
            "synthetic_ceiling": self.history.synthetic_ceiling,
            "synthetic_below_offset": self.history.synthetic_below_offset,
            "synthetic_above_offset": self.history.synthetic_above_offset,
        }


def load_engine_config(file_path: Path) -> EngineConfig:
    """Load and validate one engine TOML config file."""
    if not file_path.is_file():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_engine_config(raw, file_path)


def load_engine_configs(config_dir: Path) -> list[EngineConfig]:
    """Load all TOML files in a directory with duplicate-name validation."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    configs = [load_engine_config(file_path) for file_path in config_files]

    names = [config.name for config in configs]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate engine config names found in {config_dir}: {names}")

    return configs


def _parse_engine_config(raw: dict[str, Any], file_path: Path) -> EngineConfig:
    engine_raw = raw.get("engine", {})
    ratings_raw = raw.get("ratings", {})
    history_raw = raw.get("history", {})

    name = str(engine_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [engine].name is required")

    description_value = engine_raw.get("description")
    description = None if description_value is None else str(description_value)

    history = HistoryConfig(
        synthesize_sparse_history=bool(history_raw.get("synthesize_sparse_history", True)),
        synthetic_floor=int(history_raw.get("synthetic_floor", 5000)),
        synthetic_ceiling=int(history_raw.get("synthetic_ceiling", 9999)),
        synthetic_below_offset=int(history_raw.get("synthetic_below_offset", 100)),
        synthetic_above_offset=int(history_raw.get("synthetic_above_offset", 150)),
    )
    config = EngineConfig(
        name=name,
        description=description,
        file_path=file_path,
        default_rating=int(ratings_raw.get("default_rating", DEFAULT_RATING)),
        scale_factor=float(ratings_raw.get("scale_factor", 400.0)),
        trend_window_hours=int(ratings_raw.get("trend_window_hours", 24)),
        history=history,
    )
    _validate_config(file_path=file_path, config=config)
    return config


def _validate_config(*, file_path: Path, config: EngineConfig) -> None:
    if config.default_rating < 0:
        raise ValueError(f"{file_path}: [ratings].default_rating must be >= 0")
    if config.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [ratings].scale_factor must be > 0")
    if config.trend_window_hours <= 0:
        raise ValueError(f"{file_path}: [ratings].trend_window_hours must be > 0")
    if config.history.synthetic_below_offset < 0:
        raise ValueError(f"{file_path}: [history].synthetic_below_offset must be >= 0")
    if config.history.synthetic_above_offset < 0:
        raise ValueError(f"{file_path}: [history].synthetic_above_offset must be >= 0")
    if config.history.synthetic_floor > config.history.synthetic_ceiling:
        raise ValueError(
            f"{file_path}: [history].synthetic_floor must be <= [history].synthetic_ceiling"
        )


__all__ = [
    "DEFAULT_RATING",
    "EngineConfig",
    "HistoryConfig",
    "load_engine_config",
    "load_engine_configs",
]
