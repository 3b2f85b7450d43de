"""Tunable engine constants and logging setup.

Settings can be loaded from a YAML mapping::

    particle_count: 40
    fire_cooling: 3.0

``default_settings()`` reads the file named by ``ASCIIMORPH_SETTINGS`` when set.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_ENV = "ASCIIMORPH_SETTINGS"
LOG_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"


@dataclass(frozen=True)
class EngineSettings:
    particle_count: int = 20
    particle_life_step: float = 0.02
    trail_length: int = 10
    fire_cooling: float = 3.2
    fire_ignition: float = 0.7
    geometric_lobes: int = 3
    wave_cycles: float = 2.0
    wave_band: int = 2
    speck_count: int = 50
    default_fps: float = 10.0
    default_speed_ms: int = 150
    min_speed_ms: int = 16

    def replace(self, **overrides: Any) -> "EngineSettings":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        known = {f.name: f.type for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"unknown settings: {', '.join(unknown)}")
        defaults = cls()
        values = {}
        for key, value in data.items():
            cast = type(getattr(defaults, key))
            try:
                values[key] = cast(value)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"invalid value for {key}: {value!r}") from e
        return cls(**values)


def load_settings(path: Union[str, Path, None]) -> EngineSettings:
    if path is None:
        return EngineSettings()
    path = Path(path)
    if not path.exists():
        logger.debug("Settings file %s not found, using defaults", path)
        return EngineSettings()
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    settings = EngineSettings.from_dict(data)
    logger.info("Loaded engine settings from %s", path)
    return settings


def default_settings() -> EngineSettings:
    return load_settings(os.environ.get(SETTINGS_ENV))


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[Any] = None) -> None:
    """Attach a console handler to the package logger (used by the preview script)."""
    root = logging.getLogger("asciimorph")
    root.setLevel(level)
    if not any(getattr(h, "_asciimorph", False) for h in root.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        handler._asciimorph = True  # type: ignore[attr-defined]
        root.addHandler(handler)
