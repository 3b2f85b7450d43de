"""Preset bundles and the versioned animation document.

Only plain-data conversion lives here; reading and writing files is left to
the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .core.errors import AsciiMorphError, ConfigError
from .core.frames import AnimationSequence
from .core.overlays import RippleConfig
from .core.playback import DEFAULT_SPEED_MS

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0.0"


@dataclass
class PresetConfig:
    speed: int = DEFAULT_SPEED_MS
    interactive: bool = True
    ripple: RippleConfig = field(default_factory=RippleConfig)


@dataclass
class AsciiPreset:
    name: str
    description: str
    frames: List[str]
    config: PresetConfig = field(default_factory=PresetConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "frames": list(self.frames),
            "config": {
                "speed": self.config.speed,
                "interactive": self.config.interactive,
                "rippleConfig": self.config.ripple.to_dict(),
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AsciiPreset":
        if not isinstance(data, dict) or "name" not in data:
            raise ConfigError("preset must be a mapping with a 'name'")
        cfg = data.get("config") or {}
        try:
            config = PresetConfig(
                speed=int(cfg.get("speed", DEFAULT_SPEED_MS)),
                interactive=bool(cfg.get("interactive", True)),
                ripple=RippleConfig.from_dict(cfg.get("rippleConfig") or {}),
            )
        except (TypeError, ValueError, AsciiMorphError) as e:
            raise ConfigError(f"invalid config for preset {data['name']!r}: {e}") from e
        return cls(
            name=str(data["name"]),
            description=str(data.get("description", "")),
            frames=[str(f) for f in data.get("frames") or []],
            config=config,
        )


@dataclass
class AnimationDocument:
    animations: Dict[str, AnimationSequence] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    version: str = FORMAT_VERSION

    def add(self, sequence: AnimationSequence, key: Optional[str] = None) -> None:
        self.animations[key or sequence.metadata.name] = sequence

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "version": self.version,
            "animations": {k: s.to_dict() for k, s in self.animations.items()},
        }
        if self.metadata:
            doc["metadata"] = dict(self.metadata)
        return doc

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationDocument":
        if not isinstance(data, dict):
            raise ConfigError("animation document must be a mapping")
        version = data.get("version")
        if version != FORMAT_VERSION:
            raise ConfigError(f"unsupported document version {version!r}")
        animations = data.get("animations") or {}
        if not isinstance(animations, dict):
            raise ConfigError("'animations' must be a mapping")
        try:
            parsed = {str(k): AnimationSequence.from_dict(v) for k, v in animations.items()}
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"malformed animation entry: {e}") from e
        logger.debug("Loaded animation document with %d sequences", len(parsed))
        return cls(parsed, dict(data.get("metadata") or {}), version)
