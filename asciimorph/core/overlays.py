from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence, Tuple

from ..utils.grid_ops import BLANK, clamp01, frame_rows
from .errors import PaletteError
from .palettes import EFFECT_CHARACTERS, interpolate

DEFAULT_RADIUS = 0.1


class Pointer(NamedTuple):
    x: float
    y: float

    @classmethod
    def clamped(cls, x: float, y: float) -> "Pointer":
        return cls(float(clamp01(x)), float(clamp01(y)))


@dataclass
class RippleConfig:
    enabled: bool = True
    radius: float = DEFAULT_RADIUS
    characters: Sequence[str] = field(default_factory=lambda: EFFECT_CHARACTERS["ripple"])

    def __post_init__(self):
        self.characters = tuple(self.characters)
        if not self.characters:
            raise PaletteError("ripple characters must not be empty")
        radius = float(self.radius)
        if radius != radius or radius <= 0:
            radius = DEFAULT_RADIUS
        self.radius = min(radius, 1.0)

    def to_dict(self) -> dict:
        return {"enabled": self.enabled, "radius": self.radius, "characters": list(self.characters)}

    @classmethod
    def from_dict(cls, data: dict) -> "RippleConfig":
        return cls(
            enabled=bool(data.get("enabled", True)),
            radius=data.get("radius", DEFAULT_RADIUS),
            characters=data.get("characters") or EFFECT_CHARACTERS["ripple"],
        )


def apply_ripple(frame: str, pointer: Optional[Tuple[float, float]], config: RippleConfig) -> str:
    """Swap glyphs near ``pointer`` for ripple glyphs; background stays blank.

    Returns ``frame`` itself when the ripple is disabled or no pointer is known.
    """
    if not config.enabled or pointer is None:
        return frame
    px, py = pointer
    radius = config.radius
    lines = frame_rows(frame)
    out = []
    for row_index, line in enumerate(lines):
        row_y = row_index / len(lines)
        dist_y = abs(py - row_y)
        if dist_y >= radius * 2 or not line.strip():
            out.append(line)
            continue
        chars = list(line)
        for col_index, ch in enumerate(chars):
            if ch == BLANK:
                continue
            dist_x = abs(px - col_index / len(chars))
            if dist_x >= radius:
                continue
            distance = math.hypot(dist_x, dist_y)
            if distance < radius:
                chars[col_index] = interpolate(config.characters, 1 - distance / radius)
        out.append("".join(chars))
    return "\n".join(out)


class DistortionLayer:
    """Holds the last reported pointer; the host calls update_pointer()."""

    def __init__(self, config: Optional[RippleConfig] = None):
        self.config = config or RippleConfig()
        self.pointer: Optional[Pointer] = None

    def update_pointer(self, x: float, y: float) -> Pointer:
        self.pointer = Pointer.clamped(x, y)
        return self.pointer

    def clear_pointer(self) -> None:
        self.pointer = None

    def render(self, frame: str) -> str:
        return apply_ripple(frame, self.pointer, self.config)
