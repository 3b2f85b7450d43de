from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from ..config import EngineSettings
from ..utils.grid_ops import cell_coords, values_to_frame
from .options import GeneratorOptions
from .palettes import Palette
from .rng import RandomSource

THRESHOLD = 0.5


def pattern_field(width: int, height: int, rotation: float, lobes: int = 3) -> np.ndarray:
    yy, xx = cell_coords(width, height)
    dx = xx - width / 2
    dy = yy - height / 2
    radius = min(width, height) / 3
    distance = np.hypot(dx, dy)
    angle = np.arctan2(dy, dx)
    return np.sin(lobes * (angle + rotation)) * np.cos(distance / radius * math.pi)


def render_geometric(width: int, height: int, rotation: float, chars: Palette, lobes: int = 3) -> str:
    strength = np.abs(pattern_field(width, height, rotation, lobes))
    return values_to_frame(strength, strength > THRESHOLD, chars)


def geometric_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    settings = settings or EngineSettings()
    chars = options.palette(default="geometric")
    return [
        render_geometric(
            options.width, options.height, (f / frame_count) * 2 * math.pi, chars, settings.geometric_lobes
        )
        for f in range(frame_count)
    ]
