from __future__ import annotations

from typing import List, Optional

import numpy as np

from ..config import EngineSettings
from ..utils.grid_ops import indices_to_frame
from .options import GeneratorOptions
from .rng import RandomSource

FIRE_GLYPHS = (" ", "·", "∘", "○", "◉", "●", "█")
MAX_HEAT = len(FIRE_GLYPHS) - 1


def _ignite(rng: RandomSource, cols: int, ignition: float) -> np.ndarray:
    row = np.zeros(cols, dtype=np.int64)
    for x in range(cols):
        if rng() < ignition:
            row[x] = MAX_HEAT
    return row


def _propagate_heat(bottom: np.ndarray, rows: int, cooling: float) -> np.ndarray:
    cols = bottom.shape[0]
    heat = np.zeros((rows, cols), dtype=np.int64)
    heat[rows - 1] = bottom
    for y in range(rows - 2, -1, -1):
        below = heat[y + 1]
        left = np.zeros(cols, dtype=np.int64)
        right = np.zeros(cols, dtype=np.int64)
        left[1:] = below[:-1]
        right[:-1] = below[1:]
        heat[y] = np.floor((below + left + right) / cooling).astype(np.int64)
    return heat


def render_fire(rng: RandomSource, cols: int, rows: int, settings: EngineSettings) -> str:
    heat = _propagate_heat(_ignite(rng, cols, settings.fire_ignition), rows, settings.fire_cooling)
    return indices_to_frame(heat, FIRE_GLYPHS)


def fire_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    settings = settings or EngineSettings()
    rng = rng or options.random()
    # no heat carries over between frames
    return [render_fire(rng, options.width, options.height, settings) for _ in range(frame_count)]
