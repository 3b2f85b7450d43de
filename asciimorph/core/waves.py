from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..config import EngineSettings
from ..utils.grid_ops import cell_coords, values_to_frame
from .options import GeneratorOptions
from .rng import RandomSource

WAVE_GLYPHS = ("～", "∿", "≈", "≋", "~")


@dataclass
class WaveParams:
    cycles: float = 2.0  # full sine periods across the width
    band: int = 2  # rows either side of the crest that get drawn

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> "WaveParams":
        return cls(settings.wave_cycles, settings.wave_band)


def wave_values(width: int, phase: float, params: WaveParams) -> np.ndarray:
    x = np.arange(width, dtype=np.float64) / width
    return np.sin(x * 2 * math.pi * params.cycles + phase) * 0.5 + 0.5


def render_wave(width: int, height: int, phase: float, params: WaveParams) -> str:
    yy, _ = cell_coords(width, height)
    values = wave_values(width, phase, params)
    crest = np.floor(values * height)
    mask = np.abs(yy - crest[np.newaxis, :]) < params.band
    return values_to_frame(np.broadcast_to(values, (height, width)), mask, WAVE_GLYPHS)


def wave_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    params = WaveParams.from_settings(settings or EngineSettings())
    return [
        render_wave(options.width, options.height, (f / frame_count) * 2 * math.pi, params)
        for f in range(frame_count)
    ]
