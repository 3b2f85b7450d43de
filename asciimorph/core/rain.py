from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..config import EngineSettings
from ..utils.grid_ops import blank_grid, grid_to_frame
from .options import GeneratorOptions
from .palettes import random_glyph
from .rng import RandomSource

RAIN_GLYPHS = tuple("01アイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワヲン")


def _speed(rng: RandomSource) -> float:
    return 0.5 + rng() * 0.5


@dataclass
class Trail:
    head: float
    speed: float

    def advance(self, height: int, rng: RandomSource) -> None:
        """Move the head down; past the bottom it restarts at 0 with a new speed."""
        self.head += self.speed
        if self.head >= height:
            self.head = 0.0
            self.speed = _speed(rng)

    def paint(self, grid: List[List[str]], col: int, window: int, rng: RandomSource) -> None:
        # the head cell itself is never drawn
        for row in range(len(grid)):
            distance = self.head - row
            if 0 < distance < window and rng() < 1 - distance / window:
                grid[row][col] = random_glyph(RAIN_GLYPHS, rng)


def matrix_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    """Per-column falling trails; glyphs thin out linearly behind each head."""
    if frame_count <= 0:
        return []
    settings = settings or EngineSettings()
    rng = rng or options.random()
    w, h = options.width, options.height
    window = max(1, settings.trail_length)

    trails = []
    for _ in range(w):
        head = float(int(rng() * h))
        trails.append(Trail(head, _speed(rng)))

    frames = []
    for _ in range(frame_count):
        grid = blank_grid(w, h)
        for col, trail in enumerate(trails):
            trail.advance(h, rng)
            trail.paint(grid, col, window, rng)
        frames.append(grid_to_frame(grid))
    return frames
