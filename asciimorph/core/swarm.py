from __future__ import annotations

from typing import List, Optional

import numpy as np

from ..config import EngineSettings
from ..utils.grid_ops import blank_grid, grid_to_frame
from .options import GeneratorOptions
from .palettes import interpolate
from .rng import RandomSource

PARTICLE_GLYPHS = ("·", "∘", "○", "◯", "◉", "●")


class SwarmState:
    """Particle arrays for one synthesis call: x, y, vx, vy, life."""

    def __init__(self, rng: RandomSource, count: int, cols: int, rows: int):
        self.rng = rng
        self.cols = cols
        self.rows = rows
        self.x = np.zeros(count)
        self.y = np.zeros(count)
        self.vx = np.zeros(count)
        self.vy = np.zeros(count)
        self.life = np.zeros(count)
        for i in range(count):
            self.x[i] = rng() * cols
            self.y[i] = rng() * rows
            self.vx[i] = (rng() - 0.5) * 2
            self.vy[i] = (rng() - 0.5) * 2
            self.life[i] = 1.0 - rng()

    def __len__(self) -> int:
        return len(self.x)

    def step(self, life_step: float) -> None:
        self.x += self.vx
        self.y += self.vy
        self.life -= life_step
        self.x[self.x < 0] = self.cols - 1
        self.x[self.x >= self.cols] = 0
        self.y[self.y < 0] = self.rows - 1
        self.y[self.y >= self.rows] = 0
        for i in np.flatnonzero(self.life <= 0):
            self.x[i] = self.rng() * self.cols
            self.y[i] = self.rng() * self.rows
            self.life[i] = 1.0


def render_swarm(state: SwarmState) -> str:
    grid = blank_grid(state.cols, state.rows)
    # creation order: a later particle overwrites an earlier one in the same cell
    for i in range(len(state)):
        col = int(state.x[i])
        row = int(state.y[i])
        if 0 <= col < state.cols and 0 <= row < state.rows:
            grid[row][col] = interpolate(PARTICLE_GLYPHS, float(state.life[i]))
    return grid_to_frame(grid)


def particle_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    settings = settings or EngineSettings()
    state = SwarmState(rng or options.random(), settings.particle_count, options.width, options.height)
    frames = []
    for _ in range(frame_count):
        state.step(settings.particle_life_step)
        frames.append(render_swarm(state))
    return frames
