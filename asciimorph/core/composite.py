"""Floating block composition: a stencil shape over drifting background specks.

Draw priority is fixed and order dependent: the water band is painted first,
stencil blocks always overwrite, background specks only land on blank cells.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import EngineSettings
from ..utils.grid_ops import BLANK, blank_grid, grid_to_frame
from .options import GeneratorOptions
from .palettes import random_glyph
from .rng import RandomSource

BLOCK_GLYPH = "█"
SPECK_GLYPHS = ("·", "∘", "°", "•", "◦", "⁘", "⁙")

DEFAULT_STENCIL: Tuple[str, ...] = (
    "#   #          ",
    "#   #          ",
    "#   #   ### ## ",
    "#####   #  #  #",
    "    #   #  #  #",
    "    #   #  #  #",
    "    #   #  #  #",
)

SHAPE_FLOAT = 0.2
SPECK_FLOAT = 1.0
CLEARANCE = 2
WATER_ROWS = 3


@dataclass
class CompositeParams:
    floating: bool = True
    water: bool = False
    stencil: Sequence[str] = field(default_factory=lambda: DEFAULT_STENCIL)


@dataclass
class Block:
    x: int
    y: int
    glyph: str
    offset: float
    is_shape: bool


def stencil_cells(stencil: Sequence[str], width: int, height: int) -> List[Tuple[int, int]]:
    """Grid cells covered by the stencil once centred in a width x height grid."""
    sh = len(stencil)
    sw = max((len(r) for r in stencil), default=0)
    x0 = (width - sw) // 2
    y0 = (height - sh) // 2
    cells = []
    for dy, row in enumerate(stencil):
        for dx, ch in enumerate(row):
            if ch != BLANK:
                cells.append((x0 + dx, y0 + dy))
    return cells


def _layout(rng: RandomSource, w: int, h: int, params: CompositeParams, speck_count: int) -> List[Block]:
    blocks = [
        Block(x, y, BLOCK_GLYPH, rng() * 2 * math.pi, True)
        for x, y in stencil_cells(params.stencil, w, h)
    ]
    shape = [(b.x, b.y) for b in blocks]
    for _ in range(speck_count):
        x = int(rng() * w)
        y = int(rng() * h)
        if any(abs(sx - x) < CLEARANCE and abs(sy - y) < CLEARANCE for sx, sy in shape):
            continue
        blocks.append(Block(x, y, random_glyph(SPECK_GLYPHS, rng), rng() * 2 * math.pi, False))
    return blocks


def _paint_water(grid: List[List[str]], time: float) -> None:
    h = len(grid)
    for y in range(max(0, h - WATER_ROWS), h):
        for x in range(len(grid[y])):
            wave = math.sin(x * 0.1 + time * 2) * 0.5 + math.sin(y * 0.3 - time) * 0.3
            if abs(wave) > 0.4:
                grid[y][x] = "~"
            elif abs(wave) > 0.2:
                grid[y][x] = "≈"


def render_composite(blocks: List[Block], w: int, h: int, time: float, params: CompositeParams) -> str:
    grid = blank_grid(w, h)
    if params.water:
        _paint_water(grid, time)
    for block in blocks:
        y = float(block.y)
        if params.floating:
            amount = SHAPE_FLOAT if block.is_shape else SPECK_FLOAT
            y += math.sin(time * 0.5 + block.offset) * amount
        gx, gy = block.x, math.floor(y)
        if 0 <= gx < w and 0 <= gy < h:
            if block.is_shape or grid[gy][gx] == BLANK:
                grid[gy][gx] = block.glyph
    return grid_to_frame(grid)


def composite_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
    params: Optional[CompositeParams] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    settings = settings or EngineSettings()
    params = params or CompositeParams()
    w, h = options.width, options.height
    blocks = _layout(rng or options.random(), w, h, params, settings.speck_count)
    return [
        render_composite(blocks, w, h, (f / frame_count) * 2 * math.pi, params)
        for f in range(frame_count)
    ]


def water_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    """The floating composition over a water band on the bottom rows."""
    return composite_frames(options, frame_count, rng, settings, CompositeParams(water=True))
