from __future__ import annotations

from typing import List, Optional

from ..config import EngineSettings
from ..utils.grid_ops import BLANK, cell_coords
from .options import GeneratorOptions
from .palettes import interpolate
from .rng import RandomSource

EDGE = 0.1
INNER_MARGIN = 0.3


def render_morph(options: GeneratorOptions, progress: float) -> str:
    """Border box with an inner block that grows in as ``progress`` passes 0.5."""
    chars = options.palette()
    w, h = options.width, options.height
    yy, xx = cell_coords(w, h)
    x = xx / w
    y = yy / h
    edge = (x < EDGE) | (x > 1 - EDGE) | (y < EDGE) | (y > 1 - EDGE)
    m = INNER_MARGIN * (1 - progress)
    inner = (x > m) & (x < 1 - m) & (y > m) & (y < 1 - m)
    fill = interpolate(chars, progress)
    draw_inner = progress > 0.5

    lines = []
    for row in range(h):
        line = []
        for col in range(w):
            if edge[row, col]:
                line.append(chars[0])
            elif draw_inner and inner[row, col]:
                line.append(fill)
            else:
                line.append(BLANK)
        lines.append("".join(line))
    return "\n".join(lines)


def morph_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    span = max(1, frame_count - 1)
    return [render_morph(options, f / span) for f in range(frame_count)]
