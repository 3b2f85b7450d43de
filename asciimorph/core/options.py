from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..utils.grid_ops import clamp_size
from .palettes import Palette, PaletteSpec, resolve
from .rng import RandomSource, create_random

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorOptions:
    width: int = 40
    height: int = 20
    character_set: PaletteSpec = "box-drawing"
    density: float = 0.3
    seed: Optional[str] = None

    def normalized(self) -> "GeneratorOptions":
        """Clamp size to at least 1x1 and density into [0, 1]."""
        width, height = clamp_size(self.width, self.height)
        density = float(self.density)
        if density != density:
            density = 0.0
        density = min(1.0, max(0.0, density))
        if (width, height, density) != (self.width, self.height, self.density):
            logger.debug(
                "Clamped options %sx%s density=%s -> %sx%s density=%s",
                self.width, self.height, self.density, width, height, density,
            )
        # resolve eagerly so an empty custom palette fails before any drawing
        resolve(self.character_set)
        return replace(self, width=width, height=height, density=density)

    def palette(self, default: str = "box-drawing") -> Palette:
        return resolve(self.character_set, default=default)

    def random(self) -> RandomSource:
        return create_random(self.seed)
