from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ..config import EngineSettings
from ..utils.grid_ops import BLANK
from .composite import composite_frames, water_frames
from .fire import fire_frames
from .frames import AnimationSequence
from .geometric import geometric_frames
from .morph import morph_frames
from .options import GeneratorOptions
from .palettes import random_glyph
from .rain import matrix_frames
from .rng import RandomSource, derive_seed
from .swarm import particle_frames
from .waves import wave_frames

logger = logging.getLogger(__name__)

Synthesizer = Callable[..., List[str]]

DEFAULT_STYLE = "morph"
DENSITY_STYLE = "density"

STYLES: Dict[str, Synthesizer] = {
    "morph": morph_frames,
    "particle": particle_frames,
    "wave": wave_frames,
    "matrix": matrix_frames,
    "fire": fire_frames,
    "geometric": geometric_frames,
    "floating": composite_frames,
    "floating-water": water_frames,
}


def generate_frame(options: GeneratorOptions, rng: Optional[RandomSource] = None) -> str:
    """One frame of independent per-cell draws at ``options.density``."""
    options = options.normalized()
    chars = options.palette()
    rng = rng or options.random()
    lines = []
    for _ in range(options.height):
        line = []
        for _ in range(options.width):
            if rng() < options.density:
                line.append(random_glyph(chars, rng))
            else:
                line.append(BLANK)
        lines.append("".join(line))
    return "\n".join(lines)


def density_frames(
    options: GeneratorOptions,
    frame_count: int,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    if frame_count <= 0:
        return []
    if rng is not None:
        return [generate_frame(options, rng) for _ in range(frame_count)]
    return [
        generate_frame(GeneratorOptions(
            options.width, options.height, options.character_set, options.density,
            derive_seed(options.seed, i),
        ))
        for i in range(frame_count)
    ]


def generate_animation(
    options: GeneratorOptions,
    frame_count: int,
    style: Optional[str] = DEFAULT_STYLE,
    rng: Optional[RandomSource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    """Materialize ``frame_count`` frames of ``style``.

    Unknown styles fall back to density frames, each seeded with
    ``"<seed>-<index>"`` so the sequence stays reproducible.
    """
    options = options.normalized()
    if frame_count <= 0:
        return []
    style = style or DEFAULT_STYLE
    synth = STYLES.get(style)
    if synth is None:
        if style != DENSITY_STYLE:
            logger.warning("Unknown animation style %r, using density frames", style)
        synth = density_frames
    frames = synth(options, frame_count, rng=rng, settings=settings or EngineSettings())
    logger.debug(
        "Generated %d %s frames at %dx%d (seed=%r)",
        len(frames), style, options.width, options.height, options.seed,
    )
    return frames


def generate_sequence(
    options: GeneratorOptions,
    frame_count: int,
    style: Optional[str] = DEFAULT_STYLE,
    name: Optional[str] = None,
    fps: Optional[float] = None,
    settings: Optional[EngineSettings] = None,
) -> AnimationSequence:
    settings = settings or EngineSettings()
    style = style or DEFAULT_STYLE
    frames = generate_animation(options, frame_count, style, settings=settings)
    return AnimationSequence.build(
        frames,
        name=name or f"{style}-{options.seed or 'random'}",
        style=style,
        fps=fps or settings.default_fps,
        generator="procedural",
    )
