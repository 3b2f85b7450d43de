from __future__ import annotations

import logging
import math
from typing import Dict, Sequence, Tuple, Union

from .errors import PaletteError
from .rng import RandomFn

logger = logging.getLogger(__name__)

Palette = Tuple[str, ...]
PaletteSpec = Union[str, Sequence[str]]

DEFAULT_SET = "box-drawing"

CHARACTER_SETS: Dict[str, Palette] = {
    "box-drawing": tuple("┌┐└┘─│┼├┤┬┴╔╗╚╝═║╬╠╣╦╩"),
    "blocks": tuple("█▄▀░▒▓▌▐▖▗▘▙▚▛▜▝▞▟"),
    "geometric": tuple("◆◇○●□■△▽◈◊◌◍◎◐◑◒◓▲▼◀▶◢◣◤◥"),
    "mathematical": tuple("∞∑∏∫√∂∇±×÷≈≠≤≥∈∉⊂⊃∪∩∅"),
    "arrows": tuple("←→↑↓↖↗↘↙⇐⇒⇑⇓⇔⇕⇖⇗⇘⇙↰↱↲↳↴↵"),
    "dots": tuple("·∘◦○◯◉●⊙⊚⊛⊜⊝"),
    # caller supplies the glyphs
    "custom": (),
}

STYLE_CHARACTERS: Dict[str, Palette] = {
    "retro": tuple("#@%&*+=-:. "),
    "modern": tuple("█▓▒░▄▀▌▐ "),
    "minimal": tuple("│─┼· "),
    "dotted": tuple("·:∘○● "),
    "organic": tuple("~≈∿〜∼∽ "),
}

EFFECT_CHARACTERS: Dict[str, Palette] = {
    "ripple": tuple("◦○◯◉●◐◑◒◓"),
    "fade": tuple(" ·∘○◯●"),
    "glitch": tuple("▓▒░█▄▀▌▐"),
    "matrix": tuple(
        "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        "アイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワヲン"
    ),
    "fire": tuple(" .:;!|/\\()[]{}#%&*@"),
    "water": tuple("~≈∿〜∼∽≋≌"),
    "electric": tuple("/\\|-+XZNM"),
}

_DENSITY_GRADIENT: Palette = (" ", ".", "·", "∘", "○", "◐", "◑", "◒", "◓", "●", "█")


def resolve(spec: PaletteSpec, default: str = DEFAULT_SET) -> Palette:
    """Return the glyphs for a set name or an explicit glyph sequence.

    Unknown names fall back to ``default``. An explicit empty sequence (or the
    bare ``"custom"`` name) cannot be drawn from and raises PaletteError.
    """
    if isinstance(spec, str):
        if spec == "custom":
            raise PaletteError("the 'custom' set needs an explicit glyph list")
        glyphs = CHARACTER_SETS.get(spec)
        if glyphs is None:
            logger.warning("Unknown character set %r, using %r", spec, default)
            glyphs = CHARACTER_SETS[default]
        return glyphs
    glyphs = tuple(str(g) for g in spec)
    if not glyphs:
        raise PaletteError("custom character set must not be empty")
    return glyphs


def clamp_index(index: int, length: int) -> int:
    return max(0, min(index, length - 1))


def random_glyph(glyphs: Sequence[str], rng: RandomFn) -> str:
    return glyphs[clamp_index(int(rng() * len(glyphs)), len(glyphs))]


def interpolate(glyphs: Sequence[str], value: float) -> str:
    if math.isnan(value):
        value = 0.0
    value = min(max(value, 0.0), 1.0)
    index = math.floor(value * (len(glyphs) - 1))
    return glyphs[clamp_index(index, len(glyphs))]


def density_gradient() -> Palette:
    return _DENSITY_GRADIENT
