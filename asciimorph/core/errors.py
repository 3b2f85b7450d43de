from __future__ import annotations


class AsciiMorphError(Exception):
    pass


class PaletteError(AsciiMorphError, ValueError):
    """Raised when a caller hands over a glyph set that cannot be drawn from."""


class ConfigError(AsciiMorphError, ValueError):
    """Malformed settings file or preset document."""
