"""Core engine for asciimorph.

Modules:
- rng: seeded / system random sources
- palettes: character sets and glyph interpolation
- options, frames: generator options, frame model, validation
- generators: frame and animation dispatch (density style)
- morph, swarm, waves, rain, fire, geometric, composite: animation styles
- playback: animation controller (play / pause / seek / speed)
- overlays: pointer ripple distortion
- player: controller + ripple wiring for a display surface
"""
