#!/usr/bin/env python3
# aspix/rendering/renderer.py
"""
Character ramps and the image -> text pipeline.

- Ramps run from the character drawn for black to the one drawn for white
- Ramp selection: high density, else detailed, else basic
- Pipeline: preprocess.luminance_grid -> AsciiRenderer -> assemble
- Output: one line per grid row, each terminated by a newline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from PIL import Image

from aspix.config import AsciiConfig
from aspix.rendering.ascii_mode import AsciiRenderer
from aspix.rendering.preprocess import luminance_grid

__all__ = [
    "Renderer",
    "default_palettes",
    "palette_name",
    "assemble",
    "ASCII_CHARS",
    "DETAILED_ASCII_CHARS",
    "HIGH_DENSITY_CHARS",
]

log = logging.getLogger(__name__)

# -------------------------
# Palettes
# -------------------------

ASCII_CHARS = "@%#*+=-:. "
DETAILED_ASCII_CHARS = (
    "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
)
# One code point per glyph, so line length in characters equals the grid width
HIGH_DENSITY_CHARS = "█▓▒░▄▀■▪●◆◉◍◎○☉◌◊♦♢•. "

LINE_SEP = "\n"


def default_palettes() -> Dict[str, str]:
    return {
        "ascii_basic": ASCII_CHARS,
        "ascii_detailed": DETAILED_ASCII_CHARS,
        "high_density": HIGH_DENSITY_CHARS,
    }


def palette_name(cfg: AsciiConfig) -> str:
    if cfg.use_high_density:
        return "high_density"
    if cfg.use_detailed_chars:
        return "ascii_detailed"
    return "ascii_basic"


def assemble(lines: List[str]) -> str:
    """Join rows, terminating every row (including the last) with LINE_SEP."""
    return "".join(line + LINE_SEP for line in lines)

# -------------------------
# Pipeline
# -------------------------

@dataclass
class Renderer:
    """
    Stateless pipeline holder. The palettes mapping is read-only after
    construction, so one Renderer may be shared between threads.
    """
    palettes: Dict[str, str] = field(default_factory=default_palettes)
    default_palette: str = "ascii_basic"

    def __post_init__(self):
        self._backend = AsciiRenderer()

    def get_palette(self, name: Optional[str]) -> str:
        if name and name in self.palettes:
            return self.palettes[name]
        if self.default_palette in self.palettes:
            return self.palettes[self.default_palette]
        # Fallback
        return ASCII_CHARS

    def render(self, img: Image.Image, cfg: AsciiConfig) -> str:
        grid = luminance_grid(
            img,
            cfg.width,
            cfg.height,
            contrast=cfg.contrast,
            brightness=cfg.brightness,
            scale=cfg.scale,
        )
        name = palette_name(cfg)
        lines = self._backend.render(grid, self.get_palette(name), cfg.invert)
        log.debug(
            "Rendered %dx%d source to %dx%d grid (palette=%s invert=%s)",
            img.width, img.height, cfg.width, cfg.height, name, cfg.invert,
        )
        return assemble(lines)
