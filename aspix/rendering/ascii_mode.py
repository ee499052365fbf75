#!/usr/bin/env python3
# aspix/rendering/ascii_mode.py
"""
Luminance to character mapping.
The scalar helpers and the grid renderer share one index rule:
floor(v * (len - 1)), clamped, then mirrored when inverted.
"""

from __future__ import annotations
import math
from typing import List, Sequence
import numpy as np

__all__ = ["char_index", "map_char", "AsciiRenderer"]


def char_index(value: float, ramp_len: int, invert: bool = False) -> int:
    """Ramp index for a single luminance value in [0, 1]."""
    top = ramp_len - 1
    if top <= 0:
        return 0
    if math.isnan(value):
        value = 0.0
    value = min(max(value, 0.0), 1.0)
    idx = min(max(int(math.floor(value * top)), 0), top)
    return top - idx if invert else idx


def map_char(value: float, ramp: Sequence[str], invert: bool = False) -> str:
    return ramp[char_index(value, len(ramp), invert)]


class AsciiRenderer:
    name = "ascii"

    @staticmethod
    def indices(grid: np.ndarray, ramp_len: int, invert: bool = False) -> np.ndarray:
        top = max(ramp_len - 1, 0)
        vals = np.nan_to_num(np.asarray(grid, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
        idx = np.clip(np.floor(vals * top), 0, top).astype(np.intp)
        return top - idx if invert else idx

    def render(self, grid: np.ndarray, ramp: Sequence[str], invert: bool = False) -> List[str]:
        """Map a (H, W) luminance grid to H strings of W characters."""
        if not len(ramp):
            ramp = " ."
        glyphs = np.array(list(ramp))
        idx = self.indices(grid, glyphs.size, invert)
        return ["".join(glyphs[idx[y, :]].tolist()) for y in range(idx.shape[0])]
