#!/usr/bin/env python3
# aspix/rendering/preprocess.py
"""
Image preprocessing for the character grid.

- Resamples to the exact grid size (optionally supersampled by an integer factor)
- Rec. 601 luminance normalized to [0, 1]
- Contrast around mid grey, then brightness as a multiplier, both clamped
"""

from __future__ import annotations
import numpy as np
from PIL import Image

from aspix.errors import DecodeError

__all__ = [
    "resize_for_grid",
    "luminance",
    "adjust",
    "to_8bit",
    "luminance_grid",
]

# Rec. 601 weights scaled to integers so that pure white sums to exactly 1.0
_LUMA_WEIGHTS = np.array([299, 587, 114], dtype=np.float64)
_LUMA_DIVISOR = 255.0 * 1000.0


def resize_for_grid(img: Image.Image, w: int, h: int) -> Image.Image:
    # BOX averages each target cell's source region; for upscaling it
    # degenerates to nearest neighbour. Both are deterministic.
    if img.width == w and img.height == h:
        return img
    return img.resize((w, h), Image.BOX)


def to_8bit(img: Image.Image) -> Image.Image:
    """
    Rescale 32-bit integer, 16-bit and float greyscale images to 8-bit "L".
    Pillow clips these modes on convert("RGB") instead of scaling them.
    Integer modes are read as 0..65535, float as 0.0..1.0.
    """
    mode = img.mode
    if mode == "F":
        arr = np.asarray(img, dtype=np.float64) * 255.0
    elif mode == "I" or mode.startswith("I;16"):
        arr = np.asarray(img, dtype=np.float64) / 257.0
    else:
        return img
    arr = np.nan_to_num(arr, nan=0.0, posinf=255.0, neginf=0.0)
    return Image.fromarray(np.clip(np.round(arr), 0, 255).astype(np.uint8))


def luminance(arr: np.ndarray) -> np.ndarray:
    """(H, W, 3) uint8 RGB -> (H, W) float64 luminance in [0, 1]."""
    return (arr[..., :3].astype(np.float64) @ _LUMA_WEIGHTS) / _LUMA_DIVISOR


def adjust(lum: np.ndarray, contrast: float = 1.0, brightness: float = 1.0) -> np.ndarray:
    """
    Apply contrast then brightness to a luminance array in [0, 1].

    contrast:   (v - 0.5) * contrast + 0.5
    brightness: v * brightness, i.e. an offset of v * (brightness - 1)
    Each step is clamped to [0, 1].
    """
    out = np.asarray(lum, dtype=np.float64)
    if contrast != 1.0:
        out = np.clip((out - 0.5) * contrast + 0.5, 0.0, 1.0)
    else:
        out = np.clip(out, 0.0, 1.0)
    if brightness != 1.0:
        out = np.clip(out * brightness, 0.0, 1.0)
    return out


def luminance_grid(
    img: Image.Image,
    width: int,
    height: int,
    contrast: float = 1.0,
    brightness: float = 1.0,
    scale: int = 1,
) -> np.ndarray:
    """
    Produce the adjusted luminance grid for an image.
    Returns float64 array of shape (height, width).
    """
    if width <= 0 or height <= 0:
        raise DecodeError(f"target grid must be non-empty, got {width}x{height}")
    if img.width == 0 or img.height == 0:
        raise DecodeError(f"image has no pixels ({img.width}x{img.height})")
    scale = max(1, int(scale))

    # Ensure 8-bit RGB; alpha is dropped
    img = to_8bit(img)
    if img.mode != "RGB":
        img = img.convert("RGB")

    small = resize_for_grid(img, width * scale, height * scale)
    arr = np.asarray(small, dtype=np.uint8)  # (H*s, W*s, 3)
    lum = luminance(arr)

    if scale > 1:
        # Average each scale x scale block down to one cell
        lum = lum.reshape(height, scale, width, scale).mean(axis=(1, 3))

    return adjust(lum, contrast, brightness)
