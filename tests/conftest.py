"""
Shared fixtures for the aspix test suite.

Images are synthesised in memory with Pillow so no binary fixtures are
checked in.
"""

import io

import numpy as np
import pytest
from PIL import Image


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def gray_image(values, mode: str = "RGB") -> Image.Image:
    """Build an image from a 2-D list/array of 0..255 grey levels."""
    arr = np.asarray(values, dtype=np.uint8)
    rgb = np.stack([arr, arr, arr], axis=-1)
    img = Image.fromarray(rgb)
    return img if mode == "RGB" else img.convert(mode)


@pytest.fixture
def checker_2x2():
    """[black, white; white, black]"""
    return gray_image([[0, 255], [255, 0]])


@pytest.fixture
def checker_png(checker_2x2):
    return encode(checker_2x2)


@pytest.fixture
def gradient_image():
    """64 columns, luminance strictly increasing left to right."""
    row = np.linspace(0, 255, 64).round().astype(np.uint8)
    return gray_image(np.tile(row, (8, 1)))


@pytest.fixture
def black_image():
    return Image.new("RGB", (40, 20), (0, 0, 0))


@pytest.fixture
def white_image():
    return Image.new("RGB", (40, 20), (255, 255, 255))


@pytest.fixture
def photo_png():
    """Noisy colour image standing in for a real photo."""
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(57, 83, 3), dtype=np.uint8)
    return encode(Image.fromarray(arr))
