#!/usr/bin/env python3
# aspix/converter.py
"""
Public entry point for turning images into ASCII art.

Usage:
    from aspix.converter import AsciiConverter
    conv = AsciiConverter(100, 50)
    art = conv.convert("photo.jpg")
    conv.save_to_file(art, "photo.txt")

A converter only holds a frozen AsciiConfig, so every call is a pure
function of its arguments and instances can be shared across threads.
"""

from __future__ import annotations

import logging
from typing import Optional
from PIL import Image

from aspix.config import AsciiConfig
from aspix.errors import InvalidConfig
from aspix.loader import PathLike, decode_bytes, read_image, write_text
from aspix.rendering.renderer import Renderer

__all__ = ["AsciiConverter"]

log = logging.getLogger(__name__)


class AsciiConverter:
    """Convert images to text using one fixed set of options."""

    def __init__(self, width: int = 100, height: int = 50, *, config: Optional[AsciiConfig] = None):
        if config is None:
            config = AsciiConfig(width=width, height=height)
        elif not isinstance(config, AsciiConfig):
            raise InvalidConfig(f"expected AsciiConfig, got {type(config).__name__}")
        self._config = config
        self._renderer = Renderer()

    @classmethod
    def with_config(cls, config: AsciiConfig) -> "AsciiConverter":
        return cls(config=config)

    @property
    def config(self) -> AsciiConfig:
        return self._config

    def convert(self, path: PathLike) -> str:
        """
        Convert the image at path.
        Raises IoError if the file cannot be read, DecodeError if it is not an image.
        """
        img = read_image(path)
        log.debug("Converting %s", path)
        return self.convert_image(img)

    def convert_from_bytes(self, data: bytes) -> str:
        """Convert encoded image bytes. Raises DecodeError on malformed input."""
        return self.convert_image(decode_bytes(data))

    def convert_image(self, img: Image.Image) -> str:
        """Convert an already decoded Pillow image."""
        return self._renderer.render(img, self._config)

    def save_to_file(self, text: str, path: PathLike) -> None:
        """Write text verbatim to path, overwriting it. Raises IoError."""
        write_text(text, path)
