#!/usr/bin/env python3
# aspix/errors.py
"""
Error taxonomy for aspix.

Every failure the library reports derives from ConversionError so callers
can catch one type. Nothing here is retried; the caller decides.
"""

from __future__ import annotations
from typing import Optional

__all__ = [
    "ConversionError",
    "IoError",
    "DecodeError",
    "InvalidConfig",
]


class ConversionError(Exception):
    """Base class for all aspix errors."""


class IoError(ConversionError):
    """File could not be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DecodeError(ConversionError):
    """Bytes are not a decodable image, or the source/target grid is empty."""


class InvalidConfig(ConversionError, ValueError):
    """Conversion options are out of range or of the wrong type."""
