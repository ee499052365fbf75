#!/usr/bin/env python3
# aspix/version.py
"""
Version metadata for aspix.
"""

__version__ = "0.2.0"
__build__ = "2026-10-18"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"aspix v{__version__} (build {__build__})"
