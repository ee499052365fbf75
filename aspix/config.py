#!/usr/bin/env python3
# aspix/config.py
"""
Conversion options and config file loader for aspix.

Goals:
- Immutable, eagerly validated options for a single converter.
- Optional JSON file deep-merged over defaults.
- Loose coercion for file values, strict checks for the final options.
- No environment lookups, nothing written back to disk.

Usage:
    from aspix.config import AsciiConfig, Config
    opts = AsciiConfig(width=80, height=40, invert=True)
    cfg = Config.load("aspix.json")
    opts = cfg.converter_config()
"""

from __future__ import annotations

import copy
import json
import math
from dataclasses import dataclass, field, fields, replace as dc_replace
from typing import Any, Dict, Optional, Tuple

from aspix.errors import InvalidConfig, IoError

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "convert": {
        "width": 100,                     # output columns
        "height": 50,                     # output rows
        "use_detailed_chars": False,      # 70-char ramp instead of 10
        "use_high_density": False,        # unicode block ramp, wins over detailed
        "invert": False,
        "contrast": 1.0,
        "brightness": 1.0,
        "scale": 1,                       # supersampling per cell (scale x scale)
    },
    "logging": {
        "level": "INFO",
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")

# ----------------------------
# Conversion options
# ----------------------------

@dataclass(frozen=True)
class AsciiConfig:
    """
    Options for one converter. Frozen; use replace() for a modified copy.

    width, height: output grid in characters (both > 0)
    use_detailed_chars: pick the 70-character ramp
    use_high_density: pick the unicode block ramp (takes precedence)
    invert: walk the ramp from the light end
    contrast: 1.0 is neutral, > 1.0 spreads values away from mid grey
    brightness: 1.0 is neutral, scales luminance after contrast
    scale: integer supersampling factor, each cell averages scale x scale samples
    """
    width: int = DEFAULT_CONFIG["convert"]["width"]
    height: int = DEFAULT_CONFIG["convert"]["height"]
    use_detailed_chars: bool = False
    use_high_density: bool = False
    invert: bool = False
    contrast: float = 1.0
    brightness: float = 1.0
    scale: int = 1

    def __post_init__(self):
        for name in ("width", "height", "scale"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise InvalidConfig(f"{name} must be an integer, got {v!r}")
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfig(
                f"width and height must be positive, got {self.width}x{self.height}"
            )
        if self.scale < 1:
            raise InvalidConfig(f"scale must be >= 1, got {self.scale}")
        for name in ("use_detailed_chars", "use_high_density", "invert"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfig(f"{name} must be a boolean")
        for name in ("contrast", "brightness"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                raise InvalidConfig(f"{name} must be a finite number, got {v!r}")
            # store as float so equal configs compare equal
            object.__setattr__(self, name, float(v))

    def replace(self, **changes: Any) -> "AsciiConfig":
        """Return a validated copy with some fields overridden."""
        try:
            return dc_replace(self, **changes)
        except TypeError as e:
            raise InvalidConfig(str(e)) from e

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AsciiConfig":
        """Build from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})

# ----------------------------
# Helpers
# ----------------------------

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError, OverflowError):
        return float(default)

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError, OverflowError):
        return int(default)

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return coerced copy with fallbacks applied.

    Width and height are only type-coerced here; range errors surface from
    AsciiConfig so a bad file reports InvalidConfig instead of silently
    drawing something else.
    """
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), cfg or {})
    for section in DEFAULT_CONFIG:
        if not isinstance(c[section], dict):
            raise InvalidConfig(f"config section {section!r} must be an object")
    d = DEFAULT_CONFIG["convert"]

    cv = c["convert"]
    cv["width"] = _coerce_int(cv.get("width"), d["width"])
    cv["height"] = _coerce_int(cv.get("height"), d["height"])
    for key in ("use_detailed_chars", "use_high_density", "invert"):
        cv[key] = _coerce_bool(cv.get(key), d[key])
    cv["contrast"] = _coerce_num(cv.get("contrast"), d["contrast"])
    cv["brightness"] = _coerce_num(cv.get("brightness"), d["brightness"])
    cv["scale"] = _coerce_int(cv.get("scale"), d["scale"], (1, 16))

    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    lg["level"] = level if level in _LOG_LEVELS else DEFAULT_CONFIG["logging"]["level"]
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"] = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: Optional[str] = None

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        if not path:
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfig(f"config file {path} is not valid JSON: {e}") from e
        except OSError as e:
            raise IoError(f"cannot read config file {path}: {e}", path) from e
        if not isinstance(user_cfg, dict):
            raise InvalidConfig(f"config file {path} must contain a JSON object")
        return cls(_validate(user_cfg), path)

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        self.data = _validate(_deep_merge(self.data, partial))

    def converter_config(self) -> AsciiConfig:
        return AsciiConfig.from_dict(self.data["convert"])


__all__ = [
    "AsciiConfig",
    "Config",
    "DEFAULT_CONFIG",
]
