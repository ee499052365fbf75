#!/usr/bin/env python3
# aspix/cli.py
"""
Command-line entry point for aspix.
Loads optional JSON config, applies flag overrides, converts one image.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from aspix.config import Config
from aspix.converter import AsciiConverter
from aspix.errors import ConversionError
from aspix.logging_conf import setup_logging
from aspix.version import version_info

log = logging.getLogger("aspix")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aspix", description="Render an image as ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-W", "--width", type=int, default=None, help="Output width in columns (default: 100)")
    parser.add_argument("-H", "--height", type=int, default=None, help="Output height in rows (default: 50)")
    parser.add_argument("-d", "--detailed", action="store_true", default=None, help="Use the 70-character ramp")
    parser.add_argument("--high-density", action="store_true", default=None, help="Use unicode block characters")
    parser.add_argument("-i", "--invert", action="store_true", default=None, help="Swap dark and light")
    parser.add_argument("-c", "--contrast", type=float, default=None, help="Contrast factor (default: 1.0)")
    parser.add_argument("-b", "--brightness", type=float, default=None, help="Brightness factor (default: 1.0)")
    parser.add_argument("-s", "--scale", type=int, default=None, help="Samples per cell side (default: 1)")
    parser.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout")
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--log-level", default=None, help="Override logging level")
    parser.add_argument("--version", action="version", version=version_info())
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    mapping = {
        "width": args.width,
        "height": args.height,
        "use_detailed_chars": args.detailed,
        "use_high_density": args.high_density,
        "invert": args.invert,
        "contrast": args.contrast,
        "brightness": args.brightness,
        "scale": args.scale,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = Config.load(args.config)
        setup_logging(cfg, args.log_level)
        opts = cfg.converter_config().replace(**_overrides(args))
        converter = AsciiConverter.with_config(opts)
        art = converter.convert(args.image)
        if args.output:
            converter.save_to_file(art, args.output)
            log.info("Wrote %dx%d art to %s", opts.width, opts.height, args.output)
        else:
            sys.stdout.write(art)
    except ConversionError as e:
        if not logging.getLogger().handlers:
            logging.basicConfig(format="%(levelname)s: %(message)s")
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
