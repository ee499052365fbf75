#!/usr/bin/env python3
# aspix/logging_conf.py
"""
Central logging setup for aspix.
Supports console and optional rotating file logs.
Library modules only create loggers; the CLI calls setup_logging().
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from aspix.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(cfg: Config, level_override: Optional[str] = None) -> None:
    level_name = (level_override or cfg["logging"].get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    # Pillow logs every plugin probe at DEBUG
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))
