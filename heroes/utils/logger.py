"""
Logging setup for engine infrastructure.

Engine modules only call logging.getLogger(__name__). Components that own
resources (the SQLAlchemy repository) call setup_logger so their messages reach
stdout and, when LOG_TO_FILE is on, a per-day file under LOG_DIR.
"""

import logging
import sys
from datetime import date
from pathlib import Path

from heroes.config import Config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_log_level() -> int:
    """DEBUG overrides LOG_LEVEL; unknown level names fall back to INFO."""
    if Config.DEBUG:
        return logging.DEBUG
    level = logging.getLevelName(Config.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO


def get_log_file(day: date = None) -> Path:
    day = day or date.today()
    return Path(Config.LOG_DIR) / f'heroes_engine_{day:%Y%m%d}.log'


def setup_logger(name: str) -> logging.Logger:
    """Attach console (and optionally file) handlers to a named logger once."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = get_log_level()
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if Config.LOG_TO_FILE:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
