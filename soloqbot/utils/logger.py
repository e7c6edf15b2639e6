"""
Logging setup for the bot process.

``setup_logger`` is called once from ``soloqbot.main`` for the ``soloqbot``
package logger; modules log through ``logging.getLogger(__name__)`` and
propagate up to it.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# discord.py logs every gateway event at INFO
NOISY_LOGGERS = ('discord', 'discord.http', 'discord.gateway')


def _debug_from_env() -> bool:
    return os.getenv('DEBUG', 'False').lower() == 'true'


def log_file_path(log_dir: Path, name: str, when: Optional[datetime] = None) -> Path:
    """Daily log file for ``name``, e.g. ``logs/soloqbot_20240101.log``."""
    stamp = (when or datetime.now()).strftime("%Y%m%d")
    return log_dir / f'{name.split(".")[0]}_{stamp}.log'


def setup_logger(name: str, debug: Optional[bool] = None) -> logging.Logger:
    """
    Attach stdout and daily file handlers to the ``name`` logger.

    Calling it again for a configured logger is a no-op. Setting ``LOG_DIR``
    to an empty string keeps logs on stdout only (containers).
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    if debug is None:
        debug = _debug_from_env()
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = os.getenv('LOG_DIR', 'logs')
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path(path, name), encoding='utf-8')
        # File keeps debug detail even when stdout is at INFO
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not debug:
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
