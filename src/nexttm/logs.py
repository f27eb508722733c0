"""
Logging for nexttm.

Everything under the ``nexttm`` logger goes to a detailed log file; the
console handler writes to stderr so ``ntm next --format json`` keeps stdout
clean. Levels come from the environment:

    NEXTTM_DEBUG=1          debug on the console, with logger names
    NEXTTM_LOG_LEVEL=INFO   any standard level name
    NEXTTM_LOG_DIR=/path    where nexttm.log is written
"""
import logging
import os
import sys
from pathlib import Path

LOG_FILE = "nexttm.log"
DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "nexttm" / "logs"

FILE_FORMAT = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def _debug_requested() -> bool:
    return os.getenv('NEXTTM_DEBUG', '').lower() in ('1', 'true', 'yes')

def console_level() -> int:
    """Console level from the environment; WARNING unless asked otherwise."""
    if _debug_requested():
        return logging.DEBUG
    name = os.getenv('NEXTTM_LOG_LEVEL', '').upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING

def log_dir() -> Path:
    return Path(os.getenv('NEXTTM_LOG_DIR', '') or DEFAULT_LOG_DIR)

def setup_logging(level: int = None) -> logging.Logger:
    """
    (Re)configure the ``nexttm`` logger.

    ``level`` overrides the console level taken from the environment. Calling
    this again replaces the previous handlers.
    """
    if level is None:
        level = console_level()
    verbose = level <= logging.DEBUG

    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(directory / LOG_FILE)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if verbose else '%(levelname)s: %(message)s'
    ))
    console_handler.setLevel(level)

    logger = logging.getLogger('nexttm')
    logger.setLevel(logging.DEBUG)  # handlers filter
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.propagate = False

    return logger

setup_logging()

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'nexttm.{name}')
    return logging.getLogger('nexttm')
