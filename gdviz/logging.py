"""
Centralized logging configuration for gdviz.

Usage:
    from gdviz.logging import setup_logging, get_logger

    # In __main__.py (once at startup)
    setup_logging(level='DEBUG', log_file='/tmp/gdviz_debug.log')

    # In any module
    logger = get_logger(__name__)
    logger.debug("Some debug message")
"""

import logging
import sys
from typing import Optional

# Default log file path
DEFAULT_LOG_FILE = '/tmp/gdviz_debug.log'


def setup_logging(
    level: str = 'WARNING',
    log_file: Optional[str] = None,
    console: bool = False
) -> None:
    """
    Configure logging for gdviz.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_file: Path to log file (only used if level is DEBUG or INFO)
        console: If True, also log to console (stderr)
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger('gdviz')
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    formatter = logging.Formatter(fmt)

    # File output only makes sense for the chatty levels
    if numeric_level <= logging.INFO and log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Prevents "no handler" warnings
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug(f"Logging configured: level={level}, log_file={log_file}, console={console}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance parented under 'gdviz'
    """
    if name.startswith('gdviz'):
        return logging.getLogger(name)
    return logging.getLogger(f'gdviz.{name}')
