"""
Logging utilities for the enrichment pipeline
"""

import logging
import sys
from typing import Optional, Union


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(name: str, level: Optional[Union[int, str]] = logging.INFO) -> logging.Logger:
    """
    Set up a logger with console output

    Args:
        name: Logger name
        level: Logging level (int or name such as "DEBUG")

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def set_package_level(level: Union[int, str]) -> None:
    """Apply a level to every logger already created under laundry_enrich."""
    resolved = _resolve_level(level)
    for name, obj in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith("laundry_enrich") and isinstance(obj, logging.Logger):
            obj.setLevel(resolved)
