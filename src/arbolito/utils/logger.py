"""Minimal logging utilities for arbolito.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from arbolito.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering module")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "arbolito." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'arbolito.mymodule'
    """
    if not (name == "arbolito" or name.startswith("arbolito.")):
        name = f"arbolito.{name}"
    return logging.getLogger(name)
