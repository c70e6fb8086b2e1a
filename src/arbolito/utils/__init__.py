"""Utility modules for arbolito.

Provides:
- logger: get_logger for logging
"""

from arbolito.utils.logger import get_logger

__all__ = [
    "get_logger",
]
