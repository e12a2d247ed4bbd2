"""Logging helper for enlaces.

Example:
    >>> from enlaces.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("scanning %d characters", 42)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``enlaces``.

    The library never attaches handlers; applications decide where records go.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'enlaces.mymodule'
    """
    if not (name == "enlaces" or name.startswith("enlaces.")):
        name = f"enlaces.{name}"
    return logging.getLogger(name)
