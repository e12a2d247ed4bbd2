"""Utility modules for enlaces.

Provides:
- text: escape_html, escape_text, line_starts
- logger: get_logger for logging
"""

from enlaces.utils.logger import get_logger
from enlaces.utils.text import escape_html, escape_text, line_starts

__all__ = [
    "escape_html",
    "escape_text",
    "get_logger",
    "line_starts",
]
