"""Inline scanning machinery for enlaces."""

from enlaces.parsing.scanner import InlineScanner

__all__ = ["InlineScanner"]
