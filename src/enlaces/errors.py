"""Exception classes for enlaces.

Malformed wikilink syntax is never an error: it degrades to literal text.
These exceptions cover misuse of the host machinery instead (broken
extensions, unrenderable nodes, conflicting registrations).
"""

from __future__ import annotations


class EnlacesError(Exception):
    """Base exception for all enlaces errors."""

    pass


class ParseError(EnlacesError):
    """Error during inline scanning.

    Raised when the scanner cannot make progress, e.g. an extension reports
    a match without consuming any input.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(EnlacesError):
    """Error during HTML rendering.

    Raised when the renderer meets a node that neither it nor any
    configured extension knows how to render.
    """

    pass


class ExtensionError(EnlacesError):
    """Error in extension registration or wiring."""

    def __init__(self, extension_name: str, message: str) -> None:
        """Initialize extension error.

        Args:
            extension_name: Name of the failing extension
            message: Description of the error
        """
        self.extension_name = extension_name
        super().__init__(f"Extension '{extension_name}': {message}")
