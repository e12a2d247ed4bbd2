"""Source location tracking for AST nodes and error messages.

Every node carries a SourceLocation so that a match can be traced back to
the exact characters it consumed.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Span of source text covered by a node.

    Lines and columns are 1-indexed. ``end_col_offset`` is the column just
    past the last consumed character, so a single-line span has
    ``end_col_offset - col_offset == end_offset - offset``.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column (1-indexed)
        offset: Absolute start offset in the source buffer
        end_offset: Absolute end offset (exclusive)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column, exclusive (optional)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(1, 5, 4, 11, 1, 12)
            >>> str(loc)
            '1:5'
            >>> str(SourceLocation(2, 1, source_file="notes/index.md"))
            'notes/index.md:2:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.md:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"
