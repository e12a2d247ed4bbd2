"""Inline scanner: the single left-to-right pass over document text.

The scanner owns the cursor. Extension matchers read the buffer through it,
and on success move ``offset`` past what they consumed. Characters that no
extension claims are collected into Text nodes; newlines become SoftBreak.

Thread Safety:
Scanner instances hold per-parse state and are not shared. Create one per
parse operation.

"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from enlaces.errors import ParseError
from enlaces.location import SourceLocation
from enlaces.nodes import SoftBreak, Text
from enlaces.utils.text import line_starts

if TYPE_CHECKING:
    from enlaces.extensions import SyntaxExtension
    from enlaces.nodes import Inline, Node


class InlineScanner:
    """Cursor over an immutable text buffer.

    Usage:
        >>> scanner = InlineScanner("a [[b]]", dispatch={})
        >>> scanner.scan()
        (Text(location=..., content='a [[b]]'),)

    Attributes exposed to matchers:
        text: The buffer (never modified)
        offset: Current position; matchers advance it on success
        line / column: 1-indexed position of ``offset``

    """

    __slots__ = (
        "_text",
        "_offset",
        "_dispatch",
        "_line_starts",
        "_base",
        "_source_file",
    )

    def __init__(
        self,
        text: str,
        dispatch: Mapping[str, Sequence[SyntaxExtension]],
        *,
        base: SourceLocation | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize scanner.

        Args:
            text: Inline text to scan
            dispatch: Trigger character -> extensions to try, in order
            base: Location of ``text[0]`` within the full source
            source_file: Optional source file path for locations
        """
        self._text = text
        self._offset = 0
        self._dispatch = dispatch
        self._line_starts = line_starts(text)
        self._base = base or SourceLocation(lineno=1, col_offset=1, source_file=source_file)
        self._source_file = source_file or self._base.source_file

    @property
    def text(self) -> str:
        return self._text

    @property
    def offset(self) -> int:
        return self._offset

    @offset.setter
    def offset(self, value: int) -> None:
        if not 0 <= value <= len(self._text):
            msg = f"offset {value} outside buffer of length {len(self._text)}"
            raise ValueError(msg)
        self._offset = value

    @property
    def line(self) -> int:
        return self.position_at(self._offset)[0]

    @property
    def column(self) -> int:
        return self.position_at(self._offset)[1]

    def peek(self, pos: int) -> str:
        """Character at absolute position ``pos``, or "" past either end."""
        if 0 <= pos < len(self._text):
            return self._text[pos]
        return ""

    def position_at(self, pos: int) -> tuple[int, int]:
        """Translate a buffer offset into a 1-indexed (line, column) pair."""
        index = bisect_right(self._line_starts, pos) - 1
        line = self._base.lineno + index
        column = pos - self._line_starts[index] + 1
        if index == 0:
            column += self._base.col_offset - 1
        return line, column

    def span(self, start: int, end: int) -> SourceLocation:
        """Location covering ``text[start:end]``."""
        lineno, col_offset = self.position_at(start)
        end_lineno, end_col_offset = self.position_at(end)
        return SourceLocation(
            lineno=lineno,
            col_offset=col_offset,
            offset=self._base.offset + start,
            end_offset=self._base.offset + end,
            end_lineno=end_lineno,
            end_col_offset=end_col_offset,
            source_file=self._source_file,
        )

    def scan(self) -> tuple[Inline, ...]:
        """Run the inline pass and return the produced nodes.

        Raises:
            ParseError: If an extension returns a node without consuming input

        """
        text = self._text
        text_len = len(text)
        dispatch = self._dispatch
        nodes: list[Inline] = []
        nodes_append = nodes.append
        text_start = 0

        def flush(end: int) -> None:
            if end > text_start:
                nodes_append(Text(location=self.span(text_start, end), content=text[text_start:end]))

        while self._offset < text_len:
            pos = self._offset
            char = text[pos]

            if char == "\n":
                flush(pos)
                nodes_append(SoftBreak(location=self.span(pos, pos + 1)))
                self._offset = pos + 1
                text_start = self._offset
                continue

            extensions = dispatch.get(char)
            if extensions:
                node = self._try_extensions(extensions, char)
                if node is not None:
                    flush(pos)
                    nodes_append(node)  # type: ignore[arg-type]
                    text_start = self._offset
                    continue

            # Unclaimed character: literal text
            self._offset = pos + 1

        flush(text_len)
        return tuple(nodes)

    def _try_extensions(self, extensions: Sequence[SyntaxExtension], char: str) -> Node | None:
        start = self._offset
        for extension in extensions:
            node = extension.match(self, char)
            if node is None:
                # A failed matcher must not move the cursor
                self._offset = start
                continue
            if self._offset <= start:
                line, column = self.position_at(start)
                raise ParseError(
                    f"extension {extension.name!r} matched without consuming input",
                    lineno=line,
                    col_offset=column,
                    source_file=self._source_file,
                )
            return node
        return None
