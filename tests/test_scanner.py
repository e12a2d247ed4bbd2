"""Tests for the inline scanner: text collection, locations and dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from enlaces.errors import ParseError
from enlaces.extensions import register_node_type
from enlaces.extensions.wikilink import create_wikilink_extension
from enlaces.location import SourceLocation
from enlaces.nodes import Node, SoftBreak, Text, WikiLink
from enlaces.parsing.scanner import InlineScanner


@dataclass(frozen=True, slots=True)
class Mention(Node):
    handle: str
    node_type: int


@dataclass(frozen=True, slots=True)
class MentionExtension:
    """@handle mentions, used to exercise dispatch."""

    node_type: int = field(default_factory=lambda: register_node_type("test-mention"))
    name: str = "mention"
    special_chars: frozenset[str] = frozenset({"@"})

    def match(self, scanner: InlineScanner, character: str) -> Mention | None:
        start = scanner.offset
        end = start + 1
        while scanner.peek(end).isalnum():
            end += 1
        if end == start + 1:
            return None
        node = Mention(
            location=scanner.span(start, end),
            handle=scanner.text[start + 1 : end],
            node_type=self.node_type,
        )
        scanner.offset = end
        return node


@dataclass(frozen=True, slots=True)
class FidgetExtension:
    """Moves the cursor and then reports no match."""

    node_type: int = field(default_factory=lambda: register_node_type("test-fidget"))
    name: str = "fidget"
    special_chars: frozenset[str] = frozenset({"["})

    def match(self, scanner: InlineScanner, character: str) -> Node | None:
        scanner.offset = scanner.offset + 1
        return None


@dataclass(frozen=True, slots=True)
class StuckExtension:
    """Claims a match without consuming input."""

    node_type: int = field(default_factory=lambda: register_node_type("test-stuck"))
    name: str = "stuck"
    special_chars: frozenset[str] = frozenset({"!"})

    def match(self, scanner: InlineScanner, character: str) -> Node | None:
        return Text(location=scanner.span(scanner.offset, scanner.offset), content="")


class TestTextCollection:
    def test_plain_text_is_one_node(self) -> None:
        nodes = InlineScanner("plain text", {}).scan()
        assert len(nodes) == 1
        text = nodes[0]
        assert isinstance(text, Text)
        assert text.content == "plain text"
        assert (text.location.offset, text.location.end_offset) == (0, 10)
        assert (text.location.col_offset, text.location.end_col_offset) == (1, 11)

    def test_empty_source(self) -> None:
        assert InlineScanner("", {}).scan() == ()

    def test_newlines_become_soft_breaks(self) -> None:
        nodes = InlineScanner("a\nb", {}).scan()
        assert [type(n) for n in nodes] == [Text, SoftBreak, Text]
        assert nodes[2].location.lineno == 2
        assert nodes[2].location.col_offset == 1

    def test_trigger_without_extensions_is_literal(self) -> None:
        nodes = InlineScanner("[[Foo]]", {}).scan()
        assert len(nodes) == 1
        assert nodes[0].content == "[[Foo]]"

    def test_text_around_match(self) -> None:
        ext = create_wikilink_extension()
        nodes = InlineScanner("a [[B]] c", {"[": (ext,)}).scan()
        assert [type(n) for n in nodes] == [Text, WikiLink, Text]
        assert nodes[0].content == "a "
        assert nodes[2].content == " c"
        assert nodes[2].location.offset == 7


class TestCursor:
    def test_peek_out_of_range(self) -> None:
        scanner = InlineScanner("ab", {})
        assert scanner.peek(1) == "b"
        assert scanner.peek(2) == ""
        assert scanner.peek(-1) == ""

    @pytest.mark.parametrize("offset", [-1, 3])
    def test_offset_outside_buffer(self, offset: int) -> None:
        scanner = InlineScanner("ab", {})
        with pytest.raises(ValueError):
            scanner.offset = offset

    def test_offset_at_end_is_allowed(self) -> None:
        scanner = InlineScanner("ab", {})
        scanner.offset = 2
        assert scanner.offset == 2

    def test_line_and_column(self) -> None:
        scanner = InlineScanner("ab\ncd", {})
        scanner.offset = 4
        assert (scanner.line, scanner.column) == (2, 2)

    def test_base_location(self) -> None:
        base = SourceLocation(lineno=3, col_offset=5, offset=20, source_file="notes.md")
        scanner = InlineScanner("xy\nz", {}, base=base)
        assert scanner.position_at(0) == (3, 5)
        assert scanner.position_at(3) == (4, 1)
        span = scanner.span(0, 2)
        assert (span.offset, span.end_offset) == (20, 22)
        assert span.source_file == "notes.md"


class TestDispatch:
    def test_custom_extension(self) -> None:
        mention = MentionExtension()
        nodes = InlineScanner("hi @ana!", {"@": (mention,)}).scan()
        assert [type(n) for n in nodes] == [Text, Mention, Text]
        assert nodes[1].handle == "ana"

    def test_failed_extension_falls_back_to_text(self) -> None:
        mention = MentionExtension()
        nodes = InlineScanner("a @ b", {"@": (mention,)}).scan()
        assert len(nodes) == 1
        assert nodes[0].content == "a @ b"

    def test_cursor_restored_between_extensions(self) -> None:
        dispatch = {"[": (FidgetExtension(), create_wikilink_extension())}
        nodes = InlineScanner("[[Foo]]", dispatch).scan()
        assert len(nodes) == 1
        assert isinstance(nodes[0], WikiLink)
        assert nodes[0].location.offset == 0

    def test_extension_that_does_not_advance(self) -> None:
        scanner = InlineScanner("ok\nno!", {"!": (StuckExtension(),)}, source_file="a.md")
        with pytest.raises(ParseError) as exc_info:
            scanner.scan()
        assert exc_info.value.lineno == 2
        assert exc_info.value.col_offset == 3
        assert "a.md:2:3" in str(exc_info.value)
