"""Wikilink extension for enlaces.

Adds support for wiki-style links.

Usage:
    >>> md = Wikitext(extensions=["wikilink"])
    >>> md("[[Home]] and [[Guide|./guide.md]]")
    '<a href="Home">Home</a> and <a href="./guide.md">Guide</a>'

Syntax:
[[Title]] → <a href="Title">Title</a>
[[Title|Target]] → <a href="Target">Title</a>

The text between the brackets is split on the first ``|``. Anything after a
second ``|`` is dropped: [[Foo|bar|baz]] links "Foo" to "bar". Empty
segments are skipped, so [[Foo||bar]] links "Foo" to "bar" too. Empty
content and content that starts or ends with ``|`` do not match and stay
literal text. A wikilink is a leaf: its title is plain text, never
parsed for further inline syntax.

Title and target are inserted verbatim unless the renderer is created with
``escape_links=True``.

Thread Safety:
This extension is stateless and thread-safe.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from enlaces.extensions import register_extension, register_node_type
from enlaces.nodes import Node, WikiLink
from enlaces.utils.logger import get_logger
from enlaces.utils.text import escape_html
from enlaces.visitor import EventType

if TYPE_CHECKING:
    from enlaces.parsing.scanner import InlineScanner
    from enlaces.renderers.html import RenderContext

logger = get_logger(__name__)

OPEN = "["
CLOSE = "]"
SEPARATOR = "|"


def get_title(node: Node | None) -> str | None:
    """Title of a wikilink node, or None for anything else."""
    if node is None or not isinstance(node, WikiLink):
        return None
    return node.title


def get_target(node: Node | None) -> str | None:
    """Link target of a wikilink node, or None for anything else."""
    if node is None or not isinstance(node, WikiLink):
        return None
    return node.target


def split_contents(contents: str) -> tuple[str, str] | None:
    """Split the text between ``[[`` and ``]]`` into (title, target).

    Returns None when the contents cannot form a link.

    Examples:
        >>> split_contents("Foo")
        ('Foo', 'Foo')
        >>> split_contents("Foo|bar|baz")
        ('Foo', 'bar')
        >>> split_contents("Foo||bar")
        ('Foo', 'bar')
    """
    if not contents:
        return None
    if contents[0] == SEPARATOR or contents[-1] == SEPARATOR:
        return None

    title, separator, remainder = contents.partition(SEPARATOR)
    if not title:
        return None
    if not separator:
        return title, title

    # Empty segments between separators are skipped. The remainder never
    # ends with a separator, so at least one segment is non-empty.
    target = next(segment for segment in remainder.split(SEPARATOR) if segment)
    return title, target


@dataclass(frozen=True, slots=True)
class WikiLinkExtension:
    """Descriptor wiring ``[[...]]`` recognition into the scanner.

    Build it with create_wikilink_extension() so that ``node_type`` is the
    shared tag for the "wikilink" node kind.

    """

    node_type: int
    name: str = "wikilink"
    special_chars: frozenset[str] = field(default_factory=lambda: frozenset({OPEN}))

    def match(self, scanner: InlineScanner, character: str) -> WikiLink | None:
        """Recognize a wikilink starting at ``scanner.offset``.

        On success the scanner is advanced past the closing ``]]``. On
        failure the scanner is not touched.
        """
        if character != OPEN:
            return None

        text = scanner.text
        start = scanner.offset
        at = start + 1

        # The trigger is the first bracket; the second must follow it
        if scanner.peek(at) != OPEN:
            return None

        end = text.find(CLOSE, at)
        if end == -1 or text[end : end + 2] != CLOSE * 2:
            logger.debug("wikilink at offset %d: no closing ]]", start)
            return None

        contents = text[start + 2 : end]
        parts = split_contents(contents)
        if parts is None:
            logger.debug("wikilink at offset %d: invalid contents %r", start, contents)
            return None

        title, target = parts
        stop = end + 2
        node = WikiLink(
            location=scanner.span(start, stop),
            title=title,
            target=target,
            node_type=self.node_type,
        )
        scanner.offset = stop
        return node

    def get_type_string(self, node: Node) -> str:
        if getattr(node, "node_type", None) == self.node_type:
            return self.name
        return "<unknown>"

    def can_contain(self, node: Node, child_type: int) -> bool:
        """Wikilinks are leaves; their title is never parsed further."""
        return False

    def html_render(self, ctx: RenderContext, node: Node, event: EventType) -> None:
        """Emit ``<a href="TARGET">TITLE</a>`` on the ENTER event."""
        if event is not EventType.ENTER:
            return

        title = get_title(node)
        target = get_target(node)
        if title is None or target is None:
            return

        if ctx.escape_links:
            title = escape_html(title)
            target = escape_html(target)

        ctx.sb.append('<a href="').append(target).append('">').append(title).append("</a>")


@register_extension("wikilink")
def create_wikilink_extension() -> WikiLinkExtension:
    """Build the wikilink extension descriptor.

    The node type tag is allocated on first use and reused afterwards, so
    every descriptor produces nodes of the same kind.
    """
    return WikiLinkExtension(node_type=register_node_type("wikilink"))
