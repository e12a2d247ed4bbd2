"""
enlaces — wikilinks for Python text pipelines

Recognizes ``[[Title]]`` and ``[[Title|Target]]`` inside document text,
produces a typed, immutable AST and renders it to HTML. Zero runtime
dependencies.

Quick Start:
    >>> from enlaces import parse, render
    >>> doc = parse("See [[Home]] or [[the guide|./guide.md]]")
    >>> render(doc)
    'See <a href="Home">Home</a> or <a href="./guide.md">the guide</a>'

    >>> # Or use the high-level Wikitext class
    >>> from enlaces import Wikitext
    >>> md = Wikitext(escape_links=True)
    >>> md("[[a<b]]")
    '<a href="a&lt;b">a&lt;b</a>'

Accessors:
    >>> from enlaces import get_title, get_target
    >>> link = doc.children[1]
    >>> get_title(link), get_target(link)
    ('Home', 'Home')

Installation:
    pip install enlaces
"""

from collections.abc import Callable, Iterable

from enlaces.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from enlaces.errors import EnlacesError, ExtensionError, ParseError, RenderError
from enlaces.extensions import (
    BUILTIN_EXTENSIONS,
    DEFAULT_EXTENSIONS,
    SyntaxExtension,
    get_extension,
    register_node_type,
    resolve_extensions,
)
from enlaces.extensions.wikilink import (
    WikiLinkExtension,
    create_wikilink_extension,
    get_target,
    get_title,
)
from enlaces.location import SourceLocation
from enlaces.nodes import Document, Inline, Node, NodeType, SoftBreak, Text, WikiLink
from enlaces.parser import Parser
from enlaces.parsing.scanner import InlineScanner
from enlaces.renderers.html import HtmlRenderer, RenderContext
from enlaces.serialization import from_dict, from_json, to_dict, to_json
from enlaces.utils.logger import get_logger
from enlaces.visitor import BaseVisitor, EventType, walk

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse(
    source: str,
    *,
    source_file: str | None = None,
    extensions: Iterable[str | SyntaxExtension] | None = None,
) -> Document:
    """Parse source text into a typed AST.

    Args:
        source: Text to scan
        source_file: Optional source file path for locations and errors
        extensions: Extensions to enable (defaults to wikilinks)

    Returns:
        Document AST root node

    Example:
        >>> doc = parse("[[Foo|bar]]")
        >>> doc.children[0]
        WikiLink(location=..., title='Foo', target='bar', node_type=4)
    """
    config = ParseConfig(
        extensions=resolve_extensions(DEFAULT_EXTENSIONS if extensions is None else extensions)
    )
    with parse_config_context(config):
        return Parser(source, source_file=source_file).parse()


def render(
    doc: Document,
    *,
    extensions: Iterable[str | SyntaxExtension] | None = None,
    escape_links: bool = False,
) -> str:
    """Render an AST Document to HTML.

    Args:
        doc: Document AST to render
        extensions: Extensions whose nodes may appear in ``doc``
        escape_links: HTML-escape wikilink titles and targets

    Returns:
        HTML string
    """
    renderer = HtmlRenderer(extensions=extensions, escape_links=escape_links)
    return renderer.render(doc)


class Wikitext:
    """High-level processor combining parser and renderer.

    Usage:
        >>> md = Wikitext()
        >>> md("[[Foo|bar]]")
        '<a href="bar">Foo</a>'

        >>> doc = md.parse("[[Foo]]")
        >>> doc.children[0].target
        'Foo'

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Wikitext instances concurrently from different threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        extensions: Iterable[str | SyntaxExtension] | None = None,
        escape_links: bool = False,
        text_transformer: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            extensions: Extension names or descriptors to enable (e.g.,
                ["wikilink"]). Use ["all"] to enable all built-in extensions.
            escape_links: HTML-escape wikilink titles and targets on render
            text_transformer: Optional callback applied to the source before scanning
        """
        resolved = resolve_extensions(DEFAULT_EXTENSIONS if extensions is None else extensions)

        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig(extensions=resolved, text_transformer=text_transformer)
        self._renderer = HtmlRenderer(extensions=resolved, escape_links=escape_links)
        logger.debug("enabled extensions: %s", ", ".join(ext.name for ext in resolved) or "none")

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call."""
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse source into AST.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        set_parse_config(self._config)
        try:
            return Parser(source, source_file=source_file).parse()
        finally:
            reset_parse_config()

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple sources; sets config once, parses all, resets once.

        Example:
            >>> md = Wikitext()
            >>> docs = md.parse_many(["[[One]]", "[[Two]]"])
        """
        set_parse_config(self._config)
        try:
            return [Parser(source, source_file=source_file).parse() for source in sources]
        finally:
            reset_parse_config()

    def render(self, doc: Document) -> str:
        """Render AST to HTML."""
        return self._renderer.render(doc)


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "Wikitext",
    # Nodes
    "Document",
    "Inline",
    "Node",
    "NodeType",
    "SoftBreak",
    "Text",
    "WikiLink",
    # Wikilink extension
    "WikiLinkExtension",
    "create_wikilink_extension",
    "get_target",
    "get_title",
    # Extension system
    "BUILTIN_EXTENSIONS",
    "DEFAULT_EXTENSIONS",
    "SyntaxExtension",
    "get_extension",
    "register_node_type",
    "resolve_extensions",
    # Parser components
    "InlineScanner",
    "Parser",
    # Renderer
    "HtmlRenderer",
    "RenderContext",
    # Traversal
    "BaseVisitor",
    "EventType",
    "walk",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "EnlacesError",
    "ExtensionError",
    "ParseError",
    "RenderError",
    # Location
    "SourceLocation",
]
