"""Parser producing a typed Document from source text.

Reads the active ParseConfig from its ContextVar, builds the trigger
character dispatch table from the configured extensions and runs one
InlineScanner pass over the source.

Thread Safety:
- Parser produces an immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share the resulting Document across threads

"""

from __future__ import annotations

from enlaces.config import get_parse_config
from enlaces.location import SourceLocation
from enlaces.nodes import Document
from enlaces.parsing.scanner import InlineScanner
from enlaces.utils.logger import get_logger

logger = get_logger(__name__)


class Parser:
    """Single-use parser for one source buffer.

    Usage:
            >>> from enlaces.config import ParseConfig, parse_config_context
            >>> with parse_config_context(ParseConfig.from_dict({"extensions": ["wikilink"]})):
            ...     doc = Parser("See [[Home]]").parse()
            >>> doc.children[1].title
            'Home'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = ("_source", "_source_file")

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.

        Args:
            source: Source text
            source_file: Optional source file path for locations and errors

        """
        self._source = source
        self._source_file = source_file

    def parse(self) -> Document:
        """Parse source into a Document.

        Raises:
            ParseError: If a configured extension misbehaves

        """
        config = get_parse_config()
        source = self._source
        if config.text_transformer is not None:
            source = config.text_transformer(source)

        scanner = InlineScanner(
            source,
            config.dispatch_table(),
            source_file=self._source_file,
        )
        children = scanner.scan()
        logger.debug(
            "parsed %d characters into %d inline nodes (%s)",
            len(source),
            len(children),
            self._source_file or "<string>",
        )
        return Document(location=scanner.span(0, len(source)), children=children)
