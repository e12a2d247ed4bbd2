"""HTML renderer using StringBuilder pattern.

Walks the AST with ENTER/EXIT events (see enlaces.visitor.walk). Built-in
nodes are rendered here; every other node is handed to the extension that
owns its node type tag, once per event.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from enlaces.errors import RenderError
from enlaces.extensions import DEFAULT_EXTENSIONS, SyntaxExtension, resolve_extensions
from enlaces.nodes import Document, Node, SoftBreak, Text
from enlaces.stringbuilder import StringBuilder
from enlaces.utils.text import escape_text
from enlaces.visitor import EventType, walk


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Extension renderers append their markup to ``sb`` and read
    ``escape_links`` to decide whether to escape link text and targets.

    Thread Safety:
        Each render() call creates its own RenderContext instance.
    """

    sb: StringBuilder = field(default_factory=StringBuilder)
    escape_links: bool = False


class HtmlRenderer:
    """Render AST to HTML.

    Usage:
        >>> from enlaces import parse
        >>> doc = parse("See [[Home]] & more")
        >>> HtmlRenderer().render(doc)
        'See <a href="Home">Home</a> &amp; more'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
    """

    __slots__ = ("_extensions", "_escape_links")

    def __init__(
        self,
        *,
        extensions: Iterable[str | SyntaxExtension] | None = None,
        escape_links: bool = False,
    ) -> None:
        """Initialize renderer.

        Args:
            extensions: Extensions whose nodes may appear in rendered trees
                (defaults to the built-in wikilink extension)
            escape_links: HTML-escape text emitted by extension renderers
        """
        resolved = resolve_extensions(DEFAULT_EXTENSIONS if extensions is None else extensions)
        self._extensions = {extension.node_type: extension for extension in resolved}
        self._escape_links = escape_links

    def render(self, node: Node) -> str:
        """Render an AST to an HTML string.

        Args:
            node: Document (or any single node) to render

        Returns:
            HTML string

        Raises:
            RenderError: If a node type has no renderer

        """
        ctx = RenderContext(escape_links=self._escape_links)
        for event, current in walk(node):
            self._render_event(current, event, ctx)
        return ctx.sb.build()

    def _render_event(self, node: Node, event: EventType, ctx: RenderContext) -> None:
        match node:
            case Document():
                pass
            case Text():
                if event is EventType.ENTER:
                    ctx.sb.append(escape_text(node.content))
            case SoftBreak():
                if event is EventType.ENTER:
                    ctx.sb.append("\n")
            case _:
                extension = self._extensions.get(getattr(node, "node_type", None))  # type: ignore[arg-type]
                if extension is None:
                    raise RenderError(f"No renderer for node type {type(node).__name__}")
                extension.html_render(ctx, node, event)
