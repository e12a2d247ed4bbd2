"""AST traversal for enlaces.

Two ways to walk a tree:

- ``walk(node)`` yields ``(EventType, node)`` pairs in document order. Every
  node gets an ENTER event followed, after its children, by an EXIT event.
  The HTML renderer is driven by this stream.
- ``BaseVisitor`` dispatches each node to a ``visit_*`` method.

Example — collect wikilink targets:

    class TargetCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.targets: list[str] = []

        def visit_wikilink(self, node: WikiLink) -> None:
            self.targets.append(node.target)

    collector = TargetCollector()
    collector.visit(doc)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. ``walk``
    is a pure generator over an immutable tree.

"""

from collections.abc import Iterator
from enum import Enum

from enlaces.nodes import Document, Node, SoftBreak, Text, WikiLink


class EventType(Enum):
    """Traversal events, as seen by renderers."""

    ENTER = "enter"
    EXIT = "exit"


def walk(node: Node) -> Iterator[tuple[EventType, Node]]:
    """Yield ENTER/EXIT events for ``node`` and its descendants."""
    yield EventType.ENTER, node
    if isinstance(node, Document):
        for child in node.children:
            yield from walk(child)
    yield EventType.EXIT, node


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children of a
    Document are walked automatically after ``visit_document``.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        if isinstance(node, Document):
            for child in node.children:
                self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_soft_break(self, node: SoftBreak) -> T:
        return self.visit_default(node)

    def visit_wikilink(self, node: WikiLink) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Document():
                return self.visit_document(node)
            case Text():
                return self.visit_text(node)
            case SoftBreak():
                return self.visit_soft_break(node)
            case WikiLink():
                return self.visit_wikilink(node)
            case _:
                return self.visit_default(node)
