"""Typed AST — build an outgoing-link table for a set of notes."""

from enlaces import Wikitext
from enlaces.nodes import WikiLink
from enlaces.visitor import BaseVisitor


class LinkCollector(BaseVisitor[None]):
    """Collect (title, target, line) for every wikilink."""

    def __init__(self) -> None:
        self.links: list[tuple[str, str, int]] = []

    def visit_wikilink(self, node: WikiLink) -> None:
        self.links.append((node.title, node.target, node.location.lineno))


notes = {
    "index.md": "Welcome.\nSee [[Projects]] and [[the inbox|inbox.md]].",
    "projects.md": "Back to [[Home|index.md]].\nBroken: [[|nothing]]",
}

md = Wikitext()
for name, source in notes.items():
    collector = LinkCollector()
    collector.visit(md.parse(source, source_file=name))
    for title, target, line in collector.links:
        print(f"{name}:{line}  {title!r} -> {target}")
