"""Typed AST nodes for enlaces.

All AST nodes are frozen dataclasses with slots:
- Immutability: a parsed Document can be shared across threads
- Memory efficiency: __slots__ keeps per-node overhead small
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Document
└── Inline
    ├── Text
    ├── SoftBreak
    └── WikiLink

Every node type has an integer tag. Built-in tags live in NodeType;
extension node tags are allocated above them at registration time
(see enlaces.extensions.register_node_type).

"""

from dataclasses import dataclass
from enum import IntEnum

from enlaces.location import SourceLocation


class NodeType(IntEnum):
    """Tags of the node kinds the host itself produces."""

    DOCUMENT = 1
    TEXT = 2
    SOFT_BREAK = 3


# First tag handed out to extension node kinds
FIRST_EXTENSION_TYPE = max(NodeType) + 1


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text, including trigger characters that did not match."""

    content: str

    @property
    def node_type(self) -> int:
        return NodeType.TEXT


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Line ending inside the inline stream.

    HTML: newline

    """

    @property
    def node_type(self) -> int:
        return NodeType.SOFT_BREAK


@dataclass(frozen=True, slots=True)
class WikiLink(Node):
    """Bracketed wiki-style link.

    Markdown: [[Title]] or [[Title|Target]]
    HTML: <a href="Target">Title</a>

    ``title`` and ``target`` are never empty and ``title`` never contains
    ``|``. ``target`` equals ``title`` when no explicit target was given.
    ``node_type`` is the tag the wikilink extension was registered with.

    """

    title: str
    target: str
    node_type: int


type Inline = Text | SoftBreak | WikiLink


# =============================================================================
# Root
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node holding the inline stream of one parsed source."""

    children: tuple[Inline, ...]

    @property
    def node_type(self) -> int:
        return NodeType.DOCUMENT
