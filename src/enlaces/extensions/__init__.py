"""Syntax extension system for enlaces.

Extensions teach the inline scanner new syntax. Each extension declares:

1. A node type tag, allocated once with register_node_type()
2. The trigger characters that make the scanner call its matcher
3. Callbacks the host calls polymorphically by node type:
   - match: try to recognize syntax at the scanner's offset
   - get_type_string: human-readable node kind
   - can_contain: containment rule for child node types
   - html_render: emit markup at ENTER/EXIT events

Usage:
    >>> from enlaces import Wikitext
    >>> md = Wikitext(extensions=["wikilink"])
    >>> md("See [[Home]]")
    'See <a href="Home">Home</a>'

Thread Safety:
Extensions are frozen descriptors with no mutable state. The node type tag
is fixed when the descriptor is built and is read from the descriptor
itself, so configured extensions can be shared between threads.

"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from enlaces.errors import ExtensionError
from enlaces.nodes import FIRST_EXTENSION_TYPE, NodeType

if TYPE_CHECKING:
    from enlaces.nodes import Node
    from enlaces.parsing.scanner import InlineScanner
    from enlaces.renderers.html import RenderContext
    from enlaces.visitor import EventType

__all__ = [
    "SyntaxExtension",
    "BUILTIN_EXTENSIONS",
    "DEFAULT_EXTENSIONS",
    "register_extension",
    "register_node_type",
    "node_type_name",
    "get_extension",
    "resolve_extensions",
]


@runtime_checkable
class SyntaxExtension(Protocol):
    """Protocol for inline syntax extensions.

    Thread Safety:
        Extensions must be stateless. All state lives in AST nodes or in
        the scanner/render context passed to each call.

    """

    @property
    def name(self) -> str:
        """Extension identifier."""
        ...

    @property
    def node_type(self) -> int:
        """Tag of the node kind this extension produces."""
        ...

    @property
    def special_chars(self) -> frozenset[str]:
        """Characters that trigger match()."""
        ...

    def match(self, scanner: InlineScanner, character: str) -> Node | None:
        """Try to recognize syntax at ``scanner.offset``.

        Must return None and leave the scanner untouched on failure, or
        return a node after advancing ``scanner.offset`` past the match.
        """
        ...

    def get_type_string(self, node: Node) -> str:
        """Name of the node kind, or "<unknown>" for foreign nodes."""
        ...

    def can_contain(self, node: Node, child_type: int) -> bool:
        """Whether ``node`` may hold children of ``child_type``."""
        ...

    def html_render(self, ctx: RenderContext, node: Node, event: EventType) -> None:
        """Append markup for ``node`` to ``ctx.sb``."""
        ...


# =============================================================================
# Node type tags
# =============================================================================

_node_types: dict[str, int] = {node_type.name.lower(): int(node_type) for node_type in NodeType}
_node_types_lock = threading.Lock()


def register_node_type(name: str) -> int:
    """Allocate the tag for an extension node kind.

    Idempotent: registering the same name again returns the same tag, so
    every descriptor built for an extension shares one tag.

    Args:
        name: Node kind name (e.g., "wikilink")

    Returns:
        Integer tag, unique across all node kinds

    Raises:
        ExtensionError: If ``name`` collides with a built-in node kind

    """
    with _node_types_lock:
        existing = _node_types.get(name)
        if existing is not None:
            if existing < FIRST_EXTENSION_TYPE:
                raise ExtensionError(name, "name is reserved for a built-in node type")
            return existing
        tag = max(max(_node_types.values()) + 1, FIRST_EXTENSION_TYPE)
        _node_types[name] = tag
        return tag


def node_type_name(tag: int) -> str | None:
    """Reverse lookup of a node type tag, or None if unallocated."""
    for name, value in _node_types.items():
        if value == tag:
            return name
    return None


# =============================================================================
# Extension registry
# =============================================================================

# Extensions enabled when none are requested explicitly
DEFAULT_EXTENSIONS: tuple[str, ...] = ("wikilink",)

# Registry of built-in extension factories
BUILTIN_EXTENSIONS: dict[str, Callable[[], SyntaxExtension]] = {}


def register_extension(
    name: str,
) -> Callable[[Callable[[], SyntaxExtension]], Callable[[], SyntaxExtension]]:
    """Decorator to register an extension factory.

    Args:
        name: Extension name for lookup

    Returns:
        Decorator function that registers and returns the factory

    Usage:
        @register_extension("wikilink")
        def create_wikilink_extension() -> WikiLinkExtension:
            ...

    """

    def decorator(factory: Callable[[], SyntaxExtension]) -> Callable[[], SyntaxExtension]:
        BUILTIN_EXTENSIONS[name] = factory
        return factory

    return decorator


def get_extension(name: str) -> SyntaxExtension:
    """Get an extension instance by name.

    Args:
        name: Extension name (e.g., "wikilink")

    Returns:
        Extension descriptor

    Raises:
        KeyError: If extension name is not recognized

    """
    if name not in BUILTIN_EXTENSIONS:
        available = ", ".join(sorted(BUILTIN_EXTENSIONS.keys()))
        raise KeyError(f"Unknown extension: {name!r}. Available: {available}")
    return BUILTIN_EXTENSIONS[name]()


def resolve_extensions(
    extensions: Iterable[str | SyntaxExtension],
) -> tuple[SyntaxExtension, ...]:
    """Turn names and descriptors into a validated tuple of descriptors.

    ``"all"`` expands to every built-in extension. Duplicates (by name) are
    dropped, keeping the first occurrence.

    Raises:
        KeyError: For unknown extension names
        ExtensionError: If a descriptor's trigger set is invalid

    """
    resolved: list[SyntaxExtension] = []
    seen: set[str] = set()

    def add(extension: SyntaxExtension) -> None:
        if extension.name in seen:
            return
        _validate(extension)
        seen.add(extension.name)
        resolved.append(extension)

    for item in extensions:
        if item == "all":
            for name in BUILTIN_EXTENSIONS:
                add(get_extension(name))
        elif isinstance(item, str):
            add(get_extension(item))
        else:
            add(item)
    return tuple(resolved)


def _validate(extension: SyntaxExtension) -> None:
    if not extension.special_chars:
        raise ExtensionError(extension.name, "declares no trigger characters")
    for char in extension.special_chars:
        if not isinstance(char, str) or len(char) != 1:
            raise ExtensionError(
                extension.name, f"trigger {char!r} must be a single character"
            )
    if extension.node_type < FIRST_EXTENSION_TYPE:
        raise ExtensionError(
            extension.name, f"node type {extension.node_type} is reserved for built-in nodes"
        )


# Import built-in extensions to register them
# These imports trigger the @register_extension decorators
from enlaces.extensions.wikilink import WikiLinkExtension  # noqa: E402

__all__ += [
    "WikiLinkExtension",
]
