"""ContextVar-based parse configuration for enlaces.

Config is set once per Wikitext instance, read by every Parser in the context.
The configured extensions travel inside it, each carrying the node type tag
it was built with, so matchers and renderers never consult global state.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # In Wikitext class
    md = Wikitext(extensions=["wikilink"])
    html = md("See [[Home]]")  # Sets config internally via ContextVar

    # Direct parser usage
    from enlaces.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig.from_dict({"extensions": ["wikilink"]})):
        doc = Parser(source).parse()

"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from enlaces.extensions import SyntaxExtension


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        extensions: Extension descriptors, tried in order for each trigger
        text_transformer: Optional callback applied to the source before scanning

    """

    extensions: tuple[SyntaxExtension, ...] = ()
    text_transformer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Unknown keys are silently ignored. Extensions may be given by name;
        names are resolved against the built-in registry.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "extensions": ["wikilink"],
            ...     "unknown_key": "ignored",
            ... })
            >>> [ext.name for ext in config.extensions]
            ['wikilink']

        Raises:
            KeyError: For unknown extension names

        """
        from enlaces.extensions import resolve_extensions

        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "extensions" in filtered:
            filtered["extensions"] = resolve_extensions(filtered["extensions"])
        return cls(**filtered)

    def dispatch_table(self) -> dict[str, tuple[SyntaxExtension, ...]]:
        """Map each trigger character to the extensions it invokes."""
        table: dict[str, list[SyntaxExtension]] = {}
        for extension in self.extensions:
            for char in sorted(extension.special_chars):
                table.setdefault(char, []).append(extension)
        return {char: tuple(exts) for char, exts in table.items()}

    def extension_for(self, node_type: int) -> SyntaxExtension | None:
        """Extension owning nodes tagged ``node_type``."""
        for extension in self.extensions:
            if extension.node_type == node_type:
                return extension
        return None


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

# Thread-local configuration via ContextVar
_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration (no extensions)."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig.from_dict({"extensions": ["wikilink"]})):
        ...     doc = Parser("[[Home]]").parse()

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
