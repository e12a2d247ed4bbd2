"""StringBuilder for O(n) string accumulation.

The render buffer handed to extension renderers. Appends to a list and
joins once at the end instead of concatenating strings repeatedly.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Append-only string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append('<a href="x">').append("x").append("</a>").build()
            '<a href="x">x</a>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string; empty strings are skipped. Returns self for chaining."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
