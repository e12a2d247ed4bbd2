"""Text helpers shared by the renderer and extensions."""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in attributes.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text safe for use in attribute values

    Examples:
        >>> escape_html('<a href="x">')
        '&lt;a href=&quot;x&quot;&gt;'
    """
    if not text:
        return ""

    return html_module.escape(text, quote=True)


def escape_text(text: str) -> str:
    """Escape literal text content.

    Escapes <, >, &, " but not single quotes, matching CommonMark output.
    """
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def line_starts(source: str) -> list[int]:
    """Offsets at which each line of ``source`` begins.

    The first entry is always 0. Only ``\\n`` ends a line.

    Examples:
        >>> line_starts("ab\\ncd\\n")
        [0, 3, 6]
    """
    starts = [0]
    pos = source.find("\n")
    while pos != -1:
        starts.append(pos + 1)
        pos = source.find("\n", pos + 1)
    return starts
