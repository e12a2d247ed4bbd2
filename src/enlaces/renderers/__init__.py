"""enlaces renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML using StringBuilder pattern

"""

from enlaces.renderers.html import HtmlRenderer, RenderContext

__all__ = ["HtmlRenderer", "RenderContext"]
