"""SourceRendererProtocol: stable interface for tree renderers.

Any renderer that implements ``render(tree) -> str`` and
``render_to(tree, sink)`` conforms to this protocol. The built-in
``SourceRenderer`` is the reference implementation.

Example:
    from arbolito.renderers.protocol import SourceRendererProtocol

    def regenerate(renderer: SourceRendererProtocol, tree: ast.Module) -> str:
        return renderer.render(tree)

"""

import ast
from collections.abc import Sequence
from typing import Protocol

from arbolito.stringbuilder import TextSink


class SourceRendererProtocol(Protocol):
    """Protocol for syntax tree renderers."""

    def render(self, tree: ast.AST | Sequence[ast.stmt]) -> str:
        """Render a tree to a source string.

        Args:
            tree: The tree to render.

        Returns:
            Rendered source text.

        """
        ...

    def render_to(self, tree: ast.AST | Sequence[ast.stmt], sink: TextSink) -> None:
        """Stream the rendered source of a tree into a sink."""
        ...
