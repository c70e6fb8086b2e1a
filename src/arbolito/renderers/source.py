"""Python source renderer.

Renders a syntax tree back into Python source text with O(n) performance
using StringBuilder, or streams it to any writable text sink.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single SourceRenderer
instance and call render() concurrently without synchronization.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Sequence

from arbolito.config import RenderConfig, get_render_config
from arbolito.errors import RenderError, UnsupportedConstruct
from arbolito.precedence import Precedence
from arbolito.renderers.arguments import ArgumentsRenderingMixin
from arbolito.renderers.context import RenderContext
from arbolito.renderers.expressions import ExpressionRenderingMixin
from arbolito.renderers.patterns import PatternRenderingMixin
from arbolito.renderers.statements import StatementRenderingMixin
from arbolito.stringbuilder import StringBuilder, TextSink

logger = logging.getLogger(__name__)

Tree = ast.AST | Sequence[ast.stmt]


class SourceRenderer(
    StatementRenderingMixin,
    ExpressionRenderingMixin,
    PatternRenderingMixin,
    ArgumentsRenderingMixin,
):
    """Render syntax trees to Python source.

    Usage:
        >>> import ast
        >>> renderer = SourceRenderer()
        >>> renderer.render(ast.parse("(a + b) * c"))
        '(a + b) * c\\n'

    Accepted roots:
        Module, Interactive, Expression, a list of statements, or any single
        statement, expression, pattern or auxiliary node (arguments, keyword,
        alias, comprehension, except handler, with-item, match case, type
        parameter).

    Thread Safety:
        Multiple threads can safely share a single SourceRenderer instance.
        The instance only holds an immutable config.
    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Render configuration; the context's active config
                (see arbolito.config) is read at render time when None.
        """
        self._config = config

    @property
    def config(self) -> RenderConfig:
        return self._config or get_render_config()

    def render(self, tree: Tree) -> str:
        """Render a tree to a source string.

        A standalone ``ExceptHandler`` root renders with a plain ``except``
        keyword; the ``except*`` form comes only from its enclosing ``TryStar``.

        Args:
            tree: Root node or statement list

        Returns:
            Python source text

        Raises:
            EncodingError: an identifier or literal does not fit the encoding
            UnsupportedConstruct: the tree holds a node with no rendering
        """
        sb = StringBuilder()
        self.render_to(tree, sb)
        result = sb.build()
        logger.debug("Rendered %d characters", len(result))
        return result

    def render_to(self, tree: Tree, sink: TextSink) -> None:
        """Stream the rendered source of ``tree`` into ``sink``.

        Partial output stays in the sink when rendering fails.
        """
        ctx = RenderContext(sink=sink, config=self.config)
        logger.debug("Rendering %s", type(tree).__name__)
        try:
            self._render_root(tree, ctx)
        except RenderError as e:
            logger.debug("Render of %s failed at %s node", type(tree).__name__, e.node_type)
            raise
        if ctx.started and ctx.config.trailing_newline and _is_statement_root(tree):
            ctx.write("\n")

    def _render_root(self, tree: Tree, ctx: RenderContext) -> None:
        match tree:
            case ast.Module() | ast.Interactive():
                self._render_body(tree.body, ctx)
            case ast.Expression():
                self._render_expr(tree.body, ctx, Precedence.TUPLE)
            case ast.stmt():
                self._render_stmt(tree, ctx)
            case ast.expr():
                self._render_expr(tree, ctx, Precedence.TUPLE)
            case ast.pattern():
                self._render_pattern(tree, ctx)
            case ast.arguments():
                self._render_arguments(tree, ctx)
            case ast.arg():
                self._render_arg(tree, ctx)
            case ast.keyword():
                self._render_keyword(tree, ctx)
            case ast.alias():
                self._render_alias(tree, ctx)
            case ast.comprehension():
                self._render_comprehension(tree, ctx)
            case ast.excepthandler():
                self._render_handler(tree, ctx, star=False)
            case ast.withitem():
                self._render_withitem(tree, ctx)
            case ast.match_case():
                self._render_match_case(tree, ctx)
            case ast.type_param():
                self._render_type_param(tree, ctx)
            case list() | tuple():
                self._render_body(tree, ctx)
            case _:
                raise UnsupportedConstruct(tree, "not a syntax tree node")


def _is_statement_root(tree: Tree) -> bool:
    return isinstance(tree, (ast.Module, ast.Interactive, ast.stmt, list, tuple))
