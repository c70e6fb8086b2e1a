"""Structural pattern rendering mixin.

Patterns parenthesize by the same rule as expressions: an as-pattern binds
like a conditional expression, an or-pattern like ``|``, and or-alternatives
sit one level tighter so nested alternatives and captures keep their
grouping.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from arbolito.errors import UnsupportedConstruct
from arbolito.precedence import Precedence

if TYPE_CHECKING:
    from arbolito.renderers.context import RenderContext


def pattern_precedence(node: ast.pattern) -> Precedence:
    match node:
        case ast.MatchAs(pattern=ast.pattern(), name=str()):
            return Precedence.TEST
        case ast.MatchOr():
            return Precedence.BOR
        case _:
            return Precedence.ATOM


class PatternRenderingMixin:
    """Mixin for match statements' case patterns.

    Required Host Methods:
        - _render_expr(node, ctx, level) -> None
        - _render_body(statements, ctx) -> None
    """

    def _render_pattern(
        self,
        node: ast.pattern,
        ctx: RenderContext,
        level: Precedence = Precedence.TEST,
    ) -> None:
        with ctx.delimit("(", ")", pattern_precedence(node) < level):
            self._render_pattern_bare(node, ctx)

    def _render_pattern_bare(self, node: ast.pattern, ctx: RenderContext) -> None:
        match node:
            case ast.MatchValue():
                self._render_expr(node.value, ctx, Precedence.BOR)
            case ast.MatchSingleton():
                ctx.write(repr(node.value))
            case ast.MatchSequence():
                ctx.write("[")
                ctx.interleave(lambda p: self._render_pattern(p, ctx), node.patterns)
                ctx.write("]")
            case ast.MatchMapping():
                self._render_mapping_pattern(node, ctx)
            case ast.MatchClass():
                self._render_class_pattern(node, ctx)
            case ast.MatchStar():
                ctx.write("*")
                ctx.write(ctx.identifier(node.name, node) if node.name else "_")
            case ast.MatchAs():
                if node.pattern is not None:
                    self._render_pattern(node.pattern, ctx, Precedence.BOR)
                    ctx.write(" as ")
                if node.name is None:
                    ctx.write("_")
                else:
                    ctx.write(ctx.identifier(node.name, node))
            case ast.MatchOr():
                ctx.interleave(
                    lambda p: self._render_pattern(p, ctx, Precedence.BOR.next()),
                    node.patterns,
                    " | ",
                )
            case _:
                raise UnsupportedConstruct(node)

    def _render_mapping_pattern(self, node: ast.MatchMapping, ctx: RenderContext) -> None:
        def render_pair(pair: tuple[ast.expr, ast.pattern]) -> None:
            key, pattern = pair
            self._render_expr(key, ctx, Precedence.BOR)
            ctx.write(": ")
            self._render_pattern(pattern, ctx)

        ctx.write("{")
        ctx.interleave(render_pair, zip(node.keys, node.patterns, strict=True))
        if node.rest is not None:
            if node.keys:
                ctx.write(", ")
            ctx.write("**")
            ctx.write(ctx.identifier(node.rest, node))
        ctx.write("}")

    def _render_class_pattern(self, node: ast.MatchClass, ctx: RenderContext) -> None:
        def render_keyword(pair: tuple[str, ast.pattern]) -> None:
            attr, pattern = pair
            ctx.write(ctx.identifier(attr, node))
            ctx.write("=")
            self._render_pattern(pattern, ctx)

        self._render_expr(node.cls, ctx, Precedence.ATOM)
        ctx.write("(")
        ctx.interleave(lambda p: self._render_pattern(p, ctx), node.patterns)
        if node.patterns and node.kwd_attrs:
            ctx.write(", ")
        ctx.interleave(render_keyword, zip(node.kwd_attrs, node.kwd_patterns, strict=True))
        ctx.write(")")

    def _render_match_case(self, node: ast.match_case, ctx: RenderContext) -> None:
        ctx.fill("case ")
        self._render_pattern(node.pattern, ctx)
        if node.guard is not None:
            ctx.write(" if ")
            self._render_expr(node.guard, ctx, Precedence.TEST)
        with ctx.block():
            self._render_body(node.body, ctx)
