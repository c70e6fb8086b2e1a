"""Auxiliary node rendering mixin.

Parameter lists, call keywords, import aliases, comprehension clauses,
with-items and type parameters: the small structural forms shared by the
statement and expression renderers.
"""

from __future__ import annotations

import ast
from itertools import zip_longest
from typing import TYPE_CHECKING

from arbolito.errors import UnsupportedConstruct
from arbolito.precedence import Precedence

if TYPE_CHECKING:
    from arbolito.renderers.context import RenderContext


class ArgumentsRenderingMixin:
    """Mixin for parameters and other auxiliary forms.

    Required Host Methods:
        - _render_expr(node, ctx, level) -> None
    """

    def _render_arguments(
        self,
        node: ast.arguments,
        ctx: RenderContext,
        *,
        annotations: bool = True,
    ) -> None:
        """Render a parameter list without the surrounding parentheses.

        ``defaults`` belong to the last positional parameters (positional-only
        and regular together); ``kw_defaults`` pair one-to-one with keyword-only
        parameters, None marking a parameter without default.
        """
        positional = [*node.posonlyargs, *node.args]
        padding = len(positional) - len(node.defaults)
        defaults: list[ast.expr | None] = [None] * padding + list(node.defaults)

        parts: list[tuple[ast.arg | str, ast.expr | None, str]] = []
        for index, (arg, default) in enumerate(zip(positional, defaults, strict=True)):
            parts.append((arg, default, ""))
            # Emitted even when nothing follows: def f(a, /) keeps a positional-only
            if index == len(node.posonlyargs) - 1:
                parts.append(("/", None, ""))

        if node.vararg is not None:
            parts.append((node.vararg, None, "*"))
        elif node.kwonlyargs:
            parts.append(("*", None, ""))

        for arg, default in zip_longest(node.kwonlyargs, node.kw_defaults):
            parts.append((arg, default, ""))

        if node.kwarg is not None:
            parts.append((node.kwarg, None, "**"))

        def render_part(part: tuple[ast.arg | str, ast.expr | None, str]) -> None:
            arg, default, star = part
            if isinstance(arg, str):
                ctx.write(arg)
                return
            ctx.write(star)
            self._render_arg(arg, ctx, annotations=annotations)
            if default is not None:
                # PEP 8: spaces around "=" only when annotated
                ctx.write(" = " if annotations and arg.annotation is not None else "=")
                self._render_expr(default, ctx, Precedence.TEST)

        ctx.interleave(render_part, parts)

    def _render_arg(self, node: ast.arg, ctx: RenderContext, *, annotations: bool = True) -> None:
        ctx.write(ctx.identifier(node.arg, node))
        if annotations and node.annotation is not None:
            ctx.write(": ")
            self._render_expr(node.annotation, ctx, Precedence.TEST)

    def _render_keyword(self, node: ast.keyword, ctx: RenderContext) -> None:
        if node.arg is None:
            ctx.write("**")
            self._render_expr(node.value, ctx, Precedence.BOR)
        else:
            ctx.write(ctx.identifier(node.arg, node))
            ctx.write("=")
            self._render_expr(node.value, ctx, Precedence.TEST)

    def _render_alias(self, node: ast.alias, ctx: RenderContext) -> None:
        ctx.write(ctx.identifier(node.name, node))
        if node.asname:
            ctx.write(" as ")
            ctx.write(ctx.identifier(node.asname, node))

    def _render_comprehension(self, node: ast.comprehension, ctx: RenderContext) -> None:
        ctx.write(" async for " if node.is_async else " for ")
        self._render_expr(node.target, ctx, Precedence.TUPLE)
        ctx.write(" in ")
        self._render_expr(node.iter, ctx, Precedence.OR)
        for condition in node.ifs:
            ctx.write(" if ")
            self._render_expr(condition, ctx, Precedence.OR)

    def _render_withitem(self, node: ast.withitem, ctx: RenderContext) -> None:
        # with (a, b): reads as two items, so a lone tuple needs a second pair
        bare_tuple = (
            node.optional_vars is None
            and isinstance(node.context_expr, ast.Tuple)
            and bool(node.context_expr.elts)
        )
        with ctx.delimit("(", ")", bare_tuple):
            self._render_expr(node.context_expr, ctx, Precedence.TEST)
        if node.optional_vars is not None:
            ctx.write(" as ")
            self._render_expr(node.optional_vars, ctx, Precedence.TEST)

    def _render_type_params(self, params: list[ast.type_param], ctx: RenderContext) -> None:
        """Render ``[T, *Ts, **P]``; nothing for an empty list."""
        if not params:
            return
        ctx.write("[")
        ctx.interleave(lambda param: self._render_type_param(param, ctx), params)
        ctx.write("]")

    def _render_type_param(self, node: ast.type_param, ctx: RenderContext) -> None:
        match node:
            case ast.TypeVar():
                ctx.write(ctx.identifier(node.name, node))
                if node.bound is not None:
                    ctx.write(": ")
                    self._render_expr(node.bound, ctx, Precedence.TEST)
            case ast.ParamSpec():
                ctx.write("**")
                ctx.write(ctx.identifier(node.name, node))
            case ast.TypeVarTuple():
                ctx.write("*")
                ctx.write(ctx.identifier(node.name, node))
            case _:
                raise UnsupportedConstruct(node)
        default = getattr(node, "default_value", None)
        if default is not None:
            ctx.write(" = ")
            self._render_expr(default, ctx, Precedence.TEST)
