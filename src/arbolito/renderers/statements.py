"""Statement rendering mixin.

Each statement starts a new line at the current indentation. Compound
statements write their header, then render the nested body one level
deeper inside ``ctx.block()``.
"""

from __future__ import annotations

import ast
from collections.abc import Sequence
from typing import TYPE_CHECKING

from arbolito.errors import UnsupportedConstruct
from arbolito.precedence import BINOP_SYMBOLS, Precedence

if TYPE_CHECKING:
    from arbolito.renderers.context import RenderContext


class StatementRenderingMixin:
    """Mixin for statement rendering.

    Required Host Methods:
        - _render_expr(node, ctx, level) -> None
        - _render_arguments(args, ctx) -> None
        - _render_keyword / _render_alias / _render_withitem(node, ctx) -> None
        - _render_type_params(params, ctx) -> None
        - _render_match_case(case, ctx) -> None
    """

    def _render_body(self, statements: Sequence[ast.stmt], ctx: RenderContext) -> None:
        for statement in statements:
            self._render_stmt(statement, ctx)

    def _render_stmt(self, node: ast.stmt, ctx: RenderContext) -> None:
        match node:
            case ast.FunctionDef() | ast.AsyncFunctionDef():
                self._render_function_def(node, ctx)
            case ast.ClassDef():
                self._render_class_def(node, ctx)
            case ast.Return():
                ctx.fill("return")
                if node.value is not None:
                    ctx.write(" ")
                    self._render_expr(node.value, ctx, _tuple_level(node.value))
            case ast.Delete():
                ctx.fill("del ")
                ctx.interleave(lambda t: self._render_expr(t, ctx), node.targets)
            case ast.Assign():
                self._render_assign(node, ctx)
            case ast.AugAssign():
                ctx.fill()
                self._render_expr(node.target, ctx, Precedence.TUPLE)
                ctx.write(f" {BINOP_SYMBOLS[type(node.op)]}= ")
                self._render_expr(node.value, ctx, Precedence.TUPLE)
            case ast.AnnAssign():
                self._render_ann_assign(node, ctx)
            case ast.TypeAlias():
                ctx.fill("type ")
                self._render_expr(node.name, ctx, Precedence.ATOM)
                self._render_type_params(node.type_params, ctx)
                ctx.write(" = ")
                self._render_expr(node.value, ctx, Precedence.TEST)
            case ast.For() | ast.AsyncFor():
                self._render_for(node, ctx)
            case ast.While():
                ctx.fill("while ")
                self._render_expr(node.test, ctx, Precedence.TEST)
                with ctx.block():
                    self._render_body(node.body, ctx)
                self._render_else(node.orelse, ctx)
            case ast.If():
                self._render_if(node, ctx)
            case ast.With() | ast.AsyncWith():
                ctx.fill("async with " if isinstance(node, ast.AsyncWith) else "with ")
                ctx.interleave(lambda item: self._render_withitem(item, ctx), node.items)
                with ctx.block():
                    self._render_type_comment(node, ctx)
                    self._render_body(node.body, ctx)
            case ast.Match():
                ctx.fill("match ")
                self._render_expr(node.subject, ctx, Precedence.TEST)
                with ctx.block():
                    for case in node.cases:
                        self._render_match_case(case, ctx)
            case ast.Raise():
                ctx.fill("raise")
                if node.exc is not None:
                    ctx.write(" ")
                    self._render_expr(node.exc, ctx, Precedence.TEST)
                    if node.cause is not None:
                        ctx.write(" from ")
                        self._render_expr(node.cause, ctx, Precedence.TEST)
            case ast.Try():
                self._render_try(node, ctx, star=False)
            case ast.TryStar():
                self._render_try(node, ctx, star=True)
            case ast.Assert():
                ctx.fill("assert ")
                self._render_expr(node.test, ctx, Precedence.TEST)
                if node.msg is not None:
                    ctx.write(", ")
                    self._render_expr(node.msg, ctx, Precedence.TEST)
            case ast.Import():
                ctx.fill("import ")
                ctx.interleave(lambda alias: self._render_alias(alias, ctx), node.names)
            case ast.ImportFrom():
                self._render_import_from(node, ctx)
            case ast.Global() | ast.Nonlocal():
                keyword = "global" if isinstance(node, ast.Global) else "nonlocal"
                ctx.fill(f"{keyword} ")
                ctx.interleave(lambda name: ctx.write(ctx.identifier(name, node)), node.names)
            case ast.Expr():
                ctx.fill()
                self._render_expr(node.value, ctx, Precedence.YIELD)
            case ast.Pass():
                ctx.fill("pass")
            case ast.Break():
                ctx.fill("break")
            case ast.Continue():
                ctx.fill("continue")
            case _:
                raise UnsupportedConstruct(node)

    # =========================================================================
    # Definitions
    # =========================================================================

    def _render_decorators(self, decorators: list[ast.expr], ctx: RenderContext) -> None:
        for decorator in decorators:
            ctx.fill("@")
            self._render_expr(decorator, ctx, Precedence.TEST)

    def _render_function_def(
        self,
        node: ast.FunctionDef | ast.AsyncFunctionDef,
        ctx: RenderContext,
    ) -> None:
        self._render_decorators(node.decorator_list, ctx)
        keyword = "async def" if isinstance(node, ast.AsyncFunctionDef) else "def"
        ctx.fill(f"{keyword} {ctx.identifier(node.name, node)}")
        self._render_type_params(getattr(node, "type_params", []), ctx)
        ctx.write("(")
        self._render_arguments(node.args, ctx)
        ctx.write(")")
        if node.returns is not None:
            ctx.write(" -> ")
            self._render_expr(node.returns, ctx, Precedence.TEST)
        with ctx.block():
            self._render_type_comment(node, ctx)
            self._render_body(node.body, ctx)

    def _render_class_def(self, node: ast.ClassDef, ctx: RenderContext) -> None:
        self._render_decorators(node.decorator_list, ctx)
        ctx.fill(f"class {ctx.identifier(node.name, node)}")
        self._render_type_params(getattr(node, "type_params", []), ctx)
        if node.bases or node.keywords:
            ctx.write("(")
            ctx.interleave(
                lambda item: (
                    self._render_keyword(item, ctx)
                    if isinstance(item, ast.keyword)
                    else self._render_expr(item, ctx)
                ),
                [*node.bases, *node.keywords],
            )
            ctx.write(")")
        with ctx.block():
            self._render_body(node.body, ctx)

    # =========================================================================
    # Assignments
    # =========================================================================

    def _render_assign(self, node: ast.Assign, ctx: RenderContext) -> None:
        ctx.fill()
        for target in node.targets:
            self._render_expr(target, ctx, Precedence.TUPLE)
            ctx.write(" = ")
        self._render_expr(node.value, ctx, Precedence.TUPLE)
        self._render_type_comment(node, ctx)

    def _render_ann_assign(self, node: ast.AnnAssign, ctx: RenderContext) -> None:
        ctx.fill()
        # simple=0 marks a parenthesized name target: (x): int
        with ctx.delimit("(", ")", not node.simple and isinstance(node.target, ast.Name)):
            self._render_expr(node.target, ctx, Precedence.ATOM)
        ctx.write(": ")
        self._render_expr(node.annotation, ctx, Precedence.TEST)
        if node.value is not None:
            ctx.write(" = ")
            self._render_expr(node.value, ctx, Precedence.TUPLE)

    # =========================================================================
    # Control flow
    # =========================================================================

    def _render_for(self, node: ast.For | ast.AsyncFor, ctx: RenderContext) -> None:
        ctx.fill("async for " if isinstance(node, ast.AsyncFor) else "for ")
        self._render_expr(node.target, ctx, Precedence.TUPLE)
        ctx.write(" in ")
        self._render_expr(node.iter, ctx, _tuple_level(node.iter))
        with ctx.block():
            self._render_type_comment(node, ctx)
            self._render_body(node.body, ctx)
        self._render_else(node.orelse, ctx)

    def _render_if(self, node: ast.If, ctx: RenderContext) -> None:
        ctx.fill("if ")
        self._render_expr(node.test, ctx, Precedence.TEST)
        with ctx.block():
            self._render_body(node.body, ctx)
        # A lone nested if in the else branch collapses into elif
        orelse = node.orelse
        while len(orelse) == 1 and isinstance(orelse[0], ast.If):
            branch = orelse[0]
            ctx.fill("elif ")
            self._render_expr(branch.test, ctx, Precedence.TEST)
            with ctx.block():
                self._render_body(branch.body, ctx)
            orelse = branch.orelse
        self._render_else(orelse, ctx)

    def _render_else(self, orelse: Sequence[ast.stmt], ctx: RenderContext) -> None:
        self._render_clause("else", orelse, ctx)

    def _render_clause(self, keyword: str, statements: Sequence[ast.stmt], ctx: RenderContext) -> None:
        if not statements:
            return
        ctx.fill(keyword)
        with ctx.block():
            self._render_body(statements, ctx)

    def _render_try(self, node: ast.Try | ast.TryStar, ctx: RenderContext, *, star: bool) -> None:
        """Render try/except or try/except*; ``star`` only changes the handler keyword."""
        ctx.fill("try")
        with ctx.block():
            self._render_body(node.body, ctx)
        for handler in node.handlers:
            self._render_handler(handler, ctx, star=star)
        self._render_else(node.orelse, ctx)
        self._render_clause("finally", node.finalbody, ctx)

    def _render_handler(self, node: ast.excepthandler, ctx: RenderContext, *, star: bool) -> None:
        if not isinstance(node, ast.ExceptHandler):
            raise UnsupportedConstruct(node)
        ctx.fill("except*" if star else "except")
        if node.type is not None:
            ctx.write(" ")
            self._render_expr(node.type, ctx, Precedence.TEST)
            if node.name is not None:
                ctx.write(" as ")
                ctx.write(ctx.identifier(node.name, node))
        with ctx.block():
            self._render_body(node.body, ctx)

    # =========================================================================
    # Imports and comments
    # =========================================================================

    def _render_import_from(self, node: ast.ImportFrom, ctx: RenderContext) -> None:
        ctx.fill("from ")
        ctx.write("." * (node.level or 0))
        if node.module:
            ctx.write(ctx.identifier(node.module, node))
        ctx.write(" import ")
        ctx.interleave(lambda alias: self._render_alias(alias, ctx), node.names)

    def _render_type_comment(self, node: ast.AST, ctx: RenderContext) -> None:
        """Trailing ``# type:`` comment on the current line, if the node carries one."""
        comment = getattr(node, "type_comment", None)
        if comment:
            ctx.write(f"  # type: {comment}")


def _tuple_level(node: ast.expr) -> Precedence:
    """Level for return values and loop iterables: bare tuples, but no bare yield."""
    if isinstance(node, (ast.Yield, ast.YieldFrom)):
        return Precedence.TEST
    return Precedence.TUPLE
