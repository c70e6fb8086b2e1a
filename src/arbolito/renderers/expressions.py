"""Expression rendering mixin.

Every expression is rendered with the minimum precedence its position
requires (``level``). The node's own precedence is compared against that
level at a single point, ``_render_expr``, which adds parentheses when the
node binds more loosely than its position allows. Children receive their
own levels as arguments, so siblings never see each other's context.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from arbolito.errors import EncodingError, UnsupportedConstruct
from arbolito.literals import format_number, quote_bytes, quote_str
from arbolito.precedence import (
    BINOP_SYMBOLS,
    BOOLOP_PRECEDENCE,
    BOOLOP_SYMBOLS,
    CMPOP_SYMBOLS,
    UNARYOP_PRECEDENCE,
    UNARYOP_SYMBOLS,
    Precedence,
    binop_operand_levels,
    precedence_of,
)

if TYPE_CHECKING:
    from arbolito.renderers.context import RenderContext

logger = logging.getLogger(__name__)

# Interpolation nodes; TemplateStr/Interpolation only exist on newer interpreters
_INTERPOLATION_TYPES: tuple[type[ast.AST], ...] = tuple(
    getattr(ast, name)
    for name in ("JoinedStr", "FormattedValue", "TemplateStr", "Interpolation")
    if hasattr(ast, name)
)


class ExpressionRenderingMixin:
    """Mixin for expression rendering.

    Required Host Methods:
        - _render_arguments(args, ctx, *, annotations) -> None
        - _render_keyword(keyword, ctx) -> None
        - _render_comprehension(generator, ctx) -> None
    """

    def _render_expr(
        self,
        node: ast.expr,
        ctx: RenderContext,
        level: Precedence = Precedence.TEST,
    ) -> None:
        """Render an expression, parenthesized if it binds looser than ``level``."""
        with ctx.delimit("(", ")", precedence_of(node) < level):
            self._render_expr_bare(node, ctx)

    def _render_expr_bare(self, node: ast.expr, ctx: RenderContext) -> None:
        match node:
            case ast.BoolOp():
                self._render_bool_op(node, ctx)
            case ast.NamedExpr():
                self._render_expr(node.target, ctx, Precedence.ATOM)
                ctx.write(" := ")
                self._render_expr(node.value, ctx, Precedence.TEST)
            case ast.BinOp():
                self._render_bin_op(node, ctx)
            case ast.UnaryOp():
                self._render_unary_op(node, ctx)
            case ast.Lambda():
                self._render_lambda(node, ctx)
            case ast.IfExp():
                self._render_expr(node.body, ctx, Precedence.OR)
                ctx.write(" if ")
                self._render_expr(node.test, ctx, Precedence.OR)
                ctx.write(" else ")
                self._render_expr(node.orelse, ctx, Precedence.TEST)
            case ast.Dict():
                self._render_dict(node, ctx)
            case ast.Set():
                self._render_set(node, ctx)
            case ast.ListComp():
                self._render_comprehension_display("[", "]", node.elt, node.generators, ctx)
            case ast.SetComp():
                self._render_comprehension_display("{", "}", node.elt, node.generators, ctx)
            case ast.GeneratorExp():
                self._render_comprehension_display("(", ")", node.elt, node.generators, ctx)
            case ast.DictComp():
                ctx.write("{")
                self._render_expr(node.key, ctx)
                ctx.write(": ")
                self._render_expr(node.value, ctx)
                for generator in node.generators:
                    self._render_comprehension(generator, ctx)
                ctx.write("}")
            case ast.Await():
                ctx.write("await ")
                self._render_expr(node.value, ctx, Precedence.ATOM)
            case ast.Yield():
                ctx.write("yield")
                if node.value is not None:
                    ctx.write(" ")
                    self._render_expr(node.value, ctx)
            case ast.YieldFrom():
                ctx.write("yield from ")
                self._render_expr(node.value, ctx)
            case ast.Compare():
                self._render_compare(node, ctx)
            case ast.Call():
                self._render_call(node, ctx)
            case ast.Constant():
                self._render_constant(node, ctx)
            case ast.Attribute():
                self._render_attribute(node, ctx)
            case ast.Subscript():
                self._render_subscript(node, ctx)
            case ast.Starred():
                ctx.write("*")
                self._render_expr(node.value, ctx, Precedence.BOR)
            case ast.Name():
                ctx.write(ctx.identifier(node.id, node))
            case ast.List():
                ctx.write("[")
                ctx.interleave(lambda elt: self._render_expr(elt, ctx), node.elts)
                ctx.write("]")
            case ast.Tuple():
                self._render_tuple(node, ctx)
            case ast.Slice():
                self._render_slice(node, ctx)
            case _ if isinstance(node, _INTERPOLATION_TYPES):
                logger.debug("Refusing interpolation node %s", type(node).__name__)
                raise UnsupportedConstruct(node, "string interpolation is not supported")
            case _:
                raise UnsupportedConstruct(node)

    # =========================================================================
    # Operators
    # =========================================================================

    def _render_bool_op(self, node: ast.BoolOp, ctx: RenderContext) -> None:
        # Same-operator operands must stay grouped: a or (b or c) != a or b or c
        operand_level = BOOLOP_PRECEDENCE[type(node.op)].next()
        separator = f" {BOOLOP_SYMBOLS[type(node.op)]} "
        ctx.interleave(
            lambda value: self._render_expr(value, ctx, operand_level),
            node.values,
            separator,
        )

    def _render_bin_op(self, node: ast.BinOp, ctx: RenderContext) -> None:
        left_level, right_level = binop_operand_levels(node.op)
        self._render_expr(node.left, ctx, left_level)
        ctx.write(f" {BINOP_SYMBOLS[type(node.op)]} ")
        self._render_expr(node.right, ctx, right_level)

    def _render_unary_op(self, node: ast.UnaryOp, ctx: RenderContext) -> None:
        ctx.write(UNARYOP_SYMBOLS[type(node.op)])
        self._render_expr(node.operand, ctx, UNARYOP_PRECEDENCE[type(node.op)])

    def _render_compare(self, node: ast.Compare, ctx: RenderContext) -> None:
        operand_level = Precedence.CMP.next()
        self._render_expr(node.left, ctx, operand_level)
        for op, comparator in zip(node.ops, node.comparators, strict=True):
            ctx.write(f" {CMPOP_SYMBOLS[type(op)]} ")
            self._render_expr(comparator, ctx, operand_level)

    def _render_lambda(self, node: ast.Lambda, ctx: RenderContext) -> None:
        ctx.write("lambda")
        if _has_parameters(node.args):
            ctx.write(" ")
            self._render_arguments(node.args, ctx, annotations=False)
        ctx.write(": ")
        self._render_expr(node.body, ctx, Precedence.TEST)

    # =========================================================================
    # Displays
    # =========================================================================

    def _render_dict(self, node: ast.Dict, ctx: RenderContext) -> None:
        def render_entry(entry: tuple[ast.expr | None, ast.expr]) -> None:
            key, value = entry
            if key is None:
                ctx.write("**")
                self._render_expr(value, ctx, Precedence.BOR)
            else:
                self._render_expr(key, ctx)
                ctx.write(": ")
                self._render_expr(value, ctx)

        ctx.write("{")
        ctx.interleave(render_entry, zip(node.keys, node.values, strict=True))
        ctx.write("}")

    def _render_set(self, node: ast.Set, ctx: RenderContext) -> None:
        if not node.elts:
            # {} would be an empty dict
            ctx.write("{*()}")
            return
        ctx.write("{")
        ctx.interleave(lambda elt: self._render_expr(elt, ctx), node.elts)
        ctx.write("}")

    def _render_tuple(self, node: ast.Tuple, ctx: RenderContext) -> None:
        # _render_expr already added parentheses where a bare tuple is not allowed;
        # the empty tuple is an atom and always carries its own.
        with ctx.delimit("(", ")", not node.elts):
            self._render_items(node.elts, ctx)

    def _render_items(self, elts: list[ast.expr], ctx: RenderContext) -> None:
        """Comma-separated elements; a single element keeps its trailing comma."""
        ctx.interleave(lambda elt: self._render_expr(elt, ctx), elts)
        if len(elts) == 1:
            ctx.write(",")

    def _render_comprehension_display(
        self,
        start: str,
        end: str,
        elt: ast.expr,
        generators: list[ast.comprehension],
        ctx: RenderContext,
    ) -> None:
        ctx.write(start)
        self._render_expr(elt, ctx)
        for generator in generators:
            self._render_comprehension(generator, ctx)
        ctx.write(end)

    # =========================================================================
    # Primaries
    # =========================================================================

    def _render_call(self, node: ast.Call, ctx: RenderContext) -> None:
        self._render_expr(node.func, ctx, Precedence.ATOM)
        match node:
            case ast.Call(args=[ast.GeneratorExp() as generator], keywords=[]):
                # The generator's own parentheses double as the call's: f(x for x in y)
                self._render_expr(generator, ctx)
                return
        ctx.write("(")
        ctx.interleave(
            lambda item: (
                self._render_keyword(item, ctx)
                if isinstance(item, ast.keyword)
                else self._render_expr(item, ctx)
            ),
            [*node.args, *node.keywords],
        )
        ctx.write(")")

    def _render_attribute(self, node: ast.Attribute, ctx: RenderContext) -> None:
        self._render_expr(node.value, ctx, Precedence.ATOM)
        # 1.real would tokenize as the float "1." followed by a name
        value = node.value
        if (
            isinstance(value, ast.Constant)
            and isinstance(value.value, int)
            and not isinstance(value.value, bool)
            and precedence_of(value) == Precedence.ATOM
        ):
            ctx.write(" ")
        ctx.write(".")
        ctx.write(ctx.identifier(node.attr, node))

    def _render_subscript(self, node: ast.Subscript, ctx: RenderContext) -> None:
        self._render_expr(node.value, ctx, Precedence.ATOM)
        ctx.write("[")
        index = node.slice
        if isinstance(index, ast.Tuple) and index.elts:
            # Bare so slices may appear as elements: a[1:2, ::3]
            self._render_items(index.elts, ctx)
        else:
            self._render_expr(index, ctx)
        ctx.write("]")

    def _render_slice(self, node: ast.Slice, ctx: RenderContext) -> None:
        if node.lower is not None:
            self._render_expr(node.lower, ctx)
        ctx.write(":")
        if node.upper is not None:
            self._render_expr(node.upper, ctx)
        if node.step is not None:
            ctx.write(":")
            self._render_expr(node.step, ctx)

    # =========================================================================
    # Constants
    # =========================================================================

    def _render_constant(self, node: ast.Constant, ctx: RenderContext) -> None:
        prefix = "u" if getattr(node, "kind", None) == "u" else ""
        ctx.write(self._spell_constant(node.value, node, ctx, prefix))

    def _spell_constant(
        self,
        value: object,
        node: ast.Constant,
        ctx: RenderContext,
        prefix: str = "",
    ) -> str:
        config = ctx.config
        match value:
            case None | True | False:
                return repr(value)
            case _ if value is Ellipsis:
                return "..."
            case int() | float() | complex():
                return format_number(value)
            case str():
                text = quote_str(
                    value,
                    quote=config.quote,
                    raw=config.raw_strings,
                    encoding=config.encoding,
                    prefix=prefix,
                )
            case bytes():
                text = quote_bytes(value, quote=config.quote, raw=config.raw_strings)
            case tuple():
                items = [self._spell_constant(item, node, ctx) for item in value]
                if len(items) == 1:
                    return f"({items[0]},)"
                return f"({', '.join(items)})"
            case frozenset():
                items = [self._spell_constant(item, node, ctx) for item in value]
                if not items:
                    return "frozenset()"
                return f"frozenset({{{', '.join(items)}}})"
            case _:
                raise UnsupportedConstruct(
                    node, f"constant of type {type(value).__name__}"
                )
        try:
            text.encode(config.encoding)
        except UnicodeEncodeError:
            raise EncodingError(text, config.encoding, node) from None
        return text


def _has_parameters(args: ast.arguments) -> bool:
    return bool(
        args.posonlyargs or args.args or args.vararg or args.kwonlyargs or args.kwarg
    )
