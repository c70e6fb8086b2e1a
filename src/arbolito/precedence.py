"""Binding powers and operator spellings.

Every expression kind gets a rank; a child whose rank is below the level its
position requires is wrapped in parentheses. Kinds that never need wrapping
(names, constants, calls, displays, ...) rank as ATOM.

The tables here are static and shared; nothing in this module holds
per-render state.
"""

from __future__ import annotations

import ast
from enum import IntEnum


class Precedence(IntEnum):
    """Binding power, lowest first."""

    NAMED_EXPR = 1  # <target> := <value>
    TUPLE = 2  # a, b
    YIELD = 3  # yield, yield from
    TEST = 4  # if-else, lambda
    OR = 5
    AND = 6
    NOT = 7
    CMP = 8  # <, >, ==, in, is, ...
    BOR = 9
    BXOR = 10
    BAND = 11
    SHIFT = 12
    ARITH = 13  # +, -
    TERM = 14  # *, @, /, //, %
    FACTOR = 15  # unary +, -, ~
    POWER = 16
    AWAIT = 17
    ATOM = 18

    def next(self) -> Precedence:
        """The next tighter level (ATOM saturates)."""
        try:
            return Precedence(self + 1)
        except ValueError:
            return self


BINOP_SYMBOLS: dict[type[ast.operator], str] = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.MatMult: "@",
    ast.Div: "/",
    ast.Mod: "%",
    ast.LShift: "<<",
    ast.RShift: ">>",
    ast.BitOr: "|",
    ast.BitXor: "^",
    ast.BitAnd: "&",
    ast.FloorDiv: "//",
    ast.Pow: "**",
}

BINOP_PRECEDENCE: dict[type[ast.operator], Precedence] = {
    ast.Add: Precedence.ARITH,
    ast.Sub: Precedence.ARITH,
    ast.Mult: Precedence.TERM,
    ast.MatMult: Precedence.TERM,
    ast.Div: Precedence.TERM,
    ast.Mod: Precedence.TERM,
    ast.LShift: Precedence.SHIFT,
    ast.RShift: Precedence.SHIFT,
    ast.BitOr: Precedence.BOR,
    ast.BitXor: Precedence.BXOR,
    ast.BitAnd: Precedence.BAND,
    ast.FloorDiv: Precedence.TERM,
    ast.Pow: Precedence.POWER,
}

UNARYOP_SYMBOLS: dict[type[ast.unaryop], str] = {
    ast.Invert: "~",
    ast.Not: "not ",
    ast.UAdd: "+",
    ast.USub: "-",
}

UNARYOP_PRECEDENCE: dict[type[ast.unaryop], Precedence] = {
    ast.Invert: Precedence.FACTOR,
    ast.Not: Precedence.NOT,
    ast.UAdd: Precedence.FACTOR,
    ast.USub: Precedence.FACTOR,
}

CMPOP_SYMBOLS: dict[type[ast.cmpop], str] = {
    ast.Eq: "==",
    ast.NotEq: "!=",
    ast.Lt: "<",
    ast.LtE: "<=",
    ast.Gt: ">",
    ast.GtE: ">=",
    ast.Is: "is",
    ast.IsNot: "is not",
    ast.In: "in",
    ast.NotIn: "not in",
}

BOOLOP_SYMBOLS: dict[type[ast.boolop], str] = {
    ast.And: "and",
    ast.Or: "or",
}

BOOLOP_PRECEDENCE: dict[type[ast.boolop], Precedence] = {
    ast.And: Precedence.AND,
    ast.Or: Precedence.OR,
}


def _is_negative_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # repr, not comparison: -0.0 also spells with a leading minus
    return repr(value).startswith("-")


def precedence_of(node: ast.AST) -> Precedence:
    """Return the binding power of an expression node.

    Args:
        node: Any expression node

    Returns:
        The node's own precedence; ATOM for kinds that never need wrapping.
    """
    match node:
        case ast.NamedExpr():
            return Precedence.NAMED_EXPR
        case ast.Tuple(elts=[_, *_]):
            # () is an atom; only non-empty tuples have a bare form
            return Precedence.TUPLE
        case ast.Yield() | ast.YieldFrom():
            return Precedence.YIELD
        case ast.IfExp() | ast.Lambda():
            return Precedence.TEST
        case ast.BoolOp(op=op):
            return BOOLOP_PRECEDENCE[type(op)]
        case ast.UnaryOp(op=op):
            return UNARYOP_PRECEDENCE[type(op)]
        case ast.Compare():
            return Precedence.CMP
        case ast.BinOp(op=op):
            return BINOP_PRECEDENCE[type(op)]
        case ast.Await():
            return Precedence.AWAIT
        case ast.Constant(value=value) if _is_negative_number(value):
            return Precedence.FACTOR
        case _:
            return Precedence.ATOM


def binop_operand_levels(op: ast.operator) -> tuple[Precedence, Precedence]:
    """Required levels for the (left, right) operands of a binary operator.

    Left-associative operators accept an equal-precedence left operand bare
    and need parentheses around an equal-precedence right operand. Power is
    right-associative, so the asymmetry flips.
    """
    level = BINOP_PRECEDENCE[type(op)]
    if isinstance(op, ast.Pow):
        return level.next(), level
    return level, level.next()


__all__ = [
    "BINOP_PRECEDENCE",
    "BINOP_SYMBOLS",
    "BOOLOP_PRECEDENCE",
    "BOOLOP_SYMBOLS",
    "CMPOP_SYMBOLS",
    "Precedence",
    "UNARYOP_PRECEDENCE",
    "UNARYOP_SYMBOLS",
    "binop_operand_levels",
    "precedence_of",
]
