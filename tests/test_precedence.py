"""Tests for parenthesization by binding power.

Every case renders a parsed expression and checks the exact output, then
re-parses it to make sure the structure survived.
"""

import ast

import pytest

from arbolito import Precedence, precedence_of, structurally_equal, unparse


def render_expr(source: str) -> str:
    tree = ast.parse(source, mode="eval")
    rendered = unparse(tree)
    assert structurally_equal(ast.parse(rendered, mode="eval"), tree), rendered
    return rendered


class TestArithmetic:
    """Binary operators and their associativity."""

    def test_lower_precedence_left_operand_keeps_parens(self) -> None:
        assert render_expr("(a + b) * c") == "(a + b) * c"

    def test_higher_precedence_right_operand_is_bare(self) -> None:
        assert render_expr("a + b * c") == "a + b * c"

    def test_redundant_parens_are_dropped(self) -> None:
        assert render_expr("a + (b * c)") == "a + b * c"
        assert render_expr("((a))") == "a"

    def test_left_associative_left_operand_is_bare(self) -> None:
        assert render_expr("(a - b) - c") == "a - b - c"

    def test_left_associative_right_operand_keeps_parens(self) -> None:
        assert render_expr("a - (b - c)") == "a - (b - c)"
        assert render_expr("a / (b * c)") == "a / (b * c)"

    def test_power_right_operand_is_bare(self) -> None:
        assert render_expr("a ** (b ** c)") == "a ** b ** c"

    def test_power_left_operand_keeps_parens(self) -> None:
        assert render_expr("(a ** b) ** c") == "(a ** b) ** c"

    def test_unary_minus_binds_looser_than_power(self) -> None:
        assert render_expr("-a ** b") == "-a ** b"
        assert render_expr("(-a) ** b") == "(-a) ** b"
        assert render_expr("a ** -b") == "a ** (-b)"

    def test_unary_operand(self) -> None:
        assert render_expr("-(a + b)") == "-(a + b)"
        assert render_expr("~-a") == "~-a"
        assert render_expr("- -a") == "--a"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("a | b ^ c & d", "a | b ^ c & d"),
            ("(a | b) ^ c", "(a | b) ^ c"),
            ("(a ^ b) & c", "(a ^ b) & c"),
            ("(a & b) << c", "(a & b) << c"),
            ("(a << b) + c", "(a << b) + c"),
            ("a << b + c", "a << b + c"),
            ("(a + b) @ c", "(a + b) @ c"),
            ("a // b % c", "a // b % c"),
            ("a // (b % c)", "a // (b % c)"),
        ],
    )
    def test_bitwise_and_shift_levels(self, source: str, expected: str) -> None:
        assert render_expr(source) == expected


class TestLogical:
    """Boolean operators, not, and comparisons."""

    def test_and_inside_or_is_bare(self) -> None:
        assert render_expr("a or b and c") == "a or b and c"

    def test_or_inside_and_keeps_parens(self) -> None:
        assert render_expr("(a or b) and c") == "(a or b) and c"

    def test_nested_same_operator_keeps_grouping(self) -> None:
        assert render_expr("a or (b or c)") == "a or (b or c)"
        assert render_expr("(a and b) and c") == "(a and b) and c"

    def test_flat_bool_op(self) -> None:
        assert render_expr("a and b and c") == "a and b and c"

    def test_not(self) -> None:
        assert render_expr("not a == b") == "not a == b"
        assert render_expr("(not a) == b") == "(not a) == b"
        assert render_expr("not (a or b)") == "not (a or b)"
        assert render_expr("a and not b") == "a and not b"

    def test_comparison_chain_is_flat(self) -> None:
        assert render_expr("a < b <= c != d") == "a < b <= c != d"

    def test_nested_comparison_keeps_parens(self) -> None:
        assert render_expr("(a < b) < c") == "(a < b) < c"
        assert render_expr("a < (b < c)") == "a < (b < c)"

    def test_word_comparisons(self) -> None:
        assert render_expr("a is not b") == "a is not b"
        assert render_expr("a not in b") == "a not in b"
        assert render_expr("a in b is c") == "a in b is c"


class TestLooseForms:
    """Conditional, lambda, walrus, tuple, await."""

    def test_conditional_chains_to_the_right(self) -> None:
        assert render_expr("a if b else c if d else e") == "a if b else c if d else e"

    def test_conditional_in_body_keeps_parens(self) -> None:
        assert render_expr("(a if b else c) if d else e") == "(a if b else c) if d else e"
        assert render_expr("a if (b if c else d) else e") == "a if (b if c else d) else e"

    def test_conditional_in_operand(self) -> None:
        assert render_expr("(a if b else c) + 1") == "(a if b else c) + 1"

    def test_lambda(self) -> None:
        assert render_expr("lambda: a if b else c") == "lambda: a if b else c"
        assert render_expr("(lambda: a)()") == "(lambda: a)()"
        assert render_expr("f(lambda x: x)") == "f(lambda x: x)"

    def test_named_expression_is_parenthesized(self) -> None:
        assert render_expr("(x := 1)") == "(x := 1)"
        assert render_expr("f((x := 1))") == "f((x := 1))"
        assert render_expr("(x := (1, 2))") == "(x := (1, 2))"

    def test_tuple_at_top_level_is_bare(self) -> None:
        assert render_expr("(a, b)") == "a, b"
        assert render_expr("(a,)") == "a,"

    def test_tuple_inside_expression_keeps_parens(self) -> None:
        assert render_expr("f((a, b))") == "f((a, b))"
        assert render_expr("[(a, b)]") == "[(a, b)]"
        assert render_expr("(a, b)[0]") == "(a, b)[0]"

    def test_empty_tuple(self) -> None:
        assert render_expr("()") == "()"
        assert render_expr("f(())") == "f(())"

    def test_atoms_never_wrapped(self) -> None:
        assert render_expr("a.b[c](d)") == "a.b[c](d)"

    def test_starred_operand(self) -> None:
        assert render_expr("[*(a or b)]") == "[*(a or b)]"
        assert render_expr("[*a.b]") == "[*a.b]"


class TestSiblingIndependence:
    """A sibling's context must never leak into the next sibling."""

    def test_bare_operand_after_parenthesized_sibling(self) -> None:
        # The left operand needs parens, the right does not
        assert render_expr("(a + b) * c.d") == "(a + b) * c.d"

    def test_call_arguments_after_tight_context(self) -> None:
        assert render_expr("(-a) ** f(b + c, d or e)") == "(-a) ** f(b + c, d or e)"

    def test_bool_op_operands(self) -> None:
        assert render_expr("a or b or (c and d) or e") == "a or b or c and d or e"


class TestPrecedenceOf:
    """The table itself."""

    def test_ordering(self) -> None:
        assert Precedence.NAMED_EXPR < Precedence.TUPLE < Precedence.YIELD < Precedence.TEST
        assert Precedence.TEST < Precedence.OR < Precedence.AND < Precedence.NOT
        assert Precedence.NOT < Precedence.CMP < Precedence.BOR < Precedence.BXOR
        assert Precedence.BXOR < Precedence.BAND < Precedence.SHIFT < Precedence.ARITH
        assert Precedence.ARITH < Precedence.TERM < Precedence.FACTOR < Precedence.POWER
        assert Precedence.POWER < Precedence.AWAIT < Precedence.ATOM

    def test_next_saturates(self) -> None:
        assert Precedence.TEST.next() is Precedence.OR
        assert Precedence.ATOM.next() is Precedence.ATOM

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("a + b", Precedence.ARITH),
            ("a * b", Precedence.TERM),
            ("a ** b", Precedence.POWER),
            ("-a", Precedence.FACTOR),
            ("not a", Precedence.NOT),
            ("a < b", Precedence.CMP),
            ("a or b", Precedence.OR),
            ("a and b", Precedence.AND),
            ("a if b else c", Precedence.TEST),
            ("lambda: 0", Precedence.TEST),
            ("(a, b)", Precedence.TUPLE),
            ("()", Precedence.ATOM),
            ("f(x)", Precedence.ATOM),
            ("1", Precedence.ATOM),
        ],
    )
    def test_expression_kinds(self, source: str, expected: Precedence) -> None:
        assert precedence_of(ast.parse(source, mode="eval").body) is expected

    def test_negative_constant_binds_as_unary(self) -> None:
        assert precedence_of(ast.Constant(value=-1)) is Precedence.FACTOR
        assert precedence_of(ast.Constant(value=-0.0)) is Precedence.FACTOR
        assert precedence_of(ast.Constant(value=True)) is Precedence.ATOM

    def test_negative_constant_rendering(self) -> None:
        tree = ast.BinOp(left=ast.Constant(value=-2), op=ast.Pow(), right=ast.Constant(value=2))
        assert unparse(tree) == "(-2) ** 2"
