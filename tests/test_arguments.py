"""Tests for parameter lists and the other auxiliary node kinds."""

import ast

import pytest

from arbolito import SourceRenderer, UnsupportedConstruct, structurally_equal, unparse


def render_signature(params: str) -> str:
    """Render ``def f(<params>): pass`` and return the parameter text."""
    tree = ast.parse(f"def f({params}): pass")
    rendered = unparse(tree)
    assert structurally_equal(ast.parse(rendered), tree), rendered
    header = rendered.splitlines()[0]
    return header[len("def f(") : -len("):")]


class TestParameters:
    """Ordering, markers and defaults."""

    @pytest.mark.parametrize(
        "params",
        [
            "",
            "a",
            "a, b",
            "a=1",
            "a, b=1",
            "a, /",
            "a, /, b",
            "a, /, b, *, c",
            "a=1, /, b=2",
            "*args",
            "**kwargs",
            "*, a",
            "*, a=1, b",
            "*args, a, b=2, **kwargs",
            "a: int",
            "a: int = 1",
            "a, *args: str, **kw: bool",
            "a: 'T' = None, /",
        ],
    )
    def test_normalized_signature_is_unchanged(self, params: str) -> None:
        assert render_signature(params) == params

    def test_positional_only_defaults_align_with_tail(self) -> None:
        assert render_signature("a, b=1, /, c=2") == "a, b=1, /, c=2"

    def test_default_needs_no_parens_for_conditional(self) -> None:
        assert render_signature("a=b if c else d") == "a=b if c else d"

    def test_default_tuple_is_parenthesized(self) -> None:
        assert render_signature("a=(1, 2)") == "a=(1, 2)"

    def test_arguments_root(self) -> None:
        args = ast.parse("def f(a, *, b=1): pass").body[0].args
        assert unparse(args) == "a, *, b=1"

    def test_lambda_omits_annotations(self) -> None:
        args = ast.parse("def f(a: int = 1): pass").body[0].args
        lam = ast.Lambda(args=args, body=ast.Name(id="a", ctx=ast.Load()))
        assert unparse(lam) == "lambda a=1: a"


class TestAuxiliaryRoots:
    """Single auxiliary nodes render on their own."""

    def test_arg(self) -> None:
        assert unparse(ast.arg(arg="x", annotation=ast.Name(id="int", ctx=ast.Load()))) == "x: int"

    def test_keyword(self) -> None:
        call = ast.parse("f(a=1, **b)", mode="eval").body
        assert [unparse(k) for k in call.keywords] == ["a=1", "**b"]

    def test_alias(self) -> None:
        assert unparse(ast.alias(name="a.b", asname="c")) == "a.b as c"
        assert unparse(ast.alias(name="a")) == "a"

    def test_comprehension(self) -> None:
        comp = ast.parse("[x for x in y if x]", mode="eval").body.generators[0]
        assert unparse(comp) == " for x in y if x"

    def test_except_handler(self) -> None:
        handler = ast.parse("try:\n    pass\nexcept E as e:\n    pass\n").body[0].handlers[0]
        assert unparse(handler) == "except E as e:\n    pass"

    def test_withitem(self) -> None:
        item = ast.parse("with a as (b, c):\n    pass\n").body[0].items[0]
        assert unparse(item) == "a as (b, c)"

    def test_type_params(self) -> None:
        params = ast.parse("def f[T: (int, str), *Ts, **P](): pass").body[0].type_params
        assert [unparse(p) for p in params] == ["T: (int, str)", "*Ts", "**P"]

    def test_type_param_defaults(self) -> None:
        int_name = ast.Name(id="int", ctx=ast.Load())
        tuple_of_int = ast.Subscript(
            value=ast.Name(id="tuple", ctx=ast.Load()), slice=int_name, ctx=ast.Load()
        )
        params = [
            ast.TypeVar(name="T", default_value=int_name),
            ast.ParamSpec(name="P", default_value=ast.List(elts=[int_name], ctx=ast.Load())),
            ast.TypeVarTuple(
                name="Ts", default_value=ast.Starred(value=tuple_of_int, ctx=ast.Load())
            ),
        ]
        assert [unparse(p) for p in params] == ["T = int", "**P = [int]", "*Ts = *tuple[int]"]

    def test_bounded_type_var_with_default(self) -> None:
        param = ast.TypeVar(
            name="T",
            bound=ast.Name(id="str", ctx=ast.Load()),
            default_value=ast.Constant(value="x"),
        )
        assert unparse(param) == "T: str = 'x'"

    def test_standalone_star_handler_renders_plain_except(self) -> None:
        tree = ast.parse("try:\n    pass\nexcept* E:\n    pass\n")
        assert unparse(tree.body[0].handlers[0]) == "except E:\n    pass"

    def test_withitem_bare_tuple(self) -> None:
        item = ast.parse("with ((a, b)):\n    pass\n").body[0].items[0]
        assert unparse(item) == "((a, b))"

    def test_renderer_render_matches_unparse(self) -> None:
        tree = ast.parse("def f(a, /, b): pass")
        assert SourceRenderer().render(tree) == unparse(tree)

    def test_not_a_node(self) -> None:
        with pytest.raises(UnsupportedConstruct, match="not a syntax tree node"):
            unparse(42)  # type: ignore[arg-type]

    def test_foreign_except_handler(self) -> None:
        class CustomHandler(ast.excepthandler):
            _fields = ()

        with pytest.raises(UnsupportedConstruct, match="CustomHandler"):
            unparse(CustomHandler())
