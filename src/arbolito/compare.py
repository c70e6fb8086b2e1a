"""Structural comparison of syntax trees.

Two trees are structurally equal when they have the same node types and the
same values in every field, ignoring source positions (``lineno``,
``col_offset``, ``end_lineno``, ``end_col_offset``). This is the equality the
round-trip guarantee is stated in: ``ast.parse(unparse(tree))`` must be
structurally equal to ``tree``.

Example:
    >>> import ast
    >>> from arbolito.compare import structurally_equal
    >>> structurally_equal(ast.parse("a+b"), ast.parse("a + b"))
    True
"""

from __future__ import annotations

import ast


def first_difference(a: object, b: object, path: str = "") -> str | None:
    """Locate the first field where two trees differ.

    Args:
        a: First tree (node, list of nodes, or leaf value)
        b: Second tree
        path: Prefix for the reported path

    Returns:
        A dotted path such as ``"body[0].value.op"``, or None when the trees
        are structurally equal. The empty path ``""`` marks a mismatch at the
        roots themselves.
    """
    if type(a) is not type(b):
        return path

    if isinstance(a, ast.AST):
        for name in a._fields:
            found = first_difference(
                getattr(a, name, None),
                getattr(b, name, None),
                f"{path}.{name}" if path else name,
            )
            if found is not None:
                return found
        return None

    if isinstance(a, list):
        if len(a) != len(b):
            return path
        for index, (left, right) in enumerate(zip(a, b, strict=True)):
            found = first_difference(left, right, f"{path}[{index}]")
            if found is not None:
                return found
        return None

    # Leaf values: nan is the only constant that is not equal to itself
    if a != b and not (isinstance(a, float) and a != a and b != b):
        return path
    # 0.0 == -0.0 but they are different literals
    if isinstance(a, (float, complex)) and repr(a) != repr(b):
        return path
    return None


def structurally_equal(a: object, b: object) -> bool:
    """True when two trees are equal ignoring source positions."""
    return first_difference(a, b) is None


__all__ = ["first_difference", "structurally_equal"]
