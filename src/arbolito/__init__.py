"""
arbolito: Python syntax trees back to source

Renders trees built from the standard library ``ast`` node classes into
Python source text that re-parses to a structurally equal tree. Original
formatting (comments, blank lines, quoting style) is not preserved.

Quick Start:
    >>> import ast
    >>> from arbolito import unparse
    >>> tree = ast.parse("x = (a + b) * c")
    >>> print(unparse(tree), end="")
    x = (a + b) * c

    >>> # Streaming to any object with write()
    >>> import io
    >>> from arbolito import unparse_to
    >>> out = io.StringIO()
    >>> unparse_to(tree, out)

Configuration:
    >>> from arbolito import RenderConfig, render_config_context
    >>> with render_config_context(RenderConfig(indent_width=2, quote='"')):
    ...     source = unparse(tree)
"""

import ast
from collections.abc import Sequence
from typing import TextIO

from arbolito.compare import first_difference, structurally_equal
from arbolito.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from arbolito.errors import (
    ArbolitoError,
    EncodingError,
    RenderError,
    SinkError,
    UnsupportedConstruct,
)
from arbolito.precedence import Precedence, precedence_of
from arbolito.renderers.protocol import SourceRendererProtocol
from arbolito.renderers.source import SourceRenderer
from arbolito.stringbuilder import StreamSink, StringBuilder, TextSink

__version__ = "0.1.0"


def unparse(
    tree: ast.AST | Sequence[ast.stmt],
    *,
    config: RenderConfig | None = None,
) -> str:
    """Render a syntax tree to Python source.

    Args:
        tree: Module, statement list, single statement, expression, pattern
            or auxiliary node
        config: Render configuration (uses the context's active config if None)

    Returns:
        Source text; re-parsing it yields a tree structurally equal to ``tree``

    Raises:
        EncodingError: an identifier or literal does not fit ``config.encoding``
        UnsupportedConstruct: the tree holds an f-string/t-string interpolation
            or another node with no rendering

    Example:
        >>> unparse(ast.parse("a ** (b ** c)"))
        'a ** b ** c\\n'
    """
    return SourceRenderer(config).render(tree)


def unparse_to(
    tree: ast.AST | Sequence[ast.stmt],
    stream: TextIO | TextSink,
    *,
    config: RenderConfig | None = None,
) -> None:
    """Render a syntax tree straight into a text stream.

    Nothing is buffered: if rendering fails, the output written so far stays
    in ``stream`` and should be discarded by the caller.

    Raises:
        SinkError: the stream rejected a write
        EncodingError, UnsupportedConstruct: as for unparse()
    """
    SourceRenderer(config).render_to(tree, StreamSink(stream))


def roundtrip(
    source: str,
    *,
    filename: str = "<unknown>",
    config: RenderConfig | None = None,
) -> str:
    """Parse ``source`` and render it back.

    The result is normalized source: same tree, canonical formatting.

    Raises:
        SyntaxError: ``source`` does not parse
    """
    return unparse(ast.parse(source, filename=filename), config=config)


__all__ = [
    # Rendering
    "SourceRenderer",
    "SourceRendererProtocol",
    "roundtrip",
    "unparse",
    "unparse_to",
    # Sinks
    "StreamSink",
    "StringBuilder",
    "TextSink",
    # Precedence
    "Precedence",
    "precedence_of",
    # Comparison
    "first_difference",
    "structurally_equal",
    # Configuration
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    # Errors
    "ArbolitoError",
    "EncodingError",
    "RenderError",
    "SinkError",
    "UnsupportedConstruct",
]
