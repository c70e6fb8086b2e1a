"""Exception classes for arbolito.

Provides standardized exceptions for error handling throughout arbolito.
Every error aborts the render in progress; output already written to a
streaming sink is left as-is and should be discarded by the caller.
"""

from __future__ import annotations

import ast


def _describe(node: object | None) -> tuple[str | None, int | None]:
    """Return the node type name and line number (if any) for messages."""
    if node is None:
        return None, None
    lineno = getattr(node, "lineno", None) if isinstance(node, ast.AST) else None
    return type(node).__name__, lineno


class ArbolitoError(Exception):
    """Base exception for all arbolito errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(ArbolitoError):
    """Error while rendering a tree to source.

    Raised when the renderer meets a node it cannot turn into valid
    source text.
    """

    def __init__(self, message: str, node: object | None = None) -> None:
        """Initialize render error with the offending node.

        Args:
            message: Error description
            node: The node being rendered when the error occurred (optional)
        """
        self.message = message
        self.node_type, self.lineno = _describe(node)

        location = f"line {self.lineno}: " if self.lineno is not None else ""
        super().__init__(f"{location}{message}")


class EncodingError(RenderError):
    """Text not representable in the output encoding.

    Raised for identifiers (which cannot be escaped) and literals whose
    rendered spelling the configured encoding rejects.
    """

    def __init__(
        self,
        text: str,
        encoding: str,
        node: object | None = None,
    ) -> None:
        """Initialize encoding error.

        Args:
            text: The text that failed to encode
            encoding: Name of the target encoding
            node: The node being rendered (optional)
        """
        self.text = text
        self.encoding = encoding
        super().__init__(f"{text!r} cannot be encoded as {encoding}", node)


class UnsupportedConstruct(RenderError):
    """Node kind with no defined rendering.

    Raised for f-string and t-string interpolation trees, constants of
    unknown types, and objects that are not syntax tree nodes at all.
    """

    def __init__(self, node: object, detail: str | None = None) -> None:
        """Initialize unsupported construct error.

        Args:
            node: The node that cannot be rendered
            detail: Extra explanation appended to the message (optional)
        """
        message = f"cannot render {type(node).__name__} node"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, node)


class SinkError(ArbolitoError):
    """The output destination rejected a write.

    Only raised by streaming sinks; the underlying exception is chained.
    """

    pass
