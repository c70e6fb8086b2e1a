"""Output sinks for rendered source.

StringBuilder appends to a list and joins once at the end: O(n) total vs
O(n²) for repeated string concatenation. StreamSink forwards every write
to a text stream for the streaming render variant.

Thread Safety:
Sinks are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from typing import Protocol, TextIO

from arbolito.errors import SinkError
from arbolito.utils.logger import get_logger

logger = get_logger(__name__)


class TextSink(Protocol):
    """Anything rendered source can be written to."""

    def write(self, s: str) -> object:
        """Append ``s`` to the destination."""
        ...


class StringBuilder:
    """Efficient string accumulator.

    Appends to a list, joins once at the end.
    O(n) total vs O(n²) for repeated string concatenation.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.write("def f")
            >>> sb.write("():")
            >>> sb.build()
            'def f():'

    Thread Safety:
        Instance is local to each render() call.
        No shared mutable state.

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def write(self, s: str) -> None:
        """Append a string to the builder (empty strings are skipped)."""
        if s:
            self._parts.append(s)

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts.

        Returns:
            self for method chaining
        """
        self._parts.clear()
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been written."""
        return bool(self._parts)


class StreamSink:
    """Forward writes to a text stream.

    Failures reported by the stream surface as SinkError with the original
    exception chained. Nothing is buffered, so a failed render leaves the
    partial output already written in the stream.
    """

    __slots__ = ("_stream", "_written")

    def __init__(self, stream: TextIO | TextSink) -> None:
        self._stream = stream
        self._written = 0

    def write(self, s: str) -> None:
        if not s:
            return
        try:
            self._stream.write(s)
        except (OSError, ValueError) as e:
            logger.debug("Stream write failed after %d characters: %s", self._written, e)
            raise SinkError(f"output stream rejected write: {e}") from e
        self._written += len(s)

    @property
    def written(self) -> int:
        """Number of characters successfully written."""
        return self._written
