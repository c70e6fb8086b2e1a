"""Per-render mutable state.

A RenderContext owns the sink, the active configuration and the current
indentation depth for exactly one render() call. Nothing else about a render
is mutable: precedence and the try/try* flag travel as arguments.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TypeVar

from arbolito.config import RenderConfig
from arbolito.errors import EncodingError
from arbolito.stringbuilder import TextSink

T = TypeVar("T")


@dataclass(slots=True)
class RenderContext:
    """Output sink plus indentation depth.

    Thread Safety:
        Each render() call creates its own RenderContext instance.
        No shared mutable state between concurrent renders.
    """

    sink: TextSink
    config: RenderConfig
    depth: int = 0
    started: bool = False

    def write(self, text: str) -> None:
        """Write raw text on the current line."""
        self.sink.write(text)

    def fill(self, text: str = "") -> None:
        """Start a new line at the current indentation, then write ``text``."""
        if self.started:
            self.sink.write("\n")
        self.started = True
        self.sink.write(self.config.indent * self.depth + text)

    @contextmanager
    def block(self) -> Iterator[None]:
        """Write the block marker and indent everything rendered inside."""
        self.write(":")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def delimit(self, start: str, end: str, condition: bool = True) -> Iterator[None]:
        """Surround whatever is written inside with ``start``/``end`` when ``condition``."""
        if condition:
            self.write(start)
        yield
        if condition:
            self.write(end)

    def interleave(
        self,
        render: Callable[[T], None],
        items: Iterable[T],
        separator: str = ", ",
    ) -> None:
        """Call ``render`` on each item, writing ``separator`` in between."""
        first = True
        for item in items:
            if not first:
                self.write(separator)
            first = False
            render(item)

    def identifier(self, name: str, node: object | None = None) -> str:
        """Return ``name`` after checking the output encoding can hold it.

        Raises:
            EncodingError: identifiers cannot be escaped, so any character
                the encoding rejects is fatal.
        """
        if not name.isascii():
            try:
                name.encode(self.config.encoding)
            except UnicodeEncodeError:
                raise EncodingError(name, self.config.encoding, node) from None
        return name
