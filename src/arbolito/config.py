"""ContextVar-based render configuration for arbolito.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Renderers read the active config once per render() call unless an explicit
config is passed.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Module-level helper
    from arbolito import unparse
    source = unparse(tree)  # Uses the active (default) config

    # Scoped override
    from arbolito.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(quote='"', indent_width=2)):
        source = unparse(tree)

"""

import codecs
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

_QUOTES = ("'", '"')


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        indent_width: Spaces per indentation level
        quote: Preferred quote character for string and bytes literals
        raw_strings: Emit r'...' literals when that avoids escaping backslashes
        encoding: Encoding the output must be representable in
        trailing_newline: End non-empty output with a newline

    """

    indent_width: int = 4
    quote: str = "'"
    raw_strings: bool = True
    encoding: str = "utf-8"
    trailing_newline: bool = True

    def __post_init__(self) -> None:
        if self.indent_width < 1:
            raise ValueError(f"indent_width must be positive, got {self.indent_width}")
        if self.quote not in _QUOTES:
            raise ValueError(f"quote must be one of {_QUOTES!r}, got {self.quote!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"unknown encoding {self.encoding!r}") from None

    @property
    def indent(self) -> str:
        """One level of indentation."""
        return " " * self.indent_width

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                RenderConfig attribute names.

        Returns:
            New RenderConfig instance with values from dict.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "indent_width": 2,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.indent_width
            2

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local).

    Returns:
        The active RenderConfig for this thread/context.

    """
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Args:
        config: RenderConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: RenderConfig to use within the context.

    Yields:
        None

    Example:
        >>> with render_config_context(RenderConfig(indent_width=2)):
        ...     source = unparse(tree)
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
