"""Literal spelling for constants.

Strings and bytes get real quoting: the quote character is chosen to avoid
escapes, control and non-printable characters are escaped, and text that is
mostly backslashes renders as a raw literal. Numbers use their shortest
round-tripping repr, with infinities spelled as an overflowing decimal.

All functions are pure; the caller supplies quote preference and encoding.
"""

from __future__ import annotations

import sys
from functools import lru_cache

# Large float and imaginary literals get turned into infinities in the AST.
# We unparse those infinities to INFSTR.
INFSTR = "1e" + repr(sys.float_info.max_10_exp + 1)
NANSTR = f"({INFSTR}-{INFSTR})"

_NAMED_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_NAMED_BYTE_ESCAPES = {
    0x5C: "\\\\",
    0x0A: "\\n",
    0x0D: "\\r",
    0x09: "\\t",
}


def format_number(value: int | float | complex) -> str:
    """Spell an int, float or complex value as a literal."""
    text = repr(value)
    if isinstance(value, int):
        return text
    return text.replace("inf", INFSTR).replace("nan", NANSTR)


@lru_cache(maxsize=1024)
def _encodable(ch: str, encoding: str) -> bool:
    try:
        ch.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _choose_quote(has_single: bool, has_double: bool, preferred: str) -> str:
    other = '"' if preferred == "'" else "'"
    has_preferred = has_single if preferred == "'" else has_double
    has_other = has_double if preferred == "'" else has_single
    if has_preferred and not has_other:
        return other
    return preferred


def _passes_through(ch: str, encoding: str) -> bool:
    """True when ``ch`` may appear in a literal unescaped."""
    if ch in _NAMED_ESCAPES:
        return False
    if ch.isascii():
        return ch.isprintable()
    return ch.isprintable() and _encodable(ch, encoding)


def _even_trailing_backslashes(text: str) -> bool:
    return (len(text) - len(text.rstrip("\\"))) % 2 == 0


def _escape_char(ch: str) -> str:
    code = ord(ch)
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def quote_str(
    value: str,
    *,
    quote: str = "'",
    raw: bool = True,
    encoding: str = "utf-8",
    prefix: str = "",
) -> str:
    """Spell a str value as a quoted literal.

    Args:
        value: The string to spell
        quote: Preferred quote character
        raw: Allow a raw literal when it avoids escaping backslashes
        encoding: Characters this encoding rejects are escaped
        prefix: Literal prefix to keep (``"u"`` disables raw literals)

    Returns:
        Literal text that evaluates to ``value``
    """
    q = _choose_quote("'" in value, '"' in value, quote)

    if raw and not prefix and "\\" in value and q not in value:
        if _even_trailing_backslashes(value) and all(
            ch == "\\" or _passes_through(ch, encoding) for ch in value
        ):
            return f"r{q}{value}{q}"

    parts: list[str] = []
    for ch in value:
        if ch == q:
            parts.append("\\" + ch)
        elif ch in _NAMED_ESCAPES:
            parts.append(_NAMED_ESCAPES[ch])
        elif _passes_through(ch, encoding):
            parts.append(ch)
        else:
            parts.append(_escape_char(ch))
    return f"{prefix}{q}{''.join(parts)}{q}"


def quote_bytes(value: bytes, *, quote: str = "'", raw: bool = True) -> str:
    """Spell a bytes value as a quoted literal.

    Only printable ASCII passes through; everything else is escaped, so the
    result is always pure ASCII.
    """
    q = _choose_quote(b"'" in value, b'"' in value, quote)
    q_code = ord(q)

    if raw and b"\\" in value and q_code not in value:
        if all(0x20 <= b < 0x7F for b in value):
            text = value.decode("ascii")
            if _even_trailing_backslashes(text):
                return f"rb{q}{text}{q}"

    parts: list[str] = []
    for b in value:
        if b == q_code:
            parts.append("\\" + q)
        elif b in _NAMED_BYTE_ESCAPES:
            parts.append(_NAMED_BYTE_ESCAPES[b])
        elif 0x20 <= b < 0x7F:
            parts.append(chr(b))
        else:
            parts.append(f"\\x{b:02x}")
    return f"b{q}{''.join(parts)}{q}"


__all__ = ["INFSTR", "format_number", "quote_bytes", "quote_str"]
