"""Text helpers: JSX text whitespace normalization and JS string quoting."""

from __future__ import annotations

import re

_LEADING_BREAK = re.compile(r"\A\s*\n\s*")
_TRAILING_BREAK = re.compile(r"\s*\n\s*\Z")
_INNER_BREAK = re.compile(r"\s*\n\s*")


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace introduced by line feeds in JSX text.

    Rules, applied in order:
    1. A whitespace run containing a line feed at the start is removed.
    2. A whitespace run containing a line feed at the end is removed.
    3. Every other whitespace run containing a line feed becomes one space.

    Whitespace without a line feed is left alone, so ``"Hello   World"``
    survives as written.
    """
    value = _LEADING_BREAK.sub("", value, count=1)
    value = _TRAILING_BREAK.sub("", value, count=1)
    return _INNER_BREAK.sub(" ", value)


_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def quote_string(value: str) -> str:
    """Return value as a double-quoted JavaScript string literal."""
    result: list[str] = ['"']
    for ch in value:
        if ch in _ESCAPES:
            result.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            result.append(f"\\u{ord(ch):04x}")
        else:
            result.append(ch)
    result.append('"')
    return "".join(result)
