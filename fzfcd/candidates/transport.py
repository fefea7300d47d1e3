"""Line-safe transport encoding for candidate names.

Names may contain newlines, carriage returns or tabs. Before they travel
through the newline-delimited selector protocol those characters (and the
backslash itself) are rewritten as C-style escapes; ``decode_transport``
restores the exact original name.
"""

from __future__ import annotations

import re

_ENCODE_TABLE = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_DECODE_TABLE = {escaped: raw for raw, escaped in _ENCODE_TABLE.items()}
_ESCAPE_RE = re.compile(r"\\[\\nrt]")


def encode_transport(name: str) -> str:
    """Escape ``\\``, LF, CR and TAB so ``name`` fits on one line."""
    return "".join(_ENCODE_TABLE.get(char, char) for char in name)


def decode_transport(form: str) -> str:
    """Invert :func:`encode_transport`.

    Only the four escapes it produces are decoded; any other backslash pair is
    left untouched.
    """
    return _ESCAPE_RE.sub(lambda match: _DECODE_TABLE[match.group(0)], form)


__all__ = [
    "encode_transport",
    "decode_transport",
]
