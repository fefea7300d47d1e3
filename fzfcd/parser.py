"""Quote-state parser for raw ``cd`` arguments.

Turns a token exactly as typed on the command line into the literal path it
denotes. Handles backslash escapes, single quotes, double quotes and ANSI-C
``$'...'`` quoting without ever evaluating the text through a shell.
The token is usually incomplete, so unterminated quotes and dangling escapes
degrade to "consume the rest literally" instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class ParseState(Enum):
    NORMAL = "normal"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    ANSI_QUOTE = "ansi_quote"


ANSI_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
}


@dataclass
class _Cursor:
    """Mutable scan position shared by the per-state transition functions."""

    text: str
    index: int = 0
    out: list[str] = field(default_factory=list)

    def peek(self, offset: int = 0) -> str:
        pos = self.index + offset
        return self.text[pos] if pos < len(self.text) else ""


def _step_normal(cursor: _Cursor) -> ParseState:
    char = cursor.peek()
    if char == "\\":
        # A trailing lone backslash emits nothing.
        cursor.index += 1
        if cursor.index < len(cursor.text):
            cursor.out.append(cursor.peek())
        return ParseState.NORMAL
    if char == "$" and cursor.peek(1) == "'":
        cursor.index += 1
        return ParseState.ANSI_QUOTE
    if char == "'":
        return ParseState.SINGLE_QUOTE
    if char == '"':
        return ParseState.DOUBLE_QUOTE
    cursor.out.append(char)
    return ParseState.NORMAL


def _step_ansi_quote(cursor: _Cursor) -> ParseState:
    char = cursor.peek()
    if char == "'":
        return ParseState.NORMAL
    if char == "\\":
        cursor.index += 1
        following = cursor.peek()
        cursor.out.append(ANSI_ESCAPES.get(following, following))
        return ParseState.ANSI_QUOTE
    cursor.out.append(char)
    return ParseState.ANSI_QUOTE


def _step_single_quote(cursor: _Cursor) -> ParseState:
    char = cursor.peek()
    if char == "'":
        return ParseState.NORMAL
    cursor.out.append(char)
    return ParseState.SINGLE_QUOTE


def _step_double_quote(cursor: _Cursor) -> ParseState:
    char = cursor.peek()
    if char == '"':
        return ParseState.NORMAL
    if char == "\\":
        following = cursor.peek(1)
        if following in ('"', "\\"):
            cursor.out.append(following)
            cursor.index += 1
        else:
            cursor.out.append(char)
        return ParseState.DOUBLE_QUOTE
    cursor.out.append(char)
    return ParseState.DOUBLE_QUOTE


TRANSITIONS: dict[ParseState, Callable[[_Cursor], ParseState]] = {
    ParseState.NORMAL: _step_normal,
    ParseState.ANSI_QUOTE: _step_ansi_quote,
    ParseState.SINGLE_QUOTE: _step_single_quote,
    ParseState.DOUBLE_QUOTE: _step_double_quote,
}


def decode_with_state(raw: str) -> tuple[str, ParseState]:
    """Decode ``raw`` and also return the state the scan finished in.

    A final state other than ``NORMAL`` means the token ended inside an open
    quote; the decoded text is still complete up to that point.
    """
    cursor = _Cursor(raw)
    state = ParseState.NORMAL
    while cursor.index < len(cursor.text):
        state = TRANSITIONS[state](cursor)
        cursor.index += 1
    return "".join(cursor.out), state


def decode(raw: str) -> str:
    """Return the literal path spelled by ``raw``. Never raises."""
    literal, _state = decode_with_state(raw)
    return literal


__all__ = [
    "ANSI_ESCAPES",
    "ParseState",
    "TRANSITIONS",
    "decode",
    "decode_with_state",
]
