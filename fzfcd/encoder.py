"""Rebuild the completed path and quote it for the editing buffer."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .candidates.transport import decode_transport

# Same set bash's ``printf %q`` leaves unescaped.
_SAFE_CHAR_RE = re.compile(r"[A-Za-z0-9_./,:@%+=-]")
_ANSI_C_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


@dataclass(frozen=True)
class BufferUpdate:
    """Command prefix and quoted path to write back into the buffer."""

    line_prefix: str
    quoted_path: str

    @property
    def line(self) -> str:
        return self.line_prefix + self.quoted_path


def _is_control(char: str) -> bool:
    code = ord(char)
    return code < 0x20 or code == 0x7F


def _is_safe(char: str) -> bool:
    if _SAFE_CHAR_RE.fullmatch(char):
        return True
    # Printable non-ASCII text (and surrogate-escaped bytes) passes through.
    return ord(char) > 0x7F


def shell_quote(text: str) -> str:
    """Quote ``text`` in ``printf %q`` style.

    Plain strings get backslash escapes; strings containing control
    characters use ANSI-C ``$'...'`` quoting. The result decodes back to
    ``text`` both through bash and through :func:`fzfcd.parser.decode`.
    """
    if not text:
        return "''"
    if any(_is_control(char) for char in text):
        body = "".join(_ANSI_C_ESCAPES.get(char, char) for char in text)
        return f"$'{body}'"
    out: list[str] = []
    for index, char in enumerate(text):
        if _is_safe(char) or (index > 0 and char in "~#"):
            out.append(char)
        else:
            out.append("\\" + char)
    return "".join(out)


def path_prefix_of(literal: str) -> str:
    """Directory part of the literal as typed, ``.`` when there is none."""
    if "/" in literal:
        return literal.rsplit("/", 1)[0]
    return "."


def combine(literal: str, selected_name: str, raw_argument: str) -> str:
    """Join the typed directory part with the selected name.

    ``raw_argument`` is consulted so an absolute argument such as ``/u``
    completes to ``/usr/`` rather than a relative name.
    """
    prefix = path_prefix_of(literal)
    trimmed = prefix.rstrip("/")
    is_absolute = raw_argument.startswith("/") or literal.startswith("/")

    if prefix in ("", ".") and not (prefix == "" and is_absolute):
        return selected_name
    if not trimmed and is_absolute:
        return "/" + selected_name
    if not selected_name:
        return trimmed
    return f"{trimmed}/{selected_name}"


def ensure_trailing_separator(path: str) -> str:
    if path.endswith("/"):
        return path
    return path + "/"


def build_result_path(literal: str, selected_transport_form: str, raw_argument: str) -> str:
    """Decode the selected candidate and build the final literal path."""
    selected_name = decode_transport(selected_transport_form).removesuffix("/")
    return ensure_trailing_separator(combine(literal, selected_name, raw_argument))


def quote_result_path(result_path: str, is_tilde_relative: bool, home: str) -> str:
    """Quote ``result_path``, restoring a ``~/`` prefix for home-relative input."""
    if not is_tilde_relative:
        return shell_quote(result_path)
    home = home.rstrip("/") or "/"
    if result_path in (home, home + "/"):
        return "~/"
    relative = result_path.removeprefix(home.rstrip("/") + "/")
    if relative == result_path:
        return shell_quote(result_path)
    return "~/" + shell_quote(relative)


def flag_safe_prefix(line_prefix: str, result_path: str, command: str) -> str:
    """Insert ``--`` after ``command`` when the path would read as an option."""
    if not result_path.startswith("-"):
        return line_prefix
    if line_prefix.startswith(command + " ") and not line_prefix.startswith(command + " -- "):
        return f"{command} -- "
    return line_prefix


def encode_for_buffer(
    result_path: str,
    line_prefix: str,
    command: str,
    is_tilde_relative: bool,
    home: str,
) -> BufferUpdate:
    return BufferUpdate(
        line_prefix=flag_safe_prefix(line_prefix, result_path, command),
        quoted_path=quote_result_path(result_path, is_tilde_relative, home),
    )


__all__ = [
    "BufferUpdate",
    "shell_quote",
    "path_prefix_of",
    "combine",
    "ensure_trailing_separator",
    "build_result_path",
    "quote_result_path",
    "flag_safe_prefix",
    "encode_for_buffer",
]
