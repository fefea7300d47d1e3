"""Turn a decoded literal path into a search context.

Handles tilde substitution, the ``$`` literal-versus-variable ambiguity, the
``..`` shortcut, splitting into target directory plus search prefix, and
logical normalization of the target without physical traversal.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from .parser import decode

logger = logging.getLogger(__name__)

# Never expanded: command substitution, backticks, arithmetic, indirection.
UNSAFE_SUBSTITUTIONS = ("$(", "`", "$[", "${!")
_VARIABLE_RE = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")
_PARENT_SHORTCUT_RE = re.compile(r"(?:^|/)\.\.$")


@dataclass(frozen=True)
class LiteralPath:
    """Decoded argument with home substituted for a leading ``~``."""

    text: str
    is_tilde_relative: bool = False


@dataclass(frozen=True)
class TargetContext:
    """Directory to enumerate plus the name prefix typed so far."""

    directory: str
    search_prefix: str


@dataclass(frozen=True)
class ResolvedPath:
    """Outcome of resolving one argument.

    ``shortcut_result`` is set when no enumeration is needed (the ``..``
    shortcut); otherwise ``context`` and ``enumeration_dir`` describe where to
    look for candidates.
    """

    raw_argument: str
    literal: LiteralPath
    context: TargetContext
    enumeration_dir: str
    shortcut_result: str | None = None


def trim_argument(raw: str) -> str:
    return raw.strip()


def decode_argument(raw: str) -> str:
    """Decode a trimmed raw argument, dropping an incomplete trailing escape."""
    literal = decode(raw)
    if raw.endswith("\\"):
        literal = literal.removesuffix("\\")
        literal = literal.removesuffix(" ")
    return literal


def expand_tilde(literal: str, home: str) -> LiteralPath:
    """Substitute ``home`` for a leading ``~`` or ``~/`` and remember it."""
    if literal == "~" or literal.startswith("~/"):
        return LiteralPath(text=home + literal[1:], is_tilde_relative=True)
    return LiteralPath(text=literal)


def has_unsafe_substitution(text: str) -> bool:
    return any(marker in text for marker in UNSAFE_SUBSTITUTIONS)


def _exists_or_link(path: str) -> bool:
    return os.path.exists(path) or os.path.islink(path)


def looks_like_literal_path(text: str) -> bool:
    """Existence probe deciding whether ``$`` is part of a real name.

    True when the path itself exists, or when its parent does (the user is
    still typing a name inside an existing tree).
    """
    if _exists_or_link(text):
        return True
    parent = text.rsplit("/", 1)[0] if "/" in text else "."
    return _exists_or_link(parent)


def expand_variables(text: str, environ: Mapping[str, str]) -> str:
    """String-only expansion of ``$NAME`` and ``${NAME}``; unset names become empty."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        return environ.get(name, "")

    return _VARIABLE_RE.sub(_replace, text)


def resolve_variables(literal: LiteralPath, environ: Mapping[str, str]) -> LiteralPath:
    """Expand variable references unless ``$`` appears to be part of a real name."""
    text = literal.text
    if "$" not in text or has_unsafe_substitution(text):
        return literal
    if looks_like_literal_path(text):
        return literal
    expanded = expand_variables(text, environ)
    if not expanded:
        return literal
    logger.debug("expanded %r to %r", text, expanded)
    return LiteralPath(text=expanded, is_tilde_relative=literal.is_tilde_relative)


def is_parent_shortcut(text: str) -> bool:
    return _PARENT_SHORTCUT_RE.search(text) is not None


def split_target(text: str) -> TargetContext:
    """Split a literal path at its last ``/`` into directory and prefix."""
    if not text:
        return TargetContext(directory=".", search_prefix="")
    if text.endswith("/") and text != "/":
        return TargetContext(directory=text[:-1], search_prefix="")
    if "/" in text:
        directory, prefix = text.rsplit("/", 1)
        return TargetContext(directory=directory or "/", search_prefix=prefix)
    return TargetContext(directory=".", search_prefix=text)


def disambiguate_target(directory: str) -> str:
    """Prefix ``./`` to relative targets that could read as options or dotfiles."""
    if directory.startswith("/"):
        return directory
    if not (directory.startswith("-") or directory.startswith(".")):
        return directory
    if directory.startswith("--") or directory in (".", "..") or directory.startswith("../"):
        return directory
    return "./" + directory


def normalize_logical(directory: str) -> str:
    """Resolve ``.``/``..`` and symlinked ancestors without requiring read access.

    Falls back to ``directory`` unchanged when normalization is unavailable.
    """
    try:
        return os.path.realpath(directory)
    except (OSError, ValueError) as exc:
        logger.debug("logical normalization failed for %r: %s", directory, exc)
        return directory


def resolve(
    raw_argument: str,
    home: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResolvedPath:
    """Resolve a raw argument into a :class:`ResolvedPath`."""
    env = os.environ if environ is None else environ
    home_dir = home if home is not None else env.get("HOME", os.path.expanduser("~"))

    raw = trim_argument(raw_argument)
    literal = expand_tilde(decode_argument(raw), home_dir)
    literal = resolve_variables(literal, env)

    if is_parent_shortcut(literal.text):
        context = split_target(literal.text)
        return ResolvedPath(
            raw_argument=raw,
            literal=literal,
            context=context,
            enumeration_dir="",
            shortcut_result=literal.text + "/",
        )

    context = split_target(literal.text)
    if context.directory == ".":
        enumeration_dir = "."
    else:
        enumeration_dir = normalize_logical(disambiguate_target(context.directory))
    return ResolvedPath(
        raw_argument=raw,
        literal=literal,
        context=context,
        enumeration_dir=enumeration_dir,
    )


__all__ = [
    "UNSAFE_SUBSTITUTIONS",
    "LiteralPath",
    "TargetContext",
    "ResolvedPath",
    "trim_argument",
    "decode_argument",
    "expand_tilde",
    "has_unsafe_substitution",
    "looks_like_literal_path",
    "expand_variables",
    "resolve_variables",
    "is_parent_shortcut",
    "split_target",
    "disambiguate_target",
    "normalize_logical",
    "resolve",
]
