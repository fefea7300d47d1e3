"""Locale-aware case folding and prefix matching for candidate names.

Normalizers are plain ``str -> str`` callables registered per locale tag.
Adding a language means registering one more function; the matcher and the
widget only ever look rules up through :func:`normalizer_for`.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping

DEFAULT_LOCALE = "default"

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)

# Applied before generic lowering; I/İ are not a 1:1 pair under ASCII rules.
TURKISH_REMAP = (
    ("İ", "i"),
    ("I", "ı"),
    ("Ş", "ş"),
    ("Ğ", "ğ"),
    ("Ü", "ü"),
    ("Ö", "ö"),
    ("Ç", "ç"),
)


def normalize_default(text: str) -> str:
    """Fold ASCII letters only."""
    return text.translate(_ASCII_LOWER)


def normalize_turkish(text: str) -> str:
    for upper, lower in TURKISH_REMAP:
        text = text.replace(upper, lower)
    return text.lower()


_NORMALIZERS: dict[str, Callable[[str], str]] = {
    DEFAULT_LOCALE: normalize_default,
    "tr": normalize_turkish,
}


def register_locale(tag: str, normalize: Callable[[str], str]) -> None:
    """Register (or replace) the normalizer used for ``tag``."""
    _NORMALIZERS[tag.strip().lower()] = normalize


def available_locales() -> list[str]:
    return sorted(_NORMALIZERS)


def normalizer_for(tag: str | None) -> Callable[[str], str]:
    """Return the normalizer for ``tag``, falling back to the default rule."""
    if not tag:
        return _NORMALIZERS[DEFAULT_LOCALE]
    return _NORMALIZERS.get(tag.strip().lower(), _NORMALIZERS[DEFAULT_LOCALE])


def normalize(text: str, tag: str | None = None) -> str:
    return normalizer_for(tag)(text)


def matches(candidate: str, search_prefix: str, tag: str | None = None) -> bool:
    """Return whether normalized ``candidate`` starts with normalized ``search_prefix``."""
    fold = normalizer_for(tag)
    return fold(candidate).startswith(fold(search_prefix))


def filter_starts_with(candidates: Iterable[str], search_prefix: str, tag: str | None = None) -> list[str]:
    """Keep candidates whose normalized form starts with the normalized prefix.

    An empty prefix keeps every candidate.
    """
    items = list(candidates)
    if not search_prefix:
        return items
    fold = normalizer_for(tag)
    folded_prefix = fold(search_prefix)
    return [item for item in items if fold(item).startswith(folded_prefix)]


def detect_locale(environ: Mapping[str, str] | None = None) -> str:
    """Pick a locale tag from ``LC_ALL``/``LANG``; Turkish locales map to ``tr``."""
    env = os.environ if environ is None else environ
    for key in ("LC_ALL", "LANG"):
        if "tr_" in env.get(key, ""):
            return "tr"
    return DEFAULT_LOCALE


__all__ = [
    "DEFAULT_LOCALE",
    "TURKISH_REMAP",
    "normalize_default",
    "normalize_turkish",
    "register_locale",
    "available_locales",
    "normalizer_for",
    "normalize",
    "matches",
    "filter_starts_with",
    "detect_locale",
]
