"""Persistent JSON config helpers.

Stores selector key bindings, prompt, locale override, recognized command
names and extra ``fzf`` layout options. All access is defensive: malformed or
missing config falls back to defaults.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .matching import detect_locale

APP_NAME = "fzfcd"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
CONFIG_PATH_ENV = "FZFCD_CONFIG"
ACCEPT_KEY_ENV = "FZF_ACCEPT_KEY_NAME"

DEFAULT_ACCEPT_KEY = "f1"
DEFAULT_TOGGLE_KEY = "ctrl-t"
DEFAULT_ABORT_KEY = "ctrl-z"
DEFAULT_PROMPT = "cd> "
DEFAULT_COMMAND_NAMES = ("cd",)
DEFAULT_FZF_OPTIONS = ("--height", "40%", "--layout=reverse")


@dataclass(frozen=True)
class WidgetConfig:
    """Read-only inputs injected into the widget at invocation time."""

    accept_key: str = DEFAULT_ACCEPT_KEY
    toggle_key: str = DEFAULT_TOGGLE_KEY
    abort_key: str = DEFAULT_ABORT_KEY
    prompt: str = DEFAULT_PROMPT
    locale: str = "default"
    command_names: tuple[str, ...] = DEFAULT_COMMAND_NAMES
    fzf_options: tuple[str, ...] = DEFAULT_FZF_OPTIONS
    fzf_executable: str = "fzf"


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the config path, honoring the ``FZFCD_CONFIG`` override."""
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    target = path if path is not None else config_path()
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _string_value(data: Mapping[str, object], key: str, default: str) -> str:
    """Return a non-blank string value, keeping ``default`` otherwise."""
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return default
    return value


def _string_tuple(data: Mapping[str, object], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Return a list-of-strings value as a tuple; any non-string item invalidates it."""
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return default
    return tuple(value)


def widget_config_from(
    data: Mapping[str, object],
    environ: Mapping[str, str] | None = None,
    locale_override: str | None = None,
) -> WidgetConfig:
    """Build a :class:`WidgetConfig` from raw config data and the environment.

    Precedence for the accept key: ``FZF_ACCEPT_KEY_NAME``, then config, then
    the default. Locale: explicit override, then config, then detection from
    ``LC_ALL``/``LANG``.
    """
    env = os.environ if environ is None else environ

    accept_key = env.get(ACCEPT_KEY_ENV, "").strip() or _string_value(data, "accept_key", DEFAULT_ACCEPT_KEY)
    locale = (locale_override or "").strip() or _string_value(data, "locale", "") or detect_locale(env)
    command_names = tuple(name.strip() for name in _string_tuple(data, "command_names", DEFAULT_COMMAND_NAMES))
    command_names = tuple(name for name in command_names if name) or DEFAULT_COMMAND_NAMES

    return WidgetConfig(
        accept_key=accept_key,
        toggle_key=_string_value(data, "toggle_key", DEFAULT_TOGGLE_KEY),
        abort_key=_string_value(data, "abort_key", DEFAULT_ABORT_KEY),
        prompt=_string_value(data, "prompt", DEFAULT_PROMPT),
        locale=locale,
        command_names=command_names,
        fzf_options=_string_tuple(data, "fzf_options", DEFAULT_FZF_OPTIONS),
        fzf_executable=_string_value(data, "fzf_executable", "fzf"),
    )


def load_widget_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    locale_override: str | None = None,
) -> WidgetConfig:
    env = os.environ if environ is None else environ
    target = path if path is not None else config_path(env)
    return widget_config_from(load_config(target), environ=env, locale_override=locale_override)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "WidgetConfig",
    "config_path",
    "load_config",
    "widget_config_from",
    "load_widget_config",
]
