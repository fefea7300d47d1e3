"""Session state shared by the selector loop and the enumerator."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

SHOW_HIDDEN_ENV = "_FZF_CD_SHOW_HIDDEN"


@dataclass
class WidgetSession:
    """State that outlives one widget invocation within a shell session.

    The calling shell keeps ``hidden_visible`` in ``_FZF_CD_SHOW_HIDDEN``;
    the widget reads it on start and exports it back on exit.
    """

    hidden_visible: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> WidgetSession:
        env = os.environ if environ is None else environ
        return cls(hidden_visible=env.get(SHOW_HIDDEN_ENV, "0").strip() == "1")

    def toggle_hidden(self) -> bool:
        self.hidden_visible = not self.hidden_visible
        return self.hidden_visible

    def export_assignment(self) -> str:
        return f"export {SHOW_HIDDEN_ENV}={1 if self.hidden_visible else 0}"


@dataclass
class SelectorSession:
    """Per-invocation interaction state of the selector loop."""

    query_text: str
    widget: WidgetSession
    cancelled: bool = False
    accepted: bool = False
    selection: str = ""

    @property
    def hidden_visible(self) -> bool:
        return self.widget.hidden_visible


__all__ = [
    "SHOW_HIDDEN_ENV",
    "WidgetSession",
    "SelectorSession",
]
