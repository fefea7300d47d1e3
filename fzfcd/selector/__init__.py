"""Interactive selection: session state, selector port, fzf adapter and loop."""

from __future__ import annotations

from .fzf import FzfSelector
from .loop import LoopResult, LoopState, build_header, fast_path_selection, run_selector_loop
from .protocol import SelectionOutcome, Selector
from .session import SHOW_HIDDEN_ENV, SelectorSession, WidgetSession

__all__ = [
    "SHOW_HIDDEN_ENV",
    "WidgetSession",
    "SelectorSession",
    "SelectionOutcome",
    "Selector",
    "LoopState",
    "LoopResult",
    "build_header",
    "fast_path_selection",
    "run_selector_loop",
    "FzfSelector",
]
