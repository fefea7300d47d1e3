"""Selector loop: fast paths, interactive round trips and the hidden toggle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..candidates import DirectoryListing
from ..config import WidgetConfig
from ..matching import filter_starts_with
from .protocol import Selector
from .session import SelectorSession, WidgetSession

logger = logging.getLogger(__name__)


class LoopState(Enum):
    INIT = "init"
    LISTING = "listing"
    PRESENT = "present"
    TOGGLE_HIDDEN = "toggle_hidden"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class LoopResult:
    """Terminal state of the loop plus the accepted transport form (if any)."""

    state: LoopState
    selection: str = ""
    interactive_rounds: int = 0

    @property
    def accepted(self) -> bool:
        return self.state is LoopState.ACCEPTED and bool(self.selection)


def key_label(key: str) -> str:
    """Render an fzf key name for the header (``ctrl-t`` -> ``Ctrl+T``)."""
    parts = key.split("-")
    if len(parts) > 1 and parts[0] in ("ctrl", "alt", "shift"):
        return "+".join(part.capitalize() if idx == 0 else part.upper() for idx, part in enumerate(parts))
    return key.upper()


def build_header(hidden_visible: bool, inaccessible: bool, config: WidgetConfig) -> str:
    hidden_status = "ON " if hidden_visible else "OFF"
    suffix = "[Inaccessible] " if inaccessible else ""
    return (
        f"[Hidden: {hidden_status}] {suffix}"
        f"[{key_label(config.toggle_key)}: Show/Hide Hidden | {key_label(config.accept_key)}: Accept]"
    )


def fast_path_selection(listing: DirectoryListing, search_term: str, locale: str) -> str | None:
    """Return a candidate accepted without UI, or ``None`` when the user must choose.

    A lone candidate wins when nothing was typed; otherwise a prefix that
    narrows the listing to exactly one candidate wins.
    """
    forms = listing.transport_forms()
    if len(forms) == 1 and not search_term:
        return forms[0]
    if search_term:
        starts_with = filter_starts_with(forms, search_term, locale)
        if len(starts_with) == 1:
            return starts_with[0]
    return None


def run_selector_loop(
    list_candidates: Callable[[bool], DirectoryListing],
    search_term: str,
    selector: Selector,
    session: WidgetSession,
    config: WidgetConfig,
) -> LoopResult:
    """Drive one completion from listing to an accepted or cancelled state.

    ``list_candidates(include_hidden)`` enumerates the target directory; it is
    called once up front and again after every hidden toggle so a toggled
    view is never served from a stale listing. ``search_term`` is the
    transport-encoded prefix typed by the user.
    """
    listing = list_candidates(session.hidden_visible)

    selection = fast_path_selection(listing, search_term, config.locale)
    if selection is not None:
        logger.debug("fast path accepted %r", selection)
        return LoopResult(state=LoopState.ACCEPTED, selection=selection)

    interaction = SelectorSession(query_text=search_term, widget=session)
    rounds = 0
    state = LoopState.PRESENT
    while state is LoopState.PRESENT:
        header = build_header(interaction.hidden_visible, listing.inaccessible, config)
        outcome = selector.select(listing, interaction.query_text, header)
        rounds += 1
        interaction.query_text = outcome.query

        if outcome.key == config.toggle_key:
            session.toggle_hidden()
            logger.debug("%s: hidden entries now %s", LoopState.TOGGLE_HIDDEN.value, session.hidden_visible)
            listing = list_candidates(session.hidden_visible)
            continue

        if outcome.cancelled or not outcome.selection:
            interaction.cancelled = True
            state = LoopState.CANCELLED
        else:
            interaction.accepted = True
            interaction.selection = outcome.selection
            state = LoopState.ACCEPTED

    logger.debug("selector loop finished in %s after %d rounds", state.value, rounds)
    return LoopResult(state=state, selection=interaction.selection, interactive_rounds=rounds)


__all__ = [
    "LoopState",
    "LoopResult",
    "key_label",
    "build_header",
    "fast_path_selection",
    "run_selector_loop",
]
