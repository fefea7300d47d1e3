"""Completion widget: wires the pipeline stages to the editing buffer.

decode -> resolve -> enumerate -> filter/select -> re-encode. Every failure
mode degrades to leaving the buffer exactly as the user typed it.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from .buffer import ReadlineBuffer
from .candidates import DirectoryListing, encode_transport, list_subdirectories
from .config import WidgetConfig
from .encoder import BufferUpdate, build_result_path, encode_for_buffer
from .resolver import ResolvedPath, resolve
from .selector import Selector, WidgetSession, run_selector_loop

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TriggerMatch:
    """Split of a buffer line into command prefix and raw path argument."""

    line_prefix: str
    command: str
    argument: str


def trigger_pattern(command_names: Sequence[str]) -> re.Pattern[str]:
    names = "|".join(re.escape(name) for name in command_names)
    return re.compile(rf"^(?P<prefix>(?P<command>{names})\s+(?:--\s+)?)(?P<argument>.*)$", re.DOTALL)


def match_trigger(line: str, command_names: Sequence[str]) -> TriggerMatch | None:
    """Match ``<command> [--] <path>``; anything else is not ours to complete."""
    match = trigger_pattern(command_names).match(line)
    if match is None:
        return None
    return TriggerMatch(
        line_prefix=match.group("prefix"),
        command=match.group("command"),
        argument=match.group("argument"),
    )


class CdCompletionWidget:
    """One completion engine bound to config, session state and a selector."""

    def __init__(
        self,
        config: WidgetConfig,
        session: WidgetSession,
        selector: Selector,
        home: str | None = None,
        environ: Mapping[str, str] | None = None,
        lister: Callable[[str, bool], DirectoryListing] = list_subdirectories,
    ) -> None:
        self.config = config
        self.session = session
        self.selector = selector
        self.environ = os.environ if environ is None else environ
        self.home = home if home is not None else self.environ.get("HOME", os.path.expanduser("~"))
        self._lister = lister

    def _encode(self, trigger: TriggerMatch, resolved: ResolvedPath, result_path: str) -> BufferUpdate:
        return encode_for_buffer(
            result_path,
            line_prefix=trigger.line_prefix,
            command=trigger.command,
            is_tilde_relative=resolved.literal.is_tilde_relative,
            home=self.home,
        )

    def complete(self, line: str) -> BufferUpdate | None:
        """Return the buffer update for ``line``, or ``None`` to leave it untouched."""
        trigger = match_trigger(line, self.config.command_names)
        if trigger is None:
            logger.debug("line does not match trigger: %r", line)
            return None

        resolved = resolve(trigger.argument, home=self.home, environ=self.environ)
        logger.debug(
            "resolved %r -> target=%r prefix=%r",
            trigger.argument,
            resolved.enumeration_dir,
            resolved.context.search_prefix,
        )
        if resolved.shortcut_result is not None:
            return self._encode(trigger, resolved, resolved.shortcut_result)

        result = run_selector_loop(
            lambda include_hidden: self._lister(resolved.enumeration_dir, include_hidden),
            encode_transport(resolved.context.search_prefix),
            self.selector,
            self.session,
            self.config,
        )
        if not result.accepted:
            return None

        result_path = build_result_path(resolved.literal.text, result.selection, resolved.raw_argument)
        return self._encode(trigger, resolved, result_path)

    def run(self, buffer: ReadlineBuffer) -> BufferUpdate | None:
        """Complete the buffer's line and write the result back at most once."""
        update = self.complete(buffer.get_line())
        if update is None or not update.quoted_path:
            return None
        buffer.set_line(update.line)
        return update


__all__ = [
    "TriggerMatch",
    "trigger_pattern",
    "match_trigger",
    "CdCompletionWidget",
]
