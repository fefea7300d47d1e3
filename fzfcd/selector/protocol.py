"""Port between the selector loop and an external selection process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..candidates import DirectoryListing


@dataclass(frozen=True)
class SelectionOutcome:
    """Result of one round trip with the selector.

    ``query`` is the echoed query text, ``key`` the intercepted key name (empty
    when none) and ``selection`` the chosen line. ``exit_code`` 0 means a
    selection was made; anything else is a cancellation.
    """

    query: str = ""
    key: str = ""
    selection: str = ""
    exit_code: int = 0

    @property
    def cancelled(self) -> bool:
        return self.exit_code != 0


class Selector(Protocol):
    def select(self, candidates: DirectoryListing, query: str, header: str) -> SelectionOutcome:
        """Present ``candidates`` once and block until the user is done."""
        ...


__all__ = [
    "SelectionOutcome",
    "Selector",
]
