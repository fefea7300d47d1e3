"""Editing-buffer collaborator for bash ``bind -x`` widgets.

bash hands the widget ``READLINE_LINE`` and expects the updated line back.
Since the widget runs as a child process, updates are rendered as shell
assignments on stdout for the binding to ``eval``.
"""

from __future__ import annotations

from .encoder import shell_quote


class ReadlineBuffer:
    """Current input line plus at most one pending replacement."""

    def __init__(self, line: str) -> None:
        self._line = line
        self._pending: tuple[str, int | None] | None = None

    def get_line(self) -> str:
        return self._line

    def set_line(self, line: str, cursor: int | None = None) -> None:
        """Replace the line; ``cursor=None`` places the cursor at the end."""
        if self._pending is not None:
            raise RuntimeError("buffer already updated in this invocation")
        self._pending = (line, cursor)

    @property
    def changed(self) -> bool:
        return self._pending is not None

    def render_assignments(self) -> list[str]:
        """Shell statements applying the pending update (empty when unchanged)."""
        if self._pending is None:
            return []
        line, cursor = self._pending
        point = "${#READLINE_LINE}" if cursor is None else str(max(0, cursor))
        return [
            f"READLINE_LINE={shell_quote(line)}",
            f"READLINE_POINT={point}",
        ]
