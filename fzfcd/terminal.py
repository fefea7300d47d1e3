"""Terminal control helpers for the selector round trip.

Switches the controlling terminal to the alternate screen while the selector
runs and restores the main screen afterwards. Sequences go to ``/dev/tty``
because stdout carries the shell assignments back to bash.
"""

from __future__ import annotations

import contextlib
import logging
import os

logger = logging.getLogger(__name__)

ENTER_ALTERNATE_SCREEN = b"\x1b[?1049h"
LEAVE_ALTERNATE_SCREEN = b"\x1b[?1049l"


class TerminalController:
    """Write screen-buffer control sequences to the controlling terminal."""

    def __init__(self, tty_path: str = "/dev/tty") -> None:
        self.tty_path = tty_path

    def _write(self, payload: bytes) -> bool:
        """Write ``payload`` to the terminal; a missing tty is not an error."""
        try:
            fd = os.open(self.tty_path, os.O_WRONLY | getattr(os, "O_NOCTTY", 0))
        except OSError as exc:
            logger.debug("cannot open %s: %s", self.tty_path, exc)
            return False
        try:
            os.write(fd, payload)
        except OSError as exc:
            logger.debug("cannot write to %s: %s", self.tty_path, exc)
            return False
        finally:
            os.close(fd)
        return True

    def enter_alternate_screen(self) -> bool:
        return self._write(ENTER_ALTERNATE_SCREEN)

    def leave_alternate_screen(self) -> bool:
        return self._write(LEAVE_ALTERNATE_SCREEN)

    @contextlib.contextmanager
    def alternate_screen(self):
        """Context manager that brackets code with enter/leave calls."""
        try:
            self.enter_alternate_screen()
            yield
        finally:
            self.leave_alternate_screen()
