"""``fzf`` adapter for the selector port."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from ..candidates import DirectoryListing
from ..config import WidgetConfig
from ..terminal import TerminalController
from .protocol import SelectionOutcome

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127
EXIT_INTERRUPTED = 130


def build_fzf_command(config: WidgetConfig, query: str, header: str) -> list[str]:
    """Build the ``fzf`` argument vector for one round trip."""
    return [
        config.fzf_executable,
        *config.fzf_options,
        "--border",
        "--no-select-1",
        f"--query={query}",
        "--print-query",
        f"--expect={config.toggle_key}",
        f"--header={header}",
        "--bind",
        f"{config.accept_key}:accept",
        "--bind",
        f"{config.abort_key}:abort",
        f"--prompt={config.prompt}",
    ]


def encode_stream(candidates: DirectoryListing) -> bytes:
    if not candidates.entries:
        return b""
    return os.fsencode(candidates.stream()) + b"\n"


def parse_fzf_output(stdout: bytes, exit_code: int) -> SelectionOutcome:
    """Split ``--print-query --expect`` output into query, key and selection."""
    text = os.fsdecode(stdout)
    lines = text.split("\n", 2)
    while len(lines) < 3:
        lines.append("")
    query, key, selection = lines
    return SelectionOutcome(
        query=query,
        key=key.strip(),
        selection=selection.rstrip("\n"),
        exit_code=exit_code,
    )


class FzfSelector:
    """Run ``fzf`` on the alternate screen and report what the user did."""

    def __init__(
        self,
        config: WidgetConfig,
        terminal: TerminalController | None = None,
        runner: Callable[..., subprocess.CompletedProcess[bytes]] = subprocess.run,
        stderr: TextIO | None = None,
    ) -> None:
        self.config = config
        self.terminal = terminal if terminal is not None else TerminalController()
        self._runner = runner
        self._stderr = stderr

    def _report(self, message: str) -> None:
        stream = self._stderr if self._stderr is not None else sys.stderr
        stream.write(f"fzfcd: {message}\n")
        stream.flush()

    def _run(self, command: Sequence[str], payload: bytes) -> subprocess.CompletedProcess[bytes]:
        return self._runner(
            list(command),
            input=payload,
            stdout=subprocess.PIPE,
            check=False,
        )

    def select(self, candidates: DirectoryListing, query: str, header: str) -> SelectionOutcome:
        command = build_fzf_command(self.config, query, header)
        logger.debug("running %s with %d candidates", command[0], len(candidates))
        try:
            with self.terminal.alternate_screen():
                proc = self._run(command, encode_stream(candidates))
        except FileNotFoundError:
            logger.warning("selector executable not found: %s", self.config.fzf_executable)
            self._report(f"{self.config.fzf_executable} not found in PATH")
            return SelectionOutcome(query=query, exit_code=EXIT_NOT_FOUND)
        except KeyboardInterrupt:
            logger.debug("selector interrupted")
            return SelectionOutcome(query=query, exit_code=EXIT_INTERRUPTED)
        except OSError as exc:
            logger.warning("selector failed to start: %s", exc)
            self._report(f"cannot run {self.config.fzf_executable}: {exc}")
            return SelectionOutcome(query=query, exit_code=EXIT_NOT_FOUND)

        outcome = parse_fzf_output(proc.stdout or b"", proc.returncode)
        logger.debug("selector exit=%d key=%r", outcome.exit_code, outcome.key)
        return outcome


__all__ = [
    "EXIT_NOT_FOUND",
    "EXIT_INTERRUPTED",
    "build_fzf_command",
    "encode_stream",
    "parse_fzf_output",
    "FzfSelector",
]
