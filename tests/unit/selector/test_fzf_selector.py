"""Tests for the ``fzf`` adapter.

Verifies the argument vector, the input stream and output parsing. The
subprocess runner and terminal are mocked so no real ``fzf`` is needed.
"""

from __future__ import annotations

import io
import subprocess
import unittest
from unittest import mock

from fzfcd.candidates import CandidateEntry, DirectoryListing
from fzfcd.config import WidgetConfig
from fzfcd.selector.fzf import (
    EXIT_INTERRUPTED,
    EXIT_NOT_FOUND,
    FzfSelector,
    build_fzf_command,
    encode_stream,
    parse_fzf_output,
)


def _listing(*forms: str) -> DirectoryListing:
    return DirectoryListing(entries=tuple(CandidateEntry(form, form) for form in forms))


class FzfCommandTests(unittest.TestCase):
    def test_command_carries_query_header_and_bindings(self) -> None:
        config = WidgetConfig(fzf_options=("--height", "40%"))
        command = build_fzf_command(config, "Pro", "[Hidden: OFF]")

        self.assertEqual(command[:3], ["fzf", "--height", "40%"])
        self.assertIn("--query=Pro", command)
        self.assertIn("--print-query", command)
        self.assertIn("--expect=ctrl-t", command)
        self.assertIn("--header=[Hidden: OFF]", command)
        self.assertIn("--prompt=cd> ", command)
        self.assertIn("--no-select-1", command)
        bindings = [command[idx + 1] for idx, arg in enumerate(command) if arg == "--bind"]
        self.assertEqual(bindings, ["f1:accept", "ctrl-z:abort"])

    def test_custom_executable_and_keys(self) -> None:
        config = WidgetConfig(fzf_executable="/opt/fzf", accept_key="ctrl-space", toggle_key="alt-h")
        command = build_fzf_command(config, "", "")
        self.assertEqual(command[0], "/opt/fzf")
        self.assertIn("--expect=alt-h", command)
        self.assertIn("ctrl-space:accept", command)


class FzfStreamTests(unittest.TestCase):
    def test_empty_listing_sends_no_lines(self) -> None:
        self.assertEqual(encode_stream(DirectoryListing()), b"")

    def test_one_transport_form_per_line(self) -> None:
        listing = _listing("alpha", "two\\nlines", "café")
        self.assertEqual(encode_stream(listing), b"alpha\ntwo\\nlines\ncaf\xc3\xa9\n")


class FzfOutputTests(unittest.TestCase):
    def test_accepted_selection(self) -> None:
        outcome = parse_fzf_output(b"pro\n\nProjects\n", 0)
        self.assertEqual((outcome.query, outcome.key, outcome.selection), ("pro", "", "Projects"))
        self.assertFalse(outcome.cancelled)

    def test_toggle_key_is_reported(self) -> None:
        outcome = parse_fzf_output(b"pr\nctrl-t\nProjects\n", 0)
        self.assertEqual(outcome.key, "ctrl-t")
        self.assertEqual(outcome.query, "pr")

    def test_cancel_with_query_only(self) -> None:
        outcome = parse_fzf_output(b"abc\n", 130)
        self.assertEqual((outcome.query, outcome.key, outcome.selection), ("abc", "", ""))
        self.assertTrue(outcome.cancelled)

    def test_empty_output(self) -> None:
        outcome = parse_fzf_output(b"", 1)
        self.assertEqual(outcome.query, "")
        self.assertTrue(outcome.cancelled)


class FzfSelectorTests(unittest.TestCase):
    def test_select_runs_fzf_inside_alternate_screen(self) -> None:
        terminal = mock.MagicMock()
        runner = mock.Mock(
            return_value=subprocess.CompletedProcess(args=["fzf"], returncode=0, stdout=b"b\n\nbravo\n"),
        )
        selector = FzfSelector(WidgetConfig(), terminal=terminal, runner=runner)

        outcome = selector.select(_listing("beta", "bravo"), "b", "header")

        self.assertEqual(outcome.selection, "bravo")
        terminal.alternate_screen.assert_called_once_with()
        terminal.alternate_screen.return_value.__enter__.assert_called_once()
        terminal.alternate_screen.return_value.__exit__.assert_called_once()
        args, kwargs = runner.call_args
        self.assertEqual(args[0][0], "fzf")
        self.assertEqual(kwargs["input"], b"beta\nbravo\n")
        self.assertEqual(kwargs["stdout"], subprocess.PIPE)
        self.assertFalse(kwargs["check"])

    def test_missing_executable_is_a_cancellation_with_a_note(self) -> None:
        stderr = io.StringIO()
        selector = FzfSelector(
            WidgetConfig(fzf_executable="no-such-fzf"),
            terminal=mock.MagicMock(),
            runner=mock.Mock(side_effect=FileNotFoundError("no-such-fzf")),
            stderr=stderr,
        )

        outcome = selector.select(_listing("a", "b"), "q", "header")

        self.assertTrue(outcome.cancelled)
        self.assertEqual(outcome.exit_code, EXIT_NOT_FOUND)
        self.assertEqual(outcome.query, "q")
        self.assertIn("no-such-fzf not found in PATH", stderr.getvalue())

    def test_interrupt_is_a_cancellation(self) -> None:
        selector = FzfSelector(
            WidgetConfig(),
            terminal=mock.MagicMock(),
            runner=mock.Mock(side_effect=KeyboardInterrupt),
            stderr=io.StringIO(),
        )
        outcome = selector.select(_listing("a", "b"), "", "header")
        self.assertEqual(outcome.exit_code, EXIT_INTERRUPTED)
        self.assertEqual(outcome.selection, "")

    def test_other_start_failures_are_reported(self) -> None:
        stderr = io.StringIO()
        selector = FzfSelector(
            WidgetConfig(),
            terminal=mock.MagicMock(),
            runner=mock.Mock(side_effect=PermissionError("denied")),
            stderr=stderr,
        )
        outcome = selector.select(_listing("a", "b"), "", "header")
        self.assertTrue(outcome.cancelled)
        self.assertIn("cannot run fzf", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
