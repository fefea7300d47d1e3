"""Command-line front door for fzfcd.

Reads the current ``READLINE_LINE``, runs the completion widget and prints
shell assignments for the calling binding to ``eval``. A typical binding::

    fzf-cd-widget() { eval "$(fzfcd --line="$READLINE_LINE")"; }
    bind -x '"\\eOP": fzf-cd-widget'
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .buffer import ReadlineBuffer
from .config import load_widget_config
from .debug_log import configure_logging
from .matching import available_locales
from .parser import decode
from .selector import FzfSelector, WidgetSession
from .widget import CdCompletionWidget


def _write_stdout(text: str) -> None:
    """Write ``text`` preserving surrogate-escaped bytes from file names."""
    data = os.fsencode(text)
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(os.fsdecode(data))
        sys.stdout.flush()
        return
    sys.stdout.flush()
    buffer.write(data)
    buffer.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fzfcd",
        description="Complete the directory argument of a cd command line with fzf.",
    )
    parser.add_argument(
        "--line",
        default=None,
        help="Command line to complete (default: $READLINE_LINE).",
    )
    parser.add_argument(
        "--locale",
        default=None,
        help=f"Case-folding rules ({', '.join(available_locales())}); default: detect from LANG/LC_ALL.",
    )
    parser.add_argument("--config", metavar="PATH", default=None, help="Path to a JSON config file.")
    parser.add_argument(
        "--decode",
        metavar="TOKEN",
        default=None,
        help="Print the literal path a quoted TOKEN denotes and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one widget invocation and print shell statements.

    The hidden-visibility export is always printed so a toggle made before
    cancelling still sticks for the rest of the shell session.
    """
    args = build_parser().parse_args(argv)

    if args.decode is not None:
        _write_stdout(decode(args.decode) + "\n")
        return 0

    configure_logging()
    config = load_widget_config(
        path=Path(args.config).expanduser() if args.config else None,
        locale_override=args.locale,
    )
    session = WidgetSession.from_environ()
    line = args.line if args.line is not None else os.environ.get("READLINE_LINE", "")
    buffer = ReadlineBuffer(line)

    widget = CdCompletionWidget(config, session, FzfSelector(config))
    widget.run(buffer)

    statements = [*buffer.render_assignments(), session.export_assignment()]
    _write_stdout("\n".join(statements) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
