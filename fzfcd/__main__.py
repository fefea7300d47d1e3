"""Module entrypoint for ``python -m fzfcd``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and widget setup happen in ``fzfcd.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
