"""Filesystem enumeration of candidate subdirectories."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .transport import encode_transport
from .types import CandidateEntry, DirectoryListing

logger = logging.getLogger(__name__)


def check_access(directory: str | Path) -> bool:
    """Return whether ``directory`` exists, is traversable and readable."""
    path = os.fspath(directory)
    try:
        return os.path.isdir(path) and os.access(path, os.X_OK) and os.access(path, os.R_OK)
    except (OSError, ValueError):
        return False


def _sort_key(entry: CandidateEntry) -> tuple[str, str]:
    return entry.transport_form.casefold(), entry.transport_form


def scan_subdirectories(directory: str | Path) -> tuple[list[CandidateEntry], Exception | None]:
    """Scan immediate children that are directories or symlinks to directories.

    Returns ``(entries, scan_error)``; ``scan_error`` is set when the
    directory cannot be scanned. Entries are unsorted.
    """
    entries: list[CandidateEntry] = []
    try:
        with os.scandir(os.fspath(directory)) as children:
            for child in children:
                try:
                    is_dir = child.is_dir(follow_symlinks=True)
                except OSError:
                    is_dir = False
                if not is_dir:
                    continue
                name = os.fsdecode(child.name)
                entries.append(
                    CandidateEntry(
                        transport_form=encode_transport(name),
                        decoded_name=name,
                        is_hidden=name.startswith("."),
                    )
                )
    except (PermissionError, OSError) as exc:
        return [], exc
    return entries, None


def list_subdirectories(directory: str | Path, include_hidden: bool) -> DirectoryListing:
    """List candidate subdirectories of ``directory`` in display order.

    Visible entries are sorted case-insensitively. With ``include_hidden`` the
    hidden entries come first as their own independently sorted block.
    """
    if not check_access(directory):
        logger.debug("directory not accessible: %r", os.fspath(directory))
        return DirectoryListing(inaccessible=True)

    entries, scan_error = scan_subdirectories(directory)
    if scan_error is not None:
        logger.debug("scan failed for %r: %s", os.fspath(directory), scan_error)
        return DirectoryListing(inaccessible=True)

    visible = sorted((entry for entry in entries if not entry.is_hidden), key=_sort_key)
    if not include_hidden:
        return DirectoryListing(entries=tuple(visible))
    hidden = sorted((entry for entry in entries if entry.is_hidden), key=_sort_key)
    return DirectoryListing(entries=tuple(hidden + visible))


__all__ = [
    "check_access",
    "scan_subdirectories",
    "list_subdirectories",
]
