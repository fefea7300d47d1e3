"""Candidate subdirectory model.

This package contains the non-UI enumeration primitives:
- candidate entry and listing datatypes
- the line-safe transport encoding used with the selector
- filesystem scanning with access checks and hidden-entry ordering
"""

from __future__ import annotations

from .fs import check_access, list_subdirectories, scan_subdirectories
from .transport import decode_transport, encode_transport
from .types import CandidateEntry, DirectoryListing

__all__ = [
    "CandidateEntry",
    "DirectoryListing",
    "check_access",
    "scan_subdirectories",
    "list_subdirectories",
    "encode_transport",
    "decode_transport",
]
