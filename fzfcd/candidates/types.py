"""Datatypes produced by directory enumeration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateEntry:
    """One subdirectory offered for completion.

    ``transport_form`` is the escaped single-line spelling exchanged with the
    selector; ``decoded_name`` is the real name on disk.
    """

    transport_form: str
    decoded_name: str
    is_hidden: bool = False


@dataclass(frozen=True)
class DirectoryListing:
    """Enumeration result; ``inaccessible`` marks a target that could not be read."""

    entries: tuple[CandidateEntry, ...] = ()
    inaccessible: bool = False

    def __len__(self) -> int:
        return len(self.entries)

    def transport_forms(self) -> list[str]:
        return [entry.transport_form for entry in self.entries]

    def stream(self) -> str:
        """Newline-delimited candidate stream fed to the selector."""
        return "\n".join(self.transport_forms())


__all__ = [
    "CandidateEntry",
    "DirectoryListing",
]
