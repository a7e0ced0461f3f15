"""File sources: where the engine's files come from.

A source discovers its files up front (so the run knows ``total_files``)
and then yields ``SourceDocument`` values one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """One file's repository-relative POSIX path and decoded text."""

    relative_path: str
    content: str


class FileSource(Protocol):
    """What the runner needs from a source."""

    @property
    def label(self) -> str: ...

    def total_files(self) -> int: ...

    def iter_documents(self) -> Iterator[SourceDocument]: ...


__all__ = ["FileSource", "SourceDocument"]
