"""In-memory source, for callers that already hold file contents."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Union

from gitaudit.sources import SourceDocument

Documents = Union[Mapping[str, str], Iterable[Union[SourceDocument, tuple[str, str]]]]


class MemorySource:
    """Serve ``(relative_path, content)`` pairs in the order given."""

    def __init__(self, label: str, documents: Documents) -> None:
        self._label = label
        items = documents.items() if isinstance(documents, Mapping) else documents
        self._documents = [
            d if isinstance(d, SourceDocument) else SourceDocument(*d) for d in items
        ]

    @property
    def label(self) -> str:
        return self._label

    def total_files(self) -> int:
        return len(self._documents)

    def iter_documents(self) -> Iterator[SourceDocument]:
        return iter(self._documents)
