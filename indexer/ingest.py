"""
Ingestion helpers for building the inverted index.

Documents are read from a page directory one at a time, starting at id 1
and stopping at the first missing id. Ids are assumed dense.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from .pagedir import Document, load_document
from .tokenize import MIN_WORD_LENGTH, tokenize

DocumentLoader = Callable[[Union[str, Path], int], Optional[Document]]


@dataclass
class DocumentRecord:
    """Words captured for each ingested document."""

    doc_id: int
    url: str
    words: List[str]

    @property
    def length(self) -> int:
        return len(self.words)


def iter_documents(
    page_dir: Union[str, Path],
    *,
    loader: DocumentLoader = load_document,
    limit: Optional[int] = None,
) -> Iterator[Document]:
    """Yield documents 1, 2, 3, ... until one is missing."""
    doc_id = 1
    while limit is None or doc_id <= limit:
        document = loader(page_dir, doc_id)
        if document is None:
            return
        yield document
        doc_id += 1


def iter_document_records(
    page_dir: Union[str, Path],
    *,
    min_length: int = MIN_WORD_LENGTH,
    loader: DocumentLoader = load_document,
    limit: Optional[int] = None,
) -> Iterator[DocumentRecord]:
    """Yield DocumentRecord objects one-by-one (streaming)."""
    for document in iter_documents(page_dir, loader=loader, limit=limit):
        yield DocumentRecord(
            doc_id=document.doc_id,
            url=document.url,
            words=tokenize(document.content, min_length),
        )
