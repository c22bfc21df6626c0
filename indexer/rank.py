"""Turn a score set into an ordered result list."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .ingest import DocumentLoader
from .pagedir import document_path, load_document
from .postings import PostingSet


@dataclass(frozen=True)
class RankedResult:
    score: int
    doc_id: int
    url: str

    def format(self) -> str:
        return f"score {self.score} doc {self.doc_id}: {self.url}"


def _find_best(scores: PostingSet) -> Optional[Tuple[int, int]]:
    """Highest positive count; ties go to the lowest document id."""
    best: Optional[Tuple[int, int]] = None
    for doc_id, count in scores.items():
        if count <= 0:
            continue
        if best is None or count > best[1] or (count == best[1] and doc_id < best[0]):
            best = (doc_id, count)
    return best


def rank(
    scores: PostingSet,
    page_dir: Union[str, Path],
    *,
    loader: DocumentLoader = load_document,
) -> List[RankedResult]:
    """Emit documents by descending score, resolving URLs from ``page_dir``.

    Consumes ``scores``: each emitted document is removed from it, so pass
    a copy if the set is needed afterwards. Raises FileNotFoundError when a
    scored document is missing from the page directory.
    """
    results: List[RankedResult] = []
    while True:
        best = _find_best(scores)
        if best is None:
            break
        doc_id, count = best
        document = loader(page_dir, doc_id)
        if document is None:
            raise FileNotFoundError(f"Document {doc_id} not found: {document_path(page_dir, doc_id)}")
        results.append(RankedResult(score=count, doc_id=doc_id, url=document.url))
        scores.discard(doc_id)
    return results
