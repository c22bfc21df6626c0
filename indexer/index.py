"""In-memory inverted index: term -> PostingSet."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional, Tuple

from .postings import PostingSet


class Index:
    """Inverted index owning one PostingSet per term.

    An index is either being built (``add_occurrence`` / ``set_count``) or
    queried (``find``); the two phases are not interleaved.
    """

    def __init__(self) -> None:
        self._terms: Dict[str, PostingSet] = {}

    def add_occurrence(self, term: str, doc_id: int) -> bool:
        """Count one occurrence of ``term`` in ``doc_id``.

        Returns False when the occurrence cannot be recorded; a posting set
        created for a new term is discarded in that case.
        """
        if not term:
            return False
        postings = self._terms.get(term)
        if postings is not None:
            return postings.increment(doc_id) > 0

        postings = PostingSet()
        if postings.increment(doc_id) <= 0:
            return False
        self._terms[term] = postings
        return True

    def set_count(self, term: str, doc_id: int, count: int) -> bool:
        """Absolute-set the count of ``term`` in ``doc_id`` (used by loaders)."""
        if not term:
            return False
        postings = self._terms.get(term)
        if postings is not None:
            return postings.set(doc_id, count)

        postings = PostingSet()
        if not postings.set(doc_id, count):
            return False
        self._terms[term] = postings
        return True

    def find(self, term: str) -> Optional[PostingSet]:
        return self._terms.get(term)

    def for_each(self, visit: Callable[[str, PostingSet], None]) -> None:
        for term, postings in list(self._terms.items()):
            visit(term, postings)

    def items(self) -> Iterator[Tuple[str, PostingSet]]:
        return iter(list(self._terms.items()))

    def terms(self) -> Iterator[str]:
        return iter(list(self._terms))

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, term: object) -> bool:
        return term in self._terms

    def __repr__(self) -> str:
        return f"Index(terms={len(self._terms)})"
