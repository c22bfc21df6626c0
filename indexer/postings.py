"""
Posting sets: per-term mapping from document id to occurrence count.

Every stored count is positive. Writing a count of zero through
``discard`` (or the ranker's logical removal) deletes the key, so ``get``
returning 0 always means "absent".
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple


class PostingSet:
    """Mutable mapping ``doc_id -> count`` with positive counts only."""

    __slots__ = ("_counts",)

    def __init__(self, counts: Optional[Mapping[int, int]] = None) -> None:
        self._counts: Dict[int, int] = {}
        if counts:
            for doc_id, count in counts.items():
                self.set(doc_id, count)

    # ------------------------------------------------------------------ #
    # Mutation

    def increment(self, doc_id: int) -> int:
        """Add one occurrence for ``doc_id`` and return the new count.

        Returns 0 ("not applied") for a negative document id.
        """
        if doc_id < 0:
            return 0
        count = self._counts.get(doc_id, 0) + 1
        self._counts[doc_id] = count
        return count

    def set(self, doc_id: int, count: int) -> bool:
        """Overwrite (or create) the count for ``doc_id``.

        Both values must be positive; anything else is rejected and leaves
        the set untouched.
        """
        if doc_id < 1 or count < 1:
            return False
        self._counts[doc_id] = count
        return True

    def discard(self, doc_id: int) -> None:
        """Logically set the count of ``doc_id`` to zero."""
        self._counts.pop(doc_id, None)

    # ------------------------------------------------------------------ #
    # Lookup / traversal

    def get(self, doc_id: int) -> int:
        return self._counts.get(doc_id, 0)

    def for_each(self, visit: Callable[[int, int], None]) -> None:
        for doc_id, count in list(self._counts.items()):
            visit(doc_id, count)

    def items(self) -> Iterator[Tuple[int, int]]:
        return iter(list(self._counts.items()))

    def doc_ids(self) -> Iterator[int]:
        return iter(list(self._counts))

    def total(self) -> int:
        return sum(self._counts.values())

    def is_empty(self) -> bool:
        return self.total() == 0

    def copy(self) -> "PostingSet":
        clone = PostingSet()
        clone._counts = dict(self._counts)
        return clone

    def as_dict(self) -> Dict[int, int]:
        return dict(self._counts)

    # ------------------------------------------------------------------ #
    # Dunder helpers

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._counts

    def __iter__(self) -> Iterator[int]:
        return self.doc_ids()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PostingSet):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        pairs = ", ".join(f"{doc_id}: {count}" for doc_id, count in sorted(self._counts.items()))
        return f"PostingSet({{{pairs}}})"
