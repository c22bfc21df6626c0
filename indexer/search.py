"""Boolean query parsing and scoring against the inverted index.

A query is a disjunction of conjunctions: ``AND`` binds tighter than ``OR``
and adjacent terms are implicitly joined by ``AND``::

    cat dog or fish and bird   ==   (cat AND dog) OR (fish AND bird)

Scores combine per-document counts: an AND-clause keeps the minimum count of
its terms, an OR sums the scores of its clauses.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .index import Index
from .postings import PostingSet

logger = logging.getLogger("indexer.search")

AND = "and"
OR = "or"
OPERATORS = frozenset((AND, OR))

_LETTERS = frozenset(string.ascii_letters)


class InvalidQueryError(ValueError):
    """Raised when a query line is lexically or structurally invalid."""


def is_operator(token: str) -> bool:
    return token in OPERATORS


def parse_query(line: str) -> List[str]:
    """Split a raw query line into lowercase terms and operators.

    Raises ``InvalidQueryError`` when the line contains anything other than
    letters and whitespace, is empty, starts or ends with an operator, or has
    two adjacent operators.
    """
    for char in line:
        if char not in _LETTERS and not char.isspace():
            raise InvalidQueryError(f"bad character {char!r} in query")

    tokens = [word.lower() for word in line.split()]
    if not tokens:
        raise InvalidQueryError("empty query")
    if is_operator(tokens[0]):
        raise InvalidQueryError(f"'{tokens[0]}' cannot be first")
    if is_operator(tokens[-1]):
        raise InvalidQueryError(f"'{tokens[-1]}' cannot be last")
    for previous, current in zip(tokens, tokens[1:]):
        if is_operator(previous) and is_operator(current):
            raise InvalidQueryError(f"'{previous}' and '{current}' cannot be adjacent")
    return tokens


# ---------------------------------------------------------------------- #
# Set algebra


def intersect(first: PostingSet, second: PostingSet) -> PostingSet:
    """Documents present in both sets, scored by the smaller count.

    Neither operand is modified.
    """
    if len(second) < len(first):
        first, second = second, first
    result = PostingSet()
    for doc_id, count in first.items():
        other = second.get(doc_id)
        if other > 0:
            result.set(doc_id, min(count, other))
    return result


def union(first: Optional[PostingSet], second: Optional[PostingSet]) -> PostingSet:
    """Documents present in either set, scored by the sum of counts.

    An absent operand contributes nothing. Neither operand is modified.
    """
    result = first.copy() if first is not None else PostingSet()
    if second is not None:
        for doc_id, count in second.items():
            result.set(doc_id, result.get(doc_id) + count)
    return result


# ---------------------------------------------------------------------- #
# Evaluation


def score(index: Index, tokens: Sequence[str]) -> PostingSet:
    """Evaluate a validated token sequence; an empty result means no match."""
    or_scores = PostingSet()
    and_scores: Optional[PostingSet] = None
    short_circuit = False

    for token in tokens:
        if token == OR:
            or_scores = union(or_scores, and_scores)
            and_scores = None
            short_circuit = False
        elif short_circuit or token == AND:
            continue
        else:
            postings = index.find(token)
            if postings is None:
                # a missing term empties the whole AND-clause
                short_circuit = True
                and_scores = None
            elif and_scores is None:
                and_scores = postings.copy()
            else:
                and_scores = intersect(and_scores, postings)

    return union(or_scores, and_scores)


@dataclass
class QueryResult:
    tokens: List[str]
    scores: PostingSet

    @property
    def matched(self) -> bool:
        return not self.scores.is_empty()


class QueryEngine:
    """Answer boolean queries against a loaded, read-only index."""

    def __init__(self, index: Index) -> None:
        self.index = index

    def evaluate(self, line: str) -> QueryResult:
        tokens = parse_query(line)
        scores = score(self.index, tokens)
        logger.debug("Query %r matched %d documents", " ".join(tokens), len(scores))
        return QueryResult(tokens=tokens, scores=scores)
