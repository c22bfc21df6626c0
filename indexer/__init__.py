"""
Inverted index and boolean query engine for crawled page directories.

This package provides:
- PostingSet / Index: term -> {doc_id: count} structures
- IndexBuilder: fold a crawler page directory into an Index
- save_index / load_index: the line-oriented index file format
- QueryEngine: AND/OR query parsing and scoring
- rank: order a score set by descending score
"""

from .build import BuildSummary, IndexBuilder, build_index
from .index import Index
from .postings import PostingSet
from .rank import RankedResult, rank
from .search import InvalidQueryError, QueryEngine, intersect, parse_query, score, union
from .store import IndexFormatError, load_index, save_index

__all__ = [
    'BuildSummary',
    'Index',
    'IndexBuilder',
    'IndexFormatError',
    'InvalidQueryError',
    'PostingSet',
    'QueryEngine',
    'RankedResult',
    'build_index',
    'intersect',
    'load_index',
    'parse_query',
    'rank',
    'save_index',
    'score',
    'union',
]
