"""
Persistence helpers for the inverted index.

File format, one line per term::

    term docID1 count1 docID2 count2 ...

Tokens are separated by single spaces and every line ends with a newline.
Neither terms nor pairs are ordered. The file is written to a temporary path
and renamed into place so a reader never sees a partially written index.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .index import Index
from .postings import PostingSet

logger = logging.getLogger("indexer.store")

PathLike = Union[str, Path]


class IndexFormatError(ValueError):
    """Raised by strict loads when an index line is malformed."""


def format_line(term: str, postings: PostingSet) -> str:
    parts = [term]
    for doc_id, count in postings.items():
        parts.append(str(doc_id))
        parts.append(str(count))
    return " ".join(parts) + "\n"


def save_index(index: Index, path: PathLike) -> bool:
    """Write ``index`` to ``path``.

    Returns False (and logs) when the file cannot be written; never raises
    for I/O failures.
    """
    target = Path(path)
    tmp_path = target.with_name(target.name + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as fh:
            for term, postings in index.items():
                fh.write(format_line(term, postings))
        os.replace(tmp_path, target)
    except OSError as exc:
        logger.error("Cannot write index file %s: %s", str(target), exc)
        try:
            tmp_path.unlink()
        except OSError:
            pass
        return False
    logger.debug("Wrote %d terms to %s", len(index), str(target))
    return True


def parse_line(line: str, *, strict: bool = False, lineno: int = 0) -> Optional[Tuple[str, List[Tuple[int, int]]]]:
    """Split one index line into its term and (docID, count) pairs.

    Lenient parsing drops a dangling token, non-integer pairs and pairs
    with non-positive values; strict parsing raises ``IndexFormatError``.
    Blank lines yield None.
    """
    tokens = line.split()
    if not tokens:
        return None
    term, numbers = tokens[0], tokens[1:]

    if strict and not (term.isascii() and term.isalpha()):
        raise IndexFormatError(f"line {lineno}: invalid term {term!r}")
    if len(numbers) % 2:
        if strict:
            raise IndexFormatError(f"line {lineno}: odd number of integers after {term!r}")
        logger.warning("Line %d: dropping dangling token %r for term %r", lineno, numbers[-1], term)
        numbers = numbers[:-1]

    pairs: List[Tuple[int, int]] = []
    for raw_id, raw_count in zip(numbers[0::2], numbers[1::2]):
        try:
            doc_id, count = int(raw_id), int(raw_count)
        except ValueError:
            if strict:
                raise IndexFormatError(
                    f"line {lineno}: non-integer pair ({raw_id!r}, {raw_count!r}) for {term!r}"
                ) from None
            logger.warning("Line %d: skipping non-integer pair (%r, %r) for %r", lineno, raw_id, raw_count, term)
            continue
        if doc_id < 1 or count < 1:
            if strict:
                raise IndexFormatError(f"line {lineno}: non-positive pair ({doc_id}, {count}) for {term!r}")
            logger.warning("Line %d: skipping non-positive pair (%d, %d) for %r", lineno, doc_id, count, term)
            continue
        pairs.append((doc_id, count))
    return term, pairs


def read_lines(lines: Iterable[str], index: Optional[Index] = None, *, strict: bool = False) -> Index:
    """Fold index-format lines into ``index`` (a new one when omitted).

    Values read overwrite counts already present, so loading into a
    populated index merges with "read values win" semantics.
    """
    target = index if index is not None else Index()
    for lineno, line in enumerate(lines, start=1):
        parsed = parse_line(line, strict=strict, lineno=lineno)
        if parsed is None:
            continue
        term, pairs = parsed
        for doc_id, count in pairs:
            target.set_count(term, doc_id, count)
    return target


def load_index(path: PathLike, index: Optional[Index] = None, *, strict: bool = False) -> Index:
    """Read an index file. Raises ``OSError`` when the file cannot be read."""
    source = Path(path)
    with source.open("r", encoding="utf-8") as fh:
        loaded = read_lines(fh, index, strict=strict)
    logger.debug("Loaded %d terms from %s", len(loaded), str(source))
    return loaded


def canonical_lines(index: Index) -> List[str]:
    """Render ``index`` with terms sorted and pairs sorted by docID."""
    lines = []
    for term in sorted(index.terms()):
        postings = index.find(term)
        parts = [term]
        for doc_id, count in sorted(postings.items()):
            parts.extend((str(doc_id), str(count)))
        lines.append(" ".join(parts))
    return lines
