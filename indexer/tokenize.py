"""
Word extraction helpers for the indexing subsystem.

Words are maximal runs of ASCII letters. Markup between ``<`` and ``>`` is
skipped so tag names and attribute values never become words. Everything
else (whitespace, digits, punctuation) separates words. Words are folded to
lowercase and words shorter than ``MIN_WORD_LENGTH`` are discarded.

Example:
>>> list(iter_words("<p>The cat sat on a MAT.</p>"))
['the', 'cat', 'sat', 'mat']
"""

from __future__ import annotations

import re
from typing import Iterator, List

MIN_WORD_LENGTH = 3

TAG_RE = re.compile(r"<[^>]*>?")
WORD_RE = re.compile(r"[A-Za-z]+")


def normalize_word(word: str) -> str:
    return word.lower()


def strip_markup(content: str) -> str:
    """Replace every tag with a space so adjacent text does not merge."""
    return TAG_RE.sub(" ", content or "")


def iter_raw_words(content: str) -> Iterator[str]:
    """Yield words as they appear in ``content`` (no folding, no length filter)."""
    for match in WORD_RE.finditer(strip_markup(content)):
        yield match.group(0)


def iter_words(content: str, min_length: int = MIN_WORD_LENGTH) -> Iterator[str]:
    for word in iter_raw_words(content):
        if len(word) < min_length:
            continue
        yield normalize_word(word)


def tokenize(content: str, min_length: int = MIN_WORD_LENGTH) -> List[str]:
    """Return the indexable words of ``content`` in document order."""
    return list(iter_words(content, min_length))
