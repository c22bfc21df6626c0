"""
Page directory: the crawler's on-disk document store.

A page directory holds one file per document, named by its integer id
(``1``, ``2``, ...), plus a ``.crawler`` marker file proving the crawler
produced it. Each document file holds the URL on the first line, the crawl
depth on the second, and the page content verbatim after that.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger("indexer.pagedir")

MARKER_FILE = ".crawler"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Document:
    doc_id: int
    url: str
    depth: int
    content: str


def document_path(directory: PathLike, doc_id: int) -> Path:
    return Path(directory) / str(doc_id)


def init_directory(directory: PathLike) -> bool:
    """Create the marker file; returns False when it cannot be written."""
    marker = Path(directory) / MARKER_FILE
    try:
        marker.write_text("", encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot initialise page directory %s: %s", str(directory), exc)
        return False
    return True


def validate_directory(directory: PathLike) -> bool:
    path = Path(directory)
    return path.is_dir() and (path / MARKER_FILE).is_file()


def save_document(directory: PathLike, doc_id: int, document: Document) -> Path:
    if doc_id < 1:
        raise ValueError(f"Document id must be positive, got {doc_id}")
    path = document_path(directory, doc_id)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(f"{document.url}\n")
        fh.write(f"{document.depth}\n")
        fh.write(document.content)
    return path


def load_document(directory: PathLike, doc_id: int) -> Optional[Document]:
    """Return the document stored under ``doc_id`` or None when absent."""
    if doc_id < 1:
        return None
    path = document_path(directory, doc_id)
    try:
        with path.open("r", encoding="utf-8", errors="replace", newline="") as fh:
            url_line = fh.readline()
            depth_line = fh.readline()
            content = fh.read()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Cannot read document %s: %s", str(path), exc)
        return None

    if not url_line or not depth_line:
        logger.warning("Document %s is missing its URL or depth line", str(path))
        return None
    try:
        depth = int(depth_line.strip())
    except ValueError:
        logger.warning("Document %s has a non-integer depth %r", str(path), depth_line.strip())
        return None

    return Document(
        doc_id=doc_id,
        url=url_line.rstrip("\r\n"),
        depth=depth,
        content=content,
    )
