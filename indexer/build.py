from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from config_loader import ConfigError, load_yaml_config

from .config import IndexerConfig
from .index import Index
from .ingest import DocumentLoader, DocumentRecord, iter_document_records
from .logs import configure_logging
from .pagedir import load_document, validate_directory
from .store import save_index
from .tokenize import MIN_WORD_LENGTH

logger = logging.getLogger("indexer.build")


@dataclass(frozen=True)
class BuildSummary:
    index: Index
    documents: int = 0
    terms: int = 0
    failed_words: int = 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "documents": self.documents,
            "terms": self.terms,
            "failed_words": self.failed_words,
        }


@dataclass
class BuildOptions:
    page_dir: Path
    min_length: int = MIN_WORD_LENGTH
    limit: Optional[int] = None


class IndexBuilder:
    """Fold the documents of a page directory into an Index."""

    def __init__(self, options: BuildOptions, *, loader: DocumentLoader = load_document) -> None:
        self.options = options
        self.loader = loader

    def build(self, index: Optional[Index] = None) -> BuildSummary:
        index = index if index is not None else Index()
        documents = 0
        failed = 0

        logger.info(
            "Starting build: page_dir=%s min_length=%d",
            str(self.options.page_dir),
            self.options.min_length,
        )
        for record in iter_document_records(
            self.options.page_dir,
            min_length=self.options.min_length,
            loader=self.loader,
            limit=self.options.limit,
        ):
            failed += self._index_record(index, record)
            documents += 1
            logger.debug("Indexed doc %d (%s): %d words", record.doc_id, record.url, record.length)

        logger.info("Build finished: documents=%d, terms=%d", documents, len(index))
        return BuildSummary(index=index, documents=documents, terms=len(index), failed_words=failed)

    @staticmethod
    def _index_record(index: Index, record: DocumentRecord) -> int:
        failed = 0
        for word in record.words:
            if not index.add_occurrence(word, record.doc_id):
                logger.warning("Failed to add word to index: %s (doc %d)", word, record.doc_id)
                failed += 1
        return failed


def build_index(
    page_dir: Union[str, Path],
    *,
    min_length: int = MIN_WORD_LENGTH,
    limit: Optional[int] = None,
) -> BuildSummary:
    page_dir = Path(page_dir)
    if not page_dir.exists():
        raise FileNotFoundError(f"Page directory does not exist: {page_dir}")
    builder = IndexBuilder(BuildOptions(page_dir=page_dir, min_length=min_length, limit=limit))
    return builder.build()


def _check_writable(path: Path) -> None:
    """Raise OSError unless ``path`` can be created or overwritten."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8"):
        pass


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build an inverted index from a crawler page directory."
    )
    parser.add_argument(
        "page_dir",
        nargs="?",
        default=None,
        help="Directory produced by the crawler (defaults to indexer.build.page_dir).",
    )
    parser.add_argument(
        "index_file",
        nargs="?",
        default=None,
        help="Path of the index file to write (defaults to indexer.build.index_file).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (default: config.yml when present).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Optional upper bound on number of documents to index (for testing).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        app_config = load_yaml_config(args.config)
        indexer_config = IndexerConfig.from_app_config(app_config)
    except ConfigError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    configure_logging(indexer_config.logs.log_level, indexer_config.logs.log_file)
    build_cfg = indexer_config.build

    page_dir = Path(args.page_dir or build_cfg.page_dir)
    index_file = Path(args.index_file or build_cfg.index_file)

    if args.limit is not None and args.limit < 1:
        print("[error] --limit must be >= 1", file=sys.stderr)
        return 1
    if not validate_directory(page_dir):
        print(f"[error] {page_dir} is not a directory produced by the crawler", file=sys.stderr)
        return 1
    try:
        _check_writable(index_file)
    except OSError as exc:
        print(f"[error] {index_file} is not a valid file path for writing: {exc}", file=sys.stderr)
        return 1

    summary = build_index(page_dir, min_length=build_cfg.min_word_length, limit=args.limit)
    if not save_index(summary.index, index_file):
        print(f"[error] failed to write index to {index_file}", file=sys.stderr)
        return 1

    print(
        f"Index written to {index_file} "
        f"(documents={summary.documents}, terms={summary.terms})"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
