"""Interactive CLI answering boolean queries read from standard input.

Usage:
    python -m indexer.query [--config config.yml] [PAGE_DIR] [INDEX_FILE]

One query per line; results are printed as ``score <s> doc <id>: <url>``
in descending score order.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from config_loader import ConfigError, load_yaml_config

from .config import IndexerConfig
from .index import Index
from .logs import configure_logging
from .pagedir import validate_directory
from .rank import rank
from .search import InvalidQueryError, QueryEngine
from .store import load_index

logger = logging.getLogger("indexer.query")

SEPARATOR = "-" * 47


def run_queries(
    index: Index,
    page_dir: Union[str, Path],
    lines: Iterable[str],
    *,
    out: TextIO,
    err: TextIO,
    prompt: Optional[str] = None,
) -> int:
    """Answer each line of ``lines``; returns the number of valid queries."""
    engine = QueryEngine(index)
    answered = 0

    if prompt:
        out.write(prompt)
        out.flush()
    for line in lines:
        try:
            result = engine.evaluate(line)
        except InvalidQueryError as exc:
            logger.info("Rejected query %r: %s", line.rstrip("\n"), exc)
            print(f"Invalid query: {exc}", file=err)
        else:
            answered += 1
            print(f"Query: {' '.join(result.tokens)}", file=out)
            if not result.matched:
                print("No documents match.", file=out)
            else:
                ranked = rank(result.scores, page_dir)
                print(f"Matches {len(ranked)} documents (ranked):", file=out)
                for item in ranked:
                    print(item.format(), file=out)
            print(SEPARATOR, file=out)
        if prompt:
            out.write(prompt)
            out.flush()
    if prompt:
        out.write("\n")
    return answered


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query the inverted index.")
    parser.add_argument(
        "page_dir",
        nargs="?",
        default=None,
        help="Directory produced by the crawler (defaults to indexer.query.page_dir).",
    )
    parser.add_argument(
        "index_file",
        nargs="?",
        default=None,
        help="Index file produced by the indexer (defaults to indexer.query.index_file).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (default: config.yml when present).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        app_config = load_yaml_config(args.config)
        indexer_config = IndexerConfig.from_app_config(app_config)
    except ConfigError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    configure_logging(indexer_config.logs.log_level, indexer_config.logs.log_file)
    query_cfg = indexer_config.query

    page_dir = Path(args.page_dir or query_cfg.page_dir)
    index_file = Path(args.index_file or query_cfg.index_file)

    if not validate_directory(page_dir):
        print(f"[error] {page_dir} is not a directory produced by the crawler", file=sys.stderr)
        return 1
    try:
        index = load_index(index_file)
    except OSError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        print(
            "Index not found. Build the index first with: python -m indexer.build PAGE_DIR INDEX_FILE",
            file=sys.stderr,
        )
        return 1

    prompt = query_cfg.prompt if sys.stdin.isatty() else None
    try:
        run_queries(index, page_dir, sys.stdin, out=sys.stdout, err=sys.stderr, prompt=prompt)
    except FileNotFoundError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
