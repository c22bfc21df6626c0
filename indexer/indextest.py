"""Load an index file and write it back out, for round-trip checks.

Usage: python -m indexer.indextest OLD_INDEX_FILE NEW_INDEX_FILE
"""

from __future__ import annotations

import sys
from typing import Optional

from .index import Index
from .logs import configure_logging
from .store import load_index, save_index


def main(argv: Optional[list[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: python -m indexer.indextest OLD_INDEX_FILE NEW_INDEX_FILE", file=sys.stderr)
        return 1

    configure_logging()
    old_path, new_path = args
    try:
        index = load_index(old_path, Index())
    except OSError as exc:
        print(f"[error] {old_path} is not a valid file path for reading: {exc}", file=sys.stderr)
        return 1

    if not save_index(index, new_path):
        print(f"[error] {new_path} is not a valid file path for writing", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
