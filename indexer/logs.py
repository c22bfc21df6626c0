"""Logging setup shared by the indexer command line tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


def _attach_file_logging(log_path: Path, level: int) -> None:
    """Attach a file handler to root logger if not already present."""
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            if Path(getattr(handler, "baseFilename", "")) == log_path:
                return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=numeric_level, format="[%(levelname)s] %(message)s")
    logging.getLogger().setLevel(numeric_level)
    if log_file:
        _attach_file_logging(Path(log_file).resolve(), numeric_level)
