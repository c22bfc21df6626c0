from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from config_loader import ConfigError, get_section

from .tokenize import MIN_WORD_LENGTH

DEFAULT_PAGE_DIR = "crawl/pages"
DEFAULT_INDEX_FILE = "index/pages.index"
DEFAULT_PROMPT = "Query? "


def _resolve_config_path(
    workspace: Optional[str], value: Optional[str], default_relative: str
) -> str:
    base = Path(workspace or "./workspace")
    if value:
        candidate = Path(value)
        if candidate.is_absolute():
            return str(candidate.resolve())
        return str((base / candidate).resolve())
    return str((base / default_relative).resolve())


@dataclass
class LogsConfig:
    log_level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class IndexerBuildConfig:
    page_dir: str
    index_file: str
    min_word_length: int = MIN_WORD_LENGTH


@dataclass
class IndexerQueryConfig:
    page_dir: str
    index_file: str
    prompt: str = DEFAULT_PROMPT


@dataclass
class IndexerConfig:
    build: IndexerBuildConfig
    query: IndexerQueryConfig
    logs: LogsConfig

    @classmethod
    def from_app_config(cls, config: Dict[str, Any]) -> "IndexerConfig":
        workspace = config.get("workspace")
        logs_section = get_section(config, "logs")
        indexer_section = get_section(config, "indexer")
        build_section = get_section(indexer_section, "build")
        query_section = get_section(indexer_section, "query")

        page_dir = _resolve_config_path(workspace, build_section.get("page_dir"), DEFAULT_PAGE_DIR)
        index_file = _resolve_config_path(workspace, build_section.get("index_file"), DEFAULT_INDEX_FILE)

        min_length = build_section.get("min_word_length", MIN_WORD_LENGTH)
        try:
            min_length = int(min_length)
        except (TypeError, ValueError):
            raise ConfigError(f"indexer.build.min_word_length must be an integer, got {min_length!r}") from None
        if min_length < 1:
            raise ConfigError("indexer.build.min_word_length must be >= 1")

        build_cfg = IndexerBuildConfig(
            page_dir=page_dir,
            index_file=index_file,
            min_word_length=min_length,
        )

        raw_query_pages = query_section.get("page_dir")
        raw_query_index = query_section.get("index_file")
        query_cfg = IndexerQueryConfig(
            page_dir=_resolve_config_path(workspace, raw_query_pages, DEFAULT_PAGE_DIR) if raw_query_pages else page_dir,
            index_file=_resolve_config_path(workspace, raw_query_index, DEFAULT_INDEX_FILE) if raw_query_index else index_file,
            prompt=str(query_section.get("prompt", DEFAULT_PROMPT)),
        )

        raw_log_file = logs_section.get("log_file")
        logs_cfg = LogsConfig(
            log_level=str(logs_section.get("log_level", "INFO")),
            log_file=_resolve_config_path(workspace, raw_log_file, "") if raw_log_file else None,
        )

        return cls(build=build_cfg, query=query_cfg, logs=logs_cfg)
