import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock

from config_loader import ConfigError, get_section, load_yaml_config
from indexer import query
from indexer.config import IndexerConfig
from indexer.pagedir import Document, init_directory, save_document


class ConfigLoaderTests(unittest.TestCase):
    def test_load_yaml_config_reads_mapping(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yml"
            path.write_text("workspace: /tmp/ws\nindexer:\n  build:\n    min_word_length: 4\n", encoding="utf-8")
            data = load_yaml_config(str(path))
        self.assertEqual("/tmp/ws", data["workspace"])
        self.assertEqual(4, data["indexer"]["build"]["min_word_length"])

    def test_missing_explicit_file_raises(self) -> None:
        with TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigError):
                load_yaml_config(str(Path(tmpdir) / "missing.yml"))
            self.assertEqual({}, load_yaml_config(str(Path(tmpdir) / "missing.yml"), missing_ok=True))

    def test_non_mapping_root_raises(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_yaml_config(str(path))

    def test_get_section_requires_mapping(self) -> None:
        self.assertEqual({}, get_section({"logs": None}, "logs"))
        with self.assertRaises(ConfigError):
            get_section({"logs": "loud"}, "logs")


class IndexerConfigTests(unittest.TestCase):
    def test_defaults_resolve_under_workspace(self) -> None:
        cfg = IndexerConfig.from_app_config({"workspace": "/srv/tse"})
        self.assertEqual(str(Path("/srv/tse/crawl/pages").resolve()), cfg.build.page_dir)
        self.assertEqual(str(Path("/srv/tse/index/pages.index").resolve()), cfg.build.index_file)
        self.assertEqual(cfg.build.page_dir, cfg.query.page_dir)
        self.assertEqual(cfg.build.index_file, cfg.query.index_file)
        self.assertEqual(3, cfg.build.min_word_length)
        self.assertEqual("INFO", cfg.logs.log_level)
        self.assertIsNone(cfg.logs.log_file)

    def test_query_section_overrides_build_paths(self) -> None:
        cfg = IndexerConfig.from_app_config(
            {
                "workspace": "/srv/tse",
                "logs": {"log_level": "DEBUG", "log_file": "logs/tse.log"},
                "indexer": {
                    "build": {"page_dir": "/data/pages"},
                    "query": {"index_file": "other.index", "prompt": "> "},
                },
            }
        )
        self.assertEqual(str(Path("/data/pages").resolve()), cfg.query.page_dir)
        self.assertEqual(str(Path("/srv/tse/other.index").resolve()), cfg.query.index_file)
        self.assertEqual("> ", cfg.query.prompt)
        self.assertEqual(str(Path("/srv/tse/logs/tse.log").resolve()), cfg.logs.log_file)

    def test_invalid_min_word_length(self) -> None:
        with self.assertRaises(ConfigError):
            IndexerConfig.from_app_config({"indexer": {"build": {"min_word_length": "three"}}})
        with self.assertRaises(ConfigError):
            IndexerConfig.from_app_config({"indexer": {"build": {"min_word_length": 0}}})


class QueryCliTests(unittest.TestCase):
    def test_main_answers_stdin_queries(self) -> None:
        with TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            page_dir = root / "pages"
            page_dir.mkdir()
            init_directory(page_dir)
            save_document(page_dir, 1, Document(doc_id=1, url="http://a", depth=0, content="cat"))
            index_file = root / "pages.index"
            index_file.write_text("cat 1 1\n", encoding="utf-8")

            stdout = io.StringIO()
            with mock.patch("sys.stdin", io.StringIO("cat\n")), redirect_stdout(stdout):
                exit_code = query.main([str(page_dir), str(index_file)])
        self.assertEqual(0, exit_code)
        self.assertIn("score 1 doc 1: http://a", stdout.getvalue())

    def test_main_fails_on_missing_index(self) -> None:
        with TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            init_directory(root)
            stderr = io.StringIO()
            with redirect_stderr(stderr):
                exit_code = query.main([str(root), str(root / "missing.index")])
        self.assertEqual(1, exit_code)
        self.assertIn("Build the index first", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
