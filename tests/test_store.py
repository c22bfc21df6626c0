import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from indexer.index import Index
from indexer.store import (
    IndexFormatError,
    canonical_lines,
    load_index,
    parse_line,
    read_lines,
    save_index,
)


def make_index() -> Index:
    index = Index()
    for term, doc_id in [("cat", 1), ("cat", 1), ("cat", 2), ("dog", 2), ("dog", 2), ("dog", 2), ("dog", 3)]:
        index.add_occurrence(term, doc_id)
    return index


class IndexFileTests(unittest.TestCase):
    def test_save_writes_one_line_per_term(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.index"
            self.assertTrue(save_index(make_index(), path))
            lines = path.read_text(encoding="utf-8").splitlines()
            self.assertEqual(2, len(lines))
            by_term = {line.split()[0]: line.split()[1:] for line in lines}
            cat_pairs = by_term["cat"]
            self.assertEqual({"1": "2", "2": "1"}, dict(zip(cat_pairs[0::2], cat_pairs[1::2])))
            self.assertTrue(path.read_text(encoding="utf-8").endswith("\n"))

    def test_round_trip_preserves_postings(self) -> None:
        original = make_index()
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "round.index"
            save_index(original, path)
            loaded = load_index(path)
        self.assertEqual(canonical_lines(original), canonical_lines(loaded))
        for term in original.terms():
            self.assertEqual(original.find(term), loaded.find(term))

    def test_save_to_unwritable_path_returns_false(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "missing" / "dir" / "out.index"
            with self.assertLogs("indexer.store", level="ERROR"):
                self.assertFalse(save_index(make_index(), path))
            self.assertFalse(path.exists())

    def test_load_missing_file_raises(self) -> None:
        with TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                load_index(Path(tmpdir) / "nope.index")

    def test_load_merges_with_read_values_winning(self) -> None:
        index = make_index()
        read_lines(["cat 1 9 4 1\n", "bird 7 2\n"], index)
        self.assertEqual({1: 9, 2: 1, 4: 1}, index.find("cat").as_dict())
        self.assertEqual({7: 2}, index.find("bird").as_dict())
        self.assertEqual({2: 3, 3: 1}, index.find("dog").as_dict())

    def test_lenient_parse_skips_bad_pairs(self) -> None:
        with self.assertLogs("indexer.store", level="WARNING"):
            term, pairs = parse_line("cat 1 2 x 3 0 4 5 6")
        self.assertEqual("cat", term)
        self.assertEqual([(1, 2), (5, 6)], pairs)

    def test_blank_lines_are_ignored(self) -> None:
        index = read_lines(["\n", "cat 1 1\n", "   \n"])
        self.assertEqual(["cat 1 1"], canonical_lines(index))

    def test_strict_parse_rejects_malformed_lines(self) -> None:
        for line in ("cat 1", "cat 1 x", "cat 0 3", "c4t 1 1"):
            with self.subTest(line=line):
                with self.assertRaises(IndexFormatError):
                    parse_line(line, strict=True)

    def test_canonical_lines_sorts_terms_and_pairs(self) -> None:
        index = read_lines(["dog 3 1 2 3\n", "cat 2 1 1 2\n"])
        self.assertEqual(["cat 1 2 2 1", "dog 2 3 3 1"], canonical_lines(index))


if __name__ == "__main__":
    unittest.main()
