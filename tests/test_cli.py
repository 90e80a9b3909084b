import io
import json
import logging
import tempfile
import unittest
from unittest import mock
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from muhkeat.maximizer import top_weight_and_pairs
from muhkeat.pair_cli import find_pairs, main
from muhkeat.results import format_report, mask_pairs_to_word_pairs, result_to_dict
from muhkeat.word_set import WordSet


class TestResults(unittest.TestCase):
    def setUp(self):
        self.word_set = WordSet(["cat", "act", "fish"])
        self.result = top_weight_and_pairs(self.word_set)
        self.word_pairs = mask_pairs_to_word_pairs(self.word_set, self.result.mask_pairs)

    def test_expansion_is_cartesian_product(self):
        self.assertEqual(self.result.weight, 7)
        self.assertEqual({frozenset(p) for p in self.word_pairs},
                         {frozenset(("cat", "fish")), frozenset(("act", "fish"))})

    def test_report(self):
        report = format_report(["book.txt"], "abc", self.word_set, self.result, self.word_pairs)
        lines = report.splitlines()
        self.assertEqual(lines[0], "                      Input file: book.txt")
        self.assertIn(" Unique (case insensitive) words: 3", lines)
        self.assertIn("            Unique sets of chars: 2", lines)
        self.assertIn(" Top pairs found (weight 7)", lines)
        self.assertEqual(len(lines), 7 + len(self.word_pairs))

    def test_dict(self):
        data = result_to_dict(["book.txt"], "abc", self.word_set, self.result, self.word_pairs)
        self.assertEqual(data["weight"], 7)
        self.assertEqual(data["unique_masks"], 2)
        self.assertEqual(len(data["pairs"]), 2)
        self.assertEqual(data["alphabet"], "catfish")
        self.assertEqual(data["weights"], {4: 1, 3: 1})


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "corpus.txt"
        self.path.write_text("The cat, the DOG and a fish.", encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def test_find_pairs_json(self):
        out = find_pairs([self.path], whitelist="acdfghiost", as_json=True)
        data = json.loads(out)
        self.assertEqual(data["weight"], 7)
        self.assertEqual(
            {frozenset(p) for p in data["pairs"]},
            {frozenset(("cat", "fish")), frozenset(("dog", "fish"))},
        )

    def test_main_prints_report(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["-f", str(self.path), "-c", "acdfghiost"])
        self.assertIn("Top pairs found (weight 7)", buf.getvalue())

    def test_main_parallel(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["-f", str(self.path), "-c", "acdfghiost", "--workers", "2", "--json"])
        self.assertEqual(json.loads(buf.getvalue())["weight"], 7)

    def test_missing_file_exits(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["-f", str(self.path.with_name("missing.txt"))])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("missing.txt", err.getvalue())

    def test_alphabet_overflow_exits(self):
        chars = "".join(chr(0x4E00 + i) for i in range(65))
        self.path.write_text(chars, encoding="utf-8")
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["-f", str(self.path), "-c", chars])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("65 distinct characters", err.getvalue())

    def test_single_character_set_prints_no_pairs(self):
        self.path.write_text("abc cab bca CBA", encoding="utf-8")
        buf = io.StringIO()
        with redirect_stdout(buf):
            main(["-f", str(self.path), "-c", "abc"])
        lines = buf.getvalue().splitlines()
        self.assertIn("            Unique sets of chars: 1", lines)
        self.assertIn(" Top pairs found (weight 0)", lines)
        self.assertTrue(lines[-1].startswith("---"))

    def test_verbose_logs_at_info(self):
        with mock.patch("muhkeat.pair_cli.logging.basicConfig") as basic_config:
            with redirect_stdout(io.StringIO()):
                main(["-f", str(self.path), "-c", "acdfghiost", "-v"])
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.INFO)

    def test_quiet_by_default(self):
        with mock.patch("muhkeat.pair_cli.logging.basicConfig") as basic_config:
            with redirect_stdout(io.StringIO()):
                main(["-f", str(self.path), "-c", "acdfghiost"])
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.WARNING)

    def test_all_cpus_with_zero_workers(self):
        out = find_pairs([self.path], whitelist="acdfghiost", workers=0, as_json=True)
        self.assertEqual(json.loads(out)["weight"], 7)

    def test_negative_workers_exits(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["-f", str(self.path), "--workers", "-2"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("workers must be >= 0", err.getvalue())


if __name__ == "__main__":
    unittest.main()
