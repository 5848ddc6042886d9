"""Tests for the built-in lexical bank."""

from __future__ import annotations

import os
import sys
import unittest
from collections import Counter


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from hanzidrill.generator import TEMPLATE_LITERALS  # noqa: E402
from hanzidrill.lexicon import BANK, GrammaticalTag, LexiconError, build_bank  # noqa: E402
from hanzidrill.vocabulary import SLOT_CANDIDATES  # noqa: E402


class LexicalBankTests(unittest.TestCase):
    def test_bank_composition(self) -> None:
        counts = Counter(item.tag for item in BANK)
        self.assertEqual(len(BANK), 40)
        self.assertEqual(counts[GrammaticalTag.PUNCTUATION], 2)
        self.assertEqual(counts[GrammaticalTag.ASPECT], 1)
        self.assertNotIn(GrammaticalTag.OTHER, counts)

    def test_find_by_text(self) -> None:
        item = BANK.find_by_text("在机场")
        self.assertEqual((item.pinyin, item.english, item.tag), ("zài jīchǎng", "at the airport", GrammaticalTag.PLACE))
        self.assertIsNone(BANK.find_by_text("机场"))

    def test_all_with_tag_keeps_catalogue_order(self) -> None:
        times = [item.text for item in BANK.all_with_tag(GrammaticalTag.TIME)]
        self.assertEqual(times, ["今天", "现在", "明天早上", "周末", "晚上"])

    def test_every_template_literal_and_candidate_is_present(self) -> None:
        for text in TEMPLATE_LITERALS:
            self.assertIn(text, BANK)
        for tag, candidates in SLOT_CANDIDATES.items():
            for text in candidates:
                with self.subTest(text=text):
                    self.assertIs(BANK.require(text).tag, GrammaticalTag(tag))

    def test_require_missing_raises(self) -> None:
        bank = build_bank([("我", "wǒ", "I", "Subject")])
        with self.assertRaises(LexiconError):
            bank.require("。")


if __name__ == "__main__":
    unittest.main()
