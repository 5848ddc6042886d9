"""Tests for slot filling and template assembly."""

from __future__ import annotations

import itertools
import os
import random
import sys
import unittest


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from hanzidrill.generator import (  # noqa: E402
    AssembledSentence,
    GenerationError,
    LengthClass,
    SentenceGenerator,
    grammar_hints,
    select_for_slot,
)
from hanzidrill.lexicon import BANK, GrammaticalTag, LexicalBank, LexicalItem, LexiconError  # noqa: E402
from hanzidrill.models import VocabEntry  # noqa: E402


def _generator(seed: int = 7, **kwargs) -> SentenceGenerator:
    return SentenceGenerator(rng=random.Random(seed), **kwargs)


class SelectForSlotTests(unittest.TestCase):
    def test_first_candidate_in_pool_wins_for_every_ordering(self) -> None:
        pool = [VocabEntry("他"), VocabEntry("我"), VocabEntry("你")]
        for ordering in itertools.permutations(["我", "你", "他"]):
            item = select_for_slot(pool, GrammaticalTag.SUBJECT, ordering, rng=random.Random(0))
            self.assertEqual(item.text, ordering[0])

    def test_candidate_order_beats_pool_order(self) -> None:
        pool = [VocabEntry("她"), VocabEntry("我")]
        item = select_for_slot(pool, GrammaticalTag.SUBJECT, ["我", "她"])
        self.assertEqual(item.text, "我")

    def test_pool_fields_are_preferred(self) -> None:
        pool = [VocabEntry("今天", "jintian", "this day")]
        item = select_for_slot(pool, GrammaticalTag.TIME, ["今天"])
        self.assertEqual(item, LexicalItem("今天", "jintian", "this day", GrammaticalTag.TIME))

    def test_missing_pool_fields_fall_back_to_bank(self) -> None:
        item = select_for_slot([VocabEntry("今天")], GrammaticalTag.TIME, ["今天"])
        self.assertEqual(item.pinyin, "jīntiān")
        self.assertEqual(item.english, "today")

    def test_pool_word_unknown_to_bank_keeps_empty_fields(self) -> None:
        item = select_for_slot([VocabEntry("猫")], GrammaticalTag.OBJECT, ["猫"])
        self.assertEqual((item.text, item.pinyin, item.english), ("猫", "", ""))
        self.assertIs(item.tag, GrammaticalTag.OBJECT)

    def test_empty_pool_draws_from_bank_candidates(self) -> None:
        rng = random.Random(3)
        for _ in range(20):
            item = select_for_slot([], GrammaticalTag.VERB, ["学习", "工作"], rng=rng)
            self.assertIn(item.text, {"学习", "工作"})
            self.assertIs(item.tag, GrammaticalTag.VERB)

    def test_candidates_missing_from_bank_use_any_tagged_entry(self) -> None:
        verbs = {item.text for item in BANK.all_with_tag(GrammaticalTag.VERB)}
        item = select_for_slot([], GrammaticalTag.VERB, ["跑步"], rng=random.Random(1))
        self.assertIn(item.text, verbs)


class GenerateTests(unittest.TestCase):
    def test_every_length_ends_with_period(self) -> None:
        generator = _generator()
        for length in LengthClass:
            for pool in ([], [VocabEntry("我", "wǒ", "I")]):
                sentence = generator.generate(pool, length)
                self.assertTrue(sentence.tokens)
                self.assertEqual(sentence.tokens[-1].text, "。")

    def test_short_length_with_and_without_aspect(self) -> None:
        always = _generator(aspect_probability=1.0).generate([], "short")
        never = _generator(aspect_probability=0.0).generate([], "short")
        self.assertEqual(len(always), 7)
        self.assertEqual(always.tokens[3].text, "正在")
        self.assertEqual(len(never), 6)
        self.assertNotIn("正在", never.text)

    def test_short_length_is_six_or_seven(self) -> None:
        generator = _generator(seed=11)
        lengths = {len(generator.generate([], LengthClass.SHORT)) for _ in range(50)}
        self.assertTrue(lengths <= {6, 7})

    def test_regular_reuses_slots_in_both_clauses(self) -> None:
        sentence = _generator().generate([], "regular")
        tokens = sentence.tokens
        self.assertEqual(len(tokens), 12)
        self.assertEqual([tokens[0].text, tokens[4].text, tokens[5].text, tokens[8].text],
                         ["虽然", "，", "但是", "还是"])
        self.assertEqual(tokens[1], tokens[7])
        self.assertEqual(tokens[2], tokens[9])
        self.assertEqual(tokens[3], tokens[10])

    def test_long_uses_conditional_frame(self) -> None:
        tokens = _generator().generate([], "long").tokens
        self.assertEqual(len(tokens), 12)
        self.assertEqual(tokens[0].text, "如果")
        self.assertEqual(tokens[7].text, "那么")
        self.assertIn(tokens[8].text, {"他们", "我们"})
        self.assertEqual(tokens[3], tokens[9])
        self.assertEqual(tokens[10].text, "见面")

    def test_pool_vocabulary_takes_priority(self) -> None:
        pool = [VocabEntry("她", "tā", "she"), VocabEntry("喝", "hē", "to drink")]
        sentence = _generator().generate(pool, "short")
        texts = [token.text for token in sentence.tokens]
        self.assertIn("她", texts)
        self.assertIn("喝", texts)

    def test_unknown_length_raises(self) -> None:
        with self.assertRaises(GenerationError):
            _generator().generate([], "huge")

    def test_length_parsing_is_case_insensitive(self) -> None:
        self.assertIs(LengthClass.parse(" LONG "), LengthClass.LONG)

    def test_missing_literal_fails_at_construction(self) -> None:
        bank = LexicalBank(item for item in BANK if item.text != "。")
        with self.assertRaises(LexiconError):
            SentenceGenerator(bank)


class DerivedViewTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sentence = AssembledSentence(
            tuple(BANK.require(text) for text in ["今天", "我", "在公司", "开会", "。"])
        )

    def test_text_pinyin_and_english(self) -> None:
        self.assertEqual(self.sentence.text, "今天我在公司开会。")
        self.assertEqual(self.sentence.pinyin, "jīntiānwǒzài gōngsīkāihuì.")
        self.assertEqual(self.sentence.english, "today I at the company have a meeting.")

    def test_views_are_stable(self) -> None:
        self.assertEqual(self.sentence.pinyin, self.sentence.pinyin)
        self.assertEqual(self.sentence.english, self.sentence.english)

    def test_comma_spacing_and_spelling_fallback(self) -> None:
        sentence = AssembledSentence(
            (
                BANK.require("虽然"),
                LexicalItem("猫", "", "", GrammaticalTag.SUBJECT),
                BANK.require("，"),
                BANK.require("还是"),
                BANK.require("。"),
            )
        )
        self.assertEqual(sentence.pinyin, "suīrán猫,háishi.")
        self.assertEqual(sentence.english, "although 猫, still.")


class GrammarHintTests(unittest.TestCase):
    def test_hints_follow_the_template(self) -> None:
        regular = grammar_hints(_generator().generate([], "regular"))
        self.assertIn("Basic order: [Time] [Subject] [Place] [Verb] [Object].", regular)
        self.assertIn("虽然…但是…: concession (although…but…).", regular)

        long = grammar_hints(_generator().generate([], "long"))
        self.assertIn("如果…那么…: conditional (if…then…).", long)

        short = grammar_hints(_generator(aspect_probability=1.0).generate([], "short"))
        self.assertIn("正在 + verb: progressive (be doing).", short)
        self.assertEqual(len(short), 2)


if __name__ == "__main__":
    unittest.main()
