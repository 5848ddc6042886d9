"""Tests for pool resolution, vocabulary loading, selection storage and config."""

from __future__ import annotations

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from hanzidrill.config import DEFAULT_DATA_DIR, SELECTION_KEY, StudyConfig  # noqa: E402
from hanzidrill.loader import adapt_records, load_vocabulary_sets  # noqa: E402
from hanzidrill.models import VocabEntry  # noqa: E402
from hanzidrill.pool import resolve_pool  # noqa: E402
from hanzidrill.store import InMemorySelectionStore, JsonSelectionStore, toggle_selection  # noqa: E402
from hanzidrill.vocabulary import SET_IDS  # noqa: E402

HSK1 = (VocabEntry("我", "wǒ", "I"), VocabEntry("你", "nǐ", "you"), VocabEntry("吃", "chī", "eat"))
TRAVEL = (VocabEntry("机场", "jīchǎng", "airport"), VocabEntry("我", "wǒ", "I"))
SETS = {"HSK1": HSK1, "Travel & Tourism": TRAVEL, "Business": ()}


class ResolvePoolTests(unittest.TestCase):
    def test_empty_selection_uses_default_tier_in_order(self) -> None:
        self.assertEqual(resolve_pool([], SETS), list(HSK1))

    def test_selected_sets_are_concatenated_without_dedup(self) -> None:
        pool = resolve_pool(["Travel & Tourism", "HSK1"], SETS)
        self.assertEqual(pool, list(TRAVEL) + list(HSK1))
        self.assertEqual(sum(1 for entry in pool if entry.text == "我"), 2)

    def test_unknown_ids_are_skipped(self) -> None:
        self.assertEqual(resolve_pool(["Nope", "Travel & Tourism"], SETS), list(TRAVEL))

    def test_empty_selected_sets_fall_back(self) -> None:
        self.assertEqual(resolve_pool(["Business", "Nope"], SETS), list(HSK1))

    def test_repeated_selection_counts_once(self) -> None:
        self.assertEqual(resolve_pool(["HSK1", "HSK1"], SETS), list(HSK1))

    def test_missing_default_gives_empty_pool(self) -> None:
        self.assertEqual(resolve_pool([], {"Business": ()}), [])


class AdaptRecordsTests(unittest.TestCase):
    def test_field_aliases_are_accepted(self) -> None:
        records = [
            {"simp": "我", "pinyin": "wǒ", "english": "I"},
            {"hanzi": "你", "py": "nǐ", "meaning": ["you", "your"]},
            {"word": "吃"},
        ]
        self.assertEqual(
            adapt_records(records),
            [
                VocabEntry("我", "wǒ", "I"),
                VocabEntry("你", "nǐ", "you; your"),
                VocabEntry("吃", "", ""),
            ],
        )

    def test_non_string_readings_are_kept_as_text(self) -> None:
        records = [{"simp": "我", "pinyin": 3, "english": "I"}, {"simp": "三", "english": 3.0}]
        self.assertEqual(
            adapt_records(records),
            [VocabEntry("我", "3", "I"), VocabEntry("三", "", "3.0")],
        )

    def test_records_without_spelling_are_dropped(self) -> None:
        records = [{"pinyin": "hǎo"}, {"simp": "  "}, "not a record", {"simp": "好"}]
        with self.assertLogs("hanzidrill.loader", level="WARNING"):
            entries = adapt_records(records)
        self.assertEqual(entries, [VocabEntry("好")])


class LoadVocabularySetsTests(unittest.TestCase):
    def test_missing_and_broken_files_load_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp)
            (data_dir / "HSK1.json").write_text(
                json.dumps([{"simp": "我", "pinyin": "wǒ", "english": "I"}], ensure_ascii=False),
                encoding="utf-8",
            )
            (data_dir / "business.json").write_text("{not json", encoding="utf-8")
            sets = load_vocabulary_sets(data_dir)
        self.assertEqual(set(sets), set(SET_IDS))
        self.assertEqual(sets["HSK1"], (VocabEntry("我", "wǒ", "I"),))
        self.assertEqual(sets["Business"], ())
        self.assertEqual(sets["HSK6"], ())

    def test_bundled_default_tier_is_available(self) -> None:
        sets = load_vocabulary_sets(DEFAULT_DATA_DIR)
        self.assertTrue(sets["HSK1"])
        self.assertTrue(all(entry.text for entry in sets["HSK1"]))


class SelectionStoreTests(unittest.TestCase):
    def test_json_store_defaults_and_persists(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "selection.json"
            store = JsonSelectionStore(path)
            self.assertEqual(store.get(), ["HSK1"])
            store.set(["Business", "HSK2", "Business"])
            self.assertEqual(JsonSelectionStore(path).get(), ["Business", "HSK2"])
            document = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(document, {SELECTION_KEY: ["Business", "HSK2"]})

    def test_json_store_keeps_other_keys_and_survives_garbage(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "selection.json"
            path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
            store = JsonSelectionStore(path)
            store.set([])
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["theme"], "dark")
            self.assertEqual(store.get(), [])

            path.write_text("garbage", encoding="utf-8")
            self.assertEqual(store.get(), ["HSK1"])

    def test_toggle_adds_then_removes(self) -> None:
        store = InMemorySelectionStore()
        self.assertEqual(toggle_selection(store, "Global"), ["HSK1", "Global"])
        self.assertEqual(toggle_selection(store, "HSK1"), ["Global"])
        self.assertEqual(store.get(), ["Global"])


class StudyConfigTests(unittest.TestCase):
    def test_environment_overrides(self) -> None:
        config = StudyConfig.from_env(
            {
                "HANZIDRILL_DATA_DIR": "/tmp/vocab",
                "HANZIDRILL_ASPECT_PROBABILITY": "0.25",
                "HANZIDRILL_LOG_LEVEL": "debug",
                "HANZIDRILL_DEFAULT_SET": "HSK2",
            }
        )
        self.assertEqual(config.data_dir, Path("/tmp/vocab"))
        self.assertEqual(config.aspect_probability, 0.25)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.default_set_id, "HSK2")
        self.assertIsNone(config.log_file)

    def test_defaults(self) -> None:
        config = StudyConfig.from_env({})
        self.assertEqual(config.data_dir, DEFAULT_DATA_DIR)
        self.assertEqual(config.default_set_id, "HSK1")
        self.assertEqual(config.aspect_probability, 0.4)

    def test_probability_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            StudyConfig(aspect_probability=1.5)


if __name__ == "__main__":
    unittest.main()
