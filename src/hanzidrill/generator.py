"""Random sentence generation from fixed grammar templates."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .lexicon import BANK, GrammaticalTag, LexicalBank, LexicalItem, LexiconError
from .models import VocabEntry
from .vocabulary import (
    ASPECT_MARKER,
    COMMA,
    FRAMES,
    MEETING_VERBS,
    PERIOD,
    PLURAL_SUBJECTS,
    SLOT_CANDIDATES,
)

ALTHOUGH = "虽然"
BUT = "但是"
STILL = "还是"
IF = "如果"
THEN = "那么"

TEMPLATE_LITERALS = (ALTHOUGH, BUT, STILL, IF, THEN, ASPECT_MARKER, COMMA, PERIOD)

CONTENT_TAGS = (
    GrammaticalTag.TIME,
    GrammaticalTag.SUBJECT,
    GrammaticalTag.PLACE,
    GrammaticalTag.VERB,
    GrammaticalTag.OBJECT,
)

BASELINE_HINT = "Basic order: [Time] [Subject] [Place] [Verb] [Object]."
FRAME_HINTS = {
    "concession": "虽然…但是…: concession (although…but…).",
    "conditional": "如果…那么…: conditional (if…then…).",
    "sequence": "先…然后…: first…then… (sequence).",
}
PROGRESSIVE_HINT = "正在 + verb: progressive (be doing)."


class GenerationError(ValueError):
    """Raised when a sentence cannot be generated for the requested input."""


class LengthClass(str, Enum):
    SHORT = "short"
    REGULAR = "regular"
    LONG = "long"

    @classmethod
    def parse(cls, value: "str | LengthClass") -> "LengthClass":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise GenerationError(f"unknown length {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class AssembledSentence:
    tokens: Tuple[LexicalItem, ...]

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def pinyin(self) -> str:
        return "".join(token.pinyin or token.text for token in self.tokens)

    @property
    def english(self) -> str:
        joined = " ".join(token.english or token.text for token in self.tokens)
        return joined.replace(" ,", ",").replace(" .", ".")

    def __len__(self) -> int:
        return len(self.tokens)


def select_for_slot(
    pool: Sequence[VocabEntry],
    tag: GrammaticalTag,
    candidates: Sequence[str],
    *,
    bank: LexicalBank = BANK,
    rng: Optional[random.Random] = None,
) -> LexicalItem:
    """Pick the item filling one grammatical slot.

    The first candidate present in the learner's pool wins. Otherwise a bank
    item with the tag is drawn, restricted to the candidates when any of
    them are in the bank.
    """
    by_text: Dict[str, VocabEntry] = {}
    for entry in pool:
        by_text.setdefault(entry.text, entry)

    for candidate in candidates:
        hit = by_text.get(candidate)
        if hit is None:
            continue
        fallback = bank.find_by_text(candidate)
        return LexicalItem(
            text=hit.text,
            pinyin=hit.pinyin or (fallback.pinyin if fallback else ""),
            english=hit.english or (fallback.english if fallback else ""),
            tag=tag,
        )

    rng = rng or random
    by_tag = bank.all_with_tag(tag)
    if not by_tag:
        raise LexiconError(f"lexical bank has no {tag.value} entries")
    filtered = [item for item in by_tag if item.text in candidates]
    return rng.choice(filtered or list(by_tag))


class SentenceGenerator:
    """Fills the short, concession and conditional templates."""

    def __init__(
        self,
        bank: LexicalBank = BANK,
        *,
        rng: Optional[random.Random] = None,
        aspect_probability: float = 0.4,
    ):
        missing = [text for text in TEMPLATE_LITERALS if text not in bank]
        if missing:
            raise LexiconError(f"lexical bank is missing template literals: {', '.join(missing)}")
        for tag in CONTENT_TAGS:
            if not bank.all_with_tag(tag):
                raise LexiconError(f"lexical bank has no {tag.value} entries")
        self._bank = bank
        self._rng = rng or random.Random()
        self._aspect_probability = aspect_probability

    def generate(self, pool: Sequence[VocabEntry], length: "str | LengthClass") -> AssembledSentence:
        length = LengthClass.parse(length)
        time = self._pick(pool, GrammaticalTag.TIME)
        subject = self._pick(pool, GrammaticalTag.SUBJECT)
        place = self._pick(pool, GrammaticalTag.PLACE)
        verb = self._pick(pool, GrammaticalTag.VERB)
        obj = self._pick(pool, GrammaticalTag.OBJECT)
        literal = self._bank.require

        tokens: List[LexicalItem]
        if length is LengthClass.SHORT:
            tokens = [time, subject, place]
            if self._rng.random() < self._aspect_probability:
                tokens.append(literal(ASPECT_MARKER))
            tokens.extend([verb, obj, literal(PERIOD)])
        elif length is LengthClass.REGULAR:
            tokens = [
                literal(ALTHOUGH), subject, verb, obj, literal(COMMA),
                literal(BUT), time, subject, literal(STILL), verb, obj, literal(PERIOD),
            ]
        else:
            plural = select_for_slot(
                pool, GrammaticalTag.SUBJECT, PLURAL_SUBJECTS, bank=self._bank, rng=self._rng
            )
            meet = select_for_slot(
                pool, GrammaticalTag.VERB, MEETING_VERBS, bank=self._bank, rng=self._rng
            )
            tokens = [
                literal(IF), time, subject, place, verb, obj, literal(COMMA),
                literal(THEN), plural, place, meet, literal(PERIOD),
            ]
        return AssembledSentence(tuple(tokens))

    def _pick(self, pool: Sequence[VocabEntry], tag: GrammaticalTag) -> LexicalItem:
        return select_for_slot(pool, tag, SLOT_CANDIDATES[tag.value], bank=self._bank, rng=self._rng)


def grammar_hints(sentence: AssembledSentence) -> List[str]:
    """Notes shown next to a generated sentence's translation."""
    text = sentence.text
    hints = [BASELINE_HINT]
    for name in ("concession", "conditional"):
        first, second = FRAMES[name]
        if first in text and second in text:
            hints.append(FRAME_HINTS[name])
    if ASPECT_MARKER in text:
        hints.append(PROGRESSIVE_HINT)
    first, second = FRAMES["sequence"]
    if first in text and second in text:
        hints.append(FRAME_HINTS["sequence"])
    return hints


__all__ = [
    "AssembledSentence",
    "GenerationError",
    "LengthClass",
    "SentenceGenerator",
    "grammar_hints",
    "select_for_slot",
]
