"""State for the flashcard, sentence generator and tile-ordering screens."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .exercises import TargetItem, pick_exercise
from .generator import AssembledSentence, LengthClass, SentenceGenerator, grammar_hints
from .models import VocabEntry
from .speech import Speaker, speak_best_effort
from .validator import ValidationResult, validate


class FlashcardSession:
    """Walks through a pool one card at a time, wrapping at both ends."""

    def __init__(self, pool: Sequence[VocabEntry], *, speaker: Optional[Speaker] = None):
        self._pool = list(pool)
        self._index = 0
        self._speaker = speaker
        self.revealed = False

    @property
    def current(self) -> Optional[VocabEntry]:
        if not self._pool:
            return None
        return self._pool[self._index]

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._pool)

    def next(self) -> Optional[VocabEntry]:
        if self._pool:
            self._index = (self._index + 1) % len(self._pool)
        return self.current

    def previous(self) -> Optional[VocabEntry]:
        if self._pool:
            self._index = (self._index - 1 + len(self._pool)) % len(self._pool)
        return self.current

    def toggle_reveal(self) -> bool:
        self.revealed = not self.revealed
        return self.revealed

    def speak(self) -> None:
        if self.current is not None:
            speak_best_effort(self._speaker, self.current.text)


class GeneratorSession:
    """Holds the current generated sentence and its reveal toggles."""

    def __init__(
        self,
        generator: SentenceGenerator,
        pool: Sequence[VocabEntry],
        *,
        length: "str | LengthClass" = LengthClass.SHORT,
        speaker: Optional[Speaker] = None,
    ):
        self._generator = generator
        self._pool = list(pool)
        self._length = LengthClass.parse(length)
        self._speaker = speaker
        self.show_pinyin = False
        self.show_english = False
        self.sentence: Optional[AssembledSentence] = None
        if self._pool:
            self.regenerate()

    @property
    def length(self) -> LengthClass:
        return self._length

    def set_length(self, length: "str | LengthClass") -> AssembledSentence:
        self._length = LengthClass.parse(length)
        return self.regenerate()

    def set_pool(self, pool: Sequence[VocabEntry]) -> Optional[AssembledSentence]:
        self._pool = list(pool)
        if not self._pool:
            return self.sentence
        return self.regenerate()

    def regenerate(self) -> AssembledSentence:
        self.sentence = self._generator.generate(self._pool, self._length)
        self.show_pinyin = False
        self.show_english = False
        return self.sentence

    def toggle_pinyin(self) -> bool:
        self.show_pinyin = not self.show_pinyin
        return self.show_pinyin

    def toggle_english(self) -> bool:
        self.show_english = not self.show_english
        return self.show_english

    def hints(self) -> List[str]:
        return grammar_hints(self.sentence) if self.sentence else []

    def speak(self) -> None:
        if self.sentence is not None:
            speak_best_effort(self._speaker, self.sentence.text)


class OrderingSession:
    """Tile-ordering exercise: the learner picks tiles until the row is full."""

    def __init__(
        self,
        item: Optional[TargetItem] = None,
        *,
        rng: Optional[random.Random] = None,
        speaker: Optional[Speaker] = None,
    ):
        self._rng = rng or random.Random()
        self._speaker = speaker
        self.item: TargetItem = item or pick_exercise(self._rng)
        self.choices: List[str] = []
        self.picked: List[str] = []
        self.result: Optional[ValidationResult] = None
        self.reset()

    @property
    def finished(self) -> bool:
        return self.result is not None

    @property
    def notes(self) -> List[str]:
        if self.result is not None and not self.result.matched:
            return list(self.result.explanations)
        return list(self.item.notes)

    def pick(self, token: str) -> Optional[ValidationResult]:
        """Move *token* from the tiles to the answer row.

        Returns the validation result once every tile has been placed.
        """
        if self.finished or token not in self.choices:
            return self.result
        self.choices.remove(token)
        self.picked.append(token)
        if len(self.picked) == len(self.item.tokens):
            self.result = validate(self.item.tokens, self.picked)
            if self.result.matched:
                speak_best_effort(self._speaker, self.item.text)
        return self.result

    def undo(self) -> None:
        if not self.picked:
            return
        self.choices.append(self.picked.pop())
        self.result = None

    def reset(self) -> None:
        self.picked = []
        self.choices = list(self.item.tokens)
        self._rng.shuffle(self.choices)
        self.result = None

    def reveal(self) -> ValidationResult:
        self.picked = list(self.item.tokens)
        self.choices = []
        self.result = ValidationResult(matched=True)
        return self.result

    def new_item(self) -> TargetItem:
        self.item = pick_exercise(self._rng)
        self.reset()
        return self.item

    def speak(self) -> None:
        speak_best_effort(self._speaker, self.item.text)


__all__ = ["FlashcardSession", "GeneratorSession", "OrderingSession"]
