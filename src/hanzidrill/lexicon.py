"""Tagged lexical items and the built-in lexical bank."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .vocabulary import BANK_ROWS


class GrammaticalTag(str, Enum):
    TIME = "Time"
    SUBJECT = "Subject"
    PLACE = "Place"
    VERB = "Verb"
    OBJECT = "Object"
    CONNECTOR = "Connector"
    ASPECT = "Aspect"
    PUNCTUATION = "Punctuation"
    OTHER = "Other"


class LexiconError(LookupError):
    """Raised when a literal the templates depend on is missing from the bank."""


@dataclass(frozen=True)
class LexicalItem:
    text: str
    pinyin: str
    english: str
    tag: GrammaticalTag


class LexicalBank:
    """Read-only catalogue of lexical items, queryable by spelling and tag."""

    def __init__(self, items: Iterable[LexicalItem]):
        self._items: Tuple[LexicalItem, ...] = tuple(items)
        self._by_text: Dict[str, LexicalItem] = {}
        for item in self._items:
            self._by_text.setdefault(item.text, item)

    def find_by_text(self, text: str) -> Optional[LexicalItem]:
        return self._by_text.get(text)

    def all_with_tag(self, tag: GrammaticalTag) -> Tuple[LexicalItem, ...]:
        return tuple(item for item in self._items if item.tag is tag)

    def require(self, text: str) -> LexicalItem:
        item = self._by_text.get(text)
        if item is None:
            raise LexiconError(f"lexical bank has no entry for {text!r}")
        return item

    def __iter__(self) -> Iterator[LexicalItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, text: object) -> bool:
        return text in self._by_text


def build_bank(rows: Iterable[Tuple[str, str, str, str]] = BANK_ROWS) -> LexicalBank:
    return LexicalBank(
        LexicalItem(text=text, pinyin=pinyin, english=english, tag=GrammaticalTag(tag))
        for text, pinyin, english, tag in rows
    )


BANK = build_bank()

__all__ = ["BANK", "GrammaticalTag", "LexicalBank", "LexicalItem", "LexiconError", "build_bank"]
