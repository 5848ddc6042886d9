"""Vocabulary records and their adaptation into entries the core consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class VocabEntry:
    text: str
    pinyin: str = ""
    english: str = ""


def _flatten(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "; ".join(str(part).strip() for part in value if str(part).strip())
    return str(value)


class VocabRecord(BaseModel):
    """A raw vocabulary record as found in the set files.

    Set files come from different sources and do not agree on field names,
    so each field accepts several aliases. A record without a spelling fails
    validation and is dropped by the loader.
    """

    model_config = ConfigDict(extra="ignore")

    text: str = Field(
        min_length=1,
        validation_alias=AliasChoices("simp", "simplified", "hanzi", "text", "word"),
    )
    pinyin: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("pinyin", "py", "pronunciation"),
    )
    english: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("english", "en", "meaning", "definition", "translation"),
    )

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("pinyin", "english", mode="before")
    @classmethod
    def _join_lists(cls, value: Any) -> Any:
        return _flatten(value)

    def to_entry(self) -> VocabEntry:
        return VocabEntry(
            text=self.text,
            pinyin=(self.pinyin or "").strip(),
            english=(self.english or "").strip(),
        )


__all__ = ["VocabEntry", "VocabRecord"]
