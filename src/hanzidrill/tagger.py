"""Grammatical classification of exercise tokens."""

from __future__ import annotations

from .lexicon import GrammaticalTag
from .vocabulary import (
    LOCATION_PREFIX,
    TAGGER_ASPECTS,
    TAGGER_CONNECTORS,
    TAGGER_OBJECTS,
    TAGGER_PUNCTUATION,
    TAGGER_SUBJECTS,
    TAGGER_TIME_WORDS,
    TAGGER_VERBS,
)


def tag_token(token: str) -> GrammaticalTag:
    """Classify *token*; the first matching rule wins."""
    if token in TAGGER_TIME_WORDS:
        return GrammaticalTag.TIME
    if token in TAGGER_SUBJECTS:
        return GrammaticalTag.SUBJECT
    if token.startswith(LOCATION_PREFIX):
        return GrammaticalTag.PLACE
    # The comma is listed as a connector, so it never reaches the
    # punctuation check below.
    if token in TAGGER_CONNECTORS:
        return GrammaticalTag.CONNECTOR
    if token in TAGGER_ASPECTS:
        return GrammaticalTag.ASPECT
    if token in TAGGER_VERBS:
        return GrammaticalTag.VERB
    if token in TAGGER_OBJECTS:
        return GrammaticalTag.OBJECT
    if token in TAGGER_PUNCTUATION:
        return GrammaticalTag.PUNCTUATION
    return GrammaticalTag.OTHER


__all__ = ["tag_token"]
