"""Chinese study toolkit: flashcards, template sentences and sentence-building drills."""

from .generator import (
    AssembledSentence,
    GenerationError,
    LengthClass,
    SentenceGenerator,
    grammar_hints,
    select_for_slot,
)
from .lexicon import BANK, GrammaticalTag, LexicalBank, LexicalItem, LexiconError
from .models import VocabEntry
from .pool import resolve_pool
from .tagger import tag_token
from .validator import ValidationResult, explain_order, validate

__all__ = [
    "AssembledSentence",
    "BANK",
    "GenerationError",
    "GrammaticalTag",
    "LengthClass",
    "LexicalBank",
    "LexicalItem",
    "LexiconError",
    "SentenceGenerator",
    "ValidationResult",
    "VocabEntry",
    "explain_order",
    "grammar_hints",
    "resolve_pool",
    "select_for_slot",
    "tag_token",
    "validate",
]
