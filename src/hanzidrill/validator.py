"""Checking tile-ordering answers and explaining what went wrong."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .lexicon import GrammaticalTag
from .tagger import tag_token
from .vocabulary import FRAMES

TAG_MESSAGES = {
    GrammaticalTag.TIME: "Time words usually come first (e.g., 今天/现在/明天早上).",
    GrammaticalTag.SUBJECT: "Subject follows time: [Time] [Subject] …",
    GrammaticalTag.PLACE: "Place phrase 在 + 地点 should be before the verb.",
    GrammaticalTag.VERB: "Verb typically follows [Time][Subject][Place].",
    GrammaticalTag.OBJECT: "Objects follow the verb (中文/报告/晚饭…).",
    GrammaticalTag.CONNECTOR: "Connectors (虽然/但是/如果/那么/先/然后) must stay in fixed spots.",
    GrammaticalTag.ASPECT: "Aspect marker 正在 appears before the verb.",
    GrammaticalTag.PUNCTUATION: "Keep punctuation in the original positions.",
}

FRAME_MESSAGES = {
    "concession": "Use the frame: 虽然 … ，但是 …",
    "conditional": "Use the frame: 如果 … ，那么 …",
    "sequence": "Use the frame: 先 … ，然后 …",
}

BASELINE_MESSAGE = "Baseline order: [Time] + [Subject] + [Place] + [Verb] + [Object]."

_FRAME_PATTERNS = {
    name: re.compile(re.escape(first) + ".*" + re.escape(second))
    for name, (first, second) in FRAMES.items()
}


def misplaced_token_message(token: str) -> str:
    return f"The token “{token}” is in the wrong position. Follow the original pattern precisely."


@dataclass(frozen=True)
class ValidationResult:
    matched: bool
    first_mismatch_index: Optional[int] = None
    explanations: List[str] = field(default_factory=list)


def first_mismatch(expected: Sequence[str], answer: Sequence[str]) -> Optional[int]:
    for index, (want, got) in enumerate(zip(expected, answer)):
        if want != got:
            return index
    return None


def explain_order(expected: Sequence[str], answer: Sequence[str]) -> List[str]:
    """Grammar explanations for the first place *answer* departs from *expected*."""
    index = first_mismatch(expected, answer)
    if index is None:
        return []

    reasons: List[str] = []
    token = answer[index]
    got_tag = tag_token(token)
    want_tag = tag_token(expected[index])
    if got_tag is not want_tag:
        message = TAG_MESSAGES.get(want_tag)
        if message:
            reasons.append(message)
    else:
        reasons.append(misplaced_token_message(token))

    joined = "".join(expected)
    for name, pattern in _FRAME_PATTERNS.items():
        if pattern.search(joined):
            reasons.append(FRAME_MESSAGES[name])

    tags = {tag_token(item) for item in expected}
    if GrammaticalTag.TIME in tags and GrammaticalTag.SUBJECT in tags:
        reasons.append(BASELINE_MESSAGE)

    if not reasons:
        reasons.append(misplaced_token_message(token))

    return list(dict.fromkeys(reasons))


def validate(expected: Sequence[str], answer: Sequence[str]) -> ValidationResult:
    """Compare a completed answer against the target token order."""
    if len(answer) != len(expected):
        raise ValueError(
            f"answer has {len(answer)} tokens but the target has {len(expected)}"
        )
    index = first_mismatch(expected, answer)
    if index is None:
        return ValidationResult(matched=True)
    return ValidationResult(
        matched=False,
        first_mismatch_index=index,
        explanations=explain_order(expected, answer),
    )


__all__ = ["ValidationResult", "explain_order", "first_mismatch", "validate"]
