"""Fixed bank of tile-ordering exercises."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TargetItem:
    tokens: Tuple[str, ...]
    english_prompt: str
    notes: Tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(self.tokens)


EXERCISE_BANK: Tuple[TargetItem, ...] = (
    TargetItem(
        tokens=("今天", "我", "在公司", "开会", "。"),
        english_prompt="Today I have a meeting at the company.",
        notes=(
            "Basic order: [Time] [Subject] [Place] [Verb] [Object].",
            "在 + place before the verb.",
        ),
    ),
    TargetItem(
        tokens=("现在", "他们", "在北京", "学习", "中文", "。"),
        english_prompt="They are studying Chinese in Beijing now.",
        notes=(
            "Time words usually go first.",
            "Place phrase 在北京 goes before the verb.",
        ),
    ),
    TargetItem(
        tokens=("虽然", "天气不好", "，", "但是", "我们", "还是", "去", "超市", "。"),
        english_prompt="Although the weather isn't good, we still go to the supermarket.",
        notes=(
            "虽然…但是…: concession.",
            "还是 indicates “still / nevertheless”.",
        ),
    ),
    TargetItem(
        tokens=("如果", "明天早上", "你", "有时间", "，", "那么", "我们", "在机场", "见面", "。"),
        english_prompt="If you have time tomorrow morning, then we will meet at the airport.",
        notes=("如果…那么…: conditional.",),
    ),
    TargetItem(
        tokens=("他", "先", "写", "报告", "，", "然后", "去", "开会", "。"),
        english_prompt="He first writes the report, and then goes to the meeting.",
        notes=(
            "先…然后…: first…then…",
            "写报告 / 去开会 are verb-object chunks.",
        ),
    ),
    TargetItem(
        tokens=("我", "正在", "酒店", "吃", "晚饭", "。"),
        english_prompt="I am eating dinner at the hotel.",
        notes=(
            "正在 + verb: progressive.",
            "Place phrase before the verb.",
        ),
    ),
)


def pick_exercise(rng: Optional[random.Random] = None) -> TargetItem:
    return (rng or random).choice(EXERCISE_BANK)


__all__ = ["EXERCISE_BANK", "TargetItem", "pick_exercise"]
