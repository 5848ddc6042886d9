"""Resolve the learner's selected sets into a single vocabulary pool."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence

from .logger import get_logger
from .models import VocabEntry
from .vocabulary import DEFAULT_SET_ID

logger = get_logger(__name__)


def resolve_pool(
    selected: Iterable[str],
    all_sets: Mapping[str, Sequence[VocabEntry]],
    default_set_id: str = DEFAULT_SET_ID,
) -> List[VocabEntry]:
    """Concatenate the entries of every selected set.

    Unknown set ids are skipped. Entries shared by two selected sets appear
    twice. When nothing is collected the default tier is returned instead.
    """
    pool: List[VocabEntry] = []
    seen = set()
    for set_id in selected:
        if set_id in seen:
            continue
        seen.add(set_id)
        entries = all_sets.get(set_id)
        if entries is None:
            logger.debug(f"Skipping unknown vocabulary set {set_id!r}")
            continue
        pool.extend(entries)
    if not pool:
        pool = list(all_sets.get(default_set_id, ()))
    return pool


__all__ = ["resolve_pool"]
