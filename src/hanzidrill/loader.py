"""Loading vocabulary sets from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from pydantic import ValidationError

from .logger import get_logger
from .models import VocabEntry, VocabRecord
from .vocabulary import SET_FILES

logger = get_logger(__name__)

VocabularySets = Dict[str, Tuple[VocabEntry, ...]]


def adapt_records(records: Iterable[Any], *, source: str = "<records>") -> List[VocabEntry]:
    """Convert raw records into entries, dropping any without a spelling."""
    entries: List[VocabEntry] = []
    dropped = 0
    for record in records:
        if not isinstance(record, dict):
            dropped += 1
            continue
        try:
            entries.append(VocabRecord.model_validate(record).to_entry())
        except ValidationError:
            dropped += 1
    if dropped:
        logger.warning(f"Dropped {dropped} malformed record(s) from {source}")
    return entries


def load_set_file(path: Path) -> List[VocabEntry]:
    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        logger.warning(f"Expected a list of records in {path}, got {type(payload).__name__}")
        return []
    return adapt_records(payload, source=str(path))


def load_vocabulary_sets(data_dir: Path) -> VocabularySets:
    """Load every known set from *data_dir*; missing files load as empty sets."""
    data_dir = Path(data_dir)
    sets: VocabularySets = {}
    for set_id, filename in SET_FILES.items():
        path = data_dir / filename
        if not path.exists():
            logger.debug(f"No vocabulary file for {set_id} at {path}")
            sets[set_id] = ()
            continue
        try:
            sets[set_id] = tuple(load_set_file(path))
        except json.JSONDecodeError as exc:
            logger.warning(f"Could not parse {path}: {exc}")
            sets[set_id] = ()
    loaded = sum(1 for entries in sets.values() if entries)
    logger.debug(f"Loaded {loaded} non-empty vocabulary set(s) from {data_dir}")
    return sets


__all__ = ["VocabularySets", "adapt_records", "load_set_file", "load_vocabulary_sets"]
