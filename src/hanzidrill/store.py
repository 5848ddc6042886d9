"""Persistence of the learner's chosen vocabulary sets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from .config import SELECTION_KEY
from .logger import get_logger
from .vocabulary import DEFAULT_SET_ID

logger = get_logger(__name__)


class SelectionStore(Protocol):
    def get(self) -> List[str]: ...

    def set(self, selection: Iterable[str]) -> None: ...


def _normalise(selection: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(str(item) for item in selection))


class InMemorySelectionStore:
    """Selection store that lives for the duration of the process."""

    def __init__(self, initial: Optional[Iterable[str]] = None, *, default_set_id: str = DEFAULT_SET_ID):
        self._default = [default_set_id]
        self._selection: Optional[List[str]] = None if initial is None else _normalise(initial)

    def get(self) -> List[str]:
        if self._selection is None:
            return list(self._default)
        return list(self._selection)

    def set(self, selection: Iterable[str]) -> None:
        self._selection = _normalise(selection)


class JsonSelectionStore:
    """Selection store backed by a JSON object on disk, under a single fixed key."""

    def __init__(self, path: Path, *, key: str = SELECTION_KEY, default_set_id: str = DEFAULT_SET_ID):
        self._path = Path(path)
        self._key = key
        self._default = [default_set_id]

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> List[str]:
        document = self._read()
        value = document.get(self._key)
        if not isinstance(value, list):
            return list(self._default)
        return _normalise(item for item in value if isinstance(item, str))

    def set(self, selection: Iterable[str]) -> None:
        document = self._read()
        document[self._key] = _normalise(selection)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable selection file {self._path}")
            return {}
        return document if isinstance(document, dict) else {}


def toggle_selection(store: SelectionStore, set_id: str) -> List[str]:
    """Flip *set_id* in the store and persist the result immediately."""
    current = store.get()
    if set_id in current:
        current.remove(set_id)
    else:
        current.append(set_id)
    store.set(current)
    return current


__all__ = ["InMemorySelectionStore", "JsonSelectionStore", "SelectionStore", "toggle_selection"]
