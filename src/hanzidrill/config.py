"""Runtime configuration and default paths."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .vocabulary import DEFAULT_SET_ID

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_DIR = PACKAGE_DIR / "data"
DEFAULT_SELECTION_PATH = Path.home() / ".hanzidrill" / "selection.json"

# Key under which the chosen set ids are stored.
SELECTION_KEY = "cn-selected-sets-v1"

ENV_PREFIX = "HANZIDRILL_"


@dataclass
class StudyConfig:
    """Tunable settings; every field can be overridden from the environment."""

    # Directory holding one JSON file per vocabulary set
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    # Where the set picker persists the selection
    selection_path: Path = field(default_factory=lambda: DEFAULT_SELECTION_PATH)
    # Tier used when nothing (or nothing non-empty) is selected
    default_set_id: str = DEFAULT_SET_ID
    # Chance that a short sentence carries the 正在 aspect marker
    aspect_probability: float = 0.4
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        self.selection_path = Path(self.selection_path)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        if not 0.0 <= self.aspect_probability <= 1.0:
            raise ValueError("aspect_probability must be between 0 and 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StudyConfig":
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get(ENV_PREFIX + "DATA_DIR"):
            kwargs["data_dir"] = Path(env[ENV_PREFIX + "DATA_DIR"])
        if env.get(ENV_PREFIX + "SELECTION_PATH"):
            kwargs["selection_path"] = Path(env[ENV_PREFIX + "SELECTION_PATH"])
        if env.get(ENV_PREFIX + "DEFAULT_SET"):
            kwargs["default_set_id"] = env[ENV_PREFIX + "DEFAULT_SET"]
        if env.get(ENV_PREFIX + "ASPECT_PROBABILITY"):
            kwargs["aspect_probability"] = float(env[ENV_PREFIX + "ASPECT_PROBABILITY"])
        if env.get(ENV_PREFIX + "LOG_LEVEL"):
            kwargs["log_level"] = env[ENV_PREFIX + "LOG_LEVEL"].upper()
        if env.get(ENV_PREFIX + "LOG_FILE"):
            kwargs["log_file"] = Path(env[ENV_PREFIX + "LOG_FILE"])
        return cls(**kwargs)


__all__ = ["SELECTION_KEY", "StudyConfig"]
