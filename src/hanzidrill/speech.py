"""Best-effort text-to-speech."""

from __future__ import annotations

import shutil
import subprocess
from typing import List, Optional, Protocol, Sequence

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_TTS_COMMAND = ("espeak-ng", "-v", "cmn")


class Speaker(Protocol):
    def speak(self, text: str) -> None: ...


class NullSpeaker:
    """Speaker that records what it was asked to say and stays silent."""

    def __init__(self) -> None:
        self.spoken: List[str] = []

    def speak(self, text: str) -> None:
        self.spoken.append(text)


class CommandSpeaker:
    """Hands the text to an external TTS program without waiting for it."""

    def __init__(self, command: Sequence[str] = DEFAULT_TTS_COMMAND):
        self._command = list(command)

    def speak(self, text: str) -> None:
        subprocess.Popen(
            [*self._command, text],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )


def default_speaker() -> Speaker:
    if shutil.which(DEFAULT_TTS_COMMAND[0]):
        return CommandSpeaker()
    return NullSpeaker()


def speak_best_effort(speaker: Optional[Speaker], text: str) -> None:
    """Request playback of *text*; failures are logged and otherwise ignored."""
    if speaker is None or not text:
        return
    try:
        speaker.speak(text)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(f"Speech playback failed: {exc}")


__all__ = ["CommandSpeaker", "NullSpeaker", "Speaker", "default_speaker", "speak_best_effort"]
