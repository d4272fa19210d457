from __future__ import annotations

from typing import Protocol


class Alarm(Protocol):
    def play_alarm(self) -> None:
        """Signal a finished period. Must return without waiting for playback."""


class NullAlarm:
    """Silent alarm for headless runs and tests."""

    def play_alarm(self) -> None:
        return None
