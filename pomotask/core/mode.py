from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pomotask.core.errors import InvalidStateError


class Phase(str, Enum):
    FOCUS = "focus"
    REST = "rest"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def other(self) -> Phase:
        return Phase.REST if self is Phase.FOCUS else Phase.FOCUS


@dataclass(frozen=True)
class Transitioning:
    """Alarm hand-off that resolves to ``next`` on the following tick."""

    next: Phase

    def __post_init__(self) -> None:
        if not isinstance(self.next, Phase):
            raise InvalidStateError(f"Transitioning must wrap a steady phase, got {self.next!r}")

    @property
    def label(self) -> str:
        return f"Transitioning({self.next.label})"


Mode = Union[Phase, Transitioning]


def steady_phase(mode: Mode) -> Phase:
    """Phase whose period is shown for ``mode``."""
    if isinstance(mode, Transitioning):
        return mode.next
    return mode
