from __future__ import annotations

from datetime import timedelta


ONE_SECOND = timedelta(seconds=1)
ZERO = timedelta(0)


def format_clock(duration: timedelta) -> str:
    total = max(0, int(duration.total_seconds()))
    return f"{total // 60:02d}:{total % 60:02d}"


class Period:
    """Countdown for one phase that keeps counting as overrun once exhausted."""

    def __init__(self, configured: timedelta) -> None:
        if configured < ZERO:
            raise ValueError("Period duration cannot be negative")
        self._configured = configured
        self.remaining = configured
        self.overrun = ZERO

    @property
    def configured(self) -> timedelta:
        return self._configured

    @property
    def is_exhausted(self) -> bool:
        return self.remaining == ZERO

    def tick(self) -> None:
        if self.remaining > ZERO:
            self.remaining = max(ZERO, self.remaining - ONE_SECOND)
            return
        self.overrun += ONE_SECOND

    def reset(self) -> None:
        self.remaining = self._configured
        self.overrun = ZERO

    def transfer_overrun_to(self, other: Period) -> None:
        # other.remaining may exceed its configured length afterwards
        configured_sec = self._configured.total_seconds()
        fraction = self.overrun.total_seconds() / configured_sec if configured_sec > 0 else 0.0
        other.reset()
        other.remaining = timedelta(seconds=round(other.configured.total_seconds() * (1 + fraction)))

    def current(self) -> timedelta:
        return self.overrun if self.is_exhausted and self.overrun > ZERO else self.remaining

    def format(self) -> str:
        text = format_clock(self.remaining)
        if self.is_exhausted:
            text += f" (+{format_clock(self.overrun)})"
        return text

    def __repr__(self) -> str:
        return f"Period(configured={self._configured!r}, remaining={self.remaining!r}, overrun={self.overrun!r})"
