"""Calendar-driven puzzle selection and day-boundary helpers."""

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from .counties import COUNTIES, COUNTY_NAMES
from .models import County

DEFAULT_EPOCH = date(2026, 1, 1)


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def today_string(now: date | datetime | None = None) -> str:
    """Local calendar date as ``YYYY-MM-DD``."""
    return _as_date(now or datetime.now()).isoformat()


def date_hash(text: str) -> int:
    """Stable 32-bit string hash (``h * 31 + ord(ch)`` with signed wrap-around)."""
    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


class DailyPuzzleSelector:
    """Maps calendar dates to puzzle numbers and target counties."""

    def __init__(
        self,
        *,
        epoch: date = DEFAULT_EPOCH,
        county_names: Sequence[str] = COUNTY_NAMES,
        rng: random.Random | None = None,
    ) -> None:
        if not county_names:
            raise ValueError("county_names must not be empty")
        self._epoch = epoch
        self._names = list(county_names)
        self._rng = rng or random.SystemRandom()

    @property
    def epoch(self) -> date:
        return self._epoch

    def game_number(self, when: date | datetime | str) -> int:
        return (_as_date(when) - self._epoch).days + 1

    def daily_county_name(self, when: date | datetime | str) -> str:
        key = _as_date(when).isoformat()
        return self._names[abs(date_hash(key)) % len(self._names)]

    def daily_county(self, when: date | datetime | str) -> County:
        return COUNTIES[self.daily_county_name(when)]

    def random_county_name(self) -> str:
        return self._rng.choice(self._names)

    def random_county(self) -> County:
        return COUNTIES[self.random_county_name()]


class CountyShuffleQueue:
    """Yields every county once in random order, then reshuffles."""

    def __init__(self, county_names: Sequence[str] = COUNTY_NAMES, rng: random.Random | None = None) -> None:
        self._names = list(county_names)
        self._rng = rng or random.Random()
        self._pending: list[str] = []
        self._last: str | None = None

    def next(self) -> str:
        if not self._pending:
            self._pending = list(self._names)
            self._rng.shuffle(self._pending)
            # no immediate repeat across a reshuffle boundary
            if len(self._pending) > 1 and self._pending[-1] == self._last:
                self._pending[0], self._pending[-1] = self._pending[-1], self._pending[0]
        self._last = self._pending.pop()
        return self._last

    def remaining(self) -> int:
        return len(self._pending)

    def reset(self) -> None:
        self._pending = []
        self._last = None


def time_until_next_day(now: datetime | None = None) -> timedelta:
    current = now or datetime.now()
    tomorrow = datetime.combine(current.date() + timedelta(days=1), datetime.min.time(), tzinfo=current.tzinfo)
    return tomorrow - current


def format_time_remaining(remaining: timedelta | float) -> str:
    """Render a countdown as ``HH:MM:SS``."""
    seconds = remaining.total_seconds() if isinstance(remaining, timedelta) else remaining
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
