"""Pluggable target selection for new rounds."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from .daily import CountyShuffleQueue, DailyPuzzleSelector
from .modes import ModeConfig, TargetSelection


class TargetStrategy(Protocol):
    """Chooses the hidden county for the next round."""

    def next_target(self, today: date) -> tuple[str, int]:
        """Return ``(county_name, game_number)`` for a fresh round."""


class DailyTargets:
    def __init__(self, selector: DailyPuzzleSelector) -> None:
        self._selector = selector

    def next_target(self, today: date) -> tuple[str, int]:
        return self._selector.daily_county_name(today), self._selector.game_number(today)


class RandomTargets:
    def __init__(self, selector: DailyPuzzleSelector) -> None:
        self._selector = selector

    def next_target(self, today: date) -> tuple[str, int]:
        return self._selector.random_county_name(), 0


class PerRoundTargets:
    """Draws from a shuffle queue and numbers rounds 1, 2, 3, ..."""

    def __init__(self, queue: CountyShuffleQueue | None = None) -> None:
        self._queue = queue or CountyShuffleQueue()
        self._round = 0

    def next_target(self, today: date) -> tuple[str, int]:
        self._round += 1
        return self._queue.next(), self._round

    def reset(self) -> None:
        self._queue.reset()
        self._round = 0


def target_strategy_for(config: ModeConfig, selector: DailyPuzzleSelector) -> TargetStrategy:
    if config.target_selection is TargetSelection.DAILY:
        return DailyTargets(selector)
    if config.target_selection is TargetSelection.PER_ROUND:
        return PerRoundTargets()
    return RandomTargets(selector)
