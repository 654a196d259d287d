"""Aggregate win/loss statistics updated when a round ends."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, replace

from .daily import today_string
from .models import Statistics, StreakStatistics, TimeTrialStatistics
from .persistence import Persistence
from .store import Store, thaw

logger = logging.getLogger("locle.statistics")

DISTRIBUTION_SIZE = 6


def _valid_guess_count(guess_count: object) -> bool:
    return isinstance(guess_count, int) and not isinstance(guess_count, bool) and 1 <= guess_count <= DISTRIBUTION_SIZE


def apply_result(stats: Statistics, won: bool, guess_count: int | None, today: str) -> Statistics:
    """Return a new :class:`Statistics` with one finished game folded in."""
    updated = replace(stats, distribution=list(stats.distribution))
    updated.games_played += 1

    if won:
        updated.games_won += 1
        updated.current_streak += 1
        updated.best_streak = max(updated.best_streak, updated.current_streak)
        if _valid_guess_count(guess_count):
            updated.distribution[guess_count - 1] += 1
    else:
        updated.current_streak = 0

    updated.last_played_date = today
    return updated


def win_percentage(stats: Statistics) -> int:
    if stats.games_played <= 0:
        return 0
    return round(stats.games_won / stats.games_played * 100)


class StatisticsTracker:
    """Owns the statistics slices of the store; never touches a session."""

    def __init__(
        self,
        store: Store,
        persistence: Persistence,
        *,
        today: Callable[[], str] = today_string,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._today = today

    def load(self) -> None:
        """Pull all persisted statistics into the store."""
        self._store.set_state(
            {
                "statistics": asdict(self._persistence.load_statistics()),
                "streak_statistics": asdict(self._persistence.load_streak_statistics()),
                "time_trial_statistics": asdict(self._persistence.load_time_trial_statistics()),
            },
            "load_statistics",
        )

    @property
    def statistics(self) -> Statistics:
        return Statistics(**thaw(self._store.get_state().get("statistics", {})))

    @property
    def streak_statistics(self) -> StreakStatistics:
        return StreakStatistics(**thaw(self._store.get_state().get("streak_statistics", {})))

    @property
    def time_trial_statistics(self) -> TimeTrialStatistics:
        return TimeTrialStatistics(**thaw(self._store.get_state().get("time_trial_statistics", {})))

    def record_result(self, won: bool, guess_count: int | None = None) -> Statistics:
        updated = apply_result(self.statistics, won, guess_count, self._today())
        self._store.set_state({"statistics": asdict(updated)}, "record_result")
        self._persistence.save_statistics(updated)
        logger.info(
            "statistics_recorded",
            extra={"won": won, "guess_count": guess_count, "games_played": updated.games_played},
        )
        return updated

    def record_streak(self, final_streak: int) -> StreakStatistics:
        stats = self.streak_statistics
        games_played = stats.games_played + 1
        updated = StreakStatistics(
            games_played=games_played,
            best_streak=max(stats.best_streak, final_streak),
            average_streak=(stats.average_streak * stats.games_played + final_streak) / games_played,
            total_correct=stats.total_correct + final_streak,
        )
        self._store.set_state({"streak_statistics": asdict(updated)}, "record_streak")
        self._persistence.save_streak_statistics(updated)
        return updated

    def record_time_trial(
        self,
        won: bool,
        *,
        elapsed_seconds: float,
        guess_count: int,
        timed_out: bool = False,
    ) -> TimeTrialStatistics:
        stats = self.time_trial_statistics
        updated = replace(stats, distribution=list(stats.distribution))
        updated.games_played += 1

        if won:
            wins = stats.games_won + 1
            updated.games_won = wins
            updated.average_time = (stats.average_time * stats.games_won + elapsed_seconds) / wins
            updated.average_guesses = (stats.average_guesses * stats.games_won + guess_count) / wins
            if stats.best_time is None or elapsed_seconds < stats.best_time:
                updated.best_time = elapsed_seconds
            if _valid_guess_count(guess_count):
                updated.distribution[guess_count - 1] += 1
        elif timed_out:
            updated.timeout_count += 1

        self._store.set_state({"time_trial_statistics": asdict(updated)}, "record_time_trial")
        self._persistence.save_time_trial_statistics(updated)
        return updated
