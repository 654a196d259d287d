from __future__ import annotations

import random
from datetime import date, datetime, timedelta, timezone

import pytest

from locle.adjacency import is_adjacent
from locle.counties import COUNTY_NAMES
from locle.daily import DailyPuzzleSelector
from locle.engine import GameEngine, initial_state
from locle.models import Difficulty, GameStatus, RejectReason, Theme
from locle.persistence import GamePersistence, InMemoryBackend
from locle.store import Store


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 10, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def round_started(self, session) -> None:
        self.events.append(("started", session.mode.value))

    def guess_accepted(self, session, guess) -> None:
        self.events.append(("accepted", guess.county))

    def guess_rejected(self, session, raw_guess, reason) -> None:
        self.events.append(("rejected", reason))

    def round_finished(self, session) -> None:
        self.events.append(("finished", session.status))


class BrokenBackend:
    def get(self, key: str) -> str | None:
        raise OSError("storage unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("storage unavailable")

    def delete(self, key: str) -> None:
        raise OSError("storage unavailable")


def _engine(backend=None, observer=None, clock=None) -> GameEngine:
    engine = GameEngine(
        Store(initial_state()),
        GamePersistence(backend if backend is not None else InMemoryBackend()),
        selector=DailyPuzzleSelector(rng=random.Random(11)),
        observer=observer,
        clock=clock or FakeClock(),
    )
    engine.load()
    return engine


def _wrong(target: str, count: int = 1) -> list[str]:
    """Distinct counties that neither match nor border the target."""
    return [name for name in COUNTY_NAMES if name != target and not is_adjacent(name, target)][:count]


def test_daily_round_uses_calendar_game_number() -> None:
    engine = _engine()

    session = engine.start("daily")

    assert session.game_number == 10
    assert session.target == DailyPuzzleSelector().daily_county_name(date(2026, 1, 10))
    assert engine.store.get_state()["game"]["game_number"] == 10


def test_daily_win_records_statistics_and_saves_progress() -> None:
    backend = InMemoryBackend()
    engine = _engine(backend)
    target = engine.start("daily").target

    engine.submit_guess(_wrong(target)[0])
    engine.submit_guess(target)

    stats = engine.statistics.statistics
    assert stats.games_played == 1
    assert stats.games_won == 1
    assert stats.distribution == [0, 1, 0, 0, 0, 0]
    assert stats.last_played_date == "2026-01-10"
    assert engine.store.get_state()["game"]["status"] == "won"

    saved = GamePersistence(backend).load_daily_state()
    assert saved is not None
    assert saved.date == "2026-01-10"
    assert saved.status is GameStatus.WON
    assert len(saved.guesses) == 2


def test_daily_restart_restores_finished_round() -> None:
    backend = InMemoryBackend()
    first = _engine(backend)
    target = first.start("daily").target
    first.submit_guess(target)

    second = _engine(backend)
    session = second.start("daily")

    assert session.status is GameStatus.WON
    assert [guess.county for guess in session.guesses] == [target]
    assert second.statistics.statistics.games_won == 1
    assert second.submit_guess(target) is None
    assert session.last_rejection is RejectReason.NOT_PLAYING


def test_daily_progress_from_yesterday_is_ignored() -> None:
    backend = InMemoryBackend()
    clock = FakeClock()
    engine = _engine(backend, clock=clock)
    target = engine.start("daily").target
    engine.submit_guess(_wrong(target)[0])

    clock.advance(24 * 3600)
    session = _engine(backend, clock=clock).start("daily")

    assert session.game_number == 11
    assert session.guesses == ()
    assert session.is_playing


def test_daily_loss_resets_streak() -> None:
    engine = _engine()
    target = engine.start("daily").target

    for name in _wrong(target, 6):
        engine.submit_guess(name)

    stats = engine.statistics.statistics
    assert engine.session.status is GameStatus.LOST
    assert stats.games_played == 1
    assert stats.games_won == 0
    assert stats.current_streak == 0
    assert stats.distribution == [0] * 6


def test_practice_rounds_do_not_touch_statistics() -> None:
    engine = _engine()
    target = engine.start("practice").target

    engine.submit_guess(target)

    assert engine.session.status is GameStatus.WON
    assert engine.session.game_number == 0
    assert engine.statistics.statistics.games_played == 0


def test_locate_auto_advances_and_keeps_score() -> None:
    engine = _engine()
    first = engine.start("locate")

    engine.click_county(first.target)

    assert engine.previous_session is first
    assert engine.session is not first
    assert engine.session.is_playing
    assert engine.locate_score == (1, 1)

    second = engine.session
    for name in _wrong(second.target, second.max_guesses):
        engine.click_county(name)

    assert engine.previous_session is second
    assert second.status is GameStatus.LOST
    assert engine.locate_score == (1, 2)
    assert engine.statistics.statistics.games_played == 0


def test_streak_counts_until_first_miss() -> None:
    engine = _engine()
    first = engine.start("streak")
    assert first.max_guesses == 1
    assert first.game_number == 1

    engine.click_county(first.target)
    second = engine.session
    assert engine.streak_count == 1
    assert second.game_number == 2
    assert second.target != first.target

    engine.click_county(_wrong(second.target)[0])

    assert engine.session is second
    assert second.status is GameStatus.LOST
    assert engine.store.get_state()["streak"] == {"count": 1, "active": False}
    streak_stats = engine.statistics.streak_statistics
    assert streak_stats.games_played == 1
    assert streak_stats.best_streak == 1


def test_restarting_streak_resets_counter() -> None:
    engine = _engine()
    first = engine.start("streak")
    engine.click_county(first.target)

    engine.start("streak")

    assert engine.streak_count == 0
    assert engine.session.game_number == 1


def test_time_trial_guess_after_budget_times_out() -> None:
    clock = FakeClock()
    observer = RecordingObserver()
    engine = _engine(observer=observer, clock=clock)
    session = engine.start("timetrial")
    assert session.time_limit_seconds == 60

    clock.advance(61)
    assert engine.submit_guess(session.target) is None

    assert session.last_rejection is RejectReason.TIME_EXPIRED
    assert session.status is GameStatus.LOST
    assert observer.events[-2:] == [("rejected", RejectReason.TIME_EXPIRED), ("finished", GameStatus.LOST)]
    stats = engine.statistics.time_trial_statistics
    assert stats.games_played == 1
    assert stats.timeout_count == 1
    assert engine.store.get_state()["game"]["status"] == "lost"


def test_time_trial_win_records_elapsed_time() -> None:
    clock = FakeClock()
    engine = _engine(clock=clock)
    engine.set_difficulty("easy")
    session = engine.start("timetrial")
    assert session.time_limit_seconds == 90

    clock.advance(12.5)
    engine.submit_guess(session.target)

    stats = engine.statistics.time_trial_statistics
    assert stats.games_won == 1
    assert stats.best_time == pytest.approx(12.5)
    assert stats.distribution == [1, 0, 0, 0, 0, 0]


def test_polling_timeout_finishes_round() -> None:
    clock = FakeClock()
    engine = _engine(clock=clock)
    engine.start("timetrial")

    assert engine.check_timeout() is False
    clock.advance(60)

    assert engine.check_timeout() is True
    assert engine.session.status is GameStatus.LOST
    assert engine.statistics.time_trial_statistics.timeout_count == 1


def test_map_click_rejected_in_text_modes() -> None:
    observer = RecordingObserver()
    engine = _engine(observer=observer)
    session = engine.start("daily")

    assert engine.click_county(session.target) is None

    assert session.last_rejection is RejectReason.WRONG_MODE
    assert session.guesses == ()
    assert observer.events[-1] == ("rejected", RejectReason.WRONG_MODE)


def test_unknown_mode_and_difficulty_raise() -> None:
    engine = _engine()

    with pytest.raises(ValueError):
        engine.start("arcade")
    with pytest.raises(ValueError):
        engine.set_difficulty("impossible")


def test_submit_without_round_raises() -> None:
    with pytest.raises(RuntimeError):
        _engine().submit_guess("Cork")


def test_observer_sees_lifecycle_in_order() -> None:
    observer = RecordingObserver()
    engine = _engine(observer=observer)
    target = engine.start("daily").target
    wrong = _wrong(target)[0]

    engine.submit_guess(wrong)
    engine.submit_guess("Atlantis")
    engine.submit_guess(target)

    assert observer.events == [
        ("started", "daily"),
        ("accepted", wrong),
        ("rejected", RejectReason.UNKNOWN_COUNTY),
        ("accepted", target),
        ("finished", GameStatus.WON),
    ]


def test_persistence_failure_does_not_abort_guess() -> None:
    engine = _engine(BrokenBackend())
    target = engine.start("daily").target

    guess = engine.submit_guess(target)

    assert guess is not None
    assert engine.session.status is GameStatus.WON
    assert engine.statistics.statistics.games_won == 1


def test_difficulty_applies_from_next_round() -> None:
    backend = InMemoryBackend()
    engine = _engine(backend)
    current = engine.start("practice")

    engine.set_difficulty(Difficulty.HARD)

    assert current.max_guesses == 6
    assert engine.start("practice").max_guesses == 4
    assert _engine(backend).settings.difficulty is Difficulty.HARD


def test_theme_toggle_persists() -> None:
    backend = InMemoryBackend()
    engine = _engine(backend)

    assert engine.toggle_theme().theme is Theme.DARK
    assert _engine(backend).settings.theme is Theme.DARK
    assert engine.toggle_theme().theme is Theme.LIGHT


def test_share_text_for_daily_round() -> None:
    engine = _engine()
    target = engine.start("daily").target
    engine.submit_guess(target)

    assert engine.share_text() == "Locle #10 1/6 (Medium)\n🎯\nhttps://locle.app"
