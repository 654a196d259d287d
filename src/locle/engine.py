"""Round orchestration: wires sessions, statistics, persistence and the store together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime
from typing import Any

from .daily import DailyPuzzleSelector
from .models import Difficulty, GameSettings, GameStatus, Guess, RejectReason, Theme
from .modes import DEFAULT_TIME_LIMITS, GameMode, InputKind, mode_config, parse_difficulty, parse_mode
from .persistence import Persistence
from .proximity import MAX_DISTANCE_KM
from .session import DailyStateRecorder, Session, start_session
from .share import share_text
from .statistics import StatisticsTracker
from .store import Store
from .targets import TargetStrategy, target_strategy_for
from .telemetry.hooks import GameObserver, NullObserver

logger = logging.getLogger("locle.engine")


def _local_now() -> datetime:
    return datetime.now().astimezone()


def initial_state() -> dict[str, Any]:
    """Complete store shape before anything is loaded."""
    return {
        "game": {
            "mode": GameMode.DAILY.value,
            "target_county": None,
            "guesses": [],
            "status": GameStatus.PLAYING.value,
            "game_number": 0,
            "started_at": None,
            "max_guesses": 6,
            "time_limit": None,
        },
        "statistics": {},
        "streak_statistics": {},
        "time_trial_statistics": {},
        "settings": asdict(GameSettings()),
        "locate": {"rounds_played": 0, "rounds_won": 0},
        "streak": {"count": 0, "active": False},
    }


class GameEngine:
    """Runs rounds for every mode on top of one :class:`Session` type.

    The engine owns round replacement (new game, daily restore, auto-advance), writes
    each state change into the store, folds finished rounds into statistics and
    forwards lifecycle events to the observer.
    """

    def __init__(
        self,
        store: Store,
        persistence: Persistence,
        *,
        selector: DailyPuzzleSelector | None = None,
        statistics: StatisticsTracker | None = None,
        observer: GameObserver | None = None,
        clock: Callable[[], datetime] = _local_now,
        time_limits: dict[Difficulty, float] | None = None,
        max_distance_km: float = MAX_DISTANCE_KM,
        share_url: str = "https://locle.app",
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._selector = selector or DailyPuzzleSelector()
        self._clock = clock
        self._statistics = statistics or StatisticsTracker(
            store, persistence, today=lambda: self._clock().date().isoformat()
        )
        self._observer = observer or NullObserver()
        self._time_limits = dict(time_limits or DEFAULT_TIME_LIMITS)
        self._max_distance = max_distance_km
        self._share_url = share_url
        self._targets: dict[GameMode, TargetStrategy] = {}
        self._session: Session | None = None
        self.previous_session: Session | None = None

    @property
    def store(self) -> Store:
        return self._store

    @property
    def statistics(self) -> StatisticsTracker:
        return self._statistics

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def settings(self) -> GameSettings:
        raw = self._store.get_state().get("settings", {})
        return GameSettings(
            difficulty=Difficulty(raw.get("difficulty", Difficulty.MEDIUM.value)),
            theme=Theme(raw.get("theme", Theme.LIGHT.value)),
        )

    @property
    def streak_count(self) -> int:
        return int(self._store.get_state().get("streak", {}).get("count", 0))

    @property
    def locate_score(self) -> tuple[int, int]:
        locate = self._store.get_state().get("locate", {})
        return int(locate.get("rounds_won", 0)), int(locate.get("rounds_played", 0))

    def load(self) -> None:
        """Read preferences and statistics from persistence into the store."""
        loaded = self._persistence.load_settings()
        theme = self._persistence.load_theme()
        self._store.set_state(
            {"settings": {"difficulty": loaded.difficulty.value, "theme": theme.value}},
            "load_settings",
        )
        self._statistics.load()

    def start(self, mode: GameMode | str = GameMode.DAILY) -> Session:
        """Begin a fresh run of ``mode`` (restoring today's daily progress if saved)."""
        game_mode = parse_mode(mode)
        config = mode_config(game_mode)
        now = self._clock()

        strategy = target_strategy_for(config, self._selector)
        self._targets[game_mode] = strategy

        restored = self._persistence.load_daily_state() if game_mode is GameMode.DAILY else None
        recorder = None
        if config.persist_on_guess:
            recorder = DailyStateRecorder(self._persistence, now.date().isoformat())

        session = start_session(
            config,
            self.settings.difficulty,
            targets=strategy,
            today=now.date(),
            restored=restored,
            recorder=recorder,
            started_at=now,
            time_limits=self._time_limits,
            max_distance_km=self._max_distance,
        )

        resets: dict[str, Any] = {}
        if game_mode is GameMode.STREAK:
            resets["streak"] = {"count": 0, "active": True}
        if game_mode is GameMode.LOCATE:
            resets["locate"] = {"rounds_played": 0, "rounds_won": 0}
        if resets:
            self._store.set_state(resets, f"reset_{game_mode.value}")

        self.previous_session = None
        self._install(session, "start_game")
        return session

    def submit_guess(self, name: str, *, now: datetime | None = None) -> Guess | None:
        session = self._require_session()
        guess = session.submit_guess(name, now=now or self._clock())
        if guess is None:
            return self._rejected(session, name, now)

        self._commit(session, "submit_guess")
        self._observer.guess_accepted(session, guess)
        if not session.is_playing:
            self._finish(session, now)
        return guess

    def click_county(self, name: str, *, now: datetime | None = None) -> Guess | None:
        """Map-click input; only modes driven by the map accept it."""
        session = self._require_session()
        if session.config.input_kind is not InputKind.MAP_CLICK:
            session.last_rejection = RejectReason.WRONG_MODE
            return self._rejected(session, name, now)
        return self.submit_guess(name, now=now)

    def check_timeout(self, *, now: datetime | None = None) -> bool:
        """Evaluate the time budget without a guess; used by front ends that poll."""
        session = self._require_session()
        if not session.check_timeout(now or self._clock()):
            return False
        self._commit(session, "timeout")
        self._finish(session, now)
        return True

    def set_difficulty(self, difficulty: Difficulty | str) -> GameSettings:
        """Change difficulty; it applies from the next round."""
        value = parse_difficulty(difficulty)
        self._store.set_state({"settings": {"difficulty": value.value}}, "set_difficulty")
        self._persistence.save_settings(self.settings)
        return self.settings

    def set_theme(self, theme: Theme | str) -> GameSettings:
        value = Theme(theme)
        self._store.set_state({"settings": {"theme": value.value}}, "set_theme")
        self._persistence.save_theme(value)
        self._persistence.save_settings(self.settings)
        return self.settings

    def toggle_theme(self) -> GameSettings:
        current = self.settings.theme
        return self.set_theme(Theme.DARK if current is Theme.LIGHT else Theme.LIGHT)

    def share_text(self) -> str:
        session = self.previous_session if self._session is None else self._session
        if session is None:
            raise RuntimeError("No round has been played yet")
        return share_text(session, self.settings.difficulty, url=self._share_url)

    def _require_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("No active round; call start() first")
        return self._session

    def _rejected(self, session: Session, name: str, now: datetime | None = None) -> None:
        reason = session.last_rejection or RejectReason.NOT_PLAYING
        self._observer.guess_rejected(session, name, reason)
        if reason is RejectReason.TIME_EXPIRED:
            self._commit(session, "timeout")
            self._finish(session, now)
        return None

    def _install(self, session: Session, action: str) -> None:
        self._session = session
        self._commit(session, action)
        logger.info(
            "round_started",
            extra={"mode": session.mode.value, "game_number": session.game_number, "status": session.status.value},
        )
        self._observer.round_started(session)

    def _commit(self, session: Session, action: str) -> None:
        self._store.set_state({"game": session.to_state()}, action)

    def _finish(self, session: Session, now: datetime | None) -> None:
        config = session.config
        won = session.status is GameStatus.WON
        guess_count = len(session.guesses)

        if config.record_statistics:
            self._statistics.record_result(won, guess_count if won else None)

        if config.mode is GameMode.TIME_TRIAL:
            self._statistics.record_time_trial(
                won,
                elapsed_seconds=session.elapsed_seconds(now or self._clock()),
                guess_count=guess_count,
                timed_out=not won and guess_count < session.max_guesses,
            )

        if config.mode is GameMode.LOCATE:
            rounds_won, rounds_played = self.locate_score
            self._store.set_state(
                {"locate": {"rounds_played": rounds_played + 1, "rounds_won": rounds_won + int(won)}},
                "locate_round_scored",
            )

        if config.mode is GameMode.STREAK:
            if won:
                self._store.set_state({"streak": {"count": self.streak_count + 1}}, "streak_correct")
            else:
                self._store.set_state({"streak": {"active": False}}, "end_streak")
                self._statistics.record_streak(self.streak_count)

        logger.info(
            "round_finished",
            extra={"mode": config.mode.value, "status": session.status.value, "guess_count": guess_count},
        )
        self._observer.round_finished(session)

        if (won and config.auto_advance_on_win) or (not won and config.auto_advance_on_loss):
            self._advance(session)

    def _advance(self, finished: Session) -> None:
        strategy = self._targets.get(finished.mode)
        if strategy is None:
            strategy = target_strategy_for(finished.config, self._selector)
            self._targets[finished.mode] = strategy
        now = self._clock()
        session = start_session(
            finished.config,
            self.settings.difficulty,
            targets=strategy,
            today=now.date(),
            started_at=now,
            time_limits=self._time_limits,
            max_distance_km=self._max_distance,
        )
        self.previous_session = finished
        self._install(session, "advance_round")
