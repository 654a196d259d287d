"""Per-round guess state machine shared by every play mode."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import Any, Protocol

from . import geo
from .adjacency import GRAPH, AdjacencyGraph
from .counties import COUNTIES, canonical_name
from .models import Band, Bearing, DailyState, Difficulty, GameStatus, Guess, RejectReason
from .modes import GameMode, ModeConfig, TargetSelection, max_guesses_for, time_limit_for
from .persistence import Persistence
from .proximity import MAX_DISTANCE_KM, classify
from .targets import TargetStrategy

logger = logging.getLogger("locle.session")


class RoundRecorder(Protocol):
    """Receives a snapshot request after every accepted guess and terminal transition."""

    def record(self, session: Session) -> None:
        """Persist whatever the mode needs to resume the round later."""


class NullRecorder:
    def record(self, session: Session) -> None:
        return None


class DailyStateRecorder:
    """Saves today's progress through the persistence collaborator."""

    def __init__(self, persistence: Persistence, today: str) -> None:
        self._persistence = persistence
        self._today = today

    def record(self, session: Session) -> None:
        self._persistence.save_daily_state(
            DailyState(date=self._today, guesses=list(session.guesses), status=session.status)
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session:
    """One round: a hidden target, the ordered guesses against it, and a status.

    ``playing`` moves to ``won`` on an exact hit or to ``lost`` when the guess budget
    (or, for timed modes, the time budget) runs out. Terminal states are final; a new
    round means a new ``Session``.
    """

    def __init__(
        self,
        *,
        config: ModeConfig,
        target: str,
        max_guesses: int,
        time_limit_seconds: float | None = None,
        game_number: int = 0,
        started_at: datetime | None = None,
        guesses: list[Guess] | None = None,
        status: GameStatus = GameStatus.PLAYING,
        recorder: RoundRecorder | None = None,
        graph: AdjacencyGraph = GRAPH,
        max_distance_km: float = MAX_DISTANCE_KM,
    ) -> None:
        canonical = canonical_name(target)
        if canonical is None:
            raise ValueError(f"Unknown target county: {target!r}")
        if max_guesses < 1:
            raise ValueError("max_guesses must be at least 1")

        self._config = config
        self._target = canonical
        self._max_guesses = max_guesses
        self._time_limit = time_limit_seconds
        self._game_number = game_number
        self._started_at = started_at or _utcnow()
        self._guesses: list[Guess] = list(guesses or [])
        self._status = GameStatus(status)
        self._recorder = recorder or NullRecorder()
        self._graph = graph
        self._max_distance = max_distance_km
        self.last_rejection: RejectReason | None = None

    @property
    def config(self) -> ModeConfig:
        return self._config

    @property
    def mode(self) -> GameMode:
        return self._config.mode

    @property
    def target(self) -> str:
        return self._target

    @property
    def guesses(self) -> tuple[Guess, ...]:
        return tuple(self._guesses)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def game_number(self) -> int:
        return self._game_number

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def max_guesses(self) -> int:
        return self._max_guesses

    @property
    def time_limit_seconds(self) -> float | None:
        return self._time_limit

    @property
    def is_playing(self) -> bool:
        return self._status is GameStatus.PLAYING

    @property
    def remaining_guesses(self) -> int:
        return max(0, self._max_guesses - len(self._guesses))

    @property
    def last_guess(self) -> Guess | None:
        return self._guesses[-1] if self._guesses else None

    @property
    def closest_guess(self) -> Guess | None:
        """Best guess so far: the target itself, then a bordering county, then the shortest distance."""
        if not self._guesses:
            return None
        return min(
            self._guesses,
            key=lambda guess: (guess.band is not Band.CORRECT, not guess.is_adjacent, guess.distance_km),
        )

    def has_guessed(self, name: str) -> bool:
        canonical = canonical_name(name)
        return canonical is not None and any(guess.county == canonical for guess in self._guesses)

    def elapsed_seconds(self, now: datetime | None = None) -> float:
        return ((now or _utcnow()) - self._started_at).total_seconds()

    def time_remaining(self, now: datetime | None = None) -> float | None:
        if self._time_limit is None:
            return None
        return max(0.0, self._time_limit - self.elapsed_seconds(now))

    def check_timeout(self, now: datetime | None = None) -> bool:
        """Lose the round if its time budget is spent. Returns True when that happened now."""
        if not self.is_playing or self._time_limit is None:
            return False
        if self.elapsed_seconds(now) < self._time_limit:
            return False
        self._status = GameStatus.LOST
        logger.info("round_timed_out", extra={"mode": self.mode.value, "target": self._target})
        self._record()
        return True

    def score(self, name: str) -> Guess:
        """Score a known county against the target without touching round state."""
        canonical = canonical_name(name)
        if canonical is None:
            raise ValueError(f"Unknown county: {name!r}")

        guessed = COUNTIES[canonical]
        target = COUNTIES[self._target]

        # Priority: exact hit, then shared border, then plain distance banding.
        if canonical == self._target:
            return Guess(
                county=canonical,
                distance_km=0,
                bearing=Bearing.TARGET,
                band=Band.CORRECT,
                is_adjacent=False,
                province=guessed.province,
            )
        if self._graph.is_adjacent(canonical, self._target):
            return Guess(
                county=canonical,
                distance_km=0,
                bearing=geo.bearing(guessed, target),
                band=Band.HOT,
                is_adjacent=True,
                province=guessed.province,
            )

        distance_km = round(geo.distance(guessed, target))
        return Guess(
            county=canonical,
            distance_km=distance_km,
            bearing=geo.bearing(guessed, target),
            band=classify(distance_km, self._max_distance),
            is_adjacent=False,
            province=guessed.province,
        )

    def submit_guess(self, name: str, *, now: datetime | None = None) -> Guess | None:
        """Score and append a guess, or return ``None`` (see ``last_rejection``) if it is ignored."""
        self.last_rejection = None

        if self.check_timeout(now):
            return self._reject(RejectReason.TIME_EXPIRED, name)
        if not self.is_playing:
            return self._reject(RejectReason.NOT_PLAYING, name)

        canonical = canonical_name(name)
        if canonical is None:
            return self._reject(RejectReason.UNKNOWN_COUNTY, name)
        if self.has_guessed(canonical):
            return self._reject(RejectReason.DUPLICATE, name)

        guess = self.score(canonical)
        self._guesses.append(guess)

        if guess.county == self._target:
            self._status = GameStatus.WON
        elif len(self._guesses) >= self._max_guesses:
            self._status = GameStatus.LOST

        logger.info(
            "guess_accepted",
            extra={
                "mode": self.mode.value,
                "county": guess.county,
                "band": guess.band.value,
                "guess_number": len(self._guesses),
                "status": self._status.value,
            },
        )
        self._record()
        return guess

    def to_state(self) -> dict[str, Any]:
        """Plain snapshot written into the store under ``game``."""
        return {
            "mode": self.mode.value,
            "target_county": self._target,
            "guesses": [asdict(guess) for guess in self._guesses],
            "status": self._status.value,
            "game_number": self._game_number,
            "started_at": self._started_at,
            "max_guesses": self._max_guesses,
            "time_limit": self._time_limit,
        }

    def _reject(self, reason: RejectReason, name: str) -> None:
        self.last_rejection = reason
        logger.debug("guess_rejected", extra={"reason": reason.value, "raw_guess": name})
        return None

    def _record(self) -> None:
        if not self._config.persist_on_guess:
            return
        try:
            self._recorder.record(self)
        except Exception:  # noqa: BLE001 - a failed save must not undo the in-memory transition.
            logger.exception("round_record_failed", extra={"mode": self.mode.value})


def start_session(
    config: ModeConfig,
    difficulty: Difficulty | str,
    *,
    targets: TargetStrategy,
    today: date,
    restored: DailyState | None = None,
    recorder: RoundRecorder | None = None,
    started_at: datetime | None = None,
    time_limits: dict[Difficulty, float] | None = None,
    max_distance_km: float = MAX_DISTANCE_KM,
) -> Session:
    """Create the next round for ``config``.

    Daily rounds resume from ``restored`` when it was saved on ``today``; every other
    case starts with an empty guess list and a freshly selected target.
    """
    target, game_number = targets.next_target(today)
    guesses: list[Guess] = []
    status = GameStatus.PLAYING

    if (
        config.target_selection is TargetSelection.DAILY
        and restored is not None
        and restored.date == today.isoformat()
    ):
        guesses = list(restored.guesses)
        status = restored.status
        logger.info(
            "daily_state_restored",
            extra={"game_number": game_number, "guess_count": len(guesses), "status": status.value},
        )

    return Session(
        config=config,
        target=target,
        max_guesses=max_guesses_for(config, difficulty),
        time_limit_seconds=time_limit_for(config, difficulty, time_limits),
        game_number=game_number,
        started_at=started_at,
        guesses=guesses,
        status=status,
        recorder=recorder,
        max_distance_km=max_distance_km,
    )
