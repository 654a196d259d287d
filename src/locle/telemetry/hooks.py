"""Callback contract between the game engine and whatever renders it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from locle.models import Guess, RejectReason

from .logging import Telemetry

if TYPE_CHECKING:
    from locle.session import Session


class GameObserver(Protocol):
    """Notified by the engine as rounds start, progress and finish."""

    def round_started(self, session: Session) -> None:
        """A new round is ready for input."""

    def guess_accepted(self, session: Session, guess: Guess) -> None:
        """A guess was scored and appended."""

    def guess_rejected(self, session: Session, raw_guess: str, reason: RejectReason) -> None:
        """Input was ignored and the round is unchanged."""

    def round_finished(self, session: Session) -> None:
        """The round reached ``won`` or ``lost``."""


class NullObserver:
    def round_started(self, session: Session) -> None:
        pass

    def guess_accepted(self, session: Session, guess: Guess) -> None:
        pass

    def guess_rejected(self, session: Session, raw_guess: str, reason: RejectReason) -> None:
        pass

    def round_finished(self, session: Session) -> None:
        pass


class TelemetryObserver(NullObserver):
    """Forwards round lifecycle events to a :class:`Telemetry` sink."""

    def __init__(self, telemetry: Telemetry) -> None:
        self._telemetry = telemetry

    def round_started(self, session: Session) -> None:
        self._telemetry.emit("round_started", {"mode": session.mode.value, "game_number": session.game_number})

    def guess_rejected(self, session: Session, raw_guess: str, reason: RejectReason) -> None:
        self._telemetry.emit("guess_rejected", {"mode": session.mode.value, "reason": reason.value})

    def round_finished(self, session: Session) -> None:
        self._telemetry.emit(
            "round_finished",
            {"mode": session.mode.value, "status": session.status.value, "guesses": len(session.guesses)},
        )
