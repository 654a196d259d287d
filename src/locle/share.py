from __future__ import annotations

from typing import TYPE_CHECKING

from .models import Difficulty, GameStatus, Guess
from .proximity import BAND_EMOJIS

if TYPE_CHECKING:
    from .session import Session

ADJACENT_EMOJI = "🔗"
UNKNOWN_EMOJI = "⬜"


def guess_emoji(guess: Guess, target: str) -> str:
    if guess.is_adjacent and guess.county != target:
        return ADJACENT_EMOJI
    return BAND_EMOJIS.get(guess.band, UNKNOWN_EMOJI)


def share_text(session: Session, difficulty: Difficulty | str, *, url: str = "https://locle.app") -> str:
    """Spoiler-free result summary, e.g. ``Locle #12 3/6 (Medium)``."""
    score = str(len(session.guesses)) if session.status is GameStatus.WON else "X"
    label = Difficulty(difficulty).value.capitalize()
    emojis = "".join(guess_emoji(guess, session.target) for guess in session.guesses)
    return f"Locle #{session.game_number} {score}/{session.max_guesses} ({label})\n{emojis}\n{url}"
