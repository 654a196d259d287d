from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Band(str, Enum):
    """Proximity classification of a guess."""

    COLD_1 = "COLD_1"
    COLD_2 = "COLD_2"
    WARM_1 = "WARM_1"
    WARM_2 = "WARM_2"
    WARM_3 = "WARM_3"
    HOT = "HOT"
    CORRECT = "CORRECT"


class Bearing(str, Enum):
    """8-point compass glyphs plus the marker used when the guess is the target."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"
    TARGET = "TARGET"


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class RejectReason(str, Enum):
    """Why a submitted guess was ignored."""

    NOT_PLAYING = "not_playing"
    UNKNOWN_COUNTY = "unknown_county"
    DUPLICATE = "duplicate"
    TIME_EXPIRED = "time_expired"
    WRONG_MODE = "wrong_mode"


@dataclass(frozen=True, slots=True)
class County:
    name: str
    lat: float
    lng: float
    province: str
    fact: str


@dataclass(frozen=True, slots=True)
class Guess:
    county: str
    distance_km: int
    bearing: Bearing
    band: Band
    is_adjacent: bool
    province: str = ""


@dataclass(slots=True)
class Statistics:
    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    best_streak: int = 0
    distribution: list[int] = field(default_factory=lambda: [0, 0, 0, 0, 0, 0])
    last_played_date: str | None = None


@dataclass(slots=True)
class StreakStatistics:
    games_played: int = 0
    best_streak: int = 0
    average_streak: float = 0.0
    total_correct: int = 0


@dataclass(slots=True)
class TimeTrialStatistics:
    games_played: int = 0
    games_won: int = 0
    best_time: float | None = None
    average_time: float = 0.0
    average_guesses: float = 0.0
    timeout_count: int = 0
    distribution: list[int] = field(default_factory=lambda: [0, 0, 0, 0, 0, 0])


@dataclass(slots=True)
class GameSettings:
    difficulty: Difficulty = Difficulty.MEDIUM
    theme: Theme = Theme.LIGHT


@dataclass(slots=True)
class DailyState:
    """Saved progress for one calendar day's puzzle."""

    date: str
    guesses: list[Guess] = field(default_factory=list)
    status: GameStatus = GameStatus.PLAYING
