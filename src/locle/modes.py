"""Play modes expressed as configuration of a single round state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import Difficulty


class GameMode(str, Enum):
    DAILY = "daily"
    PRACTICE = "practice"
    LOCATE = "locate"
    STREAK = "streak"
    TIME_TRIAL = "timetrial"


class TargetSelection(str, Enum):
    DAILY = "daily"
    RANDOM = "random"
    PER_ROUND = "per_round"


class InputKind(str, Enum):
    TEXT = "text"
    MAP_CLICK = "map_click"


class TimerState(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"
    CRITICAL = "critical"
    URGENT = "urgent"


@dataclass(frozen=True, slots=True)
class ModeConfig:
    """Rules for one play mode.

    ``max_guesses`` of ``None`` defers to the difficulty setting. ``time_limit_seconds``
    of ``None`` also defers to difficulty when ``timed`` is set, otherwise the round is
    untimed.
    """

    mode: GameMode
    target_selection: TargetSelection
    max_guesses: int | None = None
    persist_on_guess: bool = False
    auto_advance_on_win: bool = False
    auto_advance_on_loss: bool = False
    record_statistics: bool = False
    timed: bool = False
    time_limit_seconds: float | None = None
    input_kind: InputKind = InputKind.TEXT


MODE_CONFIGS: dict[GameMode, ModeConfig] = {
    GameMode.DAILY: ModeConfig(
        mode=GameMode.DAILY,
        target_selection=TargetSelection.DAILY,
        persist_on_guess=True,
        record_statistics=True,
    ),
    GameMode.PRACTICE: ModeConfig(mode=GameMode.PRACTICE, target_selection=TargetSelection.RANDOM),
    GameMode.LOCATE: ModeConfig(
        mode=GameMode.LOCATE,
        target_selection=TargetSelection.RANDOM,
        auto_advance_on_win=True,
        auto_advance_on_loss=True,
        input_kind=InputKind.MAP_CLICK,
    ),
    GameMode.STREAK: ModeConfig(
        mode=GameMode.STREAK,
        target_selection=TargetSelection.PER_ROUND,
        max_guesses=1,
        auto_advance_on_win=True,
        input_kind=InputKind.MAP_CLICK,
    ),
    GameMode.TIME_TRIAL: ModeConfig(
        mode=GameMode.TIME_TRIAL,
        target_selection=TargetSelection.RANDOM,
        timed=True,
    ),
}

DEFAULT_TIME_LIMITS: dict[Difficulty, float] = {
    Difficulty.EASY: 90.0,
    Difficulty.MEDIUM: 60.0,
    Difficulty.HARD: 30.0,
}


def parse_mode(value: GameMode | str) -> GameMode:
    try:
        return GameMode(value)
    except ValueError as exc:
        raise ValueError(f"Unknown game mode: {value!r}") from exc


def parse_difficulty(value: Difficulty | str) -> Difficulty:
    try:
        return Difficulty(value)
    except ValueError as exc:
        raise ValueError(f"Unknown difficulty: {value!r}") from exc


def mode_config(mode: GameMode | str) -> ModeConfig:
    return MODE_CONFIGS[parse_mode(mode)]


def max_guesses_for(config: ModeConfig, difficulty: Difficulty | str) -> int:
    if config.max_guesses is not None:
        return config.max_guesses
    return 4 if parse_difficulty(difficulty) is Difficulty.HARD else 6


def time_limit_for(
    config: ModeConfig,
    difficulty: Difficulty | str,
    limits: dict[Difficulty, float] | None = None,
) -> float | None:
    if not config.timed:
        return None
    if config.time_limit_seconds is not None:
        return config.time_limit_seconds
    return (limits or DEFAULT_TIME_LIMITS)[parse_difficulty(difficulty)]


def timer_state(remaining_seconds: float) -> TimerState:
    """Colour state for a countdown; thresholds are 20, 15, 10 and 5 seconds."""
    if remaining_seconds > 20:
        return TimerState.NORMAL
    if remaining_seconds > 15:
        return TimerState.WARNING
    if remaining_seconds > 10:
        return TimerState.DANGER
    if remaining_seconds > 5:
        return TimerState.CRITICAL
    return TimerState.URGENT


def format_time_display(seconds: float) -> str:
    """``12.3s`` below a minute, ``1:05.2`` from a minute up."""
    seconds = max(0.0, seconds)
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}:{rest:04.1f}"
