"""Best-effort persistence of game progress, statistics and preferences."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt, ValidationError

from .models import (
    Band,
    Bearing,
    DailyState,
    Difficulty,
    GameSettings,
    GameStatus,
    Guess,
    Statistics,
    StreakStatistics,
    Theme,
    TimeTrialStatistics,
)

logger = logging.getLogger("locle.persistence")

KEYS = {
    "statistics": "loklStats",
    "daily_state": "loklDaily",
    "settings": "loklSettings",
    "theme": "loklTheme",
    "streak_statistics": "loklStreakStats",
    "time_trial_statistics": "loklTimeTrialStats",
}


class KeyValueBackend(Protocol):
    """Raw string storage under named keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value or ``None`` when absent."""

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class InMemoryBackend:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileBackend:
    """One ``<key>.json`` file per key inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class Persistence(Protocol):
    """Contract consumed by sessions and statistics trackers."""

    def load_daily_state(self) -> DailyState | None: ...

    def save_daily_state(self, state: DailyState) -> None: ...

    def clear_daily_state(self) -> None: ...

    def load_statistics(self) -> Statistics: ...

    def save_statistics(self, stats: Statistics) -> None: ...

    def load_streak_statistics(self) -> StreakStatistics: ...

    def save_streak_statistics(self, stats: StreakStatistics) -> None: ...

    def load_time_trial_statistics(self) -> TimeTrialStatistics: ...

    def save_time_trial_statistics(self, stats: TimeTrialStatistics) -> None: ...

    def load_settings(self) -> GameSettings: ...

    def save_settings(self, settings: GameSettings) -> None: ...

    def load_theme(self) -> Theme: ...

    def save_theme(self, theme: Theme) -> None: ...


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class _GuessPayload(_Payload):
    county: str
    distance_km: NonNegativeInt
    bearing: Bearing
    band: Band
    is_adjacent: bool = False
    province: str = ""


class _DailyStatePayload(_Payload):
    date: str
    guesses: list[_GuessPayload] = Field(default_factory=list)
    status: GameStatus = GameStatus.PLAYING


class _StatisticsPayload(_Payload):
    games_played: NonNegativeInt = 0
    games_won: NonNegativeInt = 0
    current_streak: NonNegativeInt = 0
    best_streak: NonNegativeInt = 0
    distribution: list[NonNegativeInt] = Field(default_factory=lambda: [0] * 6, min_length=6, max_length=6)
    last_played_date: str | None = None


class _StreakStatisticsPayload(_Payload):
    games_played: NonNegativeInt = 0
    best_streak: NonNegativeInt = 0
    average_streak: NonNegativeFloat = 0.0
    total_correct: NonNegativeInt = 0


class _TimeTrialStatisticsPayload(_Payload):
    games_played: NonNegativeInt = 0
    games_won: NonNegativeInt = 0
    best_time: NonNegativeFloat | None = None
    average_time: NonNegativeFloat = 0.0
    average_guesses: NonNegativeFloat = 0.0
    timeout_count: NonNegativeInt = 0
    distribution: list[NonNegativeInt] = Field(default_factory=lambda: [0] * 6, min_length=6, max_length=6)


def _encode(value: Any) -> str:
    return json.dumps(value, default=lambda item: item.value if hasattr(item, "value") else str(item))


class GamePersistence:
    """Implements :class:`Persistence` over any :class:`KeyValueBackend`.

    Every failure (unavailable backend, unreadable JSON, payloads that do not
    validate) is logged and replaced by a safe default; nothing raises.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend

    def _read(self, key: str) -> Any | None:
        try:
            raw = self._backend.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception:  # noqa: BLE001 - storage must never break gameplay.
            logger.exception("persistence_load_failed", extra={"key": key})
            return None

    def _write(self, key: str, value: Any) -> None:
        try:
            self._backend.set(key, _encode(value))
        except Exception:  # noqa: BLE001
            logger.exception("persistence_save_failed", extra={"key": key})

    def _validate(self, key: str, model: type[_Payload], payload: Any) -> _Payload | None:
        if payload is None:
            return None
        try:
            return model.model_validate(payload)
        except ValidationError:
            logger.exception("persistence_payload_invalid", extra={"key": key})
            return None

    def load_daily_state(self) -> DailyState | None:
        key = KEYS["daily_state"]
        parsed = self._validate(key, _DailyStatePayload, self._read(key))
        if parsed is None:
            return None
        return DailyState(
            date=parsed.date,
            guesses=[Guess(**guess.model_dump()) for guess in parsed.guesses],
            status=parsed.status,
        )

    def save_daily_state(self, state: DailyState) -> None:
        self._write(KEYS["daily_state"], asdict(state))

    def clear_daily_state(self) -> None:
        try:
            self._backend.delete(KEYS["daily_state"])
        except Exception:  # noqa: BLE001
            logger.exception("persistence_delete_failed", extra={"key": KEYS["daily_state"]})

    def load_statistics(self) -> Statistics:
        key = KEYS["statistics"]
        parsed = self._validate(key, _StatisticsPayload, self._read(key))
        return Statistics(**parsed.model_dump()) if parsed else Statistics()

    def save_statistics(self, stats: Statistics) -> None:
        self._write(KEYS["statistics"], asdict(stats))

    def load_streak_statistics(self) -> StreakStatistics:
        key = KEYS["streak_statistics"]
        parsed = self._validate(key, _StreakStatisticsPayload, self._read(key))
        return StreakStatistics(**parsed.model_dump()) if parsed else StreakStatistics()

    def save_streak_statistics(self, stats: StreakStatistics) -> None:
        self._write(KEYS["streak_statistics"], asdict(stats))

    def load_time_trial_statistics(self) -> TimeTrialStatistics:
        key = KEYS["time_trial_statistics"]
        parsed = self._validate(key, _TimeTrialStatisticsPayload, self._read(key))
        return TimeTrialStatistics(**parsed.model_dump()) if parsed else TimeTrialStatistics()

    def save_time_trial_statistics(self, stats: TimeTrialStatistics) -> None:
        self._write(KEYS["time_trial_statistics"], asdict(stats))

    def load_settings(self) -> GameSettings:
        payload = self._read(KEYS["settings"])
        if not isinstance(payload, dict):
            return GameSettings()

        try:
            difficulty = Difficulty(payload.get("difficulty"))
        except ValueError:
            logger.warning(
                "invalid_difficulty_reset",
                extra={"difficulty": payload.get("difficulty"), "reset_to": Difficulty.MEDIUM.value},
            )
            difficulty = Difficulty.MEDIUM
        try:
            theme = Theme(payload.get("theme", Theme.LIGHT.value))
        except ValueError:
            theme = Theme.LIGHT
        return GameSettings(difficulty=difficulty, theme=theme)

    def save_settings(self, settings: GameSettings) -> None:
        self._write(KEYS["settings"], asdict(settings))

    def load_theme(self) -> Theme:
        try:
            raw = self._backend.get(KEYS["theme"])
        except Exception:  # noqa: BLE001
            logger.exception("persistence_load_failed", extra={"key": KEYS["theme"]})
            return Theme.LIGHT
        if not raw:
            return Theme.LIGHT
        try:
            return Theme(raw.strip().strip('"'))
        except ValueError:
            return Theme.LIGHT

    def save_theme(self, theme: Theme) -> None:
        try:
            self._backend.set(KEYS["theme"], Theme(theme).value)
        except Exception:  # noqa: BLE001
            logger.exception("persistence_save_failed", extra={"key": KEYS["theme"]})
