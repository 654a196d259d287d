"""Observable state container shared by the engine and any front end."""

from __future__ import annotations

import copy
import logging
import time
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

State = Mapping[str, Any]
Update = Mapping[str, Any] | Callable[[dict[str, Any]], Mapping[str, Any] | None]
Listener = Callable[[State, State], None]

logger = logging.getLogger("locle.store")


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    action: str
    previous: State
    updates: State
    timestamp: float


def freeze(value: Any) -> Any:
    """Read-only copy: mappings become ``MappingProxyType`` views and lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Plain mutable copy of a frozen snapshot (dicts and lists)."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


def deep_merge(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``updates`` into a copy of ``base``.

    Mapping values merge key by key at any depth; everything else (lists, scalars,
    dates, ``None``) replaces the previous value outright. Neither input is mutated.
    """
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, Mapping):
            existing = merged.get(key)
            merged[key] = deep_merge(existing if isinstance(existing, Mapping) else {}, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class Store:
    """Single source of truth for the current round, statistics and settings.

    Every ``set_state`` builds a new snapshot. Snapshots are read-only views all the
    way down, so a listener comparing ``new`` against ``old`` always sees the values
    as they were when each snapshot was taken.
    """

    def __init__(
        self,
        initial_state: Mapping[str, Any] | None = None,
        *,
        history_enabled: bool = False,
        history_limit: int = 10,
    ) -> None:
        self._state: State = freeze(copy.deepcopy(thaw(initial_state or {})))
        self._listeners: list[Listener] = []
        self._history: deque[HistoryEntry] | None = deque(maxlen=history_limit) if history_enabled else None
        self._update_count = 0
        self._last_update_time: float | None = None

    def get_state(self) -> State:
        return self._state

    def set_state(self, update: Update, action: str = "unknown") -> State:
        previous = self._state
        updates = update(thaw(previous)) if callable(update) else update
        if updates is None:
            updates = {}
        if not isinstance(updates, Mapping):
            raise TypeError(f"State update must be a mapping, got {type(updates).__name__}")

        self._state = freeze(deep_merge(previous, updates))
        self._update_count += 1
        self._last_update_time = time.time()

        if self._history is not None:
            self._history.append(
                HistoryEntry(action=action, previous=previous, updates=freeze(updates), timestamp=self._last_update_time)
            )
        logger.debug("state_updated", extra={"action": action, "keys": sorted(updates)})

        for listener in list(self._listeners):
            try:
                listener(self._state, previous)
            except Exception:  # noqa: BLE001 - one broken listener must not starve the rest.
                logger.exception("store_subscriber_failed", extra={"action": action})
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` once; subscribing it again is a no-op."""
        if not callable(listener):
            raise TypeError("Subscriber must be callable")
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def get_metadata(self) -> dict[str, Any]:
        return {
            "subscribers": len(self._listeners),
            "update_count": self._update_count,
            "last_update_time": self._last_update_time,
            "history_size": len(self._history) if self._history is not None else 0,
        }

    def get_history(self) -> list[HistoryEntry]:
        if self._history is None:
            return []
        return list(self._history)

    def clear_subscribers(self) -> None:
        self._listeners.clear()
