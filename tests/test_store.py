from __future__ import annotations

import logging

import pytest

from locle.store import Store, deep_merge


def test_deep_merge_recurses_into_mappings_and_replaces_lists() -> None:
    base = {"game": {"status": "playing", "guesses": [1, 2]}, "settings": {"theme": "light"}}

    merged = deep_merge(base, {"game": {"guesses": [3]}})

    assert merged == {"game": {"status": "playing", "guesses": [3]}, "settings": {"theme": "light"}}
    assert base["game"]["guesses"] == [1, 2]


def test_set_state_merges_nested_updates() -> None:
    store = Store({"settings": {"difficulty": "medium", "theme": "light"}})

    store.set_state({"settings": {"theme": "dark"}})

    assert store.get_state()["settings"] == {"difficulty": "medium", "theme": "dark"}


def test_set_state_accepts_function_of_current_state() -> None:
    store = Store({"streak": {"count": 2}})

    store.set_state(lambda state: {"streak": {"count": state["streak"]["count"] + 1}})

    assert store.get_state()["streak"]["count"] == 3


def test_function_update_cannot_mutate_live_state() -> None:
    store = Store({"game": {"guesses": []}})

    def mutate(state):
        state["game"]["guesses"].append("Cork")
        return {}

    store.set_state(mutate)

    assert store.get_state()["game"]["guesses"] == ()


def test_non_mapping_update_raises() -> None:
    store = Store({})

    with pytest.raises(TypeError):
        store.set_state(lambda state: ["nope"])


def test_listeners_get_new_and_old_in_subscription_order() -> None:
    store = Store({"count": 0})
    calls: list[tuple[str, int, int]] = []
    store.subscribe(lambda new, old: calls.append(("first", new["count"], old["count"])))
    store.subscribe(lambda new, old: calls.append(("second", new["count"], old["count"])))

    store.set_state({"count": 1})

    assert calls == [("first", 1, 0), ("second", 1, 0)]


def test_failing_listener_does_not_block_others(caplog: pytest.LogCaptureFixture) -> None:
    store = Store({"count": 0})
    seen: list[int] = []

    def broken(new, old):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda new, old: seen.append(new["count"]))

    with caplog.at_level(logging.ERROR, logger="locle.store"):
        store.set_state({"count": 5})

    assert seen == [5]
    assert "store_subscriber_failed" in caplog.text


def test_unsubscribe_and_clear() -> None:
    store = Store({})
    seen: list[int] = []
    unsubscribe = store.subscribe(lambda new, old: seen.append(1))

    unsubscribe()
    unsubscribe()
    store.set_state({"a": 1})
    assert seen == []

    store.subscribe(lambda new, old: None)
    store.clear_subscribers()
    assert store.get_metadata()["subscribers"] == 0


def test_subscribe_requires_callable() -> None:
    with pytest.raises(TypeError):
        Store({}).subscribe("not callable")


def test_metadata_and_bounded_history() -> None:
    store = Store({"n": 0}, history_enabled=True, history_limit=2)

    for value in range(1, 4):
        store.set_state({"n": value}, f"set_{value}")

    metadata = store.get_metadata()
    assert metadata["update_count"] == 3
    assert metadata["history_size"] == 2
    assert metadata["last_update_time"] is not None
    assert [entry.action for entry in store.get_history()] == ["set_2", "set_3"]
    assert store.get_history()[0].previous == {"n": 1}


def test_history_disabled_by_default() -> None:
    store = Store({})
    store.set_state({"a": 1})

    assert store.get_history() == []
    assert store.get_metadata()["history_size"] == 0


def test_previous_snapshot_is_not_modified() -> None:
    store = Store({"settings": {"theme": "light"}})
    before = store.get_state()

    store.set_state({"settings": {"theme": "dark"}})

    assert before["settings"]["theme"] == "light"


def test_snapshots_are_read_only_at_every_depth() -> None:
    store = Store({"settings": {"theme": "light"}, "game": {"guesses": [{"county": "Cork"}]}})
    first = store.get_state()
    store.set_state({"game": {"status": "won"}})
    current = store.get_state()

    with pytest.raises(TypeError):
        current["settings"]["theme"] = "dark"
    with pytest.raises(TypeError):
        current["game"]["guesses"][0]["county"] = "Kerry"
    with pytest.raises(AttributeError):
        current["game"]["guesses"].append({"county": "Kerry"})

    assert first["settings"]["theme"] == "light"
    assert "status" not in first["game"]


def test_caller_data_is_copied_into_snapshot() -> None:
    guesses = ["Cork"]
    store = Store({})

    store.set_state({"game": {"guesses": guesses}})
    guesses.append("Kerry")

    assert store.get_state()["game"]["guesses"] == ("Cork",)


def test_subscribing_twice_registers_once() -> None:
    store = Store({})
    seen: list[int] = []

    def listener(new, old):
        seen.append(new["n"])

    unsubscribe = store.subscribe(listener)
    store.subscribe(listener)
    store.set_state({"n": 1})
    assert seen == [1]
    assert store.get_metadata()["subscribers"] == 1

    unsubscribe()
    store.set_state({"n": 2})
    assert seen == [1]
