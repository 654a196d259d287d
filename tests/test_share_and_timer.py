from __future__ import annotations

from datetime import datetime, timezone

import pytest
from rich.console import Console

from locle.cli import ConsoleRenderer, timer_line
from locle.models import Band, Bearing, Guess
from locle.modes import GameMode, TimerState, format_time_display, mode_config, timer_state
from locle.session import Session
from locle.share import ADJACENT_EMOJI, guess_emoji, share_text


def _session(target: str, game_number: int = 12, max_guesses: int = 6) -> Session:
    return Session(
        config=mode_config(GameMode.DAILY),
        target=target,
        max_guesses=max_guesses,
        game_number=game_number,
        started_at=datetime(2026, 1, 12, tzinfo=timezone.utc),
    )


def test_share_text_for_win_marks_adjacent_guesses() -> None:
    session = _session("Cork")
    session.submit_guess("Kerry")
    session.submit_guess("Cork")

    text = share_text(session, "medium", url="https://example.test")

    assert text == f"Locle #12 2/6 (Medium)\n{ADJACENT_EMOJI}🎯\nhttps://example.test"


def test_share_text_for_loss_uses_x() -> None:
    session = _session("Antrim", game_number=3, max_guesses=1)
    session.submit_guess("Kerry")

    text = share_text(session, "hard")

    assert text.splitlines()[0] == "Locle #3 X/1 (Hard)"
    assert "Kerry" not in text


def test_guess_emoji_uses_band_when_not_adjacent() -> None:
    guess = Guess("Dublin", 200, Bearing.SW, Band.COLD_2, False)

    assert guess_emoji(guess, "Cork") == "🔷"


@pytest.mark.parametrize(
    ("remaining", "expected"),
    [
        (60, TimerState.NORMAL),
        (20.1, TimerState.NORMAL),
        (20, TimerState.WARNING),
        (15, TimerState.DANGER),
        (10, TimerState.CRITICAL),
        (5, TimerState.URGENT),
        (0, TimerState.URGENT),
    ],
)
def test_timer_state_thresholds(remaining: float, expected: TimerState) -> None:
    assert timer_state(remaining) is expected


def test_format_time_display() -> None:
    assert format_time_display(12.34) == "12.3s"
    assert format_time_display(-3) == "0.0s"
    assert format_time_display(65.2) == "1:05.2"
    assert format_time_display(600) == "10:00.0"


def test_timer_line_colours_by_state() -> None:
    assert timer_line(45) == "[green]45.0s[/]"
    assert timer_line(3) == "[bold red]3.0s[/]"


def test_renderer_announces_map_click_rounds() -> None:
    console = Console(record=True, width=120)
    renderer = ConsoleRenderer(console)

    renderer.round_started(
        Session(config=mode_config(GameMode.LOCATE), target="Cork", max_guesses=6, started_at=datetime.now(timezone.utc))
    )
    renderer.round_started(_session("Cork"))

    output = console.export_text()
    assert "find Cork on the map" in output
    assert "guess the county in 6 tries" in output
