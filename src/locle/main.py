"""CLI startup entrypoint for Locle."""

from __future__ import annotations

from datetime import datetime

import typer
from rich import print

from locle.adjacency import adjacent_hints, is_adjacent
from locle.cli import ConsoleRenderer, distribution_table, statistics_table, timer_line
from locle.config import settings
from locle.counties import canonical_name, get_county
from locle.daily import DailyPuzzleSelector, format_time_remaining, time_until_next_day
from locle.engine import GameEngine, initial_state
from locle.geo import arrow, bearing, distance
from locle.models import Difficulty, Theme
from locle.modes import GameMode, InputKind
from locle.persistence import GamePersistence, JsonFileBackend
from locle.store import Store
from locle.telemetry.hooks import GameObserver, TelemetryObserver
from locle.telemetry.logging import LoggingTelemetry, configure_logging

app = typer.Typer(help="Locle: guess the Irish county")


def _build_engine(observer: GameObserver | None = None) -> GameEngine:
    configure_logging(settings.log_level)
    store = Store(
        initial_state(),
        history_enabled=settings.store_history_enabled,
        history_limit=settings.history_limit,
    )
    engine = GameEngine(
        store,
        GamePersistence(JsonFileBackend(settings.data_dir)),
        selector=DailyPuzzleSelector(epoch=settings.epoch_date),
        observer=observer or TelemetryObserver(LoggingTelemetry()),
        time_limits={
            Difficulty.EASY: settings.time_trial_easy_seconds,
            Difficulty.MEDIUM: settings.time_trial_medium_seconds,
            Difficulty.HARD: settings.time_trial_hard_seconds,
        },
        max_distance_km=settings.max_distance_km,
        share_url=settings.share_url,
    )
    engine.load()
    return engine


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "data_dir": settings.data_dir,
            "epoch_date": settings.epoch_date.isoformat(),
            "max_distance_km": settings.max_distance_km,
        }
    )


@app.command()
def play(
    mode: GameMode = typer.Option(GameMode.DAILY, help="daily/practice/locate/streak/timetrial"),
) -> None:
    """Play interactively; type a county name per guess, or 'quit'."""
    renderer = ConsoleRenderer()
    engine = _build_engine(renderer)
    session = engine.start(mode)

    if mode is GameMode.DAILY and not session.is_playing:
        renderer.console.print("You've already played today's puzzle. Come back tomorrow!")
        print(engine.share_text())
        return

    while True:
        session = engine.session
        if session is None:
            break
        if not session.is_playing:
            if session.config.record_statistics:
                print(engine.share_text())
            if mode is GameMode.STREAK:
                renderer.console.print(f"Final streak: {engine.streak_count}")
            break

        remaining = session.time_remaining(datetime.now().astimezone())
        if remaining is not None:
            renderer.console.print(f"Time left: {timer_line(remaining)}")
        prompt = "Click (name a county)" if session.config.input_kind is InputKind.MAP_CLICK else "Guess"
        raw = typer.prompt(prompt)
        if raw.strip().lower() in {"quit", "exit", "q"}:
            if mode is GameMode.LOCATE:
                won, played = engine.locate_score
                renderer.console.print(f"Located {won} of {played}.")
            break
        if raw.strip().lower() == "hint" and mode is GameMode.LOCATE:
            renderer.console.print(f"Borders: {', '.join(adjacent_hints(session.target))}")
            continue

        if session.config.input_kind is InputKind.MAP_CLICK:
            engine.click_county(raw)
        else:
            engine.submit_guess(raw)


@app.command()
def stats() -> None:
    """Show daily statistics."""
    engine = _build_engine()
    statistics = engine.statistics.statistics
    print(statistics_table(statistics))
    print(distribution_table(statistics))
    print({"streak": engine.statistics.streak_statistics, "time_trial": engine.statistics.time_trial_statistics})


@app.command()
def daily() -> None:
    """Show today's puzzle number and the time until the next one."""
    selector = DailyPuzzleSelector(epoch=settings.epoch_date)
    now = datetime.now()
    print(
        {
            "game_number": selector.game_number(now),
            "next_puzzle_in": format_time_remaining(time_until_next_day(now)),
        }
    )


@app.command("distance")
def distance_between(first: str, second: str) -> None:
    """Distance, bearing and adjacency between two counties."""
    a = get_county(first)
    b = get_county(second)
    if a is None or b is None:
        raise typer.BadParameter(f"Unknown county: {first if a is None else second}")
    print(
        {
            "from": canonical_name(first),
            "to": canonical_name(second),
            "distance_km": round(distance(a, b), 1),
            "bearing": f"{bearing(a, b).value} {arrow(bearing(a, b))}",
            "adjacent": is_adjacent(first, second),
        }
    )


@app.command("settings")
def update_settings(
    difficulty: Difficulty = typer.Option(None, help="easy/medium/hard"),
    theme: Theme = typer.Option(None, help="light/dark"),
) -> None:
    """Show or change difficulty and theme."""
    engine = _build_engine()
    if difficulty is not None:
        engine.set_difficulty(difficulty)
    if theme is not None:
        engine.set_theme(theme)
    current = engine.settings
    print({"difficulty": current.difficulty.value, "theme": current.theme.value})


if __name__ == "__main__":
    app()
