"""Terminal rendering for the interactive CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from locle.counties import COUNTIES
from locle.geo import arrow
from locle.models import GameStatus, Guess, RejectReason, Statistics
from locle.modes import InputKind, TimerState, format_time_display, timer_state
from locle.proximity import BAND_COLOURS, BAND_EMOJIS
from locle.session import Session
from locle.statistics import win_percentage

_TIMER_COLOURS = {
    TimerState.NORMAL: "green",
    TimerState.WARNING: "yellow",
    TimerState.DANGER: "dark_orange",
    TimerState.CRITICAL: "red",
    TimerState.URGENT: "bold red",
}

_REJECTION_MESSAGES = {
    RejectReason.NOT_PLAYING: "This round is over.",
    RejectReason.UNKNOWN_COUNTY: "That isn't a county we know.",
    RejectReason.DUPLICATE: "You've already guessed that one.",
    RejectReason.TIME_EXPIRED: "Time's up!",
    RejectReason.WRONG_MODE: "This mode is played by clicking the map.",
}


def guess_row(guess: Guess, number: int) -> tuple[str, str, str, str, str]:
    distance = "borders" if guess.is_adjacent else f"{guess.distance_km} km"
    colour = BAND_COLOURS[guess.band]
    return (
        str(number),
        f"[{colour}]{guess.county}[/]",
        distance,
        arrow(guess.bearing),
        BAND_EMOJIS[guess.band],
    )


def timer_line(remaining_seconds: float) -> str:
    colour = _TIMER_COLOURS[timer_state(remaining_seconds)]
    return f"[{colour}]{format_time_display(remaining_seconds)}[/]"


def statistics_table(stats: Statistics) -> Table:
    table = Table(title="Statistics")
    table.add_column("Played")
    table.add_column("Win %")
    table.add_column("Streak")
    table.add_column("Best")
    table.add_row(
        str(stats.games_played),
        str(win_percentage(stats)),
        str(stats.current_streak),
        str(stats.best_streak),
    )
    return table


def distribution_table(stats: Statistics) -> Table:
    table = Table(title="Guess distribution")
    table.add_column("Guesses")
    table.add_column("Wins")
    peak = max(stats.distribution) or 1
    for index, count in enumerate(stats.distribution, start=1):
        table.add_row(str(index), "█" * max(1, round(count / peak * 20)) + f" {count}" if count else "0")
    return table


class ConsoleRenderer:
    """Prints engine lifecycle events with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def round_started(self, session: Session) -> None:
        label = session.mode.value
        if session.game_number:
            label = f"{label} #{session.game_number}"
        if session.config.input_kind is InputKind.MAP_CLICK:
            self.console.print(f"[bold]{label}[/]: find [bold cyan]{session.target}[/] on the map.")
        else:
            self.console.print(f"[bold]{label}[/]: guess the county in {session.max_guesses} tries.")
        if session.time_limit_seconds:
            self.console.print(f"You have {session.time_limit_seconds:.0f} seconds.")
        for number, guess in enumerate(session.guesses, start=1):
            self.console.print(" ".join(guess_row(guess, number)))

    def guess_accepted(self, session: Session, guess: Guess) -> None:
        self.console.print(" ".join(guess_row(guess, len(session.guesses))))
        if session.is_playing:
            self.console.print(f"[dim]{session.remaining_guesses} guesses left[/]")

    def guess_rejected(self, session: Session, raw_guess: str, reason: RejectReason) -> None:
        self.console.print(f"[yellow]{_REJECTION_MESSAGES[reason]}[/] ({raw_guess})")

    def round_finished(self, session: Session) -> None:
        county = COUNTIES[session.target]
        if session.status is GameStatus.WON:
            self.console.print(f"[bold green]Correct![/] It was {county.name}. {county.fact}")
        else:
            self.console.print(f"[bold red]Out of luck.[/] The answer was {county.name}. {county.fact}")
