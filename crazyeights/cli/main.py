"""Typer entry-point wiring for the Crazy Eights CLI."""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import simulation
from ..logging_utils import get_logger, setup_logging
from ..state import GameConfig, Player
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()
logger = get_logger(__name__)


def _build_config(hand_size: int, ai_delay: float) -> GameConfig:
    try:
        return GameConfig(hand_size=hand_size, ai_delay=ai_delay)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def configure(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to CRAZYEIGHTS_LOG_LEVEL or WARNING).",
    ),
) -> None:
    """Crazy Eights against a greedy computer opponent."""

    setup_logging(log_level)


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    hand_size: int = typer.Option(8, min=1, max=25, help="Cards dealt to each seat."),
    ai_delay: float = typer.Option(1.5, min=0.0, help="Seconds the opponent waits before acting."),
) -> None:
    """Play interactively in the terminal."""

    config = _build_config(hand_size, ai_delay)
    logger.debug("starting interactive session seed=%s", seed)
    run_textual_app(seed=seed, config=config)


@app.command("simulate")
def simulate_cli(
    games: int = typer.Option(100, min=1, help="Number of self-play games."),
    seed: int = typer.Option(123, help="Random seed for the simulation."),
    hand_size: int = typer.Option(8, min=1, max=25, help="Cards dealt to each seat."),
    turn_limit: int = typer.Option(
        simulation.DEFAULT_TURN_LIMIT,
        min=1,
        help="Intents after which an unfinished game counts as a draw.",
    ),
) -> None:
    """Pit the opponent policy against itself and report the results."""

    config = _build_config(hand_size, 0.0)
    report = simulation.run_simulations(games, seed=seed, config=config, turn_limit=turn_limit)

    table = Table(title="Self-Play Results", box=box.SIMPLE_HEAVY)
    table.add_column("Seat", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Cards left", justify="right")

    for total in report.history.totals():
        seat = "First (human seat)" if total.player is Player.HUMAN else "Second (opponent seat)"
        table.add_row(seat, str(total.wins), str(total.cards_left))
    table.add_row("Unfinished", str(report.draws), "-")

    console.print(table)
    turns = [game.turns for game in report.history.games]
    console.print(f"[cyan]{len(turns)} game(s) simulated, {sum(turns) / len(turns):.1f} intent(s) per game.[/cyan]")


def main() -> None:
    """Entry-point for ``python -m crazyeights.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
