"""CLI entry point."""

from __future__ import annotations

import logging
import random
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO against scripted opponents")


def _load_settings():
    from unoengine.config import ConfigError, Settings

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        raise typer.BadParameter(str(e))
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


def _resolve_names(names: Optional[str], default: tuple[str, ...]) -> tuple[str, ...]:
    from unoengine.config import ConfigError, parse_player_names

    if names is None:
        return default
    try:
        return parse_player_names(names)
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--names")


@app.command()
def play(
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        "-d",
        min=0.0,
        help="Seconds to wait before each opponent move",
    ),
    names: Optional[str] = typer.Option(
        None,
        "--names",
        "-n",
        help="Comma-separated seat names, human first (2-4 names)",
    ),
) -> None:
    """Play a game in the terminal against scripted opponents."""
    from unoengine.agents.human_agent import HumanAgent
    from unoengine.orchestration.game_runner import GameRunner

    settings = _load_settings()
    player_names = _resolve_names(names, settings.player_names)
    seed = seed if seed is not None else settings.seed
    shown = {"log": ()}

    def show_new_events(state) -> None:
        # the log is most recent first; echo what was prepended, oldest first
        log, previous = state.log, shown["log"]
        fresh = next(
            k for k in range(len(log) + 1) if log[k:] == previous[:len(log) - k]
        )
        for entry in reversed(log[:fresh]):
            typer.echo(f"> {entry}")
        shown["log"] = log

    runner = GameRunner(
        human_agent=HumanAgent(name=player_names[0]),
        player_names=player_names,
        rng=random.Random(seed),
        opponent_delay=delay if delay is not None else settings.opponent_delay,
        on_state=show_new_events,
    )
    result = runner.run()
    if result.stalemate:
        typer.echo("No cards left to draw - the game is stuck.")
    typer.echo(f"Winner: {result.winner_name or 'None'}")
    typer.echo(f"Turns: {result.turn_count}")


@app.command()
def simulate(
    games: int = typer.Option(100, "--games", "-g", min=1, help="Number of games"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    names: Optional[str] = typer.Option(
        None, "--names", "-n", help="Comma-separated seat names (2-4 names)"
    ),
) -> None:
    """Run autoplay games where every seat follows the opponent policy."""
    from unoengine.orchestration.simulation import run_simulation

    settings = _load_settings()
    summary = run_simulation(
        num_games=games,
        seed=seed if seed is not None else settings.seed,
        player_names=_resolve_names(names, settings.player_names),
    )
    typer.echo(f"Simulation results ({summary.games} games):")
    for name, w in sorted(summary.wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {w} wins")
    typer.echo(f"  stalemates: {summary.stalemates}")
    typer.echo(f"  average turns: {summary.average_turns:.1f}")


if __name__ == "__main__":
    app()
