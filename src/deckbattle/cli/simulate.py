"""CLI command for running a batch of simulated matches."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import click

from deckbattle.decks.serialization import deck_from_json, results_to_dict
from deckbattle.simulation.engine import SimulationError
from deckbattle.simulation.runner import BattleRunner, RunConfig
from deckbattle.simulation.state import MAX_TURNS, SQRT_NUMBER_OF_GAMES

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--grid-size",
    type=click.IntRange(min=1),
    default=SQRT_NUMBER_OF_GAMES,
    help="Matches per grid row; grid_size**2 matches are played",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "--max-turns",
    type=click.IntRange(min=0),
    default=MAX_TURNS,
    help="Turns before a match is drawn (0 disables draws)",
)
@click.option("--max-ticks", type=click.IntRange(min=1), default=None, help="Abort after this many ticks")
@click.option(
    "--deck",
    "deck_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON deck used by both sides (default: starter deck)",
)
@click.option(
    "--results",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append results as a JSON line to this file",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    grid_size: int,
    seed: int | None,
    max_turns: int,
    max_ticks: int | None,
    deck_path: str | None,
    results: str | None,
    verbose: bool,
):
    """Simulate a grid of card battles and print win/loss/draw counts."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    config = RunConfig(
        grid_size=grid_size,
        seed=seed,
        max_turns=max_turns or None,
        max_ticks=max_ticks,
    )

    if deck_path:
        try:
            config.deck = deck_from_json(Path(deck_path).read_text())
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Invalid deck file {deck_path}: {e}")
            sys.exit(1)

    runner = BattleRunner(config)
    try:
        outcome = runner.run()
    except SimulationError as e:
        logger.error(f"Simulation aborted: {e}")
        sys.exit(1)

    click.echo(outcome.summary())
    click.echo(
        f"Average turns: {outcome.avg_turns:.1f} | "
        f"First player advantage: {outcome.first_player_advantage:+.1%} "
        f"(p={outcome.advantage_pvalue:.4f})"
    )

    if results:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "seed": config.seed,
            "grid_size": config.grid_size,
            "max_turns": config.max_turns,
            "ticks": runner.ticks,
            **results_to_dict(outcome),
        }
        positions = runner.positions()
        record["games"] = [
            {
                "id": game.id,
                "x": positions[game.id][0],
                "y": positions[game.id][1],
                "side": game.side.value,
                "turn_count": game.turn_count,
            }
            for game in runner.games
        ]
        with open(results, "a") as f:
            f.write(json.dumps(record) + "\n")
        click.echo(f"Results saved to {results}")


if __name__ == "__main__":
    main()
