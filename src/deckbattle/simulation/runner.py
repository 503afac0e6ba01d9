"""Tick driver that steps all matches in lockstep until the tally reports."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from deckbattle.decks.examples import create_starter_deck
from deckbattle.simulation.engine import MatchSimulator, SimulationError, create_games
from deckbattle.simulation.layout import board_position
from deckbattle.simulation.state import MAX_TURNS, SQRT_NUMBER_OF_GAMES, Deck, Game
from deckbattle.simulation.tally import ResultTally, SimulationResults

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Configuration for a batch of simultaneous matches."""

    grid_size: int = SQRT_NUMBER_OF_GAMES  # Matches are laid out grid_size x grid_size
    seed: Optional[int] = None
    max_turns: Optional[int] = MAX_TURNS  # None = no forced draws
    max_ticks: Optional[int] = None  # None = tick until every match halts
    deck: Deck = field(default_factory=create_starter_deck)

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")

    @property
    def num_games(self) -> int:
        return self.grid_size * self.grid_size


class BattleRunner:
    """Owns the games and drives simulator and tally once per tick."""

    def __init__(self, config: RunConfig):
        self.config = config
        self.simulator = MatchSimulator(max_turns=config.max_turns)
        self.tally = ResultTally()
        self.games: List[Game] = create_games(
            config.num_games, config.seed, deck_factory=config.deck.copy
        )
        self.ticks = 0

    def positions(self) -> Dict[int, Tuple[float, float]]:
        """Board origin of every game on a grid_size-wide grid."""
        return {
            game.id: board_position(game.id, grid_width=self.config.grid_size)
            for game in self.games
        }

    def tick(self) -> Optional[SimulationResults]:
        """Advance every match one phase, then check for final results."""
        self.simulator.tick(self.games)
        self.ticks += 1
        return self.tally.update(self.games)

    def run(self) -> SimulationResults:
        """Tick until every match has halted and return the tally."""
        logger.info(
            f"Simulating {len(self.games)} matches (seed={self.config.seed}, "
            f"max_turns={self.config.max_turns})"
        )
        results: Optional[SimulationResults] = None
        while results is None:
            if self.config.max_ticks is not None and self.ticks >= self.config.max_ticks:
                running = sum(1 for g in self.games if not g.is_halted)
                raise SimulationError(
                    f"{running} matches still running after {self.ticks} ticks"
                )
            results = self.tick()
        logger.debug(f"All matches halted after {self.ticks} ticks")
        return results
