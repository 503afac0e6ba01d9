"""Aggregate win/loss/draw counts once every match has halted."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from scipy import stats

from deckbattle.simulation.state import Game, Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResults:
    """Outcome counts and turn statistics for a batch of halted games."""

    total_games: int
    player_wins: int
    enemy_wins: int
    draws: int
    avg_turns: float
    turn_quartiles: tuple[float, float, float]
    max_turn_count: int

    # Positive = the side that moves first wins more often
    first_player_advantage: float = 0.0
    # Two-sided binomial test of player vs enemy wins (1.0 if nothing decided)
    advantage_pvalue: float = 1.0

    def summary(self) -> str:
        return (
            f"Results: {self.player_wins} player wins, "
            f"{self.enemy_wins} enemy wins, {self.draws} draws"
        )


def tally_games(games: List[Game]) -> SimulationResults:
    """Count outcomes over games whose terminal side is known."""
    counts = {Side.PLAYER: 0, Side.ENEMY: 0, Side.DRAW: 0}
    for game in games:
        counts[game.side] += 1

    total = len(games)
    player_wins = counts[Side.PLAYER]
    enemy_wins = counts[Side.ENEMY]

    if total:
        turns = np.array([game.turn_count for game in games], dtype=float)
        avg_turns = float(turns.mean())
        q1, median, q3 = (float(q) for q in np.percentile(turns, [25, 50, 75]))
        max_turn_count = int(turns.max())
        first_player_advantage = (player_wins - enemy_wins) / total
    else:
        avg_turns = 0.0
        q1 = median = q3 = 0.0
        max_turn_count = 0
        first_player_advantage = 0.0

    decided = player_wins + enemy_wins
    if decided:
        advantage_pvalue = float(stats.binomtest(player_wins, decided, p=0.5).pvalue)
    else:
        advantage_pvalue = 1.0

    return SimulationResults(
        total_games=total,
        player_wins=player_wins,
        enemy_wins=enemy_wins,
        draws=counts[Side.DRAW],
        avg_turns=avg_turns,
        turn_quartiles=(q1, median, q3),
        max_turn_count=max_turn_count,
        first_player_advantage=first_player_advantage,
        advantage_pvalue=advantage_pvalue,
    )


class ResultTally:
    """Reports results exactly once, on the first update where all games halted."""

    def __init__(self) -> None:
        self.results: Optional[SimulationResults] = None

    @property
    def reported(self) -> bool:
        return self.results is not None

    def update(self, games: List[Game]) -> Optional[SimulationResults]:
        """Return results on the first call where every game has halted."""
        if self.reported:
            return None
        for game in games:
            if not game.is_halted:
                # Not all games have halted
                return None

        self.results = tally_games(games)
        logger.info(self.results.summary())
        return self.results
