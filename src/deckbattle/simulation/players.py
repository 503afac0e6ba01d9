"""Per-side decision makers.

Each side of a match owns one player, which is its only source of
randomness. Players never see the opponent's state.
"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional
from deckbattle.simulation.state import Card


class AIPlayer(ABC):
    """Base class for side controllers."""

    @abstractmethod
    def shuffle_deck(self, cards: List[Card]) -> None:
        """Reorder the remaining deck in place before a draw."""
        pass

    @abstractmethod
    def choose_slot(self, open_slots: List[int]) -> Optional[int]:
        """Choose a slot for a drawn card, or None if none are open."""
        pass


class RandomPlayer(AIPlayer):
    """Player that reshuffles every turn and picks a uniformly random slot."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    @classmethod
    def from_rng(cls, seed_rng: random.Random) -> "RandomPlayer":
        """Create a player seeded from a process-level seed generator."""
        return cls(seed=seed_rng.getrandbits(64))

    def shuffle_deck(self, cards: List[Card]) -> None:
        self.rng.shuffle(cards)

    def choose_slot(self, open_slots: List[int]) -> Optional[int]:
        slots = list(open_slots)
        self.rng.shuffle(slots)
        return slots[0] if slots else None


class ScriptedPlayer(AIPlayer):
    """Deterministic player: keeps deck order and fills the lowest open slot."""

    def shuffle_deck(self, cards: List[Card]) -> None:
        pass

    def choose_slot(self, open_slots: List[int]) -> Optional[int]:
        return open_slots[0] if open_slots else None
