"""Mutable match state: cards, decks, play areas and games."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from deckbattle.simulation.players import AIPlayer


SQRT_NUMBER_OF_GAMES = 10
NUMBER_OF_GAMES = SQRT_NUMBER_OF_GAMES * SQRT_NUMBER_OF_GAMES
BOARD_SIZE = 30.0
BOARD_PADDING = 5.0

MAX_TURNS = 500
STARTING_HEALTH = 5
PLAY_AREA_CAPACITY = 3
ACTIVE_SLOTS = 2  # Slots past this index are allocated but never played into


class Side(Enum):
    """Which side of a match a deck belongs to, or a drawn result."""

    PLAYER = "player"
    ENEMY = "enemy"
    DRAW = "draw"


class GamePhase(Enum):
    """Step within a match's turn cycle."""

    PLAY = "play"
    ATTACK = "attack"
    HALT = "halt"


@dataclass
class Card:
    """A card in a deck or in play."""

    damage: int
    health: int

    def __str__(self) -> str:
        return f"{self.damage}/{self.health}"


@dataclass
class Deck:
    """A side's drawable cards plus its life total.

    Cards are drawn from the end of the list.
    """

    cards: List[Card]
    health: int = STARTING_HEALTH

    def draw(self) -> Optional[Card]:
        """Pop the tail card, or None when the deck is empty."""
        if not self.cards:
            return None
        return self.cards.pop()

    def copy(self) -> "Deck":
        """Deep copy so the new deck shares no Card objects."""
        return Deck(
            cards=[Card(c.damage, c.health) for c in self.cards],
            health=self.health,
        )


@dataclass
class PlayArea:
    """A side's in-play cards, at most one per slot."""

    cards: List[Optional[Card]] = field(
        default_factory=lambda: [None] * PLAY_AREA_CAPACITY
    )

    def open_slots(self) -> List[int]:
        """Empty slots among the active ones, in index order."""
        return [slot for slot in range(ACTIVE_SLOTS) if self.cards[slot] is None]

    def occupied(self) -> int:
        return sum(1 for card in self.cards if card is not None)


@dataclass
class SideState:
    """Everything one side of a match owns exclusively."""

    deck: Deck
    play_area: PlayArea
    player: "AIPlayer"


@dataclass
class Game:
    """One simulated match between a player and an enemy side."""

    id: int
    player: SideState
    enemy: SideState
    turn: GamePhase = GamePhase.PLAY
    side: Side = Side.PLAYER
    turn_count: int = 0

    @property
    def is_halted(self) -> bool:
        return self.turn == GamePhase.HALT

    def side_state(self, side: Side) -> SideState:
        if side == Side.PLAYER:
            return self.player
        if side == Side.ENEMY:
            return self.enemy
        raise ValueError(f"Game {self.id}: {side} does not own a deck")

    def active(self) -> SideState:
        """State of the side whose turn it is."""
        return self.side_state(self.side)

    def defending(self) -> SideState:
        """State of the side being attacked this turn."""
        return self.side_state(opponent(self.side))


def opponent(side: Side) -> Side:
    """The other playing side."""
    if side == Side.PLAYER:
        return Side.ENEMY
    if side == Side.ENEMY:
        return Side.PLAYER
    raise ValueError(f"{side} has no opponent")
