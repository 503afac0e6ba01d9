"""Match simulation engine.

Every match is a small state machine over PLAY -> ATTACK -> PLAY ... -> HALT.
The simulator advances a match by exactly one phase per call, so a driver can
step many matches in lockstep, one phase per tick.
"""

import logging
import random
from typing import Callable, List, Optional, Set

from deckbattle.decks.examples import create_starter_deck
from deckbattle.simulation.players import RandomPlayer
from deckbattle.simulation.state import (
    ACTIVE_SLOTS,
    MAX_TURNS,
    Deck,
    Game,
    GamePhase,
    PlayArea,
    Side,
    SideState,
    opponent,
)

logger = logging.getLogger(__name__)


class SimulationError(Exception):
    """Raised when a match reaches an inconsistent state."""


class MatchSimulator:
    """Advances matches one phase at a time.

    Args:
        max_turns: Completed turns after which a match is forced to a draw.
            None disables the cap; matches where no side can deal damage
            then never halt.
    """

    def __init__(self, max_turns: Optional[int] = MAX_TURNS) -> None:
        self.max_turns = max_turns

    def tick(self, games: List[Game]) -> None:
        """Advance every game by one phase, in list order."""
        for game in games:
            self.advance(game)

    def advance(self, game: Game) -> None:
        """Advance a single game by one phase. Halted games are left alone."""
        if game.turn == GamePhase.HALT:
            return
        if game.side == Side.DRAW:
            raise SimulationError(
                f"Game {game.id} is drawn but still in phase {game.turn.value}"
            )

        if game.turn == GamePhase.PLAY:
            self._play(game)
        elif game.turn == GamePhase.ATTACK:
            self._attack(game)
        else:
            raise SimulationError(f"Game {game.id} has unknown phase {game.turn!r}")

    def _play(self, game: Game) -> None:
        side = game.active()
        side.player.shuffle_deck(side.deck.cards)
        card = side.deck.draw()

        if card is not None:
            slot = side.player.choose_slot(side.play_area.open_slots())
            if slot is not None:
                if slot >= ACTIVE_SLOTS or side.play_area.cards[slot] is not None:
                    raise SimulationError(
                        f"Game {game.id}: {game.side.value} chose unusable slot {slot}"
                    )
                side.play_area.cards[slot] = card
                logger.debug(f"Game {game.id}: {game.side.value} played {card} at {slot}")
            else:
                logger.debug(f"Game {game.id}: {game.side.value} discarded {card}, no open slot")
        else:
            logger.debug(f"Game {game.id}: {game.side.value} has no cards left")

        game.turn = GamePhase.ATTACK

    def _attack(self, game: Game) -> None:
        attack_area = game.active().play_area
        defender = game.defending()

        for slot in range(ACTIVE_SLOTS):
            attacker = attack_area.cards[slot]
            if attacker is None:
                continue
            damage = attacker.damage

            blocker = defender.play_area.cards[slot]
            if blocker is not None:
                blocker.health -= damage
                if blocker.health < 0:
                    defender.play_area.cards[slot] = None
                    logger.debug(f"Game {game.id}: destroyed blocker in slot {slot}")
            else:
                defender.deck.health -= damage
                if defender.deck.health <= 0:
                    game.turn = GamePhase.HALT
                    logger.debug(f"Game {game.id}: winner {game.side.value}")
                    return

        game.turn_count += 1
        if self.max_turns is not None and game.turn_count > self.max_turns:
            logger.debug(f"Game {game.id}: draw after {game.turn_count} turns")
            game.turn = GamePhase.HALT
            game.side = Side.DRAW
            return

        game.side = opponent(game.side)
        game.turn = GamePhase.PLAY


def create_game(
    game_id: int,
    seed_rng: random.Random,
    deck_factory: Callable[[], Deck] = create_starter_deck,
) -> Game:
    """Create a game with two fresh decks and independently seeded players."""
    player = SideState(
        deck=deck_factory(),
        play_area=PlayArea(),
        player=RandomPlayer.from_rng(seed_rng),
    )
    enemy = SideState(
        deck=deck_factory(),
        play_area=PlayArea(),
        player=RandomPlayer.from_rng(seed_rng),
    )
    _check_exclusive([player.deck, enemy.deck], set())
    return Game(id=game_id, player=player, enemy=enemy)


def create_games(
    count: int,
    seed: int,
    deck_factory: Callable[[], Deck] = create_starter_deck,
) -> List[Game]:
    """Create `count` games with ids 0..count-1, all derived from one seed."""
    seed_rng = random.Random(seed)
    games = [create_game(game_id, seed_rng, deck_factory) for game_id in range(count)]
    seen: Set[int] = set()
    for game in games:
        _check_exclusive([game.player.deck, game.enemy.deck], seen)
    return games


def _check_exclusive(decks: List[Deck], seen: Set[int]) -> None:
    """Fail if any deck or card object is already owned elsewhere."""
    for deck in decks:
        owned = [id(deck)] + [id(card) for card in deck.cards]
        if seen.intersection(owned) or len(set(owned)) != len(owned):
            raise SimulationError(
                "deck_factory must return a new Deck with new Card objects on every call"
            )
        seen.update(owned)


def simulate_match(
    game: Game,
    max_turns: Optional[int] = MAX_TURNS,
    max_ticks: Optional[int] = None,
) -> Game:
    """Run a single game until it halts and return it."""
    simulator = MatchSimulator(max_turns=max_turns)
    ticks = 0
    while not game.is_halted:
        if max_ticks is not None and ticks >= max_ticks:
            raise SimulationError(f"Game {game.id} did not halt within {max_ticks} ticks")
        simulator.advance(game)
        ticks += 1
    return game
