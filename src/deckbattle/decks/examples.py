"""Example decks for seeding matches."""

from deckbattle.simulation.state import Card, Deck, STARTING_HEALTH


def create_starter_deck() -> Deck:
    """Four-card deck every side starts with.

    The last card is drawn first when decks are not shuffled.
    """
    return Deck(
        cards=[
            Card(damage=3, health=1),
            Card(damage=1, health=1),
            Card(damage=0, health=5),
            Card(damage=2, health=1),
        ],
        health=STARTING_HEALTH,
    )


def create_wall_deck(size: int = 4) -> Deck:
    """Deck of zero-damage blockers; two of these never finish a match."""
    return Deck(
        cards=[Card(damage=0, health=5) for _ in range(size)],
        health=STARTING_HEALTH,
    )
