"""JSON serialization for decks and simulation results."""

import json
from dataclasses import asdict
from typing import Any, Dict

from deckbattle.simulation.state import Card, Deck, STARTING_HEALTH
from deckbattle.simulation.tally import SimulationResults


def deck_to_dict(deck: Deck) -> Dict[str, Any]:
    """Convert Deck to JSON-serializable dict."""
    return {
        "health": deck.health,
        "cards": [{"damage": c.damage, "health": c.health} for c in deck.cards],
    }


def deck_to_json(deck: Deck, indent: int = 2) -> str:
    """Serialize Deck to JSON string."""
    return json.dumps(deck_to_dict(deck), indent=indent)


def deck_from_dict(data: Dict[str, Any]) -> Deck:
    """Create Deck from dict.

    Raises:
        KeyError: If a card is missing its damage or health
        ValueError: If a value is not an integer, or deck health is not positive
    """
    cards = [_card_from_dict(c) for c in data["cards"]]
    health = data.get("health", STARTING_HEALTH)
    if not isinstance(health, int) or isinstance(health, bool):
        raise ValueError(f"Deck health must be an integer, got {health!r}")
    if health <= 0:
        raise ValueError(f"Deck health must be positive, got {health}")
    return Deck(cards=cards, health=health)


def deck_from_json(json_str: str) -> Deck:
    """Deserialize Deck from JSON string."""
    return deck_from_dict(json.loads(json_str))


def _card_from_dict(data: Dict[str, Any]) -> Card:
    damage = data["damage"]
    health = data["health"]
    for name, value in (("damage", damage), ("health", health)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Card {name} must be an integer, got {value!r}")
    return Card(damage=damage, health=health)


def results_to_dict(results: SimulationResults) -> Dict[str, Any]:
    """Convert SimulationResults to JSON-serializable dict."""
    d = asdict(results)
    d["turn_quartiles"] = list(results.turn_quartiles)
    return d
