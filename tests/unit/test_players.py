"""Tests for per-side players."""

import random

from deckbattle.simulation.players import RandomPlayer, ScriptedPlayer
from deckbattle.decks.examples import create_starter_deck


def test_random_player_same_seed_same_choices() -> None:
    """Test two players with one seed shuffle and choose identically."""
    a = RandomPlayer(seed=42)
    b = RandomPlayer(seed=42)

    deck_a = create_starter_deck().cards
    deck_b = create_starter_deck().cards
    a.shuffle_deck(deck_a)
    b.shuffle_deck(deck_b)

    assert deck_a == deck_b
    assert [a.choose_slot([0, 1]) for _ in range(20)] == [b.choose_slot([0, 1]) for _ in range(20)]


def test_random_player_shuffle_keeps_cards() -> None:
    player = RandomPlayer(seed=3)
    cards = create_starter_deck().cards
    before = sorted((c.damage, c.health) for c in cards)

    player.shuffle_deck(cards)

    assert sorted((c.damage, c.health) for c in cards) == before


def test_random_player_chooses_open_slot() -> None:
    player = RandomPlayer(seed=0)
    for _ in range(50):
        assert player.choose_slot([0, 1]) in (0, 1)
    assert player.choose_slot([1]) == 1
    assert player.choose_slot([]) is None


def test_random_player_uses_both_slots() -> None:
    """Test slot choice is not stuck on one index."""
    player = RandomPlayer(seed=1)
    choices = {player.choose_slot([0, 1]) for _ in range(100)}
    assert choices == {0, 1}


def test_random_player_does_not_mutate_open_slots() -> None:
    player = RandomPlayer(seed=5)
    slots = [0, 1]
    player.choose_slot(slots)
    assert slots == [0, 1]


def test_from_rng_is_deterministic() -> None:
    """Test players seeded from equal seed generators behave the same."""
    a = RandomPlayer.from_rng(random.Random(9))
    b = RandomPlayer.from_rng(random.Random(9))
    assert a.rng.random() == b.rng.random()


def test_from_rng_gives_independent_streams() -> None:
    seed_rng = random.Random(9)
    a = RandomPlayer.from_rng(seed_rng)
    b = RandomPlayer.from_rng(seed_rng)
    assert [a.rng.random() for _ in range(5)] != [b.rng.random() for _ in range(5)]


def test_scripted_player_is_deterministic() -> None:
    player = ScriptedPlayer()
    cards = create_starter_deck().cards
    original = list(cards)

    player.shuffle_deck(cards)

    assert cards == original
    assert player.choose_slot([0, 1]) == 0
    assert player.choose_slot([1]) == 1
    assert player.choose_slot([]) is None
