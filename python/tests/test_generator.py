"""Deck generator — size, pair multiplicity, filler and shuffling."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import DeckGenerator
from backend.models.card import CardColor, CardPattern
from backend.models.difficulty import Difficulty


def _ids(d: Difficulty) -> str:
    return d.value


@pytest.mark.parametrize("difficulty", list(Difficulty), ids=_ids)
def test_deck_fills_grid(difficulty: Difficulty) -> None:
    deck = DeckGenerator.build(difficulty, random.Random(0))
    assert len(deck) == difficulty.grid_size ** 2


@pytest.mark.parametrize("difficulty", list(Difficulty), ids=_ids)
def test_every_pair_appears_exactly_twice(difficulty: Difficulty) -> None:
    deck = DeckGenerator.build(difficulty, random.Random(1))
    identities = Counter(
        (c.color, c.pattern) for c in deck if not c.is_filler
    )
    assert len(identities) == difficulty.number_of_pairs
    assert set(identities.values()) == {2}


@pytest.mark.parametrize("difficulty", list(Difficulty), ids=_ids)
def test_single_filler_pads_odd_grid(difficulty: Difficulty) -> None:
    deck = DeckGenerator.build(difficulty, random.Random(2))
    fillers = [c for c in deck if c.is_filler]
    assert difficulty.has_filler
    assert len(fillers) == 1
    assert fillers[0].color is CardColor.GRAY
    assert fillers[0].pattern is None
    assert not any(fillers[0].matches(c) for c in deck)


@pytest.mark.parametrize("difficulty", list(Difficulty), ids=_ids)
def test_cards_start_face_down(difficulty: Difficulty) -> None:
    deck = DeckGenerator.build(difficulty)
    assert not any(c.is_face_up or c.is_matched for c in deck)
    assert len({c.id for c in deck}) == len(deck)


def test_pair_identity_cycles_patterns() -> None:
    assert DeckGenerator.pair_identity(0) == (CardColor.RED, CardPattern.CIRCLE)
    assert DeckGenerator.pair_identity(10)[1] is CardPattern.CIRCLE
    # Colours do not cycle within the largest preset.
    colors = {DeckGenerator.pair_identity(i)[0] for i in range(24)}
    assert len(colors) == 24


def test_shuffle_is_not_identity() -> None:
    """Statistical: 20 shuffles of 49 cards all landing in order is ~0."""
    ordered = [
        (c.color, c.pattern) for c in DeckGenerator.ordered(Difficulty.HARD)
    ]
    rng = random.Random(1234)
    shuffled = [
        [(c.color, c.pattern) for c in DeckGenerator.build(Difficulty.HARD, rng)]
        for _ in range(20)
    ]
    assert any(s != ordered for s in shuffled)
    assert len({tuple(s) for s in shuffled}) > 1


def test_seeded_builds_are_reproducible() -> None:
    a = DeckGenerator.build(Difficulty.MEDIUM, random.Random(99))
    b = DeckGenerator.build(Difficulty.MEDIUM, random.Random(99))
    assert [(c.color, c.pattern) for c in a] == [(c.color, c.pattern) for c in b]
