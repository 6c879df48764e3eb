"""Shared fixtures: a simulated clock and a seeded engine per test."""

from __future__ import annotations

import random
from collections import defaultdict

import pytest

from backend.engine.gameplay import MemoryGame
from backend.engine.scheduler import SimulatedScheduler
from backend.models.card import Card
from backend.models.difficulty import Difficulty


# -- helpers ------------------------------------------------------------------


def pair_indices(cards: tuple[Card, ...] | list[Card]) -> list[tuple[int, int]]:
    """Return the index pairs of same-coloured cards, filler excluded."""
    by_color: dict[str, list[int]] = defaultdict(list)
    for i, card in enumerate(cards):
        if not card.is_filler:
            by_color[card.color].append(i)
    return [(idx[0], idx[1]) for idx in by_color.values()]


def mismatch_indices(cards: tuple[Card, ...] | list[Card]) -> tuple[int, int]:
    """Return two indices whose cards do not match."""
    (a, _), (b, _) = pair_indices(cards)[:2]
    return a, b


def filler_index(cards: tuple[Card, ...] | list[Card]) -> int:
    return next(i for i, c in enumerate(cards) if c.is_filler)


# -- fixtures -----------------------------------------------------------------


@pytest.fixture
def scheduler() -> SimulatedScheduler:
    return SimulatedScheduler()


@pytest.fixture
def game(scheduler: SimulatedScheduler) -> MemoryGame:
    return MemoryGame(Difficulty.EASY, scheduler=scheduler, rng=random.Random(7))
