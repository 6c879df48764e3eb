"""Builds shuffled decks of paired cards."""

from __future__ import annotations

import random

from backend.models.card import Card, CardColor, CardPattern
from backend.models.difficulty import Difficulty


class DeckGenerator:
    """Creates decks by laying out every pair and shuffling the lot."""

    @staticmethod
    def pair_identity(index: int) -> tuple[CardColor, CardPattern]:
        """Return the (colour, pattern) of pair *index*.

        Identity depends only on the index; position is what gets shuffled.
        """
        palette = CardColor.palette()
        return palette[index % len(palette)], CardPattern.for_index(index)

    @staticmethod
    def ordered(difficulty: Difficulty) -> list[Card]:
        """Return the unshuffled deck: pairs in index order, filler last."""
        cards: list[Card] = []
        for i in range(difficulty.number_of_pairs):
            color, pattern = DeckGenerator.pair_identity(i)
            cards.append(Card(color=color, pattern=pattern))
            cards.append(Card(color=color, pattern=pattern))
        if difficulty.has_filler:
            cards.append(Card.filler())
        return cards

    @staticmethod
    def build(
        difficulty: Difficulty, rng: random.Random | None = None
    ) -> list[Card]:
        """Return a uniformly shuffled deck for *difficulty*."""
        cards = DeckGenerator.ordered(difficulty)
        (rng or random).shuffle(cards)
        return cards
