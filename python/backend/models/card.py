"""Card model for the colour-matching game."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum


class CardColor(StrEnum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    PINK = "pink"
    MINT = "mint"
    CYAN = "cyan"
    INDIGO = "indigo"
    TEAL = "teal"
    BROWN = "brown"
    LIME = "lime"
    MAGENTA = "magenta"
    NAVY = "navy"
    OLIVE = "olive"
    MAROON = "maroon"
    CORAL = "coral"
    GOLD = "gold"
    LAVENDER = "lavender"
    SALMON = "salmon"
    TURQUOISE = "turquoise"
    VIOLET = "violet"
    SILVER = "silver"
    # Reserved for the filler card, never part of a pair.
    GRAY = "gray"

    @classmethod
    def palette(cls) -> list[CardColor]:
        """Pair colours in their fixed assignment order."""
        return [c for c in cls if c is not cls.GRAY]


class CardPattern(StrEnum):
    """Shape shown on a face-up card, a second channel besides colour."""

    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    STAR = "star"
    HEART = "heart"
    DIAMOND = "diamond"
    CROSS = "cross"
    HEXAGON = "hexagon"
    PENTAGON = "pentagon"
    OVAL = "oval"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def for_index(cls, index: int) -> CardPattern:
        members = list(cls)
        return members[index % len(members)]


@dataclass
class Card:
    """A single card on the grid.

    Cards are created face down by the deck generator and then mutated in
    place by the engine. ``pattern`` is ``None`` only for the filler card.
    """

    color: CardColor
    pattern: CardPattern | None = None
    is_face_up: bool = False
    is_matched: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def filler(cls) -> Card:
        return cls(color=CardColor.GRAY, pattern=None)

    # -- queries --------------------------------------------------------------

    @property
    def is_filler(self) -> bool:
        return self.color is CardColor.GRAY

    @property
    def name(self) -> str:
        """Pattern name used in spoken messages."""
        return self.pattern.display_name if self.pattern else "Blank"

    def matches(self, other: Card) -> bool:
        """Two cards form a pair when their colours are equal."""
        if self.is_filler or other.is_filler:
            return False
        return self.color == other.color

    # -- accessibility --------------------------------------------------------

    @property
    def accessibility_label(self) -> str:
        if self.is_matched:
            return f"Matched {self.name} card"
        if self.is_face_up:
            return f"{self.name} card, face up"
        return "Face down card"

    @property
    def accessibility_hint(self) -> str:
        if self.is_matched:
            return "This card has been matched"
        if self.is_face_up:
            return "This card is currently showing"
        return "Double tap to reveal this card"
