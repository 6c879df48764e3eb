"""Colour values and pattern glyphs shared by every frontend."""

from __future__ import annotations

from backend.models.card import Card, CardColor, CardPattern

CARD_HEX: dict[CardColor, str] = {
    CardColor.RED: "#f38ba8",
    CardColor.BLUE: "#89b4fa",
    CardColor.GREEN: "#a6e3a1",
    CardColor.YELLOW: "#f9e2af",
    CardColor.PURPLE: "#cba6f7",
    CardColor.ORANGE: "#fab387",
    CardColor.PINK: "#f5c2e7",
    CardColor.MINT: "#94e2d5",
    CardColor.CYAN: "#89dceb",
    CardColor.INDIGO: "#7287fd",
    CardColor.TEAL: "#179299",
    CardColor.BROWN: "#a0724e",
    CardColor.LIME: "#c6f26e",
    CardColor.MAGENTA: "#ea76cb",
    CardColor.NAVY: "#3b4d8f",
    CardColor.OLIVE: "#8f9a4a",
    CardColor.MAROON: "#a8324a",
    CardColor.CORAL: "#ff7f6e",
    CardColor.GOLD: "#e5c35a",
    CardColor.LAVENDER: "#b4befe",
    CardColor.SALMON: "#f2a58e",
    CardColor.TURQUOISE: "#40c8c0",
    CardColor.VIOLET: "#8839ef",
    CardColor.SILVER: "#bac2de",
    CardColor.GRAY: "#6c7086",
}

# Face-down cards, board background and text.
FACE_DOWN_HEX = "#45475a"
BASE_HEX = "#1e1e2e"
TEXT_HEX = "#cdd6f4"

GLYPHS: dict[CardPattern, str] = {
    CardPattern.CIRCLE: "●",
    CardPattern.SQUARE: "■",
    CardPattern.TRIANGLE: "▲",
    CardPattern.STAR: "★",
    CardPattern.HEART: "♥",
    CardPattern.DIAMOND: "◆",
    CardPattern.CROSS: "✚",
    CardPattern.HEXAGON: "⬢",
    CardPattern.PENTAGON: "⬟",
    CardPattern.OVAL: "⬮",
}
BLANK_GLYPH = "·"
HIDDEN_GLYPH = "?"


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def card_hex(card: Card) -> str:
    """Fill colour for *card* as currently visible."""
    if not (card.is_face_up or card.is_matched):
        return FACE_DOWN_HEX
    return CARD_HEX[card.color]


def card_glyph(card: Card) -> str:
    """Symbol for *card* as currently visible."""
    if not (card.is_face_up or card.is_matched):
        return HIDDEN_GLYPH
    if card.pattern is None:
        return BLANK_GLYPH
    return GLYPHS[card.pattern]
