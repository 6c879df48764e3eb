"""Plain-text notifications emitted by the engine for screen readers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AnnouncementKind(StrEnum):
    GAME_STARTED = "game_started"
    CARD_REVEALED = "card_revealed"
    MATCH_FOUND = "match_found"
    MISMATCH = "mismatch"
    LOW_TIME = "low_time"
    GAME_WON = "game_won"
    TIME_UP = "time_up"


class AnnouncementPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Announcement:
    kind: AnnouncementKind
    message: str
    priority: AnnouncementPriority = AnnouncementPriority.MEDIUM

    def __str__(self) -> str:
        return self.message
