from backend.models.announcement import (
    Announcement,
    AnnouncementKind,
    AnnouncementPriority,
)
from backend.models.card import Card, CardColor, CardPattern
from backend.models.difficulty import Difficulty
from backend.models.timeformat import describe_duration, format_clock

__all__ = [
    "Announcement",
    "AnnouncementKind",
    "AnnouncementPriority",
    "Card",
    "CardColor",
    "CardPattern",
    "Difficulty",
    "describe_duration",
    "format_clock",
]
