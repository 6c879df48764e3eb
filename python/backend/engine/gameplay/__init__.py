from backend.engine.gameplay.game import (
    FLIP_BACK_DELAY,
    LOW_TIME_THRESHOLD,
    TICK_INTERVAL,
    FlipResult,
    InvalidCardIndexError,
    MemoryGame,
)
from backend.engine.gameplay.signals import announced

__all__ = [
    "FLIP_BACK_DELAY",
    "LOW_TIME_THRESHOLD",
    "TICK_INTERVAL",
    "FlipResult",
    "InvalidCardIndexError",
    "MemoryGame",
    "announced",
]
