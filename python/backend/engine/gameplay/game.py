"""Core gameplay logic — flips cards, resolves pairs, runs the countdown."""

from __future__ import annotations

import dataclasses
import logging
import random
from enum import StrEnum
from typing import Any, Callable, Iterable

from backend.engine.gamegenerator import DeckGenerator
from backend.engine.gameplay.signals import announced
from backend.engine.gamestate import GameState, GameStatus
from backend.engine.scheduler import Scheduler, TimerHandle
from backend.models.announcement import (
    Announcement,
    AnnouncementKind,
    AnnouncementPriority,
)
from backend.models.card import Card
from backend.models.difficulty import Difficulty

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0
FLIP_BACK_DELAY = 1.0
LOW_TIME_THRESHOLD = 10

# Called as receiver(game, announcement=...)
Receiver = Callable[..., Any]


class InvalidCardIndexError(ValueError):
    """Raised when ``flip_card`` gets an index outside the grid."""


class FlipResult(StrEnum):
    IGNORED = "ignored"
    REVEALED = "revealed"
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    WON = "won"


class MemoryGame:
    """Orchestrates game sessions for one player.

    A session starts on construction and again on every ``start_game``.
    Commands and timer callbacks all run on the scheduler's thread; the
    host drives time by calling ``scheduler.run_due()`` from its loop.

    Announcements go out on the ``announced`` signal once the command or
    timer callback that raised them has finished updating state. Receivers
    passed as *listeners* are connected before the first session starts.
    """

    def __init__(
        self,
        difficulty: Difficulty,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        listeners: Iterable[Receiver] = (),
    ) -> None:
        self.scheduler = scheduler or Scheduler()
        self._rng = rng
        self._countdown: TimerHandle | None = None
        self._flip_back: TimerHandle | None = None
        self._outbox: list[Announcement] = []
        self.announcements: list[Announcement] = []
        self.state = GameState(difficulty, [])
        for listener in listeners:
            self.add_listener(listener)
        self.start_game(difficulty)

    # -- observation ----------------------------------------------------------

    def add_listener(self, listener: Receiver) -> None:
        announced.connect(listener, sender=self, weak=False)

    def remove_listener(self, listener: Receiver) -> None:
        announced.disconnect(listener, sender=self)

    @property
    def difficulty(self) -> Difficulty:
        return self.state.difficulty

    @property
    def cards(self) -> tuple[Card, ...]:
        """Copies of the cards; changing them does not touch the game."""
        return tuple(dataclasses.replace(c) for c in self.state.cards)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def time_remaining(self) -> int:
        return self.state.time_remaining

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def game_won(self) -> bool:
        return self.state.game_won

    @property
    def is_input_locked(self) -> bool:
        """True while two mismatched cards wait to flip back."""
        return self.state.pending_mismatch is not None

    @property
    def last_announcement(self) -> Announcement | None:
        return self.announcements[-1] if self.announcements else None

    def status(self) -> GameStatus:
        return self.state.status()

    def status_summary(self) -> str:
        return str(self.state.status())

    # -- commands -------------------------------------------------------------

    def start_game(self, difficulty: Difficulty | None = None) -> None:
        """Discard the current session and deal a fresh one."""
        self._cancel_timers()
        difficulty = difficulty or self.state.difficulty
        cards = DeckGenerator.build(difficulty, self._rng)
        self.state = GameState(difficulty, cards)
        self.announcements = []
        self._outbox = []

        self._countdown = self.scheduler.call_every(TICK_INTERVAL, self._tick)
        logger.info(
            "game started: %s (%d cards, %d pairs, %ds)",
            difficulty.value,
            len(cards),
            difficulty.number_of_pairs,
            difficulty.time_limit,
        )
        self._announce(
            AnnouncementKind.GAME_STARTED,
            f"Game started. {difficulty.description}",
        )
        self._publish()

    def flip_card(self, index: int) -> FlipResult:
        """Turn the card at *index* face up and resolve a pair if one is open.

        Flipping a face-up or matched card, flipping after the game ended,
        or flipping while a mismatch is on display does nothing.
        """
        state = self.state
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidCardIndexError(f"card index must be an int, got {index!r}")
        if not 0 <= index < len(state.cards):
            raise InvalidCardIndexError(
                f"card index {index} out of range 0..{len(state.cards) - 1}"
            )

        card = state.cards[index]
        if card.is_face_up or card.is_matched or state.game_over:
            logger.debug("flip %d ignored", index)
            return FlipResult.IGNORED
        if state.pending_mismatch is not None:
            logger.debug("flip %d ignored: mismatch on display", index)
            return FlipResult.IGNORED

        card.is_face_up = True
        logger.debug("flip %d: %s %s", index, card.color, card.pattern)
        self._announce(AnnouncementKind.CARD_REVEALED, f"Revealed {card.name} card")

        first = state.first_selected_index
        if first is None:
            state.first_selected_index = index
            result = FlipResult.REVEALED
        else:
            result = self._resolve(first, index)
        self._publish()
        return result

    # -- match resolution -----------------------------------------------------

    def _resolve(self, first: int, second: int) -> FlipResult:
        state = self.state
        a, b = state.cards[first], state.cards[second]
        state.first_selected_index = None

        if not a.matches(b):
            state.pending_mismatch = (first, second)
            self._flip_back = self.scheduler.call_later(
                FLIP_BACK_DELAY, self._flip_back_pending
            )
            logger.debug("mismatch %d/%d", first, second)
            self._announce(AnnouncementKind.MISMATCH, "No match. Cards will flip back")
            return FlipResult.MISMATCHED

        a.is_matched = b.is_matched = True
        state.score += 1
        logger.debug("match %d/%d, score %d", first, second, state.score)
        self._announce(
            AnnouncementKind.MATCH_FOUND,
            f"Match found! {a.name} cards matched. Score is now {state.score}",
        )

        if state.score == state.number_of_pairs:
            state.game_won = True
            state.game_over = True
            self._stop_countdown()
            logger.info(
                "game won with %ds remaining", state.time_remaining
            )
            self._announce(
                AnnouncementKind.GAME_WON,
                f"Congratulations! You won! All {state.score} pairs matched "
                f"with {state.time_remaining} seconds remaining",
                AnnouncementPriority.HIGH,
            )
            return FlipResult.WON
        return FlipResult.MATCHED

    def _flip_back_pending(self) -> None:
        state = self.state
        self._flip_back = None
        if state.pending_mismatch is None or state.game_over:
            return
        first, second = state.pending_mismatch
        a, b = state.cards[first], state.cards[second]
        if a.is_matched or b.is_matched:
            return
        a.is_face_up = b.is_face_up = False
        state.pending_mismatch = None
        state.first_selected_index = None
        logger.debug("flipped back %d/%d", first, second)

    # -- countdown ------------------------------------------------------------

    def _tick(self) -> None:
        state = self.state
        if state.game_over:
            self._stop_countdown()
            return

        if state.time_remaining > 0:
            state.time_remaining -= 1
            if (
                state.time_remaining == LOW_TIME_THRESHOLD
                and not state.low_time_warned
            ):
                state.low_time_warned = True
                self._announce(
                    AnnouncementKind.LOW_TIME,
                    f"Warning: Only {LOW_TIME_THRESHOLD} seconds remaining",
                    AnnouncementPriority.HIGH,
                )

        if state.time_remaining == 0:
            state.game_over = True
            self._stop_countdown()
            logger.info("time up with score %d/%d", state.score, state.number_of_pairs)
            self._announce(
                AnnouncementKind.TIME_UP,
                f"Time's up! Game over. Your final score is {state.score} "
                f"out of {state.number_of_pairs} pairs",
                AnnouncementPriority.HIGH,
            )
        self._publish()

    # -- helpers --------------------------------------------------------------

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _cancel_timers(self) -> None:
        self._stop_countdown()
        if self._flip_back is not None:
            self._flip_back.cancel()
            self._flip_back = None

    def _announce(
        self,
        kind: AnnouncementKind,
        message: str,
        priority: AnnouncementPriority = AnnouncementPriority.MEDIUM,
    ) -> None:
        announcement = Announcement(kind, message, priority)
        self.announcements.append(announcement)
        self._outbox.append(announcement)

    def _publish(self) -> None:
        """Send queued announcements; a failing receiver is logged and skipped."""
        while self._outbox:
            announcement = self._outbox.pop(0)
            for receiver in announced.receivers_for(self):
                try:
                    receiver(self, announcement=announcement)
                except Exception:
                    logger.exception(
                        "receiver %r failed on %s", receiver, announcement.kind
                    )
