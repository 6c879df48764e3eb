"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.models.card import Card
from backend.models.difficulty import Difficulty


class SessionState(StrEnum):
    ACTIVE = "active"
    WON_OVER = "won_over"
    TIMED_OUT_OVER = "timed_out_over"


@dataclass(frozen=True)
class GameStatus:
    """Snapshot of score and time, rendered as the spoken status line."""

    score: int
    total_pairs: int
    pairs_remaining: int
    minutes: int
    seconds: int

    def __str__(self) -> str:
        return (
            f"Score: {self.score} out of {self.total_pairs} pairs matched. "
            f"{self.pairs_remaining} pairs remaining. "
            f"Time: {self.minutes} minutes and {self.seconds} seconds"
        )


class GameState:
    """Holds the cards, score, countdown and end-of-game flags.

    Only the engine mutates this object.  ``pending_mismatch`` is the pair
    of indices shown face up during the one-second mismatch window; while
    it is set the board takes no input.
    """

    def __init__(self, difficulty: Difficulty, cards: list[Card]) -> None:
        self.difficulty = difficulty
        self.cards = cards
        self.score: int = 0
        self.time_remaining: int = difficulty.time_limit
        self.game_over: bool = False
        self.game_won: bool = False
        self.first_selected_index: int | None = None
        self.pending_mismatch: tuple[int, int] | None = None
        self.low_time_warned: bool = False

    # -- queries --------------------------------------------------------------

    @property
    def number_of_pairs(self) -> int:
        return self.difficulty.number_of_pairs

    @property
    def pairs_remaining(self) -> int:
        return self.number_of_pairs - self.score

    @property
    def matched_count(self) -> int:
        return sum(1 for c in self.cards if c.is_matched)

    @property
    def session(self) -> SessionState:
        if not self.game_over:
            return SessionState.ACTIVE
        return SessionState.WON_OVER if self.game_won else SessionState.TIMED_OUT_OVER

    @property
    def is_terminal(self) -> bool:
        return self.game_over

    def status(self) -> GameStatus:
        m, s = divmod(self.time_remaining, 60)
        return GameStatus(
            score=self.score,
            total_pairs=self.number_of_pairs,
            pairs_remaining=self.pairs_remaining,
            minutes=m,
            seconds=s,
        )

    # -- representation invariant ---------------------------------------------

    def check_rep(self) -> None:
        d = self.difficulty
        assert len(self.cards) == d.cell_count
        assert 0 <= self.score <= d.number_of_pairs
        assert 0 <= self.time_remaining <= d.time_limit
        assert self.score == self.matched_count // 2
        assert not self.game_won or self.game_over

        showing: list[int] = []
        for i, card in enumerate(self.cards):
            if card.is_matched:
                assert card.is_face_up
            elif card.is_face_up:
                showing.append(i)

        if self.pending_mismatch is not None:
            assert self.first_selected_index is None
            assert sorted(showing) == sorted(self.pending_mismatch)
        elif self.first_selected_index is not None:
            assert showing == [self.first_selected_index]
        else:
            assert not showing
