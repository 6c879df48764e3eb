"""Game engine — flips, pair resolution, countdown and session resets.

All timing runs on ``SimulatedScheduler`` so a "second" is one call to
``advance(1.0)``; nothing here sleeps.
"""

from __future__ import annotations

import logging
import random

import pytest

from backend.engine.gameplay import (
    FlipResult,
    InvalidCardIndexError,
    MemoryGame,
    announced,
)
from backend.engine.gamestate import SessionState
from backend.engine.scheduler import SimulatedScheduler
from backend.models.announcement import (
    Announcement,
    AnnouncementKind,
    AnnouncementPriority,
)
from backend.models.difficulty import Difficulty
from conftest import filler_index, mismatch_indices, pair_indices


# -- helpers ------------------------------------------------------------------


def _snapshot(game: MemoryGame) -> list[tuple[bool, bool]]:
    return [(c.is_face_up, c.is_matched) for c in game.cards]


def _kinds(game: MemoryGame) -> list[AnnouncementKind]:
    return [a.kind for a in game.announcements]


def _match_all(game: MemoryGame) -> list[FlipResult]:
    results = []
    for a, b in pair_indices(game.cards):
        game.flip_card(a)
        results.append(game.flip_card(b))
        game.state.check_rep()
    return results


# -- start ----------------------------------------------------------------------


@pytest.mark.parametrize("difficulty", list(Difficulty), ids=lambda d: d.value)
def test_start_deals_fresh_session(difficulty: Difficulty) -> None:
    game = MemoryGame(difficulty, scheduler=SimulatedScheduler())

    assert len(game.cards) == difficulty.grid_size ** 2
    assert game.score == 0
    assert game.time_remaining == difficulty.time_limit
    assert not game.game_over and not game.game_won
    assert game.state.session is SessionState.ACTIVE
    assert game.last_announcement is not None
    assert game.last_announcement.kind is AnnouncementKind.GAME_STARTED
    assert game.last_announcement.message == f"Game started. {difficulty.description}"
    game.state.check_rep()


def test_start_game_resets_after_win(game: MemoryGame) -> None:
    _match_all(game)
    assert game.game_over and game.game_won

    old_ids = {c.id for c in game.cards}
    game.start_game()

    assert game.score == 0
    assert not game.game_over and not game.game_won
    assert game.time_remaining == 60
    assert old_ids.isdisjoint({c.id for c in game.cards})
    assert _kinds(game) == [AnnouncementKind.GAME_STARTED]


def test_start_game_can_switch_difficulty(game: MemoryGame) -> None:
    game.start_game(Difficulty.HARD)
    assert game.difficulty is Difficulty.HARD
    assert len(game.cards) == 49
    assert game.time_remaining == 180


def test_restart_replaces_countdown(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    scheduler.advance(30.0)
    assert game.time_remaining == 30

    game.start_game()
    scheduler.advance(1.0)

    assert game.time_remaining == 59
    assert scheduler.pending == 1


# -- flipping -------------------------------------------------------------------


def test_first_flip_reveals_and_waits(game: MemoryGame) -> None:
    (a, _), *_ = pair_indices(game.cards)

    assert game.flip_card(a) is FlipResult.REVEALED

    assert game.cards[a].is_face_up
    assert game.state.first_selected_index == a
    assert game.last_announcement.kind is AnnouncementKind.CARD_REVEALED
    assert game.last_announcement.message == f"Revealed {game.cards[a].name} card"
    game.state.check_rep()


def test_matching_pair_scores_synchronously(game: MemoryGame) -> None:
    a, b = pair_indices(game.cards)[0]

    game.flip_card(a)
    assert game.flip_card(b) is FlipResult.MATCHED

    assert game.cards[a].is_matched and game.cards[b].is_matched
    assert game.cards[a].is_face_up and game.cards[b].is_face_up
    assert game.score == 1
    assert game.state.first_selected_index is None
    last = game.last_announcement
    assert last.kind is AnnouncementKind.MATCH_FOUND
    assert last.message.endswith("Score is now 1")
    game.state.check_rep()


def test_mismatch_flips_back_after_one_second(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    a, b = mismatch_indices(game.cards)

    game.flip_card(a)
    assert game.flip_card(b) is FlipResult.MISMATCHED
    assert game.last_announcement.message == "No match. Cards will flip back"

    scheduler.advance(0.5)
    assert game.cards[a].is_face_up and game.cards[b].is_face_up
    assert game.is_input_locked
    game.state.check_rep()

    scheduler.advance(0.5)
    assert not game.cards[a].is_face_up and not game.cards[b].is_face_up
    assert game.state.first_selected_index is None
    assert not game.is_input_locked
    assert game.score == 0
    game.state.check_rep()


def test_board_locked_while_mismatch_showing(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    a, b = mismatch_indices(game.cards)
    other = next(
        i for i in range(len(game.cards)) if i not in (a, b)
    )
    game.flip_card(a)
    game.flip_card(b)

    assert game.flip_card(other) is FlipResult.IGNORED
    assert not game.cards[other].is_face_up

    scheduler.advance(1.0)
    assert game.flip_card(other) is FlipResult.REVEALED


@pytest.mark.parametrize("step", ["face_up", "matched"])
def test_flipping_shown_card_is_noop(game: MemoryGame, step: str) -> None:
    a, b = pair_indices(game.cards)[0]
    game.flip_card(a)
    if step == "matched":
        game.flip_card(b)
    before = _snapshot(game)
    count = len(game.announcements)

    assert game.flip_card(a) is FlipResult.IGNORED
    assert _snapshot(game) == before
    assert len(game.announcements) == count


def test_filler_never_matches(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    f = filler_index(game.cards)
    other = pair_indices(game.cards)[0][0]

    game.flip_card(f)
    assert game.last_announcement.message == "Revealed Blank card"
    assert game.flip_card(other) is FlipResult.MISMATCHED

    scheduler.advance(1.0)
    assert not game.cards[f].is_face_up


@pytest.mark.parametrize("index", [-1, 9, 100])
def test_out_of_range_index_rejected(game: MemoryGame, index: int) -> None:
    with pytest.raises(InvalidCardIndexError):
        game.flip_card(index)


@pytest.mark.parametrize("index", ["0", 1.0, None, True])
def test_non_integer_index_rejected(game: MemoryGame, index: object) -> None:
    with pytest.raises(ValueError):
        game.flip_card(index)  # type: ignore[arg-type]


# -- winning ------------------------------------------------------------------


@pytest.mark.parametrize("difficulty", list(Difficulty), ids=lambda d: d.value)
def test_matching_every_pair_wins(difficulty: Difficulty) -> None:
    scheduler = SimulatedScheduler()
    game = MemoryGame(difficulty, scheduler=scheduler, rng=random.Random(3))

    results = _match_all(game)

    assert results[-1] is FlipResult.WON
    assert all(r is FlipResult.MATCHED for r in results[:-1])
    assert game.score == difficulty.number_of_pairs
    assert game.game_over and game.game_won
    assert game.state.session is SessionState.WON_OVER
    # The filler is the only card left face down.
    assert [c.is_filler for c in game.cards if not c.is_face_up] == [True]


def test_win_stops_countdown(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    scheduler.advance(18.0)
    _match_all(game)

    assert game.time_remaining == 42
    assert game.last_announcement.kind is AnnouncementKind.GAME_WON
    assert game.last_announcement.priority is AnnouncementPriority.HIGH
    assert game.last_announcement.message == (
        "Congratulations! You won! All 4 pairs matched with 42 seconds remaining"
    )
    assert scheduler.pending == 0

    scheduler.advance(120.0)
    assert game.time_remaining == 42
    assert _kinds(game).count(AnnouncementKind.TIME_UP) == 0


# -- countdown ----------------------------------------------------------------


def test_countdown_times_out(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    scheduler.advance(59.0)
    assert game.time_remaining == 1
    assert not game.game_over

    scheduler.advance(1.0)
    assert game.time_remaining == 0
    assert game.game_over and not game.game_won
    assert game.state.session is SessionState.TIMED_OUT_OVER
    assert game.score == 0
    assert game.last_announcement.message == (
        "Time's up! Game over. Your final score is 0 out of 4 pairs"
    )
    assert scheduler.pending == 0


def test_low_time_warning_fires_once(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    scheduler.advance(49.0)
    assert AnnouncementKind.LOW_TIME not in _kinds(game)

    scheduler.advance(1.0)
    assert game.time_remaining == 10
    assert game.last_announcement.kind is AnnouncementKind.LOW_TIME
    assert game.last_announcement.message == "Warning: Only 10 seconds remaining"

    scheduler.advance(30.0)
    assert _kinds(game).count(AnnouncementKind.LOW_TIME) == 1
    assert _kinds(game).count(AnnouncementKind.TIME_UP) == 1


def test_low_time_warning_rearms_on_restart(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    scheduler.advance(50.0)
    assert game.state.low_time_warned

    game.start_game()
    assert not game.state.low_time_warned

    scheduler.advance(50.0)
    assert game.time_remaining == 10
    assert _kinds(game) == [AnnouncementKind.GAME_STARTED, AnnouncementKind.LOW_TIME]


def test_no_mutation_after_game_over(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    a, _ = pair_indices(game.cards)[0]
    scheduler.advance(60.0)
    before = _snapshot(game)

    assert game.flip_card(a) is FlipResult.IGNORED
    scheduler.advance(10.0)

    assert _snapshot(game) == before
    assert game.score == 0
    assert game.time_remaining == 0


def test_flip_back_skipped_once_game_is_over(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    a, b = mismatch_indices(game.cards)
    scheduler.advance(59.0)
    game.flip_card(a)
    game.flip_card(b)

    scheduler.advance(1.0)

    assert game.game_over
    assert game.cards[a].is_face_up and game.cards[b].is_face_up
    game.state.check_rep()


def test_stale_flip_back_does_not_touch_new_session(
    game: MemoryGame, scheduler: SimulatedScheduler
) -> None:
    a, b = mismatch_indices(game.cards)
    game.flip_card(a)
    game.flip_card(b)
    scheduler.advance(0.5)

    game.start_game()
    first = pair_indices(game.cards)[0][0]
    game.flip_card(first)
    scheduler.advance(1.0)

    assert game.cards[first].is_face_up
    assert game.state.first_selected_index == first
    game.state.check_rep()


# -- status and listeners -------------------------------------------------------


def test_status_summary(game: MemoryGame, scheduler: SimulatedScheduler) -> None:
    a, b = pair_indices(game.cards)[0]
    game.flip_card(a)
    game.flip_card(b)
    scheduler.advance(1.0)

    assert game.status_summary() == (
        "Score: 1 out of 4 pairs matched. 3 pairs remaining. "
        "Time: 0 minutes and 59 seconds"
    )
    status = game.status()
    assert (status.score, status.pairs_remaining) == (1, 3)
    assert (status.minutes, status.seconds) == (0, 59)


def test_status_summary_splits_minutes() -> None:
    game = MemoryGame(Difficulty.MEDIUM, scheduler=SimulatedScheduler())
    assert game.status_summary().endswith("Time: 2 minutes and 0 seconds")


def test_listeners_receive_announcements(game: MemoryGame) -> None:
    heard: list[str] = []

    def listener(sender: MemoryGame, announcement: Announcement) -> None:
        assert sender is game
        heard.append(announcement.message)

    game.add_listener(listener)
    a, b = pair_indices(game.cards)[0]
    game.flip_card(a)
    game.remove_listener(listener)
    game.flip_card(b)

    assert heard == [f"Revealed {game.cards[a].name} card"]


def test_constructor_listeners_hear_first_game_start(
    scheduler: SimulatedScheduler,
) -> None:
    heard: list[AnnouncementKind] = []

    def listener(sender: MemoryGame, announcement: Announcement) -> None:
        heard.append(announcement.kind)

    MemoryGame(Difficulty.EASY, scheduler=scheduler, listeners=[listener])

    assert heard == [AnnouncementKind.GAME_STARTED]


def test_signal_receivers_hear_engines_built_later(
    scheduler: SimulatedScheduler,
) -> None:
    heard: list[tuple[MemoryGame, AnnouncementKind]] = []

    def receiver(sender: MemoryGame, announcement: Announcement) -> None:
        heard.append((sender, announcement.kind))

    with announced.connected_to(receiver):
        game = MemoryGame(Difficulty.EASY, scheduler=scheduler)

    assert heard == [(game, AnnouncementKind.GAME_STARTED)]


def test_announcements_follow_state_changes(game: MemoryGame) -> None:
    seen: list[tuple[AnnouncementKind, bool, int]] = []

    def listener(sender: MemoryGame, announcement: Announcement) -> None:
        seen.append(
            (announcement.kind, sender.is_input_locked, sender.scheduler.pending)
        )

    game.add_listener(listener)
    a, b = mismatch_indices(game.cards)
    game.flip_card(a)
    game.flip_card(b)

    # countdown plus the scheduled flip-back
    assert seen[-1] == (AnnouncementKind.MISMATCH, True, 2)


def test_failing_listener_does_not_strand_flip_back(
    game: MemoryGame, scheduler: SimulatedScheduler, caplog: pytest.LogCaptureFixture
) -> None:
    heard: list[AnnouncementKind] = []

    def broken(sender: MemoryGame, announcement: Announcement) -> None:
        if announcement.kind is AnnouncementKind.MISMATCH:
            raise RuntimeError("screen reader went away")

    def listener(sender: MemoryGame, announcement: Announcement) -> None:
        heard.append(announcement.kind)

    game.add_listener(broken)
    game.add_listener(listener)
    a, b = mismatch_indices(game.cards)
    game.flip_card(a)
    with caplog.at_level(logging.ERROR, logger="backend.engine.gameplay.game"):
        assert game.flip_card(b) is FlipResult.MISMATCHED

    assert "screen reader went away" in caplog.text
    assert heard[-1] is AnnouncementKind.MISMATCH

    scheduler.advance(1.0)
    assert not game.is_input_locked
    assert not game.cards[a].is_face_up and not game.cards[b].is_face_up
    game.state.check_rep()

    other = pair_indices(game.cards)[2][0]
    assert game.flip_card(other) is FlipResult.REVEALED


def test_cards_view_is_detached(game: MemoryGame) -> None:
    snapshot = game.cards
    snapshot[0].is_face_up = True
    snapshot[0].is_matched = True

    assert not game.cards[0].is_face_up
    assert not game.cards[0].is_matched
    assert game.cards[0].id == snapshot[0].id
    game.state.check_rep()
