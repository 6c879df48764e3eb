"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for difficulty selection and play.
"""

from __future__ import annotations

import random
import sys

from backend.engine.gameplay import LOW_TIME_THRESHOLD, MemoryGame
from backend.models.difficulty import Difficulty
from backend.models.timeformat import format_clock
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.theme import card_glyph, card_hex, hex_to_rgb


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected difficulty)

_POLL = 0.1  # seconds between scheduler polls while waiting for a key


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _bg(hex_value: str) -> str:
    r, g, b = hex_to_rgb(hex_value)
    return f"\033[48;2;{r};{g};{b}m\033[30m"


def _stats_line(game: MemoryGame) -> str:
    t = game.time_remaining
    tc = _RED if t <= LOW_TIME_THRESHOLD else _Y
    return (
        f"  Score: {_Y}{game.score} / {game.difficulty.number_of_pairs}{_R}  |  "
        f"Time: {tc}{format_clock(t)}{_R}"
    )


# -- grid rendering -------------------------------------------------------------


def _render_grid(game: MemoryGame, cursor: int | None) -> str:
    """Return the card grid with the cursor cell bracketed."""
    n = game.difficulty.grid_size
    lines: list[str] = []
    for r in range(n):
        cells: list[str] = []
        for c in range(n):
            i = r * n + c
            card = game.cards[i]
            left, right = ("[", "]") if i == cursor else (" ", " ")
            face = f"{_bg(card_hex(card))} {card_glyph(card)} {_R}"
            cells.append(f"{_BOLD}{left}{_R}{face}{_BOLD}{right}{_R}")
        lines.append("  " + "".join(cells))
        lines.append("")
    return "\n".join(lines)


def _move_cursor(cursor: int, action: str, n: int) -> int:
    r, c = divmod(cursor, n)
    if action == "up":
        r = (r - 1) % n
    elif action == "down":
        r = (r + 1) % n
    elif action == "left":
        c = (c - 1) % n
    elif action == "right":
        c = (c + 1) % n
    return r * n + c


# -- menu screen --------------------------------------------------------------


def _show_menu(sel: Difficulty) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}       C O L O R   M A T C H          {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    print(f"  {_DIM}Match all pairs before time runs out!{_R}")
    print()

    line = ""
    for d in Difficulty:
        if d is sel:
            line += f"  {_BG_SEL} {d.display_name} {_R}"
        else:
            line += f"  {_DIM}{d.display_name}{_R}"
    print(f"    Level:{line}")
    print(f"    {_DIM}{sel.description}{_R}")
    print(f"    {_DIM}← → to change{_R}")
    print()
    print(f"    {_C}1{_R}  Play")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


# -- game screens -------------------------------------------------------------


def _show_game(game: MemoryGame, cursor: int, status: str) -> None:
    _clear()
    d = game.difficulty
    n = d.grid_size
    print(f"  {_C}=== Color Match ({d.display_name}, {n}×{n}) ==={_R}")
    print()
    print(_render_grid(game, None if game.game_over else cursor))
    print(_stats_line(game))
    print()
    if status:
        print(f"  {status}")
    elif game.last_announcement is not None:
        print(f"  {_DIM}{game.last_announcement.message}{_R}")
    print()
    if game.game_over:
        if game.game_won:
            print(f"  {_G}★ You win! ★{_R}")
        else:
            print(f"  {_RED}⏰ Time's up!{_R}")
        print(
            f"  Final score: {_Y}{game.score} / {d.number_of_pairs}{_R}"
        )
        print()
        print(f"  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")
    else:
        print(
            f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
            f"{_C}Space{_R}: flip  |  "
            f"{_C}H{_R}: status  |  "
            f"{_C}R{_R}: restart  |  "
            f"{_C}Q{_R}: back"
        )
    sys.stdout.flush()


# -- game loop ----------------------------------------------------------------


def _play_game(difficulty: Difficulty, seed: int | None) -> None:
    rng = random.Random(seed) if seed is not None else None
    game = MemoryGame(difficulty, rng=rng)
    cursor = 0
    status = ""
    dirty = True

    while True:
        if dirty:
            _show_game(game, cursor, status)
            dirty = False

        key = get_key_timeout(_POLL)
        if game.scheduler.run_due():
            dirty = True
        if key is None:
            continue

        dirty = True
        status = ""
        if key in ("up", "down", "left", "right"):
            cursor = _move_cursor(cursor, key, difficulty.grid_size)
        elif key == "flip":
            game.flip_card(cursor)
        elif key == "status":
            status = game.status_summary()
        elif key == "restart":
            game.start_game()
            cursor = 0
        elif key in ("quit", "menu"):
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(difficulty: Difficulty, seed: int | None) -> None:
    levels = list(Difficulty)
    sel = levels.index(difficulty)

    while True:
        _show_menu(levels[sel])
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key == "left":
            sel = max(0, sel - 1)
        elif key == "right":
            sel = min(len(levels) - 1, sel + 1)
        elif key in ("1", "flip"):
            _play_game(levels[sel], seed)


# -- public entry point -------------------------------------------------------


def run(difficulty: Difficulty = Difficulty.EASY, seed: int | None = None) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(difficulty, seed)
