"""Rich terminal frontend — coloured card grid, panels and status line.

Uses the ``rich`` library for styled output while sharing the same
input handler and backend as the vanilla CLI.
"""

from __future__ import annotations

import random

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import LOW_TIME_THRESHOLD, MemoryGame
from backend.models.announcement import AnnouncementPriority
from backend.models.difficulty import Difficulty
from backend.models.timeformat import format_clock
from frontend.cli.input_handler import get_key, get_key_timeout
from frontend.theme import BASE_HEX, card_glyph, card_hex

console = Console()

_POLL = 0.1

_PRIORITY_STYLE = {
    AnnouncementPriority.LOW: "dim",
    AnnouncementPriority.MEDIUM: "cyan",
    AnnouncementPriority.HIGH: "bold yellow",
}


# -- grid rendering -------------------------------------------------------------


def _render_grid(game: MemoryGame, cursor: int | None) -> Table:
    """Return a Rich Table with one coloured cell per card."""
    n = game.difficulty.grid_size
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(n):
        table.add_column(width=3, justify="center")

    for r in range(n):
        cells: list[Text] = []
        for c in range(n):
            i = r * n + c
            card = game.cards[i]
            style = f"bold {BASE_HEX} on {card_hex(card)}"
            if i == cursor:
                style += " reverse"
            cells.append(Text(f" {card_glyph(card)} ", style=style))
        table.add_row(*cells)

    return table


def _move_cursor(cursor: int, action: str, n: int) -> int:
    r, c = divmod(cursor, n)
    dr, dc = {"up": (-1, 0), "down": (1, 0), "left": (0, -1), "right": (0, 1)}[action]
    return ((r + dr) % n) * n + (c + dc) % n


# -- menu screen --------------------------------------------------------------


def _draw_menu(sel: Difficulty) -> None:
    console.clear()

    levels = Text()
    for i, d in enumerate(Difficulty):
        if i:
            levels.append("  ")
        if d is sel:
            levels.append(f" {d.display_name} ", style="bold green on #313244")
        else:
            levels.append(f" {d.display_name} ", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(Text("Match all pairs before time runs out!", style="dim")),
        Text(""),
        Align.center(levels),
        Align.center(Text(sel.description, style="dim")),
        Align.center(Text("  ← →  change level", style="dim")),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]C O L O R   M A T C H[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screen ----------------------------------------------------------------


def _draw_game(game: MemoryGame, cursor: int, status: str) -> None:
    console.clear()
    d = game.difficulty

    stats = Text()
    stats.append("  Score: ", style="dim")
    stats.append(f"{game.score} / {d.number_of_pairs}", style="bold yellow")
    stats.append("    Time: ", style="dim")
    time_style = "bold red" if game.time_remaining <= LOW_TIME_THRESHOLD else "bold yellow"
    stats.append(format_clock(game.time_remaining), style=time_style)

    if status:
        message = Text(status, style="white")
    elif game.last_announcement is not None:
        a = game.last_announcement
        message = Text(a.message, style=_PRIORITY_STYLE[a.priority])
    else:
        message = Text("")

    parts = [
        Align.center(_render_grid(game, None if game.game_over else cursor)),
        Text(""),
        Align.center(stats),
        Align.center(message),
    ]

    if game.game_over:
        result = Text()
        if game.game_won:
            result.append("\n  ★ ", style="bold yellow")
            result.append("You win!", style="bold green")
            result.append(" ★\n", style="bold yellow")
            border, title_style = "bold green", "bold green"
        else:
            result.append("\n  Time's up!\n", style="bold red")
            border, title_style = "red", "bold red"
        parts.append(Align.center(result))
        controls = Text("  R  play again     Q  back", style="dim")
    else:
        border, title_style = "bright_blue", "bold cyan"
        controls = Text()
        controls.append("  ↑↓←→", style="bold cyan")
        controls.append(" / ", style="dim")
        controls.append("WASD", style="bold cyan")
        controls.append("  move   ", style="dim")
        controls.append("Space", style="bold cyan")
        controls.append("  flip   ", style="dim")
        controls.append("H", style="bold cyan")
        controls.append("  status   ", style="dim")
        controls.append("R", style="bold cyan")
        controls.append("  restart   ", style="dim")
        controls.append("Q", style="bold cyan")
        controls.append("  back", style="dim")

    n = d.grid_size
    panel = Panel(
        Group(*parts),
        title=f"[{title_style}]Color Match  {d.display_name}  {n}×{n}[/{title_style}]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(controls))


# -- game loop ----------------------------------------------------------------


def _play_game(difficulty: Difficulty, seed: int | None) -> None:
    rng = random.Random(seed) if seed is not None else None
    game = MemoryGame(difficulty, rng=rng)
    cursor = 0
    status = ""
    dirty = True

    while True:
        if dirty:
            _draw_game(game, cursor, status)
            dirty = False

        # Short timeout so the countdown and flip-back keep running.
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
        _draw_menu(levels[sel])
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
            return
        elif key == "left":
            sel = max(0, sel - 1)
        elif key == "right":
            sel = min(len(levels) - 1, sel + 1)
        elif key in ("1", "flip"):
            _play_game(levels[sel], seed)


# -- public entry point -------------------------------------------------------


def run(difficulty: Difficulty = Difficulty.EASY, seed: int | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(difficulty, seed)
