#!/usr/bin/env python3
"""Color Match — a timed memory game.

Usage::

    python main.py                      # interactive menu
    python main.py -f rich -d medium    # Rich terminal, 5×5
    python main.py -f pygame --seed 7   # Pygame GUI, reproducible deck
    python main.py --describe           # list the difficulty presets
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models.difficulty import Difficulty  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel, log_file: Optional[Path]) -> None:
    # Terminal frontends own the screen, so logs go to a file when given.
    logging.basicConfig(
        level=getattr(logging, level.value),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        filename=str(log_file) if log_file else None,
    )


def _print_presets() -> None:
    print("\n  === DIFFICULTY LEVELS ===\n")
    for d in Difficulty:
        n = d.grid_size
        print(
            f"  {d.display_name:<7} {n}x{n} grid  "
            f"{d.number_of_pairs:>2} pairs  {d.time_limit:>3}s"
        )
    print()


def _ask_difficulty(default: Difficulty) -> Difficulty:
    raw = input(f"  Difficulty (easy/medium/hard, default {default.value}): ")
    raw = raw.strip().lower() or default.value
    try:
        return Difficulty(raw)
    except ValueError:
        print(f"  Unknown level — using {default.value}.")
        return default


def _launch(frontend: Frontend, difficulty: Difficulty, seed: Optional[int]) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(difficulty=difficulty, seed=seed)


def _menu_loop(difficulty: Difficulty, seed: Optional[int]) -> None:
    while True:
        print()
        print("  ====================================")
        print("          C O L O R   M A T C H       ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (Pygame GUI)")
        print("  4.  Play  (PyQt GUI)")
        print("  5.  Show Levels")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        frontends = {
            "1": Frontend.vanilla,
            "2": Frontend.rich,
            "3": Frontend.pygame,
            "4": Frontend.pyqt,
        }
        if choice in ("1", "2"):
            difficulty = _ask_difficulty(difficulty)
            _launch(frontends[choice], difficulty, seed)
        elif choice in ("3", "4"):
            # GUIs carry their own level picker.
            _launch(frontends[choice], difficulty, seed)
        elif choice == "5":
            _print_presets()
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    difficulty: Difficulty = typer.Option(
        Difficulty.EASY, "-d", "--difficulty",
        help="Starting difficulty level.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the deck shuffle for a reproducible layout.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level",
        help="Logging threshold.",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Write logs to this file instead of stderr.",
    ),
    describe: bool = typer.Option(
        False, "--describe",
        help="Show the difficulty levels and exit.",
    ),
) -> None:
    """Color Match."""
    _configure_logging(log_level, log_file)

    if describe:
        _print_presets()
        return

    if frontend is None:
        _menu_loop(difficulty, seed)
        return

    _launch(frontend, difficulty, seed)


if __name__ == "__main__":
    app()
