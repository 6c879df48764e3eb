"""PyQt6 GUI frontend — fully self-contained.

Includes the level menu and the game page.  A ``QTimer`` polls the
engine's scheduler so the countdown and flip-back run on the Qt thread.
"""

from __future__ import annotations

import random
import sys

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gameplay import LOW_TIME_THRESHOLD, MemoryGame
from backend.models.difficulty import Difficulty
from backend.models.timeformat import describe_duration, format_clock
from frontend.theme import card_glyph, card_hex

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_RED = "#f38ba8"
_RED_H = "#f5a0b8"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_POLL_MS = 50
_HINT = "Click  flip     H  status     R  restart     M  menu     Esc  quit"


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    min_w: int = 0,
    min_h: int = 44,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:8px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )
    return btn


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _MenuPage(QWidget):
    """Level selection, play and quit."""

    def __init__(self, default: Difficulty) -> None:
        super().__init__()
        self.setObjectName("page")
        self.selected = default

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)
        root.setContentsMargins(30, 30, 30, 30)

        title = QLabel("COLOR  MATCH")
        title.setFont(QFont("Helvetica", 34, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        sub = QLabel("Match all pairs before time runs out!")
        sub.setFont(QFont("Helvetica", 15))
        sub.setStyleSheet(f"color:{_SUBTEXT};")
        sub.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(sub)

        root.addSpacerItem(QSpacerItem(0, 24))

        self._level_btns: dict[Difficulty, QPushButton] = {}
        hbox = QHBoxLayout()
        hbox.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hbox.setSpacing(10)
        for d in Difficulty:
            btn = _styled_btn(d.display_name, min_w=100, min_h=46, font_size=13)
            btn.setAccessibleName(f"{d.display_name} level")
            btn.setAccessibleDescription(d.hint)
            btn.clicked.connect(lambda _, level=d: self._pick(level))
            hbox.addWidget(btn)
            self._level_btns[d] = btn
        root.addLayout(hbox)

        self._desc = QLabel()
        self._desc.setFont(QFont("Helvetica", 12))
        self._desc.setStyleSheet(f"color:{_OVERLAY0};")
        self._desc.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._desc)

        root.addSpacerItem(QSpacerItem(0, 18))

        self.play_btn = _styled_btn(
            "P L A Y", bg=_BLUE, hover=_LAVENDER, fg=_BASE,
            font_size=16, min_w=240, min_h=52,
        )
        root.addWidget(self.play_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.quit_btn = _styled_btn(
            "Q U I T", bg=_RED, hover=_RED_H, fg=_BASE, min_w=240, font_size=13
        )
        root.addWidget(self.quit_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self._refresh()

    def _pick(self, level: Difficulty) -> None:
        self.selected = level
        self._refresh()

    def step(self, delta: int) -> None:
        levels = list(Difficulty)
        i = levels.index(self.selected) + delta
        self._pick(levels[max(0, min(len(levels) - 1, i))])

    def _refresh(self) -> None:
        self._desc.setText(self.selected.description)
        for d, btn in self._level_btns.items():
            bg, hv, fg = (
                (_GREEN, _GREEN_H, _BASE) if d is self.selected
                else (_SURFACE0, _SURFACE1, _TEXT)
            )
            btn.setStyleSheet(
                f"QPushButton {{ background:{bg}; color:{fg};"
                f" border:none; border-radius:8px; padding:6px 18px; font-weight:bold; }}"
                f" QPushButton:hover {{ background:{hv}; }}"
            )


class _GamePage(QWidget):
    """The card grid with live score, countdown and announcements."""

    def __init__(self, difficulty: Difficulty, seed: int | None) -> None:
        super().__init__()
        self.setObjectName("page")
        rng = random.Random(seed) if seed is not None else None
        self.game = MemoryGame(difficulty, rng=rng)
        n = difficulty.grid_size

        card_px = max(44, min(96, 460 // n))
        f_sz = max(14, card_px // 3)

        root = QVBoxLayout(self)
        root.setSpacing(6)
        root.setContentsMargins(16, 10, 16, 10)

        t = QLabel(f"Color Match  {difficulty.display_name}  {n}×{n}")
        t.setFont(QFont("Helvetica", 17, QFont.Weight.Bold))
        t.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(t)

        self._stats = QLabel()
        self._stats.setFont(QFont("Helvetica", 13))
        self._stats.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._stats)

        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(6)
        grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._btns: list[QPushButton] = []
        for i in range(difficulty.cell_count):
            b = QPushButton()
            b.setFixedSize(card_px, card_px)
            b.setFont(QFont("Helvetica", f_sz, QFont.Weight.Bold))
            b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            b.clicked.connect(lambda _, idx=i: self._click(idx))
            grid.addWidget(b, *divmod(i, n))
            self._btns.append(b)

        self._message = QLabel()
        self._message.setFont(QFont("Helvetica", 12))
        self._message.setStyleSheet(f"color:{_YELLOW};")
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message.setWordWrap(True)
        root.addWidget(self._message)

        self._hint = QLabel(_HINT)
        self._hint.setFont(QFont("Helvetica", 11))
        self._hint.setStyleSheet(f"color:{_OVERLAY0};")
        self._hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._hint)

        self._pinned = False
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._timer.start(_POLL_MS)

        self._sync()

    # -- helpers --

    def _sync(self) -> None:
        game = self.game
        for card, b in zip(game.cards, self._btns):
            b.setText(card_glyph(card))
            b.setAccessibleName(card.accessibility_label)
            b.setAccessibleDescription(card.accessibility_hint)
            border = f"3px solid {_TEXT}" if card.is_matched else "none"
            b.setStyleSheet(
                f"QPushButton{{background:{card_hex(card)};color:{_BASE};"
                f"border:{border};border-radius:8px;font-weight:bold;}}"
            )

        t = game.time_remaining
        col = _RED if t <= LOW_TIME_THRESHOLD else _PINK
        self._stats.setStyleSheet(f"color:{col};")
        self._stats.setText(
            f"Score: {game.score} / {game.difficulty.number_of_pairs}"
            f"    Time: {format_clock(t)}"
        )
        self._stats.setAccessibleDescription(
            f"{game.score} out of {game.difficulty.number_of_pairs} pairs matched, "
            f"{describe_duration(t)} remaining"
        )

        if game.last_announcement is not None and not self._pinned:
            self._message.setText(game.last_announcement.message)

        if game.game_over:
            text = "You win!" if game.game_won else "Time's up!"
            self._hint.setText(f"{text}   R  play again     M  menu")
            colour = _GREEN if game.game_won else _RED
            self._hint.setStyleSheet(f"color:{colour};font-weight:bold;")

    def _poll(self) -> None:
        if self.game.scheduler.run_due():
            self._sync()

    def _click(self, index: int) -> None:
        self._pinned = False
        self.game.flip_card(index)
        self._sync()

    def show_status(self) -> None:
        self._pinned = True
        self._message.setText(self.game.status_summary())

    def restart(self) -> None:
        self.game.start_game()
        self._pinned = False
        self._hint.setText(_HINT)
        self._hint.setStyleSheet(f"color:{_OVERLAY0};")
        self._sync()

    def stop(self) -> None:
        self._timer.stop()


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_IDX_MENU = 0
_IDX_GAME = 1


class _MainWindow(QMainWindow):
    def __init__(self, difficulty: Difficulty, seed: int | None) -> None:
        super().__init__()
        self._seed = seed

        self.setWindowTitle("Color Match")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(520, 640)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._menu = _MenuPage(difficulty)
        self._menu.play_btn.clicked.connect(self._on_play)
        self._menu.quit_btn.clicked.connect(self.close)
        self._stack.addWidget(self._menu)  # 0

        self._game_page: _GamePage | None = None
        self._stack.addWidget(QWidget())  # 1

        self._stack.setCurrentIndex(_IDX_MENU)

    # -- navigation ---

    def _show_menu(self) -> None:
        if self._game_page is not None:
            self._game_page.stop()
        self._stack.setCurrentIndex(_IDX_MENU)

    def _on_play(self) -> None:
        if self._game_page is not None:
            self._game_page.stop()
        page = _GamePage(self._menu.selected, self._seed)
        self._game_page = page

        old = self._stack.widget(_IDX_GAME)
        self._stack.removeWidget(old)
        old.deleteLater()
        self._stack.insertWidget(_IDX_GAME, page)
        self._stack.setCurrentIndex(_IDX_GAME)

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        idx = self._stack.currentIndex()

        if idx == _IDX_MENU:
            if key == Qt.Key.Key_Return:
                self._on_play()
            elif key == Qt.Key.Key_Left:
                self._menu.step(-1)
            elif key == Qt.Key.Key_Right:
                self._menu.step(1)
            elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
                self.close()

        elif idx == _IDX_GAME and self._game_page is not None:
            gp = self._game_page
            if key == Qt.Key.Key_R:
                gp.restart()
            elif key in (Qt.Key.Key_H, Qt.Key.Key_Question):
                gp.show_status()
            elif key == Qt.Key.Key_M:
                self._show_menu()
            elif key == Qt.Key.Key_Escape:
                self.close()

        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(difficulty: Difficulty = Difficulty.EASY, seed: int | None = None) -> None:
    """Launch the PyQt6 GUI (opens directly to the menu)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(difficulty, seed)
    window.show()
    qapp.exec()
