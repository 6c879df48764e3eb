"""Pygame GUI frontend — fully self-contained.

Includes the level menu, the card grid, a game-over overlay and an
on-screen status line that mirrors the engine's announcements.
"""

from __future__ import annotations

import enum
import random

import pygame

from backend.engine.gameplay import LOW_TIME_THRESHOLD, MemoryGame
from backend.models.difficulty import Difficulty
from backend.models.timeformat import format_clock
from frontend.theme import card_glyph, card_hex, hex_to_rgb

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 520, 700
CARD_GAP = 8
MARGIN = 20
BOARD_TOP = 96
BOARD_MAX = WIN_W - 2 * MARGIN


class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, difficulty: Difficulty, seed: int | None) -> None:
        self._sel = difficulty
        self._seed = seed

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Color Match")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)
        # DejaVu carries the pattern glyphs on most Linux installs.
        self._f_glyph_name = pygame.font.match_font("dejavusans,segoeuisymbol,applesymbols")

        self._screen = _Screen.MENU
        self._game: MemoryGame | None = None
        self._status_msg = ""

        self._build_menu_btns()
        self._build_game_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw, bh, gap = 130, 46, 10
        levels = list(Difficulty)
        total_w = len(levels) * bw + (len(levels) - 1) * gap
        sx = _cx(total_w)

        self._level_btns: dict[Difficulty, _Btn] = {}
        for i, d in enumerate(levels):
            self._level_btns[d] = _Btn(
                (sx + i * (bw + gap), 250, bw, bh), d.display_name, self._f_btn_sm
            )

        bw_lg = 220
        self._play_btn = _Btn(
            (_cx(bw_lg), 360, bw_lg, 50),
            "P L A Y",
            self._f_btn,
            bg=COL_BLUE,
            hover=COL_LAVENDER,
            fg=COL_BASE,
        )
        self._quit_btn = _Btn(
            (_cx(bw_lg), 424, bw_lg, 42),
            "Q U I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._menu_all = [*self._level_btns.values(), self._play_btn, self._quit_btn]

    def _build_game_btns(self) -> None:
        bw, gap = 120, 10
        sx = _cx(2 * bw + gap)
        self._restart_btn = _Btn(
            (sx, 0, bw, 36), "RESTART (R)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._menu_btn = _Btn((sx + bw + gap, 0, bw, 36), "MENU (M)", self._f_btn_sm)
        self._game_btns = [self._restart_btn, self._menu_btn]

    # ── layout ──────────────────────────────────────────────────────────────

    def _card_layout(self) -> tuple[int, int, int]:
        """Return (card_px, origin_x, total_px) for the current grid."""
        n = self._game.difficulty.grid_size  # type: ignore[union-attr]
        card_px = (BOARD_MAX - (n + 1) * CARD_GAP) // n
        total = n * card_px + (n + 1) * CARD_GAP
        return card_px, _cx(total) + CARD_GAP, total

    def _card_rect(self, index: int, cpx: int, ox: int) -> pygame.Rect:
        n = self._game.difficulty.grid_size  # type: ignore[union-attr]
        r, c = divmod(index, n)
        return pygame.Rect(
            ox + c * (cpx + CARD_GAP),
            BOARD_TOP + CARD_GAP + r * (cpx + CARD_GAP),
            cpx,
            cpx,
        )

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf, self._f_big.render("COLOR  MATCH", True, COL_TEXT), 80
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                "Match all pairs before time runs out!", True, COL_SUBTEXT
            ),
            140,
        )
        _blit_center(
            self._surf,
            self._f_body.render("Select difficulty", True, COL_SUBTEXT),
            210,
        )

        for d, btn in self._level_btns.items():
            btn.bg = COL_GREEN if d is self._sel else COL_SURFACE0
            btn.fg = COL_BASE if d is self._sel else COL_TEXT
            btn.draw(self._surf)
        _blit_center(
            self._surf,
            self._f_small.render(self._sel.description, True, COL_OVERLAY0),
            310,
        )

        self._play_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        d = game.difficulty
        cpx, ox, total = self._card_layout()
        f_glyph = pygame.font.Font(self._f_glyph_name, max(14, cpx // 2))

        _blit_center(
            self._surf,
            self._f_title.render(
                f"Color Match  {d.display_name}  {d.grid_size}×{d.grid_size}",
                True,
                COL_TEXT,
            ),
            14,
        )
        time_col = COL_RED if game.time_remaining <= LOW_TIME_THRESHOLD else COL_PINK
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Score: {game.score} / {d.number_of_pairs}    "
                f"Time: {format_clock(game.time_remaining)}",
                True,
                time_col,
            ),
            50,
        )

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total), BOARD_TOP, total, total),
            border_radius=10,
        )

        for i, card in enumerate(game.cards):
            rect = self._card_rect(i, cpx, ox)
            pygame.draw.rect(
                self._surf, hex_to_rgb(card_hex(card)), rect, border_radius=8
            )
            if card.is_matched:
                pygame.draw.rect(
                    self._surf, COL_TEXT, rect, width=3, border_radius=8
                )
            lbl = f_glyph.render(card_glyph(card), True, COL_BASE)
            self._surf.blit(
                lbl,
                (
                    rect.centerx - lbl.get_width() // 2,
                    rect.centery - lbl.get_height() // 2,
                ),
            )

        btn_y = BOARD_TOP + total + 12
        for btn in self._game_btns:
            btn.rect.y = btn_y
            btn.draw(self._surf)

        message = self._status_msg
        if not message and game.last_announcement is not None:
            message = game.last_announcement.message
        if message:
            _blit_center(
                self._surf,
                self._f_small.render(message, True, COL_YELLOW),
                btn_y + 48,
            )

        _blit_center(
            self._surf,
            self._f_small.render(
                "Click  flip     H  status     R  restart     M  menu     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            WIN_H - 28,
        )

        if game.game_over:
            self._draw_result(game)

    def _draw_result(self, game: MemoryGame) -> None:
        veil = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
        veil.fill((*COL_BASE, 200))
        self._surf.blit(veil, (0, 0))

        if game.game_won:
            head = self._f_big.render("★  Y O U   W I N  ★", True, COL_GREEN)
        else:
            head = self._f_big.render("T I M E ' S   U P", True, COL_RED)
        _blit_center(self._surf, head, 220)
        _blit_center(
            self._surf,
            self._f_title.render(
                f"Score: {game.score} / {game.difficulty.number_of_pairs}",
                True,
                COL_YELLOW,
            ),
            290,
        )
        _blit_center(
            self._surf,
            self._f_body.render("R  play again     M  menu", True, COL_SUBTEXT),
            340,
        )

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for d, b in self._level_btns.items():
                if b.hit(ev.pos):
                    self._sel = d
                    return True
            if self._play_btn.hit(ev.pos):
                self._start_game()
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            levels = list(Difficulty)
            i = levels.index(self._sel)
            if ev.key == pygame.K_RETURN:
                self._start_game()
            elif ev.key == pygame.K_LEFT:
                self._sel = levels[max(0, i - 1)]
            elif ev.key == pygame.K_RIGHT:
                self._sel = levels[min(len(levels) - 1, i + 1)]
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._game_btns:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._restart_btn.hit(ev.pos):
                self._start_game()
                return True
            if self._menu_btn.hit(ev.pos):
                self._screen = _Screen.MENU
                return True
            cpx, ox, _ = self._card_layout()
            for i in range(len(game.cards)):
                if self._card_rect(i, cpx, ox).collidepoint(ev.pos):
                    game.flip_card(i)
                    self._status_msg = ""
                    return True
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_h, pygame.K_SLASH):
                self._status_msg = game.status_summary()
            elif ev.key == pygame.K_r:
                self._start_game()
            elif ev.key == pygame.K_m:
                self._screen = _Screen.MENU
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        if self._game is not None and self._game.difficulty is self._sel:
            self._game.start_game()
        else:
            rng = random.Random(self._seed) if self._seed is not None else None
            self._game = MemoryGame(self._sel, rng=rng)
        self._status_msg = ""
        self._screen = _Screen.PLAYING

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            if self._screen == _Screen.PLAYING and self._game is not None:
                self._game.scheduler.run_due()

            drawer = _draw.get(self._screen)
            if drawer:
                drawer()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(difficulty: Difficulty = Difficulty.EASY, seed: int | None = None) -> None:
    """Launch the Pygame GUI (opens directly to the menu)."""
    app = PygameApp(difficulty, seed)
    app.run_loop()
