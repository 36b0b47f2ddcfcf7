"""
view.py — View layer.

Draws one frame from a session Snapshot: grid, blocked borders, fruit,
the snake with a head-to-tail fade, the HUD panel and status overlays.
Reads snapshots only; never touches the session.

Public API:
    GameView(screen)       — bind to a pygame surface
    view.render(snapshot)  — draw the current frame
"""

import pygame

from .config import (
    WIDTH, PANEL_H, BOARD_PX, OFFSET_X, OFFSET_Y,
    BG, GRID_COL, SNAKE_COL, SNAKE_DIM, APPLE_COL, SEED_COL, WALL_COL,
    UI_COL, PANEL_BG, BORDER_COL,
    STATE_MENU, STATE_COUNTDOWN, STATE_PAUSED, STATE_OVER, STATE_WON,
)
from .model import Ability
from .session import Snapshot


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _format_clock(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a Snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: Snapshot) -> None:
        self.screen.fill(BG)

        if snap.grid_size:
            cell = BOARD_PX // snap.grid_size
            self._draw_grid(snap.grid_size, cell)
            self._draw_walls(snap, cell)
            for pos in snap.seeds:
                self._draw_cell(pos, cell, SEED_COL, shrink=cell // 3)
            for pos in snap.apples:
                self._draw_cell(pos, cell, APPLE_COL, shrink=1)
            self._draw_snake(snap, cell)

        self._draw_panel(snap)

        if snap.status == STATE_MENU:
            self._draw_overlay("GRIDSNAKE", "1 EASY  2 MEDIUM  3 HARD  4 SURVIVOR")
        elif snap.status == STATE_COUNTDOWN:
            self._draw_overlay(str(snap.countdown), "GET READY")
        elif snap.status == STATE_PAUSED:
            self._draw_overlay("PAUSED", "PRESS P TO RESUME")
        elif snap.status == STATE_OVER:
            self._draw_overlay("GAME OVER", f"SCORE {snap.score}  ·  R TO RETRY")
        elif snap.status == STATE_WON:
            self._draw_overlay("YOU WIN!", f"SCORE {snap.score}  ·  R TO PLAY AGAIN")

        pygame.display.flip()

    # ── Board ────────────────────────────────────────────────────
    def _draw_grid(self, grid: int, cell: int) -> None:
        span = grid * cell
        for i in range(grid + 1):
            pygame.draw.line(self.screen, GRID_COL,
                             (OFFSET_X + i * cell, OFFSET_Y),
                             (OFFSET_X + i * cell, OFFSET_Y + span))
            pygame.draw.line(self.screen, GRID_COL,
                             (OFFSET_X, OFFSET_Y + i * cell),
                             (OFFSET_X + span, OFFSET_Y + i * cell))

    def _draw_walls(self, snap: Snapshot, cell: int) -> None:
        span = snap.grid_size * cell
        x0, y0 = OFFSET_X - 1, OFFSET_Y - 1
        x1, y1 = OFFSET_X + span, OFFSET_Y + span
        edges = {
            "top":    ((x0, y0), (x1, y0)),
            "bottom": ((x0, y1), (x1, y1)),
            "left":   ((x0, y0), (x0, y1)),
            "right":  ((x1, y0), (x1, y1)),
        }
        for name, (a, b) in edges.items():
            blocked = getattr(snap.borders, name)
            color = WALL_COL if blocked else BORDER_COL
            pygame.draw.line(self.screen, color, a, b, 3 if blocked else 1)

    def _draw_cell(self, pos: tuple[int, int], cell: int, color: tuple,
                   shrink: int = 0) -> None:
        rect = pygame.Rect(
            OFFSET_X + pos[0] * cell + shrink,
            OFFSET_Y + pos[1] * cell + shrink,
            cell - shrink * 2,
            cell - shrink * 2,
        )
        if rect.width > 0 and rect.height > 0:
            pygame.draw.rect(self.screen, color, rect,
                             border_radius=max(1, rect.width // 3))

    def _draw_snake(self, snap: Snapshot, cell: int) -> None:
        length = len(snap.snake)
        for i, pos in enumerate(snap.snake):
            # Colour fades from bright head to dim tail
            t = 1.0 - (i / max(length - 1, 1)) * 0.72
            color = _lerp_color(SNAKE_DIM, SNAKE_COL, t)
            if snap.bouncing and i == 0:
                color = WALL_COL
            self._draw_cell(pos, cell, color, shrink=0 if i == 0 else 1)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, snap: Snapshot) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self._blit(self.font_small, "SCORE", UI_COL, (16, 6))
        self._blit(self.font_big, str(snap.score), SNAKE_COL, (16, 24))

        if snap.difficulty == "survivor":
            clock = f"{_format_clock(snap.survival_time)}  BEST {_format_clock(snap.best_survival_time)}"
            ability = "" if snap.active_ability is Ability.NONE else snap.active_ability.value.upper()
            centre = f"STAGE {snap.current_stage}  {ability}"
        else:
            clock = _format_clock(snap.time_left)
            centre = f"{(snap.difficulty or '').upper()}  {int(snap.progress * 100)}%"

        label = self.font_small.render(centre, True, SEED_COL)
        self.screen.blit(label, label.get_rect(center=(WIDTH // 2, 22)))
        right = self.font_small.render(clock, True, UI_COL)
        self.screen.blit(right, right.get_rect(topright=(WIDTH - 16, 6)))

        if snap.best_score:
            best = self.font_tiny.render(f"BEST {snap.best_score}", True, UI_COL)
            self.screen.blit(best, best.get_rect(bottomright=(WIDTH - 16, PANEL_H - 6)))
        if snap.streak > 1:
            streak = self.font_tiny.render(f"STREAK x{snap.streak}", True, UI_COL)
            self.screen.blit(streak, streak.get_rect(center=(WIDTH // 2, 44)))

    # ── Overlays ──────────────────────────────────────────────────
    def _draw_overlay(self, title: str, subtitle: str) -> None:
        surf = pygame.Surface((BOARD_PX, BOARD_PX), pygame.SRCALPHA)
        surf.fill((5, 5, 12, 200))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))
        cy = OFFSET_Y + BOARD_PX // 2
        t = self.font_title.render(title, True, SNAKE_COL)
        self.screen.blit(t, t.get_rect(center=(WIDTH // 2, cy - 20)))
        s = self.font_med.render(subtitle, True, UI_COL)
        self.screen.blit(s, s.get_rect(center=(WIDTH // 2, cy + 24)))

    def _blit(self, font: pygame.font.Font, text: str, color: tuple, at: tuple) -> None:
        self.screen.blit(font.render(text, True, color), at)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        pygame.font.init()
        specs = [
            ("font_title", "courier", 42, True),
            ("font_big",   "courier", 26, True),
            ("font_med",   "courier", 17, False),
            ("font_small", "courier", 13, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.Font(None, size))
