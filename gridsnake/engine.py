"""
engine.py — The per-tick state transition.

SimulationEngine owns the scoring counters and mutates the Board once per
step(): move, resolve borders, collide, consume, progress survivor stages,
apply the magnet, check starvation and the win target, then refill apples.
It never changes the session status itself; it reports what happened in a
StepOutcome and lets the session decide.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Callable

from .config import (
    COMBO_BONUS, COMBO_LENGTH, COMBO_WINDOW_SEC, COMPLETION_BONUS,
    MAGNET_RADIUS, SEED_DIVISOR, SPEED_BONUS, STREAK_BONUS_CAP,
    STREAK_BONUS_STEP, WIN_FILL_RATIO,
    SOUND_BUMP, SOUND_EAT, SOUND_LEVELUP,
    STATE_OVER, STATE_WON,
)
from .difficulty import DifficultyConfig
from .model import APPLE, Ability, Board, Fruit, Position
from .progression import StageChange, SurvivorProgression, borders_for_score
from .spawner import spawn_apples

logger = logging.getLogger(__name__)

# left, right, up, down, up-left, down-right
EXPLOSION_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (1, 1))

# axis, offending side, edge name, wrapped coordinate (None = far side)
_EDGES = (
    (0, -1, "left", None),
    (0, +1, "right", 0),
    (1, -1, "top", None),
    (1, +1, "bottom", 0),
)


@dataclass
class StepOutcome:
    """What one tick did. `status` is set only on a terminal tick."""
    status: str | None = None
    reason: str | None = None
    sounds: list[str] = field(default_factory=list)
    bounce_started: bool = False
    stage_change: StageChange | None = None
    eaten: int = 0


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


class SimulationEngine:
    """
    Applies one tick of game rules to a Board and keeps the scoring counters.
    Reports terminal transitions in a StepOutcome instead of setting status.
    """

    def __init__(
        self,
        cfg: DifficultyConfig,
        board: Board,
        rng: random.Random,
        clock: Callable[[], float],
        progression: SurvivorProgression | None = None,
    ):
        self.cfg = cfg
        self.board = board
        self.rng = rng
        self.clock = clock
        self.progression = progression

        self.score: int = 0
        self.streak: int = 0
        self.ticks_since_apple: int = 0
        self.combo: int = 0
        self.last_apple_at: float | None = None
        self.bouncing: bool = False

    # ── Accessors ────────────────────────────────────────────────
    @property
    def ability(self) -> Ability:
        if self.progression is None:
            return Ability.NONE
        return self.progression.ability

    @property
    def stage(self) -> int:
        return self.progression.stage if self.progression else 1

    @property
    def win_score(self) -> int:
        grid = self.cfg.grid
        return int(grid * grid * WIN_FILL_RATIO) * self.cfg.apple_points

    # ── Public API ───────────────────────────────────────────────
    def spawn(self) -> int:
        return spawn_apples(self.board, self.score, self.cfg, self.rng, self.clock())

    def step(self) -> StepOutcome:
        out = StepOutcome()
        snake = self.board.snake

        direction = snake.commit_direction()
        head = self._resolve_borders(direction.apply(snake.head), out)
        if head is None:
            return out

        if snake.occupies(head):
            logger.debug("self collision at %s", head)
            return self._terminate(out, STATE_OVER, "self", SOUND_BUMP)

        fruit = self.board.take_fruit(head)
        popped = None
        if fruit is not None:
            snake.advance(head, grow=True)
            self._consume(fruit, out)
        else:
            popped = snake.advance(head, grow=False)
            self.ticks_since_apple += 1

        self._progress(out)

        if self.ability is Ability.MAGNET:
            self._magnet(popped, out)

        if not self.cfg.is_survivor:
            if self.ticks_since_apple >= self.cfg.starvation_ticks:
                return self._terminate(out, STATE_OVER, "starvation")
            if self.score >= self.win_score:
                self.score += COMPLETION_BONUS.get(self.cfg.name, 0)
                return self._terminate(out, STATE_WON, "target", SOUND_LEVELUP)

        self.spawn()
        return out

    # ── Borders ──────────────────────────────────────────────────
    def _resolve_borders(self, head: Position, out: StepOutcome) -> Position | None:
        """Wrap through open edges; a closed edge ends or bounces the tick."""
        coords = list(head)
        size = self.board.grid_size
        for axis, side, edge, wrapped in _EDGES:
            value = coords[axis]
            crossed = value < 0 if side < 0 else value >= size
            if not crossed:
                continue
            if not getattr(self.board.borders, edge):
                coords[axis] = size - 1 if wrapped is None else wrapped
                continue
            if not self.cfg.is_survivor:
                logger.debug("hit %s wall", edge)
                self._terminate(out, STATE_OVER, "wall", SOUND_BUMP)
                return None
            if self.bouncing:
                logger.debug("hit %s wall while bouncing", edge)
                self._terminate(out, STATE_OVER, "wall", SOUND_BUMP)
                return None
            self.bouncing = True
            out.bounce_started = True
            out.sounds.append(SOUND_BUMP)
            logger.debug("bounced off %s wall", edge)
            return None
        return coords[0], coords[1]

    # ── Eating ───────────────────────────────────────────────────
    def _consume(self, fruit: Fruit, out: StepOutcome) -> None:
        if fruit.kind == APPLE:
            points = (
                self.cfg.apple_points
                + min(STREAK_BONUS_CAP, self.streak * STREAK_BONUS_STEP)
                + SPEED_BONUS
            )
            if self.ability is Ability.DOUBLE_POINTS:
                points *= 2
            self.score += points
            self._register_combo()
            if self.ability is Ability.EXPLOSION:
                self._explode(self.board.snake.head)
        else:
            self.score += math.ceil(self.cfg.apple_points / SEED_DIVISOR)
        self.streak += 1
        self.ticks_since_apple = 0
        out.eaten += 1
        out.sounds.append(SOUND_EAT)

    def _register_combo(self) -> None:
        now = self.clock()
        if self.last_apple_at is not None and now - self.last_apple_at <= COMBO_WINDOW_SEC:
            self.combo += 1
            if self.combo >= COMBO_LENGTH:
                self.score += COMBO_BONUS
                logger.debug("combo bonus +%d", COMBO_BONUS)
                self.combo = 0
        else:
            self.combo = 1
        self.last_apple_at = now

    def _explode(self, center: Position) -> None:
        now = self.clock()
        for dx, dy in EXPLOSION_OFFSETS:
            cell = (center[0] + dx, center[1] + dy)
            if self.board.is_free(cell):
                self.board.add_seed(cell, now)

    # ── Survivor ─────────────────────────────────────────────────
    def _progress(self, out: StepOutcome) -> None:
        if self.progression is None:
            return
        change = self.progression.update(self.score)
        if change is not None:
            out.stage_change = change
            out.sounds.append(SOUND_LEVELUP)
        self.board.borders = borders_for_score(
            self.score, self.board.borders, self.progression.rules)

    def _magnet(self, popped: Position | None, out: StepOutcome) -> None:
        board = self.board
        hx, hy = board.snake.head
        last = board.grid_size - 1
        for fruit in list(board.apples.values()) + list(board.seeds.values()):
            fx, fy = fruit.pos
            dx, dy = hx - fx, hy - fy
            if not 0 < abs(dx) + abs(dy) <= MAGNET_RADIUS:
                continue
            if abs(dx) >= abs(dy):
                fx += _sign(dx)
            else:
                fy += _sign(dy)
            dest = (min(max(fx, 0), last), min(max(fy, 0), last))
            if dest == (hx, hy):
                board.take_fruit(fruit.pos)
                self._grow_from_pull(popped)
                popped = None
                self._consume(fruit, out)
                self._progress(out)
            elif board.is_free(dest):
                board.move_fruit(fruit, dest)

    def _grow_from_pull(self, popped: Position | None) -> None:
        """Give back the tail dropped this tick, or grow on the next move."""
        snake = self.board.snake
        if popped is not None and self.board.is_free(popped):
            snake.regrow_tail(popped)
        else:
            snake.grow_pending += 1

    # ── Terminal ─────────────────────────────────────────────────
    def _terminate(self, out: StepOutcome, status: str, reason: str,
                   sound: str | None = None) -> StepOutcome:
        out.status = status
        out.reason = reason
        if sound:
            out.sounds.append(sound)
        return out
