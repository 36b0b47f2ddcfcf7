"""
session.py — Top-level game state machine.

GameSession owns the status (menu → countdown → running ⇄ paused → won /
gameover), the per-second timers and the record book, and drives one
SimulationEngine per started game. The host only talks to this class:

    start(difficulty)        queue_direction(direction)
    pause() / resume()       advance_tick() / advance_second()
    snapshot()               tick_interval_ms
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable

from .config import (
    BOUNCE_DURATION_SEC, BOUNCE_SLOWDOWN, COUNTDOWN_START, SPEEDUP_SCORE_STEP,
    STATE_COUNTDOWN, STATE_MENU, STATE_OVER, STATE_PAUSED, STATE_RUNNING,
)
from .difficulty import Borders, DifficultyConfig, get_difficulty
from .engine import SimulationEngine, StepOutcome
from .model import Ability, Board, Direction, Position, Snake, SoundEvent
from .progression import SurvivorProgression
from .records import RecordBook, SurvivalRecord
from .scheduler import ManualScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of everything the host may render."""
    status: str
    difficulty: str | None
    grid_size: int
    snake: tuple[Position, ...]
    direction: Direction
    apples: tuple[Position, ...]
    seeds: tuple[Position, ...]
    score: int
    best_score: int
    streak: int
    combo: int
    time_left: int
    countdown: int
    survival_time: int
    best_survival_time: int
    current_stage: int
    active_ability: Ability
    borders: Borders
    bouncing: bool
    survival_records: tuple[SurvivalRecord, ...]
    last_sound_event: SoundEvent | None
    tick_interval_ms: int
    progress: float


class GameSession:
    """
    One player's session: status, timers, records and the current engine.
    The host drives it through the command methods and reads snapshot().
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        scheduler: ManualScheduler | None = None,
        record_book: RecordBook | None = None,
    ):
        self.rng = rng or random.Random()
        self.clock = clock
        self.scheduler = scheduler or ManualScheduler()
        self.record_book = record_book or RecordBook()

        self.status: str = STATE_MENU
        self.config: DifficultyConfig | None = None
        self.engine: SimulationEngine | None = None
        self.countdown: int = 0
        self.time_left: int = 0
        self.survival_time: int = 0
        self.best_survival_time: int = 0
        self.best_score: int = 0
        self.last_sound_event: SoundEvent | None = None
        self.last_outcome: StepOutcome | None = None

        self._bounce_generation = 0
        self._bounce_handle: int | None = None

    # ── Accessors ────────────────────────────────────────────────
    @property
    def board(self) -> Board | None:
        return self.engine.board if self.engine else None

    @property
    def is_survivor(self) -> bool:
        return self.config is not None and self.config.is_survivor

    @property
    def score(self) -> int:
        return self.engine.score if self.engine else 0

    @property
    def tick_interval_ms(self) -> int:
        """Milliseconds the host should wait between advance_tick() calls."""
        cfg = self.config
        if cfg is None:
            return 0
        interval = cfg.tick_ms
        if cfg.survivor is not None:
            steps = self.score // SPEEDUP_SCORE_STEP
            interval = max(cfg.survivor.min_tick_ms,
                           cfg.tick_ms - steps * cfg.survivor.accel_per_100)
        if self.engine.bouncing:
            interval *= BOUNCE_SLOWDOWN
        return interval

    @property
    def progress(self) -> float:
        if self.engine is None or self.is_survivor:
            return 0.0
        return min(self.engine.score / self.engine.win_score, 1.0)

    # ── Commands ─────────────────────────────────────────────────
    def start(self, difficulty: str) -> None:
        cfg = get_difficulty(difficulty)
        logger.info("starting %s game", cfg.name)

        self._cancel_bounce()
        self.config = cfg
        board = Board(cfg.grid, Snake.centered(cfg.grid, cfg.start_len), cfg.borders)
        progression = (
            SurvivorProgression(cfg.survivor, self.rng) if cfg.survivor else None
        )
        self.engine = SimulationEngine(cfg, board, self.rng, self.clock, progression)
        self.time_left = cfg.timer_sec or 0
        self.survival_time = 0
        self.last_outcome = None
        self.engine.spawn()

        if cfg.is_survivor:
            self.countdown = 0
            self.status = STATE_RUNNING
        else:
            self.countdown = COUNTDOWN_START
            self.status = STATE_COUNTDOWN

    def queue_direction(self, direction: Direction) -> bool:
        """Queue the next heading. Returns False when the request is ignored."""
        if self.status != STATE_RUNNING:
            return False
        return self.engine.board.snake.request_direction(direction)

    def pause(self) -> None:
        if self.status == STATE_RUNNING:
            self.status = STATE_PAUSED

    def resume(self) -> None:
        if self.status == STATE_PAUSED:
            self._cancel_bounce()
            self.status = STATE_RUNNING

    def advance_tick(self) -> StepOutcome | None:
        if self.status != STATE_RUNNING:
            return None
        outcome = self.engine.step()
        self.last_outcome = outcome
        for name in outcome.sounds:
            self._emit_sound(name)
        if outcome.bounce_started:
            self._schedule_bounce_end()
        if outcome.status is not None:
            self._finish(outcome.status, outcome.reason)
        return outcome

    def advance_second(self) -> None:
        if self.status == STATE_COUNTDOWN:
            self.countdown -= 1
            if self.countdown <= 0:
                self.countdown = 0
                self.status = STATE_RUNNING
        elif self.status == STATE_RUNNING:
            if self.is_survivor:
                self.survival_time += 1
                self.best_survival_time = max(self.best_survival_time, self.survival_time)
            else:
                self.time_left -= 1
                if self.time_left <= 0:
                    self.time_left = 0
                    self._finish(STATE_OVER, "timer")

    def snapshot(self) -> Snapshot:
        engine = self.engine
        board = self.board
        return Snapshot(
            status=self.status,
            difficulty=self.config.name if self.config else None,
            grid_size=board.grid_size if board else 0,
            snake=tuple(board.snake.body) if board else (),
            direction=board.snake.dir if board else Direction.RIGHT,
            apples=tuple(board.apples) if board else (),
            seeds=tuple(board.seeds) if board else (),
            score=self.score,
            best_score=self.best_score,
            streak=engine.streak if engine else 0,
            combo=engine.combo if engine else 0,
            time_left=self.time_left,
            countdown=self.countdown,
            survival_time=self.survival_time,
            best_survival_time=self.best_survival_time,
            current_stage=engine.stage if engine else 1,
            active_ability=engine.ability if engine else Ability.NONE,
            borders=board.borders if board else Borders(),
            bouncing=engine.bouncing if engine else False,
            survival_records=self.record_book.records,
            last_sound_event=self.last_sound_event,
            tick_interval_ms=self.tick_interval_ms,
            progress=self.progress,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _finish(self, status: str, reason: str | None) -> None:
        self._cancel_bounce()
        self.best_score = max(self.best_score, self.score)
        if status == STATE_OVER and self.is_survivor and self.survival_time > 0:
            self.record_book.add_record(
                self.survival_time, self.engine.stage, self.score)
        self.status = status
        logger.info("%s game ended: %s (%s) with score %d",
                    self.config.name, status, reason, self.score)

    def _emit_sound(self, name: str) -> None:
        self.last_sound_event = SoundEvent(name, self.clock())

    def _schedule_bounce_end(self) -> None:
        generation = self._bounce_generation

        def _expire() -> None:
            if generation == self._bounce_generation and self.engine is not None:
                self.engine.bouncing = False
                self._bounce_handle = None

        self._bounce_handle = self.scheduler.call_later(BOUNCE_DURATION_SEC, _expire)

    def _cancel_bounce(self) -> None:
        """Drop any pending bounce expiry and clear the flag."""
        self._bounce_generation += 1
        if self._bounce_handle is not None:
            self.scheduler.cancel(self._bounce_handle)
            self._bounce_handle = None
        if self.engine is not None:
            self.engine.bouncing = False
