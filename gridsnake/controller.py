"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into session commands.
  - Drive the session clock: advance_tick() every tick interval,
    advance_second() once per second, and pump the one-shot scheduler.
  - Play the sound cue the session last asked for.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the session's job).

Sound notes:
  - eat.wav, bump.wav and levelup.wav are looked up in gridsnake/sounds/.
  - Missing files or an unavailable mixer only log a warning; the game
    runs silently.

The controller is the only layer that imports pygame directly for events.
"""

import logging
import os
import sys

import pygame

from .config import (
    WIDTH, HEIGHT, FPS,
    SOUND_BUMP, SOUND_EAT, SOUND_LEVELUP,
    STATE_MENU, STATE_COUNTDOWN, STATE_RUNNING, STATE_PAUSED, STATE_OVER, STATE_WON,
)
from .model import Direction
from .scheduler import ManualScheduler
from .session import GameSession
from .view import GameView

logger = logging.getLogger(__name__)

_SOUND_DIR = os.path.join(os.path.dirname(__file__), "sounds")

DIRECTION_KEYS = {
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
}

DIFFICULTY_KEYS = {
    pygame.K_1: "easy",
    pygame.K_2: "medium",
    pygame.K_3: "hard",
    pygame.K_4: "survivor",
}


class GameController:
    """
    Owns the main loop.
    Glues GameSession <-> GameView without them knowing about each other.
    """

    def __init__(self, session: GameSession | None = None):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("GRIDSNAKE")
        self.clock = pygame.time.Clock()
        self.session = session or GameSession(scheduler=ManualScheduler(self._now()))
        self.scheduler = self.session.scheduler
        self.view = GameView(self.screen)
        self.difficulty = "easy"
        self._sounds = self._load_sounds()
        self._last_sound = None
        self._tick_acc_ms = 0
        self._second_acc_ms = 0

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            dt_ms = self.clock.tick(FPS)
            self._handle_events()
            self.update(dt_ms)
            self.view.render(self.session.snapshot())

    def update(self, dt_ms: int) -> None:
        """Advance the session by `dt_ms` of wall time."""
        self.scheduler.run_due(self._now())
        was_running = self.session.status == STATE_RUNNING

        self._second_acc_ms += dt_ms
        while self._second_acc_ms >= 1000:
            self._second_acc_ms -= 1000
            self.session.advance_second()

        # the frame that leaves the countdown starts ticking from zero
        if self.session.status == STATE_RUNNING and not was_running:
            self._tick_acc_ms = 0
        elif self.session.status == STATE_RUNNING:
            self._tick_acc_ms += dt_ms
            interval = self.session.tick_interval_ms
            while interval and self._tick_acc_ms >= interval:
                self._tick_acc_ms -= interval
                self.session.advance_tick()
                if self.session.status != STATE_RUNNING:
                    break
                interval = self.session.tick_interval_ms
        else:
            self._tick_acc_ms = 0

        self._play_pending_sound()

    # ── Sound helpers ─────────────────────────────────────────────
    def _load_sounds(self) -> dict:
        """Load every cue that exists. Missing cues are skipped."""
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("audio unavailable: %s", exc)
            return {}
        sounds = {}
        for name in (SOUND_EAT, SOUND_BUMP, SOUND_LEVELUP):
            path = os.path.join(_SOUND_DIR, f"{name}.wav")
            if not os.path.isfile(path):
                logger.warning("sound %r not found at %s", name, path)
                continue
            try:
                sounds[name] = pygame.mixer.Sound(path)
            except pygame.error as exc:
                logger.warning("could not load %s: %s", path, exc)
        return sounds

    def _play_pending_sound(self) -> None:
        event = self.session.last_sound_event
        if event is None or event is self._last_sound:
            return
        self._last_sound = event
        sound = self._sounds.get(event.name)
        if sound is not None:
            sound.play()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event.key)

    def handle_keydown(self, key: int) -> None:
        # Q quits from any state
        if key == pygame.K_q:
            self._quit()

        state = self.session.status

        if state in (STATE_MENU, STATE_OVER, STATE_WON):
            self._handle_menu_keys(key)
        elif state == STATE_RUNNING:
            self._handle_running_keys(key)
        elif state == STATE_PAUSED:
            self._handle_paused_keys(key)
        elif state == STATE_COUNTDOWN and key == pygame.K_r:
            self._restart()

    # ── Per-state key handlers ────────────────────────────────────
    def _handle_menu_keys(self, key: int) -> None:
        if key in DIFFICULTY_KEYS:
            self.difficulty = DIFFICULTY_KEYS[key]
            self._restart()
        elif key in (pygame.K_RETURN, pygame.K_SPACE, pygame.K_r):
            self._restart()

    def _handle_running_keys(self, key: int) -> None:
        if key in DIRECTION_KEYS:
            self.session.queue_direction(DIRECTION_KEYS[key])
        elif key == pygame.K_p:
            self.session.pause()
        elif key == pygame.K_r:
            self._restart()

    def _handle_paused_keys(self, key: int) -> None:
        if key in (pygame.K_p, pygame.K_SPACE):
            self.session.resume()
        elif key == pygame.K_r:
            self._restart()

    # ── Utilities ─────────────────────────────────────────────────
    def _restart(self) -> None:
        self._tick_acc_ms = 0
        self._second_acc_ms = 0
        self.session.start(self.difficulty)

    @staticmethod
    def _now() -> float:
        return pygame.time.get_ticks() / 1000.0

    @staticmethod
    def _quit() -> None:
        pygame.quit()
        sys.exit()
