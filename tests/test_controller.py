from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from gridsnake.config import STATE_COUNTDOWN, STATE_PAUSED, STATE_RUNNING  # noqa: E402
from gridsnake.controller import GameController  # noqa: E402
from gridsnake.model import Direction  # noqa: E402
from gridsnake.session import GameSession  # noqa: E402


@pytest.fixture()
def controller(session: GameSession):
    ctrl = GameController(session)
    yield ctrl
    pygame.quit()


def test_number_keys_pick_mode_and_start(controller: GameController) -> None:
    controller.handle_keydown(pygame.K_4)
    assert controller.session.config.name == "survivor"
    assert controller.session.status == STATE_RUNNING


def test_arrows_queue_and_p_pauses(controller: GameController) -> None:
    controller.handle_keydown(pygame.K_4)
    controller.handle_keydown(pygame.K_UP)
    assert controller.session.board.snake.next_dir == Direction.UP
    controller.handle_keydown(pygame.K_p)
    assert controller.session.status == STATE_PAUSED
    controller.handle_keydown(pygame.K_p)
    assert controller.session.status == STATE_RUNNING


def test_update_drives_seconds_and_ticks(controller: GameController) -> None:
    controller.handle_keydown(pygame.K_1)
    assert controller.session.status == STATE_COUNTDOWN
    for _ in range(3):
        controller.update(1000)
    assert controller.session.status == STATE_RUNNING
    # leaving the countdown does not replay that frame's time as ticks
    assert controller.session.board.snake.head == (10, 10)

    controller.update(controller.session.tick_interval_ms)
    assert controller.session.board.snake.head == (11, 10)


def test_render_every_status(controller: GameController) -> None:
    controller.view.render(controller.session.snapshot())
    controller.handle_keydown(pygame.K_2)
    controller.view.render(controller.session.snapshot())
    controller.handle_keydown(pygame.K_4)
    controller.view.render(controller.session.snapshot())
