from __future__ import annotations

import random

import pytest

from gridsnake.config import STATE_RUNNING
from gridsnake.model import Direction, Snake
from gridsnake.records import RecordBook
from gridsnake.scheduler import ManualScheduler
from gridsnake.session import GameSession


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, t: float = 1000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += dt


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def session(clock: FakeClock, scheduler: ManualScheduler) -> GameSession:
    return GameSession(
        rng=random.Random(1234),
        clock=clock,
        scheduler=scheduler,
        record_book=RecordBook(clock=lambda: 1_700_000_000.0),
    )


def begin(session: GameSession, difficulty: str) -> GameSession:
    """Start a game, skip the countdown, and clear the board of fruit.

    Spawning is disabled so that tests decide where every apple sits.
    """
    session.start(difficulty)
    while session.status != STATE_RUNNING:
        session.advance_second()
    session.board.apples.clear()
    session.board.seeds.clear()
    session.engine.spawn = lambda: 0
    return session


def place_snake(session: GameSession, body: list[tuple[int, int]], heading: Direction) -> Snake:
    snake = Snake(body, heading)
    session.board.snake = snake
    return snake
