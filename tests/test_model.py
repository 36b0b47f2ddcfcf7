from __future__ import annotations

import pytest

from gridsnake.difficulty import DIFFICULTIES, Borders, get_difficulty
from gridsnake.errors import ConfigNotFoundError, GridSnakeError
from gridsnake.model import APPLE, SEED, Board, Direction, Snake
from gridsnake.scheduler import ManualScheduler


# ── Direction & Snake ─────────────────────────────────────────────
def test_direction_rejects_non_unit_vectors() -> None:
    with pytest.raises(ValueError):
        Direction(1, 1)
    with pytest.raises(ValueError):
        Direction(0, 0)


def test_opposites() -> None:
    assert Direction.LEFT.is_opposite(Direction.RIGHT)
    assert Direction.UP.is_opposite(Direction.DOWN)
    assert not Direction.UP.is_opposite(Direction.LEFT)


def test_snake_rejects_reversal() -> None:
    snake = Snake.centered(20, 3)
    assert snake.request_direction(Direction.LEFT) is False
    assert snake.next_dir == Direction.RIGHT
    assert snake.request_direction(Direction.DOWN) is True
    assert snake.next_dir == Direction.DOWN


def test_pending_growth_skips_tail_pop() -> None:
    snake = Snake([(2, 2), (1, 2)], Direction.RIGHT)
    snake.grow_pending = 1
    assert snake.advance((3, 2), grow=False) is None
    assert list(snake.body) == [(3, 2), (2, 2), (1, 2)]
    assert snake.advance((4, 2), grow=False) == (1, 2)


# ── Board ─────────────────────────────────────────────────────────
def test_board_apples_take_priority_and_block_cells() -> None:
    board = Board(5, Snake.centered(5, 2), Borders())
    board.add_apple((0, 0), 1.0)
    board.add_seed((4, 4), 2.0)
    assert not board.is_free((0, 0))
    assert not board.is_free((2, 2))
    assert not board.is_free((5, 0))
    assert board.is_free((3, 3))

    assert board.take_fruit((0, 0)).kind == APPLE
    assert board.take_fruit((4, 4)).kind == SEED
    assert board.take_fruit((4, 4)) is None


# ── Difficulty catalog ────────────────────────────────────────────
def test_catalog_modes() -> None:
    assert set(DIFFICULTIES) == {"easy", "medium", "hard", "survivor"}
    survivor = get_difficulty("survivor")
    assert survivor.is_survivor
    assert survivor.timer_sec is None
    assert survivor.survivor.border_block_score == 200
    assert get_difficulty("medium").borders == Borders(top=True, bottom=True)
    assert get_difficulty("hard").borders.blocked_count() == 4


def test_unknown_mode_raises() -> None:
    with pytest.raises(ConfigNotFoundError) as exc:
        get_difficulty("impossible")
    assert isinstance(exc.value, GridSnakeError)
    assert isinstance(exc.value, KeyError)
    assert "impossible" in str(exc.value)


def test_borders_block_is_copy_on_write() -> None:
    open_all = Borders()
    closed = open_all.block("right")
    assert open_all.blocked_count() == 0
    assert closed == Borders(right=True)


# ── Scheduler ─────────────────────────────────────────────────────
def test_scheduler_fires_in_due_order() -> None:
    sched = ManualScheduler()
    fired = []
    sched.call_later(2.0, lambda: fired.append("b"))
    sched.call_later(1.0, lambda: fired.append("a"))
    assert sched.run_due(0.9) == 0
    assert sched.run_due(5.0) == 2
    assert fired == ["a", "b"]


def test_cancelled_callbacks_never_fire() -> None:
    sched = ManualScheduler()
    fired = []
    handle = sched.call_later(1.0, lambda: fired.append("x"))
    sched.cancel(handle)
    assert sched.pending() == 0
    sched.run_due(2.0)
    assert fired == []
