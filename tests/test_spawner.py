from __future__ import annotations

import random
from dataclasses import replace

import pytest

from gridsnake.difficulty import Borders, get_difficulty
from gridsnake.model import Board, Direction, Snake
from gridsnake.spawner import random_free_cell, spawn_apples, target_apple_count

EASY = get_difficulty("easy")


@pytest.mark.parametrize(
    "score, expected",
    [(0, 1), (9, 1), (10, 2), (20, 2), (30, 2), (59, 2), (60, 3), (150, 6)],
)
def test_target_grows_with_apples_eaten(score: int, expected: int) -> None:
    assert target_apple_count(score, EASY) == expected


def test_target_respects_mode_minimum() -> None:
    assert target_apple_count(0, get_difficulty("hard")) == 2


def test_target_capped_by_grid_area() -> None:
    tiny = replace(EASY, grid=3)
    assert target_apple_count(10_000, tiny) == 2


def test_spawned_apples_avoid_snake_and_seeds() -> None:
    board = Board(6, Snake.centered(6, 3), Borders())
    for x in range(6):
        board.add_seed((x, 0), 0.0)
    added = spawn_apples(board, 90, EASY, random.Random(3), 0.0)
    assert added == len(board.apples) == 4
    for pos in board.apples:
        assert not board.snake.occupies(pos)
        assert pos not in board.seeds


def test_full_board_gives_up_instead_of_looping() -> None:
    body = [(0, 0), (1, 0), (1, 1), (0, 1)]
    board = Board(2, Snake(body, Direction.LEFT), Borders())
    assert random_free_cell(board, random.Random(0)) is None
    assert spawn_apples(board, 0, EASY, random.Random(0), 0.0) == 0
    assert board.apples == {}
