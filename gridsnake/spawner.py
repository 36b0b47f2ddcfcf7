"""
spawner.py — Apple placement policy.

The number of apples on the grid grows with the apples eaten so far.
Placement is rejection sampling with a bounded number of attempts, so a
crowded board yields fewer apples instead of stalling the tick.
"""

import logging
import random

from .config import SPAWN_ATTEMPTS, WIN_FILL_RATIO
from .difficulty import DifficultyConfig
from .model import Board, Position

logger = logging.getLogger(__name__)


def target_apple_count(score: int, cfg: DifficultyConfig) -> int:
    """How many apples should be on the board for the given score."""
    eaten = score // cfg.apple_points
    if eaten == 0:
        target = 1
    elif eaten < 3:
        target = 2
    else:
        target = 1 + eaten // 3
    target = max(target, cfg.apple_count_range[0])
    cap = int(cfg.grid * cfg.grid * WIN_FILL_RATIO)
    return min(target, cap)


def random_free_cell(board: Board, rng: random.Random) -> Position | None:
    """Pick a random empty cell, or None once SPAWN_ATTEMPTS are used up."""
    for _ in range(SPAWN_ATTEMPTS):
        pos = (rng.randrange(board.grid_size), rng.randrange(board.grid_size))
        if board.is_free(pos):
            return pos
    return None


def spawn_apples(
    board: Board,
    score: int,
    cfg: DifficultyConfig,
    rng: random.Random,
    now: float,
) -> int:
    """Top the board up to its target apple count. Returns apples added."""
    target = target_apple_count(score, cfg)
    added = 0
    while len(board.apples) < target:
        pos = random_free_cell(board, rng)
        if pos is None:
            logger.debug("spawn gave up with %d/%d apples", len(board.apples), target)
            break
        board.add_apple(pos, now)
        added += 1
    return added
