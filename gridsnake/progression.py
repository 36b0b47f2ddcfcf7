"""
progression.py — Survivor stages, abilities and border closing.

Stages are reached at cumulative score thresholds that widen by
STAGE_STEP_POINTS every stage (200, 500, 900, 1400, ...). Borders close
independently of stages, one per `border_block_score` points.
"""

import logging
import random
from dataclasses import dataclass

from .config import BORDER_ORDER, STAGE_BASE_POINTS, STAGE_STEP_POINTS
from .difficulty import Borders, SurvivorRules
from .model import Ability

logger = logging.getLogger(__name__)

STAGE_ABILITIES = {
    1: Ability.EXPLOSION,
    2: Ability.DOUBLE_POINTS,
    3: Ability.MAGNET,
}
RANDOM_POOL = tuple(STAGE_ABILITIES.values())


def stage_threshold(stage: int) -> int:
    """Score needed to reach `stage` (stage 1 needs nothing)."""
    n = stage - 1
    return n * STAGE_BASE_POINTS + STAGE_STEP_POINTS * n * (n - 1) // 2


def stage_for_score(score: int) -> int:
    stage = 1
    while score >= stage_threshold(stage + 1):
        stage += 1
    return stage


def ability_for_stage(stage: int, rng: random.Random) -> Ability:
    if stage in STAGE_ABILITIES:
        return STAGE_ABILITIES[stage]
    return rng.choice(RANDOM_POOL)


def borders_for_score(score: int, current: Borders, rules: SurvivorRules) -> Borders:
    """Close borders in BORDER_ORDER up to score // border_block_score."""
    wanted = min(len(BORDER_ORDER), score // rules.border_block_score)
    borders = current
    for edge in BORDER_ORDER[:wanted]:
        if not getattr(borders, edge):
            borders = borders.block(edge)
            logger.info("survivor border closed: %s", edge)
    return borders


@dataclass
class StageChange:
    stage: int
    ability: Ability


class SurvivorProgression:
    """Tracks the current stage and the single active ability."""

    def __init__(self, rules: SurvivorRules, rng: random.Random):
        self.rules = rules
        self.rng = rng
        self.stage = 1
        self.ability = STAGE_ABILITIES[1]

    def update(self, score: int) -> StageChange | None:
        """Advance the stage if `score` crossed a threshold."""
        new_stage = stage_for_score(score)
        if new_stage <= self.stage:
            return None
        self.stage = new_stage
        self.ability = ability_for_stage(new_stage, self.rng)
        logger.info("advanced to stage %d with %s", new_stage, self.ability.value)
        return StageChange(new_stage, self.ability)
