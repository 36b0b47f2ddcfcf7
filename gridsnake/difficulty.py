"""
difficulty.py — Static catalog of per-mode parameters.

Every mode is an immutable DifficultyConfig. The borders stored here are
defaults only: a session copies them onto its board, where survivor mode is
allowed to close them one by one.
"""

from dataclasses import dataclass, replace

from .errors import ConfigNotFoundError

SURVIVOR = "survivor"


@dataclass(frozen=True)
class Borders:
    """Which grid edges are walls (True) rather than wrap-around (False)."""
    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False

    def blocked_count(self) -> int:
        return sum((self.top, self.bottom, self.left, self.right))

    def block(self, edge: str) -> "Borders":
        return replace(self, **{edge: True})


@dataclass(frozen=True)
class SurvivorRules:
    accel_per_100: int
    min_tick_ms: int
    border_block_score: int


@dataclass(frozen=True)
class DifficultyConfig:
    name: str
    grid: int
    tick_ms: int
    start_len: int
    apple_count_range: tuple[int, int]
    timer_sec: int | None
    apple_points: int
    starvation_ticks: int | None
    borders: Borders
    survivor: SurvivorRules | None = None

    @property
    def is_survivor(self) -> bool:
        return self.survivor is not None


DIFFICULTIES: dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(
        name="easy", grid=20, tick_ms=140, start_len=3,
        apple_count_range=(1, 1), timer_sec=180, apple_points=10,
        starvation_ticks=60,
        borders=Borders(),
    ),
    "medium": DifficultyConfig(
        name="medium", grid=24, tick_ms=110, start_len=4,
        apple_count_range=(1, 2), timer_sec=150, apple_points=20,
        starvation_ticks=45,
        borders=Borders(top=True, bottom=True),
    ),
    "hard": DifficultyConfig(
        name="hard", grid=28, tick_ms=85, start_len=5,
        apple_count_range=(2, 2), timer_sec=120, apple_points=30,
        starvation_ticks=30,
        borders=Borders(top=True, bottom=True, left=True, right=True),
    ),
    SURVIVOR: DifficultyConfig(
        name=SURVIVOR, grid=24, tick_ms=120, start_len=3,
        apple_count_range=(1, 2), timer_sec=None, apple_points=10,
        starvation_ticks=None,
        borders=Borders(),
        survivor=SurvivorRules(accel_per_100=10, min_tick_ms=50,
                               border_block_score=200),
    ),
}


def get_difficulty(name: str) -> DifficultyConfig:
    """Look up a mode by name; unknown names raise ConfigNotFoundError."""
    try:
        return DIFFICULTIES[name]
    except KeyError:
        raise ConfigNotFoundError(name) from None
