"""
model.py — Board state.

Pure data for one session: the snake, the fruit on the grid and the borders.
No rendering, no input handling, no scoring rules.

Classes:
    Direction   — immutable (dx, dy) value object
    Ability     — survivor power-up, at most one active
    Fruit       — an apple or a seed on the grid
    SoundEvent  — cue for the host to play
    Snake       — body, current and queued direction
    Board       — snake + apples + seeds + borders for one session
"""

import enum
from collections import deque
from dataclasses import dataclass

from .difficulty import Borders

Position = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int):
        if (abs(x), abs(y)) not in ((1, 0), (0, 1)):
            raise ValueError(f"not an axis unit vector: ({x}, {y})")
        self.x = x
        self.y = y

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def apply(self, pos: Position) -> Position:
        return pos[0] + self.x, pos[1] + self.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)


# ──────────────────────────── Ability ────────────────────────────
class Ability(enum.Enum):
    NONE          = "none"
    EXPLOSION     = "explosion"
    DOUBLE_POINTS = "double_points"
    MAGNET        = "magnet"


# ───────────────────────── Fruit & cues ──────────────────────────
APPLE = "apple"
SEED  = "seed"


@dataclass(frozen=True)
class Fruit:
    pos: Position
    kind: str
    spawned_at: float


@dataclass(frozen=True)
class SoundEvent:
    name: str
    timestamp: float


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Body and heading of the player's snake.
    Head is body[0]; the body never contains duplicates while alive.
    """

    def __init__(self, body: list[Position], start_dir: Direction):
        self.body: deque[Position] = deque(body)
        self.dir: Direction = start_dir
        self.next_dir: Direction = start_dir
        self.grow_pending: int = 0

    @classmethod
    def centered(cls, grid: int, length: int) -> "Snake":
        """Lay `length` segments leftward from the grid center, heading +x."""
        center = grid // 2
        return cls([(center - i, center) for i in range(length)], Direction.RIGHT)

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Position:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """Queue a direction change (ignored if it would reverse the snake)."""
        if new_dir.is_opposite(self.dir):
            return False
        self.next_dir = new_dir
        return True

    def commit_direction(self) -> Direction:
        self.dir = self.next_dir
        return self.dir

    def advance(self, new_head: Position, grow: bool) -> Position | None:
        """Push a new head. Returns the tail cell that was dropped, if any."""
        self.body.appendleft(new_head)
        if grow:
            return None
        if self.grow_pending > 0:
            self.grow_pending -= 1
            return None
        return self.body.pop()

    def regrow_tail(self, tail: Position) -> None:
        self.body.append(tail)

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, pos: Position) -> bool:
        return pos in self.body


# ──────────────────────────── Board ──────────────────────────────
class Board:
    """Every entity on the grid for one session."""

    def __init__(self, grid_size: int, snake: Snake, borders: Borders):
        self.grid_size = grid_size
        self.snake = snake
        self.borders = borders
        self.apples: dict[Position, Fruit] = {}
        self.seeds: dict[Position, Fruit] = {}

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def is_free(self, pos: Position) -> bool:
        return (
            self.in_bounds(pos)
            and not self.snake.occupies(pos)
            and pos not in self.apples
            and pos not in self.seeds
        )

    def add_apple(self, pos: Position, now: float) -> None:
        self.apples[pos] = Fruit(pos, APPLE, now)

    def add_seed(self, pos: Position, now: float) -> None:
        self.seeds[pos] = Fruit(pos, SEED, now)

    def take_fruit(self, pos: Position) -> Fruit | None:
        """Remove and return the fruit at `pos`, apples before seeds."""
        if pos in self.apples:
            return self.apples.pop(pos)
        if pos in self.seeds:
            return self.seeds.pop(pos)
        return None

    def move_fruit(self, fruit: Fruit, dest: Position) -> Fruit:
        store = self.apples if fruit.kind == APPLE else self.seeds
        del store[fruit.pos]
        moved = Fruit(dest, fruit.kind, fruit.spawned_at)
        store[dest] = moved
        return moved
