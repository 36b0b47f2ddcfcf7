"""
errors.py — Exceptions raised by the simulation core.

Game outcomes (walls, self-collision, starvation, timer expiry) are status
transitions, not exceptions. Only misuse of the API ends up here.
"""


class GridSnakeError(Exception):
    """Base class for all gridsnake errors."""


class ConfigNotFoundError(GridSnakeError, KeyError):
    """Raised when a session is started with an unknown difficulty."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"no difficulty named {self.name!r}"
