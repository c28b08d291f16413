"""Move validation and per-session player state."""

from __future__ import annotations

from enum import Enum
from typing import List, Union

from .model import Direction, Maze, Position

DirectionLike = Union[Direction, str]


def can_move(maze: Maze, position: Position, direction: DirectionLike) -> bool:
    """Return True when the wall on ``direction``'s side is open and the target is in the grid."""

    direction = Direction.parse(direction)
    if maze.has_wall(position, direction):
        return False
    dx, dy = direction.delta
    # The entrance and exit openings lead off the grid.
    return maze.contains(position.x + dx, position.y + dy)


def move(maze: Maze, position: Position, direction: DirectionLike) -> Position:
    """Return the neighboring position, or ``position`` itself for an illegal move."""

    direction = Direction.parse(direction)
    if not can_move(maze, position, direction):
        return position
    return position.step(direction)


def is_complete(position: Position, maze: Maze) -> bool:
    return position == maze.exit


class SessionState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MazeSession:
    """One player walking one maze from the entrance to the exit.

    Moves requested before :meth:`start` or after completion are ignored and
    return the current position unchanged.
    """

    def __init__(self, maze: Maze) -> None:
        self.maze = maze
        self._state = SessionState.NOT_STARTED
        self._position = maze.entrance
        self.move_count = 0
        self.history: List[Position] = []

    @classmethod
    def for_seed(cls, width: int, height: int, seed: int) -> "MazeSession":
        from .generator import generate_maze

        return cls(generate_maze(width, height, seed))

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def position(self) -> Position:
        return self._position

    @property
    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETED

    def start(self) -> Position:
        self._position = self.maze.entrance
        self.move_count = 0
        self.history = [self._position]
        self._state = SessionState.IN_PROGRESS
        self._check_complete()
        return self._position

    def reset(self) -> None:
        self._state = SessionState.NOT_STARTED
        self._position = self.maze.entrance
        self.move_count = 0
        self.history = []

    def can_move(self, direction: DirectionLike) -> bool:
        if self._state is not SessionState.IN_PROGRESS:
            return False
        return can_move(self.maze, self._position, direction)

    def move(self, direction: DirectionLike) -> Position:
        direction = Direction.parse(direction)
        if self._state is not SessionState.IN_PROGRESS:
            return self._position
        self.move_count += 1
        target = move(self.maze, self._position, direction)
        if target != self._position:
            self._position = target
            self.history.append(target)
            self._check_complete()
        return self._position

    def _check_complete(self) -> None:
        if is_complete(self._position, self.maze):
            self._state = SessionState.COMPLETED


__all__ = [
    "MazeSession",
    "SessionState",
    "can_move",
    "is_complete",
    "move",
]
