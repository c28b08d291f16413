"""Grid, cell and position types shared by the maze generator and traversal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Sequence, Tuple, Union

import numpy as np


class InvalidDimension(ValueError):
    """Raised when a maze is requested with a non-positive width or height."""


class Direction(Enum):
    """Cardinal move directions; the value doubles as the wall bit."""

    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8

    @property
    def bit(self) -> int:
        return self.value

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def wall_name(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """Accept a Direction, a name such as ``"up"``/``"left"`` or a letter."""

        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _ALIASES:
                return _ALIASES[key]
        raise ValueError(f"Unknown direction: {value!r}")


_DELTAS = {
    Direction.TOP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.BOTTOM: (0, 1),
    Direction.LEFT: (-1, 0),
}
_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.RIGHT: Direction.LEFT,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
}
_ALIASES = {
    "top": Direction.TOP,
    "up": Direction.TOP,
    "u": Direction.TOP,
    "t": Direction.TOP,
    "right": Direction.RIGHT,
    "r": Direction.RIGHT,
    "bottom": Direction.BOTTOM,
    "down": Direction.BOTTOM,
    "d": Direction.BOTTOM,
    "b": Direction.BOTTOM,
    "left": Direction.LEFT,
    "l": Direction.LEFT,
}

ALL_WALLS = Direction.TOP.bit | Direction.RIGHT.bit | Direction.BOTTOM.bit | Direction.LEFT.bit


@dataclass(frozen=True, order=True)
class Position:
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position coordinates must be non-negative, got ({self.x}, {self.y})")

    def step(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def to_list(self) -> List[int]:
        return [self.x, self.y]


@dataclass(frozen=True)
class Cell:
    """Read-only view of one grid position and its wall flags."""

    x: int
    y: int
    bits: int

    @property
    def walls(self) -> Dict[str, bool]:
        return {direction.wall_name: bool(self.bits & direction.bit) for direction in Direction}

    def has_wall(self, direction: Direction) -> bool:
        return bool(self.bits & direction.bit)


def check_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidDimension(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimension(f"{name} must be at least 1, got {value}")


class Maze:
    """Immutable grid of wall flags.

    Walls are stored as a ``(height, width)`` uint8 matrix where each entry is
    the OR of the :class:`Direction` bits still standing around that cell.
    """

    __slots__ = ("_walls",)

    def __init__(self, walls: np.ndarray) -> None:
        matrix = np.array(walls, dtype=np.uint8, copy=True)
        if matrix.ndim != 2:
            raise ValueError("Wall matrix must be two-dimensional")
        height, width = matrix.shape
        check_dimensions(width, height)
        if np.any(matrix > ALL_WALLS):
            raise ValueError("Wall matrix entries must be in the range 0-15")
        matrix.setflags(write=False)
        self._walls = matrix

    @classmethod
    def from_rows(cls, rows: Union[Sequence[Sequence[int]], np.ndarray]) -> "Maze":
        """Rebuild a maze from nested row lists or a 2-D array, checking edge consistency."""

        try:
            values = np.asarray(rows, dtype=np.int64)
        except (TypeError, ValueError) as exc:
            raise ValueError("Wall rows must be a non-empty rectangular grid of integers") from exc
        if values.ndim != 2 or values.size == 0:
            raise ValueError("Wall rows must be a non-empty rectangular grid of integers")
        if values.min() < 0 or values.max() > ALL_WALLS:
            raise ValueError("Wall matrix entries must be in the range 0-15")
        maze = cls(values)
        walls = maze._walls
        right = (walls[:, :-1] & Direction.RIGHT.bit) > 0
        left = (walls[:, 1:] & Direction.LEFT.bit) > 0
        bottom = (walls[:-1, :] & Direction.BOTTOM.bit) > 0
        top = (walls[1:, :] & Direction.TOP.bit) > 0
        if not (np.array_equal(right, left) and np.array_equal(bottom, top)):
            raise ValueError("Wall rows disagree on a shared edge")
        return maze

    @property
    def width(self) -> int:
        return int(self._walls.shape[1])

    @property
    def height(self) -> int:
        return int(self._walls.shape[0])

    @property
    def entrance(self) -> Position:
        return Position(0, 0)

    @property
    def exit(self) -> Position:
        return Position(self.width - 1, self.height - 1)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        if not self.contains(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} maze")
        return Cell(x, y, int(self._walls[y, x]))

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y, int(self._walls[y, x]))

    def has_wall(self, position: Position, direction: Direction) -> bool:
        if not self.contains(position.x, position.y):
            raise IndexError(f"Position {position} outside {self.width}x{self.height} maze")
        return bool(self._walls[position.y, position.x] & direction.bit)

    def wall_matrix(self) -> np.ndarray:
        """Return a writable copy of the wall bit matrix."""

        return self._walls.copy()

    def to_rows(self) -> List[List[int]]:
        return self._walls.astype(int).tolist()

    def passage_count(self) -> int:
        """Number of interior wall pairs removed (boundary openings excluded)."""

        horizontal = np.count_nonzero((self._walls[:, :-1] & Direction.RIGHT.bit) == 0)
        vertical = np.count_nonzero((self._walls[:-1, :] & Direction.BOTTOM.bit) == 0)
        return int(horizontal + vertical)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return self._walls.shape == other._walls.shape and np.array_equal(self._walls, other._walls)

    def __hash__(self) -> int:
        return hash((self._walls.shape, self._walls.tobytes()))

    def __repr__(self) -> str:
        return f"Maze(width={self.width}, height={self.height})"


__all__ = [
    "ALL_WALLS",
    "Cell",
    "Direction",
    "InvalidDimension",
    "Maze",
    "Position",
    "check_dimensions",
]
