"""Seeded labyrinth generation and traversal toolkit."""

__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "Direction",
    "InvalidDimension",
    "Maze",
    "Position",
    "generate_maze",
    "MazeGenerator",
    "MazePuzzleRecord",
    "MazeSession",
    "SessionState",
    "MazeEvaluator",
    "MazeEvaluationResult",
]

from .base import AbstractPuzzleGenerator, AbstractPuzzleEvaluator
from .maze import (
    Direction,
    InvalidDimension,
    Maze,
    Position,
    generate_maze,
    MazeGenerator,
    MazePuzzleRecord,
    MazeSession,
    SessionState,
    MazeEvaluator,
    MazeEvaluationResult,
)
