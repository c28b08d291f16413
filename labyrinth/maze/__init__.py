"""Maze generation, traversal and evaluation package."""

__all__ = [
    "Cell",
    "Direction",
    "InvalidDimension",
    "Maze",
    "Position",
    "SeededRandom",
    "derive_seed",
    "generate_maze",
    "MazeGenerator",
    "MazePuzzleRecord",
    "MazeSession",
    "SessionState",
    "can_move",
    "move",
    "is_complete",
    "shortest_path",
    "MazeEvaluator",
    "MazeEvaluationResult",
]

from .model import Cell, Direction, InvalidDimension, Maze, Position
from .rng import SeededRandom, derive_seed
from .generator import MazeGenerator, MazePuzzleRecord, generate_maze
from .traversal import MazeSession, SessionState, can_move, is_complete, move
from .solver import shortest_path
from .evaluator import MazeEvaluator, MazeEvaluationResult
