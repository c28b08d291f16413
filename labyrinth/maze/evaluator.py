"""Maze evaluator that replays a candidate move sequence."""

from __future__ import annotations

import argparse
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..base import AbstractPuzzleEvaluator
from .model import Direction, Maze
from .solver import shortest_path
from .traversal import MazeSession

logger = logging.getLogger(__name__)

MoveLike = Union[Direction, str]

_MOVE_WORDS = {"up", "down", "left", "right", "top", "bottom"}


@dataclass
class MazeEvaluationResult:
    puzzle_id: str
    completed: bool
    final_position: Tuple[int, int]
    steps_taken: int
    blocked_moves: int
    ignored_moves: int
    optimal_length: int
    message: str

    @property
    def efficiency(self) -> float:
        """Optimal length over steps taken; 0.0 for an unfinished walk."""

        if not self.completed:
            return 0.0
        if self.steps_taken == 0:
            return 1.0
        return self.optimal_length / self.steps_taken

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "completed": self.completed,
            "final_position": list(self.final_position),
            "steps_taken": self.steps_taken,
            "blocked_moves": self.blocked_moves,
            "ignored_moves": self.ignored_moves,
            "optimal_length": self.optimal_length,
            "efficiency": self.efficiency,
            "message": self.message,
        }


def parse_moves(text: str) -> List[Direction]:
    """Parse ``"right, down"``, ``"up left"`` or a compact string like ``"RRDDL"``."""

    tokens = [token for token in re.split(r"[\s,;]+", text.strip()) if token]
    if len(tokens) == 1 and len(tokens[0]) > 1 and tokens[0].lower() not in _MOVE_WORDS:
        tokens = list(tokens[0])
    return [Direction.parse(token) for token in tokens]


class MazeEvaluator(AbstractPuzzleEvaluator):
    """Evaluate a move sequence by walking it from the entrance."""

    def evaluate(self, puzzle_id: str, moves: Iterable[MoveLike]) -> MazeEvaluationResult:
        record = self.get_record(puzzle_id)
        maze = Maze.from_rows(record["walls"])
        width, height = map(int, record["grid_size"])
        if (maze.width, maze.height) != (width, height):
            raise ValueError(f"Puzzle '{puzzle_id}' walls do not match grid_size {width}x{height}")

        optimal = record.get("solution_length")
        if optimal is None:
            optimal = len(shortest_path(maze)) - 1

        session = MazeSession(maze)
        session.start()
        steps = blocked = ignored = 0
        for raw in moves:
            direction = Direction.parse(raw)
            if session.is_complete:
                ignored += 1
                continue
            before = session.position
            if session.move(direction) == before:
                blocked += 1
            else:
                steps += 1

        completed = session.is_complete
        if completed and blocked == 0 and steps == optimal:
            message = "Reached the exit along the shortest path."
        elif completed:
            message = "Reached the exit."
        elif steps == 0 and blocked == 0:
            message = "No moves provided."
        else:
            message = "Walk ended before reaching the exit."

        logger.debug("Evaluated %s: completed=%s steps=%d blocked=%d", puzzle_id, completed, steps, blocked)
        return MazeEvaluationResult(
            puzzle_id=puzzle_id,
            completed=completed,
            final_position=(session.position.x, session.position.y),
            steps_taken=steps,
            blocked_moves=blocked,
            ignored_moves=ignored,
            optimal_length=int(optimal),
            message=message,
        )


__all__ = ["MazeEvaluator", "MazeEvaluationResult", "parse_moves"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate labyrinth solutions")
    parser.add_argument("metadata", type=Path, help="Path to maze metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the maze to evaluate")
    parser.add_argument("moves", type=str, help="Moves such as 'RRDD' or 'right,down,down'")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    evaluator = MazeEvaluator(args.metadata)
    result = evaluator.evaluate(args.puzzle_id, parse_moves(args.moves))
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
