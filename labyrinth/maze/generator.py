"""Seeded maze generator for the labyrinth challenge."""

from __future__ import annotations

import argparse
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..base import AbstractPuzzleGenerator, PathLike
from .model import ALL_WALLS, Direction, Maze, check_dimensions
from .rng import ContentId, SeededRandom, derive_seed
from .solver import shortest_path

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Guide the pilgrim from the entrance at the top-left to the exit at the bottom-right."


def generate_maze(width: int, height: int, seed: int) -> Maze:
    """Carve a perfect maze with a randomized depth-first backtracker.

    The same ``(width, height, seed)`` always yields the same maze. The
    entrance's top wall and the exit's bottom wall are opened after carving.
    """

    check_dimensions(width, height)
    width, height = int(width), int(height)
    rng = SeededRandom(seed)
    walls = np.full((height, width), ALL_WALLS, dtype=np.uint8)
    visited = np.zeros((height, width), dtype=bool)

    visited[0, 0] = True
    stack: List[Tuple[int, int]] = [(0, 0)]
    carved = 0
    while stack:
        x, y = stack[-1]
        candidates: List[Tuple[Direction, int, int]] = []
        for direction in Direction:
            dx, dy = direction.delta
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and not visited[ny, nx]:
                candidates.append((direction, nx, ny))

        if not candidates:
            stack.pop()
            continue

        direction, nx, ny = candidates[rng.randbelow(len(candidates))]
        walls[y, x] &= ~direction.bit & ALL_WALLS
        walls[ny, nx] &= ~direction.opposite.bit & ALL_WALLS
        visited[ny, nx] = True
        stack.append((nx, ny))
        carved += 1

    walls[0, 0] &= ~Direction.TOP.bit & ALL_WALLS
    walls[height - 1, width - 1] &= ~Direction.BOTTOM.bit & ALL_WALLS
    logger.debug("Generated %dx%d maze (seed=%d, passages=%d)", width, height, seed, carved)
    return Maze(walls)


@dataclass
class MazePuzzleRecord:
    id: str
    prompt: str
    grid_size: Tuple[int, int]
    seed: int
    walls: List[List[int]]
    start: Tuple[int, int]
    goal: Tuple[int, int]
    solution: List[Tuple[int, int]]

    @property
    def solution_length(self) -> int:
        return max(len(self.solution) - 1, 0)

    def to_maze(self) -> Maze:
        return Maze.from_rows(self.walls)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "grid_size": list(self.grid_size),
            "seed": self.seed,
            "walls": self.walls,
            "start": list(self.start),
            "goal": list(self.goal),
            "solution": [list(cell) for cell in self.solution],
            "solution_length": self.solution_length,
        }


class MazeGenerator(AbstractPuzzleGenerator[MazePuzzleRecord]):
    """Build labyrinth records whose walls are reproducible from their seed."""

    def __init__(
        self,
        output_dir: PathLike = "data/labyrinth",
        *,
        width: int = 10,
        height: int = 10,
        prompt: str = DEFAULT_PROMPT,
        seed: Optional[int] = None,
    ) -> None:
        check_dimensions(width, height)
        super().__init__(output_dir)
        self.width = width
        self.height = height
        self.prompt = prompt
        # Without a seed the batch itself is unrepeatable, but each record still
        # carries the seed that reproduces its maze.
        base_seed = seed if seed is not None else uuid.uuid4().int
        self._rng = SeededRandom(base_seed)

    def create_puzzle(
        self,
        *,
        puzzle_id: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> MazePuzzleRecord:
        if seed is None:
            seed = derive_seed(puzzle_id) if puzzle_id is not None else self._next_seed()
        puzzle_id = puzzle_id or str(uuid.uuid4())

        maze = generate_maze(self.width, self.height, seed)
        path = shortest_path(maze)
        if not path:
            raise RuntimeError("Failed to generate maze path")

        logger.info("Created maze %s (%dx%d, seed=%d)", puzzle_id, self.width, self.height, seed)
        return MazePuzzleRecord(
            id=puzzle_id,
            prompt=self.prompt,
            grid_size=(self.width, self.height),
            seed=seed,
            walls=maze.to_rows(),
            start=(maze.entrance.x, maze.entrance.y),
            goal=(maze.exit.x, maze.exit.y),
            solution=[(cell.x, cell.y) for cell in path],
        )

    def create_random_puzzle(self) -> MazePuzzleRecord:
        return self.create_puzzle()

    def create_for_content(self, content_ids: Sequence[ContentId]) -> List[MazePuzzleRecord]:
        """One record per content id, seeded so the same content replays the same maze."""

        records = []
        for content_id in content_ids:
            # Seed from the stored id so create_puzzle(puzzle_id=...) replays the same maze.
            puzzle_id = content_id.decode("utf-8") if isinstance(content_id, bytes) else str(content_id)
            records.append(self.create_puzzle(puzzle_id=puzzle_id, seed=derive_seed(puzzle_id)))
        return records

    def _next_seed(self) -> int:
        # 63 bits fit a signed 64-bit integer on the JSON consumer side.
        return self._rng.getrandbits(63)


__all__ = ["MazeGenerator", "MazePuzzleRecord", "generate_maze"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate labyrinth mazes")
    parser.add_argument("count", type=int, help="Number of random mazes to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/labyrinth"), help="Where to save metadata")
    parser.add_argument("--width", type=int, default=10)
    parser.add_argument("--height", type=int, default=10)
    parser.add_argument("--prompt", type=str, default=DEFAULT_PROMPT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--content-id",
        action="append",
        default=[],
        help="Content identifier to derive a reproducible maze from (repeatable)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    generator = MazeGenerator(
        output_dir=args.output_dir,
        width=args.width,
        height=args.height,
        prompt=args.prompt,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    records = generator.create_for_content(args.content_id)
    records += generator.generate_dataset(args.count)
    generator.write_metadata(records, metadata_path)
    print(f"Wrote {len(records)} mazes to {metadata_path}")


if __name__ == "__main__":
    main()
