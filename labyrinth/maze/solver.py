"""Breadth-first queries over the passages of a maze."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .model import Direction, Maze, Position
from .traversal import can_move


def neighbors(maze: Maze, position: Position) -> List[Tuple[Direction, Position]]:
    """Legal moves from ``position`` in top/right/bottom/left order."""

    return [
        (direction, position.step(direction))
        for direction in Direction
        if can_move(maze, position, direction)
    ]


def reachable_cells(maze: Maze, start: Optional[Position] = None) -> Set[Position]:
    start = maze.entrance if start is None else start
    seen = {start}
    queue: deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        for _, nxt in neighbors(maze, current):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def is_perfect(maze: Maze) -> bool:
    """True when every cell is connected and the passages contain no cycle."""

    cell_count = maze.width * maze.height
    return (
        maze.passage_count() == cell_count - 1
        and len(reachable_cells(maze)) == cell_count
    )


def shortest_path(
    maze: Maze,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
) -> List[Position]:
    """Return the cells from ``start`` to ``goal`` inclusive, or ``[]`` if unreachable."""

    start = maze.entrance if start is None else start
    goal = maze.exit if goal is None else goal
    parents: Dict[Position, Optional[Position]] = {start: None}
    queue: deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for _, nxt in neighbors(maze, current):
            if nxt not in parents:
                parents[nxt] = current
                queue.append(nxt)

    if goal not in parents:
        return []
    node: Optional[Position] = goal
    result: List[Position] = []
    while node is not None:
        result.append(node)
        node = parents[node]
    result.reverse()
    return result


def path_to_directions(path: Sequence[Position]) -> List[Direction]:
    by_delta = {direction.delta: direction for direction in Direction}
    directions: List[Direction] = []
    for current, nxt in zip(path, path[1:]):
        delta = (nxt.x - current.x, nxt.y - current.y)
        if delta not in by_delta:
            raise ValueError(f"Cells {current} and {nxt} are not adjacent")
        directions.append(by_delta[delta])
    return directions


__all__ = [
    "is_perfect",
    "neighbors",
    "path_to_directions",
    "reachable_cells",
    "shortest_path",
]
