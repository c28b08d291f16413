import unittest

import numpy as np

from labyrinth.maze import (
    Direction,
    Maze,
    MazeSession,
    Position,
    SessionState,
    can_move,
    generate_maze,
    is_complete,
    move,
    shortest_path,
)
from labyrinth.maze.solver import is_perfect, neighbors, path_to_directions, reachable_cells


class MoveValidationTests(unittest.TestCase):
    def test_can_move_respects_walls_and_bounds(self) -> None:
        for seed in (0, 42, -3):
            maze = generate_maze(7, 5, seed)
            for cell in maze.cells():
                position = Position(cell.x, cell.y)
                for direction in Direction:
                    dx, dy = direction.delta
                    inside = maze.contains(cell.x + dx, cell.y + dy)
                    expected = not cell.has_wall(direction) and inside
                    self.assertEqual(can_move(maze, position, direction), expected)
                    if cell.has_wall(direction):
                        self.assertFalse(can_move(maze, position, direction))

    def test_illegal_move_returns_equal_position(self) -> None:
        maze = generate_maze(5, 5, 8)
        for cell in maze.cells():
            position = Position(cell.x, cell.y)
            for direction in Direction:
                result = move(maze, position, direction)
                if can_move(maze, position, direction):
                    self.assertEqual(result, position.step(direction))
                else:
                    self.assertEqual(result, position)

    def test_entrance_and_exit_openings_are_not_moves(self) -> None:
        maze = generate_maze(4, 4, 1)
        self.assertFalse(can_move(maze, maze.entrance, Direction.TOP))
        self.assertEqual(move(maze, maze.entrance, "up"), maze.entrance)
        self.assertFalse(can_move(maze, maze.exit, Direction.BOTTOM))

    def test_move_accepts_direction_names(self) -> None:
        maze = generate_maze(2, 1, 0)
        self.assertEqual(move(maze, Position(0, 0), "right"), Position(1, 0))
        self.assertEqual(move(maze, Position(1, 0), "L"), Position(0, 0))
        with self.assertRaises(ValueError):
            move(maze, Position(0, 0), "sideways")

    def test_is_complete_only_at_exit(self) -> None:
        maze = generate_maze(3, 2, 4)
        self.assertTrue(is_complete(Position(2, 1), maze))
        self.assertFalse(is_complete(Position(0, 0), maze))
        self.assertFalse(is_complete(Position(2, 0), maze))

    def test_two_by_one_completes_in_one_move(self) -> None:
        maze = generate_maze(2, 1, 0)
        self.assertEqual(neighbors(maze, maze.entrance), [(Direction.RIGHT, Position(1, 0))])
        self.assertTrue(is_complete(move(maze, maze.entrance, Direction.RIGHT), maze))


class ExitReachabilityTests(unittest.TestCase):
    def test_exit_reachable_for_many_seeds(self) -> None:
        for seed in range(-10, 30):
            maze = generate_maze(6, 9, seed)
            path = shortest_path(maze)
            self.assertEqual(path[0], maze.entrance)
            self.assertEqual(path[-1], maze.exit)
            position = maze.entrance
            for direction in path_to_directions(path):
                self.assertTrue(can_move(maze, position, direction))
                position = move(maze, position, direction)
            self.assertTrue(is_complete(position, maze))

    def test_ten_by_ten_seed_42_walkthrough(self) -> None:
        maze = generate_maze(10, 10, 42)
        self.assertEqual(maze.to_rows(), generate_maze(10, 10, 42).to_rows())
        session = MazeSession(maze)
        session.start()
        for direction in path_to_directions(shortest_path(maze)):
            self.assertFalse(session.is_complete)
            session.move(direction)
        self.assertTrue(session.is_complete)
        self.assertEqual(session.position, Position(9, 9))

    def test_path_to_directions_rejects_gaps(self) -> None:
        with self.assertRaises(ValueError):
            path_to_directions([Position(0, 0), Position(2, 0)])


class MazeSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.maze = generate_maze(5, 5, 21)
        self.session = MazeSession(self.maze)

    def test_starts_not_started_and_ignores_moves(self) -> None:
        self.assertIs(self.session.state, SessionState.NOT_STARTED)
        for direction in Direction:
            self.assertEqual(self.session.move(direction), Position(0, 0))
            self.assertFalse(self.session.can_move(direction))
        self.assertEqual(self.session.move_count, 0)

    def test_start_places_player_at_entrance(self) -> None:
        self.assertEqual(self.session.start(), Position(0, 0))
        self.assertIs(self.session.state, SessionState.IN_PROGRESS)
        self.assertEqual(self.session.history, [Position(0, 0)])

    def test_blocked_moves_stay_in_progress(self) -> None:
        self.session.start()
        blocked = [d for d in Direction if not can_move(self.maze, Position(0, 0), d)]
        for direction in blocked:
            self.assertEqual(self.session.move(direction), Position(0, 0))
        self.assertIs(self.session.state, SessionState.IN_PROGRESS)
        self.assertEqual(self.session.move_count, len(blocked))
        self.assertEqual(self.session.history, [Position(0, 0)])

    def test_completion_is_terminal(self) -> None:
        self.session.start()
        path = shortest_path(self.maze)
        for direction in path_to_directions(path):
            self.session.move(direction)
        self.assertIs(self.session.state, SessionState.COMPLETED)
        self.assertEqual(self.session.history, path)
        count = self.session.move_count
        for direction in Direction:
            self.assertEqual(self.session.move(direction), self.maze.exit)
        self.assertEqual(self.session.move_count, count)
        self.assertIs(self.session.state, SessionState.COMPLETED)

    def test_reset_and_restart(self) -> None:
        self.session.start()
        for direction in path_to_directions(shortest_path(self.maze)):
            self.session.move(direction)
        self.session.reset()
        self.assertIs(self.session.state, SessionState.NOT_STARTED)
        self.session.start()
        self.assertIs(self.session.state, SessionState.IN_PROGRESS)
        self.assertEqual(self.session.position, Position(0, 0))

    def test_single_cell_session_completes_on_start(self) -> None:
        session = MazeSession.for_seed(1, 1, 0)
        session.start()
        self.assertIs(session.state, SessionState.COMPLETED)

    def test_sessions_do_not_share_state(self) -> None:
        other = MazeSession(self.maze)
        self.session.start()
        other.start()
        direction, _ = neighbors(self.maze, Position(0, 0))[0]
        self.session.move(direction)
        self.assertEqual(other.position, Position(0, 0))


class ModelTests(unittest.TestCase):
    def test_negative_position_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Position(-1, 0)

    def test_direction_parse(self) -> None:
        self.assertIs(Direction.parse("Up"), Direction.TOP)
        self.assertIs(Direction.parse("down"), Direction.BOTTOM)
        self.assertIs(Direction.parse("R"), Direction.RIGHT)
        self.assertIs(Direction.parse(Direction.LEFT), Direction.LEFT)
        self.assertEqual([d.opposite for d in Direction], [Direction.BOTTOM, Direction.LEFT, Direction.TOP, Direction.RIGHT])

    def test_from_rows_round_trip_and_validation(self) -> None:
        maze = generate_maze(4, 3, 9)
        self.assertEqual(Maze.from_rows(maze.to_rows()), maze)
        with self.assertRaises(ValueError):
            Maze.from_rows([[15, 7]])
        with self.assertRaises(ValueError):
            Maze.from_rows([[1, 2], [3]])
        with self.assertRaises(ValueError):
            Maze.from_rows([[16]])

    def test_from_rows_accepts_numpy_arrays(self) -> None:
        maze = generate_maze(5, 3, 2)
        self.assertEqual(Maze.from_rows(maze.wall_matrix()), maze)
        with self.assertRaises(ValueError):
            Maze.from_rows(np.zeros((0, 3), dtype=np.uint8))
        with self.assertRaises(ValueError):
            Maze.from_rows(np.full((2, 2, 2), 15))
        with self.assertRaises(ValueError):
            Maze.from_rows([])

    def test_open_square_is_not_a_perfect_maze(self) -> None:
        # All four interior walls of a 2x2 grid removed: one cycle, four passages.
        top, right, bottom, left = (d.bit for d in Direction)
        maze = Maze.from_rows([
            [top | left, top | right],
            [bottom | left, bottom | right],
        ])
        self.assertEqual(maze.passage_count(), 4)
        self.assertEqual(len(reachable_cells(maze)), 4)
        self.assertFalse(is_perfect(maze))

    def test_disconnected_grid_is_not_a_perfect_maze(self) -> None:
        maze = Maze.from_rows([[15, 15]])
        self.assertEqual(reachable_cells(maze), {Position(0, 0)})
        self.assertFalse(is_perfect(maze))
        self.assertEqual(shortest_path(maze), [])

    def test_cell_out_of_bounds(self) -> None:
        maze = generate_maze(2, 2, 0)
        with self.assertRaises(IndexError):
            maze.cell(2, 0)
        with self.assertRaises(IndexError):
            maze.has_wall(Position(0, 5), Direction.TOP)


if __name__ == "__main__":
    unittest.main()
