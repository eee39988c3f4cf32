from collections import deque
import random

import pytest

from maze_nav.maze import Maze, generate_maze, DIRECTION_VECTORS
from maze_nav.pathfinding import find_path, manhattan, path_to_world_coords


def _z_maze():
    """3x3 serpentine: a single corridor from (0,0) to (2,2)."""
    maze = Maze(3, 3)
    for x, y, d in [
        (0, 0, "east"), (1, 0, "east"), (2, 0, "south"), (2, 1, "west"),
        (1, 1, "west"), (0, 1, "south"), (0, 2, "east"), (1, 2, "east"),
    ]:
        maze.carve(x, y, d)
    return maze


def _bfs_distance(maze, start, end):
    dist = {start: 0}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == end:
            return dist[cur]
        for nxt in maze.open_neighbors(*cur):
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                q.append(nxt)
    return None


def _assert_walkable(maze, path):
    for (x, y), nxt in zip(path, path[1:]):
        assert nxt in set(maze.open_neighbors(x, y))


def test_manhattan():
    assert manhattan(0, 0, 3, 4) == 7
    assert manhattan(5, 1, 2, 1) == 3


def test_z_corridor_exact_route():
    path = find_path(_z_maze(), 0, 0, 2, 2)
    assert path == [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]
    assert len(path) - 1 == 8


def test_start_equals_end():
    assert find_path(_z_maze(), 1, 1, 1, 1) == [(1, 1)]


def test_single_cell_maze():
    assert find_path(generate_maze(1, 1), 0, 0, 0, 0) == [(0, 0)]


def test_disconnected_regions_have_no_path():
    maze = Maze(4, 2)
    # left block and right block, nothing crosses x=1|2
    maze.carve(0, 0, "east")
    maze.carve(0, 0, "south")
    maze.carve(2, 0, "east")
    maze.carve(3, 0, "south")
    assert find_path(maze, 0, 0, 3, 1) is None
    assert find_path(maze, 1, 0, 0, 1) == [(1, 0), (0, 0), (0, 1)]


def test_closed_maze_has_no_path():
    assert find_path(Maze(3, 3), 0, 0, 2, 2) is None


def test_coordinates_are_clamped():
    maze = generate_maze(10, 10, seed=8)
    assert find_path(maze, -5, -5, 99, 99) == find_path(maze, 0, 0, 9, 9)


def test_infinite_coordinates_are_clamped():
    maze = generate_maze(10, 10, seed=8)
    assert find_path(maze, float("-inf"), 0, float("inf"), 3) == find_path(maze, 0, 0, 9, 3)
    assert find_path(maze, 4, float("inf"), 4, float("-inf")) == find_path(maze, 4, 9, 4, 0)


def test_float_coordinates_are_floored():
    maze = generate_maze(6, 6, seed=4)
    assert find_path(maze, 0.9, 0.2, 5.7, 5.99) == find_path(maze, 0, 0, 5, 5)


@pytest.mark.parametrize("seed", range(5))
def test_every_pair_connected_in_generated_maze(seed):
    maze = generate_maze(5, 4, seed=seed)
    cells = [(x, y) for y in range(4) for x in range(5)]
    for sx, sy in cells:
        for ex, ey in cells:
            path = find_path(maze, sx, sy, ex, ey)
            assert path is not None
            assert path[0] == (sx, sy) and path[-1] == (ex, ey)
            _assert_walkable(maze, path)


def test_shortest_on_maze_with_loops():
    rng = random.Random(11)
    maze = generate_maze(12, 12, rng=rng)
    # knock out extra walls to create alternative routes
    for _ in range(60):
        x, y = rng.randrange(12), rng.randrange(12)
        d = rng.choice(list(DIRECTION_VECTORS))
        dx, dy = DIRECTION_VECTORS[d]
        if maze.in_bounds(x + dx, y + dy):
            maze.carve(x, y, d)
    for _ in range(30):
        s = (rng.randrange(12), rng.randrange(12))
        e = (rng.randrange(12), rng.randrange(12))
        path = find_path(maze, s[0], s[1], e[0], e[1])
        assert len(path) - 1 == _bfs_distance(maze, s, e)
        assert len(set(path)) == len(path)
        _assert_walkable(maze, path)


def test_open_field_path_is_manhattan():
    maze = Maze(6, 6)
    for y in range(6):
        for x in range(6):
            if x < 5:
                maze.carve(x, y, "east")
            if y < 5:
                maze.carve(x, y, "south")
    path = find_path(maze, 0, 0, 5, 3)
    assert len(path) - 1 == 8


def test_repeated_search_is_identical():
    maze = generate_maze(15, 15, seed=21)
    first = find_path(maze, 0, 0, 14, 14)
    assert find_path(maze, 0, 0, 14, 14) == first
    assert maze.passage_count() == 15 * 15 - 1


def test_path_to_world_coords():
    assert path_to_world_coords([(0, 0), (1, 0), (1, 2)], 4) == [(2.0, 2.0), (6.0, 2.0), (6.0, 10.0)]
