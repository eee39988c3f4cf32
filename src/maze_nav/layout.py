"""World-space layout derived from a generated maze.

Turns cell/wall data into the things a scene needs: wall segments for
geometry, spawn points for hostile entities, and the level progression
numbers. World space maps cell (x, y) onto the (x, z) floor plane with a
configurable cell size.
"""
import math
import random
from typing import List, NamedTuple, Optional, Tuple

from .maze import Maze

CELL_SIZE = 4.0
BASE_SIZE = 10

# Segment orientations: north/south walls run along x, east/west along z
ROTATION_NORTH_SOUTH = 0.0
ROTATION_EAST_WEST = math.pi / 2


class WallSegment(NamedTuple):
    x: float
    z: float
    rotation: float


class WorldPoint(NamedTuple):
    x: float
    z: float


def _check_cell_size(cell_size: float) -> None:
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")


def get_maze_walls(maze: Maze, cell_size: float = CELL_SIZE) -> List[WallSegment]:
    """One segment per physical wall, positioned at the wall's midpoint.

    Every cell contributes its north and west walls; the last row adds its
    south walls and the last column its east walls, so shared walls appear
    once.
    """
    _check_cell_size(cell_size)
    half = cell_size / 2
    walls: List[WallSegment] = []
    for row in maze.cells:
        for c in row:
            wx, wz = c.x * cell_size, c.y * cell_size
            if c.walls.north:
                walls.append(WallSegment(wx + half, wz, ROTATION_NORTH_SOUTH))
            if c.y == maze.height - 1 and c.walls.south:
                walls.append(WallSegment(wx + half, wz + cell_size, ROTATION_NORTH_SOUTH))
            if c.walls.west:
                walls.append(WallSegment(wx, wz + half, ROTATION_EAST_WEST))
            if c.x == maze.width - 1 and c.walls.east:
                walls.append(WallSegment(wx + cell_size, wz + half, ROTATION_EAST_WEST))
    return walls


def get_spawn_positions(
    maze: Maze,
    cell_size: float = CELL_SIZE,
    count: int = 5,
    exclude_end: bool = True,
    start_radius: int = 2,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[WorldPoint]:
    """Pick up to ``count`` distinct cells and return their world centres.

    The ``start_radius`` square at the origin is never used, nor the goal
    corner when ``exclude_end`` is set. Candidates are shuffled with ``rng``
    (or ``random.Random(seed)``) and the first ``count`` are taken.
    """
    _check_cell_size(cell_size)
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if rng is None:
        rng = random.Random(seed)

    candidates: List[Tuple[int, int]] = []
    for y in range(maze.height):
        for x in range(maze.width):
            if x < start_radius and y < start_radius:
                continue
            if exclude_end and x == maze.width - 1 and y == maze.height - 1:
                continue
            candidates.append((x, y))

    rng.shuffle(candidates)
    half = cell_size / 2
    return [WorldPoint(x * cell_size + half, y * cell_size + half) for x, y in candidates[:count]]


def world_to_cell(x: float, z: float, cell_size: float = CELL_SIZE) -> Tuple[int, int]:
    _check_cell_size(cell_size)
    return int(math.floor(x / cell_size)), int(math.floor(z / cell_size))


def level_size(level: int, base: int = BASE_SIZE) -> int:
    """Side length of the square maze used on ``level`` (1-based)."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return base + 2 * (level - 1)


def spawn_count(level: int) -> int:
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return 3 + 2 * level
