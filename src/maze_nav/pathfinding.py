import heapq
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .maze import Maze


@dataclass
class _Node:
    x: int
    y: int
    g: int
    h: int
    f: int
    parent: int  # index into the node arena, -1 for the start node


def manhattan(x1: int, y1: int, x2: int, y2: int) -> int:
    return abs(x1 - x2) + abs(y1 - y2)


def _clamp(value: float, upper: int) -> int:
    # clamp before converting so infinities land on the grid edge
    return int(math.floor(max(0, min(upper, value))))


def clamp_cell(maze: Maze, x: float, y: float) -> Tuple[int, int]:
    """Floor (x, y) and pull it into the grid, as find_path does."""
    return _clamp(x, maze.width - 1), _clamp(y, maze.height - 1)


def find_path(maze: Maze, start_x: float, start_y: float, end_x: float, end_y: float) -> Optional[List[Tuple[int, int]]]:
    """Shortest route between two cells with A* and a Manhattan heuristic.

    Coordinates are floored and clamped into the grid first, so
    out-of-range input is corrected rather than rejected. Returns the cells
    from start to end inclusive as (x, y) tuples, or None when the two cells
    are not connected.
    """
    sx, sy = clamp_cell(maze, start_x, start_y)
    ex, ey = clamp_cell(maze, end_x, end_y)

    h0 = manhattan(sx, sy, ex, ey)
    nodes: List[_Node] = [_Node(sx, sy, 0, h0, h0, -1)]
    open_index: Dict[Tuple[int, int], int] = {(sx, sy): 0}
    closed: Set[Tuple[int, int]] = set()
    # heap entries are (f, counter, node index); equal f pops in insertion order
    counter = 0
    heap: List[Tuple[int, int, int]] = [(h0, counter, 0)]

    while heap:
        f, _, idx = heapq.heappop(heap)
        current = nodes[idx]
        key = (current.x, current.y)
        if key in closed or f != current.f:
            continue  # stale entry left behind by a relaxation
        del open_index[key]
        closed.add(key)

        if key == (ex, ey):
            return _reconstruct(nodes, idx)

        g = current.g + 1
        for nx, ny in maze.open_neighbors(current.x, current.y):
            if (nx, ny) in closed:
                continue
            existing = open_index.get((nx, ny))
            if existing is None:
                h = manhattan(nx, ny, ex, ey)
                nodes.append(_Node(nx, ny, g, h, g + h, idx))
                open_index[(nx, ny)] = len(nodes) - 1
            elif g < nodes[existing].g:
                node = nodes[existing]
                node.g, node.f, node.parent = g, g + node.h, idx
            else:
                continue
            target = open_index[(nx, ny)]
            counter += 1
            heapq.heappush(heap, (nodes[target].f, counter, target))

    return None


def _reconstruct(nodes: List[_Node], idx: int) -> List[Tuple[int, int]]:
    path: List[Tuple[int, int]] = []
    while idx != -1:
        node = nodes[idx]
        path.append((node.x, node.y))
        idx = node.parent
    path.reverse()
    return path


def path_to_world_coords(path: Sequence[Tuple[int, int]], cell_size: float) -> List[Tuple[float, float]]:
    """Map grid cells to the world-space (x, z) centre of each cell."""
    half = cell_size / 2
    return [(x * cell_size + half, y * cell_size + half) for x, y in path]
