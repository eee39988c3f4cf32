from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import random
import numpy as np

# matplotlib optional for rendering
try:
    import matplotlib.pyplot as plt
except Exception:
    plt = None  # render disabled if matplotlib missing

# Directions and their vectors (dx, dy); y grows southwards
DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    "north": (0, -1),
    "south": (0, 1),
    "east": (1, 0),
    "west": (-1, 0),
}
OPPOSITE: Dict[str, str] = {"north": "south", "south": "north", "east": "west", "west": "east"}


@dataclass
class Walls:
    north: bool = True
    south: bool = True
    east: bool = True
    west: bool = True


@dataclass
class Cell:
    x: int
    y: int
    walls: Walls = field(default_factory=Walls)
    visited: bool = False


class Maze:
    """A rectangular grid of cells, each with its own four wall flags.

    Cells are addressed ``cells[y][x]``. A wall between two neighbours is
    stored on both cells; ``carve`` clears both flags together so they never
    disagree. Consumers treat a generated maze as read-only.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"maze dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [[Cell(x, y) for x in range(width)] for y in range(height)]

    def __repr__(self) -> str:
        return f"Maze(width={self.width}, height={self.height}, passages={self.passage_count()})"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} maze")
        return self.cells[y][x]

    def has_wall(self, x: int, y: int, direction: str) -> bool:
        return getattr(self.cell(x, y).walls, direction)

    def carve(self, x: int, y: int, direction: str) -> Tuple[int, int]:
        """Remove the wall on ``direction`` of (x, y) and the matching wall of
        the neighbour behind it. Returns the neighbour's coordinates."""
        dx, dy = DIRECTION_VECTORS[direction]
        nx, ny = x + dx, y + dy
        if not self.in_bounds(x, y) or not self.in_bounds(nx, ny):
            raise ValueError(f"cannot carve {direction} from ({x}, {y}): leaves the grid")
        setattr(self.cells[y][x].walls, direction, False)
        setattr(self.cells[ny][nx].walls, OPPOSITE[direction], False)
        return nx, ny

    def open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        # only the current cell's side is checked; wall-pairs are symmetric
        walls = self.cells[y][x].walls
        for direction, (dx, dy) in DIRECTION_VECTORS.items():
            nx, ny = x + dx, y + dy
            if not getattr(walls, direction) and self.in_bounds(nx, ny):
                yield nx, ny

    def passage_count(self) -> int:
        """Number of cleared interior wall-pairs."""
        count = 0
        for row in self.cells:
            for c in row:
                if c.x < self.width - 1 and not c.walls.east:
                    count += 1
                if c.y < self.height - 1 and not c.walls.south:
                    count += 1
        return count

    def to_grid(self) -> np.ndarray:
        """Block view of the maze: a (2h+1, 2w+1) array with walls (1) and
        free cells (0). Cell (x, y) sits at grid[2y+1, 2x+1]."""
        H, W = 2 * self.height + 1, 2 * self.width + 1
        grid = np.ones((H, W), dtype=np.int8)
        for row in self.cells:
            for c in row:
                r, col = 2 * c.y + 1, 2 * c.x + 1
                grid[r, col] = 0
                if not c.walls.east and c.x < self.width - 1:
                    grid[r, col + 1] = 0
                if not c.walls.south and c.y < self.height - 1:
                    grid[r + 1, col] = 0
        return grid

    def to_ascii(self, path: Optional[Sequence[Tuple[int, int]]] = None) -> str:
        on_path = set(path or ())
        lines = ["+" + "---+" * self.width]
        for row in self.cells:
            body = "|"
            floor = "+"
            for c in row:
                body += " * " if (c.x, c.y) in on_path else "   "
                body += "|" if c.walls.east else " "
                floor += "---+" if c.walls.south else "   +"
            lines.append(body)
            lines.append(floor)
        return "\n".join(lines)

    def render(self, path: Optional[Sequence[Tuple[int, int]]] = None, savepath: Optional[str] = None, figsize: Tuple[int, int] = (6, 6)) -> None:
        if plt is None:
            print("matplotlib not available; render skipped.")
            return
        fig, ax = plt.subplots(figsize=figsize)
        ax.imshow(self.to_grid(), cmap="gray_r", interpolation="nearest")
        ax.set_xticks([])
        ax.set_yticks([])
        if path:
            xs = [2 * p[0] + 1 for p in path]
            ys = [2 * p[1] + 1 for p in path]
            ax.plot(xs, ys, linewidth=2)
            ax.scatter([xs[0], xs[-1]], [ys[0], ys[-1]], c="red")
        if savepath:
            plt.savefig(savepath, bbox_inches="tight")
            print(f"Saved visual to {savepath}")
        plt.close(fig)


def generate_maze(width: int, height: int, seed: Optional[int] = None, rng: Optional[random.Random] = None, start: Tuple[int, int] = (0, 0)) -> Maze:
    """Carve a perfect maze with a randomized depth-first traversal
    (recursive backtracker, explicit stack).

    Randomness comes from ``rng``, or a fresh ``random.Random(seed)`` when no
    generator is passed; the global ``random`` state is left alone.
    """
    maze = Maze(width, height)
    if rng is None:
        rng = random.Random(seed)
    sx, sy = start
    if not maze.in_bounds(sx, sy):
        raise ValueError(f"start cell {start} outside {width}x{height} maze")

    cells = maze.cells
    cells[sy][sx].visited = True
    stack: List[Tuple[int, int]] = [(sx, sy)]
    while stack:
        x, y = stack[-1]
        neighbors: List[str] = []
        for direction, (dx, dy) in DIRECTION_VECTORS.items():
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and not cells[ny][nx].visited:
                neighbors.append(direction)
        if neighbors:
            direction = neighbors[rng.randrange(len(neighbors))]
            nx, ny = maze.carve(x, y, direction)
            cells[ny][nx].visited = True
            stack.append((nx, ny))
        else:
            stack.pop()
    return maze
