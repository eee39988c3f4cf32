from collections import deque
from typing import Any, Dict, Sequence, Tuple
import numpy as np

from .maze import Maze, DIRECTION_VECTORS, OPPOSITE


class Evaluator:
    """Structural checks for a maze and a scoring function for routes."""

    def __init__(self, maze: Maze) -> None:
        self.maze = maze

    def _symmetric(self) -> bool:
        m = self.maze
        for row in m.cells:
            for c in row:
                for direction, (dx, dy) in DIRECTION_VECTORS.items():
                    nx, ny = c.x + dx, c.y + dy
                    if not m.in_bounds(nx, ny):
                        continue
                    if getattr(c.walls, direction) != getattr(m.cells[ny][nx].walls, OPPOSITE[direction]):
                        return False
        return True

    def _reachable_count(self) -> int:
        seen = {(0, 0)}
        q = deque([(0, 0)])
        while q:
            x, y = q.popleft()
            for nxt in self.maze.open_neighbors(x, y):
                if nxt not in seen:
                    seen.add(nxt)
                    q.append(nxt)
        return len(seen)

    def check(self) -> Dict[str, Any]:
        m = self.maze
        cells = m.width * m.height
        passages = m.passage_count()
        symmetric = self._symmetric()
        connected = self._reachable_count() == cells

        # dead ends are free cells in the block grid with three wall neighbours
        grid = m.to_grid()
        centres = grid[1::2, 1::2]
        walls_around = grid[0:-1:2, 1::2] + grid[2::2, 1::2] + grid[1::2, 0:-1:2] + grid[1::2, 2::2]
        dead_ends = int(np.count_nonzero((centres == 0) & (walls_around == 3)))

        return {
            "cells": cells,
            "passages": passages,
            "expected_passages": cells - 1,
            "symmetric": symmetric,
            "connected": connected,
            "dead_ends": dead_ends,
            "perfect": symmetric and connected and passages == cells - 1,
        }

    def score(self, path: Sequence[Tuple[int, int]], goal: Tuple[int, int]) -> Tuple[float, Dict[str, Any]]:
        illegal = 0
        for (x, y), (nx, ny) in zip(path, path[1:]):
            if not (self.maze.in_bounds(x, y) and self.maze.in_bounds(nx, ny)):
                illegal += 1
            elif (nx, ny) not in set(self.maze.open_neighbors(x, y)):
                illegal += 1

        out: Dict[str, Any] = {
            "reached": bool(path) and tuple(path[-1]) == tuple(goal),
            "steps": max(len(path) - 1, 0),
            "illegal_moves": illegal,
        }

        if len(path) == 0:
            out["min_distance"] = None
            return float("-inf"), out

        pts = np.array(path, dtype=np.int32)  # shape (T,2)
        target = np.array(goal, dtype=np.int32)
        manh = np.abs(pts - target).sum(axis=1)  # Manhattan distances per step
        out["min_distance"] = int(manh.min())

        score = 0.0
        if out["reached"]:
            score += 100_000.0
            score -= out["steps"] * 10.0
        else:
            score -= out["min_distance"] * 1000.0
        score -= illegal * 1000.0
        return float(score), out
