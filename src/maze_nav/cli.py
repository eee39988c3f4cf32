import argparse
from typing import List, Optional

from .maze import generate_maze
from .pathfinding import clamp_cell, find_path, path_to_world_coords
from .layout import CELL_SIZE, get_maze_walls, get_spawn_positions, level_size, spawn_count
from .evaluator import Evaluator

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate a perfect grid maze and find the shortest route through it")
    p.add_argument("--width", type=int, default=10, help="Maze width in cells")
    p.add_argument("--height", type=int, default=10, help="Maze height in cells")
    p.add_argument("--level", type=int, default=None, help="Derive a square maze size and spawn count from this level (overrides width/height)")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    p.add_argument("--cell-size", type=float, default=CELL_SIZE, help="World units per cell")
    p.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), default=(0, 0), help="Start cell")
    p.add_argument("--goal", type=int, nargs=2, metavar=("X", "Y"), default=None, help="Goal cell (default: bottom-right corner)")
    p.add_argument("--spawns", type=int, default=None, help="Number of spawn points to sample")
    p.add_argument("--ascii", action="store_true", help="Print the maze and route as text")
    p.add_argument("--out", type=str, default=None, help="Save a PNG of the maze and route to this file")
    return p

def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.level is not None:
            args.width = args.height = level_size(args.level)
            if args.spawns is None:
                args.spawns = spawn_count(args.level)
        maze = generate_maze(args.width, args.height, seed=args.seed)
        walls = get_maze_walls(maze, args.cell_size)
        spawns = get_spawn_positions(maze, args.cell_size, args.spawns or 0, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    start = clamp_cell(maze, args.start[0], args.start[1])
    goal = clamp_cell(maze, args.goal[0], args.goal[1]) if args.goal is not None else (maze.width - 1, maze.height - 1)
    print(f"Maze size: {maze.width}x{maze.height}. Start={start} Goal={goal} seed={args.seed}")

    report = Evaluator(maze).check()
    print(f"Passages: {report['passages']}/{report['expected_passages']} dead_ends={report['dead_ends']} perfect={report['perfect']}")

    path = find_path(maze, start[0], start[1], goal[0], goal[1])
    if path is None:
        print("No path found.")
    else:
        score, out = Evaluator(maze).score(path, goal)
        print(f"Path length: {out['steps']} steps ({len(path)} cells), reached={out['reached']} score={score}")
        print("Route:", " ".join(f"({x},{y})" for x, y in path))
        waypoints = path_to_world_coords(path, args.cell_size)
        print(f"World waypoints: first={waypoints[0]} last={waypoints[-1]}")

    print(f"Wall segments: {len(walls)}")
    if spawns:
        print("Spawn points:", " ".join(f"({p.x:g},{p.z:g})" for p in spawns))

    if args.ascii:
        print(maze.to_ascii(path))
    if args.out:
        maze.render(path=path, savepath=args.out)

    print("Done.")

if __name__ == "__main__":
    main()
