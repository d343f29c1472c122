#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from dungeon_config import FitterConfig
from dungeon_generator import MAX_ROOMS, DungeonGraphGenerator
from grid_export import build_grid_data, save_grid_data
from grid_fitter import GridFitter
from grid_renderer import print_grid, render_ascii


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a dungeon graph and fit it onto a grid.")
    parser.add_argument(
        "--strategy",
        choices=("uniform", "weighted"),
        default="uniform",
        help="Corridor search: breadth-first ('uniform') or A* with stubs ('weighted').",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (picked and printed if omitted).")
    parser.add_argument("--max-rooms", type=int, default=MAX_ROOMS, help="Room cap for the graph generator.")
    parser.add_argument("--json", dest="json_path", default=None, help="Write the fitted grid to this JSON file.")
    parser.add_argument("--labels", action="store_true", help="Draw rooms with their id digit instead of '#'.")
    parser.add_argument("--graph", action="store_true", help="List the generated rooms and corridors before the map.")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="-v for progress, -vv for per-corridor detail.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    seed = args.seed
    if seed is None:
        # Pick a seed and print it, so a layout can be reproduced later.
        seed = random.randint(0, 1000000)
    print(f"Using random seed {seed}")

    rng = random.Random(seed)
    dungeon = DungeonGraphGenerator(rng, max_rooms=args.max_rooms).generate()
    config = FitterConfig.for_strategy(args.strategy, random_seed=seed, collect_metrics=True)
    fitter = GridFitter(config, rng=rng)
    rect = fitter.fit(dungeon)

    print(f"Rooms: {len(dungeon.rooms)}, corridors: {len(dungeon.corridors)}")
    if args.graph:
        for room in dungeon.rooms:
            print(f"  {room}")
        for corridor in dungeon.corridors:
            print(f"  {corridor}")
    print(f"Bounds: {rect.to_tuple()}")
    print(f"Routing: {fitter.routing_report.summary()}")
    if fitter.metrics is not None:
        timings = ", ".join(
            f"{name} {phase['total_time'] * 1000:.1f}ms" for name, phase in fitter.metrics.snapshot().items()
        )
        print(f"Timings: {timings}")
    print_grid(render_ascii(fitter.all_cells(), rect, label_rooms=args.labels))

    if args.json_path:
        save_grid_data(args.json_path, build_grid_data(fitter.all_cells(), rect, dungeon.rooms))
        print(f"Saved JSON to {args.json_path}")


if __name__ == "__main__":
    main()
