#!/usr/bin/env python3

# Runs the grid fitter over many generated dungeons and reports timing and layout quality,
# so the two corridor strategies can be compared on the same inputs.

from __future__ import annotations

import argparse
import json
import random
import statistics
import time
from dataclasses import asdict, dataclass
from typing import Dict, List

import networkx as nx

from dungeon_config import FitterConfig
from dungeon_generator import MAX_ROOMS, DungeonGraphGenerator
from dungeon_models import CellType
from grid_fitter import GridFitter

STRATEGIES = ("uniform", "weighted")


@dataclass
class FitRunResult:
    seed: int
    strategy: str
    duration: float
    total_rooms: int
    total_corridors: int
    routable_corridors: int
    routed_corridors: int
    corridor_cells: int
    bounding_box_area: int
    fill_fraction: float
    room_components: int
    cell_components: int


def build_room_graph(fitter: GridFitter, room_ids: List[int]) -> nx.Graph:
    """Rooms joined by every corridor the router actually drew."""
    graph = nx.Graph()
    graph.add_nodes_from(room_ids)
    for outcome in fitter.routing_report.outcomes:
        if outcome.routed:
            graph.add_edge(outcome.from_room_id, outcome.to_room_id)
    return graph


def build_cell_graph(fitter: GridFitter) -> nx.Graph:
    """Occupied cells joined to their occupied 4-neighbors."""
    graph = nx.Graph()
    occupied = {cell.pos for cell in fitter.all_cells() if cell.cell_type is not CellType.EMPTY}
    graph.add_nodes_from(occupied)
    for pos in occupied:
        for neighbor in pos.neighbors():
            if neighbor in occupied:
                graph.add_edge(pos, neighbor)
    return graph


def run_single_fit(seed: int, strategy: str, max_rooms: int) -> FitRunResult:
    rng = random.Random(seed)
    dungeon = DungeonGraphGenerator(rng, max_rooms=max_rooms).generate()
    config = FitterConfig.for_strategy(strategy, random_seed=seed, collect_metrics=True)
    fitter = GridFitter(config, rng=rng)

    start = time.perf_counter()
    rect = fitter.fit(dungeon)
    end = time.perf_counter()

    cells = fitter.all_cells()
    occupied = sum(1 for cell in cells if cell.cell_type is not CellType.EMPTY)
    corridor_cells = sum(1 for cell in cells if cell.cell_type is CellType.CORRIDOR)
    report = fitter.routing_report

    room_graph = build_room_graph(fitter, [room.id for room in dungeon.rooms])
    cell_graph = build_cell_graph(fitter)

    return FitRunResult(
        seed=seed,
        strategy=strategy,
        duration=end - start,
        total_rooms=len(dungeon.rooms),
        total_corridors=len(dungeon.corridors),
        routable_corridors=len(report.outcomes) - report.skipped,
        routed_corridors=report.routed,
        corridor_cells=corridor_cells,
        bounding_box_area=rect.area,
        fill_fraction=occupied / rect.area if rect.area else 0.0,
        room_components=nx.number_connected_components(room_graph) if room_graph.number_of_nodes() else 0,
        cell_components=nx.number_connected_components(cell_graph) if cell_graph.number_of_nodes() else 0,
    )


def run_benchmark(num_runs: int, seed: int | None, max_rooms: int) -> List[FitRunResult]:
    """Fit the same generated dungeons with every strategy."""
    rng = random.Random(seed)
    results: List[FitRunResult] = []
    for _ in range(num_runs):
        run_seed = rng.randint(0, 1_000_000)
        for strategy in STRATEGIES:
            results.append(run_single_fit(run_seed, strategy, max_rooms))
    return results


def format_seconds(value: float) -> str:
    if value >= 1.0:
        return f"{value:.3f}s"
    return f"{value * 1000:.1f}ms"


def summarize(results: List[FitRunResult]) -> Dict[str, Dict[str, float]]:
    summary: Dict[str, Dict[str, float]] = {}
    for strategy in STRATEGIES:
        runs = [result for result in results if result.strategy == strategy]
        if not runs:
            continue
        routable = sum(run.routable_corridors for run in runs)
        summary[strategy] = {
            "runs": len(runs),
            "mean_duration": statistics.fmean(run.duration for run in runs),
            "routed_fraction": sum(run.routed_corridors for run in runs) / routable if routable else 0.0,
            "mean_bounding_box_area": statistics.fmean(run.bounding_box_area for run in runs),
            "mean_fill_fraction": statistics.fmean(run.fill_fraction for run in runs),
            "mean_room_components": statistics.fmean(run.room_components for run in runs),
            "mean_cell_components": statistics.fmean(run.cell_components for run in runs),
        }
    return summary


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark the grid fitter's corridor strategies on generated dungeons."
    )
    parser.add_argument("--runs", type=int, default=20, help="Number of generated dungeons.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for picking per-run seeds.")
    parser.add_argument("--max-rooms", type=int, default=MAX_ROOMS, help="Room cap for the generator.")
    parser.add_argument("--json", dest="json_path", default=None, help="Write raw results and summary as JSON.")
    args = parser.parse_args()

    results = run_benchmark(args.runs, args.seed, args.max_rooms)
    summary = summarize(results)

    for strategy, stats in summary.items():
        print(f"== {strategy} ({int(stats['runs'])} runs)")
        print(f"  mean duration:        {format_seconds(stats['mean_duration'])}")
        print(f"  routed fraction:      {stats['routed_fraction']:.1%}")
        print(f"  mean bbox area:       {stats['mean_bounding_box_area']:.0f}")
        print(f"  mean fill fraction:   {stats['mean_fill_fraction']:.1%}")
        print(f"  mean room components: {stats['mean_room_components']:.2f}")
        print(f"  mean cell components: {stats['mean_cell_components']:.2f}")

    if args.json_path:
        with open(args.json_path, "w", encoding="utf-8") as handle:
            json.dump({"summary": summary, "runs": [asdict(result) for result in results]}, handle, indent=2)
        print(f"Wrote {args.json_path}")


if __name__ == "__main__":
    main()
