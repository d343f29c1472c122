"""Shortest-path strategies used to carve corridors between room walls.

Both strategies answer the same question: the cheapest 4-connected walk from
``start`` to ``goal`` over the grid, where room cells are walls except for the
two endpoints themselves. An empty list means there is no such walk.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence

import networkx as nx

from dungeon_config import FitterConfig
from dungeon_constants import (
    OPEN_CELL_COST,
    ROOM_ADJACENT_COST,
    UNIFORM_SEARCH_MARGIN,
    WEIGHTED_SEARCH_MARGIN,
)
from dungeon_geometry import Rect, TilePos, manhattan_distance
from dungeon_grid import DungeonGrid
from dungeon_models import CellType

logger = logging.getLogger(__name__)


class PathSearch:
    """Base class for corridor path-finding strategies."""

    name = "base"
    # Whether the router should push stubs out of the room walls first.
    uses_stubs = False

    def find_path(self, grid: DungeonGrid, start: TilePos, goal: TilePos) -> List[TilePos]:
        raise NotImplementedError


class UniformCostSearch(PathSearch):
    """Breadth-first search; every step costs the same.

    The plane is unbounded, so the frontier is confined to the recorded part
    of the grid (plus start and goal) grown by ``margin`` tiles. Everything
    outside that window is empty, so a shortest path never needs to leave it,
    and an unreachable goal still terminates.
    """

    name = "uniform"

    def __init__(self, margin: int = UNIFORM_SEARCH_MARGIN, max_expansions: Optional[int] = None) -> None:
        if margin < 1:
            raise ValueError("UniformCostSearch margin must be at least 1")
        self.margin = margin
        self.max_expansions = max_expansions

    def find_path(self, grid: DungeonGrid, start: TilePos, goal: TilePos) -> List[TilePos]:
        if start == goal:
            return [start]

        window = grid.recorded_extent(start, goal).expand(self.margin)
        queue: Deque[TilePos] = deque([start])
        came_from: Dict[TilePos, Optional[TilePos]] = {start: None}
        expansions = 0

        while queue:
            current = queue.popleft()
            if current == goal:
                return _reconstruct_path(came_from, goal)

            expansions += 1
            if self.max_expansions is not None and expansions > self.max_expansions:
                logger.debug(
                    "Breadth-first search gave up after %d expansions (%s -> %s)",
                    self.max_expansions,
                    start.to_tuple(),
                    goal.to_tuple(),
                )
                return []

            for neighbor in current.neighbors():
                if neighbor in came_from or not window.contains(neighbor):
                    continue
                if not self._is_passable(grid, neighbor, goal):
                    continue
                came_from[neighbor] = current
                queue.append(neighbor)

        return []

    @staticmethod
    def _is_passable(grid: DungeonGrid, pos: TilePos, goal: TilePos) -> bool:
        cell = grid.get(pos)
        if cell is None:
            return True
        if cell.cell_type in (CellType.EMPTY, CellType.CORRIDOR):
            return True
        # A room cell only lets the path end on it (the door into the goal room).
        return pos == goal


class WeightedSearch(PathSearch):
    """A* over a weighted graph that steers corridors away from room walls.

    The graph covers only the start/goal bounding box grown by ``margin``
    tiles, so the cost of one search doesn't depend on the size of the map.
    Stepping onto a tile that touches a room costs ``room_adjacent_cost``;
    any other step costs ``open_cell_cost``.
    """

    name = "weighted"
    uses_stubs = True

    def __init__(
        self,
        margin: int = WEIGHTED_SEARCH_MARGIN,
        room_adjacent_cost: float = ROOM_ADJACENT_COST,
        open_cell_cost: float = OPEN_CELL_COST,
    ) -> None:
        if margin < 0:
            raise ValueError("WeightedSearch margin cannot be negative")
        if open_cell_cost <= 0 or room_adjacent_cost < open_cell_cost:
            raise ValueError("WeightedSearch costs must satisfy 0 < open_cell_cost <= room_adjacent_cost")
        self.margin = margin
        self.room_adjacent_cost = room_adjacent_cost
        self.open_cell_cost = open_cell_cost

    def step_cost(self, grid: DungeonGrid, pos: TilePos) -> float:
        """Cost of stepping onto ``pos``."""
        if grid.is_adjacent_to_room(pos):
            return self.room_adjacent_cost
        return self.open_cell_cost

    def path_cost(self, grid: DungeonGrid, path: Sequence[TilePos]) -> float:
        """Total edge weight of ``path``; the start tile itself is free."""
        return sum(self.step_cost(grid, pos) for pos in path[1:])

    def heuristic(self, a: TilePos, b: TilePos) -> float:
        """Manhattan distance priced at the cheapest step, so it never overestimates."""
        return manhattan_distance(a, b) * self.open_cell_cost

    def search_region(self, start: TilePos, goal: TilePos) -> Rect:
        return Rect.spanning(start, goal).expand(self.margin)

    def build_graph(self, grid: DungeonGrid, start: TilePos, goal: TilePos) -> nx.DiGraph:
        """Directed 4-neighbor graph over the traversable tiles of the search region."""
        graph = nx.DiGraph()
        for tile in self.search_region(start, goal).tiles():
            if tile == start or tile == goal or not grid.is_room(tile):
                graph.add_node(tile)

        for tile in list(graph.nodes):
            for neighbor in tile.neighbors():
                if neighbor in graph:
                    graph.add_edge(tile, neighbor, weight=self.step_cost(grid, neighbor))
        return graph

    def find_path(self, grid: DungeonGrid, start: TilePos, goal: TilePos) -> List[TilePos]:
        if start == goal:
            return [start]

        graph = self.build_graph(grid, start, goal)
        try:
            return nx.astar_path(graph, start, goal, heuristic=self.heuristic, weight="weight")
        except nx.NetworkXNoPath:
            logger.debug(
                "A* found no path %s -> %s within a %d-tile margin",
                start.to_tuple(),
                goal.to_tuple(),
                self.margin,
            )
            return []


def _reconstruct_path(came_from: Dict[TilePos, Optional[TilePos]], goal: TilePos) -> List[TilePos]:
    path: List[TilePos] = []
    current: Optional[TilePos] = goal
    while current is not None:
        path.append(current)
        current = came_from[current]
    path.reverse()
    return path


def create_path_search(name: str, config: Optional[FitterConfig] = None) -> PathSearch:
    """Build the strategy called ``name`` ("uniform" or "weighted") from ``config``."""
    config = config if config is not None else FitterConfig()
    if name == UniformCostSearch.name:
        return UniformCostSearch(
            margin=config.uniform_search_margin,
            max_expansions=config.max_search_expansions,
        )
    if name == WeightedSearch.name:
        return WeightedSearch(
            margin=config.search_margin,
            room_adjacent_cost=config.room_adjacent_cost,
            open_cell_cost=config.open_cell_cost,
        )
    raise ValueError(f"Unknown path search strategy {name!r}")
