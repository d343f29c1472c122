"""Corridor carving: stub projection and routing between room boundaries."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from dungeon_constants import PROGRESS_LOG_INTERVAL, STUB_LENGTH_MAX, STUB_LENGTH_MIN
from dungeon_geometry import NEIGHBOR_DIRECTIONS, TilePos
from dungeon_grid import DungeonGrid
from dungeon_models import CellType, Corridor
from metrics import CorridorOutcome, RouteStatus, RoutingReport
from path_search import PathSearch
from room_boundary import BoundaryFinder

logger = logging.getLogger(__name__)


class StubProjector:
    """Pushes a short corridor straight out of a room wall.

    The walk picks one random cardinal direction and length. Every tile it
    steps on is carved as corridor, except that a room tile stops the walk
    unless it is the very first step.
    """

    def __init__(
        self,
        grid: DungeonGrid,
        rng: Optional[random.Random] = None,
        min_length: int = STUB_LENGTH_MIN,
        max_length: int = STUB_LENGTH_MAX,
    ) -> None:
        if min_length <= 0 or max_length < min_length:
            raise ValueError("Stub lengths must satisfy 0 < min_length <= max_length")
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.min_length = min_length
        self.max_length = max_length

    def project(self, boundary_cell: TilePos) -> TilePos:
        """Walk out of ``boundary_cell`` and return the last tile reached."""
        length = self.rng.randint(self.min_length, self.max_length)
        direction = self.rng.choice(NEIGHBOR_DIRECTIONS)

        current = boundary_cell
        for step in range(length):
            candidate = current.step(direction)
            cell = self.grid.get_or_create(candidate)
            if cell.cell_type is CellType.ROOM:
                if step > 0:
                    break
            else:
                cell.cell_type = CellType.CORRIDOR
            current = candidate
        return current


class CorridorRouter:
    """Connects the rooms of each corridor with carved corridor cells.

    Problems with a single corridor (a missing endpoint, a room with no
    boundary, no path) only skip that corridor; they are logged and show up
    in the returned outcome.
    """

    def __init__(
        self,
        grid: DungeonGrid,
        boundary_finder: BoundaryFinder,
        path_search: PathSearch,
        stub_projector: Optional[StubProjector] = None,
    ) -> None:
        self.grid = grid
        self.boundary_finder = boundary_finder
        self.path_search = path_search
        self.stub_projector = stub_projector

    def route(self, corridor: Corridor, index: int = 0) -> CorridorOutcome:
        from_room = corridor.from_room
        to_room = corridor.to_room
        if from_room is None or to_room is None:
            return CorridorOutcome(
                index,
                RouteStatus.SKIPPED_MISSING_ENDPOINT,
                from_room_id=from_room.id if from_room is not None else None,
                to_room_id=to_room.id if to_room is not None else None,
            )

        from_boundary = self.boundary_finder.boundary(from_room.id)
        to_boundary = self.boundary_finder.boundary(to_room.id)
        if not from_boundary or not to_boundary:
            logger.debug("No boundary squares found for corridor: %d->%d", from_room.id, to_room.id)
            return CorridorOutcome(index, RouteStatus.SKIPPED_NO_BOUNDARY, from_room.id, to_room.id)

        start = from_boundary[0]
        goal = to_boundary[0]
        if self.path_search.uses_stubs and self.stub_projector is not None:
            start = self.stub_projector.project(start)
            goal = self.stub_projector.project(goal)

        path = self.path_search.find_path(self.grid, start, goal)
        if not path:
            logger.debug("No path found for corridor: %d->%d", from_room.id, to_room.id)
            return CorridorOutcome(index, RouteStatus.NO_PATH, from_room.id, to_room.id)

        carved = sum(1 for pos in path if self.grid.mark_corridor(pos))
        logger.debug(
            "Corridor connected rooms %d -> %d with path length: %d",
            from_room.id,
            to_room.id,
            len(path),
        )
        return CorridorOutcome(
            index,
            RouteStatus.ROUTED,
            from_room.id,
            to_room.id,
            path_length=len(path),
            cells_carved=carved,
        )

    def route_all(self, corridors: Iterable[Corridor]) -> RoutingReport:
        """Route corridors in order; later corridors see earlier carvings."""
        report = RoutingReport()
        for index, corridor in enumerate(corridors):
            report.add(self.route(corridor, index))
            if (index + 1) % PROGRESS_LOG_INTERVAL == 0:
                logger.info("  ...connected %d corridors so far", index + 1)
        return report
