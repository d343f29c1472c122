"""GridFitter turns an abstract dungeon graph into typed grid cells."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from typing import Callable, List, Optional, Tuple, TypeVar

from corridor_builder import CorridorRouter, StubProjector
from dungeon_config import FitterConfig
from dungeon_geometry import Rect, TilePos
from dungeon_grid import DungeonGrid, compute_used_bounds
from dungeon_models import Dungeon, GridCell
from metrics import FitMetrics, RoutingReport
from path_search import PathSearch, create_path_search
from room_boundary import BoundaryFinder
from room_placement import RoomFootprint, RoomPlacer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FitterStateError(RuntimeError):
    """Raised when a fitter is reused for a second pass."""


class GridFitter:
    """Runs one fitting pass: place rooms, route corridors, measure the result.

    A fitter owns its grid and boundary cache, so each instance fits exactly
    one dungeon. Randomness (room jitter, stub directions) comes from ``rng``,
    which defaults to a generator seeded with ``config.random_seed``.
    """

    def __init__(
        self,
        config: Optional[FitterConfig] = None,
        rng: Optional[random.Random] = None,
        path_search: Optional[PathSearch] = None,
    ) -> None:
        self.config = config if config is not None else FitterConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = DungeonGrid()
        self.boundary_finder = BoundaryFinder(self.grid)
        self.path_search = (
            path_search
            if path_search is not None
            else create_path_search(self.config.search_strategy, self.config)
        )
        self.room_placer = RoomPlacer(self.grid, self.config, self.rng)
        self.stub_projector = StubProjector(
            self.grid,
            self.rng,
            min_length=self.config.stub_min_length,
            max_length=self.config.stub_max_length,
        )
        self.router = CorridorRouter(
            self.grid,
            self.boundary_finder,
            self.path_search,
            self.stub_projector,
        )
        self.metrics = FitMetrics() if self.config.collect_metrics else None
        self.footprints: List[RoomFootprint] = []
        self.routing_report: Optional[RoutingReport] = None
        self._bounds: Optional[Rect] = None
        self._fitted = False

    def _run_phase(self, name: str, func: Callable[..., T], *args) -> T:
        if self.metrics is None:
            return func(*args)
        start = perf_counter()
        try:
            return func(*args)
        finally:
            self.metrics.record_phase(name, perf_counter() - start)

    def fit(self, dungeon: Dungeon) -> Rect:
        """Fit ``dungeon`` onto the grid and return the used bounding rectangle."""
        if self._fitted:
            raise FitterStateError("GridFitter instances fit a single dungeon; create a new one")
        self._fitted = True

        start = perf_counter()
        logger.info(
            "Starting dungeon fit (%s search)... Number of rooms: %d, corridors: %d",
            self.path_search.name,
            len(dungeon.rooms),
            len(dungeon.corridors),
        )

        self.footprints = self._run_phase("placement", self.room_placer.place_rooms, dungeon.rooms)

        logger.info("Connecting %d corridors...", len(dungeon.corridors))
        self.routing_report = self._run_phase("routing", self.router.route_all, dungeon.corridors)

        self._bounds = self._run_phase("bounds", compute_used_bounds, self.grid)

        elapsed_ms = (perf_counter() - start) * 1000.0
        rect = self._bounds
        logger.info(
            "Dungeon fit complete. Used area: (%d,%d) %dx%d. Routed %d/%d corridors. Elapsed ms: %.1f",
            rect.x,
            rect.y,
            rect.width,
            rect.height,
            self.routing_report.routed,
            len(dungeon.corridors),
            elapsed_ms,
        )
        return rect

    def all_cells(self) -> Tuple[GridCell, ...]:
        """Snapshot of every realized cell; coordinates not listed are empty."""
        return self.grid.cells()

    def bounds(self) -> Optional[Rect]:
        """Bounding rectangle from the last fit, or None before fitting."""
        return self._bounds

    def boundary(self, room_id: int) -> Tuple[TilePos, ...]:
        return self.boundary_finder.boundary(room_id)


def fit_dungeon(
    dungeon: Dungeon,
    config: Optional[FitterConfig] = None,
    rng: Optional[random.Random] = None,
) -> GridFitter:
    """Create a fitter, fit ``dungeon`` with it, and return the fitter."""
    fitter = GridFitter(config, rng=rng)
    fitter.fit(dungeon)
    return fitter
