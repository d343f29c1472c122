"""Finds the wall cells of each placed room, where corridors may attach."""

from __future__ import annotations

from typing import Dict, Tuple

from dungeon_geometry import TilePos
from dungeon_grid import DungeonGrid
from dungeon_models import CellType


class BoundaryFinder:
    """Per-room boundary lookup, cached for the lifetime of one fitting pass.

    A boundary cell is a room cell with at least one orthogonal neighbor that
    is unrecorded or carries a different room id. Rooms don't change after
    placement, so cached results stay valid until :meth:`clear`.
    """

    def __init__(self, grid: DungeonGrid) -> None:
        self.grid = grid
        self._cache: Dict[int, Tuple[TilePos, ...]] = {}

    def boundary(self, room_id: int) -> Tuple[TilePos, ...]:
        """Boundary cells of ``room_id`` in grid order; empty for unknown rooms."""
        cached = self._cache.get(room_id)
        if cached is not None:
            return cached
        found = tuple(
            cell.pos
            for cell in self.grid
            if cell.cell_type is CellType.ROOM
            and cell.room_id == room_id
            and self._is_boundary(cell.pos, room_id)
        )
        self._cache[room_id] = found
        return found

    def _is_boundary(self, pos: TilePos, room_id: int) -> bool:
        for neighbor in pos.neighbors():
            cell = self.grid.get(neighbor)
            if cell is None or cell.room_id != room_id:
                return True
        return False

    def clear(self) -> None:
        self._cache.clear()
