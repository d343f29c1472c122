"""Sparse tile store for a fitting pass, plus the bounding-rectangle scan."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Dict, Optional, Tuple

from dungeon_geometry import Rect, TilePos
from dungeon_models import CellType, GridCell


class DungeonGrid:
    """Coordinate-keyed cell store over an unbounded plane.

    Cells are created on first touch; any coordinate never touched reads as
    empty. Iteration follows cell creation order.
    """

    def __init__(self) -> None:
        self._cells: Dict[TilePos, GridCell] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, pos: TilePos) -> bool:
        return pos in self._cells

    def __iter__(self) -> Iterator[GridCell]:
        return iter(self._cells.values())

    def get(self, pos: TilePos) -> Optional[GridCell]:
        """Return the recorded cell at ``pos`` or None."""
        return self._cells.get(pos)

    def get_or_create(self, pos: TilePos) -> GridCell:
        cell = self._cells.get(pos)
        if cell is None:
            cell = GridCell(pos)
            self._cells[pos] = cell
        return cell

    def cell_type_at(self, pos: TilePos) -> CellType:
        cell = self._cells.get(pos)
        return CellType.EMPTY if cell is None else cell.cell_type

    def is_room(self, pos: TilePos) -> bool:
        cell = self._cells.get(pos)
        return cell is not None and cell.cell_type is CellType.ROOM

    def room_id_at(self, pos: TilePos) -> int:
        cell = self._cells.get(pos)
        return 0 if cell is None else cell.room_id

    def is_adjacent_to_room(self, pos: TilePos) -> bool:
        return any(self.is_room(neighbor) for neighbor in pos.neighbors())

    def set_room(self, pos: TilePos, room_id: int) -> None:
        cell = self.get_or_create(pos)
        cell.cell_type = CellType.ROOM
        cell.room_id = room_id

    def fill_room(self, bounds: Rect, room_id: int) -> None:
        """Stamp ``bounds`` with ``room_id``, overwriting whatever was there."""
        for tile in bounds.tiles():
            self.set_room(tile, room_id)

    def mark_corridor(self, pos: TilePos) -> bool:
        """Type ``pos`` as corridor unless it is a room cell; return True if carved."""
        cell = self.get_or_create(pos)
        if cell.cell_type is CellType.ROOM:
            return False
        cell.cell_type = CellType.CORRIDOR
        return True

    def any_room_in(self, bounds: Rect, *, ignore_room: Optional[int] = None) -> bool:
        """Return True if any tile in ``bounds`` already belongs to a room."""
        for tile in bounds.tiles():
            cell = self._cells.get(tile)
            if cell is None or cell.cell_type is not CellType.ROOM:
                continue
            if ignore_room is not None and cell.room_id == ignore_room:
                continue
            return True
        return False

    def recorded_extent(self, *extra: TilePos) -> Rect:
        """Rect spanning every recorded cell (of any type) and ``extra`` tiles."""
        return Rect.spanning(*self._cells.keys(), *extra)

    def cells(self) -> Tuple[GridCell, ...]:
        return tuple(self._cells.values())


def compute_used_bounds(cells: Iterable[GridCell]) -> Rect:
    """Bounding rectangle of every non-empty cell; ``Rect.empty()`` if there are none."""
    min_x: Optional[int] = None
    min_y = max_x = max_y = 0
    for cell in cells:
        if cell.cell_type is CellType.EMPTY:
            continue
        x, y = cell.pos
        if min_x is None:
            min_x, max_x, min_y, max_y = x, x, y, y
            continue
        if x < min_x:
            min_x = x
        if x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        if y > max_y:
            max_y = y
    if min_x is None:
        return Rect.empty()
    return Rect(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)
