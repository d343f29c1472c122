"""Render a fitted grid to ASCII rows."""

from __future__ import annotations

import string
from typing import Iterable, List, Optional

from dungeon_geometry import Rect
from dungeon_grid import compute_used_bounds
from dungeon_models import CellType, GridCell

ROOM_CHAR = "#"
CORRIDOR_CHAR = "."
EMPTY_CHAR = " "
_ROOM_LABELS = string.digits + string.ascii_uppercase


def render_ascii(
    cells: Iterable[GridCell],
    bounds: Optional[Rect] = None,
    *,
    label_rooms: bool = False,
    room_char: str = ROOM_CHAR,
    corridor_char: str = CORRIDOR_CHAR,
    empty_char: str = EMPTY_CHAR,
) -> List[str]:
    """One string per row of ``bounds``; cells missing from ``cells`` draw as empty.

    With ``label_rooms`` each room is drawn with the last base-36 digit of its
    id, which makes neighboring rooms easy to tell apart.
    """
    cells = list(cells)
    if bounds is None:
        bounds = compute_used_bounds(cells)
    if bounds.is_empty():
        return []

    rows = [[empty_char] * bounds.width for _ in range(bounds.height)]
    for cell in cells:
        if not bounds.contains(cell.pos) or cell.cell_type is CellType.EMPTY:
            continue
        if cell.cell_type is CellType.ROOM:
            char = _ROOM_LABELS[cell.room_id % len(_ROOM_LABELS)] if label_rooms else room_char
        else:
            char = corridor_char
        rows[cell.y - bounds.y][cell.x - bounds.x] = char
    return ["".join(row) for row in rows]


def print_grid(rows: Iterable[str], horizontal_sep: str = "") -> None:
    """Prints rendered rows to the console."""
    for row in rows:
        print(horizontal_sep.join(row))
