"""JSON persistence for fitted grids.

The document has three keys: ``rect`` (the bounding rectangle), ``cells``
(every realized cell) and ``rooms`` (the rooms of the source dungeon).
Loading gives back the stored cells for display; it does not re-run the
fitter.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dungeon_geometry import Rect, TilePos
from dungeon_models import CellType, GridCell, Room, RoomShape

GridData = Dict[str, Any]


@dataclass
class LoadedGrid:
    rect: Optional[Rect]
    cells: List[GridCell] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)


def build_grid_data(
    cells: Iterable[GridCell],
    bounds: Optional[Rect],
    rooms: Iterable[Room] = (),
) -> GridData:
    rect = None
    if bounds is not None:
        rect = {"x": bounds.x, "y": bounds.y, "width": bounds.width, "height": bounds.height}
    return {
        "rect": rect,
        "cells": [
            {"x": cell.x, "y": cell.y, "roomId": cell.room_id, "cellType": cell.cell_type.name}
            for cell in cells
        ],
        "rooms": [
            {"id": room.id, "shape": room.shape.name, "dimensions": room.dimensions}
            for room in rooms
        ],
    }


def save_grid_data(path: str | Path, data: GridData) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2)


def parse_grid_data(data: GridData) -> LoadedGrid:
    """Rebuild rect, cells and rooms from a decoded document."""
    if not isinstance(data, dict):
        raise ValueError("Grid data must be a JSON object")
    try:
        rect_data = data.get("rect")
        rect = None
        if rect_data is not None:
            rect = Rect(
                int(rect_data["x"]),
                int(rect_data["y"]),
                int(rect_data["width"]),
                int(rect_data["height"]),
            )

        cells = [
            GridCell(
                TilePos(int(item["x"]), int(item["y"])),
                CellType[item["cellType"]],
                int(item.get("roomId", 0)),
            )
            for item in data.get("cells") or ()
        ]

        rooms = [
            Room(_shape_from_name(item.get("shape")), item.get("dimensions") or "", id=int(item["id"]))
            for item in data.get("rooms") or ()
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed grid data: {exc!r}") from exc
    return LoadedGrid(rect=rect, cells=cells, rooms=rooms)


def load_grid_data(path: str | Path) -> LoadedGrid:
    with open(path, "r", encoding="utf-8") as handle:
        return parse_grid_data(json.load(handle))


def _shape_from_name(name: Optional[str]) -> RoomShape:
    if name is None:
        return RoomShape.UNUSUAL
    try:
        return RoomShape[name]
    except KeyError:
        return RoomShape.UNUSUAL
