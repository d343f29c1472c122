"""Core dataclasses shared by the dungeon graph and the grid fitter."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from dungeon_geometry import TilePos


_room_ids = itertools.count(1)


def _next_room_id() -> int:
    return next(_room_ids)


class RoomShape(Enum):
    """Shape tags produced by the dice tables; values are display names."""

    STARTER = "Starter"
    CORRIDOR_END = "Corridor End"
    SQUARE = "Square"
    RECTANGULAR = "Rectangular"
    CIRCULAR = "Circular"
    UNUSUAL = "Unusual"

    @property
    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class Room:
    """A node of the abstract dungeon graph.

    ``dimensions`` is free text such as ``"20' x 30'"``; only the room placer
    interprets it. Ids come from a process-wide counter starting at 1 unless an
    explicit id is given (e.g. when rebuilding rooms from saved data).
    """

    shape: RoomShape
    dimensions: str
    id: int = field(default_factory=_next_room_id)

    def __str__(self) -> str:
        return f"Room #{self.id} [{self.shape.description} | {self.dimensions}]"


@dataclass(frozen=True)
class Corridor:
    """An edge between two rooms; either end may be missing (dead ends, traps)."""

    from_room: Optional[Room]
    to_room: Optional[Room]
    length_feet: int = 0
    description: str = ""

    def __str__(self) -> str:
        from_id = "None" if self.from_room is None else f"Room#{self.from_room.id}"
        to_id = "None" if self.to_room is None else f"Room#{self.to_room.id}"
        return f"Corridor [{from_id} -> {to_id}, length={self.length_feet} ft, {self.description}]"


@dataclass
class Dungeon:
    """Ordered rooms and corridors; corridor order is routing order."""

    rooms: List[Room] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)

    def add_room(self, room: Room) -> None:
        self.rooms.append(room)

    def add_corridor(self, corridor: Corridor) -> None:
        self.corridors.append(corridor)


class CellType(Enum):
    EMPTY = "EMPTY"
    ROOM = "ROOM"
    CORRIDOR = "CORRIDOR"


class GridCell:
    """Mutable cell of the fitted grid."""

    __slots__ = ("pos", "cell_type", "room_id")

    def __init__(self, pos: TilePos, cell_type: CellType = CellType.EMPTY, room_id: int = 0) -> None:
        self.pos = pos
        self.cell_type = cell_type
        self.room_id = room_id  # 0 when the cell belongs to no room

    @property
    def x(self) -> int:
        return self.pos.x

    @property
    def y(self) -> int:
        return self.pos.y

    @property
    def is_room(self) -> bool:
        return self.cell_type is CellType.ROOM

    def __repr__(self) -> str:
        return f"GridCell[{self.pos.x},{self.pos.y} {self.cell_type.name} R{self.room_id}]"
