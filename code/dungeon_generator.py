"""Random dungeon graph from the classic d20 passage/chamber tables.

The generator only produces the abstract graph (rooms and the corridors
between them). Laying it out on a grid is the job of ``grid_fitter``.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Sequence, Tuple, TypeVar

from dungeon_models import Corridor, Dungeon, Room, RoomShape

MAX_ROOMS = 10

T = TypeVar("T")

# Each table maps the highest d20 roll for an entry to the entry itself.
RollTable = Sequence[Tuple[int, T]]


class PassageResult(Enum):
    """Table I: what lies ahead in a passage."""

    CONTINUE_STRAIGHT = "continue straight"
    DOOR = "door"
    SIDE_PASSAGE = "side passage"
    PASSAGE_TURNS = "passage turns"
    CHAMBER = "chamber"
    STAIRS = "stairs"
    DEAD_END = "dead end"
    TRICK_TRAP = "trick/trap"
    WANDERING_MONSTER = "wandering monster"


class DoorLocation(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    AHEAD = "AHEAD"


class DoorBeyond(Enum):
    """Table II: the space beyond a door."""

    PARALLEL_OR_SMALL_ROOM = "parallel passage or 10' x 10' room"
    PASSAGE_STRAIGHT = "passage straight ahead"
    PASSAGE_45_OR_135 = "passage 45 or 135 degrees"
    ROOM = "room"
    CHAMBER = "chamber"


class SidePassageDirection(Enum):
    LEFT_90 = "LEFT_90"
    RIGHT_90 = "RIGHT_90"
    LEFT_45 = "LEFT_45"
    RIGHT_45 = "RIGHT_45"
    LEFT_135 = "LEFT_135"
    RIGHT_135 = "RIGHT_135"
    LEFT_CURVE_45 = "LEFT_CURVE_45"
    RIGHT_CURVE_45 = "RIGHT_CURVE_45"
    T_INTERSECTION = "T_INTERSECTION"
    Y_INTERSECTION = "Y_INTERSECTION"
    FOUR_WAY = "FOUR_WAY"
    X_INTERSECTION = "X_INTERSECTION"


class TurnType(Enum):
    LEFT_90 = "Left 90°"
    LEFT_45_AHEAD = "Left 45° ahead"
    LEFT_135 = "Left 135°"
    RIGHT_90 = "Right 90°"
    RIGHT_45_AHEAD = "Right 45° ahead"
    RIGHT_135 = "Right 135°"

    @property
    def description(self) -> str:
        return self.value


class StairsType(Enum):
    DOWN_1 = "Down 1 level"
    DOWN_2 = "Down 2 levels"
    DOWN_3 = "Down 3 levels"
    UP_1 = "Up 1 level"
    UP_TO_DEAD_END = "Up to dead end (possible chute trap)"
    DOWN_TO_DEAD_END = "Down to dead end (possible chute trap)"
    CHIMNEY_UP_1 = "Chimney up 1 level, passage continues"
    CHIMNEY_UP_2 = "Chimney up 2 levels, passage continues"
    CHIMNEY_DOWN_2 = "Chimney down 2 levels, passage continues"
    TRAP_DOOR_DOWN_1 = "Trap door down 1 level, passage continues"
    TRAP_DOOR_DOWN_2 = "Trap door down 2 levels, passage continues"
    UP_1_DOWN_2_CHAMBER = "Up 1 level, then down 2 levels, ends in chamber"

    @property
    def description(self) -> str:
        return self.value


PASSAGE_TABLE: RollTable[PassageResult] = (
    (2, PassageResult.CONTINUE_STRAIGHT),
    (5, PassageResult.DOOR),
    (10, PassageResult.SIDE_PASSAGE),
    (13, PassageResult.PASSAGE_TURNS),
    (16, PassageResult.CHAMBER),
    (17, PassageResult.STAIRS),
    (18, PassageResult.DEAD_END),
    (19, PassageResult.TRICK_TRAP),
    (20, PassageResult.WANDERING_MONSTER),
)

DOOR_LOCATION_TABLE: RollTable[DoorLocation] = (
    (6, DoorLocation.LEFT),
    (12, DoorLocation.RIGHT),
    (20, DoorLocation.AHEAD),
)

DOOR_BEYOND_TABLE: RollTable[DoorBeyond] = (
    (4, DoorBeyond.PARALLEL_OR_SMALL_ROOM),
    (8, DoorBeyond.PASSAGE_STRAIGHT),
    (10, DoorBeyond.PASSAGE_45_OR_135),
    (18, DoorBeyond.ROOM),
    (20, DoorBeyond.CHAMBER),
)

SIDE_PASSAGE_TABLE: RollTable[SidePassageDirection] = (
    (2, SidePassageDirection.LEFT_90),
    (4, SidePassageDirection.RIGHT_90),
    (5, SidePassageDirection.LEFT_45),
    (6, SidePassageDirection.RIGHT_45),
    (7, SidePassageDirection.LEFT_135),
    (8, SidePassageDirection.RIGHT_135),
    (9, SidePassageDirection.LEFT_CURVE_45),
    (10, SidePassageDirection.RIGHT_CURVE_45),
    (13, SidePassageDirection.T_INTERSECTION),
    (15, SidePassageDirection.Y_INTERSECTION),
    (19, SidePassageDirection.FOUR_WAY),
    (20, SidePassageDirection.X_INTERSECTION),
)

# 19-20 is "special" on the printed table; treated as 40 ft.
PASSAGE_WIDTH_TABLE: RollTable[int] = (
    (4, 5),
    (13, 10),
    (17, 20),
    (18, 30),
    (20, 40),
)

TURN_TABLE: RollTable[TurnType] = (
    (8, TurnType.LEFT_90),
    (9, TurnType.LEFT_45_AHEAD),
    (10, TurnType.LEFT_135),
    (18, TurnType.RIGHT_90),
    (19, TurnType.RIGHT_45_AHEAD),
    (20, TurnType.RIGHT_135),
)

CHAMBER_TABLE: RollTable[Tuple[RoomShape, str]] = (
    (4, (RoomShape.SQUARE, "20' x 20'")),
    (6, (RoomShape.SQUARE, "30' x 30'")),
    (8, (RoomShape.SQUARE, "40' x 40'")),
    (10, (RoomShape.RECTANGULAR, "20' x 30'")),
    (13, (RoomShape.RECTANGULAR, "30' x 50'")),
    (15, (RoomShape.RECTANGULAR, "40' x 60'")),
    (17, (RoomShape.CIRCULAR, "30' diameter")),
    (20, (RoomShape.UNUSUAL, "about 500+ sq. ft")),
)

STAIRS_TABLE: RollTable[StairsType] = (
    (5, StairsType.DOWN_1),
    (6, StairsType.DOWN_2),
    (7, StairsType.DOWN_3),
    (8, StairsType.UP_1),
    (9, StairsType.UP_TO_DEAD_END),
    (10, StairsType.DOWN_TO_DEAD_END),
    (11, StairsType.CHIMNEY_UP_1),
    (12, StairsType.CHIMNEY_UP_2),
    (13, StairsType.CHIMNEY_DOWN_2),
    (16, StairsType.TRAP_DOOR_DOWN_1),
    (17, StairsType.TRAP_DOOR_DOWN_2),
    (20, StairsType.UP_1_DOWN_2_CHAMBER),
)


def lookup(table: RollTable[T], roll: int) -> T:
    """Return the entry whose range contains ``roll``."""
    for highest, entry in table:
        if roll <= highest:
            return entry
    raise ValueError(f"Roll {roll} is outside the table")


class DungeonGraphGenerator:
    """Grows a dungeon graph from a starter room by rolling on the tables.

    Linear passages are modeled as corridors ending in a CORRIDOR_END room;
    dead ends and traps leave one side of their corridor empty.
    """

    def __init__(self, rng: Optional[random.Random] = None, max_rooms: int = MAX_ROOMS) -> None:
        if max_rooms <= 0:
            raise ValueError("max_rooms must be positive")
        self.rng = rng if rng is not None else random.Random()
        self.max_rooms = max_rooms

    def generate(self) -> Dungeon:
        dungeon = Dungeon()
        start_room = Room(RoomShape.STARTER, "20' x 20'")
        dungeon.add_room(start_room)
        self._expand_passage(dungeon, start_room, 0)
        return dungeon

    def d20(self) -> int:
        return self.rng.randint(1, 20)

    def roll(self, table: RollTable[T]) -> T:
        return lookup(table, self.d20())

    def random_chamber(self) -> Room:
        shape, dimensions = self.roll(CHAMBER_TABLE)
        return Room(shape, dimensions)

    def _expand_passage(self, dungeon: Dungeon, from_room: Room, depth: int) -> None:
        if len(dungeon.rooms) >= self.max_rooms or depth > self.max_rooms * 2:
            return

        result = self.roll(PASSAGE_TABLE)
        if result is PassageResult.CONTINUE_STRAIGHT:
            self._continue_linear(dungeon, from_room, 60, "Continue straight", depth)
        elif result is PassageResult.DOOR:
            self._handle_door(dungeon, from_room, depth)
        elif result is PassageResult.SIDE_PASSAGE:
            direction = self.roll(SIDE_PASSAGE_TABLE)
            width = self.roll(PASSAGE_WIDTH_TABLE)
            desc = f"Side passage {direction.value}, {width} ft wide"
            self._continue_linear(dungeon, from_room, 30, desc, depth)
        elif result is PassageResult.PASSAGE_TURNS:
            turn = self.roll(TURN_TABLE)
            width = self.roll(PASSAGE_WIDTH_TABLE)
            desc = f"{width} ft wide, {turn.description}"
            self._continue_linear(dungeon, from_room, 60, desc, depth)
        elif result is PassageResult.CHAMBER:
            self._continue_to_chamber(dungeon, from_room, 30, "To Chamber", depth)
        elif result is PassageResult.STAIRS:
            self._handle_stairs(dungeon, from_room, self.roll(STAIRS_TABLE), depth)
        elif result is PassageResult.DEAD_END:
            dungeon.add_corridor(Corridor(from_room, None, 10, "Dead end here"))
        elif result is PassageResult.TRICK_TRAP:
            dungeon.add_corridor(Corridor(from_room, None, 30, "Trap in passage - continues"))
            self._continue_after_trap(dungeon, depth + 1)
        elif result is PassageResult.WANDERING_MONSTER:
            dungeon.add_corridor(Corridor(from_room, None, 10, "Wandering monster encountered"))
            # Roll again from the same spot.
            self._expand_passage(dungeon, from_room, depth + 1)

    def _handle_door(self, dungeon: Dungeon, from_room: Room, depth: int) -> None:
        location = self.roll(DOOR_LOCATION_TABLE)
        beyond = self.roll(DOOR_BEYOND_TABLE)
        door_desc = f"Door at {location.value}"

        if beyond is DoorBeyond.PARALLEL_OR_SMALL_ROOM:
            if self.rng.random() < 0.5:
                self._continue_linear(dungeon, from_room, 30, f"{door_desc} -> parallel passage", depth)
            else:
                small_room = Room(RoomShape.SQUARE, "10' x 10'")
                self._link_room(dungeon, from_room, small_room, 5, f"{door_desc} -> small 10x10 room", depth)
        elif beyond is DoorBeyond.PASSAGE_STRAIGHT:
            self._continue_linear(dungeon, from_room, 30, f"{door_desc} -> passage straight", depth)
        elif beyond is DoorBeyond.PASSAGE_45_OR_135:
            angle = "45°" if self.rng.random() < 0.5 else "135°"
            self._continue_linear(dungeon, from_room, 30, f"{door_desc} -> angled {angle} passage", depth)
        elif beyond is DoorBeyond.ROOM:
            self._continue_to_chamber(dungeon, from_room, 10, f"{door_desc} -> Room (Table V)", depth)
        else:
            self._continue_to_chamber(dungeon, from_room, 10, f"{door_desc} -> Chamber (Table V)", depth)

    def _handle_stairs(self, dungeon: Dungeon, from_room: Room, stairs: StairsType, depth: int) -> None:
        landing = self._add_linear_corridor(dungeon, from_room, 20, f"Stairs: {stairs.description}")
        if stairs is StairsType.UP_1_DOWN_2_CHAMBER:
            self._continue_to_chamber(dungeon, landing, 10, "End of stairs -> Chamber", depth)
        else:
            self._expand_passage(dungeon, landing, depth + 1)

    def _continue_after_trap(self, dungeon: Dungeon, depth: int) -> None:
        if len(dungeon.rooms) >= self.max_rooms:
            return
        trap_end = Room(RoomShape.CORRIDOR_END, "End after trap")
        dungeon.add_room(trap_end)
        dungeon.add_corridor(Corridor(None, trap_end, 0, "Trap corridor ends here"))
        self._expand_passage(dungeon, trap_end, depth)

    def _add_linear_corridor(self, dungeon: Dungeon, from_room: Room, length_feet: int, description: str) -> Room:
        corridor_end = Room(RoomShape.CORRIDOR_END, "N/A")
        dungeon.add_room(corridor_end)
        dungeon.add_corridor(Corridor(from_room, corridor_end, length_feet, description))
        return corridor_end

    def _continue_linear(self, dungeon: Dungeon, from_room: Room, length_feet: int, description: str, depth: int) -> None:
        corridor_end = self._add_linear_corridor(dungeon, from_room, length_feet, description)
        self._expand_passage(dungeon, corridor_end, depth + 1)

    def _continue_to_chamber(self, dungeon: Dungeon, from_room: Room, length_feet: int, description: str, depth: int) -> None:
        self._link_room(dungeon, from_room, self.random_chamber(), length_feet, description, depth)

    def _link_room(
        self,
        dungeon: Dungeon,
        from_room: Room,
        new_room: Room,
        length_feet: int,
        description: str,
        depth: int,
    ) -> None:
        dungeon.add_room(new_room)
        dungeon.add_corridor(Corridor(from_room, new_room, length_feet, description))
        self._expand_passage(dungeon, new_room, depth + 1)
