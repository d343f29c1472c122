"""Row-flow room placement onto the sparse grid."""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from dungeon_config import FitterConfig, OverlapPolicy
from dungeon_constants import DEFAULT_ROOM_SIZE, PROGRESS_LOG_INTERVAL
from dungeon_geometry import Rect
from dungeon_grid import DungeonGrid
from dungeon_models import Room

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_room_dimensions(dimensions: Optional[str]) -> Tuple[int, int]:
    """Read ``"20' x 30'"`` style text as ``(width, height)``.

    Anything that doesn't split into exactly two positive numbers around an
    ``x`` (circular rooms, "N/A", free text) falls back to the default size.
    """
    default = (DEFAULT_ROOM_SIZE, DEFAULT_ROOM_SIZE)
    if not dimensions:
        return default
    tokens = re.split(r"[xX]", dimensions)
    if len(tokens) != 2:
        logger.debug("Unparseable room dimensions %r, using %dx%d", dimensions, *default)
        return default
    left = _NON_DIGITS.sub("", tokens[0])
    right = _NON_DIGITS.sub("", tokens[1])
    try:
        width = int(left)
        height = int(right)
    except ValueError:
        logger.debug("Unparseable room dimensions %r, using %dx%d", dimensions, *default)
        return default
    if width <= 0 or height <= 0:
        return default
    return width, height


@dataclass(frozen=True)
class RoomFootprint:
    """Where a room landed (or would have landed, if rejected)."""

    room_id: int
    bounds: Rect
    placed: bool = True


class RoomPlacer:
    """Lays rooms out left to right, wrapping into rows.

    No packing or collision avoidance happens here. With the default
    ``OverlapPolicy.OVERWRITE`` a later room simply stamps over an earlier one.
    """

    def __init__(
        self,
        grid: DungeonGrid,
        config: Optional[FitterConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.grid = grid
        self.config = config if config is not None else FitterConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)

    def _room_size(self, room: Room) -> Tuple[int, int]:
        width, height = parse_room_dimensions(room.dimensions)
        limit = self.config.max_room_dimension
        if limit is not None:
            width = min(width, limit)
            height = min(height, limit)
        return width, height

    def _jitter(self) -> Tuple[int, int]:
        spread = self.config.room_offset_range
        if spread <= 0:
            return 0, 0
        return self.rng.randint(-spread, spread), self.rng.randint(-spread, spread)

    def place_rooms(self, rooms: Sequence[Room]) -> List[RoomFootprint]:
        """Write every room into the grid; returns one footprint per room, in order."""
        config = self.config
        logger.info("Placing %d rooms...", len(rooms))
        footprints: List[RoomFootprint] = []
        cursor_x = 0
        cursor_y = 0
        tallest_in_row = 0

        for room in rooms:
            width, height = self._room_size(room)

            if cursor_x > 0 and cursor_x + width > config.max_row_width:
                cursor_x = 0
                cursor_y += tallest_in_row + config.row_margin
                tallest_in_row = 0

            offset_x, offset_y = self._jitter()
            bounds = Rect(cursor_x + offset_x, cursor_y + offset_y, width, height)
            footprints.append(self._place_room(room, bounds))

            cursor_x += width + config.room_margin
            tallest_in_row = max(tallest_in_row, height)

            if len(footprints) % PROGRESS_LOG_INTERVAL == 0:
                logger.info("  ...placed %d rooms so far", len(footprints))

        logger.info("All rooms placed.")
        return footprints

    def _place_room(self, room: Room, bounds: Rect) -> RoomFootprint:
        if (
            self.config.overlap_policy is OverlapPolicy.REJECT
            and self.grid.any_room_in(bounds, ignore_room=room.id)
        ):
            logger.debug("Rejected room#%d at %s: overlaps an earlier room", room.id, bounds.to_tuple())
            return RoomFootprint(room.id, bounds, placed=False)

        self.grid.fill_room(bounds, room.id)
        logger.debug(
            "Placed room#%d at (%d,%d), size %dx%d",
            room.id,
            bounds.x,
            bounds.y,
            bounds.width,
            bounds.height,
        )
        return RoomFootprint(room.id, bounds)
