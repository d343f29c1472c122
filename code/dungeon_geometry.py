"""Geometry helpers for working with tile coordinates, directions, and rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Direction(Enum):
    """Cardinal directions with unit vectors on the tile grid."""

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Neighbor scan order used everywhere on the grid: east, west, south, north.
NEIGHBOR_DIRECTIONS = (Direction.EAST, Direction.WEST, Direction.SOUTH, Direction.NORTH)


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def step(self, direction: Direction, distance: int = 1) -> TilePos:
        return TilePos(self.x + direction.dx * distance, self.y + direction.dy * distance)

    def neighbors(self) -> Iterator[TilePos]:
        """Yield the four orthogonally adjacent tiles."""
        for direction in NEIGHBOR_DIRECTIONS:
            yield self.step(direction)

    def manhattan(self, other: TilePos) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.y


def manhattan_distance(a: TilePos, b: TilePos) -> float:
    """Number of 4-connected steps between two tiles."""
    return float(abs(a.x - b.x) + abs(a.y - b.y))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned ``(x, y, width, height)`` block of tiles; ``x``/``y`` is the top-left."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def empty(cls) -> Rect:
        """The degenerate rectangle reported when nothing is occupied."""
        return cls(0, 0, 0, 0)

    @classmethod
    def spanning(cls, *points: TilePos) -> Rect:
        """Smallest rect covering every given tile (inclusive)."""
        if not points:
            return cls.empty()
        min_x = min(p.x for p in points)
        min_y = min(p.y for p in points)
        max_x = max(p.x for p in points)
        max_y = max(p.y for p in points)
        return cls(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)

    @property
    def max_x(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def max_y(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def expand(self, margin: int) -> Rect:
        """Same rect with ``margin`` extra tiles on every side."""
        if margin == 0:
            return self
        return Rect(
            self.x - margin,
            self.y - margin,
            self.width + 2 * margin,
            self.height + 2 * margin,
        )

    def contains(self, point: TilePos) -> bool:
        """True if ``point`` is one of this rect's tiles."""
        return self.x <= point.x < self.max_x and self.y <= point.y < self.max_y

    def tiles(self) -> Iterator[TilePos]:
        """Yield every tile in row-major order."""
        for ty in range(self.y, self.max_y):
            for tx in range(self.x, self.max_x):
                yield TilePos(tx, ty)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return the rect as an ``(x, y, width, height)`` tuple."""
        return self.x, self.y, self.width, self.height
