"""Configuration container for the dungeon grid fitter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dungeon_constants import (
    ASTAR_MAX_ROW_WIDTH,
    ASTAR_ROOM_MARGIN,
    ASTAR_ROW_MARGIN,
    BFS_MAX_ROW_WIDTH,
    BFS_ROOM_MARGIN,
    BFS_ROW_MARGIN,
    MAX_ROOM_DIMENSION,
    OPEN_CELL_COST,
    ROOM_ADJACENT_COST,
    ROOM_OFFSET_RANGE,
    STUB_LENGTH_MAX,
    STUB_LENGTH_MIN,
    UNIFORM_SEARCH_MARGIN,
    WEIGHTED_SEARCH_MARGIN,
)

SEARCH_STRATEGIES = ("uniform", "weighted")


class OverlapPolicy(Enum):
    """What the room placer does when a footprint lands on existing room cells."""

    OVERWRITE = "overwrite"  # later rooms win, silently
    REJECT = "reject"  # the overlapping room is left off the grid


@dataclass
class FitterConfig:
    """Aggregates all tunable parameters for a grid fitting pass."""

    # Rooms wrap to a new row once the cursor would pass this x.
    max_row_width: int = BFS_MAX_ROW_WIDTH
    # Empty tiles between neighboring rooms in a row.
    room_margin: int = BFS_ROOM_MARGIN
    # Empty tiles between rows.
    row_margin: int = BFS_ROW_MARGIN
    # Clamp parsed room sides to this many tiles; None leaves them as parsed.
    max_room_dimension: Optional[int] = None
    # Jitter each room origin by up to this many tiles per axis.
    room_offset_range: int = 0

    search_strategy: str = "uniform"
    search_margin: int = WEIGHTED_SEARCH_MARGIN
    uniform_search_margin: int = UNIFORM_SEARCH_MARGIN
    max_search_expansions: Optional[int] = None
    stub_min_length: int = STUB_LENGTH_MIN
    stub_max_length: int = STUB_LENGTH_MAX
    room_adjacent_cost: float = ROOM_ADJACENT_COST
    open_cell_cost: float = OPEN_CELL_COST

    overlap_policy: OverlapPolicy = OverlapPolicy.OVERWRITE
    random_seed: Optional[int] = None
    collect_metrics: bool = False

    def __post_init__(self) -> None:
        if self.max_row_width <= 0:
            raise ValueError("FitterConfig max_row_width must be positive")
        if self.room_margin < 0 or self.row_margin < 0:
            raise ValueError("FitterConfig room_margin and row_margin cannot be negative")
        if self.max_room_dimension is not None and self.max_room_dimension <= 0:
            raise ValueError("FitterConfig max_room_dimension must be positive or None")
        if self.room_offset_range < 0:
            raise ValueError("FitterConfig room_offset_range cannot be negative")
        if self.search_strategy not in SEARCH_STRATEGIES:
            raise ValueError(
                f"FitterConfig search_strategy must be one of {SEARCH_STRATEGIES}, got {self.search_strategy!r}"
            )
        if self.search_margin < 0 or self.uniform_search_margin < 1:
            raise ValueError(
                "FitterConfig search_margin must be non-negative and uniform_search_margin at least 1"
            )
        if self.max_search_expansions is not None and self.max_search_expansions <= 0:
            raise ValueError("FitterConfig max_search_expansions must be positive or None")
        if self.stub_min_length <= 0:
            raise ValueError("FitterConfig stub_min_length must be positive")
        if self.stub_max_length < self.stub_min_length:
            raise ValueError("FitterConfig stub_max_length must be >= stub_min_length")
        if self.open_cell_cost <= 0:
            raise ValueError("FitterConfig open_cell_cost must be positive")
        if self.room_adjacent_cost < self.open_cell_cost:
            # The cheapest step is then open_cell_cost, which the A* heuristic scales by.
            raise ValueError("FitterConfig room_adjacent_cost must be >= open_cell_cost")

        if not isinstance(self.overlap_policy, OverlapPolicy):
            self.overlap_policy = OverlapPolicy(self.overlap_policy)

    @classmethod
    def breadth_first(cls, **overrides) -> "FitterConfig":
        """Tight rows, no jitter, breadth-first corridors."""
        values = dict(
            max_row_width=BFS_MAX_ROW_WIDTH,
            room_margin=BFS_ROOM_MARGIN,
            row_margin=BFS_ROW_MARGIN,
            search_strategy="uniform",
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def for_strategy(cls, name: str, **overrides) -> "FitterConfig":
        """Preset matching the search strategy ``name``."""
        if name == "weighted":
            return cls.astar(**overrides)
        if name == "uniform":
            return cls.breadth_first(**overrides)
        raise ValueError(f"Unknown search strategy {name!r}")

    @classmethod
    def astar(cls, **overrides) -> "FitterConfig":
        """Looser, jittered rows with clamped rooms and A* corridors."""
        values = dict(
            max_row_width=ASTAR_MAX_ROW_WIDTH,
            room_margin=ASTAR_ROOM_MARGIN,
            row_margin=ASTAR_ROW_MARGIN,
            max_room_dimension=MAX_ROOM_DIMENSION,
            room_offset_range=ROOM_OFFSET_RANGE,
            search_strategy="weighted",
        )
        values.update(overrides)
        return cls(**values)
