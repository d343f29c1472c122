"""Shared constants for the dungeon grid fitter."""

from __future__ import annotations

# Fallback footprint when a room's dimension text can't be parsed.
DEFAULT_ROOM_SIZE = 5

# Row-flow placement used by the breadth-first fitter.
BFS_MAX_ROW_WIDTH = 80
BFS_ROOM_MARGIN = 2
BFS_ROW_MARGIN = 3

# Row-flow placement used by the A* fitter; rooms are clamped and jittered.
ASTAR_MAX_ROW_WIDTH = 100
ASTAR_ROOM_MARGIN = 5
ASTAR_ROW_MARGIN = 5
MAX_ROOM_DIMENSION = 30
ROOM_OFFSET_RANGE = 5

# Corridor stubs projected out of room walls before A* runs.
STUB_LENGTH_MIN = 1
STUB_LENGTH_MAX = 3

# Weighted search works inside the start/goal bounding box grown by this many tiles.
WEIGHTED_SEARCH_MARGIN = 20
ROOM_ADJACENT_COST = 5.0
OPEN_CELL_COST = 1.0

# Breadth-first search stays inside the occupied area grown by this many tiles.
UNIFORM_SEARCH_MARGIN = 1

PROGRESS_LOG_INTERVAL = 5
