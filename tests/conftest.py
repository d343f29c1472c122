import random
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import FitterConfig
from dungeon_geometry import TilePos
from dungeon_grid import DungeonGrid
from dungeon_models import CellType, Room, RoomShape


class ScriptedRng:
    """Stands in for random.Random with predetermined answers."""

    def __init__(self, ints: Sequence[int] = (), choices: Sequence[object] = ()) -> None:
        self._ints = list(ints)
        self._choices = list(choices)

    def randint(self, low: int, high: int) -> int:
        value = self._ints.pop(0)
        assert low <= value <= high
        return value

    def choice(self, options):
        value = self._choices.pop(0)
        assert value in options
        return value


@pytest.fixture
def grid() -> DungeonGrid:
    return DungeonGrid()


@pytest.fixture
def fitter_config() -> FitterConfig:
    return FitterConfig(max_row_width=40, room_margin=2, row_margin=3)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_room() -> Callable[..., Room]:
    def _make_room(dimensions: str = "2' x 2'", shape: RoomShape = RoomShape.SQUARE) -> Room:
        return Room(shape, dimensions)

    return _make_room


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRng]:
    return ScriptedRng


def is_connected(cells: Iterable[TilePos], source: TilePos, target: TilePos) -> bool:
    """True when ``target`` can be reached from ``source`` through ``cells``."""
    cell_set = set(cells)
    frontier: List[TilePos] = [source]
    seen = {source}
    while frontier:
        current = frontier.pop()
        if current == target:
            return True
        for neighbor in current.neighbors():
            if neighbor in cell_set and neighbor not in seen:
                seen.add(neighbor)
                frontier.append(neighbor)
    return False


def is_contiguous(path: Sequence[TilePos]) -> bool:
    return all(a.manhattan(b) == 1 for a, b in zip(path, path[1:]))


def occupied_positions(grid_cells) -> List[TilePos]:
    return [cell.pos for cell in grid_cells if cell.cell_type is not CellType.EMPTY]
