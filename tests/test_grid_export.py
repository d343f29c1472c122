import json

import pytest

from dungeon_geometry import Rect, TilePos
from dungeon_models import CellType, Corridor, Dungeon, GridCell, Room, RoomShape
from grid_export import build_grid_data, load_grid_data, parse_grid_data, save_grid_data
from grid_fitter import fit_dungeon


@pytest.fixture
def fitted(make_room):
    dungeon = Dungeon()
    dungeon.add_room(make_room("2' x 2'"))
    dungeon.add_room(make_room("3' x 2'", RoomShape.RECTANGULAR))
    dungeon.add_corridor(Corridor(*dungeon.rooms))
    return dungeon, fit_dungeon(dungeon)


def test_grid_data_layout(fitted):
    dungeon, fitter = fitted

    data = build_grid_data(fitter.all_cells(), fitter.bounds(), dungeon.rooms)

    assert data["rect"] == {"x": 0, "y": -1, "width": 7, "height": 3}
    assert len(data["cells"]) == len(fitter.all_cells())
    first_cell = data["cells"][0]
    assert first_cell == {"x": 0, "y": 0, "roomId": dungeon.rooms[0].id, "cellType": "ROOM"}
    assert data["rooms"][1] == {
        "id": dungeon.rooms[1].id,
        "shape": "RECTANGULAR",
        "dimensions": "3' x 2'",
    }


def test_save_and_load_keeps_cells_and_rooms(fitted, tmp_path):
    dungeon, fitter = fitted
    path = tmp_path / "grid.json"

    save_grid_data(path, build_grid_data(fitter.all_cells(), fitter.bounds(), dungeon.rooms))
    loaded = load_grid_data(path)

    assert loaded.rect == fitter.bounds()
    assert [(c.pos, c.cell_type, c.room_id) for c in loaded.cells] == [
        (c.pos, c.cell_type, c.room_id) for c in fitter.all_cells()
    ]
    assert [(r.id, r.shape, r.dimensions) for r in loaded.rooms] == [
        (r.id, r.shape, r.dimensions) for r in dungeon.rooms
    ]
    # The file is plain JSON.
    assert json.loads(path.read_text(encoding="utf-8"))["rect"]["width"] == 7


def test_parse_tolerates_missing_sections():
    loaded = parse_grid_data({"rect": None})

    assert loaded.rect is None
    assert loaded.cells == []
    assert loaded.rooms == []


def test_parse_unknown_shape_becomes_unusual():
    loaded = parse_grid_data(
        {
            "rect": {"x": 0, "y": 0, "width": 1, "height": 1},
            "cells": [{"x": 0, "y": 0, "roomId": 4, "cellType": "ROOM"}],
            "rooms": [{"id": 4, "shape": "HEXAGONAL", "dimensions": "N/A"}],
        }
    )

    assert loaded.rooms[0].shape is RoomShape.UNUSUAL
    assert loaded.rooms[0].id == 4
    assert loaded.cells[0].pos == TilePos(0, 0)
    assert loaded.cells[0].cell_type is CellType.ROOM


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"rect": {"x": 0, "y": 0}},
        {"cells": [{"x": 1, "y": 2, "cellType": "LAVA"}]},
        {"cells": [{"y": 2, "cellType": "ROOM"}]},
        {"rooms": [{"shape": "SQUARE"}]},
        {"cells": [[0, 0, "ROOM"]]},
        {"cells": ["ROOM"]},
        {"rooms": ["SQUARE"]},
        {"cells": [{"x": "left", "y": 2, "cellType": "ROOM"}]},
    ],
)
def test_parse_rejects_malformed_documents(data):
    with pytest.raises(ValueError):
        parse_grid_data(data)


def test_build_without_bounds_or_rooms():
    room = Room(RoomShape.SQUARE, "1' x 1'", id=900)
    data = build_grid_data([GridCell(TilePos(2, 3), CellType.ROOM, room.id)], None)

    assert data["rect"] is None
    assert data["rooms"] == []
    assert Rect(2, 3, 1, 1).contains(TilePos(data["cells"][0]["x"], data["cells"][0]["y"]))
