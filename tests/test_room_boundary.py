from dungeon_geometry import Rect, TilePos
from room_boundary import BoundaryFinder


def test_boundary_excludes_interior_and_follows_grid_order(grid):
    grid.fill_room(Rect(0, 0, 3, 3), 1)

    boundary = BoundaryFinder(grid).boundary(1)

    assert TilePos(1, 1) not in boundary
    assert len(boundary) == 8
    assert boundary[0] == TilePos(0, 0)
    assert list(boundary) == [tile for tile in Rect(0, 0, 3, 3).tiles() if tile != TilePos(1, 1)]


def test_neighboring_room_makes_shared_edge_a_boundary(grid):
    grid.fill_room(Rect(0, 0, 3, 1), 1)
    grid.fill_room(Rect(0, 1, 3, 3), 2)
    # Fence the top row of room 2 off from the open plane on every other side.
    grid.fill_room(Rect(-1, 0, 1, 4), 3)
    grid.fill_room(Rect(3, 0, 1, 4), 3)
    grid.fill_room(Rect(0, 4, 3, 1), 3)

    boundary = BoundaryFinder(grid).boundary(2)

    assert TilePos(1, 1) in boundary
    assert TilePos(1, 2) not in boundary


def test_corridor_neighbor_counts_as_outside(grid):
    grid.fill_room(Rect(0, 0, 3, 3), 1)
    for tile in Rect(-1, -1, 5, 5).tiles():
        grid.mark_corridor(tile)

    assert BoundaryFinder(grid).boundary(1) == (
        TilePos(0, 0),
        TilePos(1, 0),
        TilePos(2, 0),
        TilePos(0, 1),
        TilePos(2, 1),
        TilePos(0, 2),
        TilePos(1, 2),
        TilePos(2, 2),
    )


def test_unknown_room_has_no_boundary(grid):
    grid.fill_room(Rect(0, 0, 2, 2), 1)

    assert BoundaryFinder(grid).boundary(42) == ()


def test_boundary_is_cached_until_cleared(grid):
    grid.fill_room(Rect(0, 0, 2, 2), 1)
    finder = BoundaryFinder(grid)

    first = finder.boundary(1)
    grid.fill_room(Rect(5, 5, 1, 1), 1)

    assert finder.boundary(1) is first
    finder.clear()
    assert TilePos(5, 5) in finder.boundary(1)
