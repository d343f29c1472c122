import pytest

from dungeon_geometry import NEIGHBOR_DIRECTIONS, Direction, Rect, TilePos, manhattan_distance


def test_neighbor_directions_are_unit_steps():
    assert [(d.dx, d.dy) for d in NEIGHBOR_DIRECTIONS] == [(1, 0), (-1, 0), (0, 1), (0, -1)]


def test_tile_pos_neighbors_are_orthogonal_and_ordered():
    neighbors = list(TilePos(3, 4).neighbors())

    assert neighbors == [TilePos(4, 4), TilePos(2, 4), TilePos(3, 5), TilePos(3, 3)]
    assert all(TilePos(3, 4).manhattan(n) == 1 for n in neighbors)


def test_tile_pos_step_and_distance():
    origin = TilePos(0, 0)

    assert origin.step(Direction.SOUTH, 3) == TilePos(0, 3)
    assert origin.manhattan(TilePos(-2, 5)) == 7
    assert manhattan_distance(origin, TilePos(-2, 5)) == pytest.approx(7.0)


@pytest.mark.parametrize(
    "point,expected",
    [
        (TilePos(2, 3), True),
        (TilePos(5, 7), True),
        (TilePos(6, 7), False),
        (TilePos(2, 8), False),
        (TilePos(1, 3), False),
    ],
)
def test_rect_contains_is_half_open(point, expected):
    assert Rect(2, 3, 4, 5).contains(point) is expected


def test_rect_expand_grows_bounds_evenly():
    rect = Rect(2, 3, 4, 5)

    expanded = rect.expand(2)

    assert expanded == Rect(0, 1, 8, 9)
    # expand returns a new rect.
    assert rect == Rect(2, 3, 4, 5)


def test_rect_spanning_is_inclusive():
    rect = Rect.spanning(TilePos(5, -1), TilePos(2, 3))

    assert rect == Rect(2, -1, 4, 5)
    assert rect.contains(TilePos(5, 3))
    assert not rect.contains(TilePos(6, 3))
    assert Rect.spanning() == Rect.empty()


def test_rect_tiles_cover_area_in_row_major_order():
    tiles = list(Rect(1, 1, 2, 2).tiles())

    assert tiles == [TilePos(1, 1), TilePos(2, 1), TilePos(1, 2), TilePos(2, 2)]
    assert Rect.empty().is_empty()
