import random

import pytest

from dungeon_generator import (
    CHAMBER_TABLE,
    PASSAGE_TABLE,
    DungeonGraphGenerator,
    PassageResult,
    lookup,
)
from dungeon_models import RoomShape


@pytest.mark.parametrize(
    "roll,expected",
    [
        (1, PassageResult.CONTINUE_STRAIGHT),
        (2, PassageResult.CONTINUE_STRAIGHT),
        (3, PassageResult.DOOR),
        (10, PassageResult.SIDE_PASSAGE),
        (17, PassageResult.STAIRS),
        (20, PassageResult.WANDERING_MONSTER),
    ],
)
def test_lookup_uses_inclusive_upper_bounds(roll, expected):
    assert lookup(PASSAGE_TABLE, roll) is expected


def test_lookup_rejects_roll_past_the_table():
    with pytest.raises(ValueError):
        lookup(CHAMBER_TABLE, 21)


def test_dead_end_roll_stops_at_the_starter(scripted_rng):
    dungeon = DungeonGraphGenerator(scripted_rng(ints=[18])).generate()

    assert [room.shape for room in dungeon.rooms] == [RoomShape.STARTER]
    assert len(dungeon.corridors) == 1
    corridor = dungeon.corridors[0]
    assert corridor.from_room is dungeon.rooms[0]
    assert corridor.to_room is None
    assert corridor.description == "Dead end here"


def test_chamber_roll_links_a_new_room(scripted_rng):
    # Passage -> chamber, chamber table -> 20' x 20', then a dead end.
    dungeon = DungeonGraphGenerator(scripted_rng(ints=[14, 1, 18])).generate()

    starter, chamber = dungeon.rooms
    assert chamber.shape is RoomShape.SQUARE
    assert chamber.dimensions == "20' x 20'"
    assert dungeon.corridors[0].from_room is starter
    assert dungeon.corridors[0].to_room is chamber
    assert dungeon.corridors[1].to_room is None


def test_trap_leaves_corridor_without_a_source(scripted_rng):
    dungeon = DungeonGraphGenerator(scripted_rng(ints=[19, 18])).generate()

    assert [room.shape for room in dungeon.rooms] == [RoomShape.STARTER, RoomShape.CORRIDOR_END]
    trap, resume, dead_end = dungeon.corridors
    assert trap.to_room is None
    assert resume.from_room is None
    assert resume.to_room is dungeon.rooms[1]
    assert dead_end.from_room is dungeon.rooms[1]


def test_room_count_stays_near_the_cap():
    for seed in range(40):
        dungeon = DungeonGraphGenerator(random.Random(seed), max_rooms=6).generate()
        # Stairs that end in a chamber add one room past the cap.
        assert 1 <= len(dungeon.rooms) <= 7


def test_same_seed_same_graph():
    def describe(seed):
        dungeon = DungeonGraphGenerator(random.Random(seed)).generate()
        return (
            [(room.shape, room.dimensions) for room in dungeon.rooms],
            [(c.length_feet, c.description) for c in dungeon.corridors],
        )

    assert describe(3) == describe(3)


def test_rejects_non_positive_cap():
    with pytest.raises(ValueError):
        DungeonGraphGenerator(max_rooms=0)
