import pytest

from dungeon_config import FitterConfig, OverlapPolicy


@pytest.mark.parametrize(
    "name,expected",
    [
        ("uniform", FitterConfig.breadth_first(random_seed=3)),
        ("weighted", FitterConfig.astar(random_seed=3)),
    ],
)
def test_for_strategy_picks_the_matching_preset(name, expected):
    config = FitterConfig.for_strategy(name, random_seed=3)

    assert config == expected
    assert config.search_strategy == name


def test_for_strategy_unknown_name():
    with pytest.raises(ValueError):
        FitterConfig.for_strategy("dijkstra")


def test_overlap_policy_accepts_its_value():
    assert FitterConfig(overlap_policy="reject").overlap_policy is OverlapPolicy.REJECT


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_row_width": 0},
        {"room_margin": -1},
        {"uniform_search_margin": 0},
        {"stub_min_length": 3, "stub_max_length": 2},
        {"open_cell_cost": 0},
        {"room_adjacent_cost": 0.5, "open_cell_cost": 1.0},
        {"search_strategy": "depth-first"},
    ],
)
def test_invalid_values_raise(overrides):
    with pytest.raises(ValueError):
        FitterConfig(**overrides)
