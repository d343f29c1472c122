import pytest

import benchmark_fitting
import main
from grid_export import load_grid_data


@pytest.mark.parametrize("strategy", ["uniform", "weighted"])
def test_main_prints_seed_summary_and_map(strategy, capsys):
    main.main(["--strategy", strategy, "--seed", "21", "--max-rooms", "5", "--graph"])

    out = capsys.readouterr().out
    assert "Using random seed 21" in out
    assert "Rooms: " in out
    assert "Room #" in out
    assert "Routing: {'corridors':" in out
    assert "Timings: placement" in out
    assert "#" in out


def test_main_same_seed_same_output(capsys):
    main.main(["--seed", "8", "--max-rooms", "4"])
    first = capsys.readouterr().out
    main.main(["--seed", "8", "--max-rooms", "4"])
    second = capsys.readouterr().out

    def without_timings(text):
        return [line for line in text.splitlines() if not line.startswith("Timings:")]

    assert without_timings(first) == without_timings(second)


def test_main_writes_json(tmp_path, capsys):
    path = tmp_path / "map.json"

    main.main(["--seed", "2", "--json", str(path)])

    loaded = load_grid_data(path)
    assert loaded.rect is not None
    assert loaded.cells
    assert loaded.rooms
    assert f"Saved JSON to {path}" in capsys.readouterr().out


def test_benchmark_runs_both_strategies():
    results = benchmark_fitting.run_benchmark(num_runs=2, seed=4, max_rooms=5)

    assert [result.strategy for result in results] == ["uniform", "weighted"] * 2
    assert results[0].seed == results[1].seed
    for result in results:
        assert result.routed_corridors <= result.routable_corridors
        assert 0.0 <= result.fill_fraction <= 1.0
        assert result.cell_components >= 1

    summary = benchmark_fitting.summarize(results)
    assert set(summary) == {"uniform", "weighted"}
    assert summary["uniform"]["runs"] == 2


@pytest.mark.parametrize("value,expected", [(2.5, "2.500s"), (0.0123, "12.3ms")])
def test_format_seconds(value, expected):
    assert benchmark_fitting.format_seconds(value) == expected
