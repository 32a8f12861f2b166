"""Console rendering of result documents."""

import json

import pytest

from evolution_service.services.report_printer import print_results, to_dataframe, to_json, to_table


EVOLUTIONS = [
    {"name": "Bulbasaur", "next_evolutions": [
        {"name": "Ivysaur", "num": "002", "spawn_time": "04:00"},
        {"name": "Venusaur", "num": "003", "spawn_time": "11:30"},
    ]},
    {"name": "Ivysaur", "next_evolutions": [
        {"name": "Venusaur", "num": "003", "spawn_time": "11:30"},
    ]},
]


def test_json_round_trips_documents():
    assert json.loads(to_json(EVOLUTIONS)) == EVOLUTIONS


def test_dataframe_one_row_per_evolution():
    df = to_dataframe(EVOLUTIONS)

    assert len(df) == 3
    assert list(df.columns) == ["name", "evolution.name", "evolution.num", "evolution.spawn_time"]
    assert list(df["name"]) == ["Bulbasaur", "Bulbasaur", "Ivysaur"]


def test_dataframe_flat_documents():
    df = to_dataframe([{"name": "Pidgey", "num": "016"}])

    assert list(df.columns) == ["name", "num"]


def test_empty_results():
    assert to_json([]) == "[]"
    assert to_table([]) == "(no results)"


def test_print_results_header_and_count(capsys):
    print_results("Pokemon with 1 or more evolutions", EVOLUTIONS, "table")

    out = capsys.readouterr().out
    assert "Pokemon with 1 or more evolutions" in out
    assert "2 result(s)" in out
    assert "Venusaur" in out


def test_print_results_unknown_format():
    with pytest.raises(ValueError):
        print_results("x", [], "yaml")
