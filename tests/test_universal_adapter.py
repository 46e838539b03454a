"""Tests for the CSV batch adapter.

Covers output formats, people-column resolution from the header, blank
cells as empty queues, the people echo, and the UNSOLVED error policy.
"""

import csv

import pytest

from batch.format_registry import DEFAULT, FormatConfig, get_config, list_formats
from batch.universal_adapter import (
    UNSOLVED,
    build_submission,
    parse_people,
    people_column,
    render_queue,
)
from solve_module import UnsatisfiableInput, solve


def _write_puzzles(path, rows, fieldnames=("id", "people")):
    with open(path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(fieldnames))
        w.writeheader()
        for row in rows:
            w.writerow(row)


def _read(path):
    with open(path, newline="") as f:
        return list(csv.reader(f))


ROWS = [
    {"id": "a", "people": "[[7,0],[4,4],[7,1],[5,0],[6,1],[5,2]]"},
    {"id": "b", "people": "[[5,0]]"},
    {"id": "c", "people": "[]"},
]


def test_registry_lookup_and_fallback():
    assert get_config("queue-pairs").pair_joiner == " "
    assert get_config("no-such-format") is DEFAULT
    assert list_formats() == ["echo-people", "queue-json", "queue-pairs"]


def test_format_config_aliases_and_unknown_options():
    cfg = FormatConfig(slug="x", id_col="puzzle_id", joiner=";")
    assert cfg.puzzles_id_field == "puzzle_id"
    assert cfg.pair_joiner == ";"
    assert cfg.submission_headers == ["id", "queue"]
    with pytest.raises(TypeError):
        FormatConfig(slug="x", colour="red")


def test_render_queue():
    queue = [[5, 0], [7, 0]]
    assert render_queue(queue, get_config("queue-json")) == "[[5,0],[7,0]]"
    assert render_queue(queue, get_config("queue-pairs")) == "5:0 7:0"
    assert render_queue([], get_config("queue-pairs")) == ""


@pytest.mark.parametrize("text", ["", "   ", "[]"])
def test_parse_people_blank_is_empty(text):
    assert parse_people(text) == []


def test_parse_people_rejects_non_list():
    with pytest.raises(ValueError):
        parse_people('{"a": 1}')
    with pytest.raises(ValueError):
        parse_people("not json")


def test_people_column_resolution(monkeypatch):
    monkeypatch.delenv("PEOPLE_COL", raising=False)
    assert people_column(["id", "input", "pairs"]) == "pairs"
    assert people_column(["id", "line"], override="line") == "line"

    monkeypatch.setenv("PEOPLE_COL", "line")
    assert people_column(["id", "line", "people"]) == "line"
    with pytest.raises(KeyError, match="'line' not found"):
        people_column(["id", "people"])


def test_people_column_missing(monkeypatch):
    monkeypatch.delenv("PEOPLE_COL", raising=False)
    with pytest.raises(KeyError, match="Could not infer people column"):
        people_column(["id", "line"])


def test_build_submission_json(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "out" / "answers.csv"
    _write_puzzles(puzzles, ROWS)

    n = build_submission(str(puzzles), str(out), "queue-json", solve)

    assert n == 3
    rows = _read(out)
    assert rows[0] == ["id", "queue"]
    assert rows[1] == ["a", "[[5,0],[7,0],[5,2],[6,1],[4,4],[7,1]]"]
    assert rows[2] == ["b", "[[5,0]]"]
    assert rows[3] == ["c", "[]"]


def test_blank_cell_is_a_zero_person_puzzle(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "answers.csv"
    _write_puzzles(puzzles, [{"id": "a", "people": "[[5,0]]"}, {"id": "b", "people": ""}])

    build_submission(str(puzzles), str(out), "queue-json", solve, on_error="unsolved")

    assert _read(out)[1:] == [["a", "[[5,0]]"], ["b", "[]"]]


def test_build_submission_pairs(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "answers.csv"
    _write_puzzles(puzzles, ROWS[:1])

    build_submission(str(puzzles), str(out), "queue-pairs", solve)

    assert _read(out)[1] == ["a", "5:0 7:0 5:2 6:1 4:4 7:1"]


@pytest.mark.parametrize("column", ["people", "pairs", "input"])
def test_echo_people_uses_the_resolved_column(tmp_path, monkeypatch, column):
    monkeypatch.delenv("PEOPLE_COL", raising=False)
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "answers.csv"
    _write_puzzles(puzzles, [{"id": "b", column: "[[7, 0], [5, 0]]"}], fieldnames=("id", column))

    build_submission(str(puzzles), str(out), "echo-people", solve)

    assert _read(out) == [["id", "people", "queue"], ["b", "[[7,0],[5,0]]", "[[5,0],[7,0]]"]]


def test_echo_people_with_explicit_column(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "answers.csv"
    _write_puzzles(puzzles, [{"id": "b", "line": "[[6,0]]"}], fieldnames=("id", "line"))

    build_submission(str(puzzles), str(out), "echo-people", solve, people_col="line")

    assert _read(out)[1] == ["b", "[[6,0]]", "[[6,0]]"]


def test_solver_result_shapes(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "answers.csv"
    _write_puzzles(puzzles, ROWS)

    results = iter([{"queue": [[1, 0]]}, UNSOLVED])

    n = build_submission(str(puzzles), str(out), "queue-json", lambda people: next(results), max_rows=2)

    assert n == 2
    assert [r[1] for r in _read(out)[1:]] == ["[[1,0]]", UNSOLVED]


def test_errors_propagate_by_default(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    _write_puzzles(puzzles, [{"id": "x", "people": "[[5,1]]"}])

    with pytest.raises(UnsatisfiableInput):
        build_submission(str(puzzles), str(tmp_path / "out.csv"), "queue-json", solve)


def test_unsolved_policy_keeps_going(tmp_path, capsys):
    puzzles = tmp_path / "puzzles.csv"
    out = tmp_path / "answers.csv"
    _write_puzzles(
        puzzles,
        [
            {"id": "bad", "people": "[[5,1]]"},
            {"id": "junk", "people": "not json"},
            {"id": "ok", "people": "[[5,0]]"},
        ],
    )

    build_submission(str(puzzles), str(out), "echo-people", solve, on_error="unsolved")

    assert _read(out)[1:] == [
        ["bad", "[[5,1]]", UNSOLVED],
        ["junk", "not json", UNSOLVED],
        ["ok", "[[5,0]]", "[[5,0]]"],
    ]
    err = capsys.readouterr().err
    assert "[!] row 'bad'" in err
    assert "[!] row 'junk'" in err


def test_build_submission_missing_id_column(tmp_path):
    puzzles = tmp_path / "puzzles.csv"
    _write_puzzles(puzzles, [{"key": "a", "people": "[]"}], fieldnames=("key", "people"))

    with pytest.raises(ValueError, match="'id' column not found"):
        build_submission(str(puzzles), str(tmp_path / "out.csv"), "queue-json", solve)


def test_progress_goes_to_stderr(tmp_path, capsys):
    puzzles = tmp_path / "puzzles.csv"
    _write_puzzles(puzzles, ROWS)

    build_submission(str(puzzles), str(tmp_path / "out.csv"), "queue-json", solve, progress=True)

    captured = capsys.readouterr()
    assert "3/3 rows" in captured.err
    assert captured.out == ""
