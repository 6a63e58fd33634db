# tests/test_cli.py

import json

import pytest

from lorecal.cli import main


def run(capsys, *argv):
    rc = main(list(argv))
    out, err = capsys.readouterr()
    return rc, out, err


def test_presets(capsys):
    rc, out, _ = run(capsys, "presets")
    assert rc == 0
    assert [line.split()[0] for line in out.splitlines()] == ["fivefold", "harptos", "julian"]


def test_ordinal_and_date(capsys):
    assert run(capsys, "ordinal", "1-03-01")[1].strip() == "59"
    assert run(capsys, "date", "59")[1].strip() == "1-03-01"
    assert run(capsys, "date", "-1")[1].strip() == "-1-12-31"
    assert run(capsys, "date", "-1", "--calendar", "harptos")[1].strip() == "0-17-30"


def test_day_shorthand(capsys):
    rc, out, _ = run(capsys, "1-03-01")
    assert rc == 0
    assert out.splitlines()[0] == "Thursday, 1 March, 1 AD"
    assert "ordinal      = 59" in out
    assert "season       = Spring" in out


def test_day_negative_year(capsys):
    rc, out, _ = run(capsys, "day", "-5-01-01", "--attr", "week_of_year")
    assert rc == 0
    assert "1 January, -5 AD" in out
    assert "week_of_year" in out


def test_next_and_occurrences(capsys):
    assert run(capsys, "next", "1-01-31", "1-01-31", "--rule", "monthly")[1].strip() == "1-02-28"
    assert run(capsys, "next", "1-01-01", "1-01-01", "--rule", "weekly")[1].strip() == "1-01-08"
    _, out, _ = run(capsys, "occurrences", "1-01-31", "1-01-01", "1-04-30")
    assert out.split() == ["1-01-31", "1-02-28", "1-03-31", "1-04-30"]
    _, out, _ = run(capsys, "occurrences", "1-01-01", "1-01-01", "9-01-01", "--rule", "daily", "--max", "3")
    assert len(out.split()) == 3


def test_age(capsys):
    _, out, _ = run(capsys, "age", "1-02-28", "5-02-28")
    assert out.strip() == "4 years  (total 1461 days)"


def test_config_file(capsys, tmp_path):
    cfg = {"name": "tiny", "months": [{"name": "A", "length": 30}, {"name": "B", "length": 30}], "weekdays": ["x", "y"]}
    path = tmp_path / "tiny.json"
    path.write_text(json.dumps(cfg), encoding="utf-8")
    assert run(capsys, "ordinal", "2-01-01", "--config", str(path))[1].strip() == "60"


def test_errors_exit_2(capsys):
    rc, _, err = run(capsys, "ordinal", "1-02-30")
    assert rc == 2
    assert err.startswith("lorecal: error:")
    rc, _, err = run(capsys, "ordinal", "1-01-01", "--calendar", "nope")
    assert rc == 2
    assert "nope" in err


def test_month_grid(capsys):
    rc, out, _ = run(capsys, "month", "1", "2")
    assert rc == 0
    assert out.splitlines()[0] == "julian  February 1 AD"
    assert "Monday" in out.splitlines()[1]


def test_diag_round_trip(capsys):
    rc, out, _ = run(capsys, "diag", "round-trip", "--N=200", "--lo=-20000", "--hi=20000")
    assert rc == 0
    assert "All round-trip tests passed." in out


def test_diag_year_table(capsys):
    rc, out, _ = run(capsys, "diag", "year-table", "--from-year=-2", "--to-year=4")
    assert rc == 0
    years = [line.split()[0] for line in out.splitlines()[2:]]
    assert years == ["-2", "-1", "1", "2", "3", "4"]


def test_diag_moon_drift(capsys):
    pytest.importorskip("numpy")
    rc, out, _ = run(capsys, "diag", "moon-drift", "--cycles=40", "--every=10")
    assert rc == 0
    assert "stepped as 30 days" in out
    assert "after 8 steps" in out


def test_bad_config_file_exit_2(capsys, tmp_path):
    rc, _, err = run(capsys, "ordinal", "1-01-01", "--config", str(tmp_path / "missing.json"))
    assert rc == 2
    assert err.startswith("lorecal: error:")

    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    rc, _, err = run(capsys, "ordinal", "1-01-01", "--config", str(path))
    assert rc == 2
    assert err.startswith("lorecal: error:")

    path.write_text(json.dumps({"months": [], "weekdays": ["x"]}), encoding="utf-8")
    rc, _, err = run(capsys, "ordinal", "1-01-01", "--config", str(path))
    assert rc == 2
    assert "months" in err
