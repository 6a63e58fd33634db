# tests/test_config.py

import json
from fractions import Fraction

import pytest

from lorecal import (
    CalendarDate,
    DateConverter,
    InvalidDefinition,
    definition_from_config,
    definition_to_config,
    validate_definition,
)
from lorecal.core.config import definition_from_json

WEB_FORM = {
    "name": "Aerth Reckoning",
    "months": [
        {"name": "Frostfall", "length": 30},
        {"name": "Thawing", "length": 29},
        {"name": "Yule", "length": 5, "isIntercalary": True},
    ],
    "weekdays": ["Sol", "Lun", "Mar", "Mer", "Jov", "Ven"],
    "hasLeapYear": True,
    "leapYearAmount": 1,
    "leapYearMonth": 3,
    "leapYearOffset": 4,
    "leapYearStart": 1,
    "startOffset": 3,
    "moons": [{"name": "Pale", "cycleLengthDays": 27.3, "phaseShift": 2}],
    "seasons": [{"name": "Cold", "monthStart": 1, "monthEnd": 2}],
    "years": {"1203": "Year of Ash"},
    "suffix": "AR",
}


def test_web_form_builds_definition():
    d = definition_from_config(WEB_FORM)
    assert d.name == "Aerth Reckoning"
    assert d.month_count == 3
    assert d.months[2].intercalary
    assert d.week_length == 6
    assert d.leap_rule.every == 4 and d.leap_rule.month == 3
    assert [y for y in range(1, 13) if d.is_leap_year(y)] == [1, 5, 9]
    assert d.days_in_month(3, 9) == 6
    assert d.days_in_month(3, 8) == 5
    assert d.start_offset == 3
    assert d.moons[0].cycle == Fraction(273, 10)
    assert d.moons[0].shift == 2
    # endDay defaults to the end month's length
    assert d.seasons[0].end_day == 29
    assert d.year_label(1203) == "Year of Ash"
    assert DateConverter(d).day_of_week(0) == 3


def test_snake_case_and_structured_leap_rule():
    d = definition_from_config({
        "months": [{"name": "One", "length": 10}, {"name": "Two", "length": 12}],
        "weekday_names": ["a", "b", "c"],
        "leap_rule": {"amount": 2, "month": 1, "every": 3, "start_year": -9, "offset_years": 1},
        "skip_year_zero": True,
    })
    assert d.skip_year_zero
    assert d.is_leap_year(-8)
    assert d.year_length(-8) == 24


def test_valid_config_has_no_errors():
    assert validate_definition(WEB_FORM) == []


def test_every_bad_field_reported():
    cfg = {
        "months": [{"name": "A", "length": 0}, {"name": "B", "length": "thirty"}],
        "weekdays": [],
        "moons": [{"name": "M", "cycle": -2}],
        "startOffset": 1.5,
    }
    fields = {e.field for e in validate_definition(cfg)}
    assert fields == {"months[0].length", "months[1].length", "weekdays", "moons[0].cycle", "startOffset"}


def test_structural_errors_from_definition():
    cfg = dict(WEB_FORM, leapYearMonth=9)
    errors = validate_definition(cfg)
    assert [e.field for e in errors] == ["leap_rule.month"]


def test_leap_interval_must_be_positive():
    errors = validate_definition(dict(WEB_FORM, leapYearOffset=-4))
    assert [e.field for e in errors] == ["leap_rule.every"]
    errors = validate_definition({"months": [{"length": 3}], "weekdays": ["a"], "leapRule": {"month": 1, "every": 0}})
    assert [e.field for e in errors] == ["leapRule.every"]


def test_from_config_raises_with_all_errors():
    with pytest.raises(InvalidDefinition) as ei:
        definition_from_config({"months": [], "weekdays": []})
    assert len(ei.value.errors) == 2
    assert "months" in str(ei.value)


def test_to_config_roundtrip():
    d = definition_from_config(WEB_FORM)
    cfg = definition_to_config(d)
    json.dumps(cfg)
    assert definition_from_config(cfg) == d


def test_from_json(tmp_path):
    path = tmp_path / "aerth.json"
    path.write_text(json.dumps(WEB_FORM), encoding="utf-8")
    d = definition_from_json(path)
    assert DateConverter(d).from_ordinal(30) == CalendarDate(1, 2, 1)


def test_web_form_leap_years_count_from_start_year():
    cfg = dict(WEB_FORM, leapYearMonth=2, leapYearOffset=4, leapYearStart=3)
    d = definition_from_config(cfg)
    assert [y for y in range(-8, 16) if d.is_leap_year(y)] == [3, 7, 11, 15]
    assert d.days_in_month(2, 7) == 30


@pytest.mark.parametrize("missing", [
    {"leapYearStart": None},
    {"leapYearStart": 0},
    {"leapYearOffset": 0},
    {"hasLeapYear": False},
])
def test_web_form_without_interval_or_start_has_no_leap_years(missing):
    d = definition_from_config(dict(WEB_FORM, **missing))
    assert d.leap_rule is None
    assert not any(d.is_leap_year(y) for y in range(-20, 20))


@pytest.mark.parametrize("override,field", [
    ({"moons": [5]}, "moons[0]"),
    ({"moons": ["Pale"]}, "moons[0]"),
    ({"seasons": ["winter"]}, "seasons[0]"),
    ({"months": [{"name": "A", "length": 30}, "B"]}, "months[1]"),
    ({"years": ["Year of Ash"]}, "years"),
    ({"monthAliases": "Deepwinter"}, "monthAliases"),
    ({"leapRule": 4}, "leapRule"),
    ({"weekdays": ["Sol", "  "]}, "weekdays[1]"),
])
def test_malformed_entries_become_field_errors(override, field):
    errors = validate_definition(dict(WEB_FORM, **override))
    assert [e.field for e in errors] == [field]
    with pytest.raises(InvalidDefinition):
        definition_from_config(dict(WEB_FORM, **override))


@pytest.mark.parametrize("cfg", [None, 5, "calendar", ["months"]])
def test_non_mapping_config(cfg):
    assert [e.field for e in validate_definition(cfg)] == ["config"]


def test_web_form_without_start_key_has_no_leap_years():
    cfg = {k: v for k, v in WEB_FORM.items() if k != "leapYearStart"}
    assert definition_from_config(cfg).leap_rule is None
