# tests/test_recurrence.py

import dataclasses
import random
from fractions import Fraction

import pytest

from lorecal import CalendarDate, Daily, DateConverter, InvalidRecurrenceRule, Monthly, Moon, MoonBased, Yearly
from lorecal.engines.recurrence import (
    moon_step_days,
    next_occurrence,
    occurrences_in_range,
    rule_from_config,
    rule_to_config,
)

D = CalendarDate


def test_monthly_clamps_to_short_month(leap4):
    assert next_occurrence(D(1, 1, 31), Monthly(), D(1, 1, 31), leap4) == D(1, 2, 28)


def test_monthly_clamp_does_not_drift(leap4):
    occ = list(occurrences_in_range(D(1, 1, 31), Monthly(), D(1, 1, 1), D(1, 6, 30), leap4))
    assert occ == [D(1, 1, 31), D(1, 2, 28), D(1, 3, 31), D(1, 4, 30), D(1, 5, 31), D(1, 6, 30)]
    assert next_occurrence(D(1, 1, 31), Monthly(), D(1, 2, 28), leap4) == D(1, 3, 31)


def test_daily_interval(leap4):
    assert next_occurrence(D(1, 1, 1), Daily(interval=3), D(1, 1, 10), leap4) == D(1, 1, 13)
    assert next_occurrence(D(1, 1, 1), Daily(interval=3), D(1, 1, 12), leap4) == D(1, 1, 13)
    assert next_occurrence(D(1, 1, 1), Daily(interval=3), D(1, 1, 13), leap4) == D(1, 1, 16)


def test_base_after_query_date_is_first_occurrence(leap4):
    assert next_occurrence(D(3, 5, 5), Yearly(), D(1, 1, 1), leap4) == D(3, 5, 5)


def test_yearly_leap_day(leap4):
    base = D(4, 2, 29)
    assert next_occurrence(base, Yearly(), base, leap4) == D(5, 2, 28)
    assert next_occurrence(base, Yearly(), D(7, 12, 31), leap4) == D(8, 2, 29)


def test_yearly_skips_missing_year_zero(leap4_noyear0):
    assert next_occurrence(D(-2, 3, 1), Yearly(), D(-1, 3, 1), leap4_noyear0) == D(1, 3, 1)


def test_moon_based_steps_rounded_cycle(mooned):
    conv = DateConverter(mooned)
    assert moon_step_days(mooned) == 30
    nxt = next_occurrence(D(1, 1, 1), MoonBased(interval=2), D(1, 1, 1), mooned)
    assert conv.to_ordinal(nxt) == 60


def test_moon_step_rounds_half_up(plain):
    assert moon_step_days(dataclasses.replace(plain, moons=[Moon("m", Fraction(59, 2))])) == 30
    assert moon_step_days(dataclasses.replace(plain, moons=[Moon("m", Fraction(1, 3))])) == 1


def test_moon_based_needs_a_moon(leap4):
    with pytest.raises(InvalidRecurrenceRule):
        next_occurrence(D(1, 1, 1), MoonBased(), D(1, 1, 1), leap4)


def test_end_date_is_terminal(leap4):
    rule = Daily(end_date=D(1, 1, 5))
    assert next_occurrence(D(1, 1, 1), rule, D(1, 1, 3), leap4) == D(1, 1, 4)
    assert next_occurrence(D(1, 1, 1), rule, D(1, 1, 10), leap4) == D(1, 1, 5)


def test_end_date_before_base_rejected(leap4):
    with pytest.raises(InvalidRecurrenceRule):
        next_occurrence(D(2, 1, 1), Yearly(end_date=D(1, 1, 1)), D(2, 1, 1), leap4)


@pytest.mark.parametrize("interval", [0, -1, 1.5, True])
def test_bad_intervals_rejected(interval):
    with pytest.raises(InvalidRecurrenceRule):
        Daily(interval=interval)


def test_unknown_rule_type(leap4):
    with pytest.raises(TypeError):
        next_occurrence(D(1, 1, 1), object(), D(1, 1, 1), leap4)


def test_occurrences_bounded_and_ordered(leap4_noyear0):
    random.seed(5)
    conv = DateConverter(leap4_noyear0)
    rules = [Daily(interval=9), Monthly(interval=2), Yearly(), Daily(interval=1)]
    for _ in range(50):
        base = conv.from_ordinal(random.randint(-3000, 3000))
        lo = random.randint(-4000, 4000)
        hi = lo + random.randint(0, 1500)
        rule = random.choice(rules)
        occ = list(occurrences_in_range(base, rule, conv.from_ordinal(lo), conv.from_ordinal(hi),
                                        leap4_noyear0, max_count=40))
        ords = [conv.to_ordinal(d) for d in occ]
        assert len(occ) <= 40
        assert ords == sorted(set(ords))
        assert all(lo <= n <= hi and n >= conv.to_ordinal(base) for n in ords)


def test_range_start_is_inclusive(leap4):
    occ = list(occurrences_in_range(D(1, 1, 1), Daily(interval=5), D(1, 1, 6), D(1, 1, 20), leap4))
    assert occ == [D(1, 1, 6), D(1, 1, 11), D(1, 1, 16)]


def test_range_clipped_by_end_date(leap4):
    rule = Daily(interval=5, end_date=D(1, 1, 12))
    occ = list(occurrences_in_range(D(1, 1, 1), rule, D(1, 1, 1), D(1, 12, 31), leap4))
    assert occ == [D(1, 1, 1), D(1, 1, 6), D(1, 1, 11)]


def test_max_count(leap4):
    occ = occurrences_in_range(D(1, 1, 1), Daily(), D(1, 1, 1), D(99, 1, 1), leap4, max_count=10)
    assert len(list(occ)) == 10
    assert list(occurrences_in_range(D(1, 1, 1), Daily(), D(1, 1, 1), D(2, 1, 1), leap4, max_count=0)) == []
    with pytest.raises(ValueError):
        occurrences_in_range(D(1, 1, 1), Daily(), D(1, 1, 1), D(2, 1, 1), leap4, max_count=-1)


def test_occurrences_restartable(leap4):
    occ = occurrences_in_range(D(1, 1, 31), Monthly(), D(1, 1, 1), D(3, 1, 1), leap4)
    it = iter(occ)
    assert next(it) == D(1, 1, 31)
    first = list(occ)
    assert first == list(occ)
    assert first[0] == D(1, 1, 31)
    assert len(first) == 24


def test_empty_range(leap4):
    assert list(occurrences_in_range(D(5, 1, 1), Yearly(), D(1, 1, 1), D(4, 12, 31), leap4)) == []


def test_rule_from_config(leap4):
    assert rule_from_config({"type": "weekly", "interval": 2}, leap4) == Daily(interval=14)
    rule = rule_from_config({"type": "Monthly", "interval": 3, "endDate": "-5-02-01"})
    assert rule == Monthly(interval=3, end_date=D(-5, 2, 1))
    assert rule_from_config(rule_to_config(rule)) == rule
    assert rule_from_config({"type": "moon"}) == MoonBased()


@pytest.mark.parametrize("cfg", [
    {"type": "fortnightly"},
    {"type": "daily", "interval": 0},
    {"type": "daily", "interval": "2"},
    {"type": "weekly"},
])
def test_rule_from_config_rejects(cfg):
    with pytest.raises(InvalidRecurrenceRule):
        rule_from_config(cfg)
