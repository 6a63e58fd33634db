# tests/test_age.py

import random

import pytest

from lorecal import CalendarDate, CalendarDefinition, DateConverter, Month
from lorecal.engines.age import age_in_years, display_string, elapsed

D = CalendarDate


def test_leap_day_birthday(leap4):
    res = elapsed(D(4, 2, 29), D(8, 2, 29), leap4)
    assert (res.years, res.months, res.days) == (4, 0, 0)
    assert res.total_days == 4 * 365 + 1
    assert res.display_string == "4 years"


def test_age_across_leap_day(leap4):
    res = elapsed(D(1, 2, 28), D(5, 2, 28), leap4)
    assert (res.years, res.months, res.days) == (4, 0, 0)
    assert res.total_days == 4 * 365 + 1


def test_same_day():
    assert display_string(0, 0, 0) == "0 days"


def test_display_pluralisation():
    assert display_string(1, 2, 3) == "1 year, 2 months, 3 days"
    assert display_string(2, 1, 0) == "2 years, 1 month"
    assert display_string(0, 0, 1) == "1 day"


def test_borrow_uses_calendar_month_lengths():
    d = CalendarDefinition(months=[Month("Short", 10), Month("Long", 40), Month("Tail", 10)], weekday_names=["a"])
    res = elapsed(D(1, 1, 5), D(1, 2, 3), d)
    assert (res.years, res.months, res.days) == (0, 0, 8)
    assert res.total_days == 8

    res = elapsed(D(1, 2, 35), D(2, 1, 2), d)
    # 2..35 of Long -> 5 days, all of Tail -> 10 days, 2 days into Short
    assert res.total_days == 5 + 10 + 2
    assert (res.years, res.months) == (0, 0)


def test_months_borrow_a_year(leap4):
    res = elapsed(D(1, 11, 15), D(2, 2, 20), leap4)
    assert (res.years, res.months, res.days) == (0, 3, 5)


def test_reversed_is_negated(leap4):
    fwd = elapsed(D(1, 3, 10), D(3, 7, 4), leap4)
    back = elapsed(D(3, 7, 4), D(1, 3, 10), leap4)
    assert (back.years, back.months, back.days) == (-fwd.years, -fwd.months, -fwd.days)
    assert back.total_days == -fwd.total_days
    assert back.display_string == "-" + fwd.display_string


def test_total_days_matches_ordinals(leap4_noyear0):
    random.seed(11)
    conv = DateConverter(leap4_noyear0)
    for _ in range(500):
        a = conv.from_ordinal(random.randint(-5000, 5000))
        b = conv.from_ordinal(random.randint(-5000, 5000))
        res = elapsed(a, b, leap4_noyear0)
        assert res.total_days == conv.days_between(a, b)
        sign = 1 if res.total_days >= 0 else -1
        assert sign * res.months >= 0 and sign * res.days >= 0 and sign * res.years >= 0
        assert abs(res.months) < leap4_noyear0.month_count


def test_age_in_years(leap4):
    assert age_in_years(D(1, 6, 15), D(11, 6, 14), leap4) == 9
    assert age_in_years(D(1, 6, 15), D(11, 6, 15), leap4) == 10
    assert age_in_years(D(11, 6, 15), D(1, 6, 15), leap4) == -10


@pytest.mark.parametrize("start,end,expected", [
    # February is too short to cover the borrow, so January is borrowed as well
    (D(1, 1, 31), D(1, 3, 1), (0, 0, 29)),
    (D(1, 1, 15), D(1, 3, 1), (0, 1, 14)),
    (D(1, 1, 1), D(2, 1, 1), (1, 0, 0)),
    (D(0, 12, 31), D(1, 1, 1), (0, 0, 1)),
])
def test_known_spans(leap4, start, end, expected):
    res = elapsed(start, end, leap4)
    assert (res.years, res.months, res.days) == expected
