# tests/conftest.py

import dataclasses

import pytest

from lorecal import CalendarDefinition, LeapRule, Month, Moon

GREGORIAN_LENGTHS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
WEEK7 = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def gregorian_months():
    return [Month(f"M{i + 1}", n) for i, n in enumerate(GREGORIAN_LENGTHS)]


@pytest.fixture
def plain():
    """12 Gregorian-length months, 7-day week, no leap years, year 0 kept."""
    return CalendarDefinition(months=gregorian_months(), weekday_names=WEEK7, name="plain")


@pytest.fixture
def leap4(plain):
    """As `plain`, plus one extra day in month 2 every 4 years from year 1."""
    return dataclasses.replace(plain, name="leap4", leap_rule=LeapRule(amount=1, month=2, every=4, start_year=1))


@pytest.fixture
def leap4_noyear0(leap4):
    """Proleptic leap rule running back into negative years, with no year 0."""
    return dataclasses.replace(
        leap4,
        name="leap4-noyear0",
        leap_rule=LeapRule(amount=1, month=2, every=4, start_year=-100),
        skip_year_zero=True,
    )


@pytest.fixture
def mooned(leap4):
    return dataclasses.replace(leap4, name="mooned", moons=[Moon("Luna", 29.53)])
