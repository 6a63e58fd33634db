from __future__ import annotations

from fractions import Fraction
from typing import Dict

from ..core.definition import CalendarDefinition
from ..core.types import CalendarSpec, LeapRule, Month, Moon, Season


# ============================================================
# JULIAN-STYLE
# ============================================================

_JULIAN_MONTHS = (
    ("January", 31), ("February", 28), ("March", 31), ("April", 30),
    ("May", 31), ("June", 30), ("July", 31), ("August", 31),
    ("September", 30), ("October", 31), ("November", 30), ("December", 31),
)

# Mean synodic month.
SYNODIC_MONTH = Fraction(29530588, 1000000)

JULIAN = CalendarDefinition(
    name="julian",
    months=tuple(Month(n, l) for n, l in _JULIAN_MONTHS),
    weekday_names=("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    leap_rule=LeapRule(amount=1, month=2, every=4, start_year=1),
    start_offset=0,
    skip_year_zero=True,
    moons=(Moon("Moon", SYNODIC_MONTH, Fraction(0)),),
    seasons=(
        Season("Spring", 3, 1, 5, 31),
        Season("Summer", 6, 1, 8, 31),
        Season("Autumn", 9, 1, 11, 30),
        Season("Winter", 12, 1, 2, 29),
    ),
    era_suffix="AD",
)


# ============================================================
# HARPTOS (Forgotten Realms)
# ============================================================

# Twelve 30-day months and five intercalary festival days; Shieldmeet is the
# leap day attached to Midsummer every fourth year.
_HARPTOS_MONTHS = (
    ("Hammer", 30, False), ("Midwinter", 1, True), ("Alturiak", 30, False),
    ("Ches", 30, False), ("Tarsakh", 30, False), ("Greengrass", 1, True),
    ("Mirtul", 30, False), ("Kythorn", 30, False), ("Flamerule", 30, False),
    ("Midsummer", 1, True), ("Eleasis", 30, False), ("Eleint", 30, False),
    ("Highharvestide", 1, True), ("Marpenoth", 30, False), ("Uktar", 30, False),
    ("Feast of the Moon", 1, True), ("Nightal", 30, False),
)

HARPTOS = CalendarDefinition(
    name="harptos",
    months=tuple(Month(n, l, ic) for n, l, ic in _HARPTOS_MONTHS),
    weekday_names=tuple(f"{o} day" for o in (
        "First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh", "Eighth", "Ninth", "Tenth",
    )),
    leap_rule=LeapRule(amount=1, month=10, every=4, start_year=-1000),
    start_offset=0,
    skip_year_zero=False,
    moons=(Moon("Selune", Fraction(487, 16), Fraction(0)),),
    # Season month numbers count standard months only (intercalary festivals skipped).
    seasons=(
        Season("Winter", 11, 1, 2, 30),
        Season("Spring", 3, 1, 5, 30),
        Season("Summer", 6, 1, 8, 30),
        Season("Autumn", 9, 1, 10, 30),
    ),
    era_suffix="DR",
    year_names={1492: "Year of Three Ships Sailing"},
)


# ============================================================
# FIVEFOLD (compact fantasy calendar)
# ============================================================

FIVEFOLD = CalendarDefinition(
    name="fivefold",
    months=(
        Month("Thaw", 25), Month("Bloom", 25), Month("Blaze", 25),
        Month("Wane", 25), Month("Still", 25), Month("Hinge", 2, intercalary=True),
    ),
    weekday_names=("Rootday", "Stemday", "Leafday", "Flowerday", "Seedday"),
    leap_rule=LeapRule(amount=1, month=6, every=3, start_year=1),
    start_offset=2,
    skip_year_zero=True,
    moons=(
        Moon("Ash", Fraction(25, 1), Fraction(3, 1)),
        Moon("Ember", Fraction(31, 4), Fraction(0)),
    ),
    seasons=(
        Season("Growing", 1, 1, 3, 25),
        Season("Fading", 4, 1, 6, 2),
    ),
    era_suffix="AF",
)


ALL_SPECS: Dict[str, CalendarSpec] = {
    "julian": CalendarSpec(
        name="julian",
        description="Gregorian month lengths with a Julian 4-year leap day; no year zero.",
        definition=JULIAN,
    ),
    "harptos": CalendarSpec(
        name="harptos",
        description="Calendar of Harptos: 12x30 days, 5 festival days, Shieldmeet every 4 years.",
        definition=HARPTOS,
        meta={"standard_seasons": True},
    ),
    "fivefold": CalendarSpec(
        name="fivefold",
        description="127-day year, 5-day week starting on Leafday, two moons.",
        definition=FIVEFOLD,
    ),
}
