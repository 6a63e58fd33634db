"""
lorecal.engines.age
-------------------
Elapsed time between two dates of one calendar, for birthdays and
"time since" displays. Month borrows use the calendar's own month lengths.
"""

from __future__ import annotations

from typing import List

from ..core.definition import CalendarDefinition
from ..core.types import AgeResult, CalendarDate
from .converter import DateConverter


def _unit(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def display_string(years: int, months: int, days: int) -> str:
    parts: List[str] = []
    if years:
        parts.append(_unit(years, "year"))
    if months:
        parts.append(_unit(months, "month"))
    if days:
        parts.append(_unit(days, "day"))
    return ", ".join(parts) if parts else "0 days"


def _decompose(conv: DateConverter, start: CalendarDate, end: CalendarDate):
    """Years/months/days from start to end, assuming start <= end."""
    d = conv.d
    years = conv.year_index(end.year) - conv.year_index(start.year)
    months = end.month - start.month
    days = end.day - start.day

    # Borrow the length of the month preceding end's month, walking further
    # back if a short month does not cover the deficit.
    borrow_from = conv.month_number(end) - 1
    while days < 0:
        months -= 1
        i, m0 = divmod(borrow_from, d.month_count)
        days += d.days_in_month(m0 + 1, conv.year_from_index(i))
        borrow_from -= 1

    while months < 0:
        years -= 1
        months += d.month_count
    return years, months, days


def elapsed(start: CalendarDate, end: CalendarDate, definition: CalendarDefinition) -> AgeResult:
    conv = DateConverter(definition)
    total = conv.to_ordinal(end) - conv.to_ordinal(start)
    if total >= 0:
        y, m, dd = _decompose(conv, start, end)
        return AgeResult(y, m, dd, total, display_string(y, m, dd))
    y, m, dd = _decompose(conv, end, start)
    return AgeResult(-y, -m, -dd, total, "-" + display_string(y, m, dd))


def age_in_years(birth: CalendarDate, on: CalendarDate, definition: CalendarDefinition) -> int:
    """Whole years completed by `on`; negative if `on` precedes the birth."""
    return elapsed(birth, on, definition).years
