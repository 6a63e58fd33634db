"""
lorecal.engines.calendar
------------------------
The Orchestrator. Binds a CalendarDefinition to its DateConverter and exposes
the per-day view (weekday, season, moons, label) together with recurrence and
elapsed-time queries, all against that one calendar.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from ..core.dates import format_long
from ..core.definition import CalendarDefinition
from ..core.types import AgeResult, CalendarDate, DayInfo, Season
from . import age, moon, recurrence
from .converter import DateConverter


def season_for(date: CalendarDate, definition: CalendarDefinition, *, standard_only: bool = False) -> Optional[Season]:
    """
    First season whose (month, day) span contains the date. Spans with the
    start after the end wrap around the year end.

    With standard_only, season month numbers count standard months only
    (intercalary months skipped) and dates in intercalary months have no season.
    """
    month = date.month
    if standard_only:
        std = definition.standard_months()
        if month not in std:
            return None
        month = std.index(month) + 1
    p = (month, date.day)
    for s in definition.seasons:
        a, b = (s.start_month, s.start_day), (s.end_month, s.end_day)
        if a <= b:
            if a <= p <= b:
                return s
        elif p >= a or p <= b:
            return s
    return None


class CalendarEngine:
    """
    Translates calendar dates to ordinals and back, and answers day-level,
    recurrence and age questions for one calendar.
    """
    def __init__(self, definition: CalendarDefinition, *, standard_seasons: bool = False):
        self.definition = definition
        self.conv = DateConverter(definition)
        self.standard_seasons = standard_seasons

    # ---------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------

    def date(self, year: int, month: int, day: int) -> CalendarDate:
        return self.conv.make_date(year, month, day)

    def to_ordinal(self, date: CalendarDate) -> int:
        return self.conv.to_ordinal(date)

    def from_ordinal(self, ordinal: int) -> CalendarDate:
        return self.conv.from_ordinal(ordinal)

    def day_of_week(self, ordinal: int) -> int:
        return self.conv.day_of_week(ordinal)

    # ---------------------------------------------------------
    # Day view
    # ---------------------------------------------------------

    def day_info(self, date: CalendarDate, *, attributes: Sequence[str] = ()) -> DayInfo:
        d = self.definition
        n = self.conv.to_ordinal(date)
        wd = self.conv.day_of_week(n)
        info = DayInfo(
            date=date,
            ordinal=n,
            weekday=wd,
            weekday_name=d.weekday_names[wd],
            day_of_year=self.conv.day_of_year(date),
            is_leap_year=d.is_leap_year(date.year),
            season=season_for(date, d, standard_only=self.standard_seasons),
            moons=moon.moon_states(n, d),
            label=format_long(date, d),
        )
        if attributes:
            from ..attributes.registry import compute_attributes
            info = replace(info, attributes=compute_attributes(info, attributes, self))
        return info

    def month_grid(self, year: int, month: int) -> List[List[Optional[CalendarDate]]]:
        """Weeks of the month, one column per weekday; None pads the first and last week."""
        w = self.definition.week_length
        first = self.conv.month_start(year, month)
        dim = self.definition.days_in_month(month, year)

        cells: List[Optional[CalendarDate]] = [None] * self.conv.day_of_week(first)
        cells += [CalendarDate(year, month, day) for day in range(1, dim + 1)]
        cells += [None] * (-len(cells) % w)
        return [cells[i:i + w] for i in range(0, len(cells), w)]

    # ---------------------------------------------------------
    # Recurrence / age
    # ---------------------------------------------------------

    def next_occurrence(self, base: CalendarDate, rule: recurrence.RecurrenceRule, after: CalendarDate) -> CalendarDate:
        return recurrence.next_occurrence(base, rule, after, self.definition)

    def occurrences(
        self,
        base: CalendarDate,
        rule: recurrence.RecurrenceRule,
        range_start: CalendarDate,
        range_end: CalendarDate,
        max_count: int = 100,
    ) -> recurrence.Occurrences:
        return recurrence.occurrences_in_range(base, rule, range_start, range_end, self.definition, max_count)

    def elapsed(self, start: CalendarDate, end: CalendarDate) -> AgeResult:
        return age.elapsed(start, end, self.definition)

    # ---------------------------------------------------------
    # High-Level API Methods (Required by CLI / api.py)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        d = self.definition
        lr = d.leap_rule
        return {
            "name": d.name,
            "months": d.month_count,
            "intercalary_months": [m.name for m in d.months if m.intercalary],
            "week_length": d.week_length,
            "base_year_length": d.base_year_length,
            "leap_rule": None if lr is None else lr.__dict__,
            "skip_year_zero": d.skip_year_zero,
            "moons": [m.name for m in d.moons],
            "seasons": [s.name for s in d.seasons],
            "era_suffix": d.era_suffix,
        }
