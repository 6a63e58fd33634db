"""
lorecal.engines.converter
-------------------------
Bijection between structured calendar dates (year, month, day) and a signed
day ordinal.

Epoch convention:
    ordinal 0 = year 1, month 1, day 1.
Years before year 1 occupy negative ordinals. When the calendar keeps year 0
it is the year immediately preceding year 1; when `skip_year_zero` is set the
year sequence runs ..., -2, -1, 1, 2, ...

Internally years are addressed by a contiguous "year index" (0 for year 1,
-1 for the year before it) so that whole-year arithmetic never has to care
whether year 0 exists.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Iterator, List

from ..core.definition import CalendarDefinition
from ..core.errors import InvalidDate
from ..core.types import CalendarDate


class DateConverter:
    """
    Date <-> ordinal arithmetic for one CalendarDefinition.
    Leap days are counted in closed form, so converting a date costs O(months)
    regardless of how far it lies from the epoch.
    """
    def __init__(self, definition: CalendarDefinition):
        self.d = definition

        # Cumulative base month lengths: _prefix[m-1] = days before month m (non-leap year)
        self._prefix: List[int] = [0]
        for m in definition.months:
            self._prefix.append(self._prefix[-1] + m.length)

        lr = definition.leap_rule
        if lr is None:
            self._mean_year = Fraction(definition.base_year_length)
            self._anchor_index = 0
        else:
            self._mean_year = Fraction(definition.base_year_length) + Fraction(lr.amount, lr.every)
            # Estimates are measured from the first year the leap rule applies to.
            self._anchor_index = self.year_index(lr.start_year)
        self._anchor_ordinal = self._days_before_index(self._anchor_index)

    # ---------------------------------------------------------
    # Year index helpers
    # ---------------------------------------------------------

    def year_index(self, year: int) -> int:
        """Contiguous index of a year: 0 for year 1, -1 for the year before it."""
        if self.d.skip_year_zero and year < 0:
            return year
        return year - 1

    def year_from_index(self, i: int) -> int:
        if i < 0 and self.d.skip_year_zero:
            return i
        return i + 1

    def year_exists(self, year: int) -> bool:
        return not (self.d.skip_year_zero and year == 0)

    def _leap_years_between(self, lo: int, hi: int) -> int:
        """Number of existing leap years y with lo <= y < hi."""
        lr = self.d.leap_rule
        if lr is None:
            return 0
        a = max(lo, lr.start_year)
        if hi <= a:
            return 0
        off = lr.offset_years
        count = (hi - 1 - off) // lr.every - (a - 1 - off) // lr.every
        if self.d.skip_year_zero and lo <= 0 < hi and self.d.is_leap_year(0):
            count -= 1
        return count

    def _days_before_index(self, i: int) -> int:
        """Signed ordinal of the first day of the year with index i."""
        base = self.d.base_year_length
        amount = self.d.leap_rule.amount if self.d.leap_rule is not None else 0
        year = self.year_from_index(i)
        if i >= 0:
            return i * base + amount * self._leap_years_between(1, year)
        # Years with index i..-1 lie before the epoch; the range [year, 1) holds
        # exactly -i existing years because year 0 is excluded when skipped.
        return -(-i * base + amount * self._leap_years_between(year, 1))

    def days_before_year(self, year: int) -> int:
        return self._days_before_index(self.year_index(year))

    # ---------------------------------------------------------
    # Validation
    # ---------------------------------------------------------

    def validate(self, date: CalendarDate) -> CalendarDate:
        if not self.year_exists(date.year):
            raise InvalidDate(f"Year 0 does not exist in calendar {self.d.name!r}")
        if not (1 <= date.month <= self.d.month_count):
            raise InvalidDate(f"Month {date.month} outside 1..{self.d.month_count} ({date})")
        dim = self.d.days_in_month(date.month, date.year)
        if not (1 <= date.day <= dim):
            raise InvalidDate(f"Day {date.day} outside 1..{dim} for month {date.month} of year {date.year}")
        return date

    def make_date(self, year: int, month: int, day: int) -> CalendarDate:
        return self.validate(CalendarDate(int(year), int(month), int(day)))

    # ---------------------------------------------------------
    # Forward: date -> ordinal
    # ---------------------------------------------------------

    def days_before_month(self, month: int, year: int) -> int:
        n = self._prefix[month - 1]
        lr = self.d.leap_rule
        if lr is not None and lr.month < month and self.d.is_leap_year(year):
            n += lr.amount
        return n

    def to_ordinal(self, date: CalendarDate) -> int:
        self.validate(date)
        return self.days_before_year(date.year) + self.days_before_month(date.month, date.year) + date.day - 1

    # ---------------------------------------------------------
    # Inverse: ordinal -> date
    # ---------------------------------------------------------

    def index_of_ordinal(self, ordinal: int) -> int:
        """Year index of the year containing the ordinal."""
        # Estimate from the mean year length, then correct locally. Years before
        # the leap rule starts all have the base length.
        rest = ordinal - self._anchor_ordinal
        mean = self._mean_year if rest >= 0 else Fraction(self.d.base_year_length)
        i = self._anchor_index + math.floor(Fraction(rest) / mean)
        while self._days_before_index(i) > ordinal:
            i -= 1
        while self._days_before_index(i + 1) <= ordinal:
            i += 1
        return i

    def from_ordinal(self, ordinal: int) -> CalendarDate:
        i = self.index_of_ordinal(ordinal)
        year = self.year_from_index(i)
        rest = ordinal - self._days_before_index(i)
        for month in range(1, self.d.month_count + 1):
            dim = self.d.days_in_month(month, year)
            if rest < dim:
                return CalendarDate(year, month, rest + 1)
            rest -= dim
        raise AssertionError(f"ordinal {ordinal} fell outside year {year}")

    # ---------------------------------------------------------
    # Weekdays and day arithmetic
    # ---------------------------------------------------------

    def day_of_week(self, ordinal: int) -> int:
        """0-based index into weekday_names; Python's % keeps it non-negative."""
        return (ordinal + self.d.start_offset) % self.d.week_length

    def weekday_of(self, date: CalendarDate) -> int:
        return self.day_of_week(self.to_ordinal(date))

    def weekday_name(self, date: CalendarDate) -> str:
        return self.d.weekday_names[self.weekday_of(date)]

    def day_of_year(self, date: CalendarDate) -> int:
        """1-based position of the date within its year."""
        self.validate(date)
        return self.days_before_month(date.month, date.year) + date.day

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        return self.from_ordinal(self.to_ordinal(date) + days)

    def days_between(self, start: CalendarDate, end: CalendarDate) -> int:
        """Signed: positive when end is after start."""
        return self.to_ordinal(end) - self.to_ordinal(start)

    def iter_days(self, start: CalendarDate, end: CalendarDate) -> Iterator[CalendarDate]:
        """Every date from start to end inclusive (empty if end < start)."""
        for n in range(self.to_ordinal(start), self.to_ordinal(end) + 1):
            yield self.from_ordinal(n)

    # ---------------------------------------------------------
    # Month and year arithmetic
    # ---------------------------------------------------------

    def month_number(self, date: CalendarDate) -> int:
        """Linear month count since the epoch: 0 for month 1 of year 1."""
        return self.year_index(date.year) * self.d.month_count + date.month - 1

    def date_from_month_number(self, n: int, day: int, *, clamp: bool = True) -> CalendarDate:
        i, m0 = divmod(n, self.d.month_count)
        year = self.year_from_index(i)
        dim = self.d.days_in_month(m0 + 1, year)
        if day > dim:
            if not clamp:
                raise InvalidDate(f"Day {day} outside 1..{dim} for month {m0 + 1} of year {year}")
            day = dim
        return CalendarDate(year, m0 + 1, day)

    def add_months(self, date: CalendarDate, months: int, *, clamp: bool = True) -> CalendarDate:
        self.validate(date)
        return self.date_from_month_number(self.month_number(date) + months, date.day, clamp=clamp)

    def add_years(self, date: CalendarDate, years: int, *, clamp: bool = True) -> CalendarDate:
        self.validate(date)
        i = self.year_index(date.year) + years
        n = i * self.d.month_count + date.month - 1
        return self.date_from_month_number(n, date.day, clamp=clamp)

    def month_start(self, year: int, month: int) -> int:
        """Ordinal of day 1 of the given month."""
        return self.to_ordinal(CalendarDate(year, month, 1))
