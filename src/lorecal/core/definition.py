"""
lorecal.core.definition
-----------------------
The immutable shape of a campaign calendar: months, weekdays, leap rule, moons,
seasons and display labels. Holds no behaviour beyond derived constants; all
date arithmetic lives in lorecal.engines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .errors import FieldError, InvalidDefinition
from .types import LeapRule, Month, Moon, Season

logger = logging.getLogger(__name__)

LabelsT = Union[Mapping[int, str], Tuple[Tuple[int, str], ...]]


def _label_pairs(labels: LabelsT) -> Tuple[Tuple[int, str], ...]:
    items = labels.items() if isinstance(labels, Mapping) else labels
    return tuple(sorted((int(k), str(v)) for k, v in items))


@dataclass(frozen=True)
class CalendarDefinition:
    months: Tuple[Month, ...]
    weekday_names: Tuple[str, ...]
    leap_rule: Optional[LeapRule] = None
    start_offset: int = 0
    skip_year_zero: bool = False
    moons: Tuple[Moon, ...] = ()
    seasons: Tuple[Season, ...] = ()
    era_suffix: str = ""
    name: str = ""
    year_names: Tuple[Tuple[int, str], ...] = ()
    month_aliases: Tuple[Tuple[int, str], ...] = ()

    def __post_init__(self) -> None:
        # Accept lists and mappings from callers, store tuples so the value stays hashable.
        object.__setattr__(self, "months", tuple(self.months))
        object.__setattr__(self, "weekday_names", tuple(self.weekday_names))
        object.__setattr__(self, "moons", tuple(self.moons))
        object.__setattr__(self, "seasons", tuple(self.seasons))
        object.__setattr__(self, "year_names", _label_pairs(self.year_names))
        object.__setattr__(self, "month_aliases", _label_pairs(self.month_aliases))

        errors = self.problems()
        if errors:
            raise InvalidDefinition(errors)
        for a, b in self.season_overlaps():
            logger.warning("Calendar %r: seasons %r and %r overlap", self.name, a.name, b.name)

    # ---------------------------------------------------------
    # Validation
    # ---------------------------------------------------------

    def problems(self) -> List[FieldError]:
        errors: List[FieldError] = []
        if not self.months:
            errors.append(FieldError("months", "at least one month is required"))
        for i, m in enumerate(self.months):
            if m.length <= 0:
                errors.append(FieldError(f"months[{i}].length", f"month {m.name!r} must have at least 1 day"))
        if not self.weekday_names:
            errors.append(FieldError("weekday_names", "at least one weekday is required"))

        n = len(self.months)
        lr = self.leap_rule
        if lr is not None:
            if lr.every <= 0:
                errors.append(FieldError("leap_rule.every", "must be a positive number of years"))
            if not (1 <= lr.month <= n):
                errors.append(FieldError("leap_rule.month", f"must be in 1..{n}"))
            elif self.months[lr.month - 1].length + lr.amount <= 0:
                errors.append(FieldError("leap_rule.amount", "leap month would have no days"))

        for i, moon in enumerate(self.moons):
            if moon.cycle <= 0:
                errors.append(FieldError(f"moons[{i}].cycle", f"moon {moon.name!r} needs a positive cycle"))

        for i, s in enumerate(self.seasons):
            for attr in ("start_month", "end_month"):
                if not (1 <= getattr(s, attr) <= n):
                    errors.append(FieldError(f"seasons[{i}].{attr}", f"must be in 1..{n}"))
            for attr in ("start_day", "end_day"):
                if getattr(s, attr) < 1:
                    errors.append(FieldError(f"seasons[{i}].{attr}", "must be at least 1"))
        return errors

    def season_overlaps(self) -> List[Tuple[Season, Season]]:
        """Pairs of seasons whose (month, day) spans intersect. Not an error, only reported."""
        spans = []
        for s in self.seasons:
            a, b = (s.start_month, s.start_day), (s.end_month, s.end_day)
            if a <= b:
                spans.append((s, [(a, b)]))
            else:
                # wraps past the end of the year
                spans.append((s, [(a, (self.month_count, 10 ** 9)), ((1, 0), b)]))
        out = []
        for i in range(len(spans)):
            for j in range(i + 1, len(spans)):
                if any(a1 <= b2 and a2 <= b1 for a1, b1 in spans[i][1] for a2, b2 in spans[j][1]):
                    out.append((spans[i][0], spans[j][0]))
        return out

    # ---------------------------------------------------------
    # Derived constants
    # ---------------------------------------------------------

    @property
    def month_count(self) -> int:
        return len(self.months)

    @property
    def week_length(self) -> int:
        return len(self.weekday_names)

    @property
    def base_year_length(self) -> int:
        return sum(m.length for m in self.months)

    def is_leap_year(self, year: int) -> bool:
        lr = self.leap_rule
        if lr is None:
            return False
        return year >= lr.start_year and (year - lr.offset_years) % lr.every == 0

    def days_in_month(self, month: int, year: int) -> int:
        if not (1 <= month <= self.month_count):
            raise IndexError(f"month {month} outside 1..{self.month_count}")
        n = self.months[month - 1].length
        lr = self.leap_rule
        if lr is not None and month == lr.month and self.is_leap_year(year):
            n += lr.amount
        return n

    def year_length(self, year: int) -> int:
        n = self.base_year_length
        if self.leap_rule is not None and self.is_leap_year(year):
            n += self.leap_rule.amount
        return n

    def standard_months(self) -> Tuple[int, ...]:
        """1-based indices of the non-intercalary months, in order."""
        return tuple(i + 1 for i, m in enumerate(self.months) if not m.intercalary)

    # ---------------------------------------------------------
    # Display helpers
    # ---------------------------------------------------------

    def month_name(self, month: int) -> str:
        aliases: Dict[int, str] = dict(self.month_aliases)
        if month in aliases:
            return aliases[month]
        if 1 <= month <= self.month_count:
            return self.months[month - 1].name
        return f"Month {month}"

    def year_label(self, year: int) -> str:
        return dict(self.year_names).get(year, str(year))

    def weekday_name(self, index: int) -> str:
        return self.weekday_names[index % self.week_length]
