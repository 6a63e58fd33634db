from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple, Union

NumT = Union[int, float, str, Fraction, Decimal]


def as_fraction(x: NumT) -> Fraction:
    """Exact rational from int, Fraction, Decimal, decimal string or float.

    Floats go through their shortest decimal repr, so 29.53 becomes 2953/100
    rather than the binary expansion.
    """
    if isinstance(x, Fraction):
        return x
    if isinstance(x, float):
        return Fraction(repr(x))
    return Fraction(x)


@dataclass(frozen=True, order=True)
class CalendarDate:
    year: int
    month: int  # 1-based index into CalendarDefinition.months
    day: int    # 1-based

    def __str__(self) -> str:
        sign = "-" if self.year < 0 else ""
        return f"{sign}{abs(self.year)}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class Month:
    name: str
    length: int
    intercalary: bool = False


@dataclass(frozen=True)
class LeapRule:
    """
    Leap days: `amount` days are added to month `month` (1-based) in every year
    from `start_year` onwards whose (year - offset_years) is a multiple of `every`.
    """
    amount: int
    month: int
    every: int
    start_year: int = 1
    offset_years: int = 0


@dataclass(frozen=True)
class Moon:
    name: str
    cycle: Fraction          # days per full cycle, need not be integral
    shift: Fraction = Fraction(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cycle", as_fraction(self.cycle))
        object.__setattr__(self, "shift", as_fraction(self.shift))


@dataclass(frozen=True)
class Season:
    name: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int


class MoonPhase(Enum):
    NEW = "new"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL = "full"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"


@dataclass(frozen=True)
class MoonState:
    moon: Moon
    phase: Fraction
    phase_name: MoonPhase


@dataclass(frozen=True)
class AgeResult:
    years: int
    months: int
    days: int
    total_days: int
    display_string: str


@dataclass(frozen=True)
class DayInfo:
    date: CalendarDate
    ordinal: int
    weekday: int
    weekday_name: str
    day_of_year: int
    is_leap_year: bool
    season: Optional[Season]
    moons: Tuple[MoonState, ...]
    label: str
    attributes: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class UpcomingReminder:
    next_occurrence: CalendarDate
    days_until: int
    should_notify: bool


@dataclass(frozen=True)
class CalendarSpec:
    """Pure data payload naming a built-in calendar definition."""
    name: str
    description: str
    definition: Any  # CalendarDefinition
    meta: dict = field(default_factory=dict, compare=False, hash=False)
