from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from .core.dates import parse_date
from .core.definition import CalendarDefinition
from .core.engine import EngineRegistry
from .core.types import AgeResult, CalendarDate, DayInfo, UpcomingReminder
from .engines import reminders as _reminders
from .engines.calendar import CalendarEngine
from .engines.factory import make_engine as _make_engine
from .engines.recurrence import Occurrences, RecurrenceRule

DateLike = Union[CalendarDate, str]
CalendarLike = Union[str, CalendarDefinition, CalendarEngine]

_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def _engine(calendar: CalendarLike) -> CalendarEngine:
    if isinstance(calendar, CalendarEngine):
        return calendar
    if isinstance(calendar, CalendarDefinition):
        return _make_engine(calendar)
    return _reg().get(calendar)

def _d(x: DateLike) -> CalendarDate:
    return parse_date(x)

# ============================================================
# Registry
# ============================================================

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: CalendarLike) -> Dict[str, Any]:
    return _engine(calendar).info()

def get_calendar(name: str) -> CalendarEngine:
    return _reg().get(name)

def get_definition(calendar: CalendarLike) -> CalendarDefinition:
    return _engine(calendar).definition

def register_calendar(name: str, calendar: Union[CalendarDefinition, CalendarEngine], *, overwrite: bool = False) -> None:
    _reg().register(name, _engine(calendar), overwrite=overwrite)

# ============================================================
# Dates and ordinals
# ============================================================

def make_date(year: int, month: int, day: int, *, calendar: CalendarLike = "julian") -> CalendarDate:
    """Validated CalendarDate; raises InvalidDate if it does not exist."""
    return _engine(calendar).date(year, month, day)

def to_ordinal(date: DateLike, *, calendar: CalendarLike = "julian") -> int:
    return _engine(calendar).to_ordinal(_d(date))

def from_ordinal(ordinal: int, *, calendar: CalendarLike = "julian") -> CalendarDate:
    return _engine(calendar).from_ordinal(ordinal)

def day_of_week(ordinal: int, *, calendar: CalendarLike = "julian") -> int:
    return _engine(calendar).day_of_week(ordinal)

def weekday_name(date: DateLike, *, calendar: CalendarLike = "julian") -> str:
    return _engine(calendar).conv.weekday_name(_d(date))

def is_leap_year(year: int, *, calendar: CalendarLike = "julian") -> bool:
    return get_definition(calendar).is_leap_year(year)

def days_in_month(month: int, year: int, *, calendar: CalendarLike = "julian") -> int:
    return get_definition(calendar).days_in_month(month, year)

def year_length(year: int, *, calendar: CalendarLike = "julian") -> int:
    return get_definition(calendar).year_length(year)

def add_days(date: DateLike, days: int, *, calendar: CalendarLike = "julian") -> CalendarDate:
    return _engine(calendar).conv.add_days(_d(date), days)

def days_between(start: DateLike, end: DateLike, *, calendar: CalendarLike = "julian") -> int:
    return _engine(calendar).conv.days_between(_d(start), _d(end))

def day_of_year(date: DateLike, *, calendar: CalendarLike = "julian") -> int:
    return _engine(calendar).conv.day_of_year(_d(date))

def day_info(date: DateLike, *, calendar: CalendarLike = "julian", attributes: Sequence[str] = ()) -> DayInfo:
    return _engine(calendar).day_info(_d(date), attributes=attributes)

def month_grid(year: int, month: int, *, calendar: CalendarLike = "julian") -> List[List[Optional[CalendarDate]]]:
    return _engine(calendar).month_grid(year, month)

# ============================================================
# Recurrence, age, reminders
# ============================================================

def next_occurrence(
    base: DateLike, rule: RecurrenceRule, after: DateLike, *, calendar: CalendarLike = "julian"
) -> CalendarDate:
    return _engine(calendar).next_occurrence(_d(base), rule, _d(after))

def occurrences_in_range(
    base: DateLike,
    rule: RecurrenceRule,
    range_start: DateLike,
    range_end: DateLike,
    *,
    calendar: CalendarLike = "julian",
    max_count: int = 100,
) -> Occurrences:
    return _engine(calendar).occurrences(_d(base), rule, _d(range_start), _d(range_end), max_count=max_count)

def elapsed(start: DateLike, end: DateLike, *, calendar: CalendarLike = "julian") -> AgeResult:
    return _engine(calendar).elapsed(_d(start), _d(end))

def upcoming(
    base: DateLike,
    rule: Optional[RecurrenceRule],
    current: DateLike,
    *,
    calendar: CalendarLike = "julian",
    notify_before: int = 0,
) -> UpcomingReminder:
    return _reminders.upcoming(_d(base), rule, _d(current), get_definition(calendar), notify_before)
