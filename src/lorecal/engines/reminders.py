from __future__ import annotations

from typing import Optional

from ..core.definition import CalendarDefinition
from ..core.types import CalendarDate, UpcomingReminder
from .converter import DateConverter
from .recurrence import RecurrenceRule, next_occurrence


def days_until(target: CalendarDate, current: CalendarDate, definition: CalendarDefinition) -> int:
    """Signed days from current to target (negative if target is past)."""
    return DateConverter(definition).days_between(current, target)


def should_notify(
    target: CalendarDate, notify_before: int, current: CalendarDate, definition: CalendarDefinition
) -> bool:
    n = days_until(target, current, definition)
    return 0 <= n <= notify_before


def upcoming(
    base: CalendarDate,
    rule: Optional[RecurrenceRule],
    current: CalendarDate,
    definition: CalendarDefinition,
    notify_before: int = 0,
) -> UpcomingReminder:
    """
    Next occurrence of a reminder seen from `current`. A one-off reminder
    (rule=None) simply points at its base date, even when that is past.
    """
    if rule is None:
        target = DateConverter(definition).validate(base)
    else:
        # "after" is the day before current so an occurrence due today still counts.
        conv = DateConverter(definition)
        yesterday = conv.add_days(current, -1)
        target = next_occurrence(base, rule, yesterday, definition)
    n = days_until(target, current, definition)
    return UpcomingReminder(next_occurrence=target, days_until=n, should_notify=0 <= n <= notify_before)
