"""lorecal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
Engine-level functions that take a CalendarDefinition directly live in
lorecal.engines (converter, moon, recurrence, age, reminders).
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    get_calendar,
    get_definition,
    register_calendar,
    make_date,
    to_ordinal,
    from_ordinal,
    day_of_week,
    weekday_name,
    is_leap_year,
    days_in_month,
    year_length,
    add_days,
    days_between,
    day_of_year,
    day_info,
    month_grid,
    next_occurrence,
    occurrences_in_range,
    elapsed,
    upcoming,
)
from .core.config import definition_from_config, definition_to_config, validate_definition
from .core.dates import format_long, parse_date
from .core.definition import CalendarDefinition
from .core.errors import FieldError, InvalidDate, InvalidDefinition, InvalidRecurrenceRule, LorecalError
from .core.types import (
    AgeResult,
    CalendarDate,
    DayInfo,
    LeapRule,
    Month,
    Moon,
    MoonPhase,
    Season,
    UpcomingReminder,
)
from .engines.calendar import CalendarEngine
from .engines.converter import DateConverter
from .engines.moon import phase, phase_name
from .engines.recurrence import Daily, Monthly, MoonBased, RecurrenceRule, Yearly, rule_from_config

__all__ = [
    "list_calendars",
    "calendar_info",
    "get_calendar",
    "get_definition",
    "register_calendar",
    "make_date",
    "to_ordinal",
    "from_ordinal",
    "day_of_week",
    "weekday_name",
    "is_leap_year",
    "days_in_month",
    "year_length",
    "add_days",
    "days_between",
    "day_of_year",
    "day_info",
    "month_grid",
    "next_occurrence",
    "occurrences_in_range",
    "elapsed",
    "upcoming",
    "definition_from_config",
    "definition_to_config",
    "validate_definition",
    "format_long",
    "parse_date",
    "CalendarDefinition",
    "FieldError",
    "InvalidDate",
    "InvalidDefinition",
    "InvalidRecurrenceRule",
    "LorecalError",
    "AgeResult",
    "CalendarDate",
    "DayInfo",
    "LeapRule",
    "Month",
    "Moon",
    "MoonPhase",
    "Season",
    "UpcomingReminder",
    "CalendarEngine",
    "DateConverter",
    "phase",
    "phase_name",
    "Daily",
    "Monthly",
    "MoonBased",
    "Yearly",
    "RecurrenceRule",
    "rule_from_config",
]
