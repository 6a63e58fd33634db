from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional, Union

from .errors import InvalidDate
from .types import CalendarDate

if TYPE_CHECKING:
    from .definition import CalendarDefinition

_DATE_RE = re.compile(r"^(-?)(\d{1,6})-(\d{1,2})-(\d{1,2})$")


def parse_date(s: Union[str, CalendarDate]) -> CalendarDate:
    """Parse 'YYYY-MM-DD' where the year may be negative ('-120-03-01')."""
    if isinstance(s, CalendarDate):
        return s
    m = _DATE_RE.match(str(s).strip())
    if m is None:
        raise InvalidDate(f"Date must be in YYYY-MM-DD format, got {s!r}")
    sign, y, mo, d = m.groups()
    year = int(y) * (-1 if sign else 1)
    return CalendarDate(year, int(mo), int(d))


def format_short(date: CalendarDate) -> str:
    return str(date)


def format_long(date: CalendarDate, definition: "CalendarDefinition", *, weekday: Optional[str] = None) -> str:
    """'4 Frostfall, 1203 AR' using month aliases, year names and the era suffix."""
    out = f"{date.day} {definition.month_name(date.month)}, {definition.year_label(date.year)}"
    if definition.era_suffix:
        out += f" {definition.era_suffix}"
    if weekday:
        out = f"{weekday}, {out}"
    return out
