"""
lorecal.engines.recurrence
--------------------------
Recurring dates over a custom calendar.

Occurrence k of a rule is always computed directly from the base date
(base + k * interval units), never by re-stepping a previous occurrence. A
monthly rule on day 31 therefore lands on the 28th in a 28-day month and back
on the 31st in the next 31-day month, without accumulating clamps.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, ClassVar, Iterator, Mapping, Optional, Union

from ..core.dates import parse_date
from ..core.definition import CalendarDefinition
from ..core.errors import InvalidRecurrenceRule
from ..core.types import CalendarDate
from .converter import DateConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Rule:
    interval: int = 1
    end_date: Optional[CalendarDate] = None

    kind: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise InvalidRecurrenceRule(f"interval must be an integer, got {self.interval!r}")
        if self.interval <= 0:
            raise InvalidRecurrenceRule(f"interval must be positive, got {self.interval}")


@dataclass(frozen=True)
class Daily(_Rule):
    kind: ClassVar[str] = "daily"


@dataclass(frozen=True)
class Monthly(_Rule):
    kind: ClassVar[str] = "monthly"


@dataclass(frozen=True)
class Yearly(_Rule):
    kind: ClassVar[str] = "yearly"


@dataclass(frozen=True)
class MoonBased(_Rule):
    """Steps whole cycles of the calendar's first moon, rounded to whole days."""
    kind: ClassVar[str] = "moon"


RecurrenceRule = Union[Daily, Monthly, Yearly, MoonBased]

RULE_KINDS = {cls.kind: cls for cls in (Daily, Monthly, Yearly, MoonBased)}


def moon_step_days(definition: CalendarDefinition) -> int:
    """Primary moon cycle rounded half-up to whole days (at least one day)."""
    if not definition.moons:
        raise InvalidRecurrenceRule(f"Calendar {definition.name!r} has no moons for a moon-based rule")
    cycle = definition.moons[0].cycle
    return max(1, math.floor(cycle + Fraction(1, 2)))


# ---------------------------------------------------------
# Stepping
# ---------------------------------------------------------

class _Stepper:
    """Direct computation of occurrence k for one (base, rule, calendar)."""

    def __init__(self, conv: DateConverter, base: CalendarDate, rule: RecurrenceRule):
        self.conv = conv
        self.base = base
        self.rule = rule
        self.base_ordinal = conv.to_ordinal(base)
        self.base_month = conv.month_number(base)

        if isinstance(rule, Daily):
            self.day_step: Optional[int] = rule.interval
            self.month_step = 0
        elif isinstance(rule, MoonBased):
            self.day_step = rule.interval * moon_step_days(conv.d)
            self.month_step = 0
        elif isinstance(rule, Monthly):
            self.day_step = None
            self.month_step = rule.interval
        elif isinstance(rule, Yearly):
            self.day_step = None
            self.month_step = rule.interval * conv.d.month_count
        else:
            raise TypeError(f"Unknown recurrence rule type: {type(rule)}")

    def occurrence(self, k: int) -> CalendarDate:
        if self.day_step is not None:
            return self.conv.from_ordinal(self.base_ordinal + k * self.day_step)
        occ = self.conv.date_from_month_number(self.base_month + k * self.month_step, self.base.day)
        if occ.day != self.base.day:
            logger.debug("Clamped %s occurrence %d of %s to %s", self.rule.kind, k, self.base, occ)
        return occ

    def first_index_after(self, threshold: int) -> int:
        """Smallest k >= 0 whose occurrence ordinal is > threshold."""
        if self.day_step is not None:
            diff = threshold - self.base_ordinal
            return 0 if diff < 0 else diff // self.day_step + 1

        month_diff = self.conv.month_number(self.conv.from_ordinal(threshold)) - self.base_month
        k = max(0, month_diff // self.month_step)
        while self.conv.to_ordinal(self.occurrence(k)) <= threshold:
            k += 1
        return k


def _prepare(
    base: CalendarDate, rule: RecurrenceRule, definition: CalendarDefinition
) -> _Stepper:
    conv = DateConverter(definition)
    conv.validate(base)
    st = _Stepper(conv, base, rule)
    if rule.end_date is not None:
        conv.validate(rule.end_date)
        if conv.to_ordinal(rule.end_date) < st.base_ordinal:
            raise InvalidRecurrenceRule(f"end date {rule.end_date} is before base date {base}")
    return st


# ---------------------------------------------------------
# Public operations
# ---------------------------------------------------------

def next_occurrence(
    base: CalendarDate,
    rule: RecurrenceRule,
    after: CalendarDate,
    definition: CalendarDefinition,
) -> CalendarDate:
    """
    First occurrence strictly after `after`. If that would fall past the rule's
    end date, the end date itself is returned as the final occurrence.
    """
    st = _prepare(base, rule, definition)
    k = st.first_index_after(st.conv.to_ordinal(after))
    occ = st.occurrence(k)
    if rule.end_date is not None and st.conv.to_ordinal(occ) > st.conv.to_ordinal(rule.end_date):
        return rule.end_date
    return occ


class Occurrences:
    """
    Lazy, finite and restartable sequence of occurrences: each iteration starts
    from scratch and shares no cursor with other iterations.
    """

    def __init__(
        self,
        base: CalendarDate,
        rule: RecurrenceRule,
        range_start: CalendarDate,
        range_end: CalendarDate,
        definition: CalendarDefinition,
        max_count: int,
    ):
        if max_count < 0:
            raise ValueError(f"max_count must be non-negative, got {max_count}")
        self._st = _prepare(base, rule, definition)
        conv = self._st.conv
        self.start_ordinal = conv.to_ordinal(range_start)
        stop = conv.to_ordinal(range_end)
        if rule.end_date is not None:
            stop = min(stop, conv.to_ordinal(rule.end_date))
        self.stop_ordinal = stop
        self.max_count = max_count

    def __iter__(self) -> Iterator[CalendarDate]:
        st = self._st
        k = st.first_index_after(self.start_ordinal - 1)
        produced = 0
        while produced < self.max_count:
            occ = st.occurrence(k)
            if st.conv.to_ordinal(occ) > self.stop_ordinal:
                return
            yield occ
            produced += 1
            k += 1


def occurrences_in_range(
    base: CalendarDate,
    rule: RecurrenceRule,
    range_start: CalendarDate,
    range_end: CalendarDate,
    definition: CalendarDefinition,
    max_count: int = 100,
) -> Occurrences:
    return Occurrences(base, rule, range_start, range_end, definition, max_count)


# ---------------------------------------------------------
# Config parsing
# ---------------------------------------------------------

def rule_from_config(
    config: Mapping[str, Any], definition: Optional[CalendarDefinition] = None
) -> RecurrenceRule:
    """
    Builds a rule from {"type", "interval", "endDate"} as stored by the web layer.
    "weekly" maps onto Daily with the interval scaled by the calendar's week
    length, so it needs `definition`.
    """
    kind = str(config.get("type", "")).lower()
    interval = config.get("interval", 1)
    if not isinstance(interval, int) or isinstance(interval, bool):
        raise InvalidRecurrenceRule(f"interval must be an integer, got {interval!r}")

    raw_end = config.get("endDate", config.get("end_date"))
    end_date = parse_date(raw_end) if raw_end else None

    if kind == "weekly":
        if definition is None:
            raise InvalidRecurrenceRule("weekly rules need the calendar definition for the week length")
        return Daily(interval=interval * definition.week_length, end_date=end_date)
    if kind not in RULE_KINDS:
        raise InvalidRecurrenceRule(f"Unknown recurrence type {kind!r}. Available: {sorted(RULE_KINDS) + ['weekly']}")
    return RULE_KINDS[kind](interval=interval, end_date=end_date)


def rule_to_config(rule: RecurrenceRule) -> dict:
    out: dict = {"type": rule.kind, "interval": rule.interval}
    if rule.end_date is not None:
        out["endDate"] = str(rule.end_date)
    return out
