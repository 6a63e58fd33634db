"""
lorecal.core.config
-------------------
Builds CalendarDefinitions from caller-supplied configuration mappings, the
form data the web layer stores (camelCase keys, e.g. `weekdays`,
`hasLeapYear`, `leapYearMonth`). snake_case spellings are accepted as well.

The form is described by pydantic models; every schema violation becomes one
FieldError named after the offending location ("months[2].length"). Checks
that need several fields at once (leap month in range, seasons inside the
month list) are left to CalendarDefinition.problems().
"""

from __future__ import annotations

import json
import logging
from fractions import Fraction
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StringConstraints,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .definition import CalendarDefinition
from .errors import FieldError, InvalidDefinition
from .types import LeapRule, Month, Moon, Season, as_fraction

logger = logging.getLogger(__name__)

WeekdayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class _FormModel(BaseModel):
    # Unknown form fields (slug, description, image, ...) are not our concern.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MonthForm(_FormModel):
    name: str = ""
    length: StrictInt = Field(gt=0)
    intercalary: bool = Field(default=False, validation_alias=_alias("intercalary", "isIntercalary"))


class LeapRuleForm(_FormModel):
    """Structured leap rule, as written by definition_to_config."""
    amount: StrictInt = 1
    month: StrictInt = Field(validation_alias=_alias("month", "appliesToMonth"))
    every: StrictInt = Field(gt=0, validation_alias=_alias("every", "everyNYears"))
    start_year: StrictInt = Field(default=1, validation_alias=_alias("start_year", "startYear"))
    offset_years: StrictInt = Field(default=0, validation_alias=_alias("offset_years", "offsetYears"))


class MoonForm(_FormModel):
    name: str = ""
    cycle: Any = Field(validation_alias=_alias("cycle", "cycleLengthDays"))
    shift: Any = Field(default=0, validation_alias=_alias("shift", "phaseShift"))

    @field_validator("cycle", "shift", mode="before")
    @classmethod
    def exact_number(cls, v: Any, info: ValidationInfo) -> Fraction:
        if isinstance(v, bool):
            raise ValueError("must be a number")
        try:
            x = as_fraction(v)
        except (TypeError, ValueError, ZeroDivisionError):
            raise ValueError("must be a number") from None
        if info.field_name == "cycle" and x <= 0:
            raise ValueError("cycle must be positive")
        return x


class SeasonForm(_FormModel):
    name: str = ""
    start_month: StrictInt = Field(validation_alias=_alias("startMonth", "start_month", "monthStart"))
    end_month: StrictInt = Field(validation_alias=_alias("endMonth", "end_month", "monthEnd"))
    start_day: StrictInt = Field(default=1, validation_alias=_alias("startDay", "start_day"))
    # None: runs to the end of end_month
    end_day: Optional[StrictInt] = Field(default=None, validation_alias=_alias("endDay", "end_day"))


class CalendarForm(_FormModel):
    name: Optional[str] = None
    months: List[MonthForm] = Field(min_length=1)
    weekdays: List[WeekdayName] = Field(
        min_length=1, validation_alias=_alias("weekdays", "weekdayNames", "weekday_names")
    )

    leap_rule: Optional[LeapRuleForm] = Field(default=None, validation_alias=_alias("leapRule", "leap_rule"))
    # Flat leap fields of the web form; leapYearOffset is the interval in years.
    has_leap_year: bool = Field(default=False, validation_alias=_alias("hasLeapYear", "has_leap_year"))
    leap_year_amount: StrictInt = Field(default=1, validation_alias=_alias("leapYearAmount", "leap_year_amount"))
    leap_year_month: Optional[StrictInt] = Field(default=None, validation_alias=_alias("leapYearMonth", "leap_year_month"))
    leap_year_offset: Optional[StrictInt] = Field(default=None, validation_alias=_alias("leapYearOffset", "leap_year_offset"))
    leap_year_start: Optional[StrictInt] = Field(default=None, validation_alias=_alias("leapYearStart", "leap_year_start"))

    start_offset: Optional[StrictInt] = Field(default=None, validation_alias=_alias("startOffset", "start_offset"))
    skip_year_zero: bool = Field(default=False, validation_alias=_alias("skipYearZero", "skip_year_zero"))
    moons: Optional[List[MoonForm]] = None
    seasons: Optional[List[SeasonForm]] = None
    suffix: Optional[str] = Field(default=None, validation_alias=_alias("suffix", "eraSuffix", "era_suffix"))
    years: Optional[Dict[int, str]] = Field(default=None, validation_alias=_alias("years", "yearNames", "year_names"))
    month_aliases: Optional[Dict[int, str]] = Field(
        default=None, validation_alias=_alias("monthAliases", "month_aliases")
    )


def _field_name(loc: Tuple[Union[int, str], ...]) -> str:
    """('months', 2, 'length') -> 'months[2].length'"""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out or "config"


def _field_errors(e: ValidationError) -> List[FieldError]:
    return [FieldError(_field_name(err["loc"]), err["msg"]) for err in e.errors()]


def _leap_rule(form: CalendarForm, errors: List[FieldError]) -> Optional[LeapRule]:
    if form.leap_rule is not None:
        lr = form.leap_rule
        return LeapRule(lr.amount, lr.month, lr.every, lr.start_year, lr.offset_years)
    if not form.has_leap_year:
        return None
    # The web app treats a missing or zero interval or start year as "no leap years".
    if not form.leap_year_offset or not form.leap_year_start:
        return None
    if form.leap_year_month is None:
        errors.append(FieldError("leapYearMonth", "required when hasLeapYear is set"))
        return None
    # Leap years are leapYearStart, leapYearStart + offset, ...
    return LeapRule(
        amount=form.leap_year_amount,
        month=form.leap_year_month,
        every=form.leap_year_offset,
        start_year=form.leap_year_start,
        offset_years=form.leap_year_start,
    )


def _season(s: SeasonForm, months: Tuple[Month, ...]) -> Season:
    end_day = s.end_day
    if end_day is None:
        end_day = months[s.end_month - 1].length if 1 <= s.end_month <= len(months) else 1
    return Season(s.name, s.start_month, s.start_day, s.end_month, end_day)


def _parse(cfg: Any) -> Tuple[Optional[CalendarDefinition], List[FieldError]]:
    try:
        form = CalendarForm.model_validate(cfg)
    except ValidationError as e:
        return None, _field_errors(e)

    errors: List[FieldError] = []
    leap = _leap_rule(form, errors)
    if errors:
        return None, errors

    months = tuple(
        Month(m.name or f"Month {i + 1}", m.length, m.intercalary) for i, m in enumerate(form.months)
    )
    try:
        definition = CalendarDefinition(
            months=months,
            weekday_names=tuple(form.weekdays),
            leap_rule=leap,
            start_offset=form.start_offset or 0,
            skip_year_zero=form.skip_year_zero,
            moons=tuple(Moon(m.name or f"Moon {i + 1}", m.cycle, m.shift) for i, m in enumerate(form.moons or ())),
            seasons=tuple(_season(s, months) for s in form.seasons or ()),
            era_suffix=form.suffix or "",
            name=form.name or "",
            year_names=form.years or {},
            month_aliases=form.month_aliases or {},
        )
    except InvalidDefinition as e:
        return None, e.errors
    return definition, []


def validate_definition(cfg: Any) -> List[FieldError]:
    """All problems with a configuration, one per malformed field; [] if valid."""
    return _parse(cfg)[1]


def definition_from_config(cfg: Any) -> CalendarDefinition:
    definition, errors = _parse(cfg)
    if errors:
        raise InvalidDefinition(errors)
    logger.debug("Built calendar %r: %d months, %d-day week", definition.name,
                 definition.month_count, definition.week_length)
    return definition


def definition_from_json(path: Union[str, Path]) -> CalendarDefinition:
    with open(path, encoding="utf-8") as f:
        return definition_from_config(json.load(f))


def _num(x: Fraction) -> Union[int, str]:
    return x.numerator if x.denominator == 1 else str(x)


def definition_to_config(definition: CalendarDefinition) -> Dict[str, Any]:
    """Inverse of definition_from_config (structured leapRule form, JSON-safe)."""
    lr = definition.leap_rule
    return {
        "name": definition.name,
        "months": [{"name": m.name, "length": m.length, "intercalary": m.intercalary} for m in definition.months],
        "weekdays": list(definition.weekday_names),
        "leapRule": None if lr is None else {
            "amount": lr.amount, "month": lr.month, "every": lr.every,
            "startYear": lr.start_year, "offsetYears": lr.offset_years,
        },
        "startOffset": definition.start_offset,
        "skipYearZero": definition.skip_year_zero,
        "moons": [{"name": m.name, "cycle": _num(m.cycle), "shift": _num(m.shift)} for m in definition.moons],
        "seasons": [
            {"name": s.name, "startMonth": s.start_month, "startDay": s.start_day,
             "endMonth": s.end_month, "endDay": s.end_day}
            for s in definition.seasons
        ],
        "suffix": definition.era_suffix,
        "years": {str(k): v for k, v in definition.year_names},
        "monthAliases": {str(k): v for k, v in definition.month_aliases},
    }
