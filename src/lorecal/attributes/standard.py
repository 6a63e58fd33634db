from __future__ import annotations
from typing import Any, Dict

from ..engines import moon as _moon
from .registry import register_attribute

def week_of_year(info, engine) -> Dict[str, Any]:
    # Week 1 is the (possibly partial) week holding day 1 of the year.
    first = info.ordinal - (info.day_of_year - 1)
    lead = engine.day_of_week(first)
    return {"week_of_year": (info.day_of_year - 1 + lead) // engine.definition.week_length + 1}

def days_left_in_year(info, engine) -> Dict[str, Any]:
    return {"days_left_in_year": engine.definition.year_length(info.date.year) - info.day_of_year}

def illumination(info, engine) -> Dict[str, Any]:
    return {
        "illumination": {
            s.moon.name: round(_moon.illuminated_fraction(info.ordinal, s.moon), 3) for s in info.moons
        }
    }

def next_full_moons(info, engine) -> Dict[str, Any]:
    out = {}
    for s in info.moons:
        n = _moon.next_phase(info.ordinal, s.moon, _moon.MoonPhase.FULL)
        out[s.moon.name] = str(engine.from_ordinal(n))
    return {"next_full_moon": out}

register_attribute("week_of_year", week_of_year)
register_attribute("days_left_in_year", days_left_in_year)
register_attribute("illumination", illumination)
register_attribute("next_full_moon", next_full_moons)
