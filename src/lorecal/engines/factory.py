"""
lorecal.engines.factory
-----------------------
Turns CalendarSpec presets and bare definitions into live CalendarEngine objects.
"""

from __future__ import annotations
from typing import Union

from lorecal.core.definition import CalendarDefinition
from lorecal.core.types import CalendarSpec
from lorecal.engines.calendar import CalendarEngine


def make_engine(spec: Union[CalendarSpec, CalendarDefinition]) -> CalendarEngine:
    """The universal entry point."""
    if isinstance(spec, CalendarSpec):
        return CalendarEngine(spec.definition, standard_seasons=bool(spec.meta.get("standard_seasons", False)))
    if isinstance(spec, CalendarDefinition):
        return CalendarEngine(spec)
    raise TypeError(f"Unknown calendar spec type: {type(spec)}")
