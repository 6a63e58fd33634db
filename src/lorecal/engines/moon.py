"""
lorecal.engines.moon
--------------------
Moon phases as exact rational positions within each moon's cycle.

A moon's phase at ordinal n is (n + shift) mod cycle, in days, so phase 0 is
new moon and cycle/2 is full moon. Cycles need not be whole days.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional, Tuple

from ..core.definition import CalendarDefinition
from ..core.types import Moon, MoonPhase, MoonState, NumT, as_fraction

# Bucket order within one cycle, starting at new moon.
PHASES: Tuple[MoonPhase, ...] = tuple(MoonPhase)


def phase(ordinal: int, moon: Moon) -> Fraction:
    """Days into the current cycle, in [0, cycle)."""
    return (Fraction(ordinal) + moon.shift) % moon.cycle


def phase_name(phase_fraction: NumT, cycle_length: NumT) -> MoonPhase:
    """
    Splits [0, cycle) into 8 equal half-open buckets; a value sitting exactly
    on a boundary belongs to the following bucket.
    """
    p = as_fraction(phase_fraction)
    c = as_fraction(cycle_length)
    if c <= 0:
        raise ValueError("cycle length must be positive")
    bucket = math.floor((p % c) * 8 / c)
    return PHASES[bucket]


def moon_state(ordinal: int, moon: Moon) -> MoonState:
    p = phase(ordinal, moon)
    return MoonState(moon=moon, phase=p, phase_name=phase_name(p, moon.cycle))


def moon_states(ordinal: int, definition: CalendarDefinition) -> Tuple[MoonState, ...]:
    return tuple(moon_state(ordinal, m) for m in definition.moons)


def illuminated_fraction(ordinal: int, moon: Moon) -> float:
    """Approximate lit fraction of the disc (0 at new, 1 at full)."""
    angle = 2 * math.pi * float(phase(ordinal, moon) / moon.cycle)
    return (1 - math.cos(angle)) / 2


def next_phase(ordinal: int, moon: Moon, target: MoonPhase, *, max_days: Optional[int] = None) -> int:
    """
    First ordinal strictly after `ordinal` whose phase name is `target`.

    Every bucket is cycle/8 wide, so a bucket shorter than one day may be
    stepped over on some cycles; the search then continues into later cycles.
    Raises ValueError if nothing is found within `max_days` (default: 8 cycles).
    """
    if max_days is None:
        max_days = 8 * math.ceil(moon.cycle) + 1
    for n in range(ordinal + 1, ordinal + max_days + 1):
        if phase_name(phase(n, moon), moon.cycle) is target:
            return n
    raise ValueError(f"Moon {moon.name!r} does not reach {target.value} within {max_days} days")
