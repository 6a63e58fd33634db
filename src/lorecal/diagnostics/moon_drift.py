#!/usr/bin/env python3
"""
Drift of moon-based recurrences.

MoonBased rules step a whole number of days per cycle (the primary moon's
cycle rounded to whole days). This diagnostic measures how far the k-th
occurrence wanders from the true k-th cycle, and after how many cycles the
occurrence lands in a different phase bucket than the base date.
"""
from __future__ import annotations

import argparse
from fractions import Fraction
from typing import Optional

from lorecal.cli import add_calendar_args, resolve_calendar
from lorecal.engines.recurrence import moon_step_days


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "lorecal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lorecal[diagnostics]"') from e


def drift_series(np, cycle: Fraction, step: int, cycles: int, interval: int = 1):
    """
    Returns (k, drift_days) where drift_days[k] = k*interval*step - k*interval*cycle.
    """
    k = np.arange(0, cycles + 1, dtype=np.int64)
    exact = k * interval * float(cycle)
    stepped = k * interval * step
    return k, stepped - exact


def first_bucket_change(np, cycle: Fraction, drift) -> Optional[int]:
    """First k where accumulated drift exceeds one phase bucket (cycle/8), or None."""
    over = np.nonzero(np.abs(drift) >= float(cycle) / 8)[0]
    return int(over[0]) if over.size else None


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Drift of whole-day moon-based recurrences against the true cycle.")
    p.add_argument("--cycles", type=int, default=200, help="Number of recurrences to follow.")
    p.add_argument("--interval", type=int, default=1, help="Rule interval (cycles per occurrence).")
    p.add_argument("--every", type=int, default=25, help="Print one table row every k occurrences.")
    p.add_argument("--out", default=None, help="If set, save a drift plot (PNG) to this path.")
    add_calendar_args(p)
    args = p.parse_args(argv)

    np = _need_numpy()

    eng = resolve_calendar(args)
    d = eng.definition
    if not d.moons:
        raise SystemExit(f"Calendar {d.name!r} has no moons")
    moon = d.moons[0]
    step = moon_step_days(d)

    k, drift = drift_series(np, moon.cycle, step, args.cycles, args.interval)
    print(f"{d.name}: moon {moon.name}, cycle {float(moon.cycle):.6f} days, stepped as {step} days")
    print(f"{'k':>6}  {'drift (days)':>14}")
    for i in range(0, len(k), max(1, args.every)):
        print(f"{int(k[i]):>6}  {drift[i]:>14.4f}")

    change = first_bucket_change(np, moon.cycle, drift)
    if change is None:
        print(f"Phase bucket never changes within {args.cycles} occurrences.")
    else:
        print(f"Occurrences leave the base phase bucket after {change} steps.")

    if args.out:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(8, 4))
        ax.plot(k, drift, lw=1.2, color="0.15")
        ax.axhline(float(moon.cycle) / 8, ls="--", lw=0.8, color="0.5")
        ax.axhline(-float(moon.cycle) / 8, ls="--", lw=0.8, color="0.5")
        ax.set_xlabel("occurrence k")
        ax.set_ylabel("drift (days)")
        ax.set_title(f"Moon-based recurrence drift: {moon.name} ({d.name})")
        fig.tight_layout()
        fig.savefig(args.out, dpi=150)
        print(f"Saved {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
