from __future__ import annotations

import argparse
from typing import List, Optional

from lorecal.cli import add_calendar_args, resolve_calendar
from lorecal.core.types import CalendarDate


def dow_header(names: List[str], w: int = 6) -> str:
    return " ".join(n[:w].ljust(w) for n in names)


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_calendar(eng, year: int, month: int, *, moon_row: bool = True) -> None:
    d = eng.definition
    grid: List[List[Optional[CalendarDate]]] = eng.month_grid(year, month)

    weeks: list[list[tuple[str, str]]] = []
    for row in grid:
        wk = []
        for date in row:
            if date is None:
                wk.append(cell("", ""))
                continue
            bot = ""
            if moon_row and d.moons:
                # First letters of the primary moon's phase, e.g. "fq" for first quarter.
                name = eng.day_info(date).moons[0].phase_name.value
                bot = "".join(part[0] for part in name.split("_"))
            wk.append(cell(f"{date.day:2d}", bot))
        weeks.append(wk)

    leap_tag = " (leap year)" if d.is_leap_year(year) else ""
    title = f"{d.name or 'calendar'}  {d.month_name(month)} {d.year_label(year)} {d.era_suffix}{leap_tag}"
    print_grid(title.rstrip(), dow_header(list(d.weekday_names)), weeks)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a month of a custom calendar as a weekday grid, with the primary moon's phase."
    )
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, nargs="?", default=None, help="1-based month (default: whole year)")
    p.add_argument("--no-moon", action="store_true", help="omit the moon phase row")
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = resolve_calendar(args)
    months = [args.month] if args.month else range(1, eng.definition.month_count + 1)
    for m in months:
        month_calendar(eng, args.year, m, moon_row=not args.no_moon)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
