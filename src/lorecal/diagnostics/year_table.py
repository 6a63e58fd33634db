from __future__ import annotations

import argparse

from lorecal.cli import add_calendar_args, resolve_calendar
from lorecal.core.types import CalendarDate


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Year table: length, leap flag, first ordinal and opening weekday per year."
    )
    p.add_argument("--from-year", type=int, default=1)
    p.add_argument("--to-year", type=int, default=12)
    add_calendar_args(p)
    args = p.parse_args(argv)

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    eng = resolve_calendar(args)
    d = eng.definition

    headers = ["Year", "Days", "Leap", "Ordinal", "Starts on"]
    colw = [8, 5, 5, 12, 16]
    print("  ".join(h.ljust(w) for h, w in zip(headers, colw)))
    print("  ".join("-" * w for w in colw))

    for Y in range(Y0, Y1 + 1):
        if not eng.conv.year_exists(Y):
            continue
        first = eng.to_ordinal(CalendarDate(Y, 1, 1))
        row = [
            str(Y),
            str(d.year_length(Y)),
            "yes" if d.is_leap_year(Y) else "",
            str(first),
            d.weekday_names[eng.day_of_week(first)],
        ]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
