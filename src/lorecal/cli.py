from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from lorecal.core.errors import LorecalError


_DATE_RE = re.compile(r"^-?\d{1,6}-\d{1,2}-\d{1,2}$")


def _protect_dates(argv: list[str]) -> list[str]:
    # argparse reads "-120-03-01" as an option flag; a leading space keeps it positional.
    return [" " + a if a.startswith("-") and _DATE_RE.match(a) else a for a in argv]


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def add_calendar_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--calendar", default="julian", help="preset name (see `lorecal presets`)")
    p.add_argument("--config", default=None, help="JSON calendar definition file (overrides --calendar)")


def resolve_calendar(args: argparse.Namespace):
    import lorecal
    from lorecal.core.config import definition_from_json

    if args.config:
        return lorecal.CalendarEngine(definition_from_json(args.config))
    return lorecal.get_calendar(args.calendar)


def _rule(args: argparse.Namespace, eng):
    from lorecal.engines.recurrence import rule_from_config

    cfg = {"type": args.rule, "interval": args.interval}
    if args.until:
        cfg["endDate"] = args.until
    return rule_from_config(cfg, eng.definition)


def cmd_day(argv: list[str]) -> int:
    from lorecal.core.dates import parse_date

    p = argparse.ArgumentParser(prog="lorecal day", description="Calendar date -> weekday, season, moons")
    p.add_argument("date", help="YYYY-MM-DD (year may be negative)")
    add_calendar_args(p)
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    args = p.parse_args(_protect_dates(argv))

    eng = resolve_calendar(args)
    info = eng.day_info(parse_date(args.date), attributes=tuple(args.attr))
    print(f"{info.weekday_name}, {info.label}")
    print(f"  ordinal      = {info.ordinal}")
    print(f"  day of year  = {info.day_of_year}{'  (leap year)' if info.is_leap_year else ''}")
    print(f"  season       = {info.season.name if info.season else '-'}")
    for s in info.moons:
        print(f"  {s.moon.name:<12} = {s.phase_name.value} ({float(s.phase):.2f} / {float(s.moon.cycle):g} days)")
    if info.attributes:
        for k, v in info.attributes.items():
            print(f"  {k:<12} = {v}")
    return 0


def cmd_ordinal(argv: list[str]) -> int:
    from lorecal.core.dates import parse_date

    p = argparse.ArgumentParser(prog="lorecal ordinal", description="Calendar date -> day ordinal")
    p.add_argument("date")
    add_calendar_args(p)
    args = p.parse_args(_protect_dates(argv))
    print(resolve_calendar(args).to_ordinal(parse_date(args.date)))
    return 0


def cmd_date(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="lorecal date", description="Day ordinal -> calendar date")
    p.add_argument("ordinal", type=int)
    add_calendar_args(p)
    args = p.parse_args(_protect_dates(argv))
    print(resolve_calendar(args).from_ordinal(args.ordinal))
    return 0


def cmd_next(argv: list[str]) -> int:
    from lorecal.core.dates import parse_date

    p = argparse.ArgumentParser(prog="lorecal next", description="Next occurrence of a recurring date")
    p.add_argument("base")
    p.add_argument("after")
    p.add_argument("--rule", choices=["daily", "weekly", "monthly", "yearly", "moon"], default="yearly")
    p.add_argument("--interval", type=int, default=1)
    p.add_argument("--until", default=None, help="rule end date YYYY-MM-DD")
    add_calendar_args(p)
    args = p.parse_args(_protect_dates(argv))

    eng = resolve_calendar(args)
    print(eng.next_occurrence(parse_date(args.base), _rule(args, eng), parse_date(args.after)))
    return 0


def cmd_occurrences(argv: list[str]) -> int:
    from lorecal.core.dates import parse_date

    p = argparse.ArgumentParser(prog="lorecal occurrences", description="Occurrences within a date range")
    p.add_argument("base")
    p.add_argument("start")
    p.add_argument("end")
    p.add_argument("--rule", choices=["daily", "weekly", "monthly", "yearly", "moon"], default="monthly")
    p.add_argument("--interval", type=int, default=1)
    p.add_argument("--until", default=None, help="rule end date YYYY-MM-DD")
    p.add_argument("--max", type=int, default=100, dest="max_count")
    add_calendar_args(p)
    args = p.parse_args(_protect_dates(argv))

    eng = resolve_calendar(args)
    occ = eng.occurrences(
        parse_date(args.base), _rule(args, eng), parse_date(args.start), parse_date(args.end),
        max_count=args.max_count,
    )
    for d in occ:
        print(d)
    return 0


def cmd_age(argv: list[str]) -> int:
    from lorecal.core.dates import parse_date

    p = argparse.ArgumentParser(prog="lorecal age", description="Elapsed years/months/days between two dates")
    p.add_argument("start")
    p.add_argument("end")
    add_calendar_args(p)
    args = p.parse_args(_protect_dates(argv))

    res = resolve_calendar(args).elapsed(parse_date(args.start), parse_date(args.end))
    print(f"{res.display_string}  (total {res.total_days} days)")
    return 0


def cmd_presets(argv: list[str]) -> int:
    from lorecal.engines.specs import ALL_SPECS

    p = argparse.ArgumentParser(prog="lorecal presets", description="List built-in calendars")
    p.parse_args(argv)
    for name, spec in sorted(ALL_SPECS.items()):
        print(f"{name:<10} {spec.description}")
    return 0


COMMANDS = {
    "day": cmd_day,
    "ordinal": cmd_ordinal,
    "date": cmd_date,
    "next": cmd_next,
    "occurrences": cmd_occurrences,
    "age": cmd_age,
    "presets": cmd_presets,
}

DIAG_TOOLS = {
    "month": "lorecal.diagnostics.pretty_month",
    "round-trip": "lorecal.diagnostics.round_trip",
    "year-table": "lorecal.diagnostics.year_table",
    "moon-drift": "lorecal.diagnostics.moon_drift",
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `lorecal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    p = argparse.ArgumentParser(prog="lorecal", description="Custom campaign calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Weekday, season and moon phases of a date")
    sub.add_parser("ordinal", help="Calendar date -> day ordinal")
    sub.add_parser("date", help="Day ordinal -> calendar date")
    sub.add_parser("next", help="Next occurrence of a recurring date")
    sub.add_parser("occurrences", help="All occurrences of a recurring date within a range")
    sub.add_parser("age", help="Elapsed time between two dates")
    sub.add_parser("presets", help="List built-in calendars")
    sub.add_parser("month", help="Print a month as a weekday grid")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip", "year-table", "moon-drift"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.cmd in COMMANDS:
            return COMMANDS[args.cmd](rest)
        if args.cmd == "month":
            return _run_module_main(DIAG_TOOLS["month"], rest)
        if args.cmd == "diag":
            return _run_module_main(DIAG_TOOLS[args.tool], rest)
    except (LorecalError, KeyError, OSError, ValueError) as e:
        print(f"lorecal: error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
