from __future__ import annotations

import argparse
import random
from typing import List

import lorecal


def parse_calendars(s: str) -> List[str]:
    # "julian,harptos" -> ["julian", "harptos"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    lo: int,
    hi: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """ordinal -> date -> ordinal and date -> ordinal -> date over random ordinals in [lo, hi]."""
    random.seed(seed)
    eng = lorecal.get_calendar(calendar)
    failures = 0

    for _ in range(N):
        n0 = random.randint(lo, hi)
        d = eng.from_ordinal(n0)
        n1 = eng.to_ordinal(d)
        d1 = eng.from_ordinal(n1)
        if n1 != n0 or d1 != d:
            failures += 1
            print("\nFAIL")
            print("calendar:", calendar)
            print("n0:", n0, "date:", d, "back:", n1, d1)
            if failures >= max_failures:
                return failures

        # weekday must be periodic in the week length
        w = eng.definition.week_length
        if eng.day_of_week(n0) != eng.day_of_week(n0 + w * random.randint(-50, 50)):
            failures += 1
            print("\nFAIL (weekday)", calendar, n0)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: ordinal -> date -> ordinal.")
    p.add_argument("--calendars", type=str, default="julian,harptos,fivefold",
                   help="Comma-separated preset list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--lo", type=int, default=-1_000_000, help="Lowest ordinal.")
    p.add_argument("--hi", type=int, default=1_000_000, help="Highest ordinal.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.hi < args.lo:
        raise SystemExit("--hi must be >= --lo")

    total_fail = 0
    for cal in parse_calendars(args.calendars):
        print(f"Testing {cal} ...")
        total_fail += roundtrip_test(cal, N=args.N, lo=args.lo, hi=args.hi, seed=args.seed,
                                     max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
