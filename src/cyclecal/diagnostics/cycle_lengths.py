#!/usr/bin/env python3
"""
Period lengths of one cycle across a range of days.

Evaluates a calendar on every JDN in [start, end], finds the days on which
the chosen cycle changes value and reports how long each complete period
lasted (e.g. 365/366 for ``year``, 28..31 for ``month``).
"""
from __future__ import annotations

import argparse
from typing import List, Optional

from cyclecal.core.time import parse_ymd, to_jdn
from cyclecal.engines.calendar import Calendar


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "cyclecal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "cyclecal[diagnostics]"') from e


def cycle_values(calendar: Calendar, cycle_id: str, start: int, end: int):
    np = _need_numpy()
    values = np.empty(end - start + 1, dtype=np.int64)
    for i, jdn in enumerate(range(start, end + 1)):
        inst = calendar.get_instant(jdn)
        if cycle_id not in inst:
            raise KeyError(f"Calendar '{calendar.id}' has no cycle '{cycle_id}'. Available: {sorted(inst)}")
        values[i] = inst[cycle_id]
    return values


def cycle_lengths(calendar: Calendar, cycle_id: str, start: int, end: int):
    """Lengths (in days) of every period fully contained in [start, end]."""
    np = _need_numpy()
    values = cycle_values(calendar, cycle_id, start, end)
    # Index of the first day of each new period.
    starts = np.flatnonzero(np.diff(values) != 0) + 1
    return np.diff(starts)


def main(argv: Optional[List[str]] = None) -> int:
    import cyclecal

    p = argparse.ArgumentParser(
        prog="cyclecal diag cycle-lengths",
        description="Histogram of period lengths of one cycle over a date range.",
    )
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--cycle", default="month", help="cycle id to measure (default: month)")
    p.add_argument("--start", default="1999-01-01", help="YYYY-MM-DD (proleptic Gregorian)")
    p.add_argument("--end", default="2004-12-31", help="YYYY-MM-DD (proleptic Gregorian)")
    p.add_argument("--plot", default=None, help="write a bar chart to this PNG path")
    args = p.parse_args(argv)

    np = _need_numpy()

    start, end = to_jdn(parse_ymd(args.start)), to_jdn(parse_ymd(args.end))
    if end < start:
        raise SystemExit("--end must be >= --start")

    calendar = cyclecal.get_calendar(args.calendar)
    lengths = cycle_lengths(calendar, args.cycle, start, end)
    if lengths.size == 0:
        print(f"No complete '{args.cycle}' period between {args.start} and {args.end}.")
        return 0

    uniq, counts = np.unique(lengths, return_counts=True)
    print(f"calendar={calendar.id} cycle={args.cycle} periods={lengths.size}")
    for n, c in zip(uniq, counts):
        print(f"  {int(n):>8d} days : {int(c)}")

    if args.plot:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(8, 3.6))
        ax.bar([str(int(n)) for n in uniq], counts, color="0.25")
        ax.set_xlabel("Period length (days)")
        ax.set_ylabel("Periods")
        ax.set_title(f"{calendar.id}: '{args.cycle}' lengths, {args.start} .. {args.end}")
        fig.tight_layout()
        fig.savefig(args.plot, dpi=150)
        print(f"Saved: {args.plot}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
