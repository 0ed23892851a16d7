from __future__ import annotations

import argparse
import asyncio
import importlib
import inspect
import json
import logging
import re
import sys

from .api import CultureProvider
from .core.errors import CyclecalError
from .core.time import parse_ymd, to_jdn
from .providers import default_data_provider


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


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


def _provider(args: argparse.Namespace) -> CultureProvider:
    return CultureProvider(default_data_provider(args.data_dir))


def cmd_instant(args: argparse.Namespace) -> int:
    if args.jdn is None and args.date is None:
        raise SystemExit("give a YYYY-MM-DD date or --jdn")
    jdn = args.jdn if args.jdn is not None else to_jdn(parse_ymd(args.date))

    calendar = asyncio.run(_provider(args).load_calendar(args.calendar))
    out = {"calendar": calendar.id, "jdn": jdn, "instant": calendar.get_instant(jdn)}
    print(json.dumps(out, indent=2 if args.pretty else None))
    return 0


def cmd_culture(args: argparse.Namespace) -> int:
    culture = asyncio.run(_provider(args).load_culture(args.culture))
    print(json.dumps(culture.info(), indent=2))
    return 0


def cmd_calendars(args: argparse.Namespace) -> int:
    provider = default_data_provider(args.data_dir)
    kind = "culture" if args.cultures else "calendar"
    for name in provider.list_ids(kind):
        print(name)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `cyclecal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["instant"] + list(argv)

    p = argparse.ArgumentParser(prog="cyclecal", description="Data-driven calendar toolkit CLI.")
    p.add_argument("--data-dir", default=None, help="Directory with calendars/ and cultures/ JSON (default: $CYCLECAL_DATA_DIR or packaged data)")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    # instant
    p_inst = sub.add_parser("instant", help="Julian Day Number / Gregorian date -> calendar instant")
    p_inst.add_argument("date", nargs="?", help="YYYY-MM-DD (proleptic Gregorian)")
    p_inst.add_argument("--jdn", type=int, default=None, help="Julian Day Number instead of a date")
    p_inst.add_argument("--calendar", default="gregorian")
    p_inst.add_argument("--pretty", action="store_true")

    # culture
    p_cult = sub.add_parser("culture", help="Load a culture and show its calendar")
    p_cult.add_argument("culture")

    # listing
    p_list = sub.add_parser("calendars", help="List available calendar ids")
    p_list.add_argument("--cultures", action="store_true", help="List culture ids instead")

    # diagnostics
    p_diag = sub.add_parser("diag", help="Diagnostics tools (need the 'diagnostics' extra)")
    p_diag.add_argument("tool", choices=["cycle-lengths"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "diag":
        tool_map = {
            "cycle-lengths": "cyclecal.diagnostics.cycle_lengths",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if rest:
        p.error(f"unrecognized arguments: {' '.join(rest)}")

    handlers = {
        "instant": cmd_instant,
        "culture": cmd_culture,
        "calendars": cmd_calendars,
    }
    try:
        return handlers[args.cmd](args)
    except CyclecalError as e:
        print(f"cyclecal: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
