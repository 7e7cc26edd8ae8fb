#!/usr/bin/env python3
"""Infer the layout of date strings and print the parsed date.

Dates come from the command line or from a file with one date per line
(blank lines are skipped). Output is tab separated:

  <text>  <pattern>  <ISO date>
  <text>  -          unrecognized

Defaults come from ANYDATE_* variables (or .env); see anydate.config.

Usage:
  PYTHONPATH=. python3 scripts/infer_dates.py "oct 7, 1970" "30/04/2025"
  PYTHONPATH=. python3 scripts/infer_dates.py --in dates.txt --day-first --strict
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from anydate.config import ParserPolicy, setup_logging
from anydate.errors import ParseError
from anydate.parser import resolve

log = logging.getLogger("infer_dates")


def _read_inputs(args: argparse.Namespace) -> list[str]:
    items = list(args.dates)
    if args.inp:
        for line in Path(args.inp).read_text(encoding="utf-8", errors="replace").splitlines():
            if line.strip():
                items.append(line.strip())
    return items


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("dates", nargs="*", help="date strings")
    ap.add_argument("--in", dest="inp", default=None, help="file with one date per line")
    ap.add_argument("--day-first", action="store_true", help="read 03/04/2014 as 3 April")
    ap.add_argument("--strict", action="store_true", help="stop with exit code 1 on the first unrecognized date")
    args = ap.parse_args(argv)

    setup_logging()
    policy = ParserPolicy.from_env()
    if args.day_first:
        policy = dataclasses.replace(policy, prefer_month_first=False)

    items = _read_inputs(args)
    if not items:
        ap.error("no dates given (pass them as arguments or via --in)")

    failed = 0
    for text in items:
        try:
            res = resolve(text, policy)
        except ParseError as e:
            if args.strict:
                print(f"ERROR: {text!r}: {e}", file=sys.stderr)
                return 1
            log.debug("%r: %s", text, e)
            print(f"{text}\t-\tunrecognized")
            failed += 1
            continue
        print(f"{text}\t{res.pattern}\t{res.value.date().isoformat()}")

    if failed:
        log.info("%d of %d dates unrecognized", failed, len(items))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
