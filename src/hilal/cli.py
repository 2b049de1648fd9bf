from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

from .core.errors import InvalidArgumentError, ProviderError


def _parse_instant(s: str) -> datetime:
    """ISO 8601; 'Z' accepted; naive values are taken as UTC."""
    try:
        dt = datetime.fromisoformat(s.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidArgumentError(f"not an ISO 8601 date/time: {s!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


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


def cmd_julian(argv: list[str]) -> int:
    from .reference import time_scales as ts

    p = argparse.ArgumentParser(prog="hilal julian", description="Convert between UTC date/time and Julian Date.")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--date", help="ISO date/time (UTC if no offset)")
    g.add_argument("--jd", type=float, help="Julian Date (UTC)")
    args = p.parse_args(argv)

    if args.date is not None:
        dt = _parse_instant(args.date)
        print(f"{dt.isoformat()}  ->  JD {ts.to_julian_date(dt):.6f}")
    else:
        print(f"JD {args.jd:.6f}  ->  {ts.from_julian_date(args.jd).isoformat()}")
    return 0


def cmd_elements(argv: list[str]) -> int:
    from .engines.elements import compute_elements
    from .reference import time_scales as ts

    p = argparse.ArgumentParser(prog="hilal elements", description="Print lunar mean elements and phase at a given instant.")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--jd", type=float, help="Julian Date (UTC); default: now")
    g.add_argument("--date", help="ISO date/time (UTC if no offset)")
    p.add_argument("--phase-model", choices=["apparent", "mean"], default="apparent")
    args = p.parse_args(argv)

    if args.jd is not None:
        jd = args.jd
    else:
        jd = ts.to_julian_date(_parse_instant(args.date) if args.date else datetime.now(timezone.utc))

    el = compute_elements(jd, phase_model=args.phase_model)
    print(f"JD = {jd:.6f}  ({ts.from_julian_date(jd).isoformat()})")
    print()
    print("Mean elements (degrees, wrapped to [0,360))")
    print(f"  L      = {el.L:.6f}")
    print(f"  M      = {el.M:.6f}")
    print(f"  F      = {el.F:.6f}")
    print(f"  D      = {el.D:.6f}")
    print(f"  Omega  = {el.Omega:.6f}")
    print()
    print(f"Phase ({el.phase_model}) = {el.phase:.6f}")
    return 0


def cmd_new_moons(argv: list[str]) -> int:
    from .core.config import SearchConfig
    from .engines.locator import find_new_moons
    from .formatting import format_iso

    p = argparse.ArgumentParser(prog="hilal new-moons", description="List the next new moons after a start instant.")
    p.add_argument("--start", help="ISO date/time (default: now)")
    p.add_argument("--count", type=int, default=3)
    p.add_argument("--strategy", choices=["estimate", "scan"], default="estimate")
    p.add_argument("--phase-model", choices=["apparent", "mean"], default="apparent")
    args = p.parse_args(argv)

    start = _parse_instant(args.start) if args.start else datetime.now(timezone.utc)
    search = SearchConfig(strategy=args.strategy, phase_model=args.phase_model)
    for i, t in enumerate(find_new_moons(start, args.count, search), start=1):
        print(f"{i:3d}  {format_iso(t)}")
    return 0


def cmd_visibility(argv: list[str]) -> int:
    from .engines.visibility import assess_visibility, compute_moon_age

    p = argparse.ArgumentParser(prog="hilal visibility", description="Assess crescent visibility from moon age at sunset.")
    p.add_argument("--hours", type=float, help="Moon age at sunset (hours)")
    p.add_argument("--new-moon", help="ISO instant of the new moon")
    p.add_argument("--sunset", help="ISO instant of sunset")
    args = p.parse_args(argv)

    if args.hours is not None:
        hours = args.hours
    elif args.new_moon and args.sunset:
        hours = compute_moon_age(_parse_instant(args.new_moon), _parse_instant(args.sunset))
    else:
        p.error("give --hours, or both --new-moon and --sunset")

    v = assess_visibility(hours)
    print(f"Moon age   : {hours:.2f} h")
    print(f"Visible    : {'yes' if v.visible else 'no'}")
    print(f"Confidence : {v.confidence.value}")
    print(f"Details    : {v.details}")
    return 0


def _make_provider(kind: str, config):
    from .providers import AstronomicalSunsetProvider, FallbackSunsetProvider, SunriseSunsetProvider

    if kind == "local":
        return AstronomicalSunsetProvider(config.provider)
    if kind == "api":
        return SunriseSunsetProvider(config.provider)
    return FallbackSunsetProvider(SunriseSunsetProvider(config.provider), AstronomicalSunsetProvider(config.provider))


def cmd_info(argv: list[str]) -> int:
    from .api import NewMoonFacade
    from .core.config import load_config
    from .formatting import format_iso, info_record

    config = load_config()
    loc = config.default_location

    p = argparse.ArgumentParser(prog="hilal info", description="New moons with sunset, moon age and visibility.")
    p.add_argument("--count", type=int, default=config.default_count)
    p.add_argument("--lat", type=float, default=loc.latitude, help="Latitude in degrees (positive North)")
    p.add_argument("--lon", type=float, default=loc.longitude, help="Longitude in degrees (positive East)")
    p.add_argument("--start", help="ISO date/time (default: now)")
    p.add_argument("--provider", choices=["local", "api", "fallback"], default="local")
    p.add_argument("--skip-failures", action="store_true", help="Leave out cycles whose sunset lookup fails")
    p.add_argument("--json", action="store_true", help="Print JSON records")
    args = p.parse_args(argv)

    facade = NewMoonFacade(_make_provider(args.provider, config), config)
    infos = facade.information(
        args.count,
        args.lat,
        args.lon,
        start=_parse_instant(args.start) if args.start else None,
        errors="skip" if args.skip_failures else "raise",
    )

    if args.json:
        print(json.dumps([info_record(i) for i in infos], indent=2))
        return 0

    print(f"Location: {args.lat:g}, {args.lon:g}")
    for info in infos:
        v = info.visibility
        print()
        print(f"New moon : {format_iso(info.new_moon)}")
        print(f"  Sunset   : {format_iso(info.sunset)}")
        print(f"  Moonset* : {format_iso(info.moonset)}  (+{info.minutes_between_sunset_and_moonset:.1f} min)")
        print(f"  Moon age : {info.moon_age_at_sunset_hours:.2f} h")
        print(f"  Visible  : {'yes' if v.visible else 'no'} ({v.confidence.value}) - {v.details}")
    if infos:
        print()
        print("* moonset is approximated by the end of civil twilight")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    load_dotenv()

    p = argparse.ArgumentParser(prog="hilal", description="New-moon timing and crescent visibility toolkit.")
    p.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("julian", help="Convert between UTC date/time and Julian Date")
    sub.add_parser("elements", help="Print lunar mean elements and phase")
    sub.add_parser("new-moons", help="List upcoming new moons")
    sub.add_parser("visibility", help="Assess visibility from moon age")
    sub.add_parser("info", help="New moons with sunset and visibility for a location")

    p_diag = sub.add_parser("diag", help="Diagnostics (needs the diagnostics extras)")
    p_diag.add_argument(
        "tool",
        choices=["lunation-lengths", "locator-precision"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    commands = {
        "julian": cmd_julian,
        "elements": cmd_elements,
        "new-moons": cmd_new_moons,
        "visibility": cmd_visibility,
        "info": cmd_info,
    }

    try:
        if args.cmd == "diag":
            tool_map = {
                "lunation-lengths": "hilal.diagnostics.lunation_lengths",
                "locator-precision": "hilal.diagnostics.locator_precision",
            }
            return _run_module_main(tool_map[args.tool], rest)
        return commands[args.cmd](rest)
    except InvalidArgumentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ProviderError as e:
        print(f"sunset lookup failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
