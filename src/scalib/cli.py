from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from typing import Optional

from scalib.core.types import CalendarDate, GeoLocation


_DATE_RE = re.compile(
    r"^(-?\d+)-(\d{1,2})-(\d{1,2}(?:\.\d+)?)"
    r"(?:[T ](\d{1,2}):(\d{2})(?::(\d{2}(?:\.\d+)?))?)?$"
)
_SEXA_RE = re.compile(r"^([+-]?)(\d+)(?::(\d+)(?::(\d+(?:\.\d+)?))?)?$")


def _parse_date(s: str) -> CalendarDate:
    """YYYY-MM-DD[.ddd] or YYYY-MM-DDTHH:MM[:SS] (UT, astronomical year numbering)."""
    from scalib.core.time import day_fraction

    m = _DATE_RE.match(s.strip())
    if not m:
        raise argparse.ArgumentTypeError(f"bad date {s!r}; expected YYYY-MM-DD[THH:MM[:SS]]")
    y, mo, d, hh, mm, ss = m.groups()
    day = float(d)
    if hh is not None:
        day += day_fraction(int(hh), int(mm), float(ss or 0.0))
    return CalendarDate(int(y), int(mo), day)


def _parse_sexagesimal(s: str) -> tuple[int, int, int, float]:
    """'[+-]A[:B[:C.ccc]]' -> (a, b, c, milli) with the sign on every component."""
    m = _SEXA_RE.match(s.strip())
    if not m:
        raise argparse.ArgumentTypeError(f"bad sexagesimal value {s!r}; expected [+-]A:B:C.ccc")
    sign, a, b, c = m.groups()
    sec = float(c or 0.0)
    k = -1 if sign == "-" else 1
    return k * int(a), k * int(b or 0), k * int(sec), k * round((sec - int(sec)) * 1000.0, 6)


def _fmt_hms(angle: float) -> str:
    from scalib.reference.angle import normalize, to_hms

    h, m, s, ms = to_hms(normalize(angle))
    return f"{h:02d}h{m:02d}m{s:02d}.{int(ms):03d}s"


def _fmt_dms(angle: float) -> str:
    from scalib.reference.angle import reduce, to_dms

    d, m, s, ms = to_dms(angle)
    sign = "-" if reduce(angle) < 0 else "+"
    return f"{sign}{abs(d)}°{abs(m):02d}'{abs(s):02d}.{int(abs(ms)):03d}\""


def _add_location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lon-west", type=float, default=None, help="Observer longitude in degrees (positive WEST)")
    p.add_argument("--lat", type=float, default=None, help="Observer latitude in degrees (positive north)")
    p.add_argument("--refraction", action="store_true", help="Add atmospheric refraction to the altitude")


def _location(args) -> Optional[GeoLocation]:
    if args.lon_west is None or args.lat is None:
        return None
    return GeoLocation(longitude_deg=args.lon_west, latitude_deg=args.lat)


def _delta_t(args):
    from scalib.reference.deltat import ConstantDeltaT

    return None if args.delta_t is None else ConstantDeltaT(args.delta_t)


def _print_position(body, loc: Optional[GeoLocation], refraction: bool) -> None:
    from scalib.reference.coordinates import azimuth_from_north
    from scalib.reference.earth import refraction as refraction_deg

    pos = body.position
    print(f"  JD (UT)         = {pos.jd_ut:.6f}")
    print(f"  JD (evaluated)  = {pos.jd:.6f}")
    print(f"  Right ascension = {_fmt_hms(pos.ra_deg)}  ({pos.ra_deg % 360.0:.6f} deg)")
    print(f"  Declination     = {_fmt_dms(pos.dec_deg)}  ({pos.dec_deg:.6f} deg)")
    if pos.distance_au is not None:
        print(f"  Distance        = {pos.distance_au:.8f} AU")

    if loc is None:
        return
    hz = body.local_coordinates(loc)
    alt = hz.altitude_deg
    if refraction and alt > -1.0:
        alt += refraction_deg(alt)
    print()
    print(f"Local (lon {loc.longitude_deg:+.4f} W, lat {loc.latitude_deg:+.4f}):")
    print(f"  Azimuth (from S) = {hz.azimuth_deg:.6f} deg")
    print(f"  Azimuth (from N) = {azimuth_from_north(hz.azimuth_deg):.6f} deg")
    print(f"  Altitude         = {alt:.6f} deg{' (refracted)' if refraction else ''}")


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


# ============================================================
# Commands
# ============================================================

def cmd_jd(argv: list[str]) -> int:
    from scalib.reference import julian_day as jdm

    p = argparse.ArgumentParser(prog="scalib jd", description="Julian Day, weekday and sidereal time of a date (UT).")
    p.add_argument("date", type=_parse_date, help="YYYY-MM-DD[THH:MM[:SS]]")
    args = p.parse_args(argv)

    jd = jdm.from_calendar_date(args.date)
    back = jdm.to_calendar_date(jd)

    print(f"Date            = {args.date.year}-{args.date.month:02d}-{args.date.day:.6f}")
    print(f"JD              = {jd:.6f}")
    print(f"Round trip      = {back.year}-{back.month:02d}-{back.day:.6f}")
    print(f"Gregorian       = {jdm.is_gregorian(args.date)}")
    print(f"Weekday         = {jdm.weekday(jd).name.title()}")
    print(f"Day of year     = {jdm.day_of_year(jd)}")
    print(f"T (centuries)   = {jdm.centuries_since_2000(jd):.12f}")
    print(f"Delta T         = {jdm.dynamical_time_offset(jd) * 86400.0:.2f} s")
    print(f"Mean sidereal   = {_fmt_hms(jdm.mean_sidereal_time(jd))}")
    print(f"Apparent sid.   = {_fmt_hms(jdm.sidereal_time(jd))}")
    return 0


def cmd_nutation(argv: list[str]) -> int:
    from scalib.reference import earth

    p = argparse.ArgumentParser(prog="scalib nutation", description="Nutation and obliquity at a Julian Day.")
    p.add_argument("--jd", type=float, default=2451545.0, help="Julian Day (default: J2000.0)")
    args = p.parse_args(argv)

    nut = earth.nutation(args.jd)
    print(f"JD               = {args.jd:.6f}")
    print(f"Nutation dpsi    = {nut.longitude_deg * 3600.0:+.4f}\"")
    print(f"Nutation deps    = {nut.obliquity_deg * 3600.0:+.4f}\"")
    print(f"Mean obliquity   = {_fmt_dms(earth.ecliptic_obliquity(args.jd))}")
    print(f"True obliquity   = {_fmt_dms(earth.true_obliquity(args.jd))}")
    return 0


def cmd_sun(argv: list[str]) -> int:
    from scalib.reference.solar import Sun

    p = argparse.ArgumentParser(prog="scalib sun", description="Apparent position of the Sun.")
    p.add_argument("date", type=_parse_date, help="YYYY-MM-DD[THH:MM[:SS]] (UT)")
    p.add_argument("--provider", default=None, help="Planet data provider (default: vsop87)")
    p.add_argument("--delta-t", type=float, default=None, help="Constant Delta T in seconds")
    _add_location_args(p)
    args = p.parse_args(argv)

    sun = Sun(provider=args.provider, delta_t=_delta_t(args))
    sun.update_position(args.date)
    print("Sun:")
    print(f"  Apparent longitude = {sun.ecliptic.lon_deg:.6f} deg")
    _print_position(sun, _location(args), args.refraction)
    return 0


def cmd_moon(argv: list[str]) -> int:
    from scalib.reference.lunar import Moon, lunar_ecliptic_position

    p = argparse.ArgumentParser(prog="scalib moon", description="Geocentric position of the Moon.")
    p.add_argument("date", type=_parse_date, help="YYYY-MM-DD[THH:MM[:SS]] (UT)")
    _add_location_args(p)
    args = p.parse_args(argv)

    moon = Moon()
    pos = moon.update_position(args.date)
    ecl = lunar_ecliptic_position(pos.jd)
    print("Moon:")
    print(f"  Longitude       = {ecl.lon_deg % 360.0:.6f} deg")
    print(f"  Latitude        = {ecl.lat_deg:.6f} deg")
    print(f"  Distance        = {ecl.distance_km:.1f} km")
    _print_position(moon, _location(args), args.refraction)
    return 0


def cmd_star(argv: list[str]) -> int:
    from scalib.reference.angle import from_degrees, from_hours
    from scalib.reference.stellar import Star

    p = argparse.ArgumentParser(prog="scalib star", description="Apparent place of a fixed star.")
    p.add_argument("date", type=_parse_date, help="YYYY-MM-DD[THH:MM[:SS]] (UT)")
    p.add_argument("--ra", type=_parse_sexagesimal, required=True, help="J2000 right ascension HH:MM:SS.sss")
    p.add_argument("--dec", type=_parse_sexagesimal, required=True, help="J2000 declination [+-]DD:MM:SS.sss")
    p.add_argument("--pm-ra", type=float, default=0.0, help="Proper motion in RA, seconds of time per year")
    p.add_argument("--pm-dec", type=float, default=0.0, help="Proper motion in Dec, arcseconds per year")
    p.add_argument("--delta-t", type=float, default=None, help="Constant Delta T in seconds")
    _add_location_args(p)
    args = p.parse_args(argv)

    star = Star(
        from_hours(*args.ra),
        from_degrees(*args.dec),
        from_hours(0, 0, 0, args.pm_ra * 1000.0),
        from_degrees(0, 0, 0, args.pm_dec * 1000.0),
        delta_t=_delta_t(args),
    )
    star.update_position(args.date)
    print("Star:")
    _print_position(star, _location(args), args.refraction)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="scalib", description="Sun, Moon and star positions.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Log warnings (-v) or debug output (-vv)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("jd", help="Julian Day, weekday and sidereal time of a date")
    sub.add_parser("nutation", help="Nutation and obliquity at a Julian Day")
    sub.add_parser("sun", help="Apparent position of the Sun")
    sub.add_parser("moon", help="Geocentric position of the Moon")
    sub.add_parser("star", help="Apparent place of a fixed star")

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate-ref"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    level = logging.ERROR
    if args.verbose == 1:
        level = logging.WARNING
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "jd":
        return cmd_jd(rest)

    if args.cmd == "nutation":
        return cmd_nutation(rest)

    if args.cmd == "sun":
        return cmd_sun(rest)

    if args.cmd == "moon":
        return cmd_moon(rest)

    if args.cmd == "star":
        return cmd_star(rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate-ref": "scalib.diagnostics.ephem.validate_reference",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
