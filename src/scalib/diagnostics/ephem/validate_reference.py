#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from scalib.core.time import J2000
from scalib.core.types import Planet
from scalib.ephemeris.de422 import MAX_JD, MIN_JD, DE422PlanetProvider, ecliptic_of_date
from scalib.ephemeris.vsop87 import Vsop87EarthProvider
from scalib.reference import lunar, solar


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "scalib[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "scalib[diagnostics]"') from e


def _arcsec(a: float, b: float) -> float:
    return ((a - b + 180.0) % 360.0 - 180.0) * 3600.0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the VSOP87, solar and lunar series against DE422.")
    p.add_argument("--year-start", type=int, default=1000)
    p.add_argument("--year-end", type=int, default=3000)
    p.add_argument("--step-days", type=int, default=50)
    p.add_argument("--out-png", default="reference_validation.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    print("Loading DE422 Ephemeris...")
    de = DE422PlanetProvider.load()
    vsop = Vsop87EarthProvider()

    jd_start = max(J2000 + (args.year_start - 2000) * 365.25, MIN_JD + 1.0)
    jd_end = min(J2000 + (args.year_end - 2000) * 365.25, MAX_JD - 1.0)
    if jd_start > jd_end:
        raise ValueError(f"Requested range is outside valid ephemeris range [{MIN_JD}, {MAX_JD}]")

    jds = np.arange(jd_start, jd_end, args.step_days)
    years = 2000 + (jds - J2000) / 365.25

    print(f"Validating {len(jds)} points from {years[0]:.0f} to {years[-1]:.0f}...")

    err_earth_lon = []
    err_earth_r = []
    err_solar_lon = []
    err_lunar_lon = []
    err_lunar_lat = []

    for jd in jds:
        jd = float(jd)

        # Heliocentric Earth, both providers in the mean ecliptic of date
        e_de = de.heliocentric(Planet.EARTH, jd)
        e_vs = vsop.heliocentric(Planet.EARTH, jd)
        err_earth_lon.append(_arcsec(e_vs.lon_deg, e_de.lon_deg))
        err_earth_r.append((e_vs.distance_au - e_de.distance_au) * 1e8)

        # Geometric Sun: mean elements vs DE422
        err_solar_lon.append(_arcsec(solar.true_longitude(jd), (e_de.lon_deg + 180.0) % 360.0))

        # Moon, geocentric
        de_lon_moon, de_lat_moon, _ = ecliptic_of_date(de.eph.compute("moon", jd)[:3], jd)
        lun = lunar.lunar_ecliptic_position(jd)
        err_lunar_lon.append(_arcsec(lun.lon_deg, de_lon_moon))
        err_lunar_lat.append((lun.lat_deg - de_lat_moon) * 3600.0)

    fig, axs = plt.subplots(5, 1, figsize=(12, 14), sharex=True)

    panels = [
        (err_earth_lon, "VSOP87 Earth Longitude Error (VSOP87 - DE422)", "Error (arcsec)", "red"),
        (err_earth_r, "VSOP87 Earth Radius Error (VSOP87 - DE422)", "Error (1e-8 AU)", "purple"),
        (err_solar_lon, "Solar True Longitude Error (Mean Elements - DE422)", "Error (arcsec)", "orange"),
        (err_lunar_lon, "Lunar Longitude Error (Series - DE422)", "Error (arcsec)", "blue"),
        (err_lunar_lat, "Lunar Latitude Error (Series - DE422)", "Error (arcsec)", "green"),
    ]
    for ax, (err, title, ylabel, color) in zip(axs, panels):
        ax.scatter(years, err, s=1, alpha=0.5, color=color)
        ax.set_title(title)
        ax.set_ylabel(ylabel)
        ax.grid(True, alpha=0.3)
        print(f"{title}: rms {float(np.sqrt(np.mean(np.square(err)))):.3f}, max {float(np.max(np.abs(err))):.3f}")
    axs[-1].set_xlabel("Year")

    plt.suptitle(f"Reference Model Validation against DE422 ({years[0]:.0f} to {years[-1]:.0f})", fontsize=14)
    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
