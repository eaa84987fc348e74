#ephemeris/de422.py
from __future__ import annotations

import logging
import math
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from scalib.core.errors import PlanetDataUnavailableError
from scalib.core.time import AU_KM
from scalib.core.types import HeliocentricPosition, Planet
from scalib.reference import astro_args as aa

log = logging.getLogger(__name__)

# jplephem segment names of the DE4xx "old style" ephemeris
_SEGMENTS = {
    Planet.MERCURY: "mercury",
    Planet.VENUS: "venus",
    Planet.MARS: "mars",
    Planet.JUPITER: "jupiter",
    Planet.SATURN: "saturn",
    Planet.URANUS: "uranus",
    Planet.NEPTUNE: "neptune",
}

# DE422 coverage, JD(TT)
MIN_JD = 625648.5
MAX_JD = 2816816.5

_EMRAT_FALLBACK = 81.30056907419062


def _load_constants_dict(de422_mod) -> dict:
    # de422 ships constants.npy next to its __init__
    import numpy as np

    p = pathlib.Path(de422_mod.__file__).resolve().parent / "constants.npy"
    if not p.exists():
        return {}
    return np.load(str(p), allow_pickle=True).item()


def _get_emrat(constants: dict) -> float:
    for k in ("EMRAT", "emrat"):
        if k in constants:
            return float(constants[k])
    return _EMRAT_FALLBACK


def ecliptic_of_date(v_eq_j2000, jd: float) -> Tuple[float, float, float]:
    """(lon_deg, lat_deg, distance_km) of a J2000 equatorial vector, referred to the mean ecliptic of date."""
    rot = aa.matrix_eq_j2000_to_ecl_date(aa.T_centuries(jd))
    x, y, z = aa.apply_matrix(rot, (float(v_eq_j2000[0]), float(v_eq_j2000[1]), float(v_eq_j2000[2])))
    lon = math.degrees(math.atan2(y, x)) % 360.0
    lat = math.degrees(math.atan2(z, math.hypot(x, y)))
    return lon, lat, math.sqrt(x * x + y * y + z * z)


@dataclass
class DE422PlanetProvider:
    """
    Geometric heliocentric positions of the eight planets from JPL DE422.

    Requires optional deps:
      pip install "scalib[ephemeris]"
    """
    eph: object
    emrat: float

    @classmethod
    def load(cls) -> "DE422PlanetProvider":
        try:
            import de422  # type: ignore
            from jplephem import Ephemeris  # type: ignore
        except ImportError as e:
            raise PlanetDataUnavailableError(
                "DE422 ephemeris not available. Install extras:\n"
                "  pip install \"scalib[ephemeris]\""
            ) from e

        log.debug("loading DE422 from %s", de422.__file__)
        eph = Ephemeris(de422)
        try:
            const = _load_constants_dict(de422)
        except (OSError, ValueError) as e:
            log.warning("could not read DE422 constants (%s); using EMRAT=%s", e, _EMRAT_FALLBACK)
            const = {}
        return cls(eph=eph, emrat=_get_emrat(const))

    def barycentric_km(self, planet: Planet, jd: float):
        """J2000 equatorial position vector (km) relative to the solar system barycentre."""
        if planet is Planet.EARTH:
            r_emb = self.eph.compute("earthmoon", jd)[:3]
            r_em = self.eph.compute("moon", jd)[:3]  # geocentric moon
            return r_emb - r_em / (self.emrat + 1.0)
        return self.eph.compute(_SEGMENTS[planet], jd)[:3]

    def heliocentric(self, planet: Planet, jd: float) -> HeliocentricPosition:
        planet = Planet(planet)
        if not MIN_JD < jd < MAX_JD:
            raise PlanetDataUnavailableError(f"JD {jd} outside DE422 coverage [{MIN_JD}, {MAX_JD}]")

        r = self.barycentric_km(planet, jd) - self.eph.compute("sun", jd)[:3]
        lon, lat, dist_km = ecliptic_of_date(r, jd)
        return HeliocentricPosition(lon_deg=lon, lat_deg=lat, distance_au=dist_km / AU_KM)

    def info(self) -> Dict[str, Any]:
        return {"name": "de422", "emrat": self.emrat, "planets": [p.name for p in Planet]}
