# tests/test_solar.py

import pytest
from scalib.core.errors import PositionNotComputedError
from scalib.core.time import day_fraction
from scalib.core.types import CalendarDate, GeoLocation, HeliocentricPosition
from scalib.reference import solar
from scalib.reference.angle import normalize
from scalib.reference.coordinates import equatorial_to_local
from scalib.reference.deltat import ConstantDeltaT
from scalib.reference.earth import nutation

# --- NREL SPA Test Case (Appendix A.5) ---
# Date: October 17, 2003, 12:30:30 LST (UTC -7) -> 19:30:30 UT
# Longitude: 105.1786 deg West
# Latitude: 39.742476 deg North
# Delta T: 67 seconds
#
# Targets:
# geocentric ra = 202.22741, dec = -9.31434
# topocentric azimuth = 194.340241 (from north), elevation = 39.872046 (no refraction)
NREL_DATE = CalendarDate(2003, 10, 17 + day_fraction(19, 30, 30))
NREL_LOC = GeoLocation(longitude_deg=105.1786, latitude_deg=39.742476)


def test_meeus_example_25a_low_accuracy():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 25.a.
    1992 October 13, 0h TD: M = 278.99397, true longitude 199.90988
    """
    jd = 2448908.5
    assert normalize(solar.mean_anomaly(jd)) == pytest.approx(278.99397, abs=1e-5)
    assert solar.equation_of_center(jd) == pytest.approx(-1.89732, abs=1e-5)
    assert normalize(solar.true_longitude(jd)) == pytest.approx(199.90988, abs=2e-4)


def test_meeus_example_25b_apparent_position():
    """
    Example 25.b, same date, from the VSOP87 Earth position:
    apparent ra 198.378178, dec -7.783871, R = 0.99760775 AU
    """
    sun = solar.Sun(delta_t=ConstantDeltaT(0.0))
    pos = sun.update_position(CalendarDate(1992, 10, 13))

    assert pos.jd == 2448908.5
    assert pos.jd_ut == 2448908.5
    assert pos.distance_au == pytest.approx(0.99760775, abs=1e-6)
    assert sun.ecliptic.lon_deg == pytest.approx(199.906061, abs=1e-4)
    assert normalize(pos.ra_deg) == pytest.approx(198.378178, abs=1e-3)
    assert pos.dec_deg == pytest.approx(-7.783871, abs=1e-3)


def test_nrel_spa_geocentric():
    sun = solar.Sun(delta_t=ConstantDeltaT(67.0))
    pos = sun.update_position(NREL_DATE)

    assert pos.jd - pos.jd_ut == pytest.approx(67.0 / 86400.0, abs=1e-9)
    assert normalize(pos.ra_deg) == pytest.approx(202.22741, abs=2e-3)
    assert pos.dec_deg == pytest.approx(-9.31434, abs=2e-3)


def test_nrel_spa_local_coordinates():
    sun = solar.Sun(delta_t=ConstantDeltaT(67.0))
    geo = sun.update_position(NREL_DATE)
    hz = sun.local_coordinates(NREL_LOC)

    assert hz.azimuth_deg == pytest.approx(14.340241, abs=1e-2)
    assert hz.altitude_deg == pytest.approx(39.872046, abs=1e-2)

    # stored position is now topocentric
    assert sun.position.ra_deg != geo.ra_deg
    assert abs(sun.position.dec_deg - geo.dec_deg) < 8.8 / 3600.0


def test_unpositioned_sun():
    sun = solar.Sun()
    assert not sun.is_positioned
    with pytest.raises(PositionNotComputedError):
        sun.local_coordinates(NREL_LOC)
    with pytest.raises(PositionNotComputedError):
        _ = sun.position
    with pytest.raises(PositionNotComputedError):
        _ = sun.ecliptic


class _FixedEarth:
    def heliocentric(self, planet, jd):
        return HeliocentricPosition(lon_deg=10.0, lat_deg=0.0, distance_au=1.0)

    def info(self):
        return {"name": "fixed"}


def test_custom_provider_pipeline():
    """lon = L + 180 + dpsi + aberration/R"""
    sun = solar.Sun(provider=_FixedEarth(), delta_t=ConstantDeltaT(0.0))
    pos = sun.update_position(CalendarDate(2000, 1, 1.5))

    expected = 190.0 + nutation(pos.jd).longitude_deg + solar.SUN_ABERRATION_DEG
    assert sun.ecliptic.lon_deg == pytest.approx(expected, abs=1e-12)
    assert sun.ecliptic.lat_deg == 0.0
    assert pos.distance_au == 1.0


def test_local_coordinates_use_ut_sidereal_time():
    sun = solar.Sun(delta_t=ConstantDeltaT(67.0))
    geo = sun.update_position(NREL_DATE)
    hz = sun.local_coordinates(NREL_LOC)
    topo = sun.position

    at_ut = equatorial_to_local(geo.jd_ut, NREL_LOC, topo.ra_deg, topo.dec_deg)
    assert hz.azimuth_deg == pytest.approx(at_ut.azimuth_deg, abs=1e-12)
    assert hz.altitude_deg == pytest.approx(at_ut.altitude_deg, abs=1e-12)

    # 67 s of Earth rotation is about 0.28 deg of hour angle
    at_td = equatorial_to_local(geo.jd, NREL_LOC, topo.ra_deg, topo.dec_deg)
    assert abs(hz.azimuth_deg - at_td.azimuth_deg) + abs(hz.altitude_deg - at_td.altitude_deg) > 0.1

    # Delta T then only moves the Sun along its orbit
    sun0 = solar.Sun(delta_t=ConstantDeltaT(0.0))
    sun0.update_position(NREL_DATE)
    hz0 = sun0.local_coordinates(NREL_LOC)
    assert hz0.azimuth_deg == pytest.approx(hz.azimuth_deg, abs=0.01)
    assert hz0.altitude_deg == pytest.approx(hz.altitude_deg, abs=0.01)
