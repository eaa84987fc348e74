# tests/test_lunar.py

import pytest
from scalib.core.errors import PositionNotComputedError
from scalib.core.time import AU_KM
from scalib.core.types import CalendarDate, GeoLocation
from scalib.reference import lunar
from scalib.reference.angle import normalize
from scalib.reference.coordinates import ecliptic_to_equatorial, equatorial_to_local

# Jean Meeus, Astronomical Algorithms (2nd Ed), Example 47.a.
# 1992 April 12, 0h TD, JD 2448724.5
JD_47A = 2448724.5


def test_meeus_example_47a_mean_elements():
    assert normalize(lunar.mean_longitude(JD_47A)) == pytest.approx(134.290182, abs=1e-6)
    assert normalize(lunar.mean_elongation_from_sun(JD_47A)) == pytest.approx(113.842304, abs=1e-6)
    assert normalize(lunar.mean_anomaly(JD_47A)) == pytest.approx(5.150833, abs=1e-6)
    assert normalize(lunar.latitude_argument(JD_47A)) == pytest.approx(219.889721, abs=1e-6)


def test_meeus_example_47a_position():
    """lon 133.162655, lat -3.229126, distance 368409.7 km"""
    pos = lunar.lunar_ecliptic_position(JD_47A)
    assert normalize(pos.lon_deg) == pytest.approx(133.162655, abs=5e-4)
    assert pos.lat_deg == pytest.approx(-3.229126, abs=5e-4)
    assert pos.distance_km == pytest.approx(368409.7, abs=5.0)


def test_moon_update_position():
    moon = lunar.Moon()
    pos = moon.update_position(CalendarDate(1992, 4, 12))

    # no Delta T for the Moon
    assert pos.jd == JD_47A
    assert pos.jd_ut == JD_47A

    ecl = lunar.lunar_ecliptic_position(JD_47A)
    eq = ecliptic_to_equatorial(JD_47A, ecl.lon_deg, ecl.lat_deg)
    assert pos.ra_deg == eq.ra_deg
    assert pos.dec_deg == eq.dec_deg
    assert pos.distance_au == pytest.approx(ecl.distance_km / AU_KM, abs=1e-12)

    # geometric, mean equinox; Meeus' apparent place is 134.688470, 13.768368
    assert normalize(pos.ra_deg) == pytest.approx(134.684, abs=1e-2)
    assert pos.dec_deg == pytest.approx(13.768, abs=1e-2)


def test_moon_local_coordinates_include_parallax():
    loc = GeoLocation(longitude_deg=-2.35, latitude_deg=48.85)
    moon = lunar.Moon()
    geo = moon.update_position(CalendarDate(1992, 4, 12.25))

    hz = moon.local_coordinates(loc)
    plain = equatorial_to_local(geo.jd_ut, loc, geo.ra_deg, geo.dec_deg)
    assert 0.0 < plain.altitude_deg - hz.altitude_deg < 1.05
    assert moon.position.dec_deg != geo.dec_deg


def test_unpositioned_moon():
    with pytest.raises(PositionNotComputedError):
        lunar.Moon().local_coordinates(GeoLocation(0.0, 0.0))
