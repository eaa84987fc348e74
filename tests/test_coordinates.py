# tests/test_coordinates.py

import pytest
from scalib.core.errors import InvalidInputError
from scalib.core.types import BodyPosition, GeoLocation
from scalib.reference import coordinates as co
from scalib.reference.angle import from_degrees, from_hours


def test_meeus_example_13a_equatorial_to_ecliptic():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 13.a.
    Pollux (J2000): ra 7h45m18.946s, dec +28°01'34.26" -> lon 113.215630, lat 6.684170
    """
    ecl = co.equatorial_to_ecliptic(2451545.0, from_hours(7, 45, 18, 946), from_degrees(28, 1, 34, 260))
    assert ecl.lon_deg == pytest.approx(113.215630, abs=1e-6)
    assert ecl.lat_deg == pytest.approx(6.684170, abs=1e-6)

    eq = co.ecliptic_to_equatorial(2451545.0, ecl.lon_deg, ecl.lat_deg)
    assert eq.ra_deg == pytest.approx(116.328942, abs=1e-6)
    assert eq.dec_deg == pytest.approx(28.026183, abs=1e-6)


def test_meeus_example_13b_local_horizon():
    """
    Example 13.b: Venus seen from the US Naval Observatory,
    1987 April 10, 19h21m00s UT -> azimuth 68.0337 (from south), altitude 15.1249
    """
    loc = GeoLocation(longitude_deg=from_degrees(77, 3, 56), latitude_deg=from_degrees(38, 55, 17))
    hz = co.equatorial_to_local(2446896.30625, loc, from_hours(23, 9, 16, 641), from_degrees(-6, 43, 11, 610))
    assert hz.azimuth_deg == pytest.approx(68.0337, abs=1e-3)
    assert hz.altitude_deg == pytest.approx(15.1249, abs=1e-3)


def test_azimuth_from_north():
    assert co.azimuth_from_north(14.340241) == pytest.approx(194.340241)
    assert co.azimuth_from_north(-90.0) == pytest.approx(90.0)


def test_local_requires_location():
    with pytest.raises(InvalidInputError):
        co.equatorial_to_local(2451545.0, None, 0.0, 0.0)


def test_topocentric_local():
    loc = GeoLocation(longitude_deg=0.0, latitude_deg=51.5)
    geo = BodyPosition(ra_deg=120.0, dec_deg=20.0, jd=2451545.0, jd_ut=2451545.0, distance_au=0.00257)

    shifted, hz = co.topocentric_local(geo, loc)
    plain = co.equatorial_to_local(geo.jd_ut, loc, geo.ra_deg, geo.dec_deg)

    # lunar distance: parallax lowers the body by up to ~1 degree
    assert 0.0 < plain.altitude_deg - hz.altitude_deg < 1.0
    assert shifted.jd == geo.jd
    assert shifted.distance_au == geo.distance_au
    assert shifted.dec_deg != geo.dec_deg


def test_topocentric_needs_distance():
    pos = BodyPosition(ra_deg=0.0, dec_deg=0.0, jd=2451545.0, jd_ut=2451545.0)
    with pytest.raises(InvalidInputError, match="distance"):
        co.topocentric_local(pos, GeoLocation(0.0, 0.0))


def test_negative_jd_rejected():
    loc = GeoLocation(0.0, 45.0)
    with pytest.raises(InvalidInputError):
        co.equatorial_to_ecliptic(-1.0, 10.0, 10.0)
    with pytest.raises(InvalidInputError):
        co.ecliptic_to_equatorial(-1.0, 10.0, 10.0)
    with pytest.raises(InvalidInputError):
        co.equatorial_to_local(-1.0, loc, 10.0, 10.0)
