# tests/test_angle.py

import math
import random

import pytest
from scalib.reference import angle as ang


def test_piecewise_roundtrip_positive():
    a = ang.from_degrees(30, 23, 50)
    assert a == pytest.approx(30.0 + 23.0 / 60.0 + 50.0 / 3600.0, abs=1e-12)
    assert ang.to_dms(a) == (30, 23, 50, 0.0)
    assert ang.get_degrees(a) == 30
    assert ang.get_arcmins(a) == 23
    assert ang.get_arcsecs(a) == 50
    assert ang.get_milliarcsecs(a) == pytest.approx(0.0, abs=1e-6)


def test_sign_goes_to_first_nonzero_component():
    """
    Any negative component makes the whole angle negative; on the way
    back out only the first non-zero component carries the sign.
    """
    a = ang.from_degrees(0, -24, 34)
    assert a < 0
    assert ang.to_dms(a) == (0, -24, 34, 0.0)

    assert ang.to_dms(ang.from_degrees(0, 0, -5)) == (0, 0, -5, 0.0)
    assert ang.to_dms(ang.from_degrees(0, 0, 0, -250)) == (0, 0, 0, -250.0)
    assert ang.to_dms(ang.from_degrees(-12, 30)) == (-12, 30, 0, 0.0)


def test_hours():
    a = ang.from_hours(13, 10, 46, 135.1)
    assert a == pytest.approx(197.6922296, abs=1e-7)
    assert ang.to_hours(a) == pytest.approx(13.1794820, abs=1e-7)

    h, m, s, ms = ang.to_hms(a)
    assert (h, m, s) == (13, 10, 46)
    assert ms == pytest.approx(135.1, abs=1e-4)
    assert ang.get_hours(a) == 13
    assert ang.get_mins(a) == 10
    assert ang.get_secs(a) == 46
    assert ang.get_milliseconds(a) == pytest.approx(135.1, abs=1e-4)

    assert ang.from_hours(-1, 30) == pytest.approx(-22.5, abs=1e-12)


def test_reduce_keeps_sign_and_normalize_wraps():
    assert ang.reduce(400.0) == pytest.approx(40.0)
    assert ang.reduce(-400.0) == pytest.approx(-40.0)
    assert ang.reduce(-30.0) == pytest.approx(-30.0)
    assert ang.normalize(-30.0) == pytest.approx(330.0)
    assert ang.normalize(720.0) == pytest.approx(0.0)
    assert ang.wrap180(190.0) == pytest.approx(-170.0)

    # readers reduce first
    assert ang.to_degrees(370.5) == pytest.approx(10.5)
    assert ang.to_dms(400.0) == (40, 0, 0, 0.0)


def test_radians_and_trig():
    a = ang.from_radians(math.pi / 6.0)
    assert a == pytest.approx(30.0, abs=1e-12)
    assert ang.to_radians(a) == pytest.approx(math.pi / 6.0, abs=1e-12)
    assert ang.get_sin(a) == pytest.approx(0.5, abs=1e-12)
    assert ang.get_cos(ang.from_degrees(60)) == pytest.approx(0.5, abs=1e-12)

    s, c = ang.get_sincos(390.0)
    assert s == pytest.approx(0.5, abs=1e-12)
    assert c == pytest.approx(math.sqrt(3.0) / 2.0, abs=1e-12)


def test_decimal_degrees_passthrough():
    assert ang.from_decimal_degrees(123.456) == 123.456
    assert ang.arcsec_to_deg(3600.0) == 1.0


def test_reduce_is_idempotent_and_bounded():
    random.seed(42)
    for _ in range(10000):
        a = random.uniform(-1e6, 1e6)
        r = ang.reduce(a)
        assert -360.0 < r < 360.0
        assert ang.reduce(r) == r
        # sign preserved
        assert r == 0.0 or (r > 0) == (a > 0)


def test_conversion_roundtrips():
    random.seed(42)
    for _ in range(10000):
        x = random.uniform(-5000.0, 5000.0)
        assert ang.to_degrees(ang.from_decimal_degrees(x)) == ang.reduce(x)

        r = random.uniform(-50.0, 50.0)
        assert ang.to_radians(ang.from_radians(r)) == pytest.approx(math.fmod(r, 2.0 * math.pi), abs=1e-9)
