# tests/test_interpolation.py

import logging

import pytest
from scalib.core.errors import InvalidInputError
from scalib.core.time import day_fraction
from scalib.reference.interpolation import interpolate3, interpolate5


def test_meeus_example_3a():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 3.a.
    Distance of Mars on 1992 Nov 7, 8, 9 -> value at Nov 8, 4h21m.
    """
    x = [7.0, 8.0, 9.0]
    y = [0.884226, 0.877366, 0.870531]
    assert interpolate3(x, y, 8.0 + day_fraction(4, 21)) == pytest.approx(0.876125, abs=1e-6)


def test_exact_for_polynomials():
    x = [1.0, 2.0, 3.0, 4.0, 5.0]
    assert interpolate5(x, [v ** 4 for v in x], 3.3) == pytest.approx(3.3 ** 4, abs=1e-9)
    assert interpolate5(x, [2.0 * v - 1.0 for v in x], 2.6) == pytest.approx(4.2, abs=1e-12)
    assert interpolate3(x[:3], [v * v for v in x[:3]], 1.75) == pytest.approx(1.75 ** 2, abs=1e-12)


def test_bad_factor_warns(caplog):
    x = [7.0, 8.0, 9.0]
    y = [0.884226, 0.877366, 0.870531]
    with caplog.at_level(logging.WARNING, logger="scalib.reference.interpolation"):
        interpolate3(x, y, 8.8)
    assert "Bad interpolating factor" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="scalib.reference.interpolation"):
        interpolate3(x, y, 8.2)
    assert caplog.text == ""


def test_out_of_range_and_shape():
    x = [7.0, 8.0, 9.0]
    y = [1.0, 2.0, 3.0]
    with pytest.raises(InvalidInputError, match="out of range"):
        interpolate3(x, y, 9.5)
    with pytest.raises(InvalidInputError):
        interpolate3(x, y, 7.0)
    with pytest.raises(InvalidInputError):
        interpolate5(x, y, 8.0)
