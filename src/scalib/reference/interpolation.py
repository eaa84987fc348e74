"""
Bessel central-difference interpolation over equally spaced tables (Meeus ch. 3).

    interpolate3(x, y, xval)   3 samples, second differences
    interpolate5(x, y, xval)   5 samples, fourth differences

The interpolating factor is n = (xval - x_mid) / h with h the tabular
interval. Values with |n| > 0.5 are still computed, but a warning is logged:
a table centred closer to xval would give better accuracy.
"""

from __future__ import annotations

import logging
from typing import Sequence

from scalib.core.errors import InvalidInputError

log = logging.getLogger(__name__)


def _factor(x: Sequence[float], y: Sequence[float], xval: float, count: int) -> float:
    if len(x) != count or len(y) != count:
        raise InvalidInputError(f"need exactly {count} samples, got x={len(x)} y={len(y)}")
    if not x[0] < xval < x[-1]:
        raise InvalidInputError(f"Interpolating value {xval!r} is out of range ({x[0]!r}, {x[-1]!r})")
    h = x[1] - x[0]
    if h == 0.0:
        raise InvalidInputError("tabular interval must be non-zero")

    n = (xval - x[count // 2]) / h
    if abs(n) > 0.5:
        log.warning("Bad interpolating factor n=%.4f, results may have low accuracy", n)
    return n


def interpolate3(x: Sequence[float], y: Sequence[float], xval: float) -> float:
    """
    Example (Meeus 3.a): distances 0.884226, 0.877366, 0.870531 AU on
    7, 8, 9 Nov give 0.876125 at 8 Nov 4h21m.
    """
    n = _factor(x, y, xval, 3)
    a = y[1] - y[0]
    b = y[2] - y[1]
    c = b - a
    return y[1] + 0.5 * n * (a + b + n * c)


def interpolate5(x: Sequence[float], y: Sequence[float], xval: float) -> float:
    n = _factor(x, y, xval, 5)

    # first differences
    a = y[1] - y[0]
    b = y[2] - y[1]
    c = y[3] - y[2]
    d = y[4] - y[3]
    # second
    e = b - a
    f = c - b
    g = d - c
    # third
    h = f - e
    j = g - f
    # fourth
    k = j - h

    n2 = n * n
    return (
        y[2]
        + n * ((b + c) / 2.0 - (h + j) / 12.0)
        + n2 * (f / 2.0 - k / 24.0)
        + n2 * n * ((h + j) / 12.0)
        + n2 * n2 * (k / 24.0)
    )
