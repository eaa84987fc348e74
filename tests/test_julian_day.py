# tests/test_julian_day.py

import random

import pytest
from scalib.core.errors import InvalidInputError
from scalib.core.time import day_fraction
from scalib.core.types import CalendarDate, Weekday
from scalib.reference import julian_day as jdm
from scalib.reference.angle import normalize


def test_meeus_example_7a_gregorian():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 7.a.
    Sputnik launch: 1957 October 4.81 -> JD 2436116.31
    """
    assert jdm.from_calendar_date(CalendarDate(1957, 10, 4.81)) == pytest.approx(2436116.31, abs=1e-9)


def test_meeus_example_7b_julian():
    """Example 7.b: 333 January 27, 12h (Julian calendar) -> JD 1842713.0"""
    assert jdm.from_calendar_date(CalendarDate(333, 1, 27.5)) == pytest.approx(1842713.0, abs=1e-9)


def test_known_epochs():
    assert jdm.from_calendar_date(CalendarDate(2000, 1, 1.5)) == 2451545.0
    assert jdm.from_calendar_date(CalendarDate(-4712, 1, 1.5)) == 0.0
    assert jdm.from_calendar_date(CalendarDate(2011, 2, 14.5)) == 2455607.0


def test_gregorian_reform_boundary():
    # 1582-10-04 (Julian) is followed by 1582-10-15 (Gregorian)
    before = jdm.from_calendar_date(CalendarDate(1582, 10, 4.0))
    after = jdm.from_calendar_date(CalendarDate(1582, 10, 15.0))
    assert after - before == pytest.approx(1.0, abs=1e-9)

    assert not jdm.is_gregorian(CalendarDate(1582, 10, 4.0))
    assert jdm.is_gregorian(CalendarDate(1582, 10, 15.0))


def test_inverse_examples():
    """Meeus 7.c-style inversions, including a negative year."""
    d = jdm.to_calendar_date(2436116.31)
    assert (d.year, d.month) == (1957, 10)
    assert d.day == pytest.approx(4.81, abs=1e-6)

    d = jdm.to_calendar_date(1507900.13)
    assert (d.year, d.month) == (-584, 5)
    assert d.day == pytest.approx(28.63, abs=1e-6)

    assert jdm.from_calendar_date(CalendarDate(-584, 5, 28.63)) == pytest.approx(1507900.13, abs=1e-9)


def test_calendar_roundtrip():
    random.seed(42)
    for _ in range(2000):
        jd_in = random.uniform(0.0, 3000000.0)
        jd_out = jdm.from_calendar_date(jdm.to_calendar_date(jd_in))
        assert jd_out == pytest.approx(jd_in, abs=1e-6)


def test_leap_years():
    assert jdm.is_leap_year(2000)
    assert jdm.is_leap_year(2012)
    assert not jdm.is_leap_year(1900)
    assert not jdm.is_leap_year(2011)
    # Julian rule up to the reform
    assert jdm.is_leap_year(1500)
    assert jdm.is_leap_year(-4712)


def test_weekday():
    """Meeus 7.e: 1954 June 30 was a Wednesday."""
    assert jdm.weekday(2434923.5) is Weekday.WEDNESDAY
    assert jdm.weekday(jdm.from_calendar_date(CalendarDate(2011, 2, 14.5))) is Weekday.MONDAY


def test_day_of_year():
    """Meeus 7.f and 7.g."""
    assert jdm.day_of_year(jdm.from_calendar_date(CalendarDate(1978, 11, 14))) == 318
    assert jdm.day_of_year(jdm.from_calendar_date(CalendarDate(1988, 4, 22))) == 113


def test_from_day_of_year():
    assert jdm.from_day_of_year(1978, 318) == jdm.from_calendar_date(CalendarDate(1978, 11, 14))
    assert jdm.from_day_of_year(1988, 113.5) == jdm.from_calendar_date(CalendarDate(1988, 4, 22.5))
    assert jdm.from_day_of_year(2000, 366) == jdm.from_calendar_date(CalendarDate(2000, 12, 31))

    with pytest.raises(InvalidInputError):
        jdm.from_day_of_year(2011, 366)
    with pytest.raises(InvalidInputError):
        jdm.from_day_of_year(2011, 0)


def test_invalid_inputs():
    with pytest.raises(InvalidInputError):
        jdm.from_calendar_date(CalendarDate(-4713, 6, 1))
    with pytest.raises(InvalidInputError):
        jdm.to_calendar_date(-1.0)
    with pytest.raises(InvalidInputError):
        CalendarDate(2000, 13, 1)
    with pytest.raises(ValueError):
        CalendarDate(2000, 1, 0.5)


def test_time_arguments():
    assert jdm.centuries_since_2000(2451545.0) == 0.0
    assert jdm.centuries_since_2000(2488070.0) == pytest.approx(1.0)
    assert jdm.millennia_since_2000(2816795.0) == pytest.approx(1.0)


def test_meeus_example_12a_sidereal_time():
    """
    Example 12.a: 1987 April 10, 0h UT.
    Mean sidereal time 13h10m46.3668s, apparent 13h10m46.1351s.
    """
    jd = jdm.from_calendar_date(CalendarDate(1987, 4, 10))
    assert jd == 2446895.5
    # reduce() keeps the sign, so pre-J2000 values come back negative
    assert normalize(jdm.mean_sidereal_time(jd)) == pytest.approx(197.693195, abs=1e-6)
    assert normalize(jdm.sidereal_time(jd)) == pytest.approx(197.6922296, abs=1e-5)


def test_meeus_example_12b_sidereal_time():
    """Example 12.b: 1987 April 10, 19h21m00s UT -> 128.7378734 deg."""
    jd = jdm.from_calendar_date(CalendarDate(1987, 4, 10 + day_fraction(19, 21)))
    assert jd == pytest.approx(2446896.30625, abs=1e-9)
    assert normalize(jdm.mean_sidereal_time(jd)) == pytest.approx(128.7378734, abs=1e-6)


def test_calendar_date_from_datetime():
    from datetime import datetime, timedelta, timezone

    d = CalendarDate.from_datetime(datetime(2003, 10, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=-7))))
    assert (d.year, d.month) == (2003, 10)
    assert d.day == pytest.approx(17 + day_fraction(19, 30, 30), abs=1e-12)
