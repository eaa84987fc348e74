# tests/test_cli.py

import pytest
from scalib import cli


def test_jd(capsys):
    assert cli.main(["jd", "2000-01-01T12:00"]) == 0
    out = capsys.readouterr().out
    assert "JD              = 2451545.000000" in out
    assert "Weekday         = Saturday" in out
    assert "Day of year     = 1" in out


def test_jd_fractional_day(capsys):
    assert cli.main(["jd", "1957-10-04.81"]) == 0
    assert "2436116.310000" in capsys.readouterr().out


def test_nutation(capsys):
    assert cli.main(["nutation", "--jd", "2446895.5"]) == 0
    out = capsys.readouterr().out
    assert "Nutation dpsi    = -3.78" in out
    assert "Mean obliquity   = +23°26'27.40" in out


def test_sun_with_location(capsys):
    rc = cli.main([
        "sun", "2003-10-17T19:30:30", "--delta-t", "67",
        "--lon-west", "105.1786", "--lat", "39.742476", "--refraction",
    ])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Right ascension = 13h28m" in out
    assert "Azimuth (from N) = 194.3" in out
    assert "(refracted)" in out


def test_moon(capsys):
    assert cli.main(["moon", "1992-04-12"]) == 0
    out = capsys.readouterr().out
    assert "Longitude       = 133.16" in out
    assert "Local" not in out


def test_star(capsys):
    rc = cli.main([
        "star", "2028-11-13.19",
        "--ra", "02:44:11.986", "--dec", "+49:13:42.48",
        "--pm-ra", "0.03425", "--pm-dec", "-0.0895", "--delta-t", "0",
    ])
    assert rc == 0
    assert "Right ascension = 02h46m14" in capsys.readouterr().out


def test_bad_date():
    with pytest.raises(SystemExit):
        cli.main(["jd", "2000/01/01"])


def test_sexagesimal_parsing():
    assert cli._parse_sexagesimal("-0:24:34.5") == (0, -24, -34, -500.0)
    assert cli._parse_sexagesimal("13") == (13, 0, 0, 0.0)
