# tests/test_time_scales.py

import pytest
import random
from datetime import datetime, timedelta, timezone

from hilal.core.errors import InvalidArgumentError
from hilal.reference import time_scales as ts

UTC = timezone.utc


def test_known_epochs():
    """
    J2000.0 and the Unix epoch.
    """
    assert ts.to_julian_date(datetime(2000, 1, 1, 12, tzinfo=UTC)) == 2451545.0
    assert ts.to_julian_date(datetime(1970, 1, 1, tzinfo=UTC)) == 2440587.5
    assert ts.from_julian_date(2451545.0) == datetime(2000, 1, 1, 12, tzinfo=UTC)


def test_century_years():
    # 1900 and 2100 are not leap years, 2000 is.
    assert ts.to_julian_date(datetime(1900, 1, 1, tzinfo=UTC)) == 2415020.5
    assert ts.to_julian_date(datetime(1900, 3, 1, tzinfo=UTC)) == 2415079.5
    assert ts.to_julian_date(datetime(2000, 3, 1, tzinfo=UTC)) == 2451604.5
    assert ts.to_julian_date(datetime(2100, 3, 1, tzinfo=UTC)) == 2488128.5
    assert ts.from_julian_date(2415079.5) == datetime(1900, 3, 1, tzinfo=UTC)


def test_meeus_example_7a():
    # 1957 October 4.81 (Sputnik 1)
    jd = ts.to_julian_date(datetime(1957, 10, 4, 19, 26, 24, tzinfo=UTC))
    assert jd == pytest.approx(2436116.31, abs=1e-6)


def test_julian_calendar_branch():
    # Meeus example 7.c: JD 1842713.0 is 333 January 27.5 (Julian calendar)
    dt = ts.from_julian_date(1842713.0)
    assert (dt.year, dt.month, dt.day, dt.hour) == (333, 1, 27, 12)


def test_datetime_jd_roundtrip():
    """
    Any instant in 1900-2100 comes back within a second.
    """
    random.seed(42)
    start = datetime(1900, 1, 1, tzinfo=UTC)
    span = (datetime(2100, 12, 31, 23, 59, 59, tzinfo=UTC) - start).total_seconds()
    for _ in range(5000):
        x = start + timedelta(seconds=random.uniform(0, span))
        back = ts.from_julian_date(ts.to_julian_date(x))
        assert abs(back - x) <= timedelta(seconds=1)


def test_from_julian_date_truncates_seconds():
    jd = ts.to_julian_date(datetime(2024, 1, 11, 11, 57, 23, 900000, tzinfo=UTC))
    back = ts.from_julian_date(jd)
    assert back.microsecond == 0
    assert back.second in (22, 23)
    assert back.replace(second=0) == datetime(2024, 1, 11, 11, 57, tzinfo=UTC)


def test_non_utc_offsets_are_converted():
    pst = timezone(timedelta(hours=-8))
    a = ts.to_julian_date(datetime(2024, 1, 11, 17, 5, tzinfo=pst))
    b = ts.to_julian_date(datetime(2024, 1, 12, 1, 5, tzinfo=UTC))
    assert a == pytest.approx(b, abs=1e-9)


def test_naive_datetime_rejected():
    with pytest.raises(InvalidArgumentError):
        ts.to_julian_date(datetime(2024, 1, 1))


def test_tt_offset_is_about_a_minute_in_2024():
    jd = ts.to_julian_date(datetime(2024, 1, 1, tzinfo=UTC))
    dt_seconds = (ts.jd_utc_to_jd_tt(jd) - jd) * 86400.0
    assert 60.0 < dt_seconds < 80.0
