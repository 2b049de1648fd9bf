from __future__ import annotations

from datetime import datetime, timezone
import math

from ..core.types import as_utc
from .astro_args import J2000
from .deltat import delta_t_seconds


# ============================================================
# datetime(UTC) <-> JD(UTC)  (Meeus, Astronomical Algorithms)
# ============================================================

_GREGORIAN_REFORM_Z = 2299161  # first JDN of the Gregorian calendar (1582-10-15)


def _century_correction(year: int, month: int) -> int:
    """Days dropped by the Gregorian century rule relative to the 1900-2099 span."""
    c = (year if month > 2 else year - 1) // 100
    return c // 4 - c + 15


def to_julian_date(instant: datetime) -> float:
    """
    datetime -> JD (UTC). Requires a timezone-aware datetime.

    Integer-arithmetic form:
      JD = 367 Y - floor(7 (Y + floor((M+9)/12)) / 4) + floor(275 M / 9) + D + 1721013.5
           + (h + min/60 + s/3600) / 24
    which counts every fourth year as leap, so it is exact only for
    1900-03-01 .. 2100-02-28. Outside that window the Gregorian century rule
    is added back (the correction is zero inside it).
    """
    dt = as_utc(instant)
    y, m, d = dt.year, dt.month, dt.day

    jd = 367 * y - (7 * (y + (m + 9) // 12)) // 4 + (275 * m) // 9 + d + 1721013.5
    jd += _century_correction(y, m)
    seconds = dt.second + dt.microsecond / 1e6
    jd += (dt.hour + dt.minute / 60.0 + seconds / 3600.0) / 24.0
    return jd


def from_julian_date(jd: float) -> datetime:
    """
    JD (UTC) -> timezone-aware datetime in UTC, truncated to whole seconds.

    Julian calendar below Z = 2299161, Gregorian (alpha correction) from there on.
    """
    jd = jd + 0.5
    Z = math.floor(jd)
    F = jd - Z

    if Z < _GREGORIAN_REFORM_Z:
        A = Z
    else:
        alpha = math.floor((Z - 1867216.25) / 36524.25)
        A = Z + 1 + alpha - math.floor(alpha / 4)

    B = A + 1524
    C = math.floor((B - 122.1) / 365.25)
    D = math.floor(365.25 * C)
    E = math.floor((B - D) / 30.6001)

    day = B - D - math.floor(30.6001 * E)
    month = E - 1 if E < 14 else E - 13
    year = C - 4716 if month > 2 else C - 4715

    # Truncate, never round: 23:59:59.9 stays on the same day.
    h_frac = F * 24.0
    hours = int(h_frac)
    m_frac = (h_frac - hours) * 60.0
    minutes = min(int(m_frac), 59)
    seconds = min(int((m_frac - minutes) * 60.0), 59)

    return datetime(int(year), int(month), int(day), hours, minutes, seconds, tzinfo=timezone.utc)


# ============================================================
# UTC -> TT
# ============================================================

def decimal_year(jd: float) -> float:
    """Approximate decimal year of a JD (good enough to index ΔT)."""
    return 2000.0 + (jd - J2000) / 365.25


def jd_utc_to_jd_tt(jd_utc: float) -> float:
    """
    Convert JD(UTC) to JD(TT) using TT = UT + ΔT.
    UT1-UTC is taken as zero.
    """
    return jd_utc + delta_t_seconds(decimal_year(jd_utc)) / 86400.0
