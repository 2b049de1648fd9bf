# reference/solar.py

from __future__ import annotations

import math
from typing import Literal, Optional

from . import astro_args as aa
from . import time_scales as ts


def solar_longitude_deg(jd_tt: float) -> float:
    """
    Apparent solar longitude (degrees) at JD(TT), truncated series
    accurate to ~0.01 deg.
    """
    T = aa.T_centuries(jd_tt)
    sm = aa.solar_mean_elements(T)
    M_rad = math.radians(sm.M_deg)

    # Equation of center
    C_sun = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M_rad)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M_rad)
        + 0.000289 * math.sin(3.0 * M_rad)
    )

    # aberration and leading nutation term
    Omega_rad = math.radians(aa.fundamental_args(T).Omega_deg)
    return aa.wrap_deg(sm.L0_deg + C_sun - 0.00569 - 0.00478 * math.sin(Omega_rad))


def solar_declination_deg(L_app_deg: float, eps_deg: float) -> float:
    sin_delta = math.sin(math.radians(eps_deg)) * math.sin(math.radians(L_app_deg))
    return math.degrees(math.asin(sin_delta))


def equation_of_time_minutes(jd_tt: float) -> float:
    """Equation of Time (apparent minus mean solar time) in minutes."""
    T = aa.T_centuries(jd_tt)
    L0_deg = aa.solar_mean_elements(T).L0_deg
    L_app_rad = math.radians(solar_longitude_deg(jd_tt))
    eps_rad = math.radians(aa.mean_obliquity_deg(T))

    y = math.cos(eps_rad) * math.sin(L_app_rad)
    x = math.cos(L_app_rad)
    alpha_sun_deg = aa.wrap_deg(math.degrees(math.atan2(y, x)))

    return 4.0 * aa.wrap180(L0_deg - alpha_sun_deg)


def hour_angle_hours(jd_tt: float, lat_deg: float, h0_deg: float) -> Optional[float]:
    """
    Half-arc of the Sun above altitude h0, in hours.
    Returns None if the Sun does not cross h0 that day (polar day/night).
    """
    delta = math.radians(
        solar_declination_deg(solar_longitude_deg(jd_tt), aa.mean_obliquity_deg(aa.T_centuries(jd_tt)))
    )
    lat = math.radians(lat_deg)
    h0 = math.radians(h0_deg)

    cos_H0 = (math.sin(h0) - math.sin(lat) * math.sin(delta)) / (math.cos(lat) * math.cos(delta))
    if cos_H0 < -1.0 or cos_H0 > 1.0:
        return None
    return math.degrees(math.acos(cos_H0)) / 15.0


def solar_event_jd(
    jd_day0: float,
    lat_deg: float,
    lon_deg_east: float,
    *,
    h0_deg: float = -0.833,
    event: Literal["rise", "set"] = "set",
    iterations: int = 2,
) -> Optional[float]:
    """
    JD(UTC) at which the Sun crosses altitude h0 on the civil day starting at jd_day0
    (JD of 00:00 UTC). The local day is selected by longitude.

    Starts from local mean noon and re-evaluates declination and EOT at the event.
    Returns None for polar day/night.
    """
    jd = jd_day0 + (12.0 - lon_deg_east / 15.0) / 24.0
    for _ in range(iterations):
        jd_tt = ts.jd_utc_to_jd_tt(jd)
        H0 = hour_angle_hours(jd_tt, lat_deg, h0_deg)
        if H0 is None:
            return None
        app_hours = 12.0 + H0 if event == "set" else 12.0 - H0
        utc_hours = app_hours - equation_of_time_minutes(jd_tt) / 60.0 - lon_deg_east / 15.0
        jd = jd_day0 + utc_hours / 24.0
    return jd
