from __future__ import annotations

from dataclasses import dataclass
from math import fmod


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # fmod of a tiny negative number can round back up to exactly 360.0
    if y >= 360.0:
        y -= 360.0
    return y

def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range [-180.0, 180.0)."""
    return (deg + 180.0) % 360.0 - 180.0

def wrap_phase(x: float) -> float:
    """Wrap a phase fraction to [0,1)."""
    y = x % 1.0
    return 0.0 if y >= 1.0 else y

# ------------------------------------------------------------
# Time variable
# ------------------------------------------------------------

J2000 = 2451545.0  # JD at J2000.0


def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - J2000) / 36525.0


# ------------------------------------------------------------
# Fundamental arguments (Meeus ch. 47; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Mean lunar/solar arguments in degrees, wrapped to [0,360)."""
    Lp_deg: float     # Moon mean longitude L'
    D_deg: float      # mean elongation
    M_deg: float      # Sun mean anomaly
    Mp_deg: float     # Moon mean anomaly M'
    F_deg: float      # Moon argument of latitude
    Omega_deg: float  # longitude of the Moon's ascending node


def fundamental_args(T: float) -> FundamentalArgs:
    """
    Mean elements as quartic polynomials in T:
      L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000
      D  = 297.8501921 + 445267.1114034  T - 0.0018819 T^2 + T^3/545868  - T^4/113065000
      M  = 357.5291092 + 35999.0502909  T - 0.0001536 T^2 + T^3/24490000
      M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699   - T^4/14712000
      F  = 93.2720950  + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000
      Ω  = 125.0445479 - 1934.1362891   T + 0.0020754 T^2 + T^3/467441  - T^4/60616000
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    Omega = 125.0445479 - 1934.1362891 * T + 0.0020754 * T2 + T3 / 467441.0 - T4 / 60616000.0

    return FundamentalArgs(
        Lp_deg=wrap_deg(Lp),
        D_deg=wrap_deg(D),
        M_deg=wrap_deg(M),
        Mp_deg=wrap_deg(Mp),
        F_deg=wrap_deg(F),
        Omega_deg=wrap_deg(Omega),
    )


# ------------------------------------------------------------
# Sun mean elements (Meeus ch. 25)
# ------------------------------------------------------------

@dataclass(frozen=True)
class SolarMean:
    L0_deg: float  # geometric mean longitude of the Sun
    M_deg: float   # mean anomaly of the Sun


def solar_mean_elements(T: float) -> SolarMean:
    T2 = T * T
    L0 = 280.46646 + 36000.76983 * T + 0.0003032 * T2
    M = 357.52911 + 35999.05029 * T - 0.0001537 * T2
    return SolarMean(L0_deg=wrap_deg(L0), M_deg=wrap_deg(M))


def mean_obliquity_deg(T: float) -> float:
    """IAU 2000 mean obliquity of the ecliptic (degrees)."""
    T2 = T * T
    T3 = T2 * T
    eps_arcsec = 84381.406 - 46.836769 * T - 0.0001831 * T2 + 0.00200340 * T3
    return eps_arcsec / 3600.0


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales lunar perturbations that depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)
