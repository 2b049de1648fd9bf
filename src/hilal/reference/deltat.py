"""
hilal.reference.deltat

ΔT (= TT − UT) in seconds from the Espenak–Meeus piecewise polynomials
(NASA Five Millennium Canon). Only the branches from 1800 onwards are kept;
outside them the long-term parabola is used. UT1−UTC (< 0.9 s) is ignored.
"""

from __future__ import annotations


def _poly(u: float, coeffs: tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


def _long_term(y: float) -> float:
    u = (y - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u


def delta_t_seconds(y: float) -> float:
    """ΔT(y) in seconds, y a decimal year."""
    if y < 1800.0:
        return _long_term(y)
    if y < 1860.0:
        t = y - 1800.0
        return _poly(t, (
            13.72,
            -0.332447,
            0.0068612,
            0.0041116,
            -0.00037436,
            0.0000121272,
            -0.0000001699,
            0.000000000875,
        ))
    if y < 1900.0:
        t = y - 1860.0
        return _poly(t, (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0))
    if y < 1920.0:
        t = y - 1900.0
        return _poly(t, (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197))
    if y < 1941.0:
        t = y - 1920.0
        return _poly(t, (21.20, 0.84493, -0.076100, 0.0020936))
    if y < 1961.0:
        t = y - 1950.0
        return _poly(t, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0))
    if y < 1986.0:
        t = y - 1975.0
        return _poly(t, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0))
    if y < 2005.0:
        t = y - 2000.0
        return _poly(t, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599))
    if y < 2050.0:
        t = y - 2000.0
        return _poly(t, (62.92, 0.32217, 0.005589))
    if y < 2150.0:
        # blends the 2050 branch into the long-term parabola
        return _long_term(y) - 0.5628 * (2150.0 - y)
    return _long_term(y)
