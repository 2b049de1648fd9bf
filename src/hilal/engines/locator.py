"""
hilal.engines.locator
---------------------
Finds the instant of the next new moon (phase crossing 1 -> 0).

Search is estimate + bracket + fixed bisection:
  1. jump ahead (1 - phase) synodic months, with a couple of phase-offset
     corrections (or, with strategy="scan", step hour by hour into the
     new-moon band);
  2. bracket the crossing with ±1 day;
  3. halve the bracket a fixed number of times (10 -> 1/512 day wide).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterator, Optional, Tuple

from ..core.config import SearchConfig
from ..core.errors import InvalidArgumentError, NumericDegenerateError
from ..core.types import as_utc
from ..reference import time_scales as ts
from .elements import phase_function

logger = logging.getLogger(__name__)

_DEFAULT_SEARCH = SearchConfig()


def phase_at(jd: float, search: SearchConfig = _DEFAULT_SEARCH) -> float:
    return phase_function(search.phase_model)(jd)


def _signed_phase(phase: float) -> float:
    """Phase offset from the nearest new moon, in [-0.5, 0.5)."""
    return phase - 1.0 if phase >= 0.5 else phase


def estimate_new_moon(jd: float, search: SearchConfig = _DEFAULT_SEARCH) -> float:
    """JD estimate of the first new moon after jd."""
    phase = phase_at(jd, search)
    est = jd + (1.0 - phase) * search.synodic_month

    # The phase rate varies by ~±15% over a month, so one jump can miss by a day.
    for _ in range(search.estimate_corrections):
        est -= _signed_phase(phase_at(est, search)) * search.synodic_month
    return est


def scan_to_new_moon_band(jd: float, search: SearchConfig = _DEFAULT_SEARCH) -> float:
    """
    Step forward in fixed hour steps until the phase enters the new-moon band
    [1 - band, 1) ∪ [0, band). A seed already just past a new moon is first
    stepped out of the band so the same crossing is not found again.
    """
    step = search.scan_step_hours / 24.0
    band = search.new_moon_band
    max_steps = int(2.0 * search.synodic_month / step) + 1

    phase = phase_at(jd, search)
    steps = 0
    while phase < band:
        jd += step
        phase = phase_at(jd, search)
        steps += 1

    while band <= phase < 1.0 - band:
        if steps >= max_steps:
            raise NumericDegenerateError(f"phase never entered the new-moon band within {steps} steps")
        jd += step
        phase = phase_at(jd, search)
        steps += 1

    logger.debug("scan reached phase %.5f after %d steps", phase, steps)
    return jd


def bracket_new_moon(seed: datetime, search: SearchConfig = _DEFAULT_SEARCH) -> Tuple[float, float]:
    """(jd_lower, jd_upper) around the next new moon after seed."""
    jd = ts.to_julian_date(seed)
    if search.strategy == "scan":
        center = scan_to_new_moon_band(jd, search)
    else:
        center = estimate_new_moon(jd, search)
    w = search.bracket_half_width_days
    return center - w, center + w


def refine_new_moon(jd_lower: float, jd_upper: float, search: SearchConfig = _DEFAULT_SEARCH) -> float:
    """
    Bisection on the phase crossing inside [jd_lower, jd_upper].

    The bracket must have phase > 0.5 at the lower end and < 0.5 at the upper
    end. Otherwise the bracket midpoint is returned (or NumericDegenerateError
    raised when search.strict is set).
    """
    p_lo = phase_at(jd_lower, search)
    p_hi = phase_at(jd_upper, search)
    if not (p_lo >= 0.5 and p_hi < 0.5):
        msg = (f"new-moon bracket [{jd_lower:.6f}, {jd_upper:.6f}] has no phase crossing "
               f"(phase {p_lo:.5f} -> {p_hi:.5f})")
        if search.strict:
            raise NumericDegenerateError(msg)
        logger.warning("%s; returning the unrefined estimate", msg)
        return 0.5 * (jd_lower + jd_upper)

    for _ in range(search.bisection_iterations):
        jd_mid = 0.5 * (jd_lower + jd_upper)
        if phase_at(jd_mid, search) < 0.5:
            jd_upper = jd_mid
        else:
            jd_lower = jd_mid

    return 0.5 * (jd_lower + jd_upper)


def find_next_new_moon_jd(seed: datetime, search: SearchConfig = _DEFAULT_SEARCH) -> float:
    jd_lower, jd_upper = bracket_new_moon(seed, search)
    return refine_new_moon(jd_lower, jd_upper, search)


def find_next_new_moon(seed: datetime, search: Optional[SearchConfig] = None) -> datetime:
    """
    UTC instant of the first new moon after seed, to bisection precision.

    The result is the final bracket midpoint truncated to whole seconds, so a
    seed less than about 85 s before the crossing can get a result up to
    bracket_half_width_days / 2**bisection_iterations earlier than itself.
    """
    return ts.from_julian_date(find_next_new_moon_jd(as_utc(seed), search or _DEFAULT_SEARCH))


def _iter_new_moons(seed: datetime, count: int, search: SearchConfig) -> Iterator[datetime]:
    current = seed
    for i in range(count):
        new_moon = find_next_new_moon(current, search)
        logger.debug("new moon %d/%d at %s", i + 1, count, new_moon.isoformat())
        yield new_moon
        current = new_moon + timedelta(days=search.resume_offset_days)


def find_new_moons(seed: datetime, count: int, search: Optional[SearchConfig] = None) -> Iterator[datetime]:
    """
    Lazily yield exactly `count` consecutive new moons after seed, ascending.

    Arguments are checked here, before the first value is requested.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError(f"count must be an integer, got {count!r}")
    if count < 1:
        raise InvalidArgumentError(f"count must be >= 1, got {count}")
    return _iter_new_moons(as_utc(seed), count, search or _DEFAULT_SEARCH)
