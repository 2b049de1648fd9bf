from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from ..core.config import VisibilityThresholds
from ..core.errors import InvalidArgumentError
from ..core.types import Confidence, VisibilityAssessment
from ..reference import time_scales as ts

_DEFAULT_THRESHOLDS = VisibilityThresholds()


def compute_moon_age(new_moon: datetime, sunset: datetime) -> float:
    """Hours from new moon to sunset. Negative if sunset comes first; not clamped."""
    return (ts.to_julian_date(sunset) - ts.to_julian_date(new_moon)) * 24.0


def assess_visibility(moon_age_hours: float, thresholds: Optional[VisibilityThresholds] = None) -> VisibilityAssessment:
    """
    Classify moon age at sunset into one of five buckets.
    Each bucket includes its lower edge and excludes its upper edge.
    """
    if math.isnan(moon_age_hours):
        raise InvalidArgumentError("moon age must be a real number, got NaN")
    t = thresholds or _DEFAULT_THRESHOLDS
    age = moon_age_hours

    if age < t.too_young:
        visible, confidence = False, Confidence.HIGH
        details = f"Moon is too young (less than {t.too_young:g} hours old)"
    elif age < t.very_young:
        visible, confidence = False, Confidence.MEDIUM
        details = f"Moon is very young ({t.too_young:g}-{t.very_young:g} hours old)"
    elif age < t.optimal_end:
        visible, confidence = True, Confidence.HIGH
        details = f"Optimal visibility window ({t.very_young:g}-{t.optimal_end:g} hours old)"
    elif age < t.aging_end:
        visible, confidence = True, Confidence.MEDIUM
        details = f"Moon is getting older ({t.optimal_end:g}-{t.aging_end:g} hours old)"
    else:
        visible, confidence = False, Confidence.HIGH
        details = f"Moon is too old (more than {t.aging_end:g} hours old)"

    return VisibilityAssessment(
        visible=visible,
        confidence=confidence,
        details=details,
        moon_age_hours=moon_age_hours,
    )
