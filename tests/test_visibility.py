# tests/test_visibility.py

import math
import pytest
import random
from datetime import datetime, timedelta, timezone

from hilal.core.config import VisibilityThresholds
from hilal.core.errors import InvalidArgumentError
from hilal.core.types import Confidence
from hilal.engines.visibility import assess_visibility, compute_moon_age

UTC = timezone.utc

BUCKETS = {
    (False, Confidence.HIGH, "too young"),
    (False, Confidence.MEDIUM, "very young"),
    (True, Confidence.HIGH, "Optimal"),
    (True, Confidence.MEDIUM, "getting older"),
    (False, Confidence.HIGH, "too old"),
}


@pytest.mark.parametrize(
    "hours, visible, confidence",
    [
        (-5.0, False, Confidence.HIGH),
        (0.0, False, Confidence.HIGH),
        (11.999, False, Confidence.HIGH),
        (12.0, False, Confidence.MEDIUM),
        (13.0, False, Confidence.MEDIUM),
        (14.999, False, Confidence.MEDIUM),
        (15.0, True, Confidence.HIGH),
        (23.999, True, Confidence.HIGH),
        (24.0, True, Confidence.MEDIUM),
        (35.999, True, Confidence.MEDIUM),
        (36.0, False, Confidence.HIGH),
        (500.0, False, Confidence.HIGH),
    ],
)
def test_threshold_table(hours, visible, confidence):
    v = assess_visibility(hours)
    assert v.visible is visible
    assert v.confidence is confidence
    assert v.moon_age_hours == hours


def test_every_age_lands_in_exactly_one_bucket():
    random.seed(5)
    ages = [random.uniform(-100.0, 200.0) for _ in range(2000)] + [-math.inf, math.inf]
    for h in ages:
        v = assess_visibility(h)
        matches = [b for b in BUCKETS if (v.visible, v.confidence) == b[:2] and b[2] in v.details]
        assert len(matches) == 1


def test_details_text():
    assert assess_visibility(10).details == "Moon is too young (less than 12 hours old)"
    assert assess_visibility(20).details == "Optimal visibility window (15-24 hours old)"
    assert assess_visibility(40).details == "Moon is too old (more than 36 hours old)"


def test_nan_rejected():
    with pytest.raises(InvalidArgumentError):
        assess_visibility(float("nan"))


def test_custom_thresholds():
    t = VisibilityThresholds(too_young=10, very_young=14, optimal_end=20, aging_end=30)
    v = assess_visibility(12.0, t)
    assert (v.visible, v.confidence) == (False, Confidence.MEDIUM)
    assert "10-14" in v.details
    assert assess_visibility(20.0, t).confidence is Confidence.MEDIUM


def test_thresholds_must_ascend():
    with pytest.raises(InvalidArgumentError):
        VisibilityThresholds(too_young=15, very_young=12)


def test_moon_age_at_sunset():
    new_moon = datetime(2024, 1, 11, 11, 57, tzinfo=UTC)
    pst = timezone(timedelta(hours=-8))
    sunset = datetime(2024, 1, 11, 17, 5, tzinfo=pst)
    hours = compute_moon_age(new_moon, sunset)
    assert hours == pytest.approx(13.1333, abs=1e-3)
    v = assess_visibility(hours)
    assert v.visible is False
    assert v.confidence is Confidence.MEDIUM


def test_moon_age_can_be_negative():
    new_moon = datetime(2024, 1, 11, 11, 57, tzinfo=UTC)
    assert compute_moon_age(new_moon, new_moon - timedelta(hours=3)) == pytest.approx(-3.0, abs=1e-6)
