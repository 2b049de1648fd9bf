from __future__ import annotations
import enum
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from .errors import InvalidArgumentError

PhaseModel = Literal["apparent", "mean"]


def as_utc(instant: datetime) -> datetime:
    """Return a timezone-aware UTC datetime; naive input is rejected."""
    if not isinstance(instant, datetime):
        raise InvalidArgumentError(f"expected a datetime, got {type(instant).__name__}")
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidArgumentError("datetime must be timezone-aware (UTC)")
    return instant.astimezone(timezone.utc)


class Confidence(enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Location:
    latitude: float   # degrees, positive North
    longitude: float  # degrees, positive East

    def __post_init__(self) -> None:
        for name, value, bound in (("latitude", self.latitude, 90.0), ("longitude", self.longitude, 180.0)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or not (-bound <= value <= bound):
                raise InvalidArgumentError(f"{name} must be in [-{bound:g}, {bound:g}], got {value!r}")


@dataclass(frozen=True)
class LunarElements:
    """Mean lunar elements (degrees, wrapped to [0,360)) and phase fraction in [0,1)."""
    jd: float
    phase: float
    L: float      # Moon mean longitude
    M: float      # Sun mean anomaly
    F: float      # Moon argument of latitude
    D: float      # mean elongation
    Omega: float  # longitude of ascending node
    phase_model: PhaseModel = "apparent"


@dataclass(frozen=True)
class VisibilityAssessment:
    visible: bool
    confidence: Confidence
    details: str
    moon_age_hours: float


@dataclass(frozen=True)
class SunsetMoonset:
    """
    Sunset and "moonset" for one civil day at one location.

    moonset is a placeholder: providers fill it with the end of civil twilight,
    not with a lunar rise/set computation.
    """
    sunset: datetime
    moonset: datetime

    @property
    def minutes_between(self) -> float:
        return (self.moonset - self.sunset).total_seconds() / 60.0


@dataclass(frozen=True)
class NewMoonInfo:
    new_moon: datetime
    sunset: datetime
    moonset: datetime
    moon_age_at_sunset_hours: float
    visibility: VisibilityAssessment

    @property
    def minutes_between_sunset_and_moonset(self) -> float:
        return (self.moonset - self.sunset).total_seconds() / 60.0
