"""Display helpers. All times are shown in UTC."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from .core.types import NewMoonInfo, VisibilityAssessment, as_utc


def format_date(instant: datetime) -> str:
    """YYYY-MM-DD (UTC calendar date)."""
    return as_utc(instant).date().isoformat()


def format_time_24h(instant: datetime) -> str:
    return as_utc(instant).strftime("%H:%M:%S")


def format_time_12h(instant: datetime) -> str:
    """e.g. '5:05:00 PM'."""
    dt = as_utc(instant)
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d}:{dt.second:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_iso(instant: datetime) -> str:
    return as_utc(instant).isoformat().replace("+00:00", "Z")


def time_record(instant: datetime) -> Dict[str, str]:
    return {
        "iso": format_iso(instant),
        "formatted": format_time_24h(instant),
        "formatted12Hour": format_time_12h(instant),
    }


def visibility_record(v: VisibilityAssessment) -> Dict[str, Any]:
    return {
        "visible": v.visible,
        "confidence": v.confidence.value,
        "details": v.details,
        "moonAge": v.moon_age_hours,
    }


def info_record(info: NewMoonInfo) -> Dict[str, Any]:
    """JSON-ready dict for one new-moon cycle."""
    return {
        "newMoonDate": format_date(info.new_moon),
        "newMoonTime": time_record(info.new_moon),
        "sunset": time_record(info.sunset),
        "moonset": time_record(info.moonset),
        "timeBetweenSunsetAndMoonset": round(info.minutes_between_sunset_and_moonset, 1),
        "moonAgeAtSunset": info.moon_age_at_sunset_hours,
        "visibility": visibility_record(info.visibility),
    }
