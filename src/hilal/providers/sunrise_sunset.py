"""Sunset provider backed by the sunrise-sunset.org JSON API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import httpx

from ..core.config import ProviderConfig
from ..core.errors import ProviderError
from ..core.types import Location, SunsetMoonset, as_utc

logger = logging.getLogger(__name__)


def _parse_instant(results: dict, key: str) -> datetime:
    raw = results[key]
    if not isinstance(raw, str):
        raise ValueError(f"{key} is not a string: {raw!r}")
    return as_utc(datetime.fromisoformat(raw))


@dataclass
class SunriseSunsetProvider:
    """
    GET {sunset_api_url}?lat=..&lng=..&date=YYYY-MM-DD&formatted=0

    Uses results.sunset and results.civil_twilight_end; the latter stands in
    for moonset since the API has no lunar data.
    """
    config: ProviderConfig = field(default_factory=ProviderConfig)
    client: Optional[httpx.Client] = None

    def _get(self, params: dict) -> Any:
        if self.client is not None:
            resp = self.client.get(self.config.sunset_api_url, params=params, timeout=self.config.timeout_seconds)
        else:
            resp = httpx.get(self.config.sunset_api_url, params=params, timeout=self.config.timeout_seconds)
        resp.raise_for_status()
        return resp.json()

    def get_sunset_and_moonset(self, date: datetime, latitude: float, longitude: float) -> SunsetMoonset:
        loc = Location(latitude, longitude)
        params = {
            "lat": loc.latitude,
            "lng": loc.longitude,
            "date": as_utc(date).date().isoformat(),
            "formatted": 0,
        }
        logger.info("requesting sunset for %s at (%g, %g)", params["date"], loc.latitude, loc.longitude)

        try:
            data = self._get(params)
        except httpx.HTTPError as e:
            raise ProviderError(f"sunset request failed: {e}") from e
        except ValueError as e:
            raise ProviderError("sunset response is not valid JSON") from e

        if not isinstance(data, dict) or data.get("status") != "OK":
            status = data.get("status") if isinstance(data, dict) else None
            raise ProviderError(f"sunset API returned status {status!r}")

        try:
            results = data["results"]
            sunset = _parse_instant(results, "sunset")
            moonset = _parse_instant(results, "civil_twilight_end")
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"invalid sunset API response format: {e}") from e

        return SunsetMoonset(sunset=sunset, moonset=moonset)
