"""
hilal.providers.local
---------------------
Offline sunset provider built on the truncated solar model in
hilal.reference.solar (a couple of minutes of accuracy away from the poles).

"moonset" is the end of civil twilight (Sun at -6 deg), the same stand-in the
sunrise-sunset.org based provider uses. It is not a lunar calculation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..core.config import ProviderConfig
from ..core.errors import ProviderError
from ..core.types import Location, SunsetMoonset, as_utc
from ..reference import solar
from ..reference import time_scales as ts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AstronomicalSunsetProvider:
    config: ProviderConfig = field(default_factory=ProviderConfig)

    def _event(self, jd_day0: float, loc: Location, h0_deg: float, what: str) -> datetime:
        jd = solar.solar_event_jd(jd_day0, loc.latitude, loc.longitude, h0_deg=h0_deg, event="set")
        if jd is None:
            raise ProviderError(
                f"no {what} at ({loc.latitude:g}, {loc.longitude:g}) on "
                f"{ts.from_julian_date(jd_day0).date().isoformat()} (polar day or night)"
            )
        return ts.from_julian_date(jd)

    def get_sunset_and_moonset(self, date: datetime, latitude: float, longitude: float) -> SunsetMoonset:
        loc = Location(latitude, longitude)
        day = as_utc(date).replace(hour=0, minute=0, second=0, microsecond=0)
        jd_day0 = ts.to_julian_date(day)

        sunset = self._event(jd_day0, loc, self.config.sunset_altitude_deg, "sunset")
        moonset = self._event(jd_day0, loc, self.config.twilight_altitude_deg, "civil twilight end")
        logger.debug("local sunset %s, twilight end %s", sunset.isoformat(), moonset.isoformat())
        return SunsetMoonset(sunset=sunset, moonset=moonset)
