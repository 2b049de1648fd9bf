from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from .core.config import HilalConfig
from .core.errors import InvalidArgumentError, ProviderError
from .core.provider import SunsetProvider
from .core.types import Location, NewMoonInfo, SunsetMoonset, as_utc
from .engines.locator import find_new_moons
from .engines.visibility import assess_visibility, compute_moon_age

logger = logging.getLogger(__name__)

ErrorPolicy = Literal["raise", "skip"]


@dataclass(frozen=True)
class NewMoonFacade:
    """
    Locates new moons and combines each with the provider's sunset/moonset
    into NewMoonInfo records.

    Provider failures: errors="raise" aborts the batch with the provider's
    ProviderError; errors="skip" logs it and leaves that cycle out.
    """
    provider: SunsetProvider
    config: HilalConfig = field(default_factory=HilalConfig)

    def information(
        self,
        count: int,
        latitude: float,
        longitude: float,
        *,
        start: Optional[datetime] = None,
        errors: ErrorPolicy = "raise",
    ) -> List[NewMoonInfo]:
        if errors not in ("raise", "skip"):
            raise InvalidArgumentError("errors must be one of: raise, skip")
        loc = Location(latitude, longitude)
        seed = datetime.now(timezone.utc) if start is None else as_utc(start)
        new_moons = find_new_moons(seed, count, self.config.search)

        out: List[NewMoonInfo] = []
        for new_moon in new_moons:
            try:
                sunset, moonset = self._lookup(new_moon, loc)
            except ProviderError as e:
                if errors == "raise":
                    raise
                logger.warning("skipping new moon %s: %s", new_moon.isoformat(), e)
                continue
            out.append(self.assemble(new_moon, sunset, moonset))
        return out

    def _lookup(self, new_moon: datetime, loc: Location) -> Tuple[datetime, datetime]:
        """Provider call; anything but a SunsetMoonset of aware datetimes is a ProviderError."""
        times = self.provider.get_sunset_and_moonset(new_moon, loc.latitude, loc.longitude)
        if not isinstance(times, SunsetMoonset):
            raise ProviderError(f"{type(self.provider).__name__} returned {type(times).__name__}, not SunsetMoonset")
        try:
            return as_utc(times.sunset), as_utc(times.moonset)
        except (InvalidArgumentError, AttributeError, TypeError) as e:
            raise ProviderError(f"{type(self.provider).__name__} returned malformed times: {e}") from e

    def assemble(self, new_moon: datetime, sunset: datetime, moonset: datetime) -> NewMoonInfo:
        age = compute_moon_age(new_moon, sunset)
        return NewMoonInfo(
            new_moon=new_moon,
            sunset=as_utc(sunset),
            moonset=as_utc(moonset),
            moon_age_at_sunset_hours=age,
            visibility=assess_visibility(age, self.config.visibility),
        )


def get_new_moon_information(
    count: int,
    latitude: float,
    longitude: float,
    provider: SunsetProvider,
    *,
    config: Optional[HilalConfig] = None,
    start: Optional[datetime] = None,
    errors: ErrorPolicy = "raise",
) -> List[NewMoonInfo]:
    facade = NewMoonFacade(provider, config or HilalConfig())
    return facade.information(count, latitude, longitude, start=start, errors=errors)
