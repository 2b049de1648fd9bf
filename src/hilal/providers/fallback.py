from __future__ import annotations

import logging
from datetime import datetime
from typing import Tuple

from ..core.errors import InvalidArgumentError, ProviderError
from ..core.provider import SunsetProvider
from ..core.types import SunsetMoonset

logger = logging.getLogger(__name__)


class FallbackSunsetProvider:
    """Try providers in order; e.g. the web API first, then the local calculation."""

    def __init__(self, *providers: SunsetProvider) -> None:
        if not providers:
            raise InvalidArgumentError("FallbackSunsetProvider needs at least one provider")
        self.providers: Tuple[SunsetProvider, ...] = providers

    def get_sunset_and_moonset(self, date: datetime, latitude: float, longitude: float) -> SunsetMoonset:
        *earlier, last = self.providers
        for provider in earlier:
            try:
                return provider.get_sunset_and_moonset(date, latitude, longitude)
            except ProviderError as e:
                logger.warning("%s failed (%s); trying next provider", type(provider).__name__, e)
        return last.get_sunset_and_moonset(date, latitude, longitude)
