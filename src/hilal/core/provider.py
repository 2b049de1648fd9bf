from __future__ import annotations
from datetime import datetime
from typing import Protocol, runtime_checkable

from .types import SunsetMoonset

@runtime_checkable
class SunsetProvider(Protocol):
    """
    Sunset / moonset lookup for the civil day containing `date` (UTC calendar date).

    Implementations raise ProviderError on failure.
    """
    def get_sunset_and_moonset(self, date: datetime, latitude: float, longitude: float) -> SunsetMoonset: ...
