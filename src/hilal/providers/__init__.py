"""Sunset/moonset providers consumed by the new-moon facade."""

from ..core.provider import SunsetProvider
from .fallback import FallbackSunsetProvider
from .local import AstronomicalSunsetProvider
from .sunrise_sunset import SunriseSunsetProvider

__all__ = [
    "SunsetProvider",
    "AstronomicalSunsetProvider",
    "SunriseSunsetProvider",
    "FallbackSunsetProvider",
]
