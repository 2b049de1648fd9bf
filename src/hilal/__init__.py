"""hilal public API.

New-moon timing and young-crescent visibility. Most users only need the
functions re-exported here.
"""

from .api import NewMoonFacade, get_new_moon_information
from .core.config import HilalConfig, SearchConfig, VisibilityThresholds, load_config
from .core.errors import HilalError, InvalidArgumentError, NumericDegenerateError, ProviderError
from .core.types import (
    Confidence,
    Location,
    LunarElements,
    NewMoonInfo,
    SunsetMoonset,
    VisibilityAssessment,
)
from .engines.elements import compute_elements
from .engines.locator import find_new_moons, find_next_new_moon
from .engines.visibility import assess_visibility, compute_moon_age
from .reference.time_scales import from_julian_date, to_julian_date

__all__ = [
    "to_julian_date",
    "from_julian_date",
    "compute_elements",
    "find_next_new_moon",
    "find_new_moons",
    "compute_moon_age",
    "assess_visibility",
    "get_new_moon_information",
    "NewMoonFacade",
    "HilalConfig",
    "SearchConfig",
    "VisibilityThresholds",
    "load_config",
    "Confidence",
    "Location",
    "LunarElements",
    "NewMoonInfo",
    "SunsetMoonset",
    "VisibilityAssessment",
    "HilalError",
    "InvalidArgumentError",
    "ProviderError",
    "NumericDegenerateError",
]
