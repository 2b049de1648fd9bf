from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

from .errors import InvalidArgumentError
from .types import Location, PhaseModel

SYNODIC_MONTH = 29.530588853  # mean synodic month (days)


@dataclass(frozen=True)
class VisibilityThresholds:
    """Moon-age bucket edges in hours (each bucket closed below, open above)."""
    too_young: float = 12.0
    very_young: float = 15.0
    optimal_end: float = 24.0
    aging_end: float = 36.0

    def __post_init__(self) -> None:
        edges = (self.too_young, self.very_young, self.optimal_end, self.aging_end)
        if any(b <= a for a, b in zip(edges, edges[1:])):
            raise InvalidArgumentError(f"visibility thresholds must be strictly ascending, got {edges}")


@dataclass(frozen=True)
class SearchConfig:
    strategy: Literal["estimate", "scan"] = "estimate"
    phase_model: PhaseModel = "apparent"
    synodic_month: float = SYNODIC_MONTH
    bisection_iterations: int = 10
    bracket_half_width_days: float = 1.0
    estimate_corrections: int = 2
    scan_step_hours: float = 1.0
    new_moon_band: float = 0.01
    resume_offset_days: float = 1.0
    strict: bool = False

    def __post_init__(self) -> None:
        if self.strategy not in ("estimate", "scan"):
            raise InvalidArgumentError("strategy must be one of: estimate, scan")
        if self.phase_model not in ("apparent", "mean"):
            raise InvalidArgumentError("phase_model must be one of: apparent, mean")
        if self.bisection_iterations < 1:
            raise InvalidArgumentError("bisection_iterations must be >= 1")
        if self.estimate_corrections < 0:
            raise InvalidArgumentError("estimate_corrections must be >= 0")
        if not (0.0 < self.bracket_half_width_days < self.synodic_month / 2.0):
            raise InvalidArgumentError("bracket_half_width_days must be positive and under half a synodic month")
        if not (0.0 < self.new_moon_band < 0.5):
            raise InvalidArgumentError("new_moon_band must be in (0, 0.5)")
        # The band must be wider than one scan step, otherwise the scan can step over it.
        if self.scan_step_hours <= 0.0 or self.scan_step_hours / 24.0 >= self.new_moon_band * self.synodic_month:
            raise InvalidArgumentError("scan_step_hours must be positive and narrower than the new-moon band")
        if self.resume_offset_days <= 0.0:
            raise InvalidArgumentError("resume_offset_days must be positive")


@dataclass(frozen=True)
class ProviderConfig:
    sunset_api_url: str = "https://api.sunrise-sunset.org/json"
    timeout_seconds: float = 10.0
    sunset_altitude_deg: float = -0.833
    twilight_altitude_deg: float = -6.0


@dataclass(frozen=True)
class HilalConfig:
    visibility: VisibilityThresholds = field(default_factory=VisibilityThresholds)
    search: SearchConfig = field(default_factory=SearchConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    default_location: Location = field(default_factory=lambda: Location(37.7749, -122.4194))
    default_count: int = 3


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"{key} must be a number, got {raw!r}") from e


def _env_positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"{key} must be an integer, got {raw!r}") from e
    if value < 1:
        raise InvalidArgumentError(f"{key} must be >= 1, got {value}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> HilalConfig:
    """
    Build a HilalConfig from HILAL_* environment variables.

    Unset variables keep the dataclass defaults.
    """
    env = os.environ if environ is None else environ
    base = HilalConfig()

    location = Location(
        _env_float(env, "HILAL_LATITUDE", base.default_location.latitude),
        _env_float(env, "HILAL_LONGITUDE", base.default_location.longitude),
    )
    provider = ProviderConfig(
        sunset_api_url=env.get("HILAL_SUNSET_API_URL", base.provider.sunset_api_url),
        timeout_seconds=_env_float(env, "HILAL_TIMEOUT_SECONDS", base.provider.timeout_seconds),
    )
    search = SearchConfig(
        strategy=env.get("HILAL_SEARCH_STRATEGY", base.search.strategy),  # type: ignore[arg-type]
        phase_model=env.get("HILAL_PHASE_MODEL", base.search.phase_model),  # type: ignore[arg-type]
    )
    count = _env_positive_int(env, "HILAL_COUNT", base.default_count)

    return HilalConfig(
        visibility=base.visibility,
        search=search,
        provider=provider,
        default_location=location,
        default_count=count,
    )
