"""
hilal.engines.elements
----------------------
Lunar mean-elements model and phase fraction.

The phase is the Moon-Sun elongation as a fraction of a turn: 0 at new moon,
0.5 at full moon. Two models are offered:

- "mean": the mean elongation D / 360. Cheap, but mean and true new moon can
  differ by more than half a day.
- "apparent": apparent lunar minus apparent solar longitude from the truncated
  series in hilal.reference, evaluated at JD(TT). Crossings land within about
  a minute of the true new moon.
"""

from __future__ import annotations

from ..core.errors import InvalidArgumentError
from ..core.types import LunarElements, PhaseModel
from ..reference import astro_args as aa
from ..reference import lunar, solar
from ..reference import time_scales as ts


def mean_phase(jd: float) -> float:
    return aa.fundamental_args(aa.T_centuries(jd)).D_deg / 360.0


def apparent_phase(jd: float) -> float:
    jd_tt = ts.jd_utc_to_jd_tt(jd)
    elong = aa.wrap_deg(lunar.lunar_longitude_deg(jd_tt) - solar.solar_longitude_deg(jd_tt))
    return aa.wrap_phase(elong / 360.0)


_PHASE_MODELS = {
    "apparent": apparent_phase,
    "mean": mean_phase,
}


def phase_function(phase_model: PhaseModel):
    try:
        return _PHASE_MODELS[phase_model]
    except KeyError:
        raise InvalidArgumentError(f"phase_model must be one of: {', '.join(sorted(_PHASE_MODELS))}") from None


def compute_elements(jd: float, *, phase_model: PhaseModel = "apparent") -> LunarElements:
    """
    Mean elements at JD (UTC) plus the phase fraction in [0,1).
    Pure function of its arguments.
    """
    fa = aa.fundamental_args(aa.T_centuries(jd))
    phase = phase_function(phase_model)(jd)
    return LunarElements(
        jd=jd,
        phase=phase,
        L=fa.Lp_deg,
        M=fa.M_deg,
        F=fa.F_deg,
        D=fa.D_deg,
        Omega=fa.Omega_deg,
        phase_model=phase_model,
    )
