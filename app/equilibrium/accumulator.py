"""
Temporal strain accumulator.

The accumulator turns an ordered stream of ``(t, x)`` samples for one
channel into a bounded **strain** scalar that drives the heat overlay of
the balance field.  Strain is *not* the instantaneous position: it measures
sustained imbalance.

Model
-----
Per sample, with ``dt`` the time since the previous sample:

- **Dwell counters**: continuous time inside / outside the equilibrium
  band.  Exactly one of them grows, the other is reset.
- **Dominance persistence**: the raw sign of ``x`` must hold for
  ``min_dominance_ms`` before the pole is accepted as ``dominant``.  The
  persisted pole is sticky, so noisy zero crossings cannot flip the target.
- **Target**: always the pole opposite the dominant one, so strain lands on
  the side that is being deprived.
- **Accumulation**: outside the band, once ``outside_ms >=
  min_activation_ms``::

      strain += clamp(|x| - band, 0, 1) * accumulate_per_ms * dt

- **Decay**: inside the band, once ``inside_ms >= min_recovery_ms``::

      center = 1 - clamp(|x| / band, 0, 1)
      strain -= (0.5 + 0.5 * center) * decay_per_ms * dt

  Decay is faster near the true center and never below half the base rate.
  Landing on exactly ``0`` clears the target.

Design choices
--------------
1. **Asymmetric rates**: build fast, settle slow.  ``decay_per_ms`` must be
   strictly lower than ``accumulate_per_ms``; :class:`StrainConfig` rejects
   anything else.
2. **Total over its input**: ``x`` is clamped to ``[-1, 1]``, ``dt`` to
   ``>= 0`` and strain to ``[0, max_strain]``.  Out-of-order samples count as
   zero-duration rather than raising.  A NaN ``x`` reads as centered and a
   non-finite ``t`` as zero-duration that leaves ``last_t`` untouched.
3. **Immutable state**: :func:`step` returns a fresh :class:`StrainState`.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.equilibrium.numeric import clamp, number_or, sign_pole
from app.schemas.strain import PanelState, Pole, Sample, StrainState, StrainTarget

logger = logging.getLogger(__name__)

_MINUTE_MS = 60 * 1000
_HOUR_MS = 60 * _MINUTE_MS

# Exponent of the heat curve: low strain stays visually negligible.
_HEAT_CURVE = 1.6


# ======================================================================
# Configuration
# ======================================================================


class StrainConfig(BaseModel):
    """Numeric policy shared by any number of channels.

    All durations are in milliseconds, rates are per millisecond at full
    distance (``|x| - band == 1``).
    """

    model_config = ConfigDict(frozen=True)

    band: float = Field(0.12, ge=0.0, description="Equilibrium band half-width around 0")
    min_activation_ms: float = Field(5 * _MINUTE_MS, ge=0.0,
                                     description="Continuous time outside the band before strain can rise", )
    min_recovery_ms: float = Field(10 * _MINUTE_MS, ge=0.0,
                                   description="Continuous time inside the band before strain can decay", )
    accumulate_per_ms: float = Field(1 / (12 * _HOUR_MS), ge=0.0, description="~12h to max at full distance")
    decay_per_ms: float = Field(1 / (24 * _HOUR_MS), ge=0.0, description="~24h to decay at full distance")
    max_strain: float = Field(1.0, ge=0.0)
    min_dominance_ms: float = Field(3 * _MINUTE_MS, ge=0.0,
                                    description="Continuous time a pole must lead before it is dominant", )

    @model_validator(mode="after")
    def _decay_slower_than_accumulation(self) -> StrainConfig:
        if self.decay_per_ms >= self.accumulate_per_ms:
            raise ValueError(f"decay_per_ms ({self.decay_per_ms}) must be lower than "
                             f"accumulate_per_ms ({self.accumulate_per_ms})")
        return self


# Singleton default config
DEFAULT_STRAIN_CONFIG = StrainConfig()


# ======================================================================
# State transitions
# ======================================================================


def init_state(now_t: Optional[float] = None) -> StrainState:
    """Fresh state: no strain, no target, all counters at zero."""
    return StrainState(last_t=now_t)


def _next_panel(prev: PanelState, inside_band: bool) -> PanelState:
    if not inside_band:
        return PanelState.OUT_OF_EQUILIBRIUM
    if prev in (PanelState.OUT_OF_EQUILIBRIUM, PanelState.RETURNING):
        return PanelState.RETURNING
    return PanelState.EQUILIBRIUM


def _center_factor(abs_x: float, band: float) -> float:
    """1 at the exact center, 0 at the band edge."""
    if band <= 0:
        return 1.0
    return 1.0 - clamp(abs_x / band, 0.0, 1.0)


def step(prev: StrainState, sample: Sample, config: StrainConfig = DEFAULT_STRAIN_CONFIG) -> StrainState:
    """Apply one sample to *prev* and return the next state.

    Samples must arrive in non-decreasing ``t`` order; a sample older than
    ``prev.last_t`` is treated as zero-duration.
    """
    t = sample.t
    x = clamp(number_or(sample.x), -1.0, 1.0)

    if not math.isfinite(t):
        logger.debug("Non-finite sample time %s; treating as zero-duration", t)
        t, dt = prev.last_t, 0.0
    elif prev.last_t is None:
        dt = 0.0
    else:
        dt = t - prev.last_t
        if dt < 0:
            logger.debug("Out-of-order sample (t=%s < last_t=%s); treating as zero-duration", t, prev.last_t)
            dt = 0.0

    abs_x = abs(x)
    inside_band = abs_x <= config.band
    sign = sign_pole(x)

    panel = _next_panel(prev.panel, inside_band)

    # --- Dwell counters (mutually exclusive) ---
    if inside_band:
        inside_ms, outside_ms = prev.inside_ms + dt, 0.0
    else:
        inside_ms, outside_ms = 0.0, prev.outside_ms + dt

    # --- Dominance persistence ---
    if sign == prev.dominance_sign:
        dominance_sign, dominance_ms = sign, prev.dominance_ms + dt
    else:
        dominance_sign, dominance_ms = sign, dt

    dominant: Optional[Pole] = prev.dominant
    if dominance_sign is not None and dominance_ms >= config.min_dominance_ms:
        dominant = dominance_sign

    # --- Target: opposite of dominant, retained while no pole has won yet ---
    target = prev.target
    if dominant is not None:
        target = StrainTarget.opposite_of(dominant)

    # --- Strain ---
    strain = prev.strain
    if not inside_band:
        if outside_ms >= config.min_activation_ms:
            distance = clamp(abs_x - config.band, 0.0, 1.0)
            strain = clamp(strain + distance * config.accumulate_per_ms * dt, 0.0, config.max_strain)
    elif inside_ms >= config.min_recovery_ms:
        rate = 0.5 + 0.5 * _center_factor(abs_x, config.band)
        strain = clamp(strain - rate * config.decay_per_ms * dt, 0.0, config.max_strain)
        if strain == 0:
            target = None

    return prev.model_copy(update={
        "strain": strain,
        "target": target,
        "dominant": dominant,
        "outside_ms": outside_ms,
        "inside_ms": inside_ms,
        "dominance_ms": dominance_ms,
        "dominance_sign": dominance_sign,
        "panel": panel,
        "last_t": t,
    })


def run(samples: Iterable[Sample], config: StrainConfig = DEFAULT_STRAIN_CONFIG,
        seed: Optional[StrainState] = None, ) -> StrainState:
    """Replay an ordered series of samples and return the final state.

    Without a *seed* the replay starts from :func:`init_state` anchored at
    the first sample's time, so the first ``dt`` is zero.
    """
    state = seed
    for sample in samples:
        if state is None:
            state = init_state(sample.t if math.isfinite(sample.t) else None)
        state = step(state, sample, config)
    return state if state is not None else init_state()


# ======================================================================
# Presentation
# ======================================================================


def strain_to_heat01(strain: float, config: StrainConfig = DEFAULT_STRAIN_CONFIG) -> float:
    """Map strain to a ``[0, 1]`` heat intensity, independent of ``max_strain``.

    The curve is conservative: low strain is subtle, only sustained high
    strain becomes visually assertive.
    """
    if config.max_strain <= 0:
        return 0.0
    normalized = clamp(strain / config.max_strain, 0.0, 1.0)
    return clamp(normalized ** _HEAT_CURVE, 0.0, 1.0)
