"""
Equilibrium classification and channel API schemas.

The instantaneous verdict is a tagged enum so that consumers can branch on
every outcome explicitly:

- ``equilibrium``       : magnitude inside the band (position alone wins)
- ``out_of_equilibrium``: outside the band and growing
- ``returning``         : outside the band and shrinking
- ``out_stable``        : outside the band, trend inside the noise floor
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.strain import PanelState, StrainState


class EquilibriumState(str, Enum):
    EQUILIBRIUM = "equilibrium"
    OUT_OF_EQUILIBRIUM = "out_of_equilibrium"
    RETURNING = "returning"
    OUT_STABLE = "out_stable"


class ClassifyResult(BaseModel):
    """Result of a single instantaneous classification."""

    model_config = ConfigDict(frozen=True)

    state: EquilibriumState
    is_out_of_equilibrium: bool
    abs_now: float = Field(..., description="|tension_now|")
    d_abs: float = Field(..., description="|tension_now| - |tension_prev|")


class ClassifyRequest(BaseModel):
    """Body of ``POST /equilibrium/classify``."""

    model_config = ConfigDict(allow_inf_nan=False)

    tension_now: float
    tension_prev: float
    epsilon: float = Field(..., ge=0.0, description="Equilibrium half-band")
    delta: float = Field(..., ge=0.0, description="Minimum trend magnitude treated as signal")
    prev_state: Optional[EquilibriumState] = None


class DichotomyResponse(BaseModel):
    key: str
    top_label: str = Field(..., description="Pole A label (x > 0)")
    bottom_label: str = Field(..., description="Pole B label (x < 0)")
    pair_key: str = Field(..., description="Key of the pair in upstream balance rollups")


class ChannelStateResponse(BaseModel):
    """Accumulator state of one channel plus its rendered heat."""

    key: str
    state: StrainState
    heat: float = Field(..., ge=0.0, le=1.0, description="Presentation heat derived from strain")


class TickRequest(BaseModel):
    """One producer tick: a sample time and a position per channel."""

    model_config = ConfigDict(allow_inf_nan=False)

    t: float = Field(..., description="Tick time, epoch milliseconds")
    tensions: dict[str, float] = Field(default_factory=dict)


class TickResponse(BaseModel):
    channels: list[ChannelStateResponse]
    panel: PanelState = Field(..., description="Aggregate panel state across the ticked channels")
    verdict: EquilibriumState = Field(..., description="Aggregate instantaneous verdict")
    headline: str
