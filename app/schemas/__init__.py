"""Pydantic schemas for the equilibrium core and its API."""

from app.schemas.strain import PanelState, Pole, Sample, StrainState, StrainTarget
from app.schemas.equilibrium import (
    ChannelStateResponse,
    ClassifyRequest,
    ClassifyResult,
    DichotomyResponse,
    EquilibriumState,
    TickRequest,
    TickResponse,
)

__all__ = [
    "ChannelStateResponse",
    "ClassifyRequest",
    "ClassifyResult",
    "DichotomyResponse",
    "EquilibriumState",
    "PanelState",
    "Pole",
    "Sample",
    "StrainState",
    "StrainTarget",
    "TickRequest",
    "TickResponse",
]
