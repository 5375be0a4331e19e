"""
Strain accumulator schemas.

A *channel* carries a signed position ``x`` between two poles:

- ``+1.0``: fully toward pole A (top label of the dichotomy)
- ``0.0`` : centered
- ``-1.0``: fully toward pole B (bottom label of the dichotomy)

The accumulator state is an immutable value: every sample produces a fresh
:class:`StrainState`, the previous one is never mutated.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Pole(str, Enum):
    A = "A"
    B = "B"

    @property
    def opposite(self) -> Pole:
        return Pole.B if self is Pole.A else Pole.A


class StrainTarget(str, Enum):
    """Side of the field that receives the strain heat overlay."""

    A = "A"
    B = "B"
    BOTH = "both"

    @classmethod
    def opposite_of(cls, pole: Pole) -> StrainTarget:
        return cls(pole.opposite.value)


class PanelState(str, Enum):
    """Distribution-only classification (ignores strain)."""

    EQUILIBRIUM = "equilibrium"
    OUT_OF_EQUILIBRIUM = "out_of_equilibrium"
    RETURNING = "returning_to_equilibrium"


class Sample(BaseModel):
    """One observation of a channel.

    ``x`` is unbounded here: the accumulator clamps it.  Non-finite values
    are rejected for both fields.
    """

    model_config = ConfigDict(frozen=True)

    t: float = Field(..., allow_inf_nan=False, description="Sample time, epoch milliseconds")
    x: float = Field(..., allow_inf_nan=False, description="Signed position, -1 (pole B) .. +1 (pole A)")


class StrainState(BaseModel):
    """Per-channel accumulator state."""

    model_config = ConfigDict(frozen=True)

    strain: float = Field(0.0, ge=0.0, description="Current strain intensity [0..max_strain]")
    target: Optional[StrainTarget] = Field(None, description="Side receiving strain (opposite of dominant)")
    dominant: Optional[Pole] = Field(None, description="Dominant pole once dominance persistence is met")
    outside_ms: float = Field(0.0, ge=0.0, description="Continuous ms outside the equilibrium band")
    inside_ms: float = Field(0.0, ge=0.0, description="Continuous ms inside the equilibrium band")
    dominance_ms: float = Field(0.0, ge=0.0, description="Continuous ms of the current raw sign streak")
    dominance_sign: Optional[Pole] = Field(None, description="Raw sign of x for the current streak")
    panel: PanelState = PanelState.EQUILIBRIUM
    last_t: Optional[float] = Field(None, description="Last processed sample time (epoch ms)")
