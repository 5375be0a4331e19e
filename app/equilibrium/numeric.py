"""Shared numeric helpers for the equilibrium core."""

from __future__ import annotations

import math
from typing import Optional

from app.schemas.strain import Pole


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into ``[low, high]``."""
    return min(high, max(low, value))


def sign_pole(x: float) -> Optional[Pole]:
    """Raw pole of a signed position: ``A`` above zero, ``B`` below, ``None`` at zero."""
    if x > 0:
        return Pole.A
    if x < 0:
        return Pole.B
    return None


def number_or(value: object, default: float = 0.0) -> float:
    """Return *value* as a float, or *default* if it is not a number (or is NaN)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if math.isnan(value):
        return default
    return float(value)
