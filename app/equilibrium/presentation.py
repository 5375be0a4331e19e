"""
Presentation helpers for the balance field and its narrative copy.

These are pure transforms.  They shape how a tension *reads* (severity
labels, deadbanded field position, headlines) without changing the values
fed to the strain accumulator.
"""

from __future__ import annotations

from enum import Enum

from app.equilibrium.numeric import clamp
from app.schemas.strain import PanelState

# Field normalisation: ignore micro-noise near zero, then lift the mid range.
VIZ_DEADBAND = 0.06
VIZ_CURVE = 1.35

# Lower bounds (inclusive), strongest first.
_SEVERITY_THRESHOLDS: list[tuple[str, float]] = [
    ("strong", 0.7),
    ("elevated", 0.45),
    ("mild", 0.2),
]


class PullSeverity(str, Enum):
    NEUTRAL = "neutral"
    MILD = "mild"
    ELEVATED = "elevated"
    STRONG = "strong"

    @property
    def label(self) -> str:
        if self is PullSeverity.NEUTRAL:
            return "Balanced"
        return f"{self.value.capitalize()} pull"


def classify_pull_severity(abs_tension: float) -> PullSeverity:
    """Bucket an absolute tension into a severity."""
    for label, low in _SEVERITY_THRESHOLDS:
        if abs_tension >= low:
            return PullSeverity(label)
    return PullSeverity.NEUTRAL


def describe_current_read(tension: float, top: str, bottom: str) -> str:
    """One-line narrative of a dichotomy's current pull."""
    severity = classify_pull_severity(abs(tension))
    if severity is PullSeverity.NEUTRAL:
        return "Current read: System appears balanced."
    direction = top if tension > 0 else bottom
    return f"Current read: {severity.label} toward {direction}."


def normalize_for_viz(x: float, gain: float = 1.0) -> float:
    """Reshape a tension for the field renderer.

    Deadband, rescale the remainder to ``[0, 1]``, apply the curve and the
    per-dichotomy gain, cap at 1.  The sign is preserved.
    """
    x = clamp(x, -1.0, 1.0)
    ax = abs(x)
    if ax <= VIZ_DEADBAND:
        return 0.0
    shaped = ((ax - VIZ_DEADBAND) / (1.0 - VIZ_DEADBAND)) ** VIZ_CURVE
    out = min(1.0, shaped * gain)
    return out if x > 0 else -out


_HEADLINES: dict[PanelState, str] = {
    PanelState.EQUILIBRIUM: "Your competitive system appears to be in equilibrium.",
    PanelState.RETURNING: "Your competitive system appears to be moving back toward equilibrium.",
    PanelState.OUT_OF_EQUILIBRIUM: "Something appears to be pulling your competitive system out of equilibrium.",
}


def panel_headline(panel: PanelState) -> str:
    return _HEADLINES[panel]
