"""
Aggregate panel tracker.

Runs the instantaneous classifier over the *strongest* channel of a group
(the maximum absolute tension) and remembers the previous magnitude and
verdict between ticks, so the noise-band hold works across calls.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from app.equilibrium.classifier import DEFAULT_TREND_DELTA, classify
from app.schemas.equilibrium import ClassifyResult, EquilibriumState
from app.schemas.strain import PanelState

logger = logging.getLogger(__name__)


def panel_for(state: EquilibriumState) -> PanelState:
    """Map a classifier verdict onto the three panel states."""
    if state == EquilibriumState.EQUILIBRIUM:
        return PanelState.EQUILIBRIUM
    if state == EquilibriumState.RETURNING:
        return PanelState.RETURNING
    return PanelState.OUT_OF_EQUILIBRIUM


class AggregatePanelTracker:
    """Stateful wrapper around :func:`classify` for a group of channels."""

    def __init__(self, epsilon: float, delta: float = DEFAULT_TREND_DELTA) -> None:
        self.epsilon = epsilon
        self.delta = delta
        self.prev_abs: float = 0.0
        self.prev_state: Optional[EquilibriumState] = None
        self.panel: PanelState = PanelState.EQUILIBRIUM

    def observe(self, tensions: Iterable[float]) -> ClassifyResult:
        """Classify one tick of tensions and update the held state."""
        agg_abs = max((abs(t) for t in tensions), default=0.0)

        result = classify(agg_abs, self.prev_abs, self.epsilon, self.delta, self.prev_state)
        self.prev_abs = agg_abs
        self.prev_state = result.state

        panel = panel_for(result.state)
        if panel != self.panel:
            logger.info("Aggregate panel %s -> %s (|tension|=%.3f, d=%.3f)", self.panel.value, panel.value,
                        result.abs_now, result.d_abs)
        self.panel = panel
        return result
