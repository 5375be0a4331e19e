"""
Instantaneous equilibrium classifier.

Classifies the current vs. previous magnitude of a signed tension into one
of four qualitative states.  Position is checked first, then direction:

1. ``|now| <= epsilon``         → ``equilibrium`` (trend is irrelevant in band)
2. ``|now| - |prev| >= delta``  → ``out_of_equilibrium``
3. ``|now| - |prev| <= -delta`` → ``returning``
4. otherwise (noise band)       → hold ``prev_state`` unless it is
   ``equilibrium`` or absent, in which case ``out_stable``.

The hold branch keeps the verdict from flickering while the trend wobbles
around zero.  The function is pure: the caller owns ``prev_state``.

Tensions may be on any consistent scale; callers typically pass an aggregate
such as the maximum absolute tension over several channels.
"""

from __future__ import annotations

from typing import Optional

from app.schemas.equilibrium import ClassifyResult, EquilibriumState

# Noise floor for the aggregate trend used by the balance panel.
DEFAULT_TREND_DELTA = 0.03


def classify(tension_now: float, tension_prev: float, epsilon: float, delta: float,
             prev_state: Optional[EquilibriumState] = None, ) -> ClassifyResult:
    """Classify a tension reading against its previous value.

    Args:
        tension_now: Current signed tension.
        tension_prev: Previous signed tension (same scale).
        epsilon: Equilibrium half-band (``>= 0``).  ``0`` makes equilibrium
            reachable only at exactly zero.
        delta: Minimum ``|d_abs|`` treated as a direction (``>= 0``).  ``0``
            disables the hold branch.
        prev_state: Previous verdict, only consulted in the noise band.

    Returns:
        :class:`ClassifyResult`.
    """
    abs_now = abs(tension_now)
    abs_prev = abs(tension_prev)
    d_abs = abs_now - abs_prev

    if abs_now <= epsilon:
        state = EquilibriumState.EQUILIBRIUM
    elif d_abs >= delta:
        state = EquilibriumState.OUT_OF_EQUILIBRIUM
    elif d_abs <= -delta:
        state = EquilibriumState.RETURNING
    elif prev_state is not None and prev_state != EquilibriumState.EQUILIBRIUM:
        state = prev_state
    else:
        state = EquilibriumState.OUT_STABLE

    return ClassifyResult(state=state, is_out_of_equilibrium=state != EquilibriumState.EQUILIBRIUM,
                          abs_now=abs_now, d_abs=d_abs, )
