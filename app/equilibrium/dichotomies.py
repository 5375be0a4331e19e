"""
Named dichotomies of the execution balance map.

Each dichotomy is one channel: ``x > 0`` leans toward the *top* label
(pole A), ``x < 0`` toward the *bottom* label (pole B).  ``pair_key`` is the
key under which upstream balance rollups report the pair's tension.
"""

from __future__ import annotations

from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from app.equilibrium.numeric import clamp, number_or


class Dichotomy(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    top_label: str
    bottom_label: str
    pair_key: str


DICHOTOMIES: list[Dichotomy] = [
    Dichotomy(key="training_load_vs_readiness", top_label="Training Load", bottom_label="Competitive Readiness",
              pair_key="training_load_vs_competitive_readiness", ),
    Dichotomy(key="individual_vs_team", top_label="Individual Development", bottom_label="Team Performance",
              pair_key="individual_development_vs_team_performance", ),
    Dichotomy(key="consistency_vs_adaptation", top_label="Consistency", bottom_label="Adaptation",
              pair_key="consistency_vs_adaptation", ),
    Dichotomy(key="discipline_vs_instinct", top_label="Execution Discipline", bottom_label="Competitive Instinct",
              pair_key="program_discipline_vs_competitive_instinct", ),
    Dichotomy(key="sustainability_vs_pressure", top_label="Sustainability", bottom_label="Pressure",
              pair_key="sustainability_vs_pressure", ),
]

DICHOTOMY_KEYS: list[str] = [d.key for d in DICHOTOMIES]

_BY_KEY: dict[str, Dichotomy] = {d.key: d for d in DICHOTOMIES}


def get_dichotomy(key: str) -> Optional[Dichotomy]:
    """Return the dichotomy for *key*, or ``None`` for an ad-hoc channel."""
    return _BY_KEY.get(key)


def clamp_tension(value: object) -> float:
    """Coerce a raw rollup value to a tension in ``[-1, 1]`` (non-numbers → 0)."""
    return clamp(number_or(value, 0.0), -1.0, 1.0)


def tensions_from_pairs(pairs: Mapping[str, Mapping[str, object]]) -> dict[str, float]:
    """Extract per-dichotomy tensions from a rollup ``pairs`` mapping.

    Missing pairs read as centered (``0.0``).
    """
    out: dict[str, float] = {}
    for d in DICHOTOMIES:
        pair = pairs.get(d.pair_key) or {}
        out[d.key] = clamp_tension(pair.get("tension"))
    return out
