"""Equilibrium core: instantaneous classifier, strain accumulator, channel registry."""

from app.equilibrium.accumulator import (DEFAULT_STRAIN_CONFIG, StrainConfig, init_state, run, step,
                                         strain_to_heat01, )
from app.equilibrium.classifier import classify
from app.equilibrium.registry import ChannelRegistry
from app.equilibrium.tracker import AggregatePanelTracker

__all__ = [
    "AggregatePanelTracker",
    "ChannelRegistry",
    "DEFAULT_STRAIN_CONFIG",
    "StrainConfig",
    "classify",
    "init_state",
    "run",
    "step",
    "strain_to_heat01",
]
