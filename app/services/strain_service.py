"""
Strain service: channel updates and aggregate panel state.

Glue between the API layer and the equilibrium core: applies samples to
the registry, derives heat, and runs the aggregate tracker on ticks.

The registry and the tracker do read-modify-write without locking, and the
routes run in FastAPI's threadpool.  Every call here therefore runs under
one process-local ``RLock`` owned by the application, so a channel only
ever has one writer at a time.  Multiple uvicorn workers each keep their
own registry and are not synchronised.
"""

from __future__ import annotations

from threading import RLock
from typing import Optional

from app.equilibrium.accumulator import strain_to_heat01
from app.equilibrium.presentation import panel_headline
from app.equilibrium.registry import ChannelRegistry
from app.equilibrium.tracker import AggregatePanelTracker, panel_for
from app.schemas.equilibrium import ChannelStateResponse, TickRequest, TickResponse
from app.schemas.strain import Sample, StrainState


class StrainService:
    def __init__(self, registry: ChannelRegistry, tracker: AggregatePanelTracker,
                 lock: Optional[RLock] = None, ) -> None:
        self.registry = registry
        self.tracker = tracker
        self._lock = lock if lock is not None else RLock()

    def _to_response(self, key: str, state: StrainState) -> ChannelStateResponse:
        return ChannelStateResponse(key=key, state=state, heat=strain_to_heat01(state.strain, self.registry.config))

    def list_channels(self) -> list[str]:
        with self._lock:
            return self.registry.keys()

    def get_channel(self, key: str) -> ChannelStateResponse:
        # get_state creates unseen channels, so it is a write too.
        with self._lock:
            return self._to_response(key, self.registry.get_state(key))

    def apply_sample(self, key: str, sample: Sample) -> ChannelStateResponse:
        with self._lock:
            return self._to_response(key, self.registry.apply_sample(key, sample))

    def tick(self, data: TickRequest) -> TickResponse:
        """Apply one sample per channel at ``data.t``, then classify the group."""
        with self._lock:
            channels = [self.apply_sample(key, Sample(t=data.t, x=x)) for key, x in data.tensions.items()]

            result = self.tracker.observe(data.tensions.values())
            panel = panel_for(result.state)

        return TickResponse(channels=channels, panel=panel, verdict=result.state, headline=panel_headline(panel), )
