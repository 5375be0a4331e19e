"""
Channel registry.

Owns the latest :class:`StrainState` of every channel.  A registry is an
ordinary object: the application builds one at startup and hands it to
whatever drives the update loop, tests build their own.

Channels are created lazily on first reference and live as long as the
registry.  There is no internal locking: callers must serialise
``apply_sample`` per channel (one writer per key).  The HTTP layer does so
through :class:`~app.services.strain_service.StrainService`.
"""

from __future__ import annotations

import logging
from typing import Iterator

from app.equilibrium.accumulator import DEFAULT_STRAIN_CONFIG, StrainConfig, init_state, step
from app.schemas.strain import Sample, StrainState

logger = logging.getLogger(__name__)


class ChannelRegistry:
    """Keyed store ``channel key -> StrainState``."""

    def __init__(self, config: StrainConfig = DEFAULT_STRAIN_CONFIG) -> None:
        self.config = config
        self._states: dict[str, StrainState] = {}

    def _get_or_create(self, key: str) -> StrainState:
        state = self._states.get(key)
        if state is None:
            logger.debug("Creating strain channel '%s'", key)
            state = init_state()
            self._states[key] = state
        return state

    def apply_sample(self, key: str, sample: Sample) -> StrainState:
        """Apply *sample* to channel *key* and return the new state."""
        state = step(self._get_or_create(key), sample, self.config)
        self._states[key] = state
        return state

    def get_state(self, key: str) -> StrainState:
        """Current state of channel *key* (a fresh state if never seen)."""
        return self._get_or_create(key)

    def keys(self) -> list[str]:
        """Sorted list of known channel keys."""
        return sorted(self._states)

    def snapshot(self) -> dict[str, StrainState]:
        return dict(self._states)

    def __contains__(self, key: object) -> bool:
        return key in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
