"""
Shared API dependencies.

The channel registry, aggregate tracker and their write lock are owned by
the application instance (``app.state``); routes reach them through these
dependencies.
"""

from fastapi import Depends, Request

from app.equilibrium.registry import ChannelRegistry
from app.equilibrium.tracker import AggregatePanelTracker
from app.services.strain_service import StrainService


def get_registry(request: Request) -> ChannelRegistry:
    return request.app.state.registry


def get_tracker(request: Request) -> AggregatePanelTracker:
    return request.app.state.tracker


def get_lock(request: Request):
    return request.app.state.lock


def get_strain_service(registry: ChannelRegistry = Depends(get_registry),
                       tracker: AggregatePanelTracker = Depends(get_tracker),
                       lock=Depends(get_lock), ) -> StrainService:
    return StrainService(registry, tracker, lock)
