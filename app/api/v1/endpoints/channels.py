"""
Channel endpoints: apply samples and read strain state.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_strain_service
from app.schemas.equilibrium import ChannelStateResponse, TickRequest, TickResponse
from app.schemas.strain import Sample
from app.services.strain_service import StrainService

router = APIRouter()


@router.get(
    "",
    summary="List known channel keys.",
    response_model=list[str],
)
def list_channels(service: StrainService = Depends(get_strain_service)):
    return service.list_channels()


@router.post(
    "/tick",
    summary="Apply one sample per channel and classify the group.",
    response_model=TickResponse,
)
def tick(data: TickRequest, service: StrainService = Depends(get_strain_service)):
    return service.tick(data)


@router.get(
    "/{key}",
    summary="Get the strain state of a channel.",
    response_model=ChannelStateResponse,
)
def get_channel(key: str, service: StrainService = Depends(get_strain_service)):
    return service.get_channel(key)


@router.post(
    "/{key}/samples",
    summary="Apply one sample to a channel.",
    response_model=ChannelStateResponse,
)
def apply_sample(key: str, sample: Sample, service: StrainService = Depends(get_strain_service)):
    return service.apply_sample(key, sample)
