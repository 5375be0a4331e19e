"""
Equilibrium endpoints: dichotomy catalogue and instantaneous classification.
"""

from fastapi import APIRouter

from app.equilibrium.classifier import classify
from app.equilibrium.dichotomies import DICHOTOMIES
from app.schemas.equilibrium import ClassifyRequest, ClassifyResult, DichotomyResponse

router = APIRouter()


@router.get(
    "/dichotomies",
    summary="List the named dichotomies of the balance map.",
    response_model=list[DichotomyResponse],
)
def list_dichotomies():
    return [DichotomyResponse(**d.model_dump()) for d in DICHOTOMIES]


@router.post(
    "/classify",
    summary="Classify a tension reading (equilibrium, out, returning, out_stable).",
    response_model=ClassifyResult,
)
def classify_tension(data: ClassifyRequest):
    return classify(data.tension_now, data.tension_prev, data.epsilon, data.delta, data.prev_state)
