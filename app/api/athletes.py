from typing import Any

from fastapi import APIRouter, Body

from app.athletes.classifier import classify_athlete
from app.athletes.models import AthleteClassification

router = APIRouter(prefix="/athletes", tags=["athletes"])


@router.post("/classify", response_model=AthleteClassification)
def classify(profile: dict[str, Any] | None = Body(default=None)) -> AthleteClassification:
    """Classify an arbitrary fighter profile without storing it."""
    return classify_athlete(profile)
