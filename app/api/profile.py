"""Fighter profile endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.dependencies.auth import get_current_user_id
from app.athletes.classifier import classify_athlete
from app.athletes.models import AthleteClassification
from app.db.session import get_db
from app.users.profile_repository import ProfileRepository

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileResponse(BaseModel):
    profile: dict[str, Any] | None
    classification: AthleteClassification | None


@router.get("", response_model=ProfileResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Return the stored profile and its classification (both null if none is saved)."""
    profile = ProfileRepository.get(db, user_id)
    if profile is None:
        return ProfileResponse(profile=None, classification=None)
    return ProfileResponse(profile=profile.to_json(), classification=classify_athlete(profile))


@router.put("", response_model=ProfileResponse)
def save_profile(
    data: dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Create or replace the stored profile."""
    profile = ProfileRepository.save(db, user_id, data)
    classification = classify_athlete(profile)
    logger.info("Profile saved", user_id=user_id, plan=classification.plan.value)
    return ProfileResponse(profile=profile.to_json(), classification=classification)
