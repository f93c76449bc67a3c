"""Fuel nutrition endpoints."""

from typing import TypeVar

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from loguru import logger
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.api.dependencies.auth import get_current_user_id
from app.db.session import get_db
from app.fuel.errors import FuelReportNotFoundError, MissingFuelInputError
from app.fuel.schemas import (
    FighterInput,
    FuelAnalyzeRequest,
    FuelAnalyzeResponse,
    FuelHistoryResponse,
    FuelOutput,
    FuelRefineRequest,
    TrainingInput,
)
from app.fuel.service import (
    HISTORY_DEFAULT_LIMIT,
    HISTORY_MAX_LIMIT,
    analyze_meal_photo,
    analyze_meals,
    get_history,
    refine_report,
)
from app.services.llm.errors import CompletionError

router = APIRouter(prefix="/fuel", tags=["fuel"])

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB

T = TypeVar("T", bound=BaseModel)


def _response(output: FuelOutput) -> FuelAnalyzeResponse:
    return FuelAnalyzeResponse(**output.model_dump())


def _parse_form_json(raw: str | None, model: type[T], field_name: str) -> T:
    if not raw or not raw.strip():
        return model()
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {field_name} JSON",
        ) from e


@router.post("/analyze", response_model=FuelAnalyzeResponse)
async def analyze(
    req: FuelAnalyzeRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> FuelAnalyzeResponse:
    """Analyze a text description of meals."""
    try:
        return _response(await analyze_meals(db, user_id, req))
    except MissingFuelInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e


@router.post("/refine", response_model=FuelAnalyzeResponse)
async def refine(
    req: FuelRefineRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> FuelAnalyzeResponse:
    """Refine a previous analysis with answers to its follow-up questions."""
    try:
        return _response(await refine_report(db, user_id, req))
    except FuelReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e


@router.get("/history", response_model=FuelHistoryResponse)
def history(
    limit: int = Query(default=HISTORY_DEFAULT_LIMIT, ge=1, le=HISTORY_MAX_LIMIT),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> FuelHistoryResponse:
    """Latest Fuel scores, newest first."""
    return FuelHistoryResponse(points=get_history(db, user_id, limit))


@router.post("/photo", response_model=FuelAnalyzeResponse)
async def photo(
    image: UploadFile = File(...),
    ingredients: str = Form(default=""),
    fighter: str | None = Form(default=None),
    training: str | None = Form(default=None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> FuelAnalyzeResponse:
    """Analyze a meal photo together with its text description.

    fighter and training are optional JSON-encoded form fields.
    """
    fighter_input = _parse_form_json(fighter, FighterInput, "fighter")
    training_input = _parse_form_json(training, TrainingInput, "training")

    image_bytes = await image.read()
    if len(image_bytes) > MAX_IMAGE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image too large. Maximum size: {MAX_IMAGE_SIZE / (1024 * 1024):.0f}MB",
        )
    logger.debug(f"Fuel photo upload: {image.filename} ({len(image_bytes)} bytes)")

    try:
        output = await analyze_meal_photo(
            db,
            user_id,
            ingredients,
            image_bytes,
            image.content_type,
            fighter=fighter_input,
            training=training_input,
        )
    except MissingFuelInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e
    return _response(output)
