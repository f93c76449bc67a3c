"""Fuel nutrition analysis service.

Builds the Fuel prompts, asks the completion service for a FuelOutput, and
stores every result so it can be refined later and charted as score history.
"""

import uuid
from typing import cast

from loguru import logger
from pydantic_ai import Agent, BinaryContent
from sqlalchemy.orm import Session

from app.athletes.classifier import classify_athlete
from app.athletes.summary import format_classification
from app.config.models import FUEL_MODEL, LLM_PROVIDER
from app.db.models import FuelReport
from app.fuel.errors import FuelReportNotFoundError, MissingFuelInputError
from app.fuel.prompts import (
    PHOTO_RULES,
    SYSTEM_RULES,
    build_analyze_prompt,
    build_photo_prompt,
    build_refine_prompt,
)
from app.fuel.repository import FuelReportRepository, rounded_score
from app.fuel.schemas import (
    FighterInput,
    FuelAnalyzeRequest,
    FuelHistoryPoint,
    FuelMacroConfidence,
    FuelMacros,
    FuelMode,
    FuelOutput,
    FuelRefineRequest,
    TrainingInput,
)
from app.services.llm.errors import CompletionError, EmptyCompletionError
from app.services.llm.model import get_model
from app.users.profile_repository import ProfileRepository

HISTORY_DEFAULT_LIMIT = 8
HISTORY_MAX_LIMIT = 30


def _classification_block(session: Session, user_id: str) -> str | None:
    profile = ProfileRepository.get(session, user_id)
    if profile is None:
        return None
    return format_classification(classify_athlete(profile))


async def _run_fuel_agent(system_prompt: str, user_content: str | list) -> FuelOutput:
    model = get_model(LLM_PROVIDER, FUEL_MODEL)
    agent = Agent(
        model=model,
        system_prompt=system_prompt,
        output_type=FuelOutput,
    )

    try:
        result = await agent.run(user_content)
    except Exception as e:
        logger.error(
            "fuel: Completion call failed",
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise CompletionError("Fuel", f"Fuel completion failed: {e}") from e

    output = cast(FuelOutput, result.output)
    if output is None:
        raise EmptyCompletionError("Fuel")
    return output


def _store(session: Session, user_id: str, mode: FuelMode, output: FuelOutput) -> FuelOutput:
    FuelReportRepository.add(session, user_id, mode, output)
    logger.info(
        "fuel: Report stored",
        user_id=user_id,
        mode=mode,
        followups_id=output.followups_id,
        score=rounded_score(output.score),
        rating=output.rating,
    )
    return output


def report_to_output(row: FuelReport) -> FuelOutput:
    """Rebuild the FuelOutput a stored report was created from."""
    return FuelOutput(
        rating=row.rating,
        score=row.score,
        score_reason=row.score_reason,
        macros=FuelMacros(
            calories_kcal_range=row.calories_kcal_range,
            protein_g_range=row.protein_g_range,
            carbs_g_range=row.carbs_g_range,
            fat_g_range=row.fat_g_range,
        ),
        macro_confidence=FuelMacroConfidence.model_validate(row.macro_confidence),
        confidence=row.confidence,
        report=row.report,
        questions=row.questions or [],
        followups_id=row.followups_id,
    )


async def analyze_meals(session: Session, user_id: str, request: FuelAnalyzeRequest) -> FuelOutput:
    """Analyze a text description of meals.

    Args:
        session: Database session
        user_id: Requesting user
        request: Meals text with optional fighter and training context

    Returns:
        Stored FuelOutput

    Raises:
        MissingFuelInputError: If the meals text is blank
        CompletionError: If the completion service fails
    """
    if not request.meals.strip():
        raise MissingFuelInputError("meals", "Missing meals text")

    followups_id = str(uuid.uuid4())
    logger.info("fuel: Analyzing meals", user_id=user_id, followups_id=followups_id)

    prompt = build_analyze_prompt(
        request.meals,
        request.fighter,
        request.training,
        followups_id,
        classification_block=_classification_block(session, user_id),
    )
    output = await _run_fuel_agent(SYSTEM_RULES, prompt)
    output = output.model_copy(update={"followups_id": followups_id})
    return _store(session, user_id, "text", output)


async def analyze_meal_photo(
    session: Session,
    user_id: str,
    ingredients: str,
    image: bytes,
    media_type: str | None,
    fighter: FighterInput | None = None,
    training: TrainingInput | None = None,
) -> FuelOutput:
    """Analyze a meal photo together with its text description.

    Raises:
        MissingFuelInputError: If the text or the image is missing
        CompletionError: If the completion service fails
    """
    if not ingredients.strip():
        raise MissingFuelInputError("ingredients", "Missing meal text (ingredients)")
    if not image:
        raise MissingFuelInputError("image", "Missing image file")

    followups_id = str(uuid.uuid4())
    logger.info("fuel: Analyzing meal photo", user_id=user_id, followups_id=followups_id, image_bytes=len(image))

    prompt = build_photo_prompt(
        ingredients,
        fighter or FighterInput(),
        training or TrainingInput(),
        followups_id,
        classification_block=_classification_block(session, user_id),
    )
    content = [prompt, BinaryContent(data=image, media_type=media_type or "image/jpeg")]
    output = await _run_fuel_agent(PHOTO_RULES, content)
    output = output.model_copy(update={"followups_id": followups_id})
    return _store(session, user_id, "photo", output)


async def refine_report(session: Session, user_id: str, request: FuelRefineRequest) -> FuelOutput:
    """Refine the latest report of a follow-up thread with the user's answers.

    Raises:
        FuelReportNotFoundError: If the user has no report with that followups_id
        CompletionError: If the completion service fails
    """
    prior_row = FuelReportRepository.latest_for_followup(session, user_id, request.followups_id)
    if prior_row is None:
        raise FuelReportNotFoundError(request.followups_id)

    logger.info(
        "fuel: Refining report",
        user_id=user_id,
        followups_id=request.followups_id,
        answers=len(request.answers),
    )

    prompt = build_refine_prompt(report_to_output(prior_row), request.answers)
    output = await _run_fuel_agent(SYSTEM_RULES, prompt)
    # The thread id never changes across refinements
    output = output.model_copy(update={"followups_id": request.followups_id})
    return _store(session, user_id, "refine", output)


def get_history(session: Session, user_id: str, limit: int = HISTORY_DEFAULT_LIMIT) -> list[FuelHistoryPoint]:
    """Return the latest Fuel scores for a user, newest first."""
    limit = max(1, min(HISTORY_MAX_LIMIT, limit))
    return FuelReportRepository.history(session, user_id, limit)
