"""Sensei coach service for camp plans and coach chat.

Free-text output: the completion service returns a plan or a reply that is
passed through to the client, flagged as truncated when the model asked to
continue in another chunk.
"""

from loguru import logger
from pydantic_ai import Agent
from pydantic_ai.messages import ModelResponse
from sqlalchemy.orm import Session

from app.athletes.classifier import classify_athlete
from app.athletes.summary import build_fighter_summary, format_classification
from app.config.models import LLM_PROVIDER, SENSEI_MODEL
from app.sensei.errors import MissingSenseiInputError
from app.sensei.prompts import SYSTEM_PROMPT, build_user_input, is_truncated
from app.sensei.schemas import SenseiReply, SenseiRequest
from app.services.llm.errors import CompletionError, EmptyCompletionError
from app.services.llm.model import get_model
from app.users.profile_repository import ProfileRepository

MAX_OUTPUT_TOKENS_PLAN = 3200
MAX_OUTPUT_TOKENS_CHAT = 1600


def hit_token_limit(messages: list) -> bool:
    """True when the last model response stopped at the output token limit."""
    responses = [m for m in messages if isinstance(m, ModelResponse)]
    return bool(responses) and responses[-1].finish_reason == "length"


def validate_request(request: SenseiRequest) -> None:
    """Check that the request carries what its mode needs.

    Raises:
        MissingSenseiInputError: If a required field is blank
    """
    if request.mode in {"new", "refine"}:
        if not (request.style or "").strip() or not (request.camp_stage or "").strip():
            field_name = "style" if not (request.style or "").strip() else "camp_stage"
            raise MissingSenseiInputError(
                field_name,
                "Sensei needs at least: your style AND camp stage/timeframe.",
            )

    if request.mode == "chat" and not (request.message or "").strip():
        raise MissingSenseiInputError("message", "Empty message.")


async def run_sensei(session: Session, user_id: str, request: SenseiRequest) -> SenseiReply:
    """Generate a camp plan or a chat reply.

    The stored profile, when present, supplies the profile summary (unless the
    client sent one) and the athlete classification block.

    Args:
        session: Database session
        user_id: Requesting user
        request: Sensei request

    Returns:
        SenseiReply with plan (camp modes) or reply (chat)

    Raises:
        MissingSenseiInputError: If the request is incomplete
        CompletionError: If the completion service fails or returns nothing
    """
    validate_request(request)

    profile = ProfileRepository.get(session, user_id)
    profile_summary = None
    classification_block = None
    if profile is not None:
        profile_summary = build_fighter_summary(profile)
        classification = classify_athlete(profile)
        classification_block = format_classification(classification)
        logger.info(
            "sensei: Using stored profile",
            user_id=user_id,
            plan=classification.plan.value,
            age_band=classification.age_band.value,
        )

    user_input = build_user_input(request, profile_summary, classification_block)
    max_tokens = MAX_OUTPUT_TOKENS_CHAT if request.mode == "chat" else MAX_OUTPUT_TOKENS_PLAN

    model = get_model(LLM_PROVIDER, SENSEI_MODEL)
    agent = Agent(
        model=model,
        system_prompt=SYSTEM_PROMPT,
        output_type=str,
    )

    logger.debug(
        "LLM Prompt: Sensei",
        mode=request.mode,
        user_prompt=user_input,
    )

    try:
        result = await agent.run(user_input, model_settings={"max_tokens": max_tokens})
    except Exception as e:
        logger.error("sensei: Completion call failed", mode=request.mode, error_type=type(e).__name__, error_message=str(e))
        raise CompletionError("Sensei", str(e) or "Sensei request failed.") from e

    text = (result.output or "").strip()
    if not text:
        logger.error("sensei: Empty output", mode=request.mode)
        raise EmptyCompletionError("Sensei")

    truncated = is_truncated(text) or hit_token_limit(result.all_messages())
    logger.info("sensei: Response generated", mode=request.mode, truncated=truncated, chars=len(text))

    if request.mode == "chat":
        return SenseiReply(mode=request.mode, reply=text, truncated=truncated)
    return SenseiReply(mode=request.mode, plan=text, truncated=truncated)
