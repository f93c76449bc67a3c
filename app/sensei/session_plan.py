"""Single-session plan generation.

Unlike camp plans, a session plan is structured: the completion service must
return a SenseiPlan. The supplied profile is classified first so the session
respects the athlete's plan category.
"""

from typing import cast

from loguru import logger
from pydantic_ai import Agent

from app.athletes.classifier import classify_athlete
from app.athletes.summary import format_classification
from app.config.models import LLM_PROVIDER, SENSEI_PLAN_MODEL
from app.sensei.prompts import SESSION_SYSTEM_PROMPT, build_session_prompt
from app.sensei.schemas import SenseiPlan, SenseiPlanRequest
from app.services.llm.errors import CompletionError, EmptyCompletionError
from app.services.llm.model import get_model

SESSION_TEMPERATURE = 0.6


async def generate_session_plan(request: SenseiPlanRequest) -> SenseiPlan:
    """Generate one training session for today.

    Args:
        request: Fighter profile JSON and session context

    Returns:
        SenseiPlan with warmup, rounds, finisher, notes and safety lines

    Raises:
        CompletionError: If the completion service fails or returns nothing
    """
    classification = classify_athlete(request.profile)
    user_prompt = build_session_prompt(
        request.profile,
        request.context,
        format_classification(classification),
    )

    model = get_model(LLM_PROVIDER, SENSEI_PLAN_MODEL)
    agent = Agent(
        model=model,
        system_prompt=SESSION_SYSTEM_PROMPT,
        output_type=SenseiPlan,
    )

    logger.debug(
        "sensei_plan: Calling LLM for session generation",
        goal=request.context.goal,
        plan=classification.plan.value,
        level_band=classification.level_band.value,
    )

    try:
        result = await agent.run(user_prompt, model_settings={"temperature": SESSION_TEMPERATURE})
    except Exception as e:
        logger.error(
            "sensei_plan: Failed to generate session",
            error_type=type(e).__name__,
            error_message=str(e),
            goal=request.context.goal,
        )
        raise CompletionError("Sensei plan", f"Failed to generate session plan: {e}") from e

    plan = cast(SenseiPlan, result.output)
    if plan is None:
        raise EmptyCompletionError("Sensei plan")

    logger.info("sensei_plan: Session generated", rounds=len(plan.main_rounds), plan=classification.plan.value)
    return plan
