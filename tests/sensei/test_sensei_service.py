"""Tests for the Sensei coach and session plan services.

The completion service is replaced by a fake Agent; these tests check what is
sent to it and how its output is turned into replies.
"""

from unittest.mock import MagicMock, patch

import pytest
from pydantic_ai.messages import ModelRequest, ModelResponse, TextPart, UserPromptPart

from app.sensei.errors import MissingSenseiInputError
from app.sensei.schemas import SenseiContext, SenseiPlan, SenseiPlanRequest, SenseiRequest, SenseiRound
from app.sensei.service import (
    MAX_OUTPUT_TOKENS_CHAT,
    MAX_OUTPUT_TOKENS_PLAN,
    hit_token_limit,
    run_sensei,
    validate_request,
)
from app.sensei.session_plan import generate_session_plan
from app.services.llm.errors import CompletionError, EmptyCompletionError
from app.users.profile_repository import ProfileRepository


def _sample_plan() -> SenseiPlan:
    return SenseiPlan(
        warmup=["Jump rope", "Shadow boxing", "Hip escapes"],
        main_rounds=[
            SenseiRound(
                round=i,
                duration_seconds=180,
                focus="Jab",
                drill="Jab-cross on pads",
                coaching_cues=["Hands up"],
                intensity="moderate",
            )
            for i in range(1, 6)
        ],
        finisher="Sprawl ladder",
        notes=["Speed day", "Crisp output", "Long rest"],
        safety=["Stop if pain", "Protect the neck", "Hydrate"],
    )


@pytest.mark.parametrize("mode", ["new", "refine"])
def test_validate_requires_style_and_camp_stage(mode):
    with pytest.raises(MissingSenseiInputError) as exc:
        validate_request(SenseiRequest(mode=mode, style="Counter striker"))

    assert exc.value.field_name == "camp_stage"
    assert exc.value.message == "Sensei needs at least: your style AND camp stage/timeframe."


def test_validate_rejects_blank_chat_message():
    with pytest.raises(MissingSenseiInputError) as exc:
        validate_request(SenseiRequest(mode="chat", message="   "))

    assert exc.value.message == "Empty message."


def test_validate_accepts_continue_without_fields():
    validate_request(SenseiRequest(mode="continue"))


@pytest.mark.asyncio
async def test_run_sensei_plan_uses_stored_profile(db_session, fake_agent_factory):
    ProfileRepository.save(db_session, "user-1", {"name": "Ana", "age": "16", "injuryHistory": "knee"})
    fake_agent = fake_agent_factory(output="MODE LOCK: FORGING\n...")

    with (
        patch("app.sensei.service.get_model", return_value=MagicMock()),
        patch("app.sensei.service.Agent", return_value=fake_agent),
    ):
        reply = await run_sensei(
            db_session,
            "user-1",
            SenseiRequest(mode="new", style="Out-fighter", camp_stage="6 weeks"),
        )

    assert reply.ok is True
    assert reply.plan == "MODE LOCK: FORGING\n..."
    assert reply.reply is None
    assert reply.truncated is False

    args, kwargs = fake_agent.run.call_args
    user_input = args[0]
    assert "Name: Ana" in user_input
    assert "- Plan category: YouthSafety" in user_input
    assert "Injury history: knee" in user_input
    assert kwargs["model_settings"] == {"max_tokens": MAX_OUTPUT_TOKENS_PLAN}


@pytest.mark.asyncio
async def test_run_sensei_chat_without_profile(db_session, fake_agent_factory):
    fake_agent = fake_agent_factory(output="  Short answer.\nTYPE: CONTINUE  ")

    with (
        patch("app.sensei.service.get_model", return_value=MagicMock()),
        patch("app.sensei.service.Agent", return_value=fake_agent),
    ):
        reply = await run_sensei(db_session, "user-2", SenseiRequest(mode="chat", message="Help"))

    assert reply.reply == "Short answer.\nTYPE: CONTINUE"
    assert reply.plan is None
    assert reply.truncated is True

    args, kwargs = fake_agent.run.call_args
    assert "ATHLETE CLASSIFICATION" not in args[0]
    assert kwargs["model_settings"] == {"max_tokens": MAX_OUTPUT_TOKENS_CHAT}


@pytest.mark.asyncio
async def test_run_sensei_empty_output(db_session, fake_agent_factory):
    with (
        patch("app.sensei.service.get_model", return_value=MagicMock()),
        patch("app.sensei.service.Agent", return_value=fake_agent_factory(output="   ")),
    ):
        with pytest.raises(EmptyCompletionError):
            await run_sensei(db_session, "user-1", SenseiRequest(mode="chat", message="Help"))


@pytest.mark.asyncio
async def test_run_sensei_wraps_completion_failure(db_session, fake_agent_factory):
    failing = fake_agent_factory(side_effect=RuntimeError("rate limited"))

    with (
        patch("app.sensei.service.get_model", return_value=MagicMock()),
        patch("app.sensei.service.Agent", return_value=failing),
    ):
        with pytest.raises(CompletionError) as exc:
            await run_sensei(db_session, "user-1", SenseiRequest(mode="chat", message="Help"))

    assert exc.value.message == "rate limited"


@pytest.mark.asyncio
async def test_generate_session_plan(fake_agent_factory):
    plan = _sample_plan()
    fake_agent = fake_agent_factory(output=plan)
    request = SenseiPlanRequest(
        profile={"age": "40", "yearsTraining": "12", "baseArt": "Muay Thai"},
        context=SenseiContext(goal="recovery"),
    )

    with (
        patch("app.sensei.session_plan.get_model", return_value=MagicMock()),
        patch("app.sensei.session_plan.Agent", return_value=fake_agent),
    ):
        result = await generate_session_plan(request)

    assert result == plan
    args, kwargs = fake_agent.run.call_args
    assert "- Age band: Mature" in args[0]
    assert "- Plan category: HighPerformanceCamp" in args[0]
    assert '"goal": "recovery"' in args[0]
    assert kwargs["model_settings"] == {"temperature": 0.6}


@pytest.mark.asyncio
async def test_generate_session_plan_failure(fake_agent_factory):
    request = SenseiPlanRequest(profile={}, context=SenseiContext(goal="mixed"))

    with (
        patch("app.sensei.session_plan.get_model", return_value=MagicMock()),
        patch("app.sensei.session_plan.Agent", return_value=fake_agent_factory(side_effect=ValueError("bad json"))),
    ):
        with pytest.raises(CompletionError):
            await generate_session_plan(request)


def _exchange(finish_reason):
    return [
        ModelRequest(parts=[UserPromptPart(content="plan please")]),
        ModelResponse(parts=[TextPart(content="Week 1 ...")], finish_reason=finish_reason),
    ]


def test_hit_token_limit():
    assert hit_token_limit(_exchange("length")) is True
    assert hit_token_limit(_exchange("stop")) is False
    assert hit_token_limit(_exchange(None)) is False
    assert hit_token_limit([]) is False


@pytest.mark.asyncio
async def test_run_sensei_plan_cut_at_token_limit_is_truncated(db_session, fake_agent_factory):
    fake_agent = fake_agent_factory(output="Week 1: pad work, 6 rounds", messages=_exchange("length"))

    with (
        patch("app.sensei.service.get_model", return_value=MagicMock()),
        patch("app.sensei.service.Agent", return_value=fake_agent),
    ):
        reply = await run_sensei(
            db_session,
            "user-1",
            SenseiRequest(mode="new", style="Pressure fighter", camp_stage="10 weeks"),
        )

    assert reply.plan == "Week 1: pad work, 6 rounds"
    assert reply.truncated is True


@pytest.mark.asyncio
async def test_run_sensei_complete_reply_is_not_truncated(db_session, fake_agent_factory):
    fake_agent = fake_agent_factory(output="All good.", messages=_exchange("stop"))

    with (
        patch("app.sensei.service.get_model", return_value=MagicMock()),
        patch("app.sensei.service.Agent", return_value=fake_agent),
    ):
        reply = await run_sensei(db_session, "user-1", SenseiRequest(mode="chat", message="Ready?"))

    assert reply.truncated is False
