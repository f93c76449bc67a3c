"""Request and response schemas for Sensei coaching."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SenseiMode = Literal["new", "refine", "chat", "continue"]
SenseiGoal = Literal["pressure", "speed", "power", "recovery", "mixed"]
RoundIntensity = Literal["easy", "moderate", "hard", "war"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Camp plan / chat
# ============================================================================


class SenseiRequest(_CamelModel):
    """Camp-plan or chat request from the Sensei screen."""

    mode: SenseiMode = "chat"

    style: str | None = None
    favourites: str | None = None
    camp_stage: str | None = None
    weight_goal: str | None = None
    scenario: str | None = None

    previous_plan: str | None = None

    message: str | None = None
    video_notes: str | None = None

    profile_summary: str | None = Field(default=None, description="Client-built profile summary; built server-side when absent")
    continue_from_last: bool = False


class SenseiReply(_CamelModel):
    ok: bool = True
    mode: SenseiMode
    plan: str | None = None
    reply: str | None = None
    truncated: bool = False


# ============================================================================
# Single session plan
# ============================================================================


class SenseiContext(_CamelModel):
    """Session-specific choices for today's training."""

    goal: SenseiGoal
    days_to_next_fight: int | None = None
    last_session_focus: str | None = None
    last_session_rpe: float | None = Field(default=None, alias="lastSessionRPE")


class SenseiPlanRequest(_CamelModel):
    profile: dict[str, Any] = Field(default_factory=dict)
    context: SenseiContext


class SenseiRound(_CamelModel):
    round: int
    duration_seconds: int = Field(description="60-300 seconds")
    focus: str
    drill: str
    coaching_cues: list[str]
    intensity: RoundIntensity


class SenseiPlan(_CamelModel):
    """One structured training session."""

    warmup: list[str] = Field(description="3-6 fight-related warmup items")
    main_rounds: list[SenseiRound] = Field(description="5-10 rounds")
    finisher: str
    notes: list[str] = Field(description="3-6 lines explaining the session logic")
    safety: list[str] = Field(description="3-6 safety warnings")
