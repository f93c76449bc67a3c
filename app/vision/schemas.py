"""Schemas for Sensei Vision technique coaching."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

VisionMode = Literal["analyze", "chat"]
Grade = Literal["green", "yellow", "red"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VisionRequest(_CamelModel):
    mode: VisionMode = "analyze"
    user_text: str | None = None
    image_base64: str | None = Field(default=None, description="Raw base64 JPEG or a data URL")
    prior: str | None = None
    message: str | None = None
    locale_hint: str | None = Field(default=None, description='e.g. "en-US", "ru-RU"')


class VisionOutput(_CamelModel):
    """Structured breakdown of a single frame.

    green = technically correct / safe habit, yellow = mostly good, needs
    corrections, red = habit that must change (inefficient or risky).
    """

    reply: str = Field(description="Main breakdown, short and structured")
    grade: Grade
    key_fix: str = Field(description="One cue")
    drills: list[str] = Field(description="2-5 drills")
    questions: list[str] = Field(description="1-3 clarifying questions")


class VisionReply(VisionOutput):
    ok: bool = True
