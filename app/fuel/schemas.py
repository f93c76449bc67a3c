"""Schemas for Fuel nutrition analysis.

FuelOutput doubles as the structured-output contract sent to the completion
service and as the API response body.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Confidence = Literal["low", "med", "high"]
FuelRating = Literal["CLEAN", "MID", "TRASH"]
FuelMode = Literal["text", "photo", "refine"]

MacroRange = list[float]


class FuelMacros(BaseModel):
    """Macro estimates as [min, max] ranges."""

    calories_kcal_range: MacroRange = Field(min_length=2, max_length=2)
    protein_g_range: MacroRange = Field(min_length=2, max_length=2)
    carbs_g_range: MacroRange = Field(min_length=2, max_length=2)
    fat_g_range: MacroRange = Field(min_length=2, max_length=2)


class FuelMacroConfidence(BaseModel):
    calories: Confidence
    protein: Confidence
    carbs: Confidence
    fat: Confidence


class FuelOutput(BaseModel):
    """Structured Fuel result."""

    rating: FuelRating
    score: float = Field(description="Meal quality score, 0-100")
    score_reason: str
    macros: FuelMacros
    macro_confidence: FuelMacroConfidence
    confidence: Confidence
    report: str
    questions: list[str] = Field(default_factory=list, max_length=3)
    followups_id: str


class FighterInput(BaseModel):
    """Optional fighter context for a meal analysis."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    age: str | None = None
    current_weight: str | None = None
    target_weight: str | None = None
    body_type: str | None = None
    pace_style: str | None = None


class TrainingInput(BaseModel):
    """Optional training context for a meal analysis."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    session: str | None = None
    intensity: str | None = None
    goal: str | None = None
    fight_week: bool | None = None
    time_of_training: str | None = None


class FuelAnalyzeRequest(BaseModel):
    meals: str = Field(min_length=1, description="Free-text description of what was eaten")
    fighter: FighterInput = Field(default_factory=FighterInput)
    training: TrainingInput = Field(default_factory=TrainingInput)


class FuelRefineRequest(BaseModel):
    followups_id: str = Field(min_length=1)
    answers: dict[str, str] = Field(default_factory=dict, description="question -> answer")


class FuelAnalyzeResponse(FuelOutput):
    ok: bool = True


class FuelHistoryPoint(BaseModel):
    day: str
    fuel_score: int | None


class FuelHistoryResponse(BaseModel):
    ok: bool = True
    points: list[FuelHistoryPoint]
