"""Fighter profile and classification models.

The profile is the loosely-typed JSON record the frontend stores for each user.
Every field is optional and free text; the classifier derives coarse bands from
it and never mutates it.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ============================================================================
# Enums
# ============================================================================


class AgeBand(StrEnum):
    """Coarse life-stage bucket used to gate training intensity."""

    YOUTH = "Youth"
    PRIME = "Prime"
    MATURE = "Mature"
    MASTERS = "Masters"
    SENIOR = "Senior"


class LevelBand(StrEnum):
    """Experience tier derived from years training and competition level."""

    BEGINNER = "Beginner"
    HOBBYIST = "Hobbyist"
    AMATEUR = "Amateur"
    ADVANCED_AMATEUR = "AdvancedAmateur"
    PROFESSIONAL = "Professional"


class PlanType(StrEnum):
    """Safety-bounded training-program archetype."""

    LONGEVITY_TECHNIQUE = "LongevityTechnique"
    BALANCED_AMATEUR_CAMP = "BalancedAmateurCamp"
    HIGH_PERFORMANCE_CAMP = "HighPerformanceCamp"
    EMERGENCY_CAMP = "EmergencyCamp"
    HYBRID_LEARNING = "HybridLearning"
    INJURY_RETURN = "InjuryReturn"
    YOUTH_SAFETY = "YouthSafety"


class Discipline(StrEnum):
    """Primary martial-arts discipline."""

    MMA = "MMA"
    BOXING = "Boxing"
    WRESTLING = "Wrestling"
    BJJ = "BJJ"
    SAMBO = "Sambo"
    MUAY_THAI = "MuayThai"
    KICKBOXING = "Kickboxing"
    STRENGTH = "Strength"
    OTHER = "Other"


# ============================================================================
# Profile
# ============================================================================


class FighterProfile(BaseModel):
    """Fighter profile as stored in the ``profiles.data`` JSON column.

    Field names are snake_case in Python and camelCase on the wire. Scalars of
    any type are coerced to strings so that building a profile from arbitrary
    user JSON never fails.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    name: str | None = None
    age: str | None = None
    height: str | None = None
    walk_around_weight: str | None = None

    base_art: str | None = None
    secondary_arts: list[str] = Field(default_factory=list)
    stance: str | None = None

    overall_level: str | None = None
    years_training: str | None = None
    competition_level: str | None = None
    current_gym: str | None = None
    recent_camp: str | None = None
    camp_goal: str | None = None

    body_type: str | None = None
    pace_style: str | None = None
    pressure_preference: str | None = None
    strengths: str | None = None
    weaknesses: str | None = None

    availability: str | None = None
    injury_history: str | None = None
    hard_boundaries: str | None = None
    life_load: str | None = None

    schedule_notes: str | None = None
    boundaries_notes: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_scalar(cls, value: Any, info) -> Any:
        """Coerce non-string inputs so free-form JSON always validates."""
        if info.field_name == "secondary_arts":
            if value is None:
                return []
            if isinstance(value, str):
                return [value] if value.strip() else []
            if isinstance(value, list | tuple):
                return [str(v) for v in value if v is not None]
            return []
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_raw(cls, raw: "FighterProfile | Mapping[str, Any] | None") -> "FighterProfile":
        """Build a profile from a model, a JSON mapping, or nothing."""
        if isinstance(raw, FighterProfile):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        data = {str(k): v for k, v in raw.items()}
        return cls.model_validate(data)

    def to_json(self) -> dict[str, Any]:
        """Serialize back to the camelCase JSON shape the frontend stores."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# Classification
# ============================================================================


class AthleteClassification(BaseModel):
    """Classifier output consumed by the prompt assemblers.

    A derived snapshot, valid only for the profile that produced it.
    """

    model_config = ConfigDict(frozen=True)

    age_band: AgeBand
    level_band: LevelBand
    plan: PlanType
    primary_discipline: Discipline
    notes: str = Field(description="Labelled free-text notes, newline-joined, used verbatim in prompts")
