"""Text blocks that describe a fighter inside coach prompts."""

from collections.abc import Mapping
from typing import Any

from app.athletes.models import AthleteClassification, FighterProfile


def _or(value: str | None, placeholder: str) -> str:
    return value if value else placeholder


def build_fighter_summary(profile: FighterProfile | Mapping[str, Any] | None = None) -> str:
    """Turn a saved fighter profile into the FIGHTER PROFILE prompt block.

    Missing fields print a placeholder rather than being dropped, so the model
    can tell what the athlete has not filled in yet.
    """
    p = FighterProfile.from_raw(profile)
    secondary_arts = ", ".join(p.secondary_arts)

    lines = [
        "FIGHTER PROFILE",
        "---------------",
        f"Name: {_or(p.name, 'Not set')}",
        f"Age: {_or(p.age, 'Not set')}",
        f"Height: {_or(p.height, 'Not set')}",
        f"Walk-around weight: {_or(p.walk_around_weight, 'Not set')}",
        "",
        f"Base art: {_or(p.base_art, 'Not set')}",
        f"Secondary arts: {_or(secondary_arts, 'None')}",
        f"Stance: {_or(p.stance, 'Not set')}",
        "",
        f"Overall skill: {_or(p.overall_level, 'Not rated')}",
        f"Years training: {_or(p.years_training, 'Not set')}",
        f"Competition level: {_or(p.competition_level, 'Not set')}",
        f"Current gym: {_or(p.current_gym, 'None')}",
        "",
        f"Body type: {_or(p.body_type, 'Not set')}",
        f"Pace style: {_or(p.pace_style, 'Not set')}",
        f"Pressure preference: {_or(p.pressure_preference, 'Not set')}",
        "",
        f"Camp goal: {_or(p.camp_goal, 'Not set')}",
        f"Boundaries: {_or(p.boundaries_notes, 'None')}",
        f"Schedule load: {_or(p.schedule_notes, 'Not set')}",
    ]
    return "\n".join(lines)


def format_classification(result: AthleteClassification) -> str:
    """Render a classification as the ATHLETE CLASSIFICATION prompt block."""
    lines = [
        "ATHLETE CLASSIFICATION",
        f"- Age band: {result.age_band.value}",
        f"- Level band: {result.level_band.value}",
        f"- Plan category: {result.plan.value}",
        f"- Primary discipline: {result.primary_discipline.value}",
    ]
    if result.notes:
        lines.append("")
        lines.append("Athlete notes:")
        lines.append(result.notes)
    return "\n".join(lines)
