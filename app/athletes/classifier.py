"""Athlete classification rule engine.

Maps a fighter profile onto an age band, a level band, a primary discipline and
a safety-bounded plan category. Every rule is an ordered ``(keyword, result)``
or ``(bound, result)`` table evaluated first-match-wins, so precedence can be
read straight off the tables below.

The classifier is pure: it reads the profile, never mutates it, performs no
I/O and caches nothing. Unparseable or missing input always resolves to a
documented default instead of raising.
"""

import math
import re
import sys
from collections.abc import Mapping
from typing import Any

from loguru import logger

from app.athletes.models import (
    AgeBand,
    AthleteClassification,
    Discipline,
    FighterProfile,
    LevelBand,
    PlanType,
)

# Inclusive upper bounds, evaluated in order. Anything above the last bound is Senior.
AGE_BANDS: tuple[tuple[int, AgeBand], ...] = (
    (17, AgeBand.YOUTH),
    (34, AgeBand.PRIME),
    (44, AgeBand.MATURE),
    (54, AgeBand.MASTERS),
)
DEFAULT_AGE_BAND = AgeBand.PRIME

# Substring -> level. "pro" must stay first: "amateur boxing coach, now fighting pro" is Professional.
COMPETITION_KEYWORDS: tuple[tuple[str, LevelBand], ...] = (
    ("pro", LevelBand.PROFESSIONAL),
    ("advanced", LevelBand.ADVANCED_AMATEUR),
    ("amateur", LevelBand.AMATEUR),
)

# Exclusive upper bounds on years trained. Anything above the last bound is Professional.
YEARS_BANDS: tuple[tuple[float, LevelBand], ...] = (
    (1, LevelBand.BEGINNER),
    (3, LevelBand.HOBBYIST),
    (6, LevelBand.AMATEUR),
    (10, LevelBand.ADVANCED_AMATEUR),
)
UNKNOWN_YEARS_LEVEL = LevelBand.HOBBYIST

DISCIPLINE_KEYWORDS: tuple[tuple[str, Discipline], ...] = (
    ("mma", Discipline.MMA),
    ("boxing", Discipline.BOXING),
    ("wrest", Discipline.WRESTLING),
    ("bjj", Discipline.BJJ),
    ("jiu", Discipline.BJJ),
    ("sambo", Discipline.SAMBO),
    ("muay", Discipline.MUAY_THAI),
    ("kick", Discipline.KICKBOXING),
    ("strength", Discipline.STRENGTH),
    ("gym", Discipline.STRENGTH),
)

INJURY_KEYWORDS: tuple[str, ...] = ("knee", "shoulder", "back")
LIFE_LOAD_KEYWORDS: tuple[str, ...] = ("busy", "school", "work")

LEVEL_PLANS: dict[LevelBand, PlanType] = {
    LevelBand.BEGINNER: PlanType.LONGEVITY_TECHNIQUE,
    LevelBand.HOBBYIST: PlanType.BALANCED_AMATEUR_CAMP,
    LevelBand.AMATEUR: PlanType.BALANCED_AMATEUR_CAMP,
    LevelBand.ADVANCED_AMATEUR: PlanType.HIGH_PERFORMANCE_CAMP,
    LevelBand.PROFESSIONAL: PlanType.HIGH_PERFORMANCE_CAMP,
}
DEFAULT_LEVEL_PLAN = PlanType.HIGH_PERFORMANCE_CAMP

# Label order is part of the prompt contract.
NOTE_FIELDS: tuple[tuple[str, str], ...] = (
    ("schedule_notes", "Schedule notes"),
    ("boundaries_notes", "Boundaries notes"),
    ("hard_boundaries", "Hard boundaries"),
    ("camp_goal", "Camp goal"),
    ("body_type", "Body type"),
    ("injury_history", "Injury history"),
    ("availability", "Availability"),
    ("life_load", "Life load"),
)

_NON_DIGITS = re.compile(r"[^\d]")
_NON_DECIMAL = re.compile(r"[^\d.]")
_LEADING_FLOAT = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_MAX_FINITE_INT = int(sys.float_info.max)
_MAX_FINITE_DIGITS = len(str(_MAX_FINITE_INT))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _to_int(value: Any) -> int | None:
    """Parse the digits of ``value`` as an integer.

    None when there are no digits or the number is too large to be a finite float.
    """
    if value is None:
        return None
    digits = _NON_DIGITS.sub("", _text(value))
    if not digits:
        return None
    significant = digits.lstrip("0") or "0"
    if len(significant) > _MAX_FINITE_DIGITS:
        return None
    number = int(significant)
    return number if number <= _MAX_FINITE_INT else None


def _to_float(value: Any) -> float | None:
    """Parse the longest leading decimal number, ignoring every other character."""
    if value is None:
        return None
    match = _LEADING_FLOAT.match(_NON_DECIMAL.sub("", _text(value)))
    if match is None:
        return None
    number = float(match.group())
    return number if math.isfinite(number) else None


def _contains_any(haystack: str, needles: tuple[str, ...]) -> bool:
    return any(needle in haystack for needle in needles)


def classify_age(age: str | int | None) -> AgeBand:
    """Map a free-text age onto an age band.

    Args:
        age: Age as typed by the user ("27", "27 years", 27). Unknown values
            fall back to Prime.

    Returns:
        AgeBand for the parsed age
    """
    years = _to_int(age)
    if years is None:
        return DEFAULT_AGE_BAND
    for upper, band in AGE_BANDS:
        if years <= upper:
            return band
    return AgeBand.SENIOR


def classify_level(years_training: str | float | None, competition_level: str | None) -> LevelBand:
    """Map years training and self-reported competition level onto a level band.

    A competition keyword always wins over years trained.
    """
    competition = _text(competition_level).lower()
    for keyword, band in COMPETITION_KEYWORDS:
        if keyword in competition:
            return band

    years = _to_float(years_training)
    if years is None:
        return UNKNOWN_YEARS_LEVEL
    for upper, band in YEARS_BANDS:
        if years < upper:
            return band
    return LevelBand.PROFESSIONAL


def normalize_discipline(base_art: str | None) -> Discipline:
    """Map a free-text base art onto a known discipline (first keyword wins)."""
    art = _text(base_art).lower()
    for keyword, discipline in DISCIPLINE_KEYWORDS:
        if keyword in art:
            return discipline
    return Discipline.OTHER


def pick_plan(profile: FighterProfile, age_band: AgeBand, level_band: LevelBand) -> PlanType:
    """Select a plan category with a priority-ordered guard chain.

    Youth, injury and life-load guards are safety overrides and are checked
    before the level-driven default, so they win even for professionals.
    """
    if age_band == AgeBand.YOUTH:
        return PlanType.YOUTH_SAFETY

    if _contains_any(_text(profile.injury_history).lower(), INJURY_KEYWORDS):
        return PlanType.INJURY_RETURN

    if _contains_any(_text(profile.life_load).lower(), LIFE_LOAD_KEYWORDS):
        return PlanType.EMERGENCY_CAMP

    return LEVEL_PLANS.get(level_band, DEFAULT_LEVEL_PLAN)


def build_notes(profile: FighterProfile) -> str:
    """Join the non-empty free-text note fields as ``Label: value`` lines."""
    lines = []
    for field_name, label in NOTE_FIELDS:
        value = _text(getattr(profile, field_name, None)).strip()
        if value:
            lines.append(f"{label}: {value}")
    return "\n".join(lines)


def classify_athlete(profile: FighterProfile | Mapping[str, Any] | None) -> AthleteClassification:
    """Classify a fighter profile.

    Args:
        profile: FighterProfile, raw profile JSON, or None

    Returns:
        AthleteClassification snapshot for this profile
    """
    fighter = FighterProfile.from_raw(profile)

    age_band = classify_age(fighter.age)
    level_band = classify_level(fighter.years_training, fighter.competition_level)
    primary_discipline = normalize_discipline(fighter.base_art)
    notes = build_notes(fighter)
    plan = pick_plan(fighter, age_band, level_band)

    logger.debug(
        "Athlete classified",
        age_band=age_band.value,
        level_band=level_band.value,
        plan=plan.value,
        primary_discipline=primary_discipline.value,
    )

    return AthleteClassification(
        age_band=age_band,
        level_band=level_band,
        plan=plan,
        primary_discipline=primary_discipline,
        notes=notes,
    )
