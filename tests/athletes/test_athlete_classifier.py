"""Tests for the athlete classification rule engine.

Tests enforce that:
- Classification is total (never raises) and defaults are stable
- Age and level banding boundaries hold
- Safety overrides (youth, injury, life load) always beat level-based plans
- Keyword precedence is first-match-wins
"""

import pytest

from app.athletes.classifier import (
    build_notes,
    classify_age,
    classify_athlete,
    classify_level,
    normalize_discipline,
    pick_plan,
)
from app.athletes.models import (
    AgeBand,
    AthleteClassification,
    Discipline,
    FighterProfile,
    LevelBand,
    PlanType,
)


def test_empty_profile_defaults():
    """An empty profile classifies to the documented defaults."""
    result = classify_athlete({})

    assert result.age_band == AgeBand.PRIME
    assert result.level_band == LevelBand.HOBBYIST
    assert result.plan == PlanType.BALANCED_AMATEUR_CAMP
    assert result.primary_discipline == Discipline.OTHER
    assert result.notes == ""


@pytest.mark.parametrize(
    "profile",
    [
        None,
        {},
        FighterProfile(),
        {"age": "not a number", "yearsTraining": "lots"},
        {"age": "-12", "yearsTraining": "-3"},
        {"age": "9" * 500, "yearsTraining": "9" * 500},
        {"age": "9" * 5000},
        {"age": 31, "yearsTraining": 4.5, "competitionLevel": None},
        {"age": ["weird"], "baseArt": {"nested": True}, "secondaryArts": "Judo"},
        {"injuryHistory": 12, "lifeLoad": False},
        "not a mapping",
    ],
)
def test_classification_is_total(profile):
    """Any input yields a well-formed result and never raises."""
    result = classify_athlete(profile)

    assert isinstance(result, AthleteClassification)
    assert result.age_band in AgeBand
    assert result.level_band in LevelBand
    assert result.plan in PlanType
    assert result.primary_discipline in Discipline
    assert isinstance(result.notes, str)


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        ("17", AgeBand.YOUTH),
        ("18", AgeBand.PRIME),
        ("34", AgeBand.PRIME),
        ("35", AgeBand.MATURE),
        ("44", AgeBand.MATURE),
        ("45", AgeBand.MASTERS),
        ("54", AgeBand.MASTERS),
        ("55", AgeBand.SENIOR),
        ("0", AgeBand.YOUTH),
        (0, AgeBand.YOUTH),
        ("27 years old", AgeBand.PRIME),
        (60, AgeBand.SENIOR),
        (None, AgeBand.PRIME),
        ("", AgeBand.PRIME),
        ("unknown", AgeBand.PRIME),
    ],
)
def test_classify_age_boundaries(age, expected):
    assert classify_age(age) == expected


def test_classify_age_strips_non_digits():
    """A minus sign is just another non-digit character."""
    assert classify_age("-16") == AgeBand.YOUTH
    assert classify_age("4-0") == AgeBand.MATURE


def test_classify_age_huge_number_is_unknown():
    """Numbers too large to represent fall back to the default band."""
    assert classify_age("9" * 400) == AgeBand.PRIME
    assert classify_age("9" * 100) == AgeBand.SENIOR
    assert classify_age("9" * 309) == AgeBand.PRIME
    assert classify_age("1" + "0" * 308) == AgeBand.SENIOR


def test_classify_age_ignores_leading_zeros():
    assert classify_age("0" * 5000 + "16") == AgeBand.YOUTH
    assert classify_age("000") == AgeBand.YOUTH


def test_numeric_zero_agrees_with_profile_classification():
    result = classify_athlete({"age": 0, "yearsTraining": 0})

    assert classify_age(0) == result.age_band == AgeBand.YOUTH
    assert classify_level(0, None) == result.level_band == LevelBand.BEGINNER


@pytest.mark.parametrize(
    ("years", "competition", "expected"),
    [
        (None, None, LevelBand.HOBBYIST),
        ("", "", LevelBand.HOBBYIST),
        (0, None, LevelBand.BEGINNER),
        ("0.5", None, LevelBand.BEGINNER),
        ("1", None, LevelBand.HOBBYIST),
        ("2.9", None, LevelBand.HOBBYIST),
        ("3", None, LevelBand.AMATEUR),
        ("5 years", None, LevelBand.AMATEUR),
        ("6", None, LevelBand.ADVANCED_AMATEUR),
        ("9.99", None, LevelBand.ADVANCED_AMATEUR),
        ("10", None, LevelBand.PROFESSIONAL),
        ("about 1.5.2 years", None, LevelBand.HOBBYIST),
        (".", None, LevelBand.HOBBYIST),
        ("0", "Professional", LevelBand.PROFESSIONAL),
        ("12", "Advanced amateur", LevelBand.ADVANCED_AMATEUR),
        ("12", "AMATEUR", LevelBand.AMATEUR),
        ("0.2", "recreational", LevelBand.BEGINNER),
    ],
)
def test_classify_level(years, competition, expected):
    assert classify_level(years, competition) == expected


def test_classify_level_pro_keyword_wins_over_amateur():
    """'pro' is checked first, even when 'amateur' also appears."""
    assert classify_level(None, "amateur boxing coach, now fighting pro") == LevelBand.PROFESSIONAL


@pytest.mark.parametrize(
    ("base_art", "expected"),
    [
        ("MMA", Discipline.MMA),
        ("Boxing", Discipline.BOXING),
        ("Freestyle wrestling", Discipline.WRESTLING),
        ("BJJ", Discipline.BJJ),
        ("Brazilian Jiu Jitsu", Discipline.BJJ),
        ("Combat Sambo", Discipline.SAMBO),
        ("Muay Thai", Discipline.MUAY_THAI),
        ("Dutch kick style", Discipline.KICKBOXING),
        ("Strength & conditioning", Discipline.STRENGTH),
        ("Gym rat", Discipline.STRENGTH),
        ("Karate", Discipline.OTHER),
        ("", Discipline.OTHER),
        (None, Discipline.OTHER),
    ],
)
def test_normalize_discipline(base_art, expected):
    assert normalize_discipline(base_art) == expected


def test_discipline_first_match_wins():
    """'mma' is checked before 'jiu'."""
    assert normalize_discipline("Brazilian Jiu Jitsu practitioner who also does MMA") == Discipline.MMA
    # "kickboxing" contains "boxing", which is checked before "kick"
    assert normalize_discipline("kickboxing") == Discipline.BOXING


def test_youth_overrides_injury_and_professional_level():
    result = classify_athlete(
        {
            "age": "16",
            "competitionLevel": "Professional",
            "injuryHistory": "knee surgery",
        }
    )

    assert result.age_band == AgeBand.YOUTH
    assert result.level_band == LevelBand.PROFESSIONAL
    assert result.plan == PlanType.YOUTH_SAFETY


def test_injury_override_beats_level():
    result = classify_athlete(
        {
            "age": "25",
            "competitionLevel": "Professional",
            "injuryHistory": "torn shoulder",
        }
    )

    assert result.plan == PlanType.INJURY_RETURN


def test_schedule_override_beats_level():
    result = classify_athlete(
        {
            "age": "25",
            "competitionLevel": "Amateur",
            "lifeLoad": "very busy with work",
        }
    )

    assert result.plan == PlanType.EMERGENCY_CAMP


def test_injury_override_beats_schedule_override():
    result = classify_athlete(
        {
            "age": "30",
            "injuryHistory": "Lower BACK pain",
            "lifeLoad": "school full time",
        }
    )

    assert result.plan == PlanType.INJURY_RETURN


def test_injury_without_keywords_does_not_override():
    result = classify_athlete({"age": "30", "yearsTraining": "12", "injuryHistory": "broken finger"})

    assert result.plan == PlanType.HIGH_PERFORMANCE_CAMP


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (LevelBand.BEGINNER, PlanType.LONGEVITY_TECHNIQUE),
        (LevelBand.HOBBYIST, PlanType.BALANCED_AMATEUR_CAMP),
        (LevelBand.AMATEUR, PlanType.BALANCED_AMATEUR_CAMP),
        (LevelBand.ADVANCED_AMATEUR, PlanType.HIGH_PERFORMANCE_CAMP),
        (LevelBand.PROFESSIONAL, PlanType.HIGH_PERFORMANCE_CAMP),
    ],
)
def test_level_driven_plans(level, expected):
    assert pick_plan(FighterProfile(), AgeBand.PRIME, level) == expected


def test_senior_without_overrides_follows_level():
    """Age alone only overrides for youth."""
    result = classify_athlete({"age": "62", "yearsTraining": "0.5"})

    assert result.age_band == AgeBand.SENIOR
    assert result.plan == PlanType.LONGEVITY_TECHNIQUE


def test_notes_only_camp_goal():
    result = classify_athlete({"campGoal": "win state title", "bodyType": "   ", "availability": ""})

    assert result.notes == "Camp goal: win state title"


def test_notes_label_order_and_trimming():
    profile = FighterProfile(
        life_load="busy",
        availability=" 4 days ",
        injury_history="knee",
        body_type="lanky",
        camp_goal="title",
        hard_boundaries="no sparring on Sundays",
        boundaries_notes="no cuts",
        schedule_notes="mornings only",
    )

    assert build_notes(profile).split("\n") == [
        "Schedule notes: mornings only",
        "Boundaries notes: no cuts",
        "Hard boundaries: no sparring on Sundays",
        "Camp goal: title",
        "Body type: lanky",
        "Injury history: knee",
        "Availability: 4 days",
        "Life load: busy",
    ]


def test_classification_is_idempotent_and_does_not_mutate():
    raw = {"age": "29", "baseArt": "Muay Thai", "yearsTraining": "4", "campGoal": "first fight"}
    snapshot = dict(raw)

    first = classify_athlete(raw)
    second = classify_athlete(raw)

    assert first == second
    assert first.model_dump() == second.model_dump()
    assert raw == snapshot


def test_classification_is_immutable():
    result = classify_athlete({})

    with pytest.raises(Exception):
        result.plan = PlanType.YOUTH_SAFETY  # type: ignore[misc]


def test_snake_case_keys_are_accepted():
    result = classify_athlete({"age": "40", "years_training": "7", "base_art": "sambo"})

    assert result.age_band == AgeBand.MATURE
    assert result.level_band == LevelBand.ADVANCED_AMATEUR
    assert result.primary_discipline == Discipline.SAMBO
