"""Prompt assembly for Fuel nutrition analysis."""

import json
from typing import Any

from app.fuel.schemas import FighterInput, FuelOutput, TrainingInput

SYSTEM_RULES = """You are Fuel AI for fighters.
Output JSON ONLY matching the provided schema.

Non-negotiables:
- Be strict and useful, not short.
- Always provide: score (0-100), rating (CLEAN/MID/TRASH), macros as RANGES, and macro_confidence per macro.
- Ask 1-3 follow-up questions when portions/ingredients/timing are unclear. Otherwise 0 questions.

Fight week logic:
- If fightWeek=true, prioritize: low fiber near weigh-in, sodium/water manipulation caution, predictable foods, no GI surprises, carb timing, and avoid risky new foods.
- Mention weigh-in vs fight-day fueling differences.

Report structure (in report string):
1) Summary (1-2 lines) + rating/score meaning
2) Macro estimate ranges + why (include uncertainty drivers)
3) Performance impact (training goal + session/intensity)
4) Fixes (2-5 concrete upgrades) with exact swaps/amounts/timing
5) Fight week notes (only if fightWeek=true)
6) If questions exist: list them clearly at the end"""

PHOTO_RULES = """You are Fuel AI (photo mode) for fighters.
Return JSON ONLY that matches the provided schema.

Use BOTH the image and the meal text.
Macros MUST be ranges (min,max).
Always include: score, rating, score_reason, macros, macro_confidence, confidence, report, questions, followups_id.
If portions/ingredients are unclear, ask 1-3 questions instead of pretending confidence.

Fight week logic:
- If fightWeek=true: mention weigh-in vs fight-day fueling, avoid GI risk, predictable foods, sodium/fiber timing cautions.

Report structure:
1) Summary (1-2 lines)
2) What the image likely shows (brief + grounded)
3) Macro ranges + why (uncertainty drivers)
4) Performance impact (based on training goal/intensity)
5) Fixes (2-5 upgrades with exact swaps/amounts/timing)
6) Fight-week notes if relevant
7) Questions (if any)"""


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _context_blocks(fighter: FighterInput, training: TrainingInput, classification_block: str | None) -> list[str]:
    blocks = [
        "FIGHTER (may be empty):",
        _dump(fighter.model_dump(by_alias=True, exclude_none=True)),
        "",
        "TRAINING (may be empty):",
        _dump(training.model_dump(by_alias=True, exclude_none=True)),
    ]
    if classification_block:
        blocks += ["", classification_block]
    return blocks


def build_analyze_prompt(
    meals: str,
    fighter: FighterInput,
    training: TrainingInput,
    followups_id: str,
    classification_block: str | None = None,
) -> str:
    """Prompt for a text-only meal analysis."""
    return "\n".join(
        [
            f"FOLLOWUPS_ID: {followups_id}",
            "",
            *_context_blocks(fighter, training, classification_block),
            "",
            "MEALS TEXT:",
            meals.strip(),
            "",
            "TASK:",
            "- Infer likely ingredients + portions from text (no hallucinated brands).",
            "- Output full JSON.",
        ]
    )


def build_photo_prompt(
    ingredients: str,
    fighter: FighterInput,
    training: TrainingInput,
    followups_id: str,
    classification_block: str | None = None,
) -> str:
    """Prompt sent alongside a meal photo."""
    return "\n".join(
        [
            f"FOLLOWUPS_ID: {followups_id}",
            "",
            *_context_blocks(fighter, training, classification_block),
            "",
            "MEAL TEXT:",
            ingredients.strip(),
            "",
            "TASK:",
            "- Ground what you infer from the image: ingredients + rough portions.",
            "- Output the FULL JSON object.",
        ]
    )


def build_refine_prompt(prior: FuelOutput, answers: dict[str, str]) -> str:
    """Prompt that updates a prior result with the user's answers."""
    return "\n".join(
        [
            "You previously generated this Fuel result (JSON):",
            _dump(prior.model_dump()),
            "",
            "The user answered your questions (question -> answer):",
            _dump(answers),
            "",
            "TASK:",
            "- Update macros ranges, confidence, score, and report using these answers.",
            "- Keep the SAME followups_id.",
            "- If still unclear, you may ask up to 2 new questions max (only if truly necessary).",
        ]
    )
