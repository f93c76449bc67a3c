"""Repository for Fuel report persistence."""

from __future__ import annotations

import math

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import FuelReport
from app.fuel.schemas import FuelHistoryPoint, FuelMode, FuelOutput


def rounded_score(score: float) -> int:
    """Round a score half up (72.5 -> 73)."""
    return math.floor(score + 0.5)


class FuelReportRepository:
    """Repository for fuel_reports rows."""

    @staticmethod
    def add(session: Session, user_id: str, mode: FuelMode, output: FuelOutput) -> FuelReport:
        """Persist a Fuel result.

        The score is rounded half up to an integer before it is stored.
        """
        row = FuelReport(
            user_id=user_id,
            mode=mode,
            followups_id=output.followups_id,
            rating=output.rating,
            score=rounded_score(output.score),
            score_reason=output.score_reason,
            calories_kcal_range=list(output.macros.calories_kcal_range),
            protein_g_range=list(output.macros.protein_g_range),
            carbs_g_range=list(output.macros.carbs_g_range),
            fat_g_range=list(output.macros.fat_g_range),
            macro_confidence=output.macro_confidence.model_dump(),
            confidence=output.confidence,
            report=output.report,
            questions=list(output.questions),
            source="fuel",
        )
        session.add(row)
        session.commit()
        return row

    @staticmethod
    def latest_for_followup(session: Session, user_id: str, followups_id: str) -> FuelReport | None:
        """Most recent report for a follow-up thread, or None."""
        stmt = (
            select(FuelReport)
            .where(FuelReport.user_id == user_id, FuelReport.followups_id == followups_id)
            .order_by(FuelReport.created_at.desc(), FuelReport.id.desc())
            .limit(1)
        )
        return session.execute(stmt).scalars().first()

    @staticmethod
    def history(session: Session, user_id: str, limit: int) -> list[FuelHistoryPoint]:
        """Latest scores for a user, newest first, one point per report."""
        stmt = (
            select(FuelReport.created_at, FuelReport.score)
            .where(FuelReport.user_id == user_id)
            .order_by(FuelReport.created_at.desc(), FuelReport.id.desc())
            .limit(limit)
        )
        return [
            FuelHistoryPoint(day=created_at.strftime("%Y-%m-%d"), fuel_score=score)
            for created_at, score in session.execute(stmt).all()
        ]
