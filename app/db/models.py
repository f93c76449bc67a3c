"""Database models for Disciplin OS.

Profiles are stored as a single JSON document per user, mirroring the
``profiles(user_id, data)`` table the web app reads and writes. Fuel reports
keep one row per analysis so refinements and score history can be replayed.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all database models."""


class Profile(Base):
    """Fighter profile JSON for a user."""

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String, primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class FuelReport(Base):
    """One Fuel analysis result.

    mode is "text", "photo" or "refine". Refinements keep the followups_id of
    the report they refine.
    """

    __tablename__ = "fuel_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    mode: Mapped[str] = mapped_column(String, nullable=False)
    followups_id: Mapped[str] = mapped_column(String, nullable=False, index=True)

    rating: Mapped[str] = mapped_column(String, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    score_reason: Mapped[str] = mapped_column(Text, nullable=False)

    calories_kcal_range: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    protein_g_range: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    carbs_g_range: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    fat_g_range: Mapped[list[float]] = mapped_column(JSON, nullable=False)

    macro_confidence: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    confidence: Mapped[str] = mapped_column(String, nullable=False)
    report: Mapped[str] = mapped_column(Text, nullable=False)
    questions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    source: Mapped[str] = mapped_column(String, nullable=False, default="fuel")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
