"""Repository for fighter profile data access."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.athletes.models import FighterProfile
from app.db.models import Profile


class ProfileRepository:
    """Repository for the per-user fighter profile document."""

    @staticmethod
    def get(session: Session, user_id: str) -> FighterProfile | None:
        """Load the stored profile for a user.

        Args:
            session: Database session
            user_id: User ID

        Returns:
            FighterProfile, or None when the user has not saved one yet
        """
        row = session.get(Profile, user_id)
        if row is None:
            return None
        return FighterProfile.from_raw(row.data or {})

    @staticmethod
    def save(session: Session, user_id: str, data: dict[str, Any]) -> FighterProfile:
        """Create or replace the stored profile for a user.

        The document is normalised through FighterProfile before it is written,
        so scalar values are stored as strings.
        """
        profile = FighterProfile.from_raw(data)
        row = session.get(Profile, user_id)
        if row is None:
            row = Profile(user_id=user_id, data=profile.to_json())
            session.add(row)
        else:
            row.data = profile.to_json()
        session.commit()
        return profile
