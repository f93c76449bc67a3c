"""FastAPI dependency that resolves the requesting user.

Sign-in happens in the web app; this service trusts the user ID forwarded
in the X-User-Id header. DEV_USER_ID stands in for it during local development.
"""

from __future__ import annotations

from fastapi import Header, HTTPException, status
from loguru import logger

from app.config.settings import settings


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the current user ID.

    Raises:
        HTTPException: 401 if no user can be resolved
    """
    user_id = (x_user_id or "").strip()
    if user_id:
        return user_id

    if settings.dev_user_id:
        logger.debug("No X-User-Id header, using DEV_USER_ID")
        return settings.dev_user_id

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated.",
    )
