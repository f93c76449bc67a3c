"""Sensei Vision endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.dependencies.auth import get_current_user_id
from app.db.session import get_db
from app.services.llm.errors import CompletionError
from app.vision.errors import InvalidImageError, MissingVisionInputError
from app.vision.schemas import VisionReply, VisionRequest
from app.vision.service import run_vision

router = APIRouter(prefix="/sensei-vision", tags=["vision"])


@router.post("", response_model=VisionReply)
async def sensei_vision(
    req: VisionRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> VisionReply:
    """Analyze a technique frame, or continue coaching on a prior analysis."""
    try:
        return await run_vision(db, user_id, req)
    except (MissingVisionInputError, InvalidImageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e
