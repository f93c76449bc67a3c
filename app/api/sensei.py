"""Sensei coach endpoints: camp plans, coach chat and single sessions."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.dependencies.auth import get_current_user_id
from app.db.session import get_db
from app.sensei.errors import MissingSenseiInputError
from app.sensei.schemas import SenseiPlan, SenseiPlanRequest, SenseiReply, SenseiRequest
from app.sensei.service import run_sensei
from app.sensei.session_plan import generate_session_plan
from app.services.llm.errors import CompletionError

router = APIRouter(prefix="/sensei", tags=["sensei"])


@router.post("", response_model=SenseiReply)
async def sensei(
    req: SenseiRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> SenseiReply:
    """Generate a camp plan (new/refine/continue) or answer a chat message."""
    try:
        return await run_sensei(db, user_id, req)
    except MissingSenseiInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e


@router.post("/plan", response_model=SenseiPlan)
async def sensei_plan(
    req: SenseiPlanRequest,
    _user_id: str = Depends(get_current_user_id),
) -> SenseiPlan:
    """Generate one structured training session for today."""
    try:
        return await generate_session_plan(req)
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e
