from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.db.dependencies import get_db
from models.user import User
from api.v1.auth.utils import get_current_user

from .schemas import AnonymousFeedback, FeedbackCreate, FeedbackSummary
from .services import feedback_summary, list_feedback, submit_feedback

feedback_router = APIRouter(prefix="/workspaces/{workspace_id}/feedback", tags=["Feedback"])


@feedback_router.post("", response_model=AnonymousFeedback, status_code=status.HTTP_201_CREATED)
def submit_feedback_route(
    workspace_id: int,
    data: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return submit_feedback(db, workspace_id, data, current_user)


@feedback_router.get("", response_model=List[AnonymousFeedback])
def list_feedback_route(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_feedback(db, workspace_id, current_user)


@feedback_router.get("/summary", response_model=List[FeedbackSummary])
def feedback_summary_route(
    workspace_id: int,
    target_user_id: Optional[int] = Query(None, description="Limit the summary to one member"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return feedback_summary(db, workspace_id, current_user, target_user_id)
