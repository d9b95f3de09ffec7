import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from core.access import membership
from core.access.policy import can_submit_feedback, can_view_feedback, enforce
from core.activity import ActivityType, record_activity
from core.anonymizer import AnonymousFeedback, FeedbackSummary, anonymize, anonymize_one, summarize
from models.feedback import Feedback
from models.user import User
from models.workspace_member import WorkspaceMember
from api.v1.auth.services import get_user
from api.v1.workspaces.services import load_workspace_context

from .schemas import MAX_SCORE, MIN_SCORE, FeedbackCreate

logger = logging.getLogger(__name__)

TARGET_NOT_IN_WORKSPACE = "Feedback target must be a member of the workspace"


def validate_scores(**scores: int) -> None:
    """Re-check score ranges; request schemas already enforce them at the boundary."""
    for name, value in scores.items():
        if not isinstance(value, int) or isinstance(value, bool) or not MIN_SCORE <= value <= MAX_SCORE:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{name} must be an integer between {MIN_SCORE} and {MAX_SCORE}"
            )


def _ensure_feedback_target(db: Session, workspace_id: int, user_id: int) -> User:
    target = get_user(db, user_id)
    if not membership.is_workspace_member(db, workspace_id, target.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=TARGET_NOT_IN_WORKSPACE
        )
    return target


### FEEDBACK SERVICES ###

def submit_feedback(
    db: Session,
    workspace_id: int,
    data: FeedbackCreate,
    user: User
) -> AnonymousFeedback:
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_submit_feedback(member), "submit feedback")

    validate_scores(
        effort_score=data.effort_score,
        communication_score=data.communication_score,
        reliability_score=data.reliability_score,
    )

    target = _ensure_feedback_target(db, workspace_id, data.target_user_id)

    feedback = Feedback(
        workspace_id=workspace_id,
        target_user_id=target.id,
        effort_score=data.effort_score,
        communication_score=data.communication_score,
        reliability_score=data.reliability_score,
        comments=data.comments,
        submitted_by_id=user.id,
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)

    logger.info("Feedback %s submitted in workspace %s", feedback.id, workspace_id)
    record_activity(
        db,
        user_id=user.id,
        workspace_id=workspace_id,
        type=ActivityType.feedback_submitted,
        content="Anonymous feedback was submitted",
        entity_id=feedback.id,
        entity_type="feedback",
    )
    return anonymize_one(feedback)


def list_feedback(db: Session, workspace_id: int, user: User) -> List[AnonymousFeedback]:
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_feedback(member), "list feedback")

    records = db.query(Feedback).filter_by(workspace_id=workspace_id).order_by(Feedback.id).all()
    return anonymize(records)


def feedback_summary(
    db: Session,
    workspace_id: int,
    user: User,
    target_user_id: Optional[int] = None
) -> List[FeedbackSummary]:
    """Per-member averages; members nobody has reviewed yet report zeros."""
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_feedback(member), "summarize feedback")

    query = db.query(Feedback).filter_by(workspace_id=workspace_id)
    if target_user_id is not None:
        _ensure_feedback_target(db, workspace_id, target_user_id)
        records = anonymize(query.filter_by(target_user_id=target_user_id).all())
        return [summarize(records, target_user_id=target_user_id)]

    records = anonymize(query.all())
    target_ids = [
        row[0]
        for row in db.query(WorkspaceMember.user_id)
        .filter_by(workspace_id=workspace_id)
        .order_by(WorkspaceMember.user_id)
        .all()
    ]
    return [
        summarize([item for item in records if item.target_user_id == target_id], target_user_id=target_id)
        for target_id in target_ids
    ]
