import enum
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.activity import Activity

logger = logging.getLogger(__name__)


class ActivityType(str, enum.Enum):
    workspace_created = "workspace_created"
    member_added = "member_added"
    project_created = "project_created"
    project_member_added = "project_member_added"
    task_created = "task_created"
    task_updated = "task_updated"
    feedback_submitted = "feedback_submitted"


# Entries whose actor is kept for audit but never shown to readers
ANONYMOUS_ACTIVITY_TYPES = frozenset({ActivityType.feedback_submitted.value})


def record_activity(
    db: Session,
    user_id: int,
    workspace_id: int,
    type: ActivityType,
    content: str,
    entity_id: Optional[int] = None,
    entity_type: Optional[str] = None,
) -> Optional[Activity]:
    """Append an audit entry after the triggering change has been committed.

    Failures are logged and swallowed; the caller's change stands either way.
    """
    try:
        activity = Activity(
            user_id=user_id,
            workspace_id=workspace_id,
            type=ActivityType(type).value,
            content=content,
            entity_id=entity_id,
            entity_type=entity_type,
        )
        db.add(activity)
        db.commit()
        db.refresh(activity)
        return activity
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to record %s activity for workspace %s", type, workspace_id
        )
        return None


def get_workspace_activities(db: Session, workspace_id: int) -> List[Activity]:
    return (
        db.query(Activity)
        .options(joinedload(Activity.user))
        .filter(Activity.workspace_id == workspace_id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .all()
    )


def is_anonymous(activity: Activity) -> bool:
    return activity.type in ANONYMOUS_ACTIVITY_TYPES
