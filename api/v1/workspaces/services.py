import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from core.access import membership
from core.access.policy import (
    can_add_workspace_member,
    can_create_workspace,
    can_view_workspace,
    enforce,
)
from core.activity import ActivityType, get_workspace_activities, is_anonymous, record_activity
from models.user import User, UserRole
from models.workspace import Workspace
from models.workspace_member import WorkspaceMember
from api.v1.auth.schemas import UserPublic
from api.v1.auth.services import get_user

from .schemas import ActivityOut, WorkspaceCreate, WorkspaceMemberAdd

logger = logging.getLogger(__name__)

ALREADY_A_MEMBER = "User is already a member of this workspace"


### LOOKUPS ###

def load_workspace(db: Session, workspace_id: int) -> Workspace:
    workspace = db.query(Workspace).filter_by(id=workspace_id).first()
    if not workspace:
        logger.info("Workspace %s does not exist", workspace_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Workspace not found"
        )
    return workspace


def load_workspace_context(
    db: Session,
    workspace_id: int,
    user: User
) -> Tuple[Workspace, Optional[WorkspaceMember]]:
    """Workspace plus the acting user's membership row (``None`` for outsiders)."""
    workspace = load_workspace(db, workspace_id)
    return workspace, membership.get_workspace_member(db, workspace_id, user.id)


### WORKSPACE SERVICES ###

def create_workspace(db: Session, data: WorkspaceCreate, user: User) -> Workspace:
    """Create a workspace and enrol its creator as workspace admin in one commit."""
    enforce(can_create_workspace(user), "create workspace")

    workspace = Workspace(
        name=data.name,
        description=data.description,
        category=data.category,
        deadline=data.deadline,
        admin_id=user.id,
    )
    try:
        db.add(workspace)
        db.flush()
        db.add(WorkspaceMember(
            workspace_id=workspace.id,
            user_id=user.id,
            role=UserRole.admin
        ))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(workspace)

    logger.info("User %s created workspace %s", user.id, workspace.id)
    record_activity(
        db,
        user_id=user.id,
        workspace_id=workspace.id,
        type=ActivityType.workspace_created,
        content=f'{user.name} created the workspace "{workspace.name}"',
        entity_id=workspace.id,
        entity_type="workspace",
    )
    return workspace


def list_workspaces(db: Session, user: User) -> List[Workspace]:
    return membership.list_member_workspaces(db, user.id)


def get_workspace(db: Session, workspace_id: int, user: User) -> Workspace:
    workspace, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_workspace(member), "view workspace")
    return workspace


### MEMBER SERVICES ###

def add_workspace_member(
    db: Session,
    workspace_id: int,
    data: WorkspaceMemberAdd,
    user: User
) -> WorkspaceMember:
    workspace, actor = load_workspace_context(db, workspace_id, user)
    enforce(can_add_workspace_member(actor), "add workspace member")

    target = get_user(db, data.user_id)

    if membership.is_workspace_member(db, workspace_id, target.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ALREADY_A_MEMBER
        )

    member = WorkspaceMember(workspace_id=workspace_id, user_id=target.id, role=data.role)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert for the same pair
        db.rollback()
        logger.info("Duplicate membership insert for workspace %s user %s", workspace_id, target.id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ALREADY_A_MEMBER
        )
    db.refresh(member)

    logger.info("User %s added user %s to workspace %s as %s", user.id, target.id, workspace_id, member.role.value)
    record_activity(
        db,
        user_id=user.id,
        workspace_id=workspace_id,
        type=ActivityType.member_added,
        content=f"{user.name} added {target.name} to the workspace",
        entity_id=target.id,
        entity_type="user",
    )
    return member


def list_workspace_members(db: Session, workspace_id: int, user: User) -> List[WorkspaceMember]:
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_workspace(member), "list workspace members")

    return (
        db.query(WorkspaceMember)
        .options(joinedload(WorkspaceMember.user))
        .filter(WorkspaceMember.workspace_id == workspace_id)
        .order_by(WorkspaceMember.id)
        .all()
    )


### ACTIVITY SERVICES ###

def list_workspace_activities(db: Session, workspace_id: int, user: User) -> List[ActivityOut]:
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_workspace(member), "list activities")

    timeline = []
    for activity in get_workspace_activities(db, workspace_id):
        hidden = is_anonymous(activity)
        timeline.append(ActivityOut(
            id=activity.id,
            workspace_id=activity.workspace_id,
            type=activity.type,
            content=activity.content,
            entity_id=activity.entity_id,
            entity_type=activity.entity_type,
            created_at=activity.created_at,
            user_id=None if hidden else activity.user_id,
            user=None if hidden or activity.user is None else UserPublic.model_validate(activity.user),
        ))
    return timeline
