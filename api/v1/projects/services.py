import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from core.access import membership
from core.access.policy import (
    can_add_project_member,
    can_create_project,
    can_view_workspace,
    enforce,
)
from core.activity import ActivityType, record_activity
from models.project import Project
from models.project_member import ProjectMember
from models.user import User
from models.workspace_member import WorkspaceMember
from api.v1.auth.schemas import UserPublic
from api.v1.auth.services import get_user
from api.v1.workspaces.services import load_workspace_context

from .schemas import ProjectCreate, ProjectMemberAdd, ProjectMemberOut, ProjectMemberWithUser

logger = logging.getLogger(__name__)

NOT_A_WORKSPACE_MEMBER = "User must be a member of the workspace first"
ALREADY_A_PROJECT_MEMBER = "User is already a member of this project"


def load_project(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter_by(id=project_id).first()
    if not project:
        logger.info("Project %s does not exist", project_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return project


def load_project_context(
    db: Session,
    project_id: int,
    user: User
) -> Tuple[Project, Optional[WorkspaceMember]]:
    """Project plus the acting user's membership in its parent workspace."""
    project = load_project(db, project_id)
    return project, membership.get_workspace_member(db, project.workspace_id, user.id)


### PROJECT SERVICES ###

def create_project(db: Session, workspace_id: int, data: ProjectCreate, user: User) -> Project:
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_create_project(member), "create project")

    project = Project(
        title=data.title,
        description=data.description,
        deadline=data.deadline,
        workspace_id=workspace_id,
    )
    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info("User %s created project %s in workspace %s", user.id, project.id, workspace_id)
    record_activity(
        db,
        user_id=user.id,
        workspace_id=workspace_id,
        type=ActivityType.project_created,
        content=f'{user.name} created the project "{project.title}"',
        entity_id=project.id,
        entity_type="project",
    )
    return project


def list_projects(db: Session, workspace_id: int, user: User) -> List[Project]:
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_workspace(member), "list projects")
    return db.query(Project).filter_by(workspace_id=workspace_id).order_by(Project.id).all()


def get_project(db: Session, project_id: int, user: User) -> Project:
    project, member = load_project_context(db, project_id, user)
    enforce(can_view_workspace(member, resource="project"), "view project")
    return project


### PROJECT MEMBER SERVICES ###

def add_project_member(
    db: Session,
    project_id: int,
    data: ProjectMemberAdd,
    user: User
) -> ProjectMemberOut:
    project, actor = load_project_context(db, project_id, user)
    enforce(can_add_project_member(actor), "add project member")

    target = get_user(db, data.user_id)

    # Never coerced into a workspace membership
    target_membership = membership.get_workspace_member(db, project.workspace_id, target.id)
    if target_membership is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=NOT_A_WORKSPACE_MEMBER
        )

    if membership.get_project_member(db, project_id, target.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ALREADY_A_PROJECT_MEMBER
        )

    member = ProjectMember(project_id=project_id, user_id=target.id)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ALREADY_A_PROJECT_MEMBER
        )
    db.refresh(member)

    logger.info("User %s added user %s to project %s", user.id, target.id, project_id)
    record_activity(
        db,
        user_id=user.id,
        workspace_id=project.workspace_id,
        type=ActivityType.project_member_added,
        content=f'{user.name} added {target.name} to the project "{project.title}"',
        entity_id=project_id,
        entity_type="project",
    )
    resolved = membership.resolve_project_membership(db, project, target.id)
    return ProjectMemberOut(
        id=member.id,
        project_id=member.project_id,
        user_id=member.user_id,
        role=resolved.role if resolved else None,
    )


def list_project_members(db: Session, project_id: int, user: User) -> List[ProjectMemberWithUser]:
    project, member = load_project_context(db, project_id, user)
    enforce(can_view_workspace(member, resource="project"), "list project members")

    roles = {
        row.user_id: row.role
        for row in db.query(WorkspaceMember).filter_by(workspace_id=project.workspace_id).all()
    }
    members = (
        db.query(ProjectMember)
        .options(joinedload(ProjectMember.user))
        .filter(ProjectMember.project_id == project_id)
        .order_by(ProjectMember.id)
        .all()
    )
    return [
        ProjectMemberWithUser(
            id=item.id,
            project_id=item.project_id,
            user_id=item.user_id,
            role=roles.get(item.user_id),
            user=UserPublic.model_validate(item.user),
        )
        for item in members
    ]
