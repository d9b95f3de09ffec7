"""Membership lookups.

Every function here is a plain read. "Not a member" comes back as ``None`` or
``False``; callers treat that as no access and never fall back to a default role.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from models.project import Project
from models.project_member import ProjectMember
from models.user import UserRole
from models.workspace import Workspace
from models.workspace_member import WorkspaceMember


@dataclass(frozen=True)
class ProjectMembership:
    """A project participant together with the role inherited from the workspace."""

    member: ProjectMember
    role: UserRole


def get_workspace_member(db: Session, workspace_id: int, user_id: int) -> Optional[WorkspaceMember]:
    return db.query(WorkspaceMember).filter_by(workspace_id=workspace_id, user_id=user_id).first()


def is_workspace_member(db: Session, workspace_id: int, user_id: int) -> bool:
    return get_workspace_member(db, workspace_id, user_id) is not None


def get_workspace_role(db: Session, workspace_id: int, user_id: int) -> Optional[UserRole]:
    member = get_workspace_member(db, workspace_id, user_id)
    return member.role if member else None


def get_project_member(db: Session, project_id: int, user_id: int) -> Optional[ProjectMember]:
    return db.query(ProjectMember).filter_by(project_id=project_id, user_id=user_id).first()


def resolve_project_membership(db: Session, project: Project, user_id: int) -> Optional[ProjectMembership]:
    member = get_project_member(db, project.id, user_id)
    if member is None:
        return None
    role = get_workspace_role(db, project.workspace_id, user_id)
    if role is None:
        # A project participant who has since lost workspace access has no role at all
        return None
    return ProjectMembership(member=member, role=role)


def list_member_workspaces(db: Session, user_id: int) -> List[Workspace]:
    return (
        db.query(Workspace)
        .join(WorkspaceMember, WorkspaceMember.workspace_id == Workspace.id)
        .filter(WorkspaceMember.user_id == user_id)
        .order_by(Workspace.id)
        .all()
    )


def list_member_workspace_ids(db: Session, user_id: int) -> List[int]:
    rows = db.query(WorkspaceMember.workspace_id).filter_by(user_id=user_id).all()
    return [row[0] for row in rows]
