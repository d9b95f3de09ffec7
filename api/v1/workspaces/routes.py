from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.db.dependencies import get_db
from models.user import User
from api.v1.auth.utils import get_current_user

from .schemas import (
    ActivityOut,
    WorkspaceCreate,
    WorkspaceMemberAdd,
    WorkspaceMemberOut,
    WorkspaceMemberWithUser,
    WorkspaceOut,
)
from .services import (
    add_workspace_member,
    create_workspace,
    get_workspace,
    list_workspace_activities,
    list_workspace_members,
    list_workspaces,
)

workspace_router = APIRouter(prefix="/workspaces", tags=["Workspaces"])


@workspace_router.get("", response_model=List[WorkspaceOut])
def list_my_workspaces(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_workspaces(db, current_user)


@workspace_router.post("", response_model=WorkspaceOut, status_code=status.HTTP_201_CREATED)
def create_workspace_route(
    data: WorkspaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return create_workspace(db, data, current_user)


@workspace_router.get("/{workspace_id}", response_model=WorkspaceOut)
def get_workspace_route(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_workspace(db, workspace_id, current_user)


### MEMBERS ###

@workspace_router.post(
    "/{workspace_id}/members",
    response_model=WorkspaceMemberOut,
    status_code=status.HTTP_201_CREATED
)
def add_workspace_member_route(
    workspace_id: int,
    data: WorkspaceMemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return add_workspace_member(db, workspace_id, data, current_user)


@workspace_router.get("/{workspace_id}/members", response_model=List[WorkspaceMemberWithUser])
def list_workspace_members_route(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_workspace_members(db, workspace_id, current_user)


### ACTIVITIES ###

@workspace_router.get("/{workspace_id}/activities", response_model=List[ActivityOut])
def list_workspace_activities_route(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_workspace_activities(db, workspace_id, current_user)
