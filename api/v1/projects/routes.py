from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.db.dependencies import get_db
from models.user import User
from api.v1.auth.utils import get_current_user

from .schemas import (
    ProjectCreate,
    ProjectMemberAdd,
    ProjectMemberOut,
    ProjectMemberWithUser,
    ProjectOut,
)
from .services import (
    add_project_member,
    create_project,
    get_project,
    list_project_members,
    list_projects,
)

project_router = APIRouter(tags=["Projects"])


@project_router.post(
    "/workspaces/{workspace_id}/projects",
    response_model=ProjectOut,
    status_code=status.HTTP_201_CREATED
)
def create_project_route(
    workspace_id: int,
    data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return create_project(db, workspace_id, data, current_user)


@project_router.get("/workspaces/{workspace_id}/projects", response_model=List[ProjectOut])
def list_projects_route(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_projects(db, workspace_id, current_user)


@project_router.get("/projects/{project_id}", response_model=ProjectOut)
def get_project_route(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_project(db, project_id, current_user)


### MEMBERS ###

@project_router.post(
    "/projects/{project_id}/members",
    response_model=ProjectMemberOut,
    status_code=status.HTTP_201_CREATED
)
def add_project_member_route(
    project_id: int,
    data: ProjectMemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return add_project_member(db, project_id, data, current_user)


@project_router.get("/projects/{project_id}/members", response_model=List[ProjectMemberWithUser])
def list_project_members_route(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_project_members(db, project_id, current_user)
