from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.db.dependencies import get_db
from models.user import User
from api.v1.auth.utils import get_current_user

from .schemas import TaskCreate, TaskOut, TaskUpdate, TaskWithAssignee
from .services import create_task, get_task, list_my_tasks, list_tasks, update_task

task_router = APIRouter(tags=["Tasks"])


@task_router.post(
    "/projects/{project_id}/tasks",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED
)
def create_task_route(
    project_id: int,
    data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return create_task(db, project_id, data, current_user)


@task_router.get("/projects/{project_id}/tasks", response_model=List[TaskWithAssignee])
def list_tasks_route(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_tasks(db, project_id, current_user)


# Declared before /tasks/{task_id} so "mine" is not parsed as an id
@task_router.get("/tasks/mine", response_model=List[TaskWithAssignee])
def list_my_tasks_route(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_my_tasks(db, current_user)


@task_router.get("/tasks/{task_id}", response_model=TaskWithAssignee)
def get_task_route(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return get_task(db, task_id, current_user)


@task_router.put("/tasks/{task_id}", response_model=TaskOut)
def update_task_route(
    task_id: int,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return update_task(db, task_id, data, current_user)
