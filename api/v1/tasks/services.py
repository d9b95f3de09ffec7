import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from core.access import membership
from core.access.policy import can_create_task, can_update_task, can_view_workspace, enforce
from core.activity import ActivityType, record_activity
from models.project import Project
from models.task import Task, TaskStatus
from models.user import User
from api.v1.auth.services import get_user
from api.v1.projects.services import load_project_context

from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

ASSIGNEE_NOT_IN_WORKSPACE = "Assignee must be a member of the workspace"

# Fields that may be cleared with an explicit null
NULLABLE_TASK_FIELDS = {"description", "deadline"}


def load_task(db: Session, task_id: int) -> Task:
    task = db.query(Task).filter_by(id=task_id).first()
    if not task:
        logger.info("Task %s does not exist", task_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


def _ensure_assignable(db: Session, workspace_id: int, assignee_id: int) -> User:
    assignee = get_user(db, assignee_id)
    if not membership.is_workspace_member(db, workspace_id, assignee.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ASSIGNEE_NOT_IN_WORKSPACE
        )
    return assignee


### TASK SERVICES ###

def create_task(db: Session, project_id: int, data: TaskCreate, user: User) -> Task:
    project, member = load_project_context(db, project_id, user)
    enforce(can_create_task(member, data.assignee_id), "create task")

    assignee = _ensure_assignable(db, project.workspace_id, data.assignee_id)

    task = Task(
        title=data.title,
        description=data.description,
        priority=data.priority,
        status=TaskStatus.todo,
        progress=0,
        deadline=data.deadline,
        project_id=project.id,
        assignee_id=assignee.id,
        created_by_id=user.id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("User %s created task %s in project %s", user.id, task.id, project.id)
    record_activity(
        db,
        user_id=user.id,
        workspace_id=project.workspace_id,
        type=ActivityType.task_created,
        content=f'{user.name} created task "{task.title}" and assigned it to {assignee.name}',
        entity_id=task.id,
        entity_type="task",
    )
    return task


def list_tasks(db: Session, project_id: int, user: User) -> List[Task]:
    project, member = load_project_context(db, project_id, user)
    enforce(can_view_workspace(member, resource="project"), "list tasks")

    return (
        db.query(Task)
        .options(joinedload(Task.assignee))
        .filter(Task.project_id == project.id)
        .order_by(Task.id)
        .all()
    )


def get_task(db: Session, task_id: int, user: User) -> Task:
    task = load_task(db, task_id)
    member = membership.get_workspace_member(db, task.project.workspace_id, user.id)
    enforce(can_view_workspace(member, resource="task"), "view task")
    return task


def list_my_tasks(db: Session, user: User) -> List[Task]:
    workspace_ids = membership.list_member_workspace_ids(db, user.id)
    if not workspace_ids:
        return []

    return (
        db.query(Task)
        .join(Project, Project.id == Task.project_id)
        .options(joinedload(Task.assignee))
        .filter(Task.assignee_id == user.id, Project.workspace_id.in_(workspace_ids))
        .order_by(Task.id)
        .all()
    )


def update_task(db: Session, task_id: int, data: TaskUpdate, user: User) -> Task:
    task = load_task(db, task_id)
    workspace_id = task.project.workspace_id
    member = membership.get_workspace_member(db, workspace_id, user.id)

    changes = data.model_dump(exclude_unset=True)
    new_assignee_id = changes.get("assignee_id")
    enforce(can_update_task(member, task.assignee_id, new_assignee_id), "update task")

    for field, value in changes.items():
        if value is None and field not in NULLABLE_TASK_FIELDS:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{field} cannot be null"
            )

    if new_assignee_id is not None and new_assignee_id != task.assignee_id:
        _ensure_assignable(db, workspace_id, new_assignee_id)

    previous_title = task.title
    for field, value in changes.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)

    logger.info("User %s updated task %s (%s)", user.id, task.id, ", ".join(sorted(changes)) or "no fields")
    record_activity(
        db,
        user_id=user.id,
        workspace_id=workspace_id,
        type=ActivityType.task_updated,
        content=f'{user.name} updated task "{previous_title}"',
        entity_id=task.id,
        entity_type="task",
    )
    return task
