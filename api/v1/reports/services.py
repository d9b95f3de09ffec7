import logging

from sqlalchemy.orm import Session, joinedload

from core.access.policy import can_view_workspace, enforce
from models.project import Project
from models.task import Task, TaskPriority, TaskStatus
from models.user import User
from models.workspace_member import WorkspaceMember
from api.v1.workspaces.services import load_workspace_context

from .schemas import MemberContribution, WorkspaceReport

logger = logging.getLogger(__name__)


def workspace_report(db: Session, workspace_id: int, user: User) -> WorkspaceReport:
    """Progress snapshot for a workspace, computed from the current task rows."""
    _, member = load_workspace_context(db, workspace_id, user)
    enforce(can_view_workspace(member), "view workspace report")

    project_count = db.query(Project).filter_by(workspace_id=workspace_id).count()
    members = (
        db.query(WorkspaceMember)
        .options(joinedload(WorkspaceMember.user))
        .filter_by(workspace_id=workspace_id)
        .all()
    )
    tasks = (
        db.query(Task)
        .join(Project, Task.project_id == Project.id)
        .filter(Project.workspace_id == workspace_id)
        .all()
    )

    tasks_by_status = {task_status.value: 0 for task_status in TaskStatus}
    tasks_by_priority = {priority.value: 0 for priority in TaskPriority}
    for task in tasks:
        tasks_by_status[TaskStatus(task.status).value] += 1
        tasks_by_priority[TaskPriority(task.priority).value] += 1

    total = len(tasks)
    completed = tasks_by_status[TaskStatus.completed.value]
    completion_rate = round(completed * 100 / total) if total else 0
    average_progress = round(sum(task.progress or 0 for task in tasks) / total, 1) if total else 0.0

    contributions = []
    for row in members:
        assigned = [task for task in tasks if task.assignee_id == row.user_id]
        contributions.append(MemberContribution(
            user_id=row.user_id,
            name=row.user.name or row.user.username,
            assigned=len(assigned),
            completed=sum(1 for task in assigned if TaskStatus(task.status) == TaskStatus.completed),
        ))
    contributions.sort(key=lambda item: (-item.completed, item.name))

    logger.debug("Built report for workspace %s (%s tasks)", workspace_id, total)
    return WorkspaceReport(
        workspace_id=workspace_id,
        project_count=project_count,
        member_count=len(members),
        task_total=total,
        tasks_by_status=tasks_by_status,
        tasks_by_priority=tasks_by_priority,
        completed_tasks=completed,
        completion_rate=completion_rate,
        average_progress=average_progress,
        contributions=contributions,
    )
