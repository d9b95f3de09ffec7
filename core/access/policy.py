"""Authorization rules for every workspace-scoped action.

Each ``can_*`` function is pure: it takes the acting user's
:class:`~models.workspace_member.WorkspaceMember` row (or ``None`` when the
user is not a member) plus whatever ids the rule needs, and returns a
:class:`Decision`. Nothing here touches the database or raises; services
resolve memberships first (see :mod:`core.access.membership`) and hand the
result to :func:`enforce`.

Visibility policy: a caller without a membership row receives ``NotFound``
for the workspace (or the project/task inside it) rather than ``Forbidden``,
so workspace existence is never revealed to outsiders. The decision still
carries ``reason="not a member"`` so logs can tell the two cases apart.
Members whose role is too low get ``Forbidden``.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status

from core.access.roles import is_plain_member, meets_or_exceeds
from models.user import User, UserRole
from models.workspace_member import WorkspaceMember

logger = logging.getLogger(__name__)

NOT_A_MEMBER = "not a member"


class Outcome(str, enum.Enum):
    allowed = "allowed"
    forbidden = "forbidden"
    not_found = "not_found"


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    reason: Optional[str] = None
    resource: Optional[str] = None

    @property
    def is_allowed(self) -> bool:
        return self.outcome == Outcome.allowed


ALLOWED = Decision(Outcome.allowed)


def forbidden(reason: str) -> Decision:
    return Decision(Outcome.forbidden, reason=reason)


def not_found(resource: str, reason: Optional[str] = None) -> Decision:
    return Decision(Outcome.not_found, reason=reason, resource=resource)


def _hidden(resource: str) -> Decision:
    return not_found(resource, reason=NOT_A_MEMBER)


### RULES ###

def can_create_workspace(user: User) -> Decision:
    # The only rule that looks at the global role
    if meets_or_exceeds(user.role, UserRole.admin):
        return ALLOWED
    return forbidden("Admin access required to create a workspace")


def can_view_workspace(member: Optional[WorkspaceMember], resource: str = "workspace") -> Decision:
    """Workspace, its projects, tasks, members and activities: any role will do."""
    if member is None:
        return _hidden(resource)
    return ALLOWED


def can_add_workspace_member(member: Optional[WorkspaceMember]) -> Decision:
    if member is None:
        return _hidden("workspace")
    if not meets_or_exceeds(member.role, UserRole.admin):
        return forbidden("Only workspace admins can add members")
    return ALLOWED


def can_create_project(member: Optional[WorkspaceMember]) -> Decision:
    if member is None:
        return _hidden("workspace")
    if not meets_or_exceeds(member.role, UserRole.leader):
        return forbidden("You don't have permission to create projects")
    return ALLOWED


def can_add_project_member(member: Optional[WorkspaceMember]) -> Decision:
    """Acting-user half of the rule; the target's workspace membership is an
    invariant checked by the service and reported as a conflict."""
    if member is None:
        return _hidden("project")
    if not meets_or_exceeds(member.role, UserRole.leader):
        return forbidden("You don't have permission to add project members")
    return ALLOWED


def can_create_task(member: Optional[WorkspaceMember], assignee_id: int) -> Decision:
    if member is None:
        return _hidden("project")
    if is_plain_member(member.role) and assignee_id != member.user_id:
        return forbidden("Members can only create tasks for themselves")
    return ALLOWED


def can_update_task(
    member: Optional[WorkspaceMember],
    current_assignee_id: int,
    new_assignee_id: Optional[int] = None,
) -> Decision:
    if member is None:
        return _hidden("task")
    if is_plain_member(member.role):
        if current_assignee_id != member.user_id:
            return forbidden("You can only update tasks assigned to you")
        if new_assignee_id is not None and new_assignee_id != member.user_id:
            return forbidden("Members cannot reassign tasks to other users")
    return ALLOWED


def can_submit_feedback(member: Optional[WorkspaceMember]) -> Decision:
    # Any target is fine; anonymity is enforced on the read side
    if member is None:
        return _hidden("workspace")
    return ALLOWED


def can_view_feedback(member: Optional[WorkspaceMember]) -> Decision:
    if member is None:
        return _hidden("workspace")
    if not meets_or_exceeds(member.role, UserRole.leader):
        return forbidden("You don't have permission to view feedback")
    return ALLOWED


### ENFORCEMENT ###

def enforce(decision: Decision, action: str = "") -> None:
    """Raise the HTTP error matching a non-allowed ``decision``."""
    if decision.is_allowed:
        return

    if decision.outcome == Outcome.not_found:
        resource = decision.resource or "resource"
        logger.info(
            "Denied %s: %s not found (%s)", action or "action", resource, decision.reason or "missing"
        )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource.capitalize()} not found"
        )

    logger.info("Denied %s: %s", action or "action", decision.reason)
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=decision.reason or "Forbidden"
    )
