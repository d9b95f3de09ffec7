"""Rule-level checks; no database involved."""

import pytest
from fastapi import HTTPException

from core.access.policy import (
    NOT_A_MEMBER,
    Outcome,
    can_add_project_member,
    can_add_workspace_member,
    can_create_project,
    can_create_task,
    can_create_workspace,
    can_submit_feedback,
    can_update_task,
    can_view_feedback,
    can_view_workspace,
    enforce,
    forbidden,
    not_found,
)
from models.user import User, UserRole
from models.workspace_member import WorkspaceMember


def _member(role: UserRole, user_id: int = 1) -> WorkspaceMember:
    return WorkspaceMember(workspace_id=10, user_id=user_id, role=role)


def test_only_global_admin_creates_workspaces():
    assert can_create_workspace(User(id=1, role=UserRole.admin)).is_allowed
    decision = can_create_workspace(User(id=2, role=UserRole.leader))
    assert decision.outcome == Outcome.forbidden


@pytest.mark.parametrize(
    "rule",
    [
        can_view_workspace,
        can_add_workspace_member,
        can_create_project,
        can_add_project_member,
        can_submit_feedback,
        can_view_feedback,
    ],
)
def test_non_member_is_told_not_found(rule):
    decision = rule(None)
    assert decision.outcome == Outcome.not_found
    assert decision.reason == NOT_A_MEMBER


def test_only_workspace_admin_adds_members():
    assert can_add_workspace_member(_member(UserRole.admin)).is_allowed
    assert can_add_workspace_member(_member(UserRole.leader)).outcome == Outcome.forbidden
    assert can_add_workspace_member(_member(UserRole.member)).outcome == Outcome.forbidden


@pytest.mark.parametrize("rule", [can_create_project, can_add_project_member, can_view_feedback])
def test_leader_rules(rule):
    assert rule(_member(UserRole.admin)).is_allowed
    assert rule(_member(UserRole.leader)).is_allowed
    assert rule(_member(UserRole.member)).outcome == Outcome.forbidden


def test_member_creates_tasks_only_for_self():
    member = _member(UserRole.member, user_id=5)
    assert can_create_task(member, assignee_id=5).is_allowed
    assert can_create_task(member, assignee_id=6).outcome == Outcome.forbidden
    assert can_create_task(_member(UserRole.leader, user_id=7), assignee_id=6).is_allowed


def test_member_updates_only_own_tasks():
    member = _member(UserRole.member, user_id=5)
    assert can_update_task(member, current_assignee_id=5).is_allowed
    assert can_update_task(member, current_assignee_id=6).outcome == Outcome.forbidden
    assert can_update_task(member, current_assignee_id=5, new_assignee_id=6).outcome == Outcome.forbidden
    assert can_update_task(member, current_assignee_id=5, new_assignee_id=5).is_allowed


def test_leader_updates_any_task():
    leader = _member(UserRole.leader, user_id=7)
    assert can_update_task(leader, current_assignee_id=5, new_assignee_id=6).is_allowed


def test_task_rules_hide_task_from_outsiders():
    decision = can_update_task(None, current_assignee_id=5)
    assert decision.outcome == Outcome.not_found
    assert decision.resource == "task"


def test_any_member_submits_feedback():
    for role in UserRole:
        assert can_submit_feedback(_member(role)).is_allowed


def test_enforce_maps_outcomes_to_http_errors():
    enforce(can_view_workspace(_member(UserRole.member)))

    with pytest.raises(HTTPException) as missing:
        enforce(not_found("project", reason=NOT_A_MEMBER))
    assert missing.value.status_code == 404
    assert missing.value.detail == "Project not found"

    with pytest.raises(HTTPException) as denied:
        enforce(forbidden("nope"))
    assert denied.value.status_code == 403
    assert denied.value.detail == "nope"
