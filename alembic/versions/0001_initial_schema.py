"""Initial schema: users, workspaces, projects, tasks, feedback and activities.

Tables that already exist are left alone, so a database the app has created
with ``Base.metadata.create_all`` can be brought under migration control with
``alembic upgrade head``.
"""

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

ROLES = ("admin", "leader", "member")
TASK_STATUSES = ("todo", "in_progress", "review", "completed")
TASK_PRIORITIES = ("high", "medium", "low")

TABLE_ORDER = (
    "users",
    "workspaces",
    "workspace_members",
    "projects",
    "project_members",
    "tasks",
    "feedback",
    "activities",
)


def _tables():
    return {
        "users": (
            [
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("username", sa.String(255), nullable=False),
                sa.Column("password", sa.String(255), nullable=False),
                sa.Column("email", sa.String(255), nullable=False),
                sa.Column("name", sa.String(255), nullable=False),
                sa.Column("role", sa.Enum(*ROLES, name="userrole"), nullable=False),
                sa.Column("avatar_url", sa.String(1000), nullable=True),
            ],
            [("ix_users_id", ["id"], False), ("ix_users_username", ["username"], True)],
        ),
        "workspaces": (
            [
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("name", sa.String(255), nullable=False),
                sa.Column("description", sa.Text(), nullable=True),
                sa.Column("category", sa.String(100), nullable=True),
                sa.Column("deadline", sa.DateTime(), nullable=True),
                sa.Column("created_at", sa.DateTime(), nullable=True),
                sa.Column("admin_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            ],
            [("ix_workspaces_id", ["id"], False)],
        ),
        "workspace_members": (
            [
                sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
                sa.Column("workspace_id", sa.Integer(), sa.ForeignKey("workspaces.id"), nullable=False),
                sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
                sa.Column("role", sa.Enum(*ROLES, name="userrole"), nullable=False),
                sa.UniqueConstraint("workspace_id", "user_id", name="uix_workspace_member"),
            ],
            [
                ("ix_workspace_members_id", ["id"], False),
                ("ix_workspace_members_workspace_id", ["workspace_id"], False),
                ("ix_workspace_members_user_id", ["user_id"], False),
            ],
        ),
        "projects": (
            [
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("title", sa.String(255), nullable=False),
                sa.Column("description", sa.Text(), nullable=True),
                sa.Column("deadline", sa.DateTime(), nullable=True),
                sa.Column("created_at", sa.DateTime(), nullable=True),
                sa.Column("workspace_id", sa.Integer(), sa.ForeignKey("workspaces.id"), nullable=False),
            ],
            [("ix_projects_id", ["id"], False), ("ix_projects_workspace_id", ["workspace_id"], False)],
        ),
        "project_members": (
            [
                sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
                sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=False),
                sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
                sa.UniqueConstraint("project_id", "user_id", name="uix_project_member"),
            ],
            [
                ("ix_project_members_id", ["id"], False),
                ("ix_project_members_project_id", ["project_id"], False),
                ("ix_project_members_user_id", ["user_id"], False),
            ],
        ),
        "tasks": (
            [
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("title", sa.String(255), nullable=False),
                sa.Column("description", sa.Text(), nullable=True),
                sa.Column("status", sa.Enum(*TASK_STATUSES, name="taskstatus"), nullable=False),
                sa.Column("priority", sa.Enum(*TASK_PRIORITIES, name="taskpriority"), nullable=False),
                sa.Column("progress", sa.Integer(), nullable=False),
                sa.Column("deadline", sa.DateTime(), nullable=True),
                sa.Column("created_at", sa.DateTime(), nullable=True),
                sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=False),
                sa.Column("assignee_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
                sa.Column("created_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            ],
            [
                ("ix_tasks_id", ["id"], False),
                ("ix_tasks_project_id", ["project_id"], False),
                ("ix_tasks_assignee_id", ["assignee_id"], False),
            ],
        ),
        "feedback": (
            [
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("workspace_id", sa.Integer(), sa.ForeignKey("workspaces.id"), nullable=False),
                sa.Column("target_user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
                sa.Column("effort_score", sa.Integer(), nullable=False),
                sa.Column("communication_score", sa.Integer(), nullable=False),
                sa.Column("reliability_score", sa.Integer(), nullable=False),
                sa.Column("comments", sa.Text(), nullable=True),
                sa.Column("created_at", sa.DateTime(), nullable=True),
                sa.Column("submitted_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
                sa.CheckConstraint("effort_score BETWEEN 1 AND 5", name="ck_feedback_effort_score"),
                sa.CheckConstraint("communication_score BETWEEN 1 AND 5", name="ck_feedback_communication_score"),
                sa.CheckConstraint("reliability_score BETWEEN 1 AND 5", name="ck_feedback_reliability_score"),
            ],
            [
                ("ix_feedback_id", ["id"], False),
                ("ix_feedback_workspace_id", ["workspace_id"], False),
                ("ix_feedback_target_user_id", ["target_user_id"], False),
            ],
        ),
        "activities": (
            [
                sa.Column("id", sa.Integer(), primary_key=True),
                sa.Column("workspace_id", sa.Integer(), sa.ForeignKey("workspaces.id"), nullable=False),
                sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
                sa.Column("type", sa.String(50), nullable=False),
                sa.Column("content", sa.Text(), nullable=False),
                sa.Column("entity_id", sa.Integer(), nullable=True),
                sa.Column("entity_type", sa.String(50), nullable=True),
                sa.Column("created_at", sa.DateTime(), nullable=True),
            ],
            [
                ("ix_activities_id", ["id"], False),
                ("ix_activities_workspace_id", ["workspace_id"], False),
                ("ix_activities_created_at", ["created_at"], False),
            ],
        ),
    }


def upgrade() -> None:
    bind = op.get_bind()
    existing = set(sa.inspect(bind).get_table_names())
    tables = _tables()

    for name in TABLE_ORDER:
        if name in existing:
            continue
        columns, indexes = tables[name]
        op.create_table(name, *columns)
        for index_name, index_columns, unique in indexes:
            op.create_index(index_name, name, index_columns, unique=unique)


def downgrade() -> None:
    for name in reversed(TABLE_ORDER):
        op.drop_table(name)
