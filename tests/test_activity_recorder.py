from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from core.activity import ActivityType, record_activity
from models.activity import Activity


class _BrokenSession:
    """Stands in for a session whose commit fails."""

    def __init__(self):
        self.rolled_back = False

    def add(self, obj):
        pass

    def commit(self):
        raise OperationalError("INSERT INTO activities", {}, Exception("database is locked"))

    def rollback(self):
        self.rolled_back = True


def test_failed_write_is_swallowed(caplog):
    session = _BrokenSession()

    result = record_activity(
        session,
        user_id=1,
        workspace_id=1,
        type=ActivityType.task_created,
        content="created a task",
    )

    assert result is None
    assert session.rolled_back
    assert "Failed to record" in caplog.text


def test_successful_write_returns_row(db_session):
    activity = record_activity(
        db_session,
        user_id=1,
        workspace_id=1,
        type=ActivityType.workspace_created,
        content="created the workspace",
        entity_id=1,
        entity_type="workspace",
    )

    assert activity is not None
    stored = db_session.execute(select(Activity)).scalars().all()
    assert [row.type for row in stored] == ["workspace_created"]
