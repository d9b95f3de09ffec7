from sqlalchemy.exc import OperationalError

import core.activity
from conftest import API


def test_timeline_is_newest_first(client, team, project):
    response = client.get(f"{API}/workspaces/{team['workspace_id']}/activities", headers=team["member"]["headers"])
    assert response.status_code == 200
    types = [item["type"] for item in response.json()]

    assert types[0] == "project_created"
    assert types[-1] == "workspace_created"
    assert types.count("member_added") == 3


def test_repeated_reads_are_identical(client, team, project):
    url = f"{API}/workspaces/{team['workspace_id']}/activities"
    first = client.get(url, headers=team["member"]["headers"]).json()
    second = client.get(url, headers=team["member"]["headers"]).json()
    assert first == second


def test_actor_is_shown_for_regular_entries(client, team, project):
    response = client.get(f"{API}/workspaces/{team['workspace_id']}/activities", headers=team["member"]["headers"])
    created = next(item for item in response.json() if item["type"] == "project_created")
    assert created["user_id"] == team["leader"]["id"]
    assert created["user"]["username"] == "lena"
    assert created["entity_type"] == "project"
    assert created["entity_id"] == project["id"]


def test_task_changes_are_recorded(client, team, project):
    task = client.post(
        f"{API}/projects/{project['id']}/tasks",
        json={"title": "Collect data", "assignee_id": team["member"]["id"]},
        headers=team["leader"]["headers"],
    ).json()
    client.put(f"{API}/tasks/{task['id']}", json={"progress": 50}, headers=team["member"]["headers"])

    response = client.get(f"{API}/workspaces/{team['workspace_id']}/activities", headers=team["member"]["headers"])
    types = [item["type"] for item in response.json()]
    assert types[:2] == ["task_updated", "task_created"]


def test_outsider_cannot_read_timeline(client, team):
    response = client.get(f"{API}/workspaces/{team['workspace_id']}/activities", headers=team["outsider"]["headers"])
    assert response.status_code == 404


def test_failed_activity_write_keeps_primary_change(client, team, monkeypatch):
    def _failing_activity(**kwargs):
        raise OperationalError("INSERT INTO activities", {}, Exception("disk full"))

    monkeypatch.setattr(core.activity, "Activity", _failing_activity)

    response = client.post(
        f"{API}/workspaces/{team['workspace_id']}/projects",
        json={"title": "Survives"},
        headers=team["leader"]["headers"],
    )
    assert response.status_code == 201

    listed = client.get(f"{API}/workspaces/{team['workspace_id']}/projects", headers=team["leader"]["headers"])
    assert [item["title"] for item in listed.json()] == ["Survives"]
