from conftest import API


def _create_task(client, project_id, actor, assignee_id, **extra):
    payload = {"title": "Write intro", "assignee_id": assignee_id}
    payload.update(extra)
    return client.post(f"{API}/projects/{project_id}/tasks", json=payload, headers=actor["headers"])


def test_member_cannot_assign_task_to_someone_else(client, team, project):
    response = _create_task(client, project["id"], team["member"], team["teammate"]["id"])
    assert response.status_code == 403


def test_member_can_assign_task_to_self(client, team, project):
    response = _create_task(client, project["id"], team["member"], team["member"]["id"])
    assert response.status_code == 201


def test_leader_creates_task_for_any_member(client, team, project):
    response = _create_task(client, project["id"], team["leader"], team["member"]["id"], priority="high")
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "todo"
    assert task["progress"] == 0
    assert task["priority"] == "high"
    assert task["created_by_id"] == team["leader"]["id"]


def test_assignee_must_belong_to_workspace(client, team, project):
    response = _create_task(client, project["id"], team["leader"], team["outsider"]["id"])
    assert response.status_code == 409
    assert response.json()["detail"] == "Assignee must be a member of the workspace"


def test_outsider_cannot_create_task(client, team, project):
    response = _create_task(client, project["id"], team["outsider"], team["outsider"]["id"])
    assert response.status_code == 404


def test_list_and_get_tasks(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["member"]["id"]).json()

    listed = client.get(f"{API}/projects/{project['id']}/tasks", headers=team["teammate"]["headers"])
    assert listed.status_code == 200
    assert listed.json()[0]["assignee"]["username"] == "mike"

    fetched = client.get(f"{API}/tasks/{task['id']}", headers=team["teammate"]["headers"])
    assert fetched.status_code == 200

    hidden = client.get(f"{API}/tasks/{task['id']}", headers=team["outsider"]["headers"])
    assert hidden.status_code == 404
    assert hidden.json()["detail"] == "Task not found"


def test_my_tasks(client, team, project):
    _create_task(client, project["id"], team["leader"], team["member"]["id"], title="Mine")
    _create_task(client, project["id"], team["leader"], team["teammate"]["id"], title="Theirs")

    response = client.get(f"{API}/tasks/mine", headers=team["member"]["headers"])
    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Mine"]


def test_assignee_updates_progress(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["member"]["id"]).json()

    response = client.put(
        f"{API}/tasks/{task['id']}",
        json={"status": "in_progress", "progress": 40},
        headers=team["member"]["headers"],
    )
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"
    assert response.json()["progress"] == 40


def test_member_cannot_update_others_task(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["teammate"]["id"]).json()

    response = client.put(f"{API}/tasks/{task['id']}", json={"progress": 10}, headers=team["member"]["headers"])
    assert response.status_code == 403


def test_member_cannot_reassign(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["member"]["id"]).json()

    response = client.put(
        f"{API}/tasks/{task['id']}",
        json={"assignee_id": team["teammate"]["id"]},
        headers=team["member"]["headers"],
    )
    assert response.status_code == 403


def test_leader_reassigns_within_workspace_only(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["member"]["id"]).json()

    moved = client.put(
        f"{API}/tasks/{task['id']}",
        json={"assignee_id": team["teammate"]["id"]},
        headers=team["leader"]["headers"],
    )
    assert moved.status_code == 200
    assert moved.json()["assignee_id"] == team["teammate"]["id"]

    rejected = client.put(
        f"{API}/tasks/{task['id']}",
        json={"assignee_id": team["outsider"]["id"]},
        headers=team["leader"]["headers"],
    )
    assert rejected.status_code == 409


def test_immutable_fields_are_rejected(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["member"]["id"]).json()

    for payload in ({"project_id": 42}, {"created_by_id": team["member"]["id"]}, {"id": 7}):
        response = client.put(f"{API}/tasks/{task['id']}", json=payload, headers=team["leader"]["headers"])
        assert response.status_code == 422

    fetched = client.get(f"{API}/tasks/{task['id']}", headers=team["leader"]["headers"]).json()
    assert fetched["project_id"] == project["id"]
    assert fetched["created_by_id"] == team["leader"]["id"]


def test_progress_range_and_nulls(client, team, project):
    task = _create_task(client, project["id"], team["leader"], team["member"]["id"], description="draft").json()
    url = f"{API}/tasks/{task['id']}"
    headers = team["leader"]["headers"]

    assert client.put(url, json={"progress": 101}, headers=headers).status_code == 422
    assert client.put(url, json={"status": None}, headers=headers).status_code == 422

    cleared = client.put(url, json={"description": None}, headers=headers)
    assert cleared.status_code == 200
    assert cleared.json()["description"] is None
