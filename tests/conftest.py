"""Shared pytest fixtures: an in-memory database and a TestClient bound to it."""

import os
from typing import Any, Callable, Dict, Iterator

# Must be set before the application modules read their settings
os.environ["DB_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "collabmate-test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.db.base import Base  # noqa: E402
from core.db.dependencies import get_db  # noqa: E402
import models  # noqa: E402,F401
from main import app  # noqa: E402

API = "/api"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session() -> Iterator[Session]:
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session: Session) -> Iterator[TestClient]:
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client: TestClient) -> Callable[..., Dict[str, Any]]:
    """Register a user and return ``{"id", "username", "headers"}``."""

    def _register(username: str, role: str = "member", name: str = "") -> Dict[str, Any]:
        response = client.post(
            f"{API}/register",
            json={
                "username": username,
                "password": "secret-pass",
                "email": f"{username}@collabmate.io",
                "name": name or username.capitalize(),
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        payload = response.json()
        return {
            "id": payload["user"]["id"],
            "username": username,
            "headers": {"Authorization": f"Bearer {payload['access_token']}"},
        }

    return _register


@pytest.fixture()
def team(client: TestClient, register: Callable[..., Dict[str, Any]]) -> Dict[str, Any]:
    """A workspace with an admin, a leader, two members and one outsider."""
    admin = register("alice", role="admin")
    leader = register("lena")
    member = register("mike")
    teammate = register("tara")
    outsider = register("oscar")

    response = client.post(
        f"{API}/workspaces",
        json={"name": "Capstone", "category": "school"},
        headers=admin["headers"],
    )
    assert response.status_code == 201, response.text
    workspace_id = response.json()["id"]

    for user, role in ((leader, "leader"), (member, "member"), (teammate, "member")):
        added = client.post(
            f"{API}/workspaces/{workspace_id}/members",
            json={"user_id": user["id"], "role": role},
            headers=admin["headers"],
        )
        assert added.status_code == 201, added.text

    return {
        "workspace_id": workspace_id,
        "admin": admin,
        "leader": leader,
        "member": member,
        "teammate": teammate,
        "outsider": outsider,
    }


@pytest.fixture()
def project(client: TestClient, team: Dict[str, Any]) -> Dict[str, Any]:
    response = client.post(
        f"{API}/workspaces/{team['workspace_id']}/projects",
        json={"title": "Research paper"},
        headers=team["leader"]["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()
