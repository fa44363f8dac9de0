import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.database.deps import get_store
from app.main import app


@pytest.fixture
def client(seeded_store):
    app.dependency_overrides[get_store] = lambda: seeded_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def headers():
    return {"Authorization": f"Bearer {create_access_token({'sub': 'alice'})}"}


def task_ids(payload):
    return {task["taskId"] for task in payload}


def test_health_does_not_need_auth(client):
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.parametrize("auth", [None, "Bearer not-a-token", "Basic abc"])
def test_task_routes_require_bearer_token(client, auth):
    headers = {"Authorization": auth} if auth else {}
    response = client.get("/task/", headers=headers)
    assert response.status_code == 401


def test_me_returns_caller(client, headers):
    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["userId"] == "alice"


def test_create_task(client, headers, seeded_store):
    response = client.post(
        "/task/",
        json={"title": "Plan sprint", "userId": "alice", "userIds": ["bob"], "deadline": "2025-09-01T09:00:00Z"},
        headers=headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Task created"
    assert body["task"]["status"] == "To Do"
    assert body["task"]["creator"] == "alice"
    assert body["task"]["userIds"] == ["bob"]
    assert body["task"]["gitlabIssueId"] is None
    assert seeded_store.find_task_by_id(body["task"]["taskId"]) is not None


@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"userId": "alice", "userIds": []}, "Missing required title"),
        ({"title": "x", "userIds": []}, "Missing userId"),
        ({"title": "x", "userId": "alice"}, "'userIds' must be an array"),
        ({"title": "x", "userId": "alice", "userIds": "bob"}, "'userIds' must be an array"),
    ],
)
def test_create_task_rejects_bad_input(client, headers, payload, detail):
    response = client.post("/task/", json=payload, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"detail": detail}


def test_list_tasks_in_both_modes(client, headers):
    response = client.get("/task/", params={"teamId": "team-b"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Tasks retrieved (intersection mode)"
    assert task_ids(response.json()["tasks"]) == {"t3"}

    response = client.get("/task/", params={"teamId": "team-b", "union": "true"}, headers=headers)
    assert response.json()["message"] == "Tasks retrieved (union mode)"
    assert task_ids(response.json()["tasks"]) == {"t3", "t4"}


def test_list_tasks_unknown_team(client, headers):
    response = client.get("/task/", params={"teamId": "missing"}, headers=headers)
    assert response.status_code == 404
    assert response.json() == {"detail": "Team not found"}


def test_grouped_tasks(client, headers):
    response = client.get("/task/grouped", params={"by": "status"}, headers=headers)
    assert response.status_code == 200
    groups = response.json()["groups"]
    assert task_ids(groups["Done"]) == {"t1", "t4"}

    response = client.get("/task/grouped", params={"by": "team"}, headers=headers)
    assert sorted(response.json()["groups"]) == ["team-a", "team-b"]

    response = client.get("/task/grouped", params={"by": "foo"}, headers=headers)
    assert response.status_code == 400


def test_update_assign_and_status(client, headers):
    response = client.put("/task/t3", json={"description": "updated"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["task"]["description"] == "updated"
    assert response.json()["task"]["creator"] == "alice"

    response = client.patch("/task/t3/assign", json={"userId": "bob"}, headers=headers)
    assert response.json()["task"]["userIds"] == ["carol", "bob"]

    response = client.patch("/task/t3/status", json={"newStatus": "Done"}, headers=headers)
    assert response.json()["message"] == "Task status updated"
    assert response.json()["task"]["status"] == "Done"


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("put", "/task/missing", {"title": "x"}),
        ("patch", "/task/missing/assign", {"userId": "bob"}),
        ("patch", "/task/missing/status", {"newStatus": "Done"}),
        ("delete", "/task/missing", None),
        ("get", "/dashboard/task-progress/missing", None),
    ],
)
def test_unknown_task_is_404(client, headers, method, path, body):
    kwargs = {"headers": headers}
    if body is not None:
        kwargs["json"] = body
    response = client.request(method.upper(), path, **kwargs)
    assert response.status_code == 404
    assert response.json() == {"detail": "Task not found"}


def test_delete_routes(client, headers, seeded_store):
    response = client.delete("/task/t2", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Task deleted"
    assert "t2" not in seeded_store.find_user_by_id("bob").tasks

    response = client.delete("/task/all", headers=headers)
    assert response.json() == {"message": "All tasks deleted"}

    response = client.delete("/task/all", headers=headers)
    assert response.json() == {"message": "No tasks to delete"}


def test_dashboard_routes(client, headers):
    response = client.get("/dashboard/summary", headers=headers)
    assert response.json() == {"total": 4, "completed": 2, "remaining": 2}

    response = client.get("/dashboard/summary", params={"userId": "alice", "union": "true"}, headers=headers)
    assert response.json() == {"total": 3, "completed": 1, "remaining": 2}

    response = client.get("/dashboard/calendar", params={"userId": "carol"}, headers=headers)
    assert response.json() == [{"taskId": "t3", "title": "Task t3", "deadline": None, "status": "To Do"}]

    response = client.get("/dashboard/task-progress/t2", headers=headers)
    assert response.json() == {"taskId": "t2", "title": "Task t2", "status": "In Progress", "progress_percent": 50}

    response = client.get("/dashboard/calendar", params={"teamId": "missing"}, headers=headers)
    assert response.status_code == 404


def test_team_and_user_routes(client, headers):
    response = client.post("/team/", json={"name": "Gamma", "members": ["dave", "dave"]}, headers=headers)
    assert response.status_code == 201
    team = response.json()
    assert team["members"] == ["dave"]
    assert client.get(f"/team/{team['teamId']}", headers=headers).json() == team
    assert len(client.get("/team/", headers=headers).json()) == 3

    response = client.post("/user/", json={"name": "Dave"}, headers=headers)
    assert response.status_code == 201
    user = response.json()
    assert user["taskId"] is None and user["tasks"] == []
    assert client.get(f"/user/{user['userId']}", headers=headers).json()["name"] == "Dave"

    assert client.get("/team/missing", headers=headers).json() == {"detail": "Team not found"}
    assert client.get("/user/missing", headers=headers).json() == {"detail": "User not found"}
