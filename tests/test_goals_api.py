from datetime import datetime, timedelta

from carelink.models import Goal, GoalLog
from carelink.services.goal_service import GoalService


def create_goal(client, headers, name="Walk 2000 steps"):
    return client.post("/api/goals", json={"name": name, "description": "Around the park"}, headers=headers)


def test_create_and_complete_goals(client, user, auth_headers):
    headers = auth_headers(user)
    first = create_goal(client, headers).json()["data"]
    second = create_goal(client, headers, name="Stretch").json()["data"]
    assert first["lastCompletedAt"] is None

    response = client.put("/api/goals/complete", json={"goalIds": [first["id"]]}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"][0]["lastCompletedAt"] is not None

    incomplete = client.get("/api/goals/incomplete", headers=headers).json()["data"]
    assert [g["id"] for g in incomplete] == [second["id"]]
    assert len(client.get("/api/goals", headers=headers).json()["data"]) == 2


def test_goal_validation(client, user, auth_headers):
    headers = auth_headers(user)
    response = client.post("/api/goals", json={"name": "g" * 101, "description": "d" * 301}, headers=headers)
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert "Name cannot exceed 100 characters" in errors
    assert "Description cannot exceed 300 characters" in errors

    response = client.post("/api/goals", json={"name": "   "}, headers=headers)
    assert response.json()["errors"] == ["Name is required"]

    response = client.put("/api/goals/complete", json={"goalIds": []}, headers=headers)
    assert response.status_code == 400


def test_goals_are_private(client, db, make_user, auth_headers):
    owner = make_user()
    other = make_user(email="bob@example.com", name="Bob")
    goal_id = create_goal(client, auth_headers(owner)).json()["data"]["id"]

    response = client.put("/api/goals/complete", json={"goalIds": [goal_id]}, headers=auth_headers(other))
    assert response.status_code == 403

    response = client.delete(f"/api/goals/{goal_id}", headers=auth_headers(other))
    assert response.status_code == 403

    response = client.delete(f"/api/goals/{goal_id}", headers=auth_headers(owner))
    assert response.status_code == 200
    assert db.query(Goal).count() == 0

    response = client.delete(f"/api/goals/{goal_id}", headers=auth_headers(owner))
    assert response.status_code == 404


def test_log_completions(client, db, user, auth_headers):
    headers = auth_headers(user)
    goal_id = create_goal(client, headers).json()["data"]["id"]

    response = client.post("/api/goals/logs", json={"goalIds": [goal_id, goal_id]}, headers=headers)
    assert response.status_code == 201
    assert response.json()["data"] == {"logged": 1}
    assert db.query(GoalLog).filter(GoalLog.goal_id == goal_id).count() == 1


def test_reset_clears_earlier_days(db, user):
    service = GoalService(db)
    now = datetime(2024, 6, 2, 9, 0)
    walk = service.create_goal(user.id, {"name": "Walk"})
    stretch = service.create_goal(user.id, {"name": "Stretch"})

    service.complete_goals(user.id, {"goalIds": [walk.id]}, now=now - timedelta(days=1))
    service.complete_goals(user.id, {"goalIds": [stretch.id]}, now=now - timedelta(hours=1))

    reset = service.reset_goals(user.id, now=now)
    assert [g.id for g in reset] == [walk.id]
    assert [g.id for g in service.get_incomplete_goals(user.id)] == [walk.id]
    assert service.reset_goals(user.id, now=now) == []
