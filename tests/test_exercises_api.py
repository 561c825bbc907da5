import pytest

from carelink.models import Exercise, ExerciseCategory, ExerciseLog, ExerciseStep


@pytest.fixture
def catalogue(db):
    strength = ExerciseCategory(name="Strength")
    balance = ExerciseCategory(name="Balance")
    db.add_all([strength, balance])
    db.flush()

    squats = Exercise(category_id=strength.id, title="Chair squats", duration_minutes=10)
    squats.steps = [
        ExerciseStep(step_number=2, instruction="Stand up slowly"),
        ExerciseStep(step_number=1, instruction="Sit at the edge of a chair"),
    ]
    walk = Exercise(category_id=balance.id, title="Heel-to-toe walk", duration_minutes=5)
    db.add_all([squats, walk])
    db.commit()
    return {"strength": strength.id, "balance": balance.id, "squats": squats.id, "walk": walk.id}


def titles(response):
    return [e["title"] for e in response.json()["data"]]


def test_preferences_filter_exercises(client, user, auth_headers, catalogue):
    headers = auth_headers(user)
    assert titles(client.get("/api/exercises", headers=headers)) == ["Chair squats", "Heel-to-toe walk"]

    response = client.post("/api/exercises/preferences", json={"categoryIds": [catalogue["balance"]]}, headers=headers)
    assert response.status_code == 201
    assert titles(client.get("/api/exercises", headers=headers)) == ["Heel-to-toe walk"]

    response = client.post("/api/exercises/preferences", json={"categoryIds": [catalogue["strength"]]}, headers=headers)
    assert response.status_code == 409

    response = client.put("/api/exercises/preferences", json={"categoryIds": [catalogue["strength"]]}, headers=headers)
    assert response.status_code == 200
    assert client.get("/api/exercises/preferences", headers=headers).json()["data"] == {
        "categoryIds": [catalogue["strength"]]
    }
    assert titles(client.get("/api/exercises", headers=headers)) == ["Chair squats"]

    assert client.delete("/api/exercises/preferences", headers=headers).status_code == 200
    assert len(titles(client.get("/api/exercises", headers=headers))) == 2


def test_unknown_category_rejected(client, user, auth_headers, catalogue):
    response = client.put("/api/exercises/preferences", json={"categoryIds": [999]}, headers=auth_headers(user))
    assert response.status_code == 404
    assert response.json()["message"] == "Exercise category not found"


def test_steps_in_order(client, user, auth_headers, catalogue):
    response = client.get(f"/api/exercises/{catalogue['squats']}/steps", headers=auth_headers(user))
    assert [s["stepNumber"] for s in response.json()["data"]] == [1, 2]

    response = client.get("/api/exercises/999/steps", headers=auth_headers(user))
    assert response.status_code == 404


def test_completion_stats(client, db, user, auth_headers, catalogue):
    headers = auth_headers(user)
    assert client.post(f"/api/exercises/{catalogue['squats']}/complete", headers=headers).status_code == 201
    assert client.post(f"/api/exercises/{catalogue['walk']}/complete", headers=headers).status_code == 201
    assert client.post("/api/exercises/999/complete", headers=headers).status_code == 404

    goal_id = client.post("/api/goals", json={"name": "Move daily"}, headers=headers).json()["data"]["id"]
    client.post("/api/goals/logs", json={"goalIds": [goal_id]}, headers=headers)

    stats = client.get("/api/exercises/stats", headers=headers).json()["data"]
    assert stats == {"userId": user.id, "exerciseCompleted": 2, "goalCompleted": 1}
    assert db.query(ExerciseLog).count() == 2
