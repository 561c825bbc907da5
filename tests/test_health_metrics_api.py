from datetime import datetime, timedelta

from carelink.models import HealthMetric


def test_record_metric(client, user, auth_headers):
    response = client.post(
        "/api/health-metrics",
        json={"metricType": "heart_rate", "value": 72, "notes": "after walk"},
        headers=auth_headers(user),
    )
    assert response.status_code == 201

    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Health metric recorded successfully"
    assert set(body["data"]) == {"metricId", "metricType", "value", "unit", "recordedAt"}
    assert body["data"]["metricType"] == "heart_rate"
    assert body["data"]["value"] == 72
    assert body["data"]["unit"] == "bpm"


def test_record_blood_pressure(client, db, user, auth_headers):
    response = client.post(
        "/api/health-metrics",
        json={"metricType": "blood_pressure", "value": "128/84"},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    assert response.json()["data"]["value"] == "128/84"

    metric = db.query(HealthMetric).one()
    assert metric.value == 128
    assert metric.diastolic == 84


def test_missing_type_or_value(client, user, auth_headers):
    response = client.post("/api/health-metrics", json={"metricType": "weight"}, headers=auth_headers(user))
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == ["Value is required"]


def test_blood_pressure_inverted_rejected(client, db, user, auth_headers):
    response = client.post(
        "/api/health-metrics",
        json={"metricType": "blood_pressure", "systolic": 120, "diastolic": 130},
        headers=auth_headers(user),
    )
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert "Systolic pressure must be higher than diastolic pressure" in body["errors"]
    assert db.query(HealthMetric).count() == 0


def test_future_reading_rejected(client, user, auth_headers):
    future = (datetime.utcnow() + timedelta(days=1)).isoformat()
    response = client.post(
        "/api/health-metrics",
        json={"metricType": "weight", "value": 60, "recordedAt": future},
        headers=auth_headers(user),
    )
    assert response.status_code == 400


def test_owner_only_access(client, make_user, auth_headers):
    owner = make_user()
    other = make_user(email="bob@example.com", name="Bob")

    created = client.post(
        "/api/health-metrics", json={"metricType": "mood", "value": 7}, headers=auth_headers(owner)
    ).json()["data"]

    response = client.get(f"/api/health-metrics/{created['metricId']}", headers=auth_headers(other))
    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN"

    response = client.delete(f"/api/health-metrics/{created['metricId']}", headers=auth_headers(other))
    assert response.status_code == 403

    response = client.get("/api/health-metrics/9999", headers=auth_headers(owner))
    assert response.status_code == 404


def test_update_and_delete(client, user, auth_headers):
    headers = auth_headers(user)
    metric_id = client.post(
        "/api/health-metrics", json={"metricType": "weight", "value": 70}, headers=headers
    ).json()["data"]["metricId"]

    response = client.put(f"/api/health-metrics/{metric_id}", json={"value": 68.5}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["value"] == 68.5

    response = client.put(f"/api/health-metrics/{metric_id}", json={"value": 500}, headers=headers)
    assert response.status_code == 400

    assert client.delete(f"/api/health-metrics/{metric_id}", headers=headers).status_code == 200
    assert client.get(f"/api/health-metrics/{metric_id}", headers=headers).status_code == 404


def test_list_filters(client, user, auth_headers):
    headers = auth_headers(user)
    client.post("/api/health-metrics", json={"metricType": "weight", "value": 70}, headers=headers)
    client.post("/api/health-metrics", json={"metricType": "mood", "value": 6}, headers=headers)

    response = client.get("/api/health-metrics", params={"metricType": "weight"}, headers=headers)
    assert response.status_code == 200
    assert [m["metricType"] for m in response.json()["data"]] == ["weight"]

    response = client.get("/api/health-metrics", params={"metricType": "height"}, headers=headers)
    assert response.status_code == 400


def test_type_change_checks_stored_value(client, db, user, auth_headers):
    headers = auth_headers(user)
    metric_id = client.post(
        "/api/health-metrics", json={"metricType": "weight", "value": 250}, headers=headers
    ).json()["data"]["metricId"]

    response = client.put(f"/api/health-metrics/{metric_id}", json={"metricType": "heart_rate"}, headers=headers)
    assert response.status_code == 400
    assert "Heart rate must be between 30 and 220" in response.json()["errors"]

    metric = db.get(HealthMetric, metric_id)
    db.refresh(metric)
    assert metric.metric_type == "weight"

    response = client.put(
        f"/api/health-metrics/{metric_id}", json={"metricType": "heart_rate", "value": 88}, headers=headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["metricType"] == "heart_rate"
    assert data["value"] == 88
    assert data["unit"] == "bpm"


def test_type_change_to_blood_pressure_needs_diastolic(client, db, user, auth_headers):
    headers = auth_headers(user)
    metric_id = client.post(
        "/api/health-metrics", json={"metricType": "weight", "value": 80}, headers=headers
    ).json()["data"]["metricId"]

    response = client.put(
        f"/api/health-metrics/{metric_id}", json={"metricType": "blood_pressure"}, headers=headers
    )
    assert response.status_code == 400
    assert "Blood pressure must be given as systolic/diastolic (e.g. 120/80)" in response.json()["errors"]

    response = client.put(
        f"/api/health-metrics/{metric_id}",
        json={"metricType": "blood_pressure", "value": 120, "diastolic": 80},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["diastolic"] == 80


def test_diastolic_only_update(client, db, user, auth_headers):
    headers = auth_headers(user)
    metric_id = client.post(
        "/api/health-metrics", json={"metricType": "blood_pressure", "value": "120/80"}, headers=headers
    ).json()["data"]["metricId"]

    response = client.put(f"/api/health-metrics/{metric_id}", json={"diastolic": 70}, headers=headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["value"] == 120
    assert data["diastolic"] == 70

    response = client.put(f"/api/health-metrics/{metric_id}", json={"diastolic": 130}, headers=headers)
    assert response.status_code == 400
    assert "Systolic pressure must be higher than diastolic pressure" in response.json()["errors"]

    metric = db.get(HealthMetric, metric_id)
    db.refresh(metric)
    assert metric.diastolic == 70
