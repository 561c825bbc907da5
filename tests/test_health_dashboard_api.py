from datetime import datetime, timedelta

from carelink.models import HealthMetric


def test_dashboard_shape(client, user, auth_headers, make_medication):
    make_medication(user, name="Metformin", taken=9, total=10)
    make_medication(user, name="Aspirin", taken=6, total=10)

    response = client.get("/api/health-dashboard", headers=auth_headers(user))
    assert response.status_code == 200

    body = response.json()
    assert body["status"] == "success"
    data = body["data"]
    assert set(data) == {"overallStats", "dailyAdherence", "medicationAdherence", "recentMissed", "weeklyTrends"}
    assert data["overallStats"] == {"totalDoses": 20, "takenDoses": 15, "overallCompliance": 75}

    adherence = data["medicationAdherence"]
    assert [row["medicationName"] for row in adherence] == ["Aspirin", "Metformin"]
    assert adherence[0]["missedDoses"] == 4
    assert adherence[0]["adherenceRate"] == 60

    assert len(data["recentMissed"]) == 5
    assert all(row["hoursOverdue"] >= 0 for row in data["recentMissed"])
    assert sum(day["totalDoses"] for day in data["dailyAdherence"]) == 20
    assert sum(week["totalDoses"] for week in data["weeklyTrends"]) == 20


def test_dashboard_without_doses(client, user, auth_headers):
    data = client.get("/api/health-dashboard", headers=auth_headers(user)).json()["data"]
    assert data["overallStats"]["overallCompliance"] == 100
    assert data["dailyAdherence"] == []


def test_adherence_analytics(client, user, auth_headers, make_medication):
    make_medication(user, taken=1, total=4, hours_apart=6)

    response = client.get("/api/health-dashboard/adherence-analytics", headers=auth_headers(user))
    assert response.status_code == 200

    data = response.json()["data"]
    streak = data["streakAnalysis"]
    assert set(streak) == {"longestStreak", "currentStreak", "perfectDays", "totalDays"}
    assert streak["totalDays"] >= 30
    assert streak["perfectDays"] < streak["totalDays"]
    assert data["timePatterns"]
    assert data["suggestions"][0]["type"] == "timing"


def test_health_analytics_raises_alerts(client, db, user, auth_headers, make_medication):
    make_medication(user, taken=6, total=10)
    now = datetime.utcnow()
    for days_ago, systolic, diastolic in ((3, 150, 95), (2, 148, 92), (1, 152, 96)):
        db.add(HealthMetric(
            user_id=user.id,
            metric_type="blood_pressure",
            value=systolic,
            diastolic=diastolic,
            unit="mmHg",
            recorded_at=now - timedelta(days=days_ago),
        ))
    db.commit()

    response = client.get("/api/health-analytics", params={"days": 30}, headers=auth_headers(user))
    assert response.status_code == 200

    data = response.json()["data"]
    alerts = {alert["type"]: alert for alert in data["analytics"]["alerts"]}
    assert alerts["compliance"]["severity"] == "critical"
    assert alerts["blood_pressure"]["severity"] == "high"
    assert data["summary"]["overallCompliance"] == 60
    assert data["summary"]["complianceLevel"] == "medium"
    assert data["period"]["days"] == 30


def test_health_trends(client, db, user, auth_headers):
    now = datetime.utcnow()
    for days_ago, weight in ((6, 80), (5, 80), (4, 80), (3, 70), (2, 70), (1, 70)):
        db.add(HealthMetric(
            user_id=user.id, metric_type="weight", value=weight, unit="kg",
            recorded_at=now - timedelta(days=days_ago),
        ))
    db.commit()

    response = client.get("/api/health-trends", params={"period": "month"}, headers=auth_headers(user))
    assert response.status_code == 200

    data = response.json()["data"]
    assert len(data["trends"]) == 6
    [analysis] = data["analysis"]
    assert analysis["metricType"] == "weight"
    assert analysis["trend"] == "improving"


def test_health_trends_unknown_period(client, user, auth_headers):
    response = client.get("/api/health-trends", params={"period": "year"}, headers=auth_headers(user))
    assert response.status_code == 400
