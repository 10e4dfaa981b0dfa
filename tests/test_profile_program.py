from datetime import datetime, timedelta, timezone

from conftest import PROFILE
from healthtracker.utils import clock


def test_profile_starts_incomplete(auth_client):
    body = auth_client.get("/profile").json()
    assert body["onboarding_complete"] is False
    assert body["bmi"] is None
    assert auth_client.get("/profile/bmi").status_code == 400


def test_onboarding_completes_profile(onboarded_client):
    body = onboarded_client.get("/profile").json()
    assert body["onboarding_complete"] is True
    assert body["profile"]["health_conditions"] == ["None"]
    assert onboarded_client.get("/profile/bmi").json() == {"bmi": 24.2, "category": "Normal"}


def test_onboarding_requires_all_fields(auth_client):
    partial = {key: value for key, value in PROFILE.items() if key != "fitness_goal"}
    assert auth_client.post("/profile/onboarding", json=partial).status_code == 422


def test_partial_profile_update_keeps_other_fields(onboarded_client):
    body = onboarded_client.put("/profile", json={"weight": 95}).json()
    assert body["profile"]["weight"] == 95
    assert body["profile"]["age"] == 30
    assert body["bmi"]["category"] == "Obese"

    analysis = onboarded_client.get("/profile/analysis").json()
    assert analysis["plan_type"] == "weight_loss"


def test_program_requires_height_and_weight(auth_client):
    assert auth_client.post("/program").status_code == 400
    assert auth_client.get("/program").status_code == 404


def test_program_has_one_record_per_month(onboarded_client):
    response = onboarded_client.post("/program")
    assert response.status_code == 201
    program = response.json()
    assert program["total_months"] == 3
    assert program["current_month"] == 1
    assert [record["month"] for record in program["monthly_progress"]] == [1, 2, 3]
    assert all(record["prediction"] for record in program["monthly_progress"])


def test_program_current_month_follows_calendar(onboarded_client, monkeypatch):
    onboarded_client.post("/program")
    later = datetime.now(timezone.utc) + timedelta(days=200)
    monkeypatch.setattr(clock, "utcnow", lambda: later)
    # 마지막 달을 넘지 않음
    assert onboarded_client.get("/program").json()["current_month"] == 3


def test_month_progress_update_and_prediction(onboarded_client):
    onboarded_client.post("/program")

    record = onboarded_client.put("/program/months/1", json={
        "diet_compliance": 85, "workout_compliance": 90, "weight_change": -1.5, "achievements": ["First 5k"],
    }).json()
    assert record["diet_compliance"] == 85
    assert record["achievements"] == ["First 5k"]

    prediction = onboarded_client.get("/program/months/1/prediction").json()["prediction"]
    assert prediction.startswith("Excellent progress!")

    done = onboarded_client.post("/program/months/1/complete").json()
    assert done["is_completed"] is True
    assert done["completion_date"]

    assert onboarded_client.put("/program/months/4", json={"diet_compliance": 10}).status_code == 404
    assert onboarded_client.put("/program/months/1", json={"diet_compliance": 150}).status_code == 422
