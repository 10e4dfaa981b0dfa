import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import PROFILE
from healthtracker.core.errors import AIRequestError
from healthtracker.services import plan_generation, renewal
from healthtracker.services.plan_generation import WORKOUT_DAYS
from healthtracker.utils import clock

MONDAY = date(2024, 6, 3)
SUNDAY = date(2024, 6, 9)


def shift_clock(monkeypatch, days):
    fake_now = datetime.now(timezone.utc) + timedelta(days=days)
    monkeypatch.setattr(clock, "utcnow", lambda: fake_now)
    return fake_now


@pytest.fixture
def sunday(monkeypatch):
    monkeypatch.setattr(clock, "today", lambda: SUNDAY)


def test_generate_requires_complete_profile(auth_client, fake_ai):
    response = auth_client.post("/plans/diet/generate")
    assert response.status_code == 400
    assert fake_ai == []


def test_generate_saves_week_one_plan_and_metadata(onboarded_client, fake_ai, sunday):
    response = onboarded_client.post("/plans/workout/generate", json={"total_weeks": 8})
    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["current_week"] == 1
    assert body["metadata"]["total_weeks"] == 8
    assert body["plan"][0]["day"] == "Monday (Week 1)"
    assert fake_ai == [("relay", "workout"), ("direct", "workout")]

    plan = onboarded_client.get("/plans/workout").json()
    assert len(plan["plan"]) == 6
    assert all(day["accessible"] for day in plan["plan"])
    assert plan["stats"]["completed_days"] == 0

    status = onboarded_client.get("/plans/renewal/status").json()
    assert status["workout"]["days_until_renewal"] == 6
    assert status["diet"] is None


def test_generation_failure_is_502(onboarded_client, monkeypatch):
    async def failing(kind, prompt):
        raise AIRequestError("Failed to generate diet plan")

    monkeypatch.setattr(plan_generation, "relay_strategy", failing)
    monkeypatch.setattr(plan_generation, "direct_strategy", failing)
    response = onboarded_client.post("/plans/diet/generate")
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to generate diet plan"


def test_toggle_completion_respects_day_lock(onboarded_client, fake_ai, monkeypatch):
    monkeypatch.setattr(clock, "today", lambda: MONDAY)
    onboarded_client.post("/plans/workout/generate")

    response = onboarded_client.put("/plans/workout/days/0/items/0")
    assert response.status_code == 200
    assert response.json()["day"]["exercises"][0]["completed"] is True

    response = onboarded_client.put("/plans/workout/days/0/items/1", json={"completed": True})
    assert response.json()["day"]["completed"] is True
    assert response.json()["stats"]["completed_days"] == 1

    assert onboarded_client.put("/plans/workout/days/1/items/0").status_code == 403
    assert onboarded_client.put("/plans/workout/days/0/items/9").status_code == 404
    assert onboarded_client.put("/plans/workout/days/42/items/0").status_code == 404

    progress = onboarded_client.get("/progress/workout").json()
    assert progress["completed_workouts"] == 1

    reset = onboarded_client.post("/plans/workout/reset").json()
    assert reset["stats"]["completed_days"] == 0


def test_toggle_without_plan_is_404(auth_client):
    assert auth_client.put("/plans/diet/days/0/items/0").status_code == 404


def test_unknown_plan_type_is_rejected(auth_client):
    assert auth_client.get("/plans/cardio").status_code == 422


def test_diet_plan_renews_to_week_two_after_seven_days(onboarded_client, fake_ai, monkeypatch, sunday):
    onboarded_client.post("/plans/diet/generate")
    fake_now = shift_clock(monkeypatch, 8)

    body = onboarded_client.get("/plans/diet").json()
    assert body["metadata"]["current_week"] == 2
    assert body["metadata"]["renewal_date"] == clock.to_iso(fake_now + timedelta(days=7))
    assert body["plan"][0]["day"] == "Monday (Week 2)"

    archives = onboarded_client.get("/plans/diet/archives").json()
    assert [archive["week"] for archive in archives] == [1]
    assert archives[0]["plan"][0]["day"] == "Monday (Week 1)"
    assert onboarded_client.get("/plans/diet/archives/1").status_code == 200
    assert onboarded_client.get("/plans/diet/archives/2").status_code == 404

    notifications = onboarded_client.get("/notifications").json()["notifications"]
    assert len(notifications) == 1
    assert "Week 2" in notifications[0]["message"]
    assert notifications[0]["read"] is False


def test_workout_plan_renews_every_six_days(onboarded_client, fake_ai, monkeypatch):
    onboarded_client.post("/plans/workout/generate")
    fake_now = shift_clock(monkeypatch, 6)

    response = onboarded_client.post("/plans/renewal/check").json()
    assert response["renewed"] == ["workout"]
    assert response["status"]["workout"]["current_week"] == 2
    assert response["status"]["workout"]["renewal_date"] == clock.to_iso(fake_now + timedelta(days=6))

    # 같은 시각에 다시 확인해도 두 번 갱신하지 않음
    assert onboarded_client.post("/plans/renewal/check").json()["renewed"] == []


def test_same_week_is_renewed_once_even_at_the_same_instant(onboarded_client, fake_ai, monkeypatch):
    snapshot = onboarded_client.post("/plans/diet/generate").json()["metadata"]
    user_id = onboarded_client.get("/auth/me").json()["data"]["id"]
    shift_clock(monkeypatch, 8)

    # 두 갱신이 같은 시각, 같은 주차 스냅샷으로 들어옴
    first = onboarded_client.portal.call(renewal.renew_plan, user_id, PROFILE, "diet", snapshot)
    second = onboarded_client.portal.call(renewal.renew_plan, user_id, PROFILE, "diet", snapshot)
    assert (first, second) == (True, False)

    body = onboarded_client.get("/plans/diet").json()
    assert body["metadata"]["current_week"] == 2
    assert body["plan"][0]["day"] == "Monday (Week 2)"
    assert [archive["week"] for archive in onboarded_client.get("/plans/diet/archives").json()] == [1]
    assert len(onboarded_client.get("/notifications").json()["notifications"]) == 1


def test_plan_is_not_renewed_past_total_weeks(onboarded_client, fake_ai, monkeypatch):
    onboarded_client.post("/plans/diet/generate", json={"total_weeks": 1})
    calls_after_generate = len(fake_ai)
    shift_clock(monkeypatch, 30)

    body = onboarded_client.get("/plans/diet").json()
    assert body["metadata"]["current_week"] == 1
    assert len(fake_ai) == calls_after_generate


def test_workout_days_without_exercise_objects_are_a_502(onboarded_client, monkeypatch):
    async def list_days(kind, prompt):
        return {day: ["Push-ups 3x12"] for day in WORKOUT_DAYS}

    monkeypatch.setattr(plan_generation, "relay_strategy", list_days)
    monkeypatch.setattr(plan_generation, "direct_strategy", list_days)
    response = onboarded_client.post("/plans/workout/generate")
    assert response.status_code == 502
    assert response.json()["detail"].startswith("Incomplete workout plan received")
    assert onboarded_client.get("/plans/workout").json()["plan"] is None


def test_failed_renewal_is_logged_and_leaves_plan_untouched(onboarded_client, fake_ai, monkeypatch, caplog):
    onboarded_client.post("/plans/diet/generate")

    async def failing(kind, prompt):
        raise AIRequestError("Failed to generate diet plan")

    monkeypatch.setattr(plan_generation, "direct_strategy", failing)
    shift_clock(monkeypatch, 8)

    with caplog.at_level(logging.ERROR):
        body = onboarded_client.get("/plans/diet").json()

    assert body["metadata"]["current_week"] == 1
    assert body["plan"][0]["day"] == "Monday (Week 1)"
    assert onboarded_client.get("/plans/diet/archives").json() == []
    assert onboarded_client.get("/notifications").json()["notifications"] == []
    assert "Error renewing diet plan" in caplog.text


def test_clearing_plan_keeps_metadata(onboarded_client, fake_ai):
    onboarded_client.post("/plans/diet/generate")
    assert onboarded_client.delete("/plans/diet").status_code == 200

    body = onboarded_client.get("/plans/diet").json()
    assert body["plan"] is None
    assert body["metadata"]["current_week"] == 1


def test_recommendations_use_ai_then_fall_back(onboarded_client, fake_ai, monkeypatch):
    body = onboarded_client.get("/progress/recommendations").json()
    assert body["source"] == "ai"
    assert body["recommendations"][0]["icon"] == "💪"

    async def failing(kind, prompt):
        raise AIRequestError("Failed to generate recommendations")

    monkeypatch.setattr(plan_generation, "direct_strategy", failing)
    body = onboarded_client.get("/progress/recommendations").json()
    assert body["source"] == "default"
    assert body["overall"] == "poor"
    assert any(rec["title"] == "Building Healthy Habits" for rec in body["recommendations"])


def test_dashboard_summary(onboarded_client):
    body = onboarded_client.get("/progress/dashboard").json()
    assert body["bmi"] == {"bmi": 24.2, "category": "Normal"}
    assert body["diet_percentage"] == 0
    assert body["renewal"] == {"diet": None, "workout": None}
