import os
import tempfile

# 앱을 import 하기 전에 테스트용 환경변수 설정
TEST_DIR = tempfile.mkdtemp(prefix="healthtracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DIR, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(TEST_DIR, "uploads")
os.environ["APP_ENV"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CHECKOUT_DELAY_SECONDS"] = "0"
os.environ["RENEWAL_POLL_SECONDS"] = "0"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = str(60 * 24 * 365)
os.environ["OPENAI_API_KEY"] = ""
os.environ["AI_RELAY_URL"] = ""

import pytest
from fastapi.testclient import TestClient

from healthtracker.core.errors import RelayError
from healthtracker.database import create_tables, drop_tables
from healthtracker.main import app
from healthtracker.services import plan_generation

WORKOUT_RESPONSE = {
    day: {
        "exercises": [
            {"name": "Push-ups", "sets": 3, "reps": 12, "restTime": "60 seconds", "equipment": "None"},
            {"name": "Squats", "sets": 3, "reps": 15, "restTime": "60 seconds", "equipment": "None"},
        ],
        "duration": "45 minutes",
        "warmup": ["Jumping jacks"],
        "cooldown": ["Stretching"],
    }
    for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
}

DIET_RESPONSE = {
    "breakfast": {"foods": ["Oatmeal", "Banana"], "calories": 400, "time": "8:00 AM"},
    "lunch": {"foods": ["Chicken salad"], "calories": 600, "time": "12:00 PM"},
    "dinner": {"foods": ["Salmon", "Rice"], "calories": 1000, "time": "6:00 PM"},
    "macros": {"protein": "150g", "carbs": "200g", "fats": "60g"},
}

RECOMMENDATIONS_RESPONSE = {
    "recommendations": [
        {"type": "motivation", "title": "Keep going", "message": "You are doing well."},
    ],
}

AI_RESPONSES = {
    "workout": WORKOUT_RESPONSE,
    "diet": DIET_RESPONSE,
    "recommendations": RECOMMENDATIONS_RESPONSE,
}

PROFILE = {
    "age": 30,
    "gender": "male",
    "height": 170,
    "weight": 70,
    "health_conditions": ["None"],
    "fitness_goal": "General Fitness",
}


@pytest.fixture
def client():
    drop_tables()
    create_tables()
    with TestClient(app) as test_client:
        yield test_client


def register(client, username="tester", email="tester@example.com", password="secret123"):
    response = client.post("/auth/register", json={"username": username, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_client(client):
    token = register(client)["token"]
    client.headers["Authorization"] = f"Bearer {token}"
    return client


@pytest.fixture
def onboarded_client(auth_client):
    response = auth_client.post("/profile/onboarding", json=PROFILE)
    assert response.status_code == 200, response.text
    return auth_client


@pytest.fixture
def fake_ai(monkeypatch):
    """relay 는 항상 실패, direct 는 준비된 응답을 돌려줍니다. 호출 기록은 calls 에 남음."""
    calls = []

    async def failing_relay(kind, prompt):
        calls.append(("relay", kind))
        raise RelayError("AI relay URL not configured")

    async def canned_direct(kind, prompt):
        calls.append(("direct", kind))
        return AI_RESPONSES[kind]

    monkeypatch.setattr(plan_generation, "relay_strategy", failing_relay)
    monkeypatch.setattr(plan_generation, "direct_strategy", canned_direct)
    return calls
