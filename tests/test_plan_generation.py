import asyncio
import copy

import pytest

from conftest import WORKOUT_RESPONSE, DIET_RESPONSE
from healthtracker.core.errors import PlanParseError, RelayError, AIRequestError
from healthtracker.services import plan_generation
from healthtracker.services.plan_generation import (
    strip_code_fences,
    parse_ai_json,
    validate_workout_plan,
    validate_diet_plan,
)
from healthtracker.services.prompts import program_phase, initial_workout_prompt


def test_code_fences_are_stripped_before_parsing():
    content = '```json\n{"breakfast": {"foods": ["Eggs"]}}\n```'
    assert strip_code_fences(content) == '{"breakfast": {"foods": ["Eggs"]}}'
    assert parse_ai_json(content) == {"breakfast": {"foods": ["Eggs"]}}


def test_unparseable_response_raises_parse_error():
    with pytest.raises(PlanParseError) as exc:
        parse_ai_json("Sure! Here is your plan: ...")
    assert exc.value.message == "Invalid response format from AI. Please try again."


def test_workout_plan_missing_days_is_rejected():
    plan = copy.deepcopy(WORKOUT_RESPONSE)
    del plan["Wednesday"]
    del plan["Saturday"]
    with pytest.raises(PlanParseError) as exc:
        validate_workout_plan(plan)
    assert "Missing: Wednesday, Saturday" in exc.value.message


def test_diet_plan_accepts_template_or_weekday_keys():
    assert validate_diet_plan(DIET_RESPONSE) is DIET_RESPONSE
    weekly = {"Monday": DIET_RESPONSE}
    assert validate_diet_plan(weekly) is weekly
    with pytest.raises(PlanParseError):
        validate_diet_plan({"snacks": []})


def test_generate_falls_back_to_direct_when_relay_fails(monkeypatch):
    calls = []

    async def relay(kind, prompt):
        calls.append("relay")
        raise RelayError("AI relay returned HTTP 503")

    async def direct(kind, prompt):
        calls.append("direct")
        return WORKOUT_RESPONSE

    monkeypatch.setattr(plan_generation, "relay_strategy", relay)
    monkeypatch.setattr(plan_generation, "direct_strategy", direct)

    assert asyncio.run(plan_generation.generate("workout", "prompt")) is WORKOUT_RESPONSE
    assert calls == ["relay", "direct"]


def test_generate_uses_relay_result_when_available(monkeypatch):
    async def relay(kind, prompt):
        return DIET_RESPONSE

    async def direct(kind, prompt):
        raise AssertionError("direct API should not be called")

    monkeypatch.setattr(plan_generation, "relay_strategy", relay)
    monkeypatch.setattr(plan_generation, "direct_strategy", direct)
    assert asyncio.run(plan_generation.generate("diet", "prompt")) is DIET_RESPONSE


def test_direct_failure_propagates(monkeypatch):
    async def relay(kind, prompt):
        raise RelayError("down")

    async def direct(kind, prompt):
        raise AIRequestError("Failed to generate workout plan")

    monkeypatch.setattr(plan_generation, "relay_strategy", relay)
    monkeypatch.setattr(plan_generation, "direct_strategy", direct)
    with pytest.raises(AIRequestError):
        asyncio.run(plan_generation.generate("workout", "prompt"))


def test_relay_result_as_fenced_string_is_parsed(monkeypatch):
    async def fenced(kind, prompt):
        return '```json\n{"recommendations": []}\n```'

    monkeypatch.setattr(plan_generation.ai_relay, "request_generation", fenced)
    assert asyncio.run(plan_generation.relay_strategy("recommendations", "prompt")) == {"recommendations": []}


@pytest.mark.parametrize("week, total, phase", [
    (1, 12, "Foundation"),
    (4, 12, "Foundation"),
    (5, 12, "Progression"),
    (8, 12, "Progression"),
    (9, 12, "Advanced"),
])
def test_program_phase(week, total, phase):
    assert program_phase(week, total) == phase


def test_workout_prompt_includes_profile():
    prompt = initial_workout_prompt({"age": 30, "gender": "male", "height": 170, "weight": 70,
                                     "fitness_goal": "Fat Burning", "health_conditions": ["Diabetes"]}, 12)
    assert "Fat Burning" in prompt
    assert "Diabetes" in prompt


def test_workout_days_that_are_not_objects_count_as_missing():
    plan = {day: ["Push-ups 3x12"] for day in plan_generation.WORKOUT_DAYS}
    plan["Monday"] = WORKOUT_RESPONSE["Monday"]
    with pytest.raises(PlanParseError) as exc:
        validate_workout_plan(plan)
    assert "Missing: Tuesday, Wednesday, Thursday, Friday, Saturday" in exc.value.message


def test_diet_plan_with_only_non_object_weekdays_is_rejected():
    with pytest.raises(PlanParseError):
        validate_diet_plan({"Monday": "oats", "Tuesday": ["rice"]})
