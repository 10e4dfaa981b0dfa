# services/plan_generation.py
"""AI 플랜 생성 경로.

relay(백엔드 프록시) 를 먼저 시도하고, 어떤 이유로든 실패하면 OpenAI 직접 호출로 넘어갑니다.
응답은 코드펜스를 제거한 뒤 JSON 으로 파싱하고, 요일/끼니 존재 여부만 확인합니다.
"""
import json
import logging
import re

from ..core.errors import PlanParseError
from ..utils import ai_relay, openai_client

logger = logging.getLogger(__name__)

WORKOUT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WEEK_DAYS = WORKOUT_DAYS + ["Sunday"]
REQUIRED_MEALS = ["breakfast", "lunch", "dinner"]

_FENCE_RE = re.compile(r"```(?:json)?\n?")


def strip_code_fences(content: str) -> str:
    return _FENCE_RE.sub("", content).strip()


def parse_ai_json(content: str) -> dict:
    try:
        parsed = json.loads(strip_code_fences(content))
    except (json.JSONDecodeError, TypeError):
        logger.error("Could not parse AI response: %.200s", content)
        raise PlanParseError("Invalid response format from AI. Please try again.")
    if not isinstance(parsed, dict):
        raise PlanParseError("Invalid response format from AI. Please try again.")
    return parsed


def validate_workout_plan(plan: dict) -> dict:
    # 요일 값이 객체가 아니면 (문자열, 리스트 등) 빠진 것으로 봄
    missing = [day for day in WORKOUT_DAYS if not (isinstance(plan.get(day), dict) and plan.get(day))]
    if missing:
        raise PlanParseError(f"Incomplete workout plan received. Missing: {', '.join(missing)}. Please try again.")
    return plan


def validate_diet_plan(plan: dict) -> dict:
    # 하루 템플릿(breakfast/lunch/dinner) 또는 요일별 응답 둘 다 허용
    if all(meal in plan for meal in REQUIRED_MEALS):
        return plan
    if any(isinstance(plan.get(day), dict) for day in WEEK_DAYS):
        return plan
    raise PlanParseError("Incomplete diet plan received. Missing: breakfast, lunch, dinner. Please try again.")


def validate_recommendations(data: dict) -> dict:
    if not isinstance(data.get("recommendations"), list):
        raise PlanParseError("Invalid response format from AI. Please try again.")
    return data


VALIDATORS = {
    "workout": validate_workout_plan,
    "diet": validate_diet_plan,
    "recommendations": validate_recommendations,
}


def _coerce(data) -> dict:
    # relay 가 data 를 문자열로 돌려주는 경우도 있음
    if isinstance(data, str):
        return parse_ai_json(data)
    if not isinstance(data, dict):
        raise PlanParseError("Invalid response format from AI. Please try again.")
    return data


async def relay_strategy(kind: str, prompt: str) -> dict:
    data = await ai_relay.request_generation(kind, prompt)
    return VALIDATORS[kind](_coerce(data))


async def direct_strategy(kind: str, prompt: str) -> dict:
    content = await openai_client.request_completion(kind, prompt)
    return VALIDATORS[kind](parse_ai_json(content))


async def generate(kind: str, prompt: str) -> dict:
    """relay → direct 순서로 시도합니다. direct 실패는 그대로 호출자에게 전달됩니다."""
    try:
        return await relay_strategy(kind, prompt)
    except Exception as e:
        logger.warning("relay %s generation failed, falling back to direct API: %s", kind, e)
    return await direct_strategy(kind, prompt)


async def generate_recommendations(prompt: str) -> dict:
    return await generate("recommendations", prompt)
