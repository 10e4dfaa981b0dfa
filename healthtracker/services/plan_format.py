# services/plan_format.py
"""AI 응답(JSON) 을 앱에서 쓰는 요일별 플랜 형태로 바꾸고, 완료 상태를 다룹니다."""
import re

from .plan_generation import WORKOUT_DAYS, WEEK_DAYS

MEAL_SLOTS = [
    ("breakfast", "Breakfast", "8:00 AM"),
    ("morningSnack", "Morning Snack", "10:00 AM"),
    ("lunch", "Lunch", "12:00 PM"),
    ("afternoonSnack", "Afternoon Snack", "3:00 PM"),
    ("dinner", "Dinner", "6:00 PM"),
    ("eveningSnack", "Evening Snack", "10:00 PM"),
]

# 응답에 끼니가 하나도 없을 때 쓰는 기본값
DEFAULT_MEALS = {
    "breakfast": {"foods": ["Healthy breakfast option"], "calories": 400},
    "lunch": {"foods": ["Nutritious lunch option"], "calories": 500},
    "dinner": {"foods": ["Balanced dinner option"], "calories": 600},
}
DEFAULT_MACROS = {"protein": 120, "carbs": 150, "fats": 50}

_WEEKDAY_RE = re.compile(r"^\s*([A-Za-z]+)")


def day_label(day_name: str, week: int) -> str:
    return f"{day_name} (Week {week})"


def weekday_of(label: str) -> int | None:
    """'Tuesday (Week 3)' 처럼 요일로 시작하는 라벨의 요일 인덱스(월=0). 모르면 None."""
    match = _WEEKDAY_RE.match(label or "")
    if not match:
        return None
    name = match.group(1).capitalize()
    return WEEK_DAYS.index(name) if name in WEEK_DAYS else None


def _number(value, default: float = 0) -> float:
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        match = re.search(r"-?\d+(\.\d+)?", value)
        if match:
            return float(match.group())
    return default


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    # 문자열 하나로 온 경우 글자 단위로 쪼개지지 않게 감쌈
    if not value:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _meals_for_day(day_data: dict) -> list[tuple[str, str, dict]]:
    slots = [(key, label, day_data[key]) for key, label, _ in MEAL_SLOTS if isinstance(day_data.get(key), dict)]
    if slots:
        return slots
    return [(key, label, DEFAULT_MEALS[key]) for key, label, _ in MEAL_SLOTS if key in DEFAULT_MEALS]


def _convert_diet_day(day_name: str, day_data: dict, macros: dict, week: int) -> dict:
    slots = _meals_for_day(day_data)
    default_times = {key: time for key, _, time in MEAL_SLOTS}
    calories = [_number(meal.get("calories"), DEFAULT_MEALS.get(key, {}).get("calories", 0)) for key, _, meal in slots]
    total_calories = sum(calories)

    meals = []
    for (key, label, meal), meal_calories in zip(slots, calories):
        share = meal_calories / total_calories if total_calories else 1 / len(slots)
        foods = _as_list(meal.get("foods")) or DEFAULT_MEALS.get(key, {}).get("foods") or [label]
        meals.append({
            "name": f"{label}: {', '.join(str(food) for food in foods)}",
            "calories": meal_calories,
            "protein": f"{round(_number(macros.get('protein'), DEFAULT_MACROS['protein']) * share)}g",
            "carbs": f"{round(_number(macros.get('carbs'), DEFAULT_MACROS['carbs']) * share)}g",
            "fats": f"{round(_number(macros.get('fats'), DEFAULT_MACROS['fats']) * share)}g",
            "completed": False,
            "notes": f"{meal.get('time') or default_times[key]} - Week {week}",
        })

    return {
        "day": day_label(day_name, week),
        "totalCalories": total_calories,
        "meals": meals,
        "completed": False,
    }


def convert_diet_plan(response: dict, week: int) -> list[dict]:
    """요일별 응답이면 요일마다, 하루 템플릿이면 같은 템플릿을 7일에 적용합니다."""
    per_day = any(isinstance(response.get(day), dict) for day in WEEK_DAYS)
    top_macros = _as_dict(response.get("macros"))
    days = []
    for day_name in WEEK_DAYS:
        day_data = _as_dict(response.get(day_name)) if per_day else response
        macros = _as_dict(day_data.get("macros")) or top_macros
        days.append(_convert_diet_day(day_name, day_data, macros, week))
    return days


def convert_workout_plan(response: dict, week: int) -> list[dict]:
    days = []
    for day_name in WORKOUT_DAYS:
        day_data = _as_dict(response.get(day_name))
        exercises = [
            {
                "name": exercise.get("name") or "Exercise",
                "sets": exercise.get("sets") or 3,
                "reps": exercise.get("reps") or 12,
                "restTime": exercise.get("restTime") or "60 seconds",
                "equipment": exercise.get("equipment") or "None",
                "completed": False,
            }
            for exercise in _as_list(day_data.get("exercises"))
            if isinstance(exercise, dict)
        ]
        days.append({
            "day": day_label(day_name, week),
            "exercises": exercises,
            "duration": day_data.get("duration") or "",
            "warmup": _as_list(day_data.get("warmup")),
            "cooldown": _as_list(day_data.get("cooldown")),
            "completed": False,
        })
    return days


def convert_plan(plan_type: str, response: dict, week: int) -> list[dict]:
    if plan_type == "diet":
        return convert_diet_plan(response, week)
    return convert_workout_plan(response, week)


def items_key(plan_type: str) -> str:
    return "meals" if plan_type == "diet" else "exercises"


def set_item_completion(plan: list[dict], plan_type: str, day_index: int, item_index: int,
                        completed: bool | None = None) -> dict:
    """끼니/운동 하나의 완료 상태를 바꾸고 그 날의 completed 를 다시 계산합니다. 범위를 벗어나면 IndexError."""
    if not 0 <= day_index < len(plan):
        raise IndexError("day index out of range")
    day = plan[day_index]
    items = day.get(items_key(plan_type)) or []
    if not 0 <= item_index < len(items):
        raise IndexError("item index out of range")

    item = items[item_index]
    item["completed"] = (not item.get("completed", False)) if completed is None else completed
    day["completed"] = bool(items) and all(entry.get("completed") for entry in items)
    return day


def reset_completion(plan: list[dict], plan_type: str) -> list[dict]:
    key = items_key(plan_type)
    for day in plan:
        day["completed"] = False
        for item in day.get(key) or []:
            item["completed"] = False
    return plan
