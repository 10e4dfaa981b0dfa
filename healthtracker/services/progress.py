# services/progress.py
import re
from datetime import date, timedelta

from ..crud import plan as plan_crud
from ..crud import progress as progress_crud
from ..crud.user import to_public
from ..utils import clock
from .plan_format import weekday_of
from .renewal import get_renewal_status

DEFAULT_TARGET_CALORIES = 2000

_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")


def parse_grams(value) -> float:
    """'30g' 같은 문자열이나 숫자를 float 으로. 숫자가 없으면 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_RE.search(str(value or ""))
    return float(match.group()) if match else 0


def _percentage(done: int, total: int) -> int:
    return round(done / total * 100) if total else 0


def is_day_complete(day: dict, items_key: str) -> bool:
    items = day.get(items_key) or []
    return bool(items) and all(item.get("completed") for item in items)


def diet_progress(plan: list | None, today: date) -> dict:
    day = next((d for d in plan or [] if weekday_of(d.get("day", "")) == today.weekday()), None)
    meals = (day or {}).get("meals") or []
    completed = [meal for meal in meals if meal.get("completed")]
    return {
        "date": today.isoformat(),
        "day": day["day"] if day else None,
        "completed_meals": len(completed),
        "total_meals": len(meals),
        "calories_consumed": sum(parse_grams(meal.get("calories")) for meal in completed),
        "protein_consumed": sum(parse_grams(meal.get("protein")) for meal in completed),
        "carbs_consumed": sum(parse_grams(meal.get("carbs")) for meal in completed),
        "fats_consumed": sum(parse_grams(meal.get("fats")) for meal in completed),
        "target_calories": parse_grams(day.get("totalCalories")) if day else DEFAULT_TARGET_CALORIES,
        "percentage": _percentage(len(completed), len(meals)),
    }


def workout_progress(plan: list | None, week_start: date) -> dict:
    days = []
    for day in plan or []:
        exercises = day.get("exercises") or []
        days.append({
            "day": day.get("day"),
            "completed_exercises": sum(1 for exercise in exercises if exercise.get("completed")),
            "total_exercises": len(exercises),
            "completed": is_day_complete(day, "exercises"),
        })
    completed_workouts = sum(1 for day in days if day["completed"])
    return {
        "week_start": week_start.isoformat(),
        "days": days,
        "completed_workouts": completed_workouts,
        "total_workouts": len(days),
        "completed_exercises": sum(day["completed_exercises"] for day in days),
        "total_exercises": sum(day["total_exercises"] for day in days),
        "percentage": _percentage(completed_workouts, len(days)),
    }


def weekly_stats(plan_type: str, plan: list | None) -> dict:
    plan = plan or []
    items_key = "meals" if plan_type == "diet" else "exercises"
    completed_days = sum(1 for day in plan if is_day_complete(day, items_key))
    stats = {
        "total_days": len(plan),
        "completed_days": completed_days,
        "completion_rate": _percentage(completed_days, len(plan)),
    }
    if plan_type == "diet":
        total_calories = sum(parse_grams(day.get("totalCalories")) for day in plan)
        stats["average_calories"] = round(total_calories / len(plan)) if plan else 0
    return stats


def week_start_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


async def get_diet_progress(user_id: int) -> dict:
    today = clock.today()
    progress = diet_progress(await plan_crud.get_plan(user_id, "diet"), today)
    await progress_crud.save_cached(user_id, "diet", today.isoformat(), progress)
    return progress


async def get_workout_progress(user_id: int) -> dict:
    week_start = week_start_of(clock.today())
    progress = workout_progress(await plan_crud.get_plan(user_id, "workout"), week_start)
    await progress_crud.save_cached(user_id, "workout", week_start.isoformat(), progress)
    return progress


async def dashboard_summary(user: dict) -> dict:
    user_id = user["id"]
    diet = await get_diet_progress(user_id)
    workout = await get_workout_progress(user_id)
    return {
        "bmi": to_public(user)["bmi"],
        "diet_percentage": diet["percentage"],
        "workout_percentage": workout["percentage"],
        "diet": diet,
        "workout": workout,
        "renewal": await get_renewal_status(user_id),
    }
