# routers/progress.py
import logging

from fastapi import APIRouter, Depends

from ..core.config import DEFAULT_TOTAL_WEEKS
from ..core.errors import PlanGenerationError
from ..crud import plan as plan_crud
from ..crud.user import profile_of
from ..dependencies import get_current_user
from ..services import plan_generation, prompts, renewal
from ..services import progress as progress_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])

RECOMMENDATION_ICONS = {
    "motivation": "💪",
    "warning": "⚠️",
    "suggestion": "💡",
    "achievement": "🏆",
}


@router.get("/diet")
async def read_diet_progress(current_user: dict = Depends(get_current_user)):
    return await progress_service.get_diet_progress(current_user["id"])


@router.get("/workout")
async def read_workout_progress(current_user: dict = Depends(get_current_user)):
    return await progress_service.get_workout_progress(current_user["id"])


@router.get("/stats")
async def read_weekly_stats(current_user: dict = Depends(get_current_user)):
    user_id = current_user["id"]
    return {
        plan_type: progress_service.weekly_stats(plan_type, await plan_crud.get_plan(user_id, plan_type))
        for plan_type in ("diet", "workout")
    }


@router.get("/dashboard")
async def read_dashboard(current_user: dict = Depends(get_current_user)):
    return await progress_service.dashboard_summary(current_user)


@router.get("/recommendations")
async def read_recommendations(current_user: dict = Depends(get_current_user)):
    """진행률을 바탕으로 AI 추천을 받고, 실패하면 기본 추천을 돌려줍니다."""
    user_id = current_user["id"]
    diet = await progress_service.get_diet_progress(user_id)
    workout = await progress_service.get_workout_progress(user_id)
    metadata = await plan_crud.get_metadata(user_id, "diet") or await plan_crud.get_metadata(user_id, "workout")
    current_week = await renewal.get_current_week(user_id, metadata["plan_type"] if metadata else "diet")
    total_weeks = metadata["total_weeks"] if metadata else DEFAULT_TOTAL_WEEKS

    prompt = prompts.recommendations_prompt(profile_of(current_user), current_week, total_weeks,
                                            diet["percentage"], workout["percentage"])
    source = "ai"
    try:
        recommendations = (await plan_generation.generate_recommendations(prompt))["recommendations"]
    except PlanGenerationError as e:
        logger.warning("falling back to default recommendations for user %s: %s", user_id, e.message)
        recommendations = prompts.default_recommendations(current_week, diet["percentage"], workout["percentage"])
        source = "default"

    return {
        "source": source,
        "overall": prompts.overall_rating(diet["percentage"], workout["percentage"]),
        "recommendations": [
            {**rec, "icon": RECOMMENDATION_ICONS.get(rec.get("type"), "💡")}
            for rec in recommendations if isinstance(rec, dict)
        ],
    }
