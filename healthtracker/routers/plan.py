# routers/plan.py
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import DEFAULT_TOTAL_WEEKS
from ..core.errors import PlanGenerationError
from ..crud import plan as plan_crud
from ..crud.user import profile_of, is_profile_complete
from ..dependencies import get_current_user
from ..schemas.plan import PlanType, PlanGenerateRequest, CompletionToggle
from ..services import plan_generation, prompts, renewal
from ..services.plan_format import convert_plan, set_item_completion, reset_completion
from ..services.progress import weekly_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"])

INITIAL_PROMPTS = {
    "diet": prompts.initial_diet_prompt,
    "workout": prompts.initial_workout_prompt,
}


def with_access(plan: list) -> list:
    return [{**day, "accessible": renewal.is_day_accessible(day.get("day", ""))} for day in plan]


@router.get("/renewal/status")
async def read_renewal_status(current_user: dict = Depends(get_current_user)):
    return await renewal.get_renewal_status(current_user["id"])


@router.post("/renewal/check")
async def run_renewal_check(current_user: dict = Depends(get_current_user)):
    renewed = await renewal.check_and_renew_plans(current_user["id"], profile_of(current_user))
    return {"renewed": renewed, "status": await renewal.get_renewal_status(current_user["id"])}


@router.get("/{plan_type}")
async def read_plan(plan_type: PlanType, current_user: dict = Depends(get_current_user)):
    """플랜을 읽기 전에 갱신 시점이 지났는지 먼저 확인합니다."""
    user_id = current_user["id"]
    await renewal.check_and_renew_plans(user_id, profile_of(current_user))
    plan = await plan_crud.get_plan(user_id, plan_type)
    return {
        "plan_type": plan_type,
        "plan": with_access(plan) if plan is not None else None,
        "metadata": await plan_crud.get_metadata(user_id, plan_type),
        "stats": weekly_stats(plan_type, plan),
    }


@router.post("/{plan_type}/generate")
async def generate_plan(plan_type: PlanType, body: PlanGenerateRequest | None = None,
                        current_user: dict = Depends(get_current_user)):
    profile = profile_of(current_user)
    if not is_profile_complete(profile):
        raise HTTPException(status_code=400, detail="Please complete your profile before generating a plan.")

    total_weeks = body.total_weeks if body else DEFAULT_TOTAL_WEEKS
    prompt = INITIAL_PROMPTS[plan_type](profile, total_weeks)
    try:
        response = await plan_generation.generate(plan_type, prompt)
    except PlanGenerationError as e:
        logger.error("%s plan generation failed for user %s: %s", plan_type, current_user["id"], e.message)
        raise HTTPException(status_code=502, detail=e.message)

    plan = convert_plan(plan_type, response, 1)
    await plan_crud.save_plan(current_user["id"], plan_type, plan)
    metadata = await renewal.initialize_plan_metadata(current_user["id"], plan_type, total_weeks)
    return {"plan_type": plan_type, "plan": with_access(plan), "metadata": metadata}


@router.put("/{plan_type}/days/{day_index}/items/{item_index}")
async def toggle_item(plan_type: PlanType, day_index: int, item_index: int,
                      body: CompletionToggle | None = None,
                      current_user: dict = Depends(get_current_user)):
    plan = await plan_crud.get_plan(current_user["id"], plan_type)
    if plan is None:
        raise HTTPException(status_code=404, detail=f"No {plan_type} plan found.")
    if 0 <= day_index < len(plan) and not renewal.is_day_accessible(plan[day_index].get("day", "")):
        raise HTTPException(status_code=403, detail="This day is locked until it arrives.")

    try:
        day = set_item_completion(plan, plan_type, day_index, item_index, body.completed if body else None)
    except IndexError:
        raise HTTPException(status_code=404, detail="Plan day or item not found.")

    await plan_crud.save_plan(current_user["id"], plan_type, plan)
    return {"day": day, "stats": weekly_stats(plan_type, plan)}


@router.post("/{plan_type}/reset")
async def reset_plan_progress(plan_type: PlanType, current_user: dict = Depends(get_current_user)):
    plan = await plan_crud.get_plan(current_user["id"], plan_type)
    if plan is None:
        raise HTTPException(status_code=404, detail=f"No {plan_type} plan found.")
    plan = reset_completion(plan, plan_type)
    await plan_crud.save_plan(current_user["id"], plan_type, plan)
    return {"plan": with_access(plan), "stats": weekly_stats(plan_type, plan)}


@router.delete("/{plan_type}")
async def clear_plan(plan_type: PlanType, current_user: dict = Depends(get_current_user)):
    # 메타데이터와 보관본은 남겨 둠
    await plan_crud.delete_plan(current_user["id"], plan_type)
    return {"message": f"{plan_type.capitalize()} plan cleared."}


@router.get("/{plan_type}/archives")
async def read_archives(plan_type: PlanType, current_user: dict = Depends(get_current_user)):
    return await plan_crud.list_archives(current_user["id"], plan_type)


@router.get("/{plan_type}/archives/{week}")
async def read_archive(plan_type: PlanType, week: int, current_user: dict = Depends(get_current_user)):
    archive = await plan_crud.get_archive(current_user["id"], plan_type, week)
    if archive is None:
        raise HTTPException(status_code=404, detail=f"No archived {plan_type} plan for week {week}.")
    return archive
