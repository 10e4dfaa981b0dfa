# routers/settings.py
import logging
import math
import os

from fastapi import APIRouter, Depends, HTTPException

from ..crud import cart as cart_crud
from ..crud import notification as notification_crud
from ..crud import plan as plan_crud
from ..crud import post as post_crud
from ..crud import program as program_crud
from ..crud import progress as progress_crud
from ..crud import settings as settings_crud
from ..crud import user as user_crud
from ..dependencies import get_current_user
from ..schemas.user import DeleteAccount
from ..schemas.settings import UserSettingsUpdate
from ..services.progress import is_day_complete
from ..utils import clock
from ..utils.security import verify_password
from .post import image_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def count_completed_workouts(plans: list[list]) -> int:
    return sum(1 for plan in plans for day in plan if is_day_complete(day, "exercises"))


@router.get("")
async def read_settings(current_user: dict = Depends(get_current_user)):
    return await settings_crud.get_settings(current_user["id"])


@router.put("")
async def update_settings(body: UserSettingsUpdate, current_user: dict = Depends(get_current_user)):
    settings = await settings_crud.get_settings(current_user["id"])
    for group, values in body.model_dump(exclude_none=True).items():
        settings[group] = values
    await settings_crud.save_settings(current_user["id"], settings)
    return settings


@router.get("/export")
async def export_data(current_user: dict = Depends(get_current_user)):
    """사용자 데이터를 한 번에 내보냅니다."""
    user_id = current_user["id"]
    return {
        "exported_at": clock.to_iso(clock.utcnow()),
        "user": user_crud.to_public(current_user),
        "plans": {plan_type: await plan_crud.get_plan(user_id, plan_type) for plan_type in ("diet", "workout")},
        "metadata": {plan_type: await plan_crud.get_metadata(user_id, plan_type) for plan_type in ("diet", "workout")},
        "archives": await plan_crud.list_archives(user_id),
        "progress": {kind: await progress_crud.get_cached(user_id, kind) for kind in ("diet", "workout")},
        "cart": await cart_crud.get_cart(user_id),
        "settings": await settings_crud.get_settings(user_id),
        "notifications": await notification_crud.list_notifications(user_id),
        "program": await program_crud.get_program(user_id),
    }


@router.delete("/user-data")
async def clear_user_data(current_user: dict = Depends(get_current_user)):
    # 계정, 설정, 게시글은 유지
    user_id = current_user["id"]
    await plan_crud.delete_all_plan_data(user_id)
    await progress_crud.clear_cached(user_id)
    await cart_crud.clear_cart(user_id)
    await notification_crud.delete_notifications(user_id)
    await program_crud.delete_program(user_id)
    logger.info("cleared plan and progress data for user %s", user_id)
    return {"success": True, "message": "All user data cleared successfully"}


@router.get("/account-stats")
async def account_stats(current_user: dict = Depends(get_current_user)):
    user_id = current_user["id"]
    plans = [archive["plan"] for archive in await plan_crud.list_archives(user_id, "workout")]
    current_plan = await plan_crud.get_plan(user_id, "workout")
    if current_plan:
        plans.append(current_plan)

    joined = clock.parse_iso(current_user["created_at"])
    days_active = max(1, math.ceil((clock.utcnow() - joined).total_seconds() / clock.DAY_SECONDS))
    return {
        "join_date": current_user["created_at"],
        "last_login": current_user.get("last_login"),
        "workouts_completed": count_completed_workouts(plans),
        "days_active": days_active,
        "data_size_bytes": await settings_crud.data_size_bytes(user_id),
    }


@router.delete("/account")
async def delete_account(body: DeleteAccount, current_user: dict = Depends(get_current_user)):
    if not verify_password(body.password, current_user["hashed_password"]):
        raise HTTPException(status_code=401, detail="Password is incorrect")

    user_id = current_user["id"]
    image_urls = await post_crud.list_user_image_urls(user_id)
    await user_crud.delete_user(user_id)
    for image_url in image_urls:
        path = image_path(image_url)
        if os.path.exists(path):
            os.remove(path)
    logger.info("deleted account %s", user_id)
    return {"success": True, "message": "Account deleted successfully"}
