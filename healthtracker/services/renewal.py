# services/renewal.py
"""주차별 플랜 자동 갱신.

식단은 7일, 운동은 6일마다 다음 주차 플랜을 생성합니다. 이전 플랜 보관, 새 플랜 저장,
진행률 캐시 초기화, 메타데이터 갱신은 하나의 트랜잭션으로 처리하고 메타데이터 갱신은
current_week 에 대한 compare-and-set 이라 같은 주차를 두 번 갱신하지 않습니다.
"""
import asyncio
import logging
import math
from datetime import date, timedelta

from ..core.config import DEFAULT_TOTAL_WEEKS
from ..crud import plan as plan_crud
from ..crud import progress as progress_crud
from ..crud import notification as notification_crud
from ..crud.user import get_user_by_id, profile_of
from ..database import database
from ..utils import clock
from . import plan_generation, prompts
from .plan_format import convert_plan, weekday_of

logger = logging.getLogger(__name__)

PLAN_TYPES = ("diet", "workout")
RENEWAL_DAYS = {"diet": 7, "workout": 6}
PROGRESSIVE_PROMPTS = {
    "diet": prompts.progressive_diet_prompt,
    "workout": prompts.progressive_workout_prompt,
}


class StaleRenewal(Exception):
    """다른 갱신이 먼저 주차를 올린 경우. 트랜잭션을 롤백시키는 용도."""


def next_renewal_date(plan_type: str, now) -> str:
    return clock.to_iso(now + timedelta(days=RENEWAL_DAYS[plan_type]))


async def initialize_plan_metadata(user_id: int, plan_type: str, total_weeks: int = DEFAULT_TOTAL_WEEKS) -> dict:
    now = clock.utcnow()
    metadata = {
        "plan_type": plan_type,
        "start_date": clock.to_iso(now),
        "current_week": 1,
        "renewal_date": next_renewal_date(plan_type, now),
        "total_weeks": total_weeks,
        "last_renewal_date": clock.to_iso(now),
    }
    await plan_crud.save_metadata(user_id, metadata)
    logger.info("initialized %s plan metadata for user %s (%d weeks)", plan_type, user_id, total_weeks)
    return metadata


def needs_renewal(metadata: dict, now=None) -> bool:
    now = now or clock.utcnow()
    return now >= clock.parse_iso(metadata["renewal_date"]) and metadata["current_week"] < metadata["total_weeks"]


async def renew_plan(user_id: int, profile: dict, plan_type: str, metadata: dict) -> bool:
    """한 타입의 플랜을 다음 주차로 갱신합니다. 실패는 로그만 남기고 False 를 반환합니다."""
    new_week = metadata["current_week"] + 1
    try:
        prompt = PROGRESSIVE_PROMPTS[plan_type](profile, new_week, metadata["total_weeks"])
        response = await plan_generation.generate(plan_type, prompt)
        new_plan = convert_plan(plan_type, response, new_week)

        now = clock.utcnow()
        now_iso = clock.to_iso(now)
        async with database.transaction():
            # 주차를 먼저 선점하고, 이미 누가 올렸으면 보관/저장 없이 롤백
            advanced = await plan_crud.advance_metadata(
                user_id, plan_type,
                expected_week=metadata["current_week"],
                new_week=new_week,
                renewal_date=next_renewal_date(plan_type, now),
                last_renewal_date=now_iso,
            )
            if not advanced:
                raise StaleRenewal()
            current_plan = await plan_crud.get_plan(user_id, plan_type)
            if current_plan is not None:
                await plan_crud.archive_plan(user_id, plan_type, metadata["current_week"], current_plan, metadata)
            await plan_crud.save_plan(user_id, plan_type, new_plan)
            await progress_crud.clear_cached(user_id, plan_type)
            await notification_crud.add_notification(
                user_id,
                type=plan_type,
                week=new_week,
                title=f"{plan_type.capitalize()} Plan Renewed!",
                message=f"🎉 Your {plan_type} plan has been automatically renewed for Week {new_week}! "
                        f"Check out your new progressive {plan_type} plan.",
            )
    except StaleRenewal:
        logger.info("%s plan for user %s was already renewed to week %d", plan_type, user_id, new_week)
        return False
    except Exception:
        logger.exception("Error renewing %s plan for user %s", plan_type, user_id)
        return False

    logger.info("renewed %s plan for user %s to week %d", plan_type, user_id, new_week)
    return True


async def check_and_renew_plans(user_id: int, profile: dict | None = None) -> list[str]:
    """갱신 시점이 지난 플랜을 갱신하고, 갱신된 타입 목록을 반환합니다."""
    if profile is None:
        user = await get_user_by_id(user_id)
        if user is None:
            return []
        profile = profile_of(user)

    renewed = []
    for plan_type in PLAN_TYPES:
        metadata = await plan_crud.get_metadata(user_id, plan_type)
        if metadata is None or not needs_renewal(metadata):
            continue
        if await renew_plan(user_id, profile, plan_type, metadata):
            renewed.append(plan_type)
    return renewed


async def get_current_week(user_id: int, plan_type: str) -> int:
    metadata = await plan_crud.get_metadata(user_id, plan_type)
    return metadata["current_week"] if metadata else 1


def _status(metadata: dict | None, now) -> dict | None:
    if metadata is None:
        return None
    renewal_date = clock.parse_iso(metadata["renewal_date"])
    return {
        "current_week": metadata["current_week"],
        "total_weeks": metadata["total_weeks"],
        "renewal_date": metadata["renewal_date"],
        "days_until_renewal": math.ceil((renewal_date - now).total_seconds() / clock.DAY_SECONDS),
        "needs_renewal": now >= renewal_date,
    }


async def get_renewal_status(user_id: int) -> dict:
    now = clock.utcnow()
    return {plan_type: _status(await plan_crud.get_metadata(user_id, plan_type), now) for plan_type in PLAN_TYPES}


def is_day_accessible(day_name: str, today: date | None = None) -> bool:
    """월요일부터 오늘까지의 요일만 열려 있습니다. 알 수 없는 요일은 잠김."""
    index = weekday_of(day_name)
    if index is None:
        return False
    today = today or clock.today()
    return index <= today.weekday()


async def renewal_poller(interval_seconds: float):
    """interval 마다 메타데이터가 있는 모든 사용자의 플랜 갱신을 확인합니다."""
    logger.info("plan renewal poller started (every %ss)", interval_seconds)
    while True:
        try:
            for user_id in await plan_crud.list_metadata_user_ids():
                await check_and_renew_plans(user_id)
        except Exception:
            logger.exception("plan renewal poll failed")
        await asyncio.sleep(interval_seconds)
