# routers/notification.py
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException

from ..crud import notification as notification_crud
from ..dependencies import get_current_user
from ..schemas.notification import ReminderUpdate, TestNotification
from ..utils import clock

router = APIRouter(prefix="/notifications", tags=["notifications"])

DEFAULT_REMINDER_TIME = "18:00"


def next_reminder_at(time: str, now=None) -> str:
    """오늘 HH:MM (UTC). 이미 지났으면 내일 같은 시각."""
    now = now or clock.utcnow()
    hour, minute = (int(part) for part in time.split(":"))
    scheduled = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if scheduled <= now:
        scheduled += timedelta(days=1)
    return clock.to_iso(scheduled)


def reminder_response(reminder: dict | None) -> dict:
    reminder = reminder or {"enabled": False, "time": DEFAULT_REMINDER_TIME, "scheduled_at": None}
    return {
        "enabled": reminder["enabled"],
        "time": reminder["time"],
        "scheduled_at": reminder["scheduled_at"],
        "next_reminder_at": next_reminder_at(reminder["time"]) if reminder["enabled"] else None,
    }


@router.get("")
async def read_notifications(current_user: dict = Depends(get_current_user)):
    notifications = await notification_crud.list_notifications(current_user["id"])
    return {
        "notifications": notifications,
        "unread_count": sum(1 for notification in notifications if not notification["read"]),
    }


# /{notification_id} 보다 먼저 등록
@router.get("/reminder")
async def read_reminder(current_user: dict = Depends(get_current_user)):
    return reminder_response(await notification_crud.get_reminder(current_user["id"]))


@router.put("/reminder")
async def update_reminder(body: ReminderUpdate, current_user: dict = Depends(get_current_user)):
    await notification_crud.save_reminder(current_user["id"], body.enabled, body.time)
    return reminder_response(await notification_crud.get_reminder(current_user["id"]))


@router.post("/test")
async def send_test_notification(body: TestNotification | None = None,
                                 current_user: dict = Depends(get_current_user)):
    kind = body.type if body else "push"
    title = "Test email notification" if kind == "email" else "Test push notification"
    notification_id = await notification_crud.add_notification(
        current_user["id"], "test", title, f"This is a test {kind} notification from Smart Health Tracker.")
    return {"success": True, "message": f"Test {kind} notification sent", "id": notification_id}


@router.put("/{notification_id}/read")
async def mark_notification_read(notification_id: int, current_user: dict = Depends(get_current_user)):
    if not await notification_crud.mark_read(current_user["id"], notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True, "id": notification_id, "read": True}
