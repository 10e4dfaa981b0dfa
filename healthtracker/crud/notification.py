# crud/notification.py
from ..database import database
from ..utils import clock

MAX_NOTIFICATIONS = 10


def _from_row(row) -> dict:
    return {
        "id": row["id"],
        "type": row["type"],
        "week": row["week"],
        "title": row["title"],
        "message": row["message"],
        "timestamp": row["timestamp"],
        "read": bool(row["is_read"]),
    }


async def add_notification(user_id: int, type: str, title: str, message: str, week: int | None = None) -> int:
    """알림을 추가하고 최신 10개만 남깁니다."""
    notification_id = await database.execute(
        query="""
            INSERT INTO notifications (user_id, type, week, title, message, timestamp, is_read)
            VALUES (:user_id, :type, :week, :title, :message, :timestamp, :is_read)
        """,
        values={
            "user_id": user_id,
            "type": type,
            "week": week,
            "title": title,
            "message": message,
            "timestamp": clock.to_iso(clock.utcnow()),
            "is_read": False,
        },
    )
    rows = await database.fetch_all(
        query="SELECT id FROM notifications WHERE user_id = :user_id ORDER BY id DESC",
        values={"user_id": user_id},
    )
    for row in rows[MAX_NOTIFICATIONS:]:
        await database.execute(query="DELETE FROM notifications WHERE id = :id", values={"id": row["id"]})
    return notification_id


async def list_notifications(user_id: int) -> list[dict]:
    rows = await database.fetch_all(
        query="SELECT * FROM notifications WHERE user_id = :user_id ORDER BY id DESC",
        values={"user_id": user_id},
    )
    return [_from_row(row) for row in rows]


async def mark_read(user_id: int, notification_id: int) -> bool:
    query = "SELECT id FROM notifications WHERE id = :id AND user_id = :user_id"
    if await database.fetch_one(query=query, values={"id": notification_id, "user_id": user_id}) is None:
        return False
    await database.execute(query="UPDATE notifications SET is_read = :is_read WHERE id = :id",
                           values={"id": notification_id, "is_read": True})
    return True


async def delete_notifications(user_id: int):
    await database.execute(query="DELETE FROM notifications WHERE user_id = :user_id", values={"user_id": user_id})


# --- workout reminder ---

async def get_reminder(user_id: int) -> dict | None:
    row = await database.fetch_one(
        query="SELECT enabled, time, scheduled_at FROM reminders WHERE user_id = :user_id",
        values={"user_id": user_id},
    )
    if row is None:
        return None
    return {"enabled": bool(row["enabled"]), "time": row["time"], "scheduled_at": row["scheduled_at"]}


async def save_reminder(user_id: int, enabled: bool, time: str):
    values = {"user_id": user_id}
    await database.execute(query="DELETE FROM reminders WHERE user_id = :user_id", values=values)
    await database.execute(
        query="INSERT INTO reminders (user_id, enabled, time, scheduled_at) VALUES (:user_id, :enabled, :time, :scheduled_at)",
        values={**values, "enabled": enabled, "time": time, "scheduled_at": clock.to_iso(clock.utcnow())},
    )
