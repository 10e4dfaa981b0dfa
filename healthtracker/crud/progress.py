# crud/progress.py
import json

from ..database import database


async def get_cached(user_id: int, kind: str) -> dict | None:
    query = "SELECT period, data FROM progress_cache WHERE user_id = :user_id AND kind = :kind"
    row = await database.fetch_one(query=query, values={"user_id": user_id, "kind": kind})
    return {"period": row["period"], "data": json.loads(row["data"])} if row else None


async def save_cached(user_id: int, kind: str, period: str, data: dict):
    values = {"user_id": user_id, "kind": kind}
    await database.execute(query="DELETE FROM progress_cache WHERE user_id = :user_id AND kind = :kind", values=values)
    await database.execute(
        query="INSERT INTO progress_cache (user_id, kind, period, data) VALUES (:user_id, :kind, :period, :data)",
        values={**values, "period": period, "data": json.dumps(data)},
    )


async def clear_cached(user_id: int, kind: str | None = None):
    if kind is None:
        await database.execute(query="DELETE FROM progress_cache WHERE user_id = :user_id", values={"user_id": user_id})
        return
    await database.execute(
        query="DELETE FROM progress_cache WHERE user_id = :user_id AND kind = :kind",
        values={"user_id": user_id, "kind": kind},
    )
