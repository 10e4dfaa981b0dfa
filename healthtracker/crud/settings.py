# crud/settings.py
import json

from ..database import database
from ..schemas.settings import UserSettings


async def get_settings(user_id: int) -> dict:
    """저장된 값이 없으면 기본값. 저장된 값은 기본값 위에 덮어씁니다."""
    row = await database.fetch_one(query="SELECT data FROM user_settings WHERE user_id = :user_id",
                                   values={"user_id": user_id})
    defaults = UserSettings().model_dump()
    if row is None:
        return defaults
    stored = json.loads(row["data"])
    return {group: {**values, **stored.get(group, {})} for group, values in defaults.items()}


async def save_settings(user_id: int, settings: dict):
    values = {"user_id": user_id}
    await database.execute(query="DELETE FROM user_settings WHERE user_id = :user_id", values=values)
    await database.execute(
        query="INSERT INTO user_settings (user_id, data) VALUES (:user_id, :data)",
        values={**values, "data": json.dumps(settings)},
    )


async def data_size_bytes(user_id: int) -> int:
    """사용자 데이터(JSON 컬럼) 의 대략적인 크기."""
    total = 0
    queries = (
        "SELECT data AS payload FROM plans WHERE user_id = :user_id",
        "SELECT plan AS payload FROM plan_archives WHERE user_id = :user_id",
        "SELECT data AS payload FROM progress_cache WHERE user_id = :user_id",
        "SELECT items AS payload FROM carts WHERE user_id = :user_id",
        "SELECT data AS payload FROM user_settings WHERE user_id = :user_id",
        "SELECT data AS payload FROM fitness_programs WHERE user_id = :user_id",
        "SELECT message AS payload FROM notifications WHERE user_id = :user_id",
    )
    for query in queries:
        for row in await database.fetch_all(query=query, values={"user_id": user_id}):
            total += len((row["payload"] or "").encode("utf-8"))
    return total
