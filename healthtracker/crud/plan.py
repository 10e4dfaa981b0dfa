# crud/plan.py
import json
import uuid

from ..database import database
from ..utils import clock


async def get_plan(user_id: int, plan_type: str) -> list | None:
    query = "SELECT data FROM plans WHERE user_id = :user_id AND plan_type = :plan_type"
    row = await database.fetch_one(query=query, values={"user_id": user_id, "plan_type": plan_type})
    return json.loads(row["data"]) if row else None


async def save_plan(user_id: int, plan_type: str, plan: list):
    values = {
        "user_id": user_id,
        "plan_type": plan_type,
        "data": json.dumps(plan),
        "updated_at": clock.to_iso(clock.utcnow()),
    }
    exists_query = "SELECT id FROM plans WHERE user_id = :user_id AND plan_type = :plan_type"
    existing = await database.fetch_one(query=exists_query, values={"user_id": user_id, "plan_type": plan_type})
    if existing:
        query = "UPDATE plans SET data = :data, updated_at = :updated_at WHERE user_id = :user_id AND plan_type = :plan_type"
    else:
        query = """
            INSERT INTO plans (user_id, plan_type, data, updated_at)
            VALUES (:user_id, :plan_type, :data, :updated_at)
        """
    await database.execute(query=query, values=values)


async def delete_plan(user_id: int, plan_type: str):
    query = "DELETE FROM plans WHERE user_id = :user_id AND plan_type = :plan_type"
    await database.execute(query=query, values={"user_id": user_id, "plan_type": plan_type})


# --- plan metadata ---

def _metadata_from_row(row) -> dict | None:
    if row is None:
        return None
    return {
        "plan_type": row["plan_type"],
        "start_date": row["start_date"],
        "current_week": row["current_week"],
        "renewal_date": row["renewal_date"],
        "total_weeks": row["total_weeks"],
        "last_renewal_date": row["last_renewal_date"],
    }


async def get_metadata(user_id: int, plan_type: str) -> dict | None:
    query = """
        SELECT plan_type, start_date, current_week, renewal_date, total_weeks, last_renewal_date
        FROM plan_metadata WHERE user_id = :user_id AND plan_type = :plan_type
    """
    row = await database.fetch_one(query=query, values={"user_id": user_id, "plan_type": plan_type})
    return _metadata_from_row(row)


async def save_metadata(user_id: int, metadata: dict):
    """해당 타입의 메타데이터를 통째로 덮어씁니다."""
    async with database.transaction():
        await database.execute(
            query="DELETE FROM plan_metadata WHERE user_id = :user_id AND plan_type = :plan_type",
            values={"user_id": user_id, "plan_type": metadata["plan_type"]},
        )
        await database.execute(
            query="""
                INSERT INTO plan_metadata (user_id, plan_type, start_date, current_week, renewal_date, total_weeks, last_renewal_date)
                VALUES (:user_id, :plan_type, :start_date, :current_week, :renewal_date, :total_weeks, :last_renewal_date)
            """,
            values={"user_id": user_id, **metadata},
        )


async def advance_metadata(user_id: int, plan_type: str, expected_week: int, new_week: int,
                           renewal_date: str, last_renewal_date: str) -> bool:
    """current_week 가 expected_week 일 때만 다음 주차로 넘깁니다 (compare-and-set)."""
    token = uuid.uuid4().hex
    await database.execute(
        query="""
            UPDATE plan_metadata
            SET current_week = :new_week, renewal_date = :renewal_date, last_renewal_date = :last_renewal_date,
                renewal_token = :token
            WHERE user_id = :user_id AND plan_type = :plan_type AND current_week = :expected_week
        """,
        values={
            "user_id": user_id,
            "plan_type": plan_type,
            "expected_week": expected_week,
            "new_week": new_week,
            "renewal_date": renewal_date,
            "last_renewal_date": last_renewal_date,
            "token": token,
        },
    )
    # execute() 가 영향받은 행 수를 돌려주지 않으므로 이번 호출의 토큰이 남았는지 다시 읽어서 확인
    row = await database.fetch_one(
        query="SELECT renewal_token FROM plan_metadata WHERE user_id = :user_id AND plan_type = :plan_type",
        values={"user_id": user_id, "plan_type": plan_type},
    )
    return row is not None and row["renewal_token"] == token


async def list_metadata_user_ids() -> list[int]:
    rows = await database.fetch_all(query="SELECT DISTINCT user_id FROM plan_metadata")
    return [row["user_id"] for row in rows]


# --- plan archives ---

async def archive_plan(user_id: int, plan_type: str, week: int, plan: list, metadata: dict):
    values = {"user_id": user_id, "plan_type": plan_type, "week": week}
    await database.execute(
        query="DELETE FROM plan_archives WHERE user_id = :user_id AND plan_type = :plan_type AND week = :week",
        values=values,
    )
    await database.execute(
        query="""
            INSERT INTO plan_archives (user_id, plan_type, week, plan, meta, completed_date)
            VALUES (:user_id, :plan_type, :week, :plan, :meta, :completed_date)
        """,
        values={
            **values,
            "plan": json.dumps(plan),
            "meta": json.dumps(metadata),
            "completed_date": clock.to_iso(clock.utcnow()),
        },
    )


def _archive_from_row(row) -> dict:
    return {
        "plan_type": row["plan_type"],
        "week": row["week"],
        "plan": json.loads(row["plan"]),
        "metadata": json.loads(row["meta"]),
        "completed_date": row["completed_date"],
    }


async def list_archives(user_id: int, plan_type: str | None = None) -> list[dict]:
    query = "SELECT plan_type, week, plan, meta, completed_date FROM plan_archives WHERE user_id = :user_id"
    values = {"user_id": user_id}
    if plan_type:
        query += " AND plan_type = :plan_type"
        values["plan_type"] = plan_type
    query += " ORDER BY plan_type, week"
    rows = await database.fetch_all(query=query, values=values)
    return [_archive_from_row(row) for row in rows]


async def get_archive(user_id: int, plan_type: str, week: int) -> dict | None:
    query = """
        SELECT plan_type, week, plan, meta, completed_date FROM plan_archives
        WHERE user_id = :user_id AND plan_type = :plan_type AND week = :week
    """
    row = await database.fetch_one(query=query, values={"user_id": user_id, "plan_type": plan_type, "week": week})
    return _archive_from_row(row) if row else None


async def delete_all_plan_data(user_id: int):
    for table in ("plans", "plan_metadata", "plan_archives"):
        await database.execute(query=f"DELETE FROM {table} WHERE user_id = :user_id", values={"user_id": user_id})
