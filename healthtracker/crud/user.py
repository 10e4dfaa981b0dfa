# crud/user.py
import json
from datetime import timedelta

from ..database import database
from ..core.config import MAX_LOGIN_ATTEMPTS, LOCKOUT_MINUTES, PASSWORD_RESET_EXPIRE_MINUTES
from ..utils import clock
from ..utils.body_metrics import bmi_summary

PROFILE_FIELDS = ("age", "gender", "height", "weight", "health_conditions", "fitness_goal", "profile_image")


def row_to_dict(row) -> dict | None:
    return dict(row._mapping) if row is not None else None


def to_public(user: dict) -> dict:
    """비밀번호/리셋 토큰을 제외하고 프로필과 BMI 를 붙여서 반환합니다."""
    conditions = user.get("health_conditions")
    profile = {
        "age": user.get("age"),
        "gender": user.get("gender"),
        "height": user.get("height"),
        "weight": user.get("weight"),
        "health_conditions": json.loads(conditions) if conditions else [],
        "fitness_goal": user.get("fitness_goal"),
        "profile_image": user.get("profile_image"),
    }
    return {
        "id": user["id"],
        "username": user["username"],
        "email": user["email"],
        "role": user["role"],
        "is_active": bool(user["is_active"]),
        "created_at": user["created_at"],
        "last_login": user.get("last_login"),
        "profile": profile,
        "bmi": bmi_summary(user.get("weight"), user.get("height")),
    }


def profile_of(user: dict) -> dict:
    return to_public(user)["profile"]


def is_profile_complete(profile: dict) -> bool:
    return all(profile.get(field) for field in ("age", "gender", "height", "weight", "fitness_goal"))


async def get_user_by_id(user_id: int) -> dict | None:
    query = "SELECT * FROM users WHERE id = :id"
    return row_to_dict(await database.fetch_one(query=query, values={"id": user_id}))


async def get_user_by_email(email: str) -> dict | None:
    query = "SELECT * FROM users WHERE email = :email"
    return row_to_dict(await database.fetch_one(query=query, values={"email": email}))


async def find_conflict(username: str | None, email: str | None, exclude_id: int | None = None) -> str | None:
    """이미 사용 중인 필드 이름('username' / 'email')을 반환합니다."""
    checks = (("username", username), ("email", email))
    for field, value in checks:
        if value is None:
            continue
        query = f"SELECT id FROM users WHERE {field} = :value"
        row = await database.fetch_one(query=query, values={"value": value})
        if row is not None and row["id"] != exclude_id:
            return field
    return None


async def create_user(username: str, email: str, hashed_password: str) -> int:
    insert_query = """
        INSERT INTO users (username, email, hashed_password, role, is_active, created_at, login_attempts)
        VALUES (:username, :email, :hashed_password, 'user', :is_active, :created_at, 0)
    """
    return await database.execute(query=insert_query, values={
        "username": username,
        "email": email,
        "hashed_password": hashed_password,
        "is_active": True,
        "created_at": clock.to_iso(clock.utcnow()),
    })


def is_locked(user: dict) -> bool:
    lock_until = user.get("lock_until")
    return bool(lock_until) and clock.parse_iso(lock_until) > clock.utcnow()


async def record_failed_login(user: dict):
    now = clock.utcnow()
    lock_until = user.get("lock_until")

    # 만료된 잠금이 있으면 1회부터 다시 셈
    if lock_until and clock.parse_iso(lock_until) < now:
        query = "UPDATE users SET login_attempts = 1, lock_until = NULL WHERE id = :id"
        await database.execute(query=query, values={"id": user["id"]})
        return

    attempts = (user.get("login_attempts") or 0) + 1
    new_lock = None
    if attempts >= MAX_LOGIN_ATTEMPTS and not is_locked(user):
        new_lock = clock.to_iso(now + timedelta(minutes=LOCKOUT_MINUTES))

    query = "UPDATE users SET login_attempts = :attempts, lock_until = COALESCE(:lock_until, lock_until) WHERE id = :id"
    await database.execute(query=query, values={"id": user["id"], "attempts": attempts, "lock_until": new_lock})


async def record_successful_login(user_id: int):
    query = "UPDATE users SET login_attempts = 0, lock_until = NULL, last_login = :now WHERE id = :id"
    await database.execute(query=query, values={"id": user_id, "now": clock.to_iso(clock.utcnow())})


async def update_details(user_id: int, username: str | None, email: str | None):
    fields = {key: value for key, value in (("username", username), ("email", email)) if value is not None}
    if not fields:
        return
    assignments = ", ".join(f"{key} = :{key}" for key in fields)
    await database.execute(query=f"UPDATE users SET {assignments} WHERE id = :id", values={"id": user_id, **fields})


async def update_profile(user_id: int, profile_data: dict):
    fields = {key: value for key, value in profile_data.items() if key in PROFILE_FIELDS}
    if not fields:
        return
    if "health_conditions" in fields:
        fields["health_conditions"] = json.dumps(fields["health_conditions"])
    assignments = ", ".join(f"{key} = :{key}" for key in fields)
    await database.execute(query=f"UPDATE users SET {assignments} WHERE id = :id", values={"id": user_id, **fields})


async def update_password(user_id: int, hashed_password: str):
    query = "UPDATE users SET hashed_password = :hashed_password WHERE id = :id"
    await database.execute(query=query, values={"id": user_id, "hashed_password": hashed_password})


async def set_reset_token(user_id: int, hashed_token: str):
    expires = clock.utcnow() + timedelta(minutes=PASSWORD_RESET_EXPIRE_MINUTES)
    query = "UPDATE users SET password_reset_token = :token, password_reset_expires = :expires WHERE id = :id"
    await database.execute(query=query, values={"id": user_id, "token": hashed_token, "expires": clock.to_iso(expires)})


async def get_user_by_reset_token(hashed_token: str) -> dict | None:
    query = "SELECT * FROM users WHERE password_reset_token = :token"
    user = row_to_dict(await database.fetch_one(query=query, values={"token": hashed_token}))
    if user is None or not user.get("password_reset_expires"):
        return None
    if clock.parse_iso(user["password_reset_expires"]) <= clock.utcnow():
        return None
    return user


async def reset_password(user_id: int, hashed_password: str):
    query = """
        UPDATE users
        SET hashed_password = :hashed_password, password_reset_token = NULL, password_reset_expires = NULL,
            login_attempts = 0, lock_until = NULL
        WHERE id = :id
    """
    await database.execute(query=query, values={"id": user_id, "hashed_password": hashed_password})


async def delete_user(user_id: int):
    # 외래키 순서대로 자식 테이블부터 삭제
    async with database.transaction():
        post_rows = await database.fetch_all(query="SELECT id FROM posts WHERE user_id = :id", values={"id": user_id})
        for row in post_rows:
            await database.execute(query="DELETE FROM post_likes WHERE post_id = :post_id", values={"post_id": row["id"]})
            await database.execute(query="DELETE FROM post_comments WHERE post_id = :post_id", values={"post_id": row["id"]})
        for table in ("post_likes", "post_comments", "posts", "plans", "plan_metadata", "plan_archives",
                      "progress_cache", "carts", "user_settings", "notifications", "reminders", "fitness_programs"):
            await database.execute(query=f"DELETE FROM {table} WHERE user_id = :id", values={"id": user_id})
        await database.execute(query="DELETE FROM users WHERE id = :id", values={"id": user_id})
