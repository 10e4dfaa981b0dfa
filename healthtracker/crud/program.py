# crud/program.py
import json

from ..database import database


async def get_program(user_id: int) -> dict | None:
    row = await database.fetch_one(query="SELECT data FROM fitness_programs WHERE user_id = :user_id",
                                   values={"user_id": user_id})
    return json.loads(row["data"]) if row else None


async def save_program(user_id: int, program: dict):
    values = {"user_id": user_id}
    await database.execute(query="DELETE FROM fitness_programs WHERE user_id = :user_id", values=values)
    await database.execute(
        query="INSERT INTO fitness_programs (user_id, data) VALUES (:user_id, :data)",
        values={**values, "data": json.dumps(program)},
    )


async def delete_program(user_id: int):
    await database.execute(query="DELETE FROM fitness_programs WHERE user_id = :user_id", values={"user_id": user_id})
