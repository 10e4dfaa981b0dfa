# crud/cart.py
import json

from ..database import database


async def get_cart(user_id: int) -> list[int]:
    row = await database.fetch_one(query="SELECT items FROM carts WHERE user_id = :user_id", values={"user_id": user_id})
    return json.loads(row["items"]) if row else []


async def save_cart(user_id: int, items: list[int]):
    values = {"user_id": user_id}
    await database.execute(query="DELETE FROM carts WHERE user_id = :user_id", values=values)
    await database.execute(
        query="INSERT INTO carts (user_id, items) VALUES (:user_id, :items)",
        values={**values, "items": json.dumps(items)},
    )


async def add_item(user_id: int, product_id: int) -> list[int]:
    items = await get_cart(user_id)
    items.append(product_id)
    await save_cart(user_id, items)
    return items


async def remove_item(user_id: int, product_id: int) -> list[int]:
    # 같은 id 는 모두 제거. 없으면 그대로
    items = [item for item in await get_cart(user_id) if item != product_id]
    await save_cart(user_id, items)
    return items


async def clear_cart(user_id: int):
    await database.execute(query="DELETE FROM carts WHERE user_id = :user_id", values={"user_id": user_id})


async def remove_charged(user_id: int, charged: list[int]) -> list[int]:
    """결제된 항목만 한 개씩 빼고, 결제 중에 담긴 항목은 남깁니다."""
    async with database.transaction():
        remaining = await get_cart(user_id)
        for product_id in charged:
            if product_id in remaining:
                remaining.remove(product_id)
        if remaining:
            await save_cart(user_id, remaining)
        else:
            await clear_cart(user_id)
    return remaining
