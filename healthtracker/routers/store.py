# routers/store.py
import asyncio
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from ..core.config import CHECKOUT_DELAY_SECONDS
from ..crud import cart as cart_crud
from ..dependencies import get_current_user
from ..schemas.store import CartItem, CheckoutForm
from ..utils import clock
from ..utils.catalog import list_products, get_product, cart_totals

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store", tags=["store"])


def cart_response(items: list[int]) -> dict:
    products = [get_product(product_id) for product_id in items]
    return {
        "items": [product for product in products if product is not None],
        "product_ids": items,
        **cart_totals(items),
    }


@router.get("/products")
async def read_products(include_more: bool = False, category: str | None = None):
    return list_products(include_more, category)


@router.get("/cart")
async def read_cart(current_user: dict = Depends(get_current_user)):
    return cart_response(await cart_crud.get_cart(current_user["id"]))


@router.post("/cart")
async def add_to_cart(body: CartItem, current_user: dict = Depends(get_current_user)):
    if get_product(body.product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return cart_response(await cart_crud.add_item(current_user["id"], body.product_id))


@router.delete("/cart/{product_id}")
async def remove_from_cart(product_id: int, current_user: dict = Depends(get_current_user)):
    return cart_response(await cart_crud.remove_item(current_user["id"], product_id))


@router.delete("/cart")
async def clear_cart(current_user: dict = Depends(get_current_user)):
    await cart_crud.clear_cart(current_user["id"])
    return cart_response([])


async def process_payment(user_id: int):
    # 결제 처리 흉내. 대기 중에도 장바구니는 바뀔 수 있음
    await asyncio.sleep(CHECKOUT_DELAY_SECONDS)


@router.post("/checkout")
async def checkout(body: CheckoutForm, current_user: dict = Depends(get_current_user)):
    """결제 폼 검증 후 결제한 항목을 장바구니에서 빼고 영수증을 돌려줍니다. 실제 결제는 없음."""
    errors = body.validation_errors()
    if errors:
        return JSONResponse(status_code=400, content={"success": False, "message": "Validation failed", "errors": errors})

    items = await cart_crud.get_cart(current_user["id"])
    if not items:
        raise HTTPException(status_code=400, detail="Your cart is empty")

    await process_payment(current_user["id"])

    receipt = cart_response(items)
    await cart_crud.remove_charged(current_user["id"], items)
    order_id = uuid.uuid4().hex[:12].upper()
    logger.info("order %s placed by user %s (%d items)", order_id, current_user["id"], receipt["item_count"])
    return {
        "success": True,
        "message": "Payment successful",
        "order": {
            "order_id": order_id,
            "placed_at": clock.to_iso(clock.utcnow()),
            "items": receipt["items"],
            "total": receipt["total_price"],
            "shipping": {"street": body.street, "city": body.city, "state": body.state, "zip_code": body.zip_code},
            "email": body.email,
        },
    }
