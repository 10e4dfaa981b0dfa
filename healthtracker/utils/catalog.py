# utils/catalog.py
# 스토어 상품 목록 (정적). 처음 12개가 기본 노출, 나머지는 "더 보기"

PRODUCTS = [
    {"id": 1, "name": "Organic Eggs", "price": 5.99, "calories": 70, "protein": 6, "image": "🥚", "category": "Protein"},
    {"id": 2, "name": "Greek Yogurt", "price": 4.99, "calories": 120, "protein": 15, "image": "🥛", "category": "Dairy"},
    {"id": 3, "name": "Quinoa", "price": 7.99, "calories": 120, "protein": 4, "image": "🌾", "category": "Grains"},
    {"id": 4, "name": "Almonds", "price": 8.99, "calories": 160, "protein": 6, "image": "🥜", "category": "Nuts"},
    {"id": 5, "name": "Chicken Breast", "price": 12.99, "calories": 165, "protein": 31, "image": "🍗", "category": "Protein"},
    {"id": 6, "name": "Avocado", "price": 2.99, "calories": 160, "protein": 2, "image": "🥑", "category": "Fruits"},
    {"id": 7, "name": "Salmon Fillet", "price": 15.99, "calories": 208, "protein": 22, "image": "🐟", "category": "Protein"},
    {"id": 8, "name": "Sweet Potato", "price": 1.99, "calories": 103, "protein": 2, "image": "🍠", "category": "Vegetables"},
    {"id": 9, "name": "Blueberries", "price": 6.99, "calories": 84, "protein": 1, "image": "🫐", "category": "Fruits"},
    {"id": 10, "name": "Spinach", "price": 3.49, "calories": 23, "protein": 3, "image": "🥬", "category": "Vegetables"},
    {"id": 11, "name": "Brown Rice", "price": 4.99, "calories": 111, "protein": 3, "image": "🍚", "category": "Grains"},
    {"id": 12, "name": "Protein Powder", "price": 24.99, "calories": 120, "protein": 25, "image": "🥤", "category": "Supplements"},
    {"id": 13, "name": "Chia Seeds", "price": 9.99, "calories": 137, "protein": 4, "image": "🌱", "category": "Seeds"},
    {"id": 14, "name": "Kale", "price": 2.99, "calories": 33, "protein": 3, "image": "🥬", "category": "Vegetables"},
    {"id": 15, "name": "Turkey Breast", "price": 11.99, "calories": 135, "protein": 30, "image": "🦃", "category": "Protein"},
    {"id": 16, "name": "Coconut Oil", "price": 13.99, "calories": 121, "protein": 0, "image": "🥥", "category": "Oils"},
]

INITIAL_PRODUCT_COUNT = 12

_PRODUCTS_BY_ID = {product["id"]: product for product in PRODUCTS}


def list_products(include_more: bool = False, category: str | None = None) -> list[dict]:
    products = PRODUCTS if include_more else PRODUCTS[:INITIAL_PRODUCT_COUNT]
    if category:
        products = [p for p in products if p["category"].lower() == category.lower()]
    return list(products)


def get_product(product_id: int) -> dict | None:
    return _PRODUCTS_BY_ID.get(product_id)


def cart_totals(product_ids: list[int]) -> dict:
    """장바구니 id 목록의 가격/칼로리/단백질 합계. 카탈로그에 없는 id 는 0 으로 계산."""
    total_price = 0.0
    total_calories = 0
    total_protein = 0
    for product_id in product_ids:
        product = _PRODUCTS_BY_ID.get(product_id)
        if product is None:
            continue
        total_price += product["price"]
        total_calories += product["calories"]
        total_protein += product["protein"]
    return {
        "total_price": round(total_price, 2),
        "total_calories": total_calories,
        "total_protein": total_protein,
        "item_count": len(product_ids),
    }
