from healthtracker.crud import cart as cart_crud
from healthtracker.routers import store
from healthtracker.schemas.store import CheckoutForm
from healthtracker.utils.catalog import cart_totals, list_products

VALID_FORM = {
    "card_number": "4242 4242 4242 4242",
    "expiry_date": "12/29",
    "cvv": "123",
    "cardholder_name": "Test User",
    "email": "tester@example.com",
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
}


def test_cart_total_is_sum_of_catalog_prices():
    totals = cart_totals([1, 3])
    assert totals["total_price"] == 13.98
    assert totals["item_count"] == 2


def test_catalog_lists_twelve_then_all_sixteen():
    assert len(list_products()) == 12
    assert len(list_products(include_more=True)) == 16
    assert [p["id"] for p in list_products(include_more=True)] == list(range(1, 17))


def test_checkout_form_reports_each_invalid_field():
    errors = CheckoutForm(card_number="1234", expiry_date="13/25", cvv="1", email="nope").validation_errors()
    assert errors["card_number"] == "Card number must be 16 digits"
    assert errors["expiry_date"] == "Invalid expiry date format (MM/YY)"
    assert errors["cvv"] == "CVV must be at least 3 digits"
    assert errors["email"] == "Invalid email format"
    assert errors["cardholder_name"] == "Cardholder name is required"
    assert errors["zip_code"] == "ZIP code is required"


def test_checkout_form_accepts_spaced_card_number():
    assert CheckoutForm(**VALID_FORM).validation_errors() == {}


def test_products_endpoint_filters_by_category(client):
    products = client.get("/store/products", params={"include_more": True}).json()
    category = products[0]["category"]
    filtered = client.get("/store/products", params={"include_more": True, "category": category}).json()
    assert filtered and all(p["category"] == category for p in filtered)


def test_cart_add_remove_and_clear(auth_client):
    auth_client.post("/store/cart", json={"product_id": 1})
    auth_client.post("/store/cart", json={"product_id": 3})
    response = auth_client.post("/store/cart", json={"product_id": 1})
    assert response.json()["product_ids"] == [1, 3, 1]

    cart = auth_client.delete("/store/cart/1").json()
    assert cart["product_ids"] == [3]

    # 없는 상품 제거는 변화 없음
    cart = auth_client.delete("/store/cart/9").json()
    assert cart["product_ids"] == [3]
    assert cart["total_price"] == 7.99

    cart = auth_client.delete("/store/cart").json()
    assert cart["product_ids"] == []
    assert cart["total_price"] == 0


def test_adding_unknown_product_is_404(auth_client):
    assert auth_client.post("/store/cart", json={"product_id": 99}).status_code == 404


def test_cart_requires_authentication(client):
    assert client.get("/store/cart").status_code == 401


def test_checkout_rejects_invalid_form(auth_client):
    auth_client.post("/store/cart", json={"product_id": 1})
    response = auth_client.post("/store/checkout", json={**VALID_FORM, "cvv": "", "card_number": "12"})
    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"cvv", "card_number"}
    assert auth_client.get("/store/cart").json()["product_ids"] == [1]


def test_checkout_rejects_empty_cart(auth_client):
    assert auth_client.post("/store/checkout", json=VALID_FORM).status_code == 400


def test_checkout_clears_cart_and_returns_receipt(auth_client):
    auth_client.post("/store/cart", json={"product_id": 1})
    auth_client.post("/store/cart", json={"product_id": 3})

    response = auth_client.post("/store/checkout", json=VALID_FORM)
    assert response.status_code == 200
    order = response.json()["order"]
    assert order["total"] == 13.98
    assert [item["id"] for item in order["items"]] == [1, 3]
    assert order["order_id"]
    assert auth_client.get("/store/cart").json()["product_ids"] == []


def test_items_added_during_payment_stay_in_cart(auth_client, monkeypatch):
    auth_client.post("/store/cart", json={"product_id": 1})
    auth_client.post("/store/cart", json={"product_id": 3})

    async def slow_payment(user_id):
        # 결제 대기 중 다른 요청이 담은 상품
        await cart_crud.add_item(user_id, 5)

    monkeypatch.setattr(store, "process_payment", slow_payment)
    order = auth_client.post("/store/checkout", json=VALID_FORM).json()["order"]
    assert [item["id"] for item in order["items"]] == [1, 3]
    assert order["total"] == 13.98
    assert auth_client.get("/store/cart").json()["product_ids"] == [5]
