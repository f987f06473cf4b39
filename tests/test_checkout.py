"""
Checkout endpoint, checkout service and order id generation.
"""
from datetime import datetime

from fastapi.testclient import TestClient
from sqlmodel import Session

from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.checkout import CheckoutItem, CheckoutRequest
from app.services.checkout_service import CheckoutService, OrderIdGenerator

USER = 1


class LateAddCartRepository(CartRepository):
    """
    Another request adds a line right after checkout has read the cart.
    """

    def __init__(self, engine, product_id: int):
        self.engine = engine
        self.product_id = product_id

    def list_for_user(self, session, user_id):
        lines = super().list_for_user(session, user_id)
        with Session(self.engine) as other:
            product = ProductRepository().get_by_id(other, self.product_id)
            CartRepository().create_from_product(
                other, user_id=user_id, product=product, qty=1
            )
        return lines


def fill_cart(client: TestClient) -> list[dict]:
    client.post("/api/cart", json={"productId": 1, "qty": 2})  # 49.98
    client.post("/api/cart", json={"productId": 5, "qty": 1})  # 14.99
    return client.get("/api/cart").json()["items"]


class TestCheckout:

    def test_empty_items_is_400_and_cart_untouched(self, test_client: TestClient):
        items = fill_cart(test_client)

        response = test_client.post("/api/checkout", json={"cartItems": []})

        assert response.status_code == 400
        assert response.json() == {"message": "Cannot checkout with an empty cart"}
        assert test_client.get("/api/cart").json()["items"] == items

    def test_missing_items_is_400(self, test_client: TestClient):
        response = test_client.post("/api/checkout", json={})
        assert response.status_code == 400

    def test_checkout_returns_receipt_and_clears_cart(self, test_client: TestClient):
        items = fill_cart(test_client)

        response = test_client.post("/api/checkout", json={"cartItems": items})

        assert response.status_code == 200
        receipt = response.json()
        assert receipt["itemCount"] == len(items)
        assert receipt["total"] == "64.97"
        assert receipt["orderId"].startswith("VIBE-")
        assert datetime.fromisoformat(receipt["timestamp"].replace("Z", "+00:00"))

        assert test_client.get("/api/cart").json() == {"items": [], "total": "0.00"}

    def test_total_ignores_client_prices(self, test_client: TestClient):
        items = fill_cart(test_client)
        tampered = [dict(item, price="0.01") for item in items]

        receipt = test_client.post("/api/checkout", json={"cartItems": tampered}).json()

        assert receipt["total"] == "64.97"

    def test_customer_details_are_accepted(self, test_client: TestClient):
        items = fill_cart(test_client)

        response = test_client.post(
            "/api/checkout",
            json={
                "cartItems": items,
                "customer": {"name": "Ada Lovelace", "email": "ada@example.com"},
            },
        )

        assert response.status_code == 200

    def test_invalid_customer_email_is_422(self, test_client: TestClient):
        items = fill_cart(test_client)

        response = test_client.post(
            "/api/checkout",
            json={"cartItems": items, "customer": {"name": "Ada", "email": "nope"}},
        )

        assert response.status_code == 422
        assert len(test_client.get("/api/cart").json()["items"]) == len(items)

    def test_order_ids_differ_between_calls(self, test_client: TestClient):
        first = test_client.post("/api/checkout", json={"cartItems": fill_cart(test_client)})
        second = test_client.post("/api/checkout", json={"cartItems": fill_cart(test_client)})

        assert first.json()["orderId"] != second.json()["orderId"]


class TestOrderIdGenerator:

    def test_same_millisecond_still_unique(self):
        generator = OrderIdGenerator("VIBE", clock=lambda: 1700000000.0)

        ids = [generator.next_id() for _ in range(3)]

        assert ids == ["VIBE-1700000000000", "VIBE-1700000000001", "VIBE-1700000000002"]

    def test_follows_clock_when_it_moves_ahead(self):
        ticks = iter([1.0, 5.0])
        generator = OrderIdGenerator("X", clock=lambda: next(ticks))

        assert generator.next_id() == "X-1000"
        assert generator.next_id() == "X-5000"


class TestCheckoutService:

    def test_line_added_during_checkout_is_kept_and_not_charged(self, engine):
        with Session(engine) as setup:
            tee = ProductRepository().get_by_id(setup, 1)
            CartRepository().create_from_product(setup, user_id=USER, product=tee, qty=2)

        service = CheckoutService(
            LateAddCartRepository(engine, product_id=2),
            OrderIdGenerator("VIBE"),
        )
        with Session(engine) as session:
            receipt = service.checkout(
                session,
                USER,
                CheckoutRequest(cart_items=[CheckoutItem(product_id=1, qty=2)]),
            )

        assert receipt.total == "49.98"

        with Session(engine) as check:
            remaining = CartRepository().list_for_user(check, USER)
            assert [line.product_id for line in remaining] == [2]
