"""
Service-level cart behaviour, including the storage-level uniqueness
guarantee for (user, product).
"""
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.models.cart import CartLine
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.services.cart_service import CartService, format_total

USER = 1


class RacingCartRepository(CartRepository):
    """
    Simulates losing a race: the first lookup reports no line even though
    another request has already inserted one.
    """

    def __init__(self):
        self.lookups = 0

    def get_for_product(self, session, user_id, product_id):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return super().get_for_product(session, user_id, product_id)


class InterleavedCartRepository(CartRepository):
    """
    Another request adds to the same line right after this one has read it.
    """

    def __init__(self, engine, other_qty: int):
        self.engine = engine
        self.other_qty = other_qty

    def get_for_product(self, session, user_id, product_id):
        line = super().get_for_product(session, user_id, product_id)
        if line is not None:
            with Session(self.engine) as other:
                other_line = CartRepository().get_for_product(other, user_id, product_id)
                CartRepository().increment_qty(other, other_line, self.other_qty)
        return line


class TestFormatTotal:

    def test_empty(self):
        assert format_total([]) == "0.00"

    def test_two_decimals(self):
        lines = [
            CartLine(user_id=USER, product_id=1, name="a", price=Decimal("10.10"), qty=3),
            CartLine(user_id=USER, product_id=2, name="b", price=Decimal("0.05"), qty=2),
        ]
        assert format_total(lines) == "30.40"

    def test_whole_amount_keeps_cents(self):
        line = CartLine(user_id=USER, product_id=1, name="a", price=Decimal("5"), qty=2)
        assert format_total([line]) == "10.00"


class TestAddToCart:

    def test_add_twice_yields_one_line(self, session: Session, cart_service: CartService):
        line, created = cart_service.add_to_cart(session, USER, 1, 2)
        assert created is True

        again, created = cart_service.add_to_cart(session, USER, 1, 4)
        assert created is False
        assert again.id == line.id
        assert again.qty == 6

        summary = cart_service.get_cart(session, USER)
        assert len(summary.items) == 1
        assert summary.total == "149.94"

    def test_unknown_product(self, session: Session, cart_service: CartService):
        with pytest.raises(HTTPException) as exc_info:
            cart_service.add_to_cart(session, USER, 404, 1)
        assert exc_info.value.status_code == 404

    def test_duplicate_insert_is_rejected_by_database(self, session: Session):
        product = ProductRepository().get_by_id(session, 1)
        repo = CartRepository()
        repo.create_from_product(session, user_id=USER, product=product, qty=1)

        with pytest.raises(IntegrityError):
            repo.create_from_product(session, user_id=USER, product=product, qty=1)
        session.rollback()

    def test_lost_insert_race_increments_winner(self, engine):
        repo = CartRepository()
        product_repo = ProductRepository()

        # The "other request" inserts first
        with Session(engine) as other:
            product = product_repo.get_by_id(other, 1)
            repo.create_from_product(other, user_id=USER, product=product, qty=2)

        service = CartService(RacingCartRepository(), product_repo)
        with Session(engine) as session:
            line, created = service.add_to_cart(session, USER, 1, 3)

            assert created is False
            assert line.qty == 5
            assert len(repo.list_for_user(session, USER)) == 1

    def test_concurrent_increments_are_not_lost(self, engine):
        product_repo = ProductRepository()
        with Session(engine) as setup:
            product = product_repo.get_by_id(setup, 1)
            CartRepository().create_from_product(setup, user_id=USER, product=product, qty=1)

        service = CartService(InterleavedCartRepository(engine, other_qty=10), product_repo)
        with Session(engine) as session:
            line, created = service.add_to_cart(session, USER, 1, 3)

            assert created is False
            assert line.qty == 1 + 10 + 3

        with Session(engine) as check:
            assert CartRepository().list_for_user(check, USER)[0].qty == 14


class TestUpdateAndRemove:

    def test_update_to_zero_returns_none_and_deletes(
        self, session: Session, cart_service: CartService
    ):
        line, _ = cart_service.add_to_cart(session, USER, 2, 1)

        assert cart_service.update_quantity(session, USER, line.id, 0) is None
        assert cart_service.get_cart(session, USER).items == []

    def test_update_other_users_line_is_404(
        self, session: Session, cart_service: CartService
    ):
        line, _ = cart_service.add_to_cart(session, USER, 2, 1)

        with pytest.raises(HTTPException) as exc_info:
            cart_service.update_quantity(session, 2, line.id, 5)
        assert exc_info.value.status_code == 404

        assert cart_service.get_cart(session, USER).items[0].qty == 1

    def test_remove_missing_is_404(self, session: Session, cart_service: CartService):
        with pytest.raises(HTTPException) as exc_info:
            cart_service.remove_from_cart(session, USER, 12345)
        assert exc_info.value.status_code == 404

    def test_clear_cart_only_touches_one_user(
        self, session: Session, cart_service: CartService
    ):
        cart_service.add_to_cart(session, USER, 1, 1)
        cart_service.add_to_cart(session, USER, 2, 1)
        cart_service.add_to_cart(session, 2, 1, 1)

        assert cart_service.clear_cart(session, USER) == 2
        assert cart_service.get_cart(session, USER).items == []
        assert len(cart_service.get_cart(session, 2).items) == 1
