# app/services/cart_service.py
import logging
from decimal import Decimal
from typing import Iterable

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.models.cart import CartLine
from app.models.product import Product
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartLineRead, CartSummary

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def format_total(lines: Iterable[CartLine]) -> str:
    """
    Sum price * qty over the lines and render it with exactly two decimals.
    """
    total = sum(
        (Decimal(line.price) * line.qty for line in lines),
        Decimal("0"),
    )
    return str(total.quantize(TWO_PLACES))


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence
      - add-or-increment (one line per user and product)
      - quantity updates, zero or below removes the line
      - compute cart totals on read
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _get_product(self, session: Session, product_id: int) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def _get_line(self, session: Session, user_id: int, line_id: int) -> CartLine:
        line = self.cart_repo.get_for_user(session, user_id, line_id)
        if not line:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )
        return line

    # ---- public operations ----

    def get_cart(self, session: Session, user_id: int) -> CartSummary:
        """
        Return the user's lines plus the computed total.
        """
        lines = self.cart_repo.list_for_user(session, user_id)
        return CartSummary(
            items=[CartLineRead.model_validate(line) for line in lines],
            total=format_total(lines),
        )

    def add_to_cart(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        qty: int,
    ) -> tuple[CartLine, bool]:
        """
        Add a product to the user's cart.

        Rules:
          - product must exist
          - an existing line is incremented by qty (no upper clamp)
          - a new line snapshots the product's name and price

        Returns (line, created).
        """
        product = self._get_product(session, product_id)

        existing = self.cart_repo.get_for_product(session, user_id, product_id)
        if existing:
            return self.cart_repo.increment_qty(session, existing, qty), False

        try:
            line = self.cart_repo.create_from_product(
                session,
                user_id=user_id,
                product=product,
                qty=qty,
            )
        except IntegrityError:
            # Another request inserted the same (user, product) first.
            session.rollback()
            logger.info(
                "Concurrent add for user=%s product=%s, incrementing existing line",
                user_id,
                product_id,
            )
            existing = self.cart_repo.get_for_product(session, user_id, product_id)
            if existing is None:
                raise
            return self.cart_repo.increment_qty(session, existing, qty), False

        return line, True

    def update_quantity(
        self,
        session: Session,
        user_id: int,
        line_id: int,
        qty: int,
    ) -> CartLine | None:
        """
        Set the quantity of a cart line.

        qty <= 0 deletes the line and returns None.
        Unknown (or another user's) line => 404.
        """
        line = self._get_line(session, user_id, line_id)

        if qty <= 0:
            self.cart_repo.delete(session, line)
            return None

        line.qty = qty
        return self.cart_repo.update(session, line)

    def remove_from_cart(
        self,
        session: Session,
        user_id: int,
        line_id: int,
    ) -> None:
        line = self._get_line(session, user_id, line_id)
        self.cart_repo.delete(session, line)

    def clear_cart(self, session: Session, user_id: int) -> int:
        """
        Remove every line for the user; returns how many were removed.
        """
        return self.cart_repo.clear_user_cart(session, user_id)
