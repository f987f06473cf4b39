# app/services/checkout_service.py
import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable

from fastapi import HTTPException, status
from sqlmodel import Session

from app.repositories.cart_repo import CartRepository
from app.schemas.checkout import CheckoutRequest, Receipt
from app.services.cart_service import format_total

logger = logging.getLogger(__name__)


class OrderIdGenerator:
    """
    Issues order ids of the form <prefix>-<epoch millis>.

    Ids are strictly increasing within the process: two calls in the
    same millisecond get consecutive numbers instead of colliding.
    """

    def __init__(self, prefix: str, clock: Callable[[], float] = time.time):
        self.prefix = prefix
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now_ms = int(self._clock() * 1000)
            self._last = max(now_ms, self._last + 1)
            return f"{self.prefix}-{self._last}"


class CheckoutService:
    """
    Business logic for checkout.

    Responsibilities:
      - reject an empty checkout request
      - recompute the total from the stored cart (client prices ignored)
      - clear the user's cart
      - issue a receipt (nothing is persisted)
    """

    def __init__(self, cart_repo: CartRepository, order_ids: OrderIdGenerator):
        self.cart_repo = cart_repo
        self.order_ids = order_ids

    def checkout(
        self,
        session: Session,
        user_id: int,
        payload: CheckoutRequest,
    ) -> Receipt:
        """
        Check out the user's cart.

        Steps:
          1. 400 if the request carries no cart items (cart untouched).
          2. Total = sum of price * qty over the server-side lines.
          3. Delete all of the user's lines.
          4. Return the receipt; item_count is the request's line count.
        """
        if not payload.cart_items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot checkout with an empty cart",
            )

        lines = self.cart_repo.list_for_user(session, user_id)
        total = format_total(lines)

        # Only the lines that were totalled; a line added meanwhile stays.
        self.cart_repo.delete_lines(session, lines)

        receipt = Receipt(
            order_id=self.order_ids.next_id(),
            timestamp=datetime.now(timezone.utc),
            total=total,
            item_count=len(payload.cart_items),
        )

        customer = payload.customer
        logger.info(
            "Checkout %s for user=%s: %d item(s), total=%s%s",
            receipt.order_id,
            user_id,
            receipt.item_count,
            receipt.total,
            f", customer={customer.name} <{customer.email}>" if customer else "",
        )
        return receipt
