# app/schemas/checkout.py
from datetime import datetime
from decimal import Decimal

from pydantic import EmailStr, field_validator

from app.schemas.base import ApiModel


class CheckoutItem(ApiModel):
    """
    One line of the client's cart snapshot.

    Only the count of these matters server-side; prices are
    recomputed from the stored cart.
    """

    id: int | None = None
    product_id: int | None = None
    name: str | None = None
    price: Decimal | None = None
    qty: int = 1


class CustomerDetails(ApiModel):
    """
    Contact details collected by the checkout form.
    """

    name: str
    email: EmailStr

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CheckoutRequest(ApiModel):
    """
    Payload for checkout.

    An empty (or missing) cart_items list is rejected by the service
    with 400, not by validation.
    """

    cart_items: list[CheckoutItem] = []
    customer: CustomerDetails | None = None


class Receipt(ApiModel):
    """
    Checkout confirmation. Not persisted.
    """

    order_id: str
    timestamp: datetime
    total: str
    item_count: int
