# app/schemas/cart.py
from decimal import Decimal

from pydantic import ConfigDict, Field

from app.schemas.base import ApiModel

# Largest value an INTEGER column can hold
MAX_QTY = 2**63 - 1


class CartLineCreate(ApiModel):
    """
    Payload for adding to cart.

    Only bounded by storage: the 99 limit is a client-side policy.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: int
    qty: int = Field(default=1, ge=1, le=MAX_QTY)


class CartLineUpdate(ApiModel):
    """
    Payload for updating quantity of a cart line.

    qty <= 0 removes the line.
    """

    model_config = ConfigDict(extra="forbid")

    qty: int = Field(ge=-MAX_QTY, le=MAX_QTY)


class CartLineRead(ApiModel):
    """
    Read model for a single cart line.
    """

    id: int
    user_id: int
    product_id: int
    name: str
    price: Decimal
    qty: int


class CartSummary(ApiModel):
    """
    Full cart response model; total is a two-decimal string.
    """

    items: list[CartLineRead]
    total: str
