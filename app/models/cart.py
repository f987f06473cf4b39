# app/models/cart.py
from decimal import Decimal

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CartLine(SQLModel, table=True):
    """
    Shopping cart entry for a user.
    One user cannot have 2 rows for the same product; the database
    enforces it so concurrent adds cannot both insert.
    """

    __tablename__ = "cart"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),
    )

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    user_id: int = Field(
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    # Copied from the product when the line is created
    name: str
    price: Decimal = Field(
        max_digits=10,
        decimal_places=2,
        description="Price when added to cart",
    )

    qty: int = Field(
        ge=1,
        description="Must be >= 1",
    )
