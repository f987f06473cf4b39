# app/models/product.py
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Rows are only created by the startup seed; the API never
    modifies them.
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        min_length=1,
        description="Display name of the product",
    )

    price: Decimal = Field(
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Unit price",
    )

    image_url: str = Field(
        default="",
        description="Product image URL (may be empty)",
    )
