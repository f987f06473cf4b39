# app/schemas/product.py
from decimal import Decimal

from app.schemas.base import ApiModel


class ProductRead(ApiModel):
    """
    Public representation of a catalog product.
    """

    id: int
    name: str
    price: Decimal
    image_url: str = ""
