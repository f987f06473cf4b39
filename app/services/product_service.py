# app/services/product_service.py
import logging
from decimal import Decimal

from sqlmodel import Session

from app.models.product import Product
from app.repositories.product_repo import ProductRepository

logger = logging.getLogger(__name__)


# --- Starter catalog ---

SEED_PRODUCTS: list[dict] = [
    {
        "name": "Classic Tee",
        "price": Decimal("24.99"),
        "image_url": "https://storage.googleapis.com/gemini-dev-resources/ecom-a/tee.jpg",
    },
    {
        "name": "Leather Jacket",
        "price": Decimal("149.99"),
        "image_url": "https://storage.googleapis.com/gemini-dev-resources/ecom-a/jacket.jpg",
    },
    {
        "name": "Slim-Fit Jeans",
        "price": Decimal("49.99"),
        "image_url": "https://storage.googleapis.com/gemini-dev-resources/ecom-a/jeans.jpg",
    },
    {
        "name": "Running Shoes",
        "price": Decimal("79.99"),
        "image_url": "https://storage.googleapis.com/gemini-dev-resources/ecom-a/shoes.jpg",
    },
    {
        "name": "Beanie Hat",
        "price": Decimal("14.99"),
        "image_url": "https://storage.googleapis.com/gemini-dev-resources/ecom-a/beanie.jpg",
    },
]


class ProductService:
    """
    Business logic for the product catalog.

    The catalog is read-only through the API; rows only appear via
    seed_if_empty() at startup.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self, session: Session) -> list[Product]:
        """
        All products, unfiltered and unpaginated.
        """
        return self.repo.list_all(session)

    def seed_if_empty(self, session: Session) -> int:
        """
        Insert the starter catalog if the products table is empty.

        Returns the number of rows inserted (0 when already seeded).
        """
        if self.repo.count(session) > 0:
            return 0

        logger.info("Seeding catalog with %d starter products", len(SEED_PRODUCTS))
        products = [Product(**data) for data in SEED_PRODUCTS]
        self.repo.create_many(session, products)
        return len(products)
