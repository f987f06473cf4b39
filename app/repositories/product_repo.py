# app/repositories/product_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (queries + seed inserts).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def list_all(self, session: Session) -> list[Product]:
        stmt = select(Product).order_by(Product.id)
        return session.exec(stmt).all()

    def count(self, session: Session) -> int:
        stmt = select(func.count()).select_from(Product)
        return session.exec(stmt).one()

    def create_many(self, session: Session, products: list[Product]) -> list[Product]:
        session.add_all(products)
        session.commit()
        for product in products:
            session.refresh(product)
        return products
