# app/repositories/cart_repo.py
from sqlmodel import Session, select, update

from app.models.cart import CartLine
from app.models.product import Product


class CartRepository:

    # Get lines for a user
    def list_for_user(self, session: Session, user_id: int) -> list[CartLine]:
        stmt = (
            select(CartLine)
            .where(CartLine.user_id == user_id)
            .order_by(CartLine.id)
        )
        return session.exec(stmt).all()

    def get_for_product(
        self, session: Session, user_id: int, product_id: int
    ) -> CartLine | None:
        stmt = select(CartLine).where(
            CartLine.user_id == user_id, CartLine.product_id == product_id
        )
        return session.exec(stmt).first()

    def get_for_user(
        self, session: Session, user_id: int, line_id: int
    ) -> CartLine | None:
        """
        Fetch a line by id, but only if it belongs to the given user.
        """
        stmt = select(CartLine).where(
            CartLine.id == line_id, CartLine.user_id == user_id
        )
        return session.exec(stmt).first()

    # CRUD
    def create_from_product(
            self,
            session: Session,
            *,
            user_id: int,
            product: Product,
            qty: int,
    ) -> CartLine:
        """
        Create a CartLine from a Product, snapshotting name and price.

        Raises sqlalchemy IntegrityError if the user already has a line
        for this product; the service decides what to do about it.
        """
        line = CartLine(
            user_id=user_id,
            product_id=product.id,
            name=product.name,
            price=product.price,
            qty=qty,
        )
        session.add(line)
        session.commit()
        session.refresh(line)
        return line

    def update(self, session: Session, line: CartLine) -> CartLine:
        session.add(line)
        session.commit()
        session.refresh(line)
        return line

    def increment_qty(self, session: Session, line: CartLine, qty: int) -> CartLine:
        """
        Add qty to the line in a single UPDATE so concurrent increments
        are not lost.
        """
        stmt = (
            update(CartLine)
            .where(CartLine.id == line.id)
            .values(qty=CartLine.qty + qty)
        )
        session.exec(stmt)
        session.commit()
        session.refresh(line)
        return line

    def delete(self, session: Session, line: CartLine) -> None:
        session.delete(line)
        session.commit()

    def delete_lines(self, session: Session, lines: list[CartLine]) -> int:
        """
        Delete exactly the given lines; returns how many were removed.
        """
        for line in lines:
            session.delete(line)
        session.commit()
        return len(lines)

    def clear_user_cart(self, session: Session, user_id: int) -> int:
        """
        Delete every line for the user; returns the number of rows removed.
        """
        return self.delete_lines(session, self.list_for_user(session, user_id))
