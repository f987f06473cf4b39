# app/routers/cart.py
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.core.identity import get_current_user_id
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartSummary, CartLineCreate, CartLineRead, CartLineUpdate
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.get("", response_model=CartSummary)
def get_my_cart(
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    """
    Get the current user's cart lines and total.
    """
    return service.get_cart(session, user_id)


@router.post(
    "",
    response_model=CartLineRead,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": CartLineRead, "description": "Existing line incremented"}},
)
def add_to_cart(
    payload: CartLineCreate,
    response: Response,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    """
    Add a product to the current user's cart.

    - 201 with the new line on first add.
    - 200 with the incremented line if the product was already in the cart.
    """
    line, created = service.add_to_cart(
        session, user_id, payload.product_id, payload.qty
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return line


@router.put(
    "/{line_id}",
    response_model=CartLineRead,
    responses={204: {"description": "Line removed (qty <= 0)"}},
)
def update_cart_line(
    line_id: int,
    payload: CartLineUpdate,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    """
    Update quantity of a cart line.

    qty <= 0 removes the line and answers 204.
    """
    line = service.update_quantity(
        session=session,
        user_id=user_id,
        line_id=line_id,
        qty=payload.qty,
    )
    if line is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return line


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_cart_line(
    line_id: int,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    """
    Remove a line from the cart.
    """
    service.remove_from_cart(session, user_id, line_id)
    return None
