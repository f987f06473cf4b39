# app/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.config import get_settings
from app.core.identity import get_current_user_id
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.schemas.checkout import CheckoutRequest, Receipt
from app.services.checkout_service import CheckoutService, OrderIdGenerator

router = APIRouter(prefix="/checkout", tags=["Checkout"])

cart_repo = CartRepository()
service = CheckoutService(cart_repo, OrderIdGenerator(get_settings().ORDER_ID_PREFIX))


@router.post("", response_model=Receipt)
def checkout(
    payload: CheckoutRequest,
    session: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    """
    Check out the current user's cart and return a receipt.
    """
    return service.checkout(session, user_id, payload)
