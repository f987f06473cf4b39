# app/core/identity.py
from app.core.config import get_settings


def get_current_user_id() -> int:
    """
    Resolve the shopper that the current request acts for.

    There is no authentication: every request belongs to the configured
    DEFAULT_USER_ID. Routers still receive the id through this dependency
    and pass it explicitly into the services, so swapping in a real
    session lookup only touches this function.
    """
    return get_settings().DEFAULT_USER_ID
