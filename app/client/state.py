# app/client/state.py
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from app.client.api import StorefrontAPI

logger = logging.getLogger(__name__)

# Toast auto-hide delay in seconds
TOAST_DURATION = 3.0

# Client-side cap on a single line's quantity; the server does not enforce it
MAX_LINE_QTY = 99


class View(str, Enum):
    PRODUCTS = "products"
    CART = "cart"
    CHECKOUT = "checkout"


@dataclass
class Toast:
    message: str = ""
    show: bool = False


def empty_cart() -> dict:
    return {"items": [], "total": "0.00"}


class StorefrontController:
    """
    Client-side state for the storefront.

    Holds a cache of products and the cart and drives the API:
      - mount() loads products and cart concurrently
      - every mutation is followed by a cart re-fetch (no local merge)
      - failures set a per-action banner message; nothing is retried
      - toasts hide themselves after TOAST_DURATION; a newer toast
        replaces the pending hide timer
    """

    def __init__(self, api: StorefrontAPI, toast_duration: float = TOAST_DURATION):
        self.api = api
        self.toast_duration = toast_duration

        self.products: list[dict] = []
        self.cart: dict = empty_cart()
        self.view: View = View.PRODUCTS
        self.receipt: dict | None = None
        self.error: str | None = None
        self.loading_product_id: int | None = None
        self.toast = Toast()

        self._toast_timer: asyncio.TimerHandle | None = None

    # ---- derived state ----

    @property
    def cart_count(self) -> int:
        """Total units in the cart (nav badge)."""
        return sum(item["qty"] for item in self.cart["items"])

    # ---- loading ----

    async def mount(self) -> None:
        await asyncio.gather(self.fetch_products(), self.fetch_cart())

    async def fetch_products(self) -> None:
        self.error = None
        try:
            self.products = await self.api.fetch_products()
        except httpx.HTTPError as exc:
            logger.warning("Error fetching products: %s", exc)
            self.error = "Failed to fetch products. Please try refreshing the page."

    async def fetch_cart(self) -> None:
        self.error = None
        try:
            self.cart = await self.api.fetch_cart()
        except httpx.HTTPError as exc:
            logger.warning("Error fetching cart: %s", exc)
            self.error = "Failed to fetch your cart. Please try again."

    # ---- navigation ----

    def show_products(self) -> None:
        self.view = View.PRODUCTS

    async def open_cart(self) -> None:
        self.view = View.CART
        await self.fetch_cart()

    def proceed_to_checkout(self) -> None:
        self.view = View.CHECKOUT

    # ---- cart mutations ----

    async def add_to_cart(self, product_id: int, qty: int = 1) -> None:
        self.error = None
        self.loading_product_id = product_id
        try:
            await self.api.add_product_to_cart(product_id, qty)
            await self.fetch_cart()
            name = next(
                (p["name"] for p in self.products if p["id"] == product_id),
                "Item",
            )
            self.show_toast(f"{name} added to cart!")
        except httpx.HTTPError as exc:
            logger.warning("Error adding to cart: %s", exc)
            self.error = "Failed to add item to cart."
        finally:
            self.loading_product_id = None

    async def update_quantity(self, line_id: int, qty: int) -> None:
        self.error = None
        try:
            await self.api.update_cart_item_quantity(line_id, qty)
            await self.fetch_cart()
        except httpx.HTTPError as exc:
            logger.warning("Error updating quantity: %s", exc)
            self.error = "Failed to update item quantity."

    async def remove_from_cart(self, line_id: int) -> None:
        self.error = None
        try:
            await self.api.remove_product_from_cart(line_id)
            await self.fetch_cart()
            self.show_toast("Item removed from cart.")
        except httpx.HTTPError as exc:
            logger.warning("Error removing from cart: %s", exc)
            self.error = "Failed to remove item from cart."

    async def change_quantity(self, line: dict, new_qty: int) -> None:
        """
        Quantity stepper: zero or below removes, above MAX_LINE_QTY is ignored.
        """
        if new_qty <= 0:
            await self.remove_from_cart(line["id"])
        elif new_qty <= MAX_LINE_QTY:
            await self.update_quantity(line["id"], new_qty)

    async def checkout(self, customer: dict | None = None) -> None:
        self.error = None
        try:
            self.receipt = await self.api.checkout(self.cart["items"], customer)
            self.cart = empty_cart()
            self.view = View.PRODUCTS
            await self.fetch_cart()
        except httpx.HTTPError as exc:
            logger.warning("Error during checkout: %s", exc)
            self.error = "Checkout failed. Please try again."

    # ---- banners ----

    def dismiss_error(self) -> None:
        self.error = None

    def dismiss_receipt(self) -> None:
        self.receipt = None

    def show_toast(self, message: str) -> None:
        """
        Show a toast and (re)arm its hide timer. Must run inside the event loop.
        """
        self._cancel_toast_timer()
        self.toast = Toast(message=message, show=True)
        loop = asyncio.get_running_loop()
        self._toast_timer = loop.call_later(self.toast_duration, self._hide_toast)

    def close_toast(self) -> None:
        self._cancel_toast_timer()
        self.toast = Toast()

    def _hide_toast(self) -> None:
        self._toast_timer = None
        self.toast = Toast()

    def _cancel_toast_timer(self) -> None:
        if self._toast_timer is not None:
            self._toast_timer.cancel()
            self._toast_timer = None
