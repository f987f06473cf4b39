# app/client/api.py
from typing import Any

import httpx

from app.core.config import get_settings


class StorefrontAPI:
    """
    Thin async wrapper over the storefront HTTP API.

    Every call raises httpx.HTTPStatusError on a non-2xx answer and
    httpx.TransportError when the server cannot be reached; callers
    decide how to surface them.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._client = client or httpx.AsyncClient(
            base_url=base_url or get_settings().CLIENT_BASE_URL
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    async def fetch_products(self) -> list[dict]:
        response = await self._request("GET", "/products")
        return response.json()

    async def fetch_cart(self) -> dict:
        response = await self._request("GET", "/cart")
        return response.json()

    async def add_product_to_cart(self, product_id: int, qty: int = 1) -> dict:
        response = await self._request(
            "POST", "/cart", json={"productId": product_id, "qty": qty}
        )
        return response.json()

    async def update_cart_item_quantity(self, line_id: int, qty: int) -> dict | None:
        """
        Returns the updated line, or None when the server removed it (204).
        """
        response = await self._request("PUT", f"/cart/{line_id}", json={"qty": qty})
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        return response.json()

    async def remove_product_from_cart(self, line_id: int) -> None:
        await self._request("DELETE", f"/cart/{line_id}")

    async def checkout(
        self,
        cart_items: list[dict],
        customer: dict | None = None,
    ) -> dict:
        body: dict[str, Any] = {"cartItems": cart_items}
        if customer is not None:
            body["customer"] = customer
        response = await self._request("POST", "/checkout", json=body)
        return response.json()
