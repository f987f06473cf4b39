# app/client/render.py
"""
Plain-text views over the client state.

Each function takes plain data (the JSON shapes returned by the API)
and returns a string; nothing here talks to the network.
"""
from datetime import datetime
from decimal import Decimal

from app.client.state import Toast, View


def format_currency(amount) -> str:
    """
    Format a price or total as dollars, e.g. "24.99" -> "$24.99".
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"))
    return f"${value:,.2f}"


def render_nav(view: View, cart_count: int) -> str:
    tabs = [
        ("Products", view == View.PRODUCTS),
        (f"Cart ({cart_count})", view in (View.CART, View.CHECKOUT)),
    ]
    return "Vibe Commerce  " + "  ".join(
        f"[{label}]" if active else f" {label} " for label, active in tabs
    )


def render_products(products: list[dict], loading_product_id: int | None = None) -> str:
    if not products:
        return "No products available."

    rows = []
    for p in products:
        action = "Adding..." if p["id"] == loading_product_id else "Add to Cart"
        rows.append(f"#{p['id']:<3} {p['name']:<20} {format_currency(p['price']):>10}  [{action}]")
    return "\n".join(rows)


def render_cart(cart: dict) -> str:
    items = cart["items"]
    if not items:
        return "Your cart is empty\nAdd items to your cart to get started!"

    rows = ["Shopping Cart"]
    for item in items:
        subtotal = Decimal(str(item["price"])) * item["qty"]
        rows.append(
            f"#{item['id']:<3} {item['name']:<20} {format_currency(item['price']):>10}"
            f" x {item['qty']:<2} = {format_currency(subtotal):>10}"
        )
    rows.append(f"Total: {format_currency(cart['total'])}")
    return "\n".join(rows)


def render_checkout(cart: dict) -> str:
    return (
        f"You are about to purchase {len(cart['items'])} item(s) "
        f"for a total of {format_currency(cart['total'])}."
    )


def render_receipt(receipt: dict) -> str:
    timestamp = datetime.fromisoformat(receipt["timestamp"].replace("Z", "+00:00"))
    return "\n".join(
        [
            "Checkout Successful!",
            f"Order ID: {receipt['orderId']}",
            f"Total Paid: {format_currency(receipt['total'])}",
            f"Timestamp: {timestamp:%Y-%m-%d %H:%M:%S %Z}",
        ]
    )


def render_error(error: str | None) -> str:
    return f"! {error}" if error else ""


def render_toast(toast: Toast) -> str:
    return f"* {toast.message}" if toast.show else ""
