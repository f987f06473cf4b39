# app/client/__main__.py
import asyncio
import logging

from app.client.api import StorefrontAPI
from app.client.render import render_cart, render_error, render_nav, render_products
from app.client.state import StorefrontController


async def main() -> None:
    api = StorefrontAPI()
    controller = StorefrontController(api)
    try:
        await controller.mount()
    finally:
        await api.aclose()

    print(render_nav(controller.view, controller.cart_count))
    if controller.error:
        print(render_error(controller.error))
    print()
    print(render_products(controller.products))
    print()
    print(render_cart(controller.cart))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
