"""
Checkout: turn a browser's cart into an order for the signed-in user.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone

from shared.types import CartItem, Order, OrderItem, OrderStatus, User
from storefront.cart import CartManager
from storefront.db import DbClient

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "mobile", "address", "city")


class CheckoutError(ValueError):
    pass


def generate_order_number() -> str:
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"ORD-{today}-{secrets.token_hex(3).upper()}"


def _order_item(item: CartItem) -> OrderItem:
    product = item.product
    return OrderItem(
        product_id=product.id,
        product_title=product.title,
        product_image=product.images[0] if product.images else None,
        quantity=item.quantity,
        price=product.price,
        subtotal=product.price * item.quantity,
        seller_id=product.seller_id or None,
    )


def place_order(
    db: DbClient, cart: CartManager, user: User, details: dict
) -> Order:
    """Create a pending order from the cart and empty the cart."""
    if any(not str(details.get(name) or "").strip() for name in REQUIRED_FIELDS):
        raise CheckoutError("Please fill in all required fields")
    items = cart.get_cart()
    if not items:
        raise CheckoutError("Cart is empty")

    order = db.create_order(
        Order(
            id="",
            order_number=generate_order_number(),
            user_id=user.id,
            status=OrderStatus.PENDING,
            total_amount=CartManager.get_cart_total(items),
            customer_name=details["name"].strip(),
            customer_email=details["email"].strip(),
            customer_mobile=details["mobile"].strip(),
            shipping_address=details["address"].strip(),
            shipping_city=details["city"].strip(),
            shipping_postal_code=details.get("postal_code"),
            payment_method=details.get("payment_method") or "cash_on_delivery",
            payment_status="pending",
            notes=details.get("notes"),
            items=[_order_item(item) for item in items],
        )
    )
    cart.clear_cart()
    logger.info("Order %s placed by %s", order.order_number, user.id)
    return order
