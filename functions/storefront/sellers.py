"""
Seller-side operations: registration, listing new products and working
through the orders that contain the seller's items.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from shared.types import Order, OrderStatus, SellerProfile, User, UserProfile
from storefront.auth import AuthManager, AuthResult
from storefront.db import DbClient, ProductRecord

logger = logging.getLogger(__name__)

# Each status a seller may move an order to next.
SELLER_STATUS_TRANSITIONS = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED,),
    OrderStatus.CONFIRMED: (OrderStatus.SHIPPED,),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED,),
}


class SellerError(ValueError):
    pass


def register_seller(auth: AuthManager, db: DbClient, form: dict) -> AuthResult:
    """Sign up a seller account and create its business profile."""
    business_name = (form.get("business_name") or "").strip()
    result = auth.sign_up_seller(
        form.get("email") or "",
        form.get("password") or "",
        form.get("confirm_password") or "",
        business_name,
    )
    if not result.success:
        return result

    user = result.user
    db.save_seller_profile(
        SellerProfile(
            id=user.id,
            business_name=business_name,
            business_email=form.get("business_email"),
            business_phone=form.get("business_phone"),
            business_description=form.get("business_description"),
            district=form.get("district"),
        )
    )
    db.save_user_profile(
        UserProfile(
            id=user.id,
            email=user.email,
            name=business_name or user.name,
            mobile=form.get("business_phone"),
        )
    )
    logger.info("Registered seller %s (%s)", user.id, business_name)
    return result


def _filled(values: list[str]) -> list[str]:
    return [value for value in values if value.strip()]


def build_seller_product(profile: SellerProfile, data: dict) -> ProductRecord:
    """A new `products` row listed by the seller, stamped with the business details."""
    images = _filled(data.get("images") or [])
    if not images:
        raise SellerError("Please add at least one image URL")
    return ProductRecord(
        id="",
        title=data["title"],
        description=data.get("description") or "",
        price=data["price"],
        original_price=data.get("original_price"),
        images=images,
        category_id=data.get("category_id") or None,
        condition=data["condition"],
        location=data.get("location") or "",
        seller_id=profile.id,
        seller_name=profile.business_name,
        seller_avatar=profile.business_logo,
        seller_rating=profile.rating or 0.0,
        features=_filled(data.get("features") or []),
        tags=_filled(data.get("tags") or []),
        is_new=bool(data.get("is_new")),
        is_featured=bool(data.get("is_featured")),
    )


def seller_order_view(order: Order, seller_id: str) -> dict:
    """An order as its seller sees it: only their own lines, with their share."""
    items = [item for item in order.items if item.seller_id == seller_id]
    view = order.as_dict()
    view["items"] = [asdict(item) for item in items]
    view["total_items"] = sum(item.quantity for item in items)
    view["seller_total"] = sum(float(item.subtotal) for item in items)
    return view


def list_seller_orders(
    db: DbClient, seller_id: str, *, status: str = "", query: str = ""
) -> list[dict]:
    needle = query.strip().lower()
    views = []
    for order in db.list_seller_orders(seller_id):
        if status and order.status.value != status:
            continue
        if needle and not (
            needle in order.order_number.lower()
            or needle in (order.customer_name or "").lower()
        ):
            continue
        views.append(seller_order_view(order, seller_id))
    return views


def next_statuses(status: OrderStatus) -> tuple[OrderStatus, ...]:
    return SELLER_STATUS_TRANSITIONS.get(status, ())


def advance_order(
    db: DbClient,
    seller: User,
    order_id: str,
    status: OrderStatus,
    notes: str | None = None,
) -> Order:
    """Move one of the seller's orders to its next status and record the change."""
    order = db.get_order(order_id)
    if order is None or not any(item.seller_id == seller.id for item in order.items):
        raise LookupError("Order not found")
    if status not in next_statuses(order.status):
        raise SellerError(
            f"Cannot change order status from {order.status.value} to {status.value}"
        )
    updated = db.update_order_status(
        order_id,
        status,
        changed_by_role=seller.role.value,
        changed_by=seller.id,
        notes=notes,
    )
    logger.info(
        "Seller %s moved order %s to %s", seller.id, order.order_number, status.value
    )
    return updated
