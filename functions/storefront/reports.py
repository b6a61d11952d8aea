"""
Admin views over orders: orders broken down by seller, per-seller income and
the dashboard totals.
"""

from __future__ import annotations

from dataclasses import asdict

from shared.types import Order, OrderStatus, SellerProfile
from storefront.db import DbClient

UNKNOWN_SELLER = "Unknown Seller"
UNKNOWN_DISTRICT = "Unknown"
TOP_CATEGORY_LIMIT = 5


def _seller_entry(seller_id: str, profile: SellerProfile | None) -> dict:
    return {
        "seller_id": seller_id,
        "business_name": (profile.business_name if profile else "") or UNKNOWN_SELLER,
        "district": (profile.district if profile else "") or UNKNOWN_DISTRICT,
    }


def _sellers_by_id(db: DbClient) -> dict[str, SellerProfile]:
    return {profile.id: profile for profile in db.list_seller_profiles()}


def group_by_seller(order: Order, sellers: dict[str, SellerProfile]) -> list[dict]:
    """Split an order's lines per seller. Lines without a seller are left out."""
    groups: dict[str, dict] = {}
    for item in order.items:
        if not item.seller_id:
            continue
        group = groups.get(item.seller_id)
        if group is None:
            group = _seller_entry(item.seller_id, sellers.get(item.seller_id))
            group.update(total_amount=0.0, items=[])
            groups[item.seller_id] = group
        group["total_amount"] += float(item.subtotal)
        group["items"].append(asdict(item))
    return list(groups.values())


def list_orders_with_sellers(
    db: DbClient, *, status: str = "", district: str = "", query: str = ""
) -> list[dict]:
    """
    Every order, newest first, with its lines grouped by seller.

    `query` matches the order number, the customer name or a seller's business
    name; `district` keeps orders with at least one seller in that district.
    """
    sellers = _sellers_by_id(db)
    needle = query.strip().lower()
    results = []
    for order in db.list_all_orders():
        groups = group_by_seller(order, sellers)
        if status and order.status.value != status:
            continue
        if district and not any(g["district"] == district for g in groups):
            continue
        if needle and not (
            needle in order.order_number.lower()
            or needle in (order.customer_name or "").lower()
            or any(needle in g["business_name"].lower() for g in groups)
        ):
            continue
        view = order.as_dict()
        view["sellers"] = groups
        results.append(view)
    return results


def seller_incomes(db: DbClient) -> list[dict]:
    """Income per seller across every order line they sold."""
    sellers = _sellers_by_id(db)
    incomes: dict[str, dict] = {}
    for order in db.list_all_orders():
        for item in order.items:
            if not item.seller_id:
                continue
            income = incomes.get(item.seller_id)
            if income is None:
                income = _seller_entry(item.seller_id, sellers.get(item.seller_id))
                income.update(
                    total_orders=0,
                    total_income=0.0,
                    pending_income=0.0,
                    completed_income=0.0,
                )
                incomes[item.seller_id] = income
            subtotal = float(item.subtotal)
            income["total_orders"] += 1
            income["total_income"] += subtotal
            if order.status == OrderStatus.DELIVERED:
                income["completed_income"] += subtotal
            elif order.status != OrderStatus.CANCELLED:
                income["pending_income"] += subtotal
    return list(incomes.values())


def analytics(db: DbClient) -> dict:
    orders = db.list_all_orders()
    total_revenue = sum(float(order.total_amount) for order in orders)
    categories = sorted(
        db.list_categories(), key=lambda c: c.product_count, reverse=True
    )
    return {
        "total_revenue": total_revenue,
        "total_orders": len(orders),
        "total_users": len(db.list_user_profiles()),
        "total_products": len(db.list_products()),
        "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING),
        "completed_orders": sum(
            1 for o in orders if o.status == OrderStatus.DELIVERED
        ),
        "average_order_value": total_revenue / len(orders) if orders else 0,
        "top_categories": [
            {"name": c.name, "count": c.product_count}
            for c in categories[:TOP_CATEGORY_LIMIT]
        ],
    }
