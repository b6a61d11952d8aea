"""
Product browsing and search over the catalog tables.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from shared.types import (
    Category,
    Condition,
    FilterOptions,
    Product,
    Seller,
    SortBy,
)
from shared.utils import parse_timestamp
from storefront.db import DbClient, ProductRecord

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6


def to_product(row: ProductRecord, categories: Iterable[Category]) -> Product:
    """Join a product row with its category and expand the seller columns."""
    category = next(
        (c for c in categories if row.category_id and c.id == row.category_id),
        None,
    )
    return Product(
        id=row.id,
        title=row.title,
        description=row.description,
        price=float(row.price),
        original_price=(
            float(row.original_price) if row.original_price is not None else None
        ),
        images=list(row.images or []),
        category=category or Category.uncategorized(),
        condition=Condition(row.condition),
        location=row.location,
        seller_id=row.seller_id or "",
        seller=Seller(
            id=row.seller_id or "admin",
            name=row.seller_name,
            avatar=row.seller_avatar,
            rating=float(row.seller_rating or 0),
        ),
        features=list(row.features or []),
        tags=list(row.tags or []),
        created_at=row.created_at,
        updated_at=row.updated_at,
        is_new=row.is_new,
        is_featured=row.is_featured,
    )


def get_featured_products(db: DbClient) -> list[Product]:
    categories = db.list_categories()
    rows = db.list_products(featured_only=True, limit=FEATURED_LIMIT)
    return [to_product(row, categories) for row in rows]


def get_all_products(db: DbClient) -> list[Product]:
    categories = db.list_categories()
    return [to_product(row, categories) for row in db.list_products()]


def get_product_by_id(db: DbClient, product_id: str) -> Optional[Product]:
    row = db.get_product(product_id)
    if row is None:
        return None
    return to_product(row, db.list_categories())


def get_categories(db: DbClient) -> list[Category]:
    return db.list_categories()


def get_products_by_category(db: DbClient, category_slug: str) -> list[Product]:
    category = db.get_category_by_slug(category_slug)
    if category is None:
        return []
    rows = db.list_products(category_id=category.id)
    return [to_product(row, [category]) for row in rows]


def _contains(haystack: str, needle: str) -> bool:
    return needle in (haystack or "").lower()


def _matches_query(product: Product, query: str) -> bool:
    return (
        _contains(product.title, query)
        or _contains(product.description, query)
        or any(_contains(tag, query) for tag in product.tags)
        or any(_contains(feature, query) for feature in product.features)
    )


def search_products(products: Iterable[Product], filters: FilterOptions) -> list[Product]:
    """Filter and sort products the way the search page does."""
    results = list(products)

    query = filters.query.strip().lower()
    if query:
        results = [p for p in results if _matches_query(p, query)]

    if filters.category:
        results = [p for p in results if p.category.slug == filters.category]

    results = [
        p for p in results if filters.min_price <= p.price <= filters.max_price
    ]

    if filters.conditions:
        accepted = set(filters.conditions)
        results = [p for p in results if p.condition.value in accepted]

    location = filters.location.strip().lower()
    if location:
        results = [p for p in results if _contains(p.location, location)]

    brand = filters.brand.strip().lower()
    if brand:
        results = [
            p
            for p in results
            if any(_contains(feature, brand) for feature in p.features)
            or any(_contains(tag, brand) for tag in p.tags)
        ]

    if filters.sort_by == SortBy.PRICE_LOW:
        results.sort(key=lambda p: p.price)
    elif filters.sort_by == SortBy.PRICE_HIGH:
        results.sort(key=lambda p: p.price, reverse=True)
    elif filters.sort_by == SortBy.NEWEST:
        results.sort(key=lambda p: parse_timestamp(p.created_at), reverse=True)
    elif filters.sort_by == SortBy.POPULAR:
        results.sort(key=lambda p: p.seller.rating, reverse=True)

    logger.debug("Search %r matched %d products", filters.query, len(results))
    return results
