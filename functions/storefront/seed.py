"""
Demo data: the accounts provisioned by the create-users function and a small
catalog for local runs.
"""

from __future__ import annotations

import logging

from shared.types import Category
from storefront.db import DbClient, ProductRecord

logger = logging.getLogger(__name__)


def _pexels(photo_id: int, width: int = 600) -> str:
    return (
        f"https://images.pexels.com/photos/{photo_id}/pexels-photo-{photo_id}.jpeg"
        f"?auto=compress&cs=tinysrgb&w={width}"
    )


SEED_USERS = [
    {"email": "user1@sibn.com", "password": "user123", "role": "user", "name": "John Smith"},
    {"email": "user2@sibn.com", "password": "user123", "role": "user", "name": "Sarah Johnson"},
    {"email": "user3@sibn.com", "password": "user123", "role": "user", "name": "Mike Davis"},
    {"email": "admin1@sibn.com", "password": "admin123", "role": "admin", "name": "Admin One"},
    {"email": "admin2@sibn.com", "password": "admin123", "role": "admin", "name": "Admin Two"},
    {"email": "admin3@sibn.com", "password": "admin123", "role": "admin", "name": "Admin Three"},
    {
        "email": "seller1@sibn.com",
        "password": "seller123",
        "role": "seller",
        "name": "Tech Store",
        "business_name": "Tech Store Electronics",
        "business_email": "contact@techstore.com",
        "business_phone": "+1234567890",
    },
    {
        "email": "seller2@sibn.com",
        "password": "seller123",
        "role": "seller",
        "name": "Fashion Hub",
        "business_name": "Fashion Hub Clothing",
        "business_email": "info@fashionhub.com",
        "business_phone": "+1234567891",
    },
    {
        "email": "seller3@sibn.com",
        "password": "seller123",
        "role": "seller",
        "name": "Home Goods",
        "business_name": "Home Goods Essentials",
        "business_email": "support@homegoods.com",
        "business_phone": "+1234567892",
    },
]

SEED_CATEGORIES = [
    Category(id="1", name="Vehicles", slug="vehicles", image=_pexels(120049), product_count=1234),
    Category(id="2", name="Electronics", slug="electronics", image=_pexels(356056), product_count=2156),
    Category(id="3", name="Property", slug="property", image=_pexels(106399), product_count=856),
    Category(id="4", name="Fashion", slug="fashion", image=_pexels(996329), product_count=3421),
    Category(id="5", name="Home & Garden", slug="home-garden", image=_pexels(1080721), product_count=1876),
    Category(id="6", name="Services", slug="services", image=_pexels(3184360), product_count=965),
    Category(id="7", name="Jobs", slug="jobs", image=_pexels(3184291), product_count=542),
    Category(id="8", name="Sports", slug="sports", image=_pexels(209977), product_count=743),
]

SEED_PRODUCTS = [
    ProductRecord(
        id="1",
        title="iPhone 14 Pro - Excellent Condition",
        description=(
            "iPhone 14 Pro in excellent condition with all accessories included. "
            "Battery health 98%. No scratches or dents."
        ),
        price=185000,
        original_price=220000,
        images=[_pexels(788946), _pexels(3913025)],
        category_id="2",
        condition="used",
        location="Colombo 03",
        seller_id="seller1",
        seller_name="TechStore LK",
        seller_avatar=_pexels(220453, 150),
        seller_rating=4.8,
        features=["128GB Storage", "Face ID", "Wireless Charging", "5G Compatible"],
        tags=["smartphone", "apple", "iphone", "mobile"],
        is_featured=True,
        created_at="2024-01-15T10:00:00Z",
        updated_at="2024-01-15T10:00:00Z",
    ),
    ProductRecord(
        id="2",
        title="Toyota Aqua 2019 - Low Mileage",
        description=(
            "Toyota Aqua 2019 model with only 25,000km mileage. "
            "Excellent fuel economy and well maintained."
        ),
        price=4500000,
        images=[_pexels(116675), _pexels(3802510)],
        category_id="1",
        condition="used",
        location="Kandy",
        seller_id="seller2",
        seller_name="AutoDealer Pro",
        seller_avatar=_pexels(1681010, 150),
        seller_rating=4.9,
        features=["Hybrid Engine", "Automatic Transmission", "Full Service History", "Accident Free"],
        tags=["car", "toyota", "aqua", "hybrid"],
        is_featured=True,
        created_at="2024-01-14T15:30:00Z",
        updated_at="2024-01-14T15:30:00Z",
    ),
    ProductRecord(
        id="3",
        title="3 Bedroom House - Nugegoda",
        description=(
            "Beautiful 3 bedroom house in prime location Nugegoda. "
            "Close to schools and shopping centers."
        ),
        price=25000000,
        images=[_pexels(106399), _pexels(1396132)],
        category_id="3",
        condition="used",
        location="Nugegoda",
        seller_id="seller3",
        seller_name="PropertyPro LK",
        seller_avatar=_pexels(1043471, 150),
        seller_rating=4.7,
        features=["3 Bedrooms", "2 Bathrooms", "Car Parking", "Garden"],
        tags=["house", "property", "nugegoda", "residential"],
        is_featured=True,
        created_at="2024-01-13T09:15:00Z",
        updated_at="2024-01-13T09:15:00Z",
    ),
    ProductRecord(
        id="4",
        title='MacBook Pro 13" M1 Chip',
        description=(
            "MacBook Pro with M1 chip in excellent condition. "
            "Perfect for professionals and students."
        ),
        price=240000,
        original_price=280000,
        images=[_pexels(18105), _pexels(459653)],
        category_id="2",
        condition="used",
        location="Colombo 05",
        seller_id="seller4",
        seller_name="AppleStore Lanka",
        seller_avatar=_pexels(1516680, 150),
        seller_rating=4.9,
        features=["M1 Chip", "8GB RAM", "256GB SSD", "Retina Display"],
        tags=["laptop", "macbook", "apple", "computer"],
        is_new=True,
        is_featured=True,
        created_at="2024-01-12T14:20:00Z",
        updated_at="2024-01-12T14:20:00Z",
    ),
    ProductRecord(
        id="5",
        title="Designer Sofa Set - 3+2+1",
        description=(
            "Beautiful designer sofa set in excellent condition. "
            "Perfect for modern living rooms."
        ),
        price=95000,
        original_price=120000,
        images=[_pexels(1080721), _pexels(6707628)],
        category_id="5",
        condition="used",
        location="Maharagama",
        seller_id="seller5",
        seller_name="FurniturePlus",
        seller_avatar=_pexels(1212984, 150),
        seller_rating=4.6,
        features=["Genuine Leather", "Reclining Seats", "Warranty Included", "Home Delivery"],
        tags=["furniture", "sofa", "living room", "leather"],
        is_featured=True,
        created_at="2024-01-11T11:45:00Z",
        updated_at="2024-01-11T11:45:00Z",
    ),
    ProductRecord(
        id="6",
        title="Gaming PC - RTX 3070 Setup",
        description=(
            "High-performance gaming PC with RTX 3070, "
            "perfect for gaming and professional work."
        ),
        price=320000,
        images=[_pexels(2148222), _pexels(2582937)],
        category_id="2",
        condition="used",
        location="Colombo 07",
        seller_id="seller6",
        seller_name="GamerHub LK",
        seller_avatar=_pexels(1239291, 150),
        seller_rating=4.8,
        features=["RTX 3070", "16GB RAM", "1TB SSD", "RGB Lighting"],
        tags=["computer", "gaming", "pc", "rtx"],
        is_featured=True,
        created_at="2024-01-10T16:00:00Z",
        updated_at="2024-01-10T16:00:00Z",
    ),
]


def load_demo_catalog(db: DbClient) -> int:
    """Insert the demo categories and products that are not present yet."""
    inserted = 0
    for category in SEED_CATEGORIES:
        if db.get_category(category.id) is None:
            db.save_category(category)
            inserted += 1
    for product in SEED_PRODUCTS:
        if db.get_product(product.id) is None:
            db.save_product(product)
            inserted += 1
    logger.info("Demo catalog loaded (%d new rows)", inserted)
    return inserted
