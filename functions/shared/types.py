"""
Domain records shared by the storefront API, the local persistence managers
and the serverless functions.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum, StrEnum
from typing import List, Optional

from dacite import Config, from_dict

from shared.json_utils import camel_to_snake, convert_keys

DEFAULT_MAX_PRICE = 10_000_000

DACITE_CONFIG = Config(cast=[Enum, float])


class Condition(StrEnum):
    NEW = "new"
    USED = "used"
    REFURBISHED = "refurbished"


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"
    SELLER = "seller"


class SortBy(StrEnum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    POPULAR = "popular"


class OrderStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    READY = "ready"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass
class Category:
    id: str
    name: str
    slug: str
    image: str = ""
    description: Optional[str] = None
    product_count: int = 0

    @classmethod
    def uncategorized(cls) -> "Category":
        return cls(id="", name="Uncategorized", slug="uncategorized")

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "image": self.image,
            "description": self.description,
            "productCount": self.product_count,
        }


@dataclass
class Seller:
    id: str
    name: str
    avatar: Optional[str] = None
    rating: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class Product:
    id: str
    title: str
    description: str
    price: float
    category: Category
    condition: Condition
    location: str
    seller: Seller
    seller_id: str = ""
    images: List[str] = field(default_factory=list)
    original_price: Optional[float] = None
    features: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    is_new: bool = False
    is_featured: bool = False

    @classmethod
    def from_json(cls, data: dict) -> "Product":
        return from_dict(cls, convert_keys(data, camel_to_snake), config=DACITE_CONFIG)

    def as_dict(self) -> dict:
        # seller_id keeps its snake_case name in the client payload.
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "originalPrice": self.original_price,
            "images": list(self.images),
            "category": self.category.as_dict(),
            "condition": self.condition.value,
            "location": self.location,
            "seller_id": self.seller_id,
            "seller": self.seller.as_dict(),
            "features": list(self.features),
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "isNew": self.is_new,
            "isFeatured": self.is_featured,
        }


@dataclass
class CartItem:
    id: str
    product: Product
    quantity: int
    selected_variant: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "CartItem":
        return from_dict(cls, convert_keys(data, camel_to_snake), config=DACITE_CONFIG)

    def as_dict(self) -> dict:
        payload = {
            "id": self.id,
            "product": self.product.as_dict(),
            "quantity": self.quantity,
        }
        if self.selected_variant is not None:
            payload["selectedVariant"] = self.selected_variant
        return payload


@dataclass
class WatchlistItem:
    id: str
    product: Product
    added_at: str

    @classmethod
    def from_json(cls, data: dict) -> "WatchlistItem":
        return from_dict(cls, convert_keys(data, camel_to_snake), config=DACITE_CONFIG)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "product": self.product.as_dict(),
            "addedAt": self.added_at,
        }


@dataclass
class User:
    """Signed-in user as seen by the storefront."""

    id: str
    name: str
    email: str
    role: Role = Role.USER
    mobile: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "role": self.role.value,
        }


@dataclass
class ProviderUser:
    """User record as returned by the auth provider."""

    id: str
    email: Optional[str]
    user_metadata: dict = field(default_factory=dict)
    created_at: Optional[str] = None
    last_sign_in_at: Optional[str] = None


@dataclass
class UserProfile:
    id: str
    email: str
    name: str
    created_at: str = ""
    address: Optional[str] = None
    city: Optional[str] = None
    mobile: Optional[str] = None
    postal_code: Optional[str] = None
    updated_at: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class SellerProfile:
    id: str
    business_name: str
    business_email: Optional[str] = None
    business_phone: Optional[str] = None
    business_description: Optional[str] = None
    business_logo: Optional[str] = None
    district: Optional[str] = None
    rating: float = 0.0
    is_verified: bool = False
    is_active: bool = True
    created_at: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class OrderItem:
    product_id: str
    product_title: str
    quantity: int
    price: float
    subtotal: float
    product_image: Optional[str] = None
    seller_id: Optional[str] = None
    order_id: Optional[str] = None
    id: Optional[str] = None


@dataclass
class Order:
    id: str
    order_number: str
    user_id: str
    total_amount: float
    customer_name: str
    customer_email: str
    customer_mobile: str
    shipping_address: str
    shipping_city: str
    payment_method: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: str = "pending"
    shipping_postal_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""
    items: List[OrderItem] = field(default_factory=list)

    def as_dict(self) -> dict:
        payload = asdict(self)
        payload["status"] = self.status.value
        return payload


@dataclass
class OrderStatusChange:
    """One row of an order's status history."""

    order_id: str
    old_status: str
    new_status: str
    changed_by_role: str
    changed_by: Optional[str] = None
    notes: Optional[str] = None
    id: str = ""
    created_at: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class FilterOptions:
    query: str = ""
    category: str = ""
    min_price: float = 0
    max_price: float = DEFAULT_MAX_PRICE
    conditions: List[str] = field(default_factory=list)
    location: str = ""
    brand: str = ""
    sort_by: SortBy = SortBy.NEWEST
