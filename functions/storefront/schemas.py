"""
Pydantic schemas for the storefront API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from shared.types import Condition, OrderStatus, Role


class CategoryListResponse(BaseModel):
    categories: list[dict]


class ProductListResponse(BaseModel):
    products: list[dict]
    total: int


class ProductResponse(BaseModel):
    product: dict


class CartAddRequest(BaseModel):
    product_id: str = Field(..., max_length=64)
    quantity: int = Field(1, ge=1, le=100)


class CartUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=0, le=100)


class CartResponse(BaseModel):
    items: list[dict]
    total: float
    item_count: int


class WatchlistAddRequest(BaseModel):
    product_id: str = Field(..., max_length=64)


class WatchlistResponse(BaseModel):
    items: list[dict]
    count: int


class WatchlistStatusResponse(BaseModel):
    product_id: str
    in_watchlist: bool


class SignInRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class SignUpRequest(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    mobile: Optional[str] = Field(None, max_length=32)


class AuthResponse(BaseModel):
    user: dict
    access_token: Optional[str] = None


class UserResponse(BaseModel):
    user: Optional[dict] = None


class StatusResponse(BaseModel):
    status: Literal["ok"]


class CheckoutRequest(BaseModel):
    name: str = ""
    email: str = ""
    mobile: str = ""
    address: str = ""
    city: str = ""
    postal_code: Optional[str] = None
    payment_method: str = "cash_on_delivery"
    notes: Optional[str] = Field(None, max_length=1024)


class OrderResponse(BaseModel):
    order: dict


class OrderListResponse(BaseModel):
    orders: list[dict]


class AdminUserListResponse(BaseModel):
    users: list[dict]


class AdminUserResponse(BaseModel):
    user: dict


class RoleUpdateRequest(BaseModel):
    role: Optional[Role] = None


class SellerProductRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    images: list[str] = Field(default_factory=list)
    category_id: Optional[str] = None
    condition: Condition = Condition.NEW
    location: str = ""
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_new: bool = False
    is_featured: bool = False


class ProductUpsertRequest(SellerProductRequest):
    seller_id: Optional[str] = None
    seller_name: str = "Admin"
    seller_avatar: Optional[str] = None
    seller_rating: float = Field(0.0, ge=0, le=5)


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    image: str = ""
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    category: dict


class UploadResponse(BaseModel):
    path: str
    url: str


class SignedUrlResponse(BaseModel):
    url: str


class OrderStatusUpdateRequest(BaseModel):
    status: OrderStatus
    notes: Optional[str] = Field(None, max_length=1024)


class OrderStatusHistoryResponse(BaseModel):
    history: list[dict]


class SellerIncomeListResponse(BaseModel):
    incomes: list[dict]


class AnalyticsResponse(BaseModel):
    total_revenue: float
    total_orders: int
    total_users: int
    total_products: int
    pending_orders: int
    completed_orders: int
    average_order_value: float
    top_categories: list[dict]


class SellerProfileListResponse(BaseModel):
    sellers: list[dict]


class SellerProfileResponse(BaseModel):
    seller: dict


class SellerFlagsRequest(BaseModel):
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None


class SellerRegisterRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    confirm_password: str = Field(..., max_length=128)
    business_name: str = Field(..., min_length=1, max_length=200)
    business_email: Optional[str] = Field(None, max_length=254)
    business_phone: Optional[str] = Field(None, max_length=32)
    business_description: Optional[str] = Field(None, max_length=2000)
    district: Optional[str] = Field(None, max_length=100)


class SellerRegisterResponse(BaseModel):
    user: dict
    seller: dict
    access_token: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    mobile: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)


class ProfileResponse(BaseModel):
    profile: dict
    order_count: int
