"""
HTTP routes for the storefront API.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from shared.types import (
    DEFAULT_MAX_PRICE,
    Category,
    FilterOptions,
    Role,
    SortBy,
    User,
    UserProfile,
)
from storefront import catalog, functions, reports, sellers
from storefront.auth import AuthError, AuthManager, AuthProvider, role_from_metadata
from storefront.cart import CartManager
from storefront.db import DbClient, ProductRecord
from storefront.dependencies import (
    get_access_token,
    get_auth_manager,
    get_auth_provider,
    get_cart_manager,
    get_current_user,
    get_db_client,
    get_storage_client,
    get_watchlist_manager,
    require_admin,
    require_function_caller,
    require_seller,
    require_user,
)
from storefront.orders import CheckoutError, place_order
from storefront.schemas import (
    AdminUserListResponse,
    AdminUserResponse,
    AnalyticsResponse,
    AuthResponse,
    CartAddRequest,
    CartResponse,
    CartUpdateRequest,
    CategoryCreateRequest,
    CategoryListResponse,
    CategoryResponse,
    CheckoutRequest,
    OrderListResponse,
    OrderResponse,
    OrderStatusHistoryResponse,
    OrderStatusUpdateRequest,
    ProductListResponse,
    ProductResponse,
    ProductUpsertRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    SellerFlagsRequest,
    SellerIncomeListResponse,
    SellerProductRequest,
    SellerProfileListResponse,
    SellerProfileResponse,
    SellerRegisterRequest,
    SellerRegisterResponse,
    SignInRequest,
    SignUpRequest,
    SignedUrlResponse,
    StatusResponse,
    UploadResponse,
    UserResponse,
    WatchlistAddRequest,
    WatchlistResponse,
    WatchlistStatusResponse,
)
from storefront.storage import StorageClient
from storefront.watchlist import WatchlistManager

logger = logging.getLogger(__name__)

router = APIRouter()
functions_router = APIRouter()

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


def _require_product(db: DbClient, product_id: str):
    product = catalog.get_product_by_id(db, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        items=[item.as_dict() for item in cart],
        total=CartManager.get_cart_total(cart),
        item_count=CartManager.get_cart_item_count(cart),
    )


def _watchlist_response(watchlist) -> WatchlistResponse:
    return WatchlistResponse(
        items=[item.as_dict() for item in watchlist], count=len(watchlist)
    )


# Catalog


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(db: DbClient = Depends(get_db_client)):
    return CategoryListResponse(
        categories=[c.as_dict() for c in catalog.get_categories(db)]
    )


@router.get("/categories/{slug}/products", response_model=ProductListResponse)
def list_category_products(slug: str, db: DbClient = Depends(get_db_client)):
    if db.get_category_by_slug(slug) is None:
        raise HTTPException(status_code=404, detail="Category not found")
    products = catalog.get_products_by_category(db, slug)
    return ProductListResponse(
        products=[p.as_dict() for p in products], total=len(products)
    )


@router.get("/products", response_model=ProductListResponse)
def list_products(db: DbClient = Depends(get_db_client)):
    products = catalog.get_all_products(db)
    return ProductListResponse(
        products=[p.as_dict() for p in products], total=len(products)
    )


@router.get("/products/featured", response_model=ProductListResponse)
def list_featured_products(db: DbClient = Depends(get_db_client)):
    products = catalog.get_featured_products(db)
    return ProductListResponse(
        products=[p.as_dict() for p in products], total=len(products)
    )


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, db: DbClient = Depends(get_db_client)):
    return ProductResponse(product=_require_product(db, product_id).as_dict())


@router.get("/search", response_model=ProductListResponse)
def search(
    q: str = Query("", max_length=100),
    category: str = Query(""),
    min_price: float = Query(0, alias="minPrice", ge=0),
    max_price: float = Query(DEFAULT_MAX_PRICE, alias="maxPrice", ge=0),
    condition: str = Query(""),
    location: str = Query(""),
    brand: str = Query(""),
    sort_by: SortBy = Query(SortBy.NEWEST, alias="sortBy"),
    db: DbClient = Depends(get_db_client),
):
    filters = FilterOptions(
        query=q,
        category=category,
        min_price=min_price,
        max_price=max_price,
        conditions=[c for c in condition.split(",") if c],
        location=location,
        brand=brand,
        sort_by=sort_by,
    )
    products = catalog.search_products(catalog.get_all_products(db), filters)
    return ProductListResponse(
        products=[p.as_dict() for p in products], total=len(products)
    )


# Cart


@router.get("/cart", response_model=CartResponse)
def get_cart(cart: CartManager = Depends(get_cart_manager)):
    return _cart_response(cart.get_cart())


@router.post("/cart", response_model=CartResponse)
def add_to_cart(
    payload: CartAddRequest,
    cart: CartManager = Depends(get_cart_manager),
    db: DbClient = Depends(get_db_client),
):
    product = _require_product(db, payload.product_id)
    return _cart_response(cart.add_to_cart(product, payload.quantity))


@router.patch("/cart/{product_id}", response_model=CartResponse)
def update_cart_item(
    product_id: str,
    payload: CartUpdateRequest,
    cart: CartManager = Depends(get_cart_manager),
):
    return _cart_response(cart.update_quantity(product_id, payload.quantity))


@router.delete("/cart/{product_id}", response_model=CartResponse)
def remove_cart_item(product_id: str, cart: CartManager = Depends(get_cart_manager)):
    return _cart_response(cart.remove_from_cart(product_id))


@router.delete("/cart", response_model=CartResponse)
def clear_cart(cart: CartManager = Depends(get_cart_manager)):
    cart.clear_cart()
    return _cart_response([])


# Watchlist


@router.get("/watchlist", response_model=WatchlistResponse)
def get_watchlist(watchlist: WatchlistManager = Depends(get_watchlist_manager)):
    return _watchlist_response(watchlist.get_watchlist())


@router.post("/watchlist", response_model=WatchlistResponse)
def add_to_watchlist(
    payload: WatchlistAddRequest,
    watchlist: WatchlistManager = Depends(get_watchlist_manager),
    db: DbClient = Depends(get_db_client),
):
    product = _require_product(db, payload.product_id)
    return _watchlist_response(watchlist.add_to_watchlist(product))


@router.get("/watchlist/{product_id}", response_model=WatchlistStatusResponse)
def watchlist_status(
    product_id: str, watchlist: WatchlistManager = Depends(get_watchlist_manager)
):
    return WatchlistStatusResponse(
        product_id=product_id, in_watchlist=watchlist.is_in_watchlist(product_id)
    )


@router.delete("/watchlist/{product_id}", response_model=WatchlistResponse)
def remove_from_watchlist(
    product_id: str, watchlist: WatchlistManager = Depends(get_watchlist_manager)
):
    return _watchlist_response(watchlist.remove_from_watchlist(product_id))


@router.delete("/watchlist", response_model=WatchlistResponse)
def clear_watchlist(watchlist: WatchlistManager = Depends(get_watchlist_manager)):
    watchlist.clear_watchlist()
    return _watchlist_response([])


# Auth


@router.post("/auth/signin", response_model=AuthResponse)
def sign_in(payload: SignInRequest, auth: AuthManager = Depends(get_auth_manager)):
    result = auth.sign_in(payload.email, payload.password)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return AuthResponse(user=result.user.as_dict(), access_token=result.access_token)


@router.post("/auth/signup", response_model=AuthResponse, status_code=201)
def sign_up(
    payload: SignUpRequest,
    auth: AuthManager = Depends(get_auth_manager),
    db: DbClient = Depends(get_db_client),
):
    result = auth.sign_up(payload.name, payload.email, payload.password, payload.mobile)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    db.save_user_profile(
        UserProfile(
            id=result.user.id,
            email=result.user.email,
            name=result.user.name,
            mobile=result.user.mobile,
        )
    )
    return AuthResponse(user=result.user.as_dict(), access_token=result.access_token)


@router.post("/auth/signout", response_model=StatusResponse)
def sign_out(
    token: Optional[str] = Depends(get_access_token),
    auth: AuthManager = Depends(get_auth_manager),
):
    auth.sign_out(token)
    return StatusResponse(status="ok")


@router.get("/auth/me", response_model=UserResponse)
def me(user: Optional[User] = Depends(get_current_user)):
    return UserResponse(user=user.as_dict() if user else None)


# Checkout & orders


@router.post("/checkout", response_model=OrderResponse, status_code=201)
def checkout(
    payload: CheckoutRequest,
    user: User = Depends(require_user),
    cart: CartManager = Depends(get_cart_manager),
    db: DbClient = Depends(get_db_client),
):
    try:
        order = place_order(db, cart, user, payload.model_dump())
    except CheckoutError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return OrderResponse(order=order.as_dict())


@router.get("/account/orders", response_model=OrderListResponse)
def list_my_orders(
    user: User = Depends(require_user), db: DbClient = Depends(get_db_client)
):
    return OrderListResponse(orders=[o.as_dict() for o in db.list_orders(user.id)])


def _profile_response(db: DbClient, profile: UserProfile) -> ProfileResponse:
    order_count, _ = db.get_order_totals(profile.id)
    return ProfileResponse(profile=profile.as_dict(), order_count=order_count)


@router.get("/account/profile", response_model=ProfileResponse)
def get_my_profile(
    user: User = Depends(require_user), db: DbClient = Depends(get_db_client)
):
    profile = db.get_user_profile(user.id) or UserProfile(
        id=user.id, email=user.email, name=user.name, mobile=user.mobile
    )
    return _profile_response(db, profile)


@router.patch("/account/profile", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(require_user),
    db: DbClient = Depends(get_db_client),
):
    existing = db.get_user_profile(user.id)
    if existing is None:
        profile = UserProfile(id=user.id, **payload.model_dump())
    else:
        profile = replace(existing, **payload.model_dump())
    return _profile_response(db, db.save_user_profile(profile))


# Seller


@router.post("/seller/register", response_model=SellerRegisterResponse, status_code=201)
def seller_register(
    payload: SellerRegisterRequest,
    auth: AuthManager = Depends(get_auth_manager),
    db: DbClient = Depends(get_db_client),
):
    result = sellers.register_seller(auth, db, payload.model_dump())
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return SellerRegisterResponse(
        user=result.user.as_dict(),
        seller=db.get_seller_profile(result.user.id).as_dict(),
        access_token=result.access_token,
    )


@router.post("/seller/products", response_model=ProductResponse, status_code=201)
def seller_create_product(
    payload: SellerProductRequest,
    seller: User = Depends(require_seller),
    db: DbClient = Depends(get_db_client),
):
    profile = db.get_seller_profile(seller.id)
    if profile is None:
        raise HTTPException(status_code=403, detail="Seller profile not found")
    if not profile.is_active:
        raise HTTPException(status_code=403, detail="Seller account is inactive")
    _check_category(db, payload.category_id)
    data = payload.model_dump()
    data["condition"] = payload.condition.value
    try:
        record = sellers.build_seller_product(profile, data)
    except sellers.SellerError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    row = db.save_product(record)
    return ProductResponse(product=catalog.to_product(row, db.list_categories()).as_dict())


@router.get("/seller/orders", response_model=OrderListResponse)
def seller_list_orders(
    status: str = Query(""),
    q: str = Query("", max_length=100),
    seller: User = Depends(require_seller),
    db: DbClient = Depends(get_db_client),
):
    return OrderListResponse(
        orders=sellers.list_seller_orders(db, seller.id, status=status, query=q)
    )


@router.patch("/seller/orders/{order_id}/status", response_model=OrderResponse)
def seller_update_order_status(
    order_id: str,
    payload: OrderStatusUpdateRequest,
    seller: User = Depends(require_seller),
    db: DbClient = Depends(get_db_client),
):
    try:
        order = sellers.advance_order(db, seller, order_id, payload.status, payload.notes)
    except LookupError:
        raise HTTPException(status_code=404, detail="Order not found")
    except sellers.SellerError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return OrderResponse(order=sellers.seller_order_view(order, seller.id))


@router.get(
    "/seller/orders/{order_id}/history", response_model=OrderStatusHistoryResponse
)
def seller_order_history(
    order_id: str,
    seller: User = Depends(require_seller),
    db: DbClient = Depends(get_db_client),
):
    order = db.get_order(order_id)
    if order is None or not any(i.seller_id == seller.id for i in order.items):
        raise HTTPException(status_code=404, detail="Order not found")
    return _history_response(db, order_id)


def _history_response(db: DbClient, order_id: str) -> OrderStatusHistoryResponse:
    return OrderStatusHistoryResponse(
        history=[c.as_dict() for c in db.list_order_status_history(order_id)]
    )


# Admin


@router.get("/admin/users", response_model=AdminUserListResponse)
def admin_list_users(
    q: str = Query("", max_length=100),
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
    provider: AuthProvider = Depends(get_auth_provider),
):
    users = functions.list_user_summaries(db, provider)
    needle = q.strip().lower()
    if needle:
        users = [
            u
            for u in users
            if needle in (u["name"] or "").lower() or needle in (u["email"] or "").lower()
        ]
    return AdminUserListResponse(users=users)


@router.get("/admin/users/{user_id}", response_model=AdminUserResponse)
def admin_get_user(
    user_id: str,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
    provider: AuthProvider = Depends(get_auth_provider),
):
    details = functions.get_user_details(db, provider, user_id)
    if details is None:
        raise HTTPException(status_code=404, detail="User not found")
    return AdminUserResponse(user=details)


@router.patch("/admin/users/{user_id}/role", response_model=AdminUserResponse)
def admin_set_role(
    user_id: str,
    payload: RoleUpdateRequest,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
    provider: AuthProvider = Depends(get_auth_provider),
):
    auth_user = provider.admin_get_user_by_id(user_id)
    if auth_user is None or db.get_user_profile(user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")
    role = payload.role
    if role is None:
        current = role_from_metadata(auth_user.user_metadata)
        role = Role.USER if current == Role.ADMIN else Role.ADMIN
    try:
        provider.admin_update_user_metadata(user_id, {"role": role.value})
    except AuthError as exc:
        raise HTTPException(status_code=502, detail=exc.message)
    logger.info("Role of %s set to %s", user_id, role.value)
    return AdminUserResponse(user=functions.get_user_details(db, provider, user_id))


@router.get("/admin/orders", response_model=OrderListResponse)
def admin_list_orders(
    status: str = Query(""),
    district: str = Query(""),
    q: str = Query("", max_length=100),
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    return OrderListResponse(
        orders=reports.list_orders_with_sellers(
            db, status=status, district=district, query=q
        )
    )


@router.patch("/admin/orders/{order_id}/status", response_model=OrderResponse)
def admin_update_order_status(
    order_id: str,
    payload: OrderStatusUpdateRequest,
    admin: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    order = db.update_order_status(
        order_id,
        payload.status,
        changed_by_role=admin.role.value,
        changed_by=admin.id,
        notes=payload.notes,
    )
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    logger.info("Order %s set to %s by %s", order.order_number, order.status, admin.id)
    return OrderResponse(order=order.as_dict())


@router.get(
    "/admin/orders/{order_id}/history", response_model=OrderStatusHistoryResponse
)
def admin_order_history(
    order_id: str,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if db.get_order(order_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return _history_response(db, order_id)


@router.get("/admin/seller-incomes", response_model=SellerIncomeListResponse)
def admin_seller_incomes(
    _: User = Depends(require_admin), db: DbClient = Depends(get_db_client)
):
    return SellerIncomeListResponse(incomes=reports.seller_incomes(db))


@router.get("/admin/analytics", response_model=AnalyticsResponse)
def admin_analytics(
    _: User = Depends(require_admin), db: DbClient = Depends(get_db_client)
):
    return AnalyticsResponse(**reports.analytics(db))


@router.get("/admin/sellers", response_model=SellerProfileListResponse)
def admin_list_sellers(
    q: str = Query("", max_length=100),
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    profiles = db.list_seller_profiles()
    needle = q.strip().lower()
    if needle:
        profiles = [
            p
            for p in profiles
            if needle in p.business_name.lower()
            or needle in (p.business_email or "").lower()
        ]
    return SellerProfileListResponse(sellers=[p.as_dict() for p in profiles])


@router.patch("/admin/sellers/{seller_id}", response_model=SellerProfileResponse)
def admin_update_seller(
    seller_id: str,
    payload: SellerFlagsRequest,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    profile = db.get_seller_profile(seller_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Seller not found")
    changes = payload.model_dump(exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Nothing to update")
    profile = db.save_seller_profile(replace(profile, **changes))
    logger.info("Seller %s updated: %s", seller_id, changes)
    return SellerProfileResponse(seller=profile.as_dict())


def _product_record(payload: ProductUpsertRequest, product_id: str = "") -> ProductRecord:
    data = payload.model_dump()
    data["condition"] = payload.condition.value
    return ProductRecord(id=product_id, **data)


def _check_category(db: DbClient, category_id: Optional[str]) -> None:
    if category_id and db.get_category(category_id) is None:
        raise HTTPException(status_code=400, detail="Unknown category")


@router.post("/admin/products", response_model=ProductResponse, status_code=201)
def admin_create_product(
    payload: ProductUpsertRequest,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    _check_category(db, payload.category_id)
    row = db.save_product(_product_record(payload))
    return ProductResponse(product=catalog.to_product(row, db.list_categories()).as_dict())


@router.put("/admin/products/{product_id}", response_model=ProductResponse)
def admin_update_product(
    product_id: str,
    payload: ProductUpsertRequest,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if db.get_product(product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    _check_category(db, payload.category_id)
    row = db.save_product(_product_record(payload, product_id))
    return ProductResponse(product=catalog.to_product(row, db.list_categories()).as_dict())


@router.delete("/admin/products/{product_id}", response_model=StatusResponse)
def admin_delete_product(
    product_id: str,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if not db.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return StatusResponse(status="ok")


@router.post("/admin/categories", response_model=CategoryResponse, status_code=201)
def admin_create_category(
    payload: CategoryCreateRequest,
    _: User = Depends(require_admin),
    db: DbClient = Depends(get_db_client),
):
    if db.get_category_by_slug(payload.slug) is not None:
        raise HTTPException(status_code=409, detail="Category slug already exists")
    category = db.save_category(
        Category(
            id="",
            name=payload.name,
            slug=payload.slug,
            image=payload.image,
            description=payload.description,
        )
    )
    return CategoryResponse(category=category.as_dict())


@router.post("/admin/uploads", response_model=UploadResponse, status_code=201)
async def admin_upload_image(
    file: UploadFile = File(...),
    _: User = Depends(require_admin),
    storage: StorageClient = Depends(get_storage_client),
):
    extension = os.path.splitext(file.filename or "")[1].lstrip(".").lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Image file required")
    data = await file.read()
    path = f"products/{uuid4().hex}.{extension}"
    storage.upload_bytes(path, data, file.content_type or "application/octet-stream")
    return UploadResponse(path=path, url=storage.public_url(path))


@router.get("/admin/uploads/sign-url", response_model=SignedUrlResponse)
def admin_sign_url(
    path: str = Query(..., min_length=1, max_length=512),
    _: User = Depends(require_admin),
    storage: StorageClient = Depends(get_storage_client),
):
    return SignedUrlResponse(url=storage.presign_get(path))


# Serverless functions


@functions_router.get("/functions/v1/get-users")
def get_users_function(
    user_id: Optional[str] = Query(None, alias="userId"),
    _: None = Depends(require_function_caller),
    db: DbClient = Depends(get_db_client),
    provider: AuthProvider = Depends(get_auth_provider),
):
    result = functions.get_users(db, provider, user_id)
    return JSONResponse(status_code=result.status_code, content=result.body)


@functions_router.post("/functions/v1/create-users")
def create_users_function(
    _: None = Depends(require_function_caller),
    db: DbClient = Depends(get_db_client),
    provider: AuthProvider = Depends(get_auth_provider),
):
    result = functions.create_users(db, provider)
    return JSONResponse(status_code=result.status_code, content=result.body)
