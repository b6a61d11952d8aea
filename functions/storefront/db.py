"""
Database abstraction for the managed Postgres instance and an in-memory test
implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Protocol

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
    func,
    select,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.types import (
    Category,
    Order,
    OrderItem,
    OrderStatus,
    OrderStatusChange,
    SellerProfile,
    UserProfile,
)
from shared.utils import get_unique_id, utc_now_iso


@dataclass
class ProductRecord:
    """A `products` row, in the provider's column layout."""

    id: str
    title: str
    description: str
    price: float
    condition: str
    location: str
    seller_name: str
    original_price: Optional[float] = None
    images: list = field(default_factory=list)
    category_id: Optional[str] = None
    seller_id: Optional[str] = None
    seller_avatar: Optional[str] = None
    seller_rating: float = 0.0
    features: list = field(default_factory=list)
    tags: list = field(default_factory=list)
    is_new: bool = False
    is_featured: bool = False
    created_at: str = ""
    updated_at: str = ""


class DbClient(Protocol):
    """Interface for database access."""

    def list_categories(self) -> list[Category]:
        ...

    def get_category(self, category_id: str) -> Optional[Category]:
        ...

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        ...

    def save_category(self, category: Category) -> Category:
        ...

    def list_products(
        self,
        *,
        featured_only: bool = False,
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[ProductRecord]:
        ...

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        ...

    def save_product(self, product: ProductRecord) -> ProductRecord:
        ...

    def delete_product(self, product_id: str) -> bool:
        ...

    def list_user_profiles(self) -> list[UserProfile]:
        ...

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        ...

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        ...

    def get_seller_profile(self, user_id: str) -> Optional[SellerProfile]:
        ...

    def list_seller_profiles(self) -> list[SellerProfile]:
        ...

    def save_seller_profile(self, profile: SellerProfile) -> SellerProfile:
        ...

    def create_order(self, order: Order) -> Order:
        ...

    def list_orders(self, user_id: str) -> list[Order]:
        ...

    def get_order_totals(self, user_id: str) -> tuple[int, float]:
        ...

    def list_all_orders(self) -> list[Order]:
        ...

    def list_seller_orders(self, seller_id: str) -> list[Order]:
        ...

    def get_order(self, order_id: str) -> Optional[Order]:
        ...

    def update_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        *,
        changed_by_role: str,
        changed_by: str | None = None,
        notes: str | None = None,
    ) -> Optional[Order]:
        ...

    def list_order_status_history(self, order_id: str) -> list[OrderStatusChange]:
        ...


def _stamp(record):
    now = utc_now_iso()
    if not record.created_at:
        record.created_at = now
    if hasattr(record, "updated_at"):
        record.updated_at = now
    return record


def _prepare_order(order: Order) -> Order:
    order = replace(order, items=[replace(item) for item in order.items])
    if not order.id:
        order.id = get_unique_id()
    _stamp(order)
    for item in order.items:
        item.id = item.id or get_unique_id()
        item.order_id = order.id
    return order


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.categories: Dict[str, Category] = {}
        self.products: Dict[str, ProductRecord] = {}
        self.user_profiles: Dict[str, UserProfile] = {}
        self.seller_profiles: Dict[str, SellerProfile] = {}
        self.orders: Dict[str, Order] = {}
        self.status_history: list[OrderStatusChange] = []

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.categories.clear()
        self.products.clear()
        self.user_profiles.clear()
        self.seller_profiles.clear()
        self.orders.clear()
        self.status_history.clear()

    def list_categories(self) -> list[Category]:
        return sorted(self.categories.values(), key=lambda c: c.name)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self.categories.get(category_id)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        for category in self.categories.values():
            if category.slug == slug:
                return category
        return None

    def save_category(self, category: Category) -> Category:
        if not category.id:
            category = replace(category, id=get_unique_id())
        self.categories[category.id] = category
        return category

    def list_products(
        self,
        *,
        featured_only: bool = False,
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[ProductRecord]:
        rows = [
            row
            for row in self.products.values()
            if (not featured_only or row.is_featured)
            and (category_id is None or row.category_id == category_id)
        ]
        rows.sort(key=lambda row: row.created_at, reverse=True)
        return rows[:limit] if limit is not None else rows

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        return self.products.get(product_id)

    def save_product(self, product: ProductRecord) -> ProductRecord:
        product = replace(product, id=product.id or get_unique_id())
        existing = self.products.get(product.id)
        if existing and not product.created_at:
            product.created_at = existing.created_at
        _stamp(product)
        self.products[product.id] = product
        return product

    def delete_product(self, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None

    def list_user_profiles(self) -> list[UserProfile]:
        return sorted(
            self.user_profiles.values(), key=lambda p: p.created_at, reverse=True
        )

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self.user_profiles.get(user_id)

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        profile = replace(profile)
        if not profile.created_at:
            profile.created_at = utc_now_iso()
        profile.updated_at = utc_now_iso()
        self.user_profiles[profile.id] = profile
        return profile

    def list_seller_profiles(self) -> list[SellerProfile]:
        return sorted(
            self.seller_profiles.values(), key=lambda p: p.created_at, reverse=True
        )

    def get_seller_profile(self, user_id: str) -> Optional[SellerProfile]:
        return self.seller_profiles.get(user_id)

    def save_seller_profile(self, profile: SellerProfile) -> SellerProfile:
        profile = replace(profile)
        if not profile.created_at:
            profile.created_at = utc_now_iso()
        self.seller_profiles[profile.id] = profile
        return profile

    def create_order(self, order: Order) -> Order:
        order = _prepare_order(order)
        self.orders[order.id] = order
        return order

    def list_orders(self, user_id: str) -> list[Order]:
        return sorted(
            (o for o in self.orders.values() if o.user_id == user_id),
            key=lambda o: o.created_at,
            reverse=True,
        )

    def get_order_totals(self, user_id: str) -> tuple[int, float]:
        orders = [o for o in self.orders.values() if o.user_id == user_id]
        return len(orders), sum(float(o.total_amount) for o in orders)

    def list_all_orders(self) -> list[Order]:
        return sorted(self.orders.values(), key=lambda o: o.created_at, reverse=True)

    def list_seller_orders(self, seller_id: str) -> list[Order]:
        return [
            order
            for order in self.list_all_orders()
            if any(item.seller_id == seller_id for item in order.items)
        ]

    def get_order(self, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    def update_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        *,
        changed_by_role: str,
        changed_by: str | None = None,
        notes: str | None = None,
    ) -> Optional[Order]:
        order = self.orders.get(order_id)
        if order is None:
            return None
        change = OrderStatusChange(
            id=get_unique_id(),
            order_id=order_id,
            old_status=order.status.value,
            new_status=status.value,
            changed_by_role=changed_by_role,
            changed_by=changed_by,
            notes=notes,
            created_at=utc_now_iso(),
        )
        order.status = status
        order.updated_at = change.created_at
        self.status_history.append(change)
        return order

    def list_order_status_history(self, order_id: str) -> list[OrderStatusChange]:
        # Appended chronologically.
        return [c for c in reversed(self.status_history) if c.order_id == order_id]


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    @staticmethod
    def _to_category(row: "CategoryRow") -> Category:
        return Category(
            id=row.id,
            name=row.name,
            slug=row.slug,
            image=row.image or "",
            description=row.description,
            product_count=row.product_count or 0,
        )

    @staticmethod
    def _to_product(row: "ProductRow") -> ProductRecord:
        return ProductRecord(
            id=row.id,
            title=row.title,
            description=row.description,
            price=row.price,
            original_price=row.original_price,
            images=list(row.images or []),
            category_id=row.category_id,
            condition=row.condition,
            location=row.location,
            seller_id=row.seller_id,
            seller_name=row.seller_name,
            seller_avatar=row.seller_avatar,
            seller_rating=row.seller_rating or 0.0,
            features=list(row.features or []),
            tags=list(row.tags or []),
            is_new=bool(row.is_new),
            is_featured=bool(row.is_featured),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_profile(row: "UserProfileRow") -> UserProfile:
        return UserProfile(
            id=row.id,
            email=row.email,
            name=row.name,
            created_at=row.created_at,
            address=row.address,
            city=row.city,
            mobile=row.mobile,
            postal_code=row.postal_code,
            updated_at=row.updated_at or "",
        )

    @staticmethod
    def _to_seller(row: "SellerProfileRow") -> SellerProfile:
        return SellerProfile(
            id=row.id,
            business_name=row.business_name,
            business_email=row.business_email,
            business_phone=row.business_phone,
            business_description=row.business_description,
            business_logo=row.business_logo,
            district=row.district,
            rating=row.rating or 0.0,
            is_verified=bool(row.is_verified),
            is_active=bool(row.is_active),
            created_at=row.created_at,
        )

    @staticmethod
    def _to_order(row: "OrderRow", items: list["OrderItemRow"]) -> Order:
        return Order(
            id=row.id,
            order_number=row.order_number,
            user_id=row.user_id,
            status=OrderStatus(row.status),
            total_amount=row.total_amount,
            customer_name=row.customer_name,
            customer_email=row.customer_email,
            customer_mobile=row.customer_mobile,
            shipping_address=row.shipping_address,
            shipping_city=row.shipping_city,
            shipping_postal_code=row.shipping_postal_code,
            payment_method=row.payment_method,
            payment_status=row.payment_status,
            notes=row.notes,
            created_at=row.created_at,
            updated_at=row.updated_at,
            items=[
                OrderItem(
                    id=item.id,
                    order_id=item.order_id,
                    product_id=item.product_id,
                    product_title=item.product_title,
                    product_image=item.product_image,
                    quantity=item.quantity,
                    price=item.price,
                    subtotal=item.subtotal,
                    seller_id=item.seller_id,
                )
                for item in items
            ],
        )

    def list_categories(self) -> list[Category]:
        with self.Session() as session:
            rows = session.execute(
                select(CategoryRow).order_by(CategoryRow.name.asc())
            ).scalars()
            return [self._to_category(row) for row in rows]

    def get_category(self, category_id: str) -> Optional[Category]:
        with self.Session() as session:
            row = session.get(CategoryRow, category_id)
            return self._to_category(row) if row else None

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        with self.Session() as session:
            row = session.execute(
                select(CategoryRow).where(CategoryRow.slug == slug)
            ).scalar_one_or_none()
            return self._to_category(row) if row else None

    def save_category(self, category: Category) -> Category:
        now = utc_now_iso()
        with self.Session() as session:
            row = session.get(CategoryRow, category.id) if category.id else None
            if row is None:
                row = CategoryRow(id=category.id or get_unique_id(), created_at=now)
                session.add(row)
            row.name = category.name
            row.slug = category.slug
            row.image = category.image
            row.description = category.description
            row.product_count = category.product_count
            row.updated_at = now
            session.commit()
            return self._to_category(row)

    def list_products(
        self,
        *,
        featured_only: bool = False,
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[ProductRecord]:
        with self.Session() as session:
            stmt = select(ProductRow).order_by(ProductRow.created_at.desc())
            if featured_only:
                stmt = stmt.where(ProductRow.is_featured.is_(True))
            if category_id is not None:
                stmt = stmt.where(ProductRow.category_id == category_id)
            if limit is not None:
                stmt = stmt.limit(limit)
            return [self._to_product(row) for row in session.execute(stmt).scalars()]

    def get_product(self, product_id: str) -> Optional[ProductRecord]:
        with self.Session() as session:
            row = session.get(ProductRow, product_id)
            return self._to_product(row) if row else None

    def save_product(self, product: ProductRecord) -> ProductRecord:
        now = utc_now_iso()
        with self.Session() as session:
            row = session.get(ProductRow, product.id) if product.id else None
            if row is None:
                row = ProductRow(
                    id=product.id or get_unique_id(),
                    created_at=product.created_at or now,
                )
                session.add(row)
            elif product.created_at:
                row.created_at = product.created_at
            for column in (
                "title",
                "description",
                "price",
                "original_price",
                "category_id",
                "condition",
                "location",
                "seller_id",
                "seller_name",
                "seller_avatar",
                "seller_rating",
                "is_new",
                "is_featured",
            ):
                setattr(row, column, getattr(product, column))
            row.images = list(product.images)
            row.features = list(product.features)
            row.tags = list(product.tags)
            row.updated_at = now
            session.commit()
            return self._to_product(row)

    def delete_product(self, product_id: str) -> bool:
        with self.Session() as session:
            row = session.get(ProductRow, product_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    def list_user_profiles(self) -> list[UserProfile]:
        with self.Session() as session:
            rows = session.execute(
                select(UserProfileRow).order_by(UserProfileRow.created_at.desc())
            ).scalars()
            return [self._to_profile(row) for row in rows]

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        with self.Session() as session:
            row = session.get(UserProfileRow, user_id)
            return self._to_profile(row) if row else None

    def save_user_profile(self, profile: UserProfile) -> UserProfile:
        with self.Session() as session:
            row = session.get(UserProfileRow, profile.id)
            if row is None:
                row = UserProfileRow(
                    id=profile.id, created_at=profile.created_at or utc_now_iso()
                )
                session.add(row)
            row.email = profile.email
            row.name = profile.name
            row.address = profile.address
            row.city = profile.city
            row.mobile = profile.mobile
            row.postal_code = profile.postal_code
            row.updated_at = utc_now_iso()
            session.commit()
            return self._to_profile(row)

    def list_seller_profiles(self) -> list[SellerProfile]:
        with self.Session() as session:
            rows = session.execute(
                select(SellerProfileRow).order_by(SellerProfileRow.created_at.desc())
            ).scalars()
            return [self._to_seller(row) for row in rows]

    def get_seller_profile(self, user_id: str) -> Optional[SellerProfile]:
        with self.Session() as session:
            row = session.get(SellerProfileRow, user_id)
            return self._to_seller(row) if row else None

    def save_seller_profile(self, profile: SellerProfile) -> SellerProfile:
        with self.Session() as session:
            row = session.get(SellerProfileRow, profile.id)
            if row is None:
                row = SellerProfileRow(
                    id=profile.id, created_at=profile.created_at or utc_now_iso()
                )
                session.add(row)
            row.business_name = profile.business_name
            row.business_email = profile.business_email
            row.business_phone = profile.business_phone
            row.business_description = profile.business_description
            row.business_logo = profile.business_logo
            row.district = profile.district
            row.rating = profile.rating
            row.is_verified = profile.is_verified
            row.is_active = profile.is_active
            session.commit()
            return self._to_seller(row)

    def create_order(self, order: Order) -> Order:
        order = _prepare_order(order)
        with self.Session() as session:
            session.add(
                OrderRow(
                    id=order.id,
                    order_number=order.order_number,
                    user_id=order.user_id,
                    status=order.status.value,
                    total_amount=order.total_amount,
                    customer_name=order.customer_name,
                    customer_email=order.customer_email,
                    customer_mobile=order.customer_mobile,
                    shipping_address=order.shipping_address,
                    shipping_city=order.shipping_city,
                    shipping_postal_code=order.shipping_postal_code,
                    payment_method=order.payment_method,
                    payment_status=order.payment_status,
                    notes=order.notes,
                    created_at=order.created_at,
                    updated_at=order.updated_at,
                )
            )
            # Flush the parent first so item foreign keys resolve.
            session.flush()
            for item in order.items:
                session.add(
                    OrderItemRow(
                        id=item.id,
                        order_id=order.id,
                        product_id=item.product_id,
                        product_title=item.product_title,
                        product_image=item.product_image,
                        quantity=item.quantity,
                        price=item.price,
                        subtotal=item.subtotal,
                        seller_id=item.seller_id,
                    )
                )
            session.commit()
        return order

    def _load_orders(self, session: Session, stmt) -> list[Order]:
        rows = session.execute(stmt.order_by(OrderRow.created_at.desc())).scalars().all()
        orders = []
        for row in rows:
            items = session.execute(
                select(OrderItemRow).where(OrderItemRow.order_id == row.id)
            ).scalars().all()
            orders.append(self._to_order(row, items))
        return orders

    def list_orders(self, user_id: str) -> list[Order]:
        with self.Session() as session:
            return self._load_orders(
                session, select(OrderRow).where(OrderRow.user_id == user_id)
            )

    def get_order_totals(self, user_id: str) -> tuple[int, float]:
        with self.Session() as session:
            count, total = session.execute(
                select(
                    func.count(OrderRow.id),
                    func.coalesce(func.sum(OrderRow.total_amount), 0),
                ).where(OrderRow.user_id == user_id)
            ).one()
            return int(count or 0), float(total or 0)

    def list_all_orders(self) -> list[Order]:
        with self.Session() as session:
            return self._load_orders(session, select(OrderRow))

    def list_seller_orders(self, seller_id: str) -> list[Order]:
        with self.Session() as session:
            order_ids = select(OrderItemRow.order_id).where(
                OrderItemRow.seller_id == seller_id
            )
            return self._load_orders(
                session, select(OrderRow).where(OrderRow.id.in_(order_ids))
            )

    def get_order(self, order_id: str) -> Optional[Order]:
        with self.Session() as session:
            orders = self._load_orders(
                session, select(OrderRow).where(OrderRow.id == order_id)
            )
            return orders[0] if orders else None

    def update_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        *,
        changed_by_role: str,
        changed_by: str | None = None,
        notes: str | None = None,
    ) -> Optional[Order]:
        now = utc_now_iso()
        with self.Session() as session:
            row = session.get(OrderRow, order_id)
            if row is None:
                return None
            session.add(
                OrderStatusHistoryRow(
                    order_id=order_id,
                    old_status=row.status,
                    new_status=status.value,
                    changed_by=changed_by,
                    changed_by_role=changed_by_role,
                    notes=notes,
                    created_at=now,
                )
            )
            row.status = status.value
            row.updated_at = now
            session.commit()
        return self.get_order(order_id)

    def list_order_status_history(self, order_id: str) -> list[OrderStatusChange]:
        with self.Session() as session:
            rows = session.execute(
                select(OrderStatusHistoryRow)
                .where(OrderStatusHistoryRow.order_id == order_id)
                .order_by(
                    OrderStatusHistoryRow.created_at.desc(),
                    OrderStatusHistoryRow.id.desc(),
                )
            ).scalars()
            return [
                OrderStatusChange(
                    id=str(row.id),
                    order_id=row.order_id,
                    old_status=row.old_status,
                    new_status=row.new_status,
                    changed_by=row.changed_by,
                    changed_by_role=row.changed_by_role,
                    notes=row.notes,
                    created_at=row.created_at,
                )
                for row in rows
            ]


Base = declarative_base()


class CategoryRow(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    image = Column(String, nullable=False, default="")
    description = Column(Text, nullable=True)
    product_count = Column(Integer, nullable=False, default=0)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)


class ProductRow(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    category_id = Column(String, ForeignKey("categories.id"), nullable=True, index=True)
    condition = Column(String, nullable=False)
    location = Column(String, nullable=False)
    seller_id = Column(String, nullable=True, index=True)
    seller_name = Column(String, nullable=False)
    seller_avatar = Column(String, nullable=True)
    seller_rating = Column(Float, nullable=False, default=0.0)
    features = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    is_new = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)


class UserProfileRow(Base):
    __tablename__ = "user_profiles"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=False)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    mobile = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=True)


class SellerProfileRow(Base):
    __tablename__ = "seller_profiles"

    id = Column(String, primary_key=True)
    business_name = Column(String, nullable=False)
    business_email = Column(String, nullable=True)
    business_phone = Column(String, nullable=True)
    business_description = Column(Text, nullable=True)
    business_logo = Column(String, nullable=True)
    district = Column(String, nullable=True)
    rating = Column(Float, nullable=False, default=0.0)
    is_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(String, nullable=False, index=True)


class OrderRow(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    order_number = Column(String, nullable=False, unique=True)
    user_id = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False)
    total_amount = Column(Float, nullable=False)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_mobile = Column(String, nullable=False)
    shipping_address = Column(Text, nullable=False)
    shipping_city = Column(String, nullable=False)
    shipping_postal_code = Column(String, nullable=True)
    payment_method = Column(String, nullable=False)
    payment_status = Column(String, nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)


class OrderItemRow(Base):
    __tablename__ = "order_items"

    id = Column(String, primary_key=True)
    order_id = Column(String, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String, nullable=False)
    product_title = Column(String, nullable=False)
    product_image = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    subtotal = Column(Float, nullable=False)
    seller_id = Column(String, nullable=True)


class OrderStatusHistoryRow(Base):
    __tablename__ = "order_status_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String, ForeignKey("orders.id"), nullable=False, index=True)
    old_status = Column(String, nullable=False)
    new_status = Column(String, nullable=False)
    changed_by = Column(String, nullable=True)
    changed_by_role = Column(String, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(String, nullable=False)
