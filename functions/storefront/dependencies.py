"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, Response

from shared.types import Role, User
from shared.utils import get_unique_id
from storefront.auth import (
    AuthManager,
    AuthProvider,
    InMemoryAuthProvider,
    SupabaseAuthProvider,
)
from storefront.cart import CartManager
from storefront.config import get_settings
from storefront.db import DbClient, InMemoryDbClient, PostgresDbClient
from storefront.events import EventBus
from storefront.local_storage import (
    InMemoryLocalStorage,
    LocalStorage,
    RedisLocalStorage,
)
from storefront.storage import InMemoryStorageClient, S3StorageClient, StorageClient
from storefront.watchlist import WatchlistManager

_db_client: DbClient | None = None
_auth_provider: AuthProvider | None = None
_local_storage: LocalStorage | None = None
_storage_client: StorageClient | None = None
_event_bus: EventBus | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so catalog and order state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_auth_provider() -> AuthProvider:
    global _auth_provider
    if _auth_provider:
        return _auth_provider

    settings = get_settings()
    if (
        settings.use_in_memory_backends
        or not settings.supabase_url
        or not settings.supabase_anon_key
    ):
        _auth_provider = InMemoryAuthProvider()
    else:
        _auth_provider = SupabaseAuthProvider(
            url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            service_role_key=settings.supabase_service_role_key or "",
        )
    return _auth_provider


def get_local_storage() -> LocalStorage:
    global _local_storage
    if _local_storage:
        return _local_storage

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.redis_url:
        _local_storage = InMemoryLocalStorage()
    else:
        _local_storage = RedisLocalStorage(
            url=settings.redis_url,
            prefix=settings.local_storage_prefix,
            ttl_seconds=settings.local_storage_ttl_seconds,
        )
    return _local_storage


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.storage_bucket:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = S3StorageClient(
            bucket=settings.storage_bucket,
            region=settings.storage_region or "",
            endpoint=settings.storage_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.storage_public_base_url or "",
        )
    return _storage_client


def get_event_bus() -> EventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_dependencies() -> None:
    """Drop all singletons so the next request rebuilds them from settings."""
    global _db_client, _auth_provider, _local_storage, _storage_client, _event_bus
    _db_client = None
    _auth_provider = None
    _local_storage = None
    _storage_client = None
    _event_bus = None


def get_auth_manager(
    provider: AuthProvider = Depends(get_auth_provider),
    events: EventBus = Depends(get_event_bus),
) -> AuthManager:
    return AuthManager(provider, events)


def get_client_id(
    request: Request,
    response: Response,
    x_client_id: Optional[str] = Header(None),
) -> str:
    """Identify the browser whose local store a request touches."""
    if x_client_id:
        return x_client_id
    cookie_name = get_settings().client_cookie_name
    client_id = request.cookies.get(cookie_name)
    if not client_id:
        client_id = get_unique_id()
        response.set_cookie(cookie_name, client_id, httponly=True, samesite="lax")
    return client_id


def get_cart_manager(
    client_id: str = Depends(get_client_id),
    storage: LocalStorage = Depends(get_local_storage),
    events: EventBus = Depends(get_event_bus),
) -> CartManager:
    return CartManager(
        storage,
        client_id,
        storage_key=get_settings().cart_storage_key,
        events=events,
    )


def get_watchlist_manager(
    client_id: str = Depends(get_client_id),
    storage: LocalStorage = Depends(get_local_storage),
    events: EventBus = Depends(get_event_bus),
) -> WatchlistManager:
    return WatchlistManager(
        storage,
        client_id,
        storage_key=get_settings().watchlist_storage_key,
        events=events,
    )


def get_access_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(
    token: Optional[str] = Depends(get_access_token),
    auth: AuthManager = Depends(get_auth_manager),
) -> Optional[User]:
    return auth.get_user(token)


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(user: User = Depends(require_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def require_seller(user: User = Depends(require_user)) -> User:
    if user.role != Role.SELLER:
        raise HTTPException(status_code=403, detail="Seller access required")
    return user


def require_function_caller(
    token: Optional[str] = Depends(get_access_token),
    auth: AuthManager = Depends(get_auth_manager),
) -> None:
    """Serverless functions accept the service-role key or an admin session."""
    service_key = get_settings().supabase_service_role_key
    if token and service_key and token == service_key:
        return
    if not token:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    if not auth.is_admin(token):
        raise HTTPException(status_code=403, detail="Admin access required")
