"""
Observable cart, watchlist and auth views.

A list state object is one "tab": it loads the list once, then refreshes
whenever the backing store reports a change for its key (another tab wrote) or
the event bus announces an update for its client namespace. `AuthState` tracks
the signed-in user from `authStateChanged` announcements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from shared.types import User
from storefront.auth import AuthManager, AuthResult
from storefront.cart import CartManager
from storefront.events import (
    AUTH_STATE_CHANGED,
    CART_UPDATED,
    WATCHLIST_UPDATED,
    Event,
    EventBus,
)
from storefront.local_storage import LocalStorage, StorageEvent
from storefront.watchlist import WatchlistManager


class _ListState(ABC):
    update_event: str = ""

    def __init__(self, manager, storage: LocalStorage, events: EventBus):
        self.manager = manager
        self.events = events
        self.is_loading = True
        self.items: list = []
        self.refresh()
        self.is_loading = False
        self._unsubscribe = storage.subscribe(manager.namespace, self._on_storage)
        events.add_event_listener(self.update_event, self._on_update)

    @abstractmethod
    def refresh(self) -> None:
        ...

    def close(self) -> None:
        self._unsubscribe()
        self.events.remove_event_listener(self.update_event, self._on_update)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _on_storage(self, event: StorageEvent) -> None:
        # A None key means the whole namespace was cleared.
        if event.key is None or event.key == self.manager.storage_key:
            self.refresh()

    def _on_update(self, event: Event) -> None:
        if event.target is None or event.target == self.manager.namespace:
            self.refresh()


class CartState(_ListState):
    update_event = CART_UPDATED
    manager: CartManager

    def refresh(self) -> None:
        self.items = self.manager.get_cart()

    def add_to_cart(self, product, quantity: int = 1) -> None:
        self.items = self.manager.add_to_cart(product, quantity)

    def remove_from_cart(self, product_id: str) -> None:
        self.items = self.manager.remove_from_cart(product_id)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        self.items = self.manager.update_quantity(product_id, quantity)

    def clear_cart(self) -> None:
        self.manager.clear_cart()
        self.items = []

    @property
    def cart_total(self) -> float:
        return CartManager.get_cart_total(self.items)

    @property
    def cart_item_count(self) -> int:
        return CartManager.get_cart_item_count(self.items)

    def is_in_cart(self, product_id: str) -> bool:
        return any(item.product.id == product_id for item in self.items)

    def get_item_quantity(self, product_id: str) -> int:
        for item in self.items:
            if item.product.id == product_id:
                return item.quantity
        return 0


class WatchlistState(_ListState):
    update_event = WATCHLIST_UPDATED
    manager: WatchlistManager

    def refresh(self) -> None:
        self.items = self.manager.get_watchlist()

    def add_to_watchlist(self, product) -> None:
        self.items = self.manager.add_to_watchlist(product)

    def remove_from_watchlist(self, product_id: str) -> None:
        self.items = self.manager.remove_from_watchlist(product_id)

    def clear_watchlist(self) -> None:
        self.manager.clear_watchlist()
        self.items = []

    def is_in_watchlist(self, product_id: str) -> bool:
        return any(item.product.id == product_id for item in self.items)

    @property
    def count(self) -> int:
        return len(self.items)


class AuthState:
    """Current user, kept in step with sign-in and sign-out announcements."""

    def __init__(
        self,
        auth: AuthManager,
        events: EventBus,
        access_token: Optional[str] = None,
    ):
        self.auth = auth
        self.events = events
        self.is_loading = True
        self.user: Optional[User] = auth.get_user(access_token)
        self.is_loading = False
        events.add_event_listener(AUTH_STATE_CHANGED, self._on_auth_change)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def sign_in(self, email: str, password: str) -> AuthResult:
        result = self.auth.sign_in(email, password)
        if result.success and result.user:
            self.user = result.user
        return result

    def sign_up(
        self, name: str, email: str, password: str, mobile: str | None = None
    ) -> AuthResult:
        result = self.auth.sign_up(name, email, password, mobile)
        if result.success and result.user:
            self.user = result.user
        return result

    def sign_out(self, access_token: str | None = None) -> None:
        self.auth.sign_out(access_token)
        self.user = None

    def close(self) -> None:
        self.events.remove_event_listener(AUTH_STATE_CHANGED, self._on_auth_change)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _on_auth_change(self, event: Event) -> None:
        self.user = event.detail
