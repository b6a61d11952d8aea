"""
Cart persistence on top of the per-browser local store.
"""

from __future__ import annotations

import logging
from typing import Optional

from shared.types import CartItem, Product
from shared.utils import epoch_ms
from storefront.events import CART_UPDATED, Event, EventBus
from storefront.local_storage import LocalStorage, read_json_list, write_json_list

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "sibn-ecommerce-cart"


class CartManager:
    """Reads and writes one browser's cart, keeping one line per product."""

    def __init__(
        self,
        storage: LocalStorage,
        namespace: str,
        *,
        storage_key: str = DEFAULT_CART_KEY,
        events: Optional[EventBus] = None,
        origin: str | None = None,
    ):
        self.storage = storage
        self.namespace = namespace
        self.storage_key = storage_key
        self.events = events
        self.origin = origin

    def get_cart(self) -> list[CartItem]:
        cart: list[CartItem] = []
        for raw in read_json_list(self.storage, self.namespace, self.storage_key):
            try:
                cart.append(CartItem.from_json(raw))
            except Exception as exc:
                logger.warning("Skipping malformed cart entry: %s", exc)
        return cart

    def save_cart(self, cart: list[CartItem]) -> None:
        write_json_list(
            self.storage,
            self.namespace,
            self.storage_key,
            [item.as_dict() for item in cart],
            origin=self.origin,
        )

    def add_to_cart(self, product: Product, quantity: int = 1) -> list[CartItem]:
        cart = self.get_cart()
        existing = self._find(cart, product.id)
        if existing is not None:
            existing.quantity += quantity
        else:
            cart.append(
                CartItem(
                    id=f"cart-{product.id}-{epoch_ms()}",
                    product=product,
                    quantity=quantity,
                )
            )
        self.save_cart(cart)
        self._notify()
        return cart

    def remove_from_cart(self, product_id: str) -> list[CartItem]:
        cart = [item for item in self.get_cart() if item.product.id != product_id]
        self.save_cart(cart)
        self._notify()
        return cart

    def update_quantity(self, product_id: str, quantity: int) -> list[CartItem]:
        cart = self.get_cart()
        existing = self._find(cart, product_id)
        if existing is not None:
            if quantity <= 0:
                cart.remove(existing)
            else:
                existing.quantity = quantity
        self.save_cart(cart)
        self._notify()
        return cart

    def clear_cart(self) -> None:
        self.storage.remove_item(self.namespace, self.storage_key, origin=self.origin)
        self._notify()

    @staticmethod
    def get_cart_total(cart: list[CartItem]) -> float:
        return sum(item.product.price * item.quantity for item in cart)

    @staticmethod
    def get_cart_item_count(cart: list[CartItem]) -> int:
        return sum(item.quantity for item in cart)

    @staticmethod
    def _find(cart: list[CartItem], product_id: str) -> Optional[CartItem]:
        for item in cart:
            if item.product.id == product_id:
                return item
        return None

    def _notify(self) -> None:
        if self.events is not None:
            self.events.dispatch_event(Event(CART_UPDATED, target=self.namespace))
