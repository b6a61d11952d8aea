"""
Watchlist persistence on top of the per-browser local store.
"""

from __future__ import annotations

import logging
from typing import Optional

from shared.types import Product, WatchlistItem
from shared.utils import epoch_ms, utc_now_iso
from storefront.events import WATCHLIST_UPDATED, Event, EventBus
from storefront.local_storage import LocalStorage, read_json_list, write_json_list

logger = logging.getLogger(__name__)

DEFAULT_WATCHLIST_KEY = "sibn-ecommerce-watchlist"


class WatchlistManager:
    def __init__(
        self,
        storage: LocalStorage,
        namespace: str,
        *,
        storage_key: str = DEFAULT_WATCHLIST_KEY,
        events: Optional[EventBus] = None,
        origin: str | None = None,
    ):
        self.storage = storage
        self.namespace = namespace
        self.storage_key = storage_key
        self.events = events
        self.origin = origin

    def get_watchlist(self) -> list[WatchlistItem]:
        watchlist: list[WatchlistItem] = []
        for raw in read_json_list(self.storage, self.namespace, self.storage_key):
            try:
                watchlist.append(WatchlistItem.from_json(raw))
            except Exception as exc:
                logger.warning("Skipping malformed watchlist entry: %s", exc)
        return watchlist

    def save_watchlist(self, watchlist: list[WatchlistItem]) -> None:
        write_json_list(
            self.storage,
            self.namespace,
            self.storage_key,
            [item.as_dict() for item in watchlist],
            origin=self.origin,
        )

    def add_to_watchlist(self, product: Product) -> list[WatchlistItem]:
        watchlist = self.get_watchlist()
        if any(item.product.id == product.id for item in watchlist):
            return watchlist
        watchlist.append(
            WatchlistItem(
                id=f"watchlist-{product.id}-{epoch_ms()}",
                product=product,
                added_at=utc_now_iso(),
            )
        )
        self.save_watchlist(watchlist)
        self._notify()
        return watchlist

    def remove_from_watchlist(self, product_id: str) -> list[WatchlistItem]:
        watchlist = [
            item for item in self.get_watchlist() if item.product.id != product_id
        ]
        self.save_watchlist(watchlist)
        self._notify()
        return watchlist

    def clear_watchlist(self) -> None:
        self.storage.remove_item(self.namespace, self.storage_key, origin=self.origin)
        self._notify()

    def is_in_watchlist(self, product_id: str) -> bool:
        return any(item.product.id == product_id for item in self.get_watchlist())

    def get_watchlist_count(self) -> int:
        return len(self.get_watchlist())

    def _notify(self) -> None:
        if self.events is not None:
            self.events.dispatch_event(Event(WATCHLIST_UPDATED, target=self.namespace))
