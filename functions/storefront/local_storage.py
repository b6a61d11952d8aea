"""
Per-browser key/value store backing the cart and watchlist.

Each browser is a namespace (its client id). Writes and removals publish a
`StorageEvent` to every subscriber of the namespace, which is how open tabs
of the same browser stay in sync. Supports an in-memory implementation for
tests/local runs and a Redis-backed one for production.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from typing import Callable, Optional, Protocol

import redis
from redis import exceptions as redis_exceptions

logger = logging.getLogger(__name__)


@dataclass
class StorageEvent:
    namespace: str
    key: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]
    origin: Optional[str] = None


StorageListener = Callable[[StorageEvent], None]
Unsubscribe = Callable[[], None]


class LocalStorage(Protocol):
    """String key/value storage partitioned by client namespace."""

    def get_item(self, namespace: str, key: str) -> Optional[str]:
        ...

    def set_item(
        self, namespace: str, key: str, value: str, *, origin: str | None = None
    ) -> None:
        ...

    def remove_item(
        self, namespace: str, key: str, *, origin: str | None = None
    ) -> None:
        ...

    def subscribe(self, namespace: str, listener: StorageListener) -> Unsubscribe:
        ...


@dataclass
class InMemoryLocalStorage:
    """Dictionary-backed storage for tests/dev."""

    items: dict = field(default_factory=dict)

    def __post_init__(self):
        self._listeners: dict[str, list[StorageListener]] = defaultdict(list)
        self._lock = threading.RLock()

    def get_item(self, namespace: str, key: str) -> Optional[str]:
        with self._lock:
            return self.items.get((namespace, key))

    def set_item(
        self, namespace: str, key: str, value: str, *, origin: str | None = None
    ) -> None:
        with self._lock:
            old_value = self.items.get((namespace, key))
            self.items[(namespace, key)] = value
        self._publish(StorageEvent(namespace, key, old_value, value, origin))

    def remove_item(
        self, namespace: str, key: str, *, origin: str | None = None
    ) -> None:
        with self._lock:
            old_value = self.items.pop((namespace, key), None)
        self._publish(StorageEvent(namespace, key, old_value, None, origin))

    def subscribe(self, namespace: str, listener: StorageListener) -> Unsubscribe:
        with self._lock:
            self._listeners[namespace].append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners[namespace]:
                    self._listeners[namespace].remove(listener)

        return unsubscribe

    def reset(self) -> None:
        with self._lock:
            self.items.clear()
            self._listeners.clear()

    def _publish(self, event: StorageEvent) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event.namespace, ()))
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for %s", event.namespace)


@dataclass
class RedisLocalStorage:
    """Redis-backed storage; storage events travel over pub/sub."""

    url: str
    prefix: str = "storefront:local"
    ttl_seconds: int | None = 60 * 60 * 24 * 30

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def _key(self, namespace: str, key: str) -> str:
        return f"{self.prefix}:{namespace}:{key}"

    def _channel(self, namespace: str) -> str:
        return f"{self.prefix}:{namespace}"

    def _reconnect(self) -> None:
        self.client = redis.Redis.from_url(self.url)

    def get_item(self, namespace: str, key: str) -> Optional[str]:
        try:
            value = self.client.get(self._key(namespace, key))
        except redis_exceptions.ConnectionError:
            # Managed Redis drops idle connections; treat as a cache miss.
            logger.warning("Redis connection reset while reading %s", key)
            self._reconnect()
            return None
        if value is None:
            return None
        return value.decode("utf-8")

    def set_item(
        self, namespace: str, key: str, value: str, *, origin: str | None = None
    ) -> None:
        old_value = self.client.set(
            self._key(namespace, key), value, ex=self.ttl_seconds, get=True
        )
        self._publish(
            StorageEvent(
                namespace,
                key,
                old_value.decode("utf-8") if old_value is not None else None,
                value,
                origin,
            )
        )

    def remove_item(
        self, namespace: str, key: str, *, origin: str | None = None
    ) -> None:
        old_value = self.client.getdel(self._key(namespace, key))
        self._publish(
            StorageEvent(
                namespace,
                key,
                old_value.decode("utf-8") if old_value is not None else None,
                None,
                origin,
            )
        )

    def subscribe(self, namespace: str, listener: StorageListener) -> Unsubscribe:
        pubsub = self.client.pubsub(ignore_subscribe_messages=True)

        def handle(message: dict) -> None:
            try:
                payload = json.loads(message["data"])
                listener(StorageEvent(**payload))
            except Exception:
                logger.exception("Failed to handle storage event on %s", namespace)

        pubsub.subscribe(**{self._channel(namespace): handle})
        worker = pubsub.run_in_thread(sleep_time=0.1, daemon=True)

        def unsubscribe() -> None:
            worker.stop()
            pubsub.close()

        return unsubscribe

    def _publish(self, event: StorageEvent) -> None:
        self.client.publish(self._channel(event.namespace), json.dumps(asdict(event)))


def read_json_list(storage: LocalStorage, namespace: str, key: str) -> list:
    """Return the JSON array stored under `key`, or [] if missing or corrupt."""
    raw = storage.get_item(namespace, key)
    logger.debug("Read %s for %s: %s", key, namespace, raw)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Discarding undecodable %s for %s", key, namespace)
        return []
    if not isinstance(data, list):
        return []
    return data


def write_json_list(
    storage: LocalStorage,
    namespace: str,
    key: str,
    items: list,
    *,
    origin: str | None = None,
) -> None:
    logger.debug("Saving %s for %s: %d items", key, namespace, len(items))
    storage.set_item(namespace, key, json.dumps(items), origin=origin)
