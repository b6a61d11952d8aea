from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def get_unique_id() -> str:
    return uuid.uuid4().hex


def epoch_ms() -> int:
    return int(time.time() * 1000)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with a trailing Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def parse_timestamp(value: str | None) -> datetime:
    """Parse an ISO-8601 timestamp; unparseable values sort as the oldest."""
    if not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
