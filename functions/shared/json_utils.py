"""
Key-case conversion for JSON payloads exchanged with the storefront client.
"""

from __future__ import annotations

import re
from typing import Any, Callable

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def convert_keys(data: Any, converter: Callable[[str], str]) -> Any:
    """Recursively rename dict keys with `converter`, leaving values alone."""
    if isinstance(data, dict):
        return {
            converter(key) if isinstance(key, str) else key: convert_keys(value, converter)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [convert_keys(item, converter) for item in data]
    return data
