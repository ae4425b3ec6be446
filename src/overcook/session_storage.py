"""
Session-scoped transient storage.

A per-browser-session key-value store, the server-side counterpart of the
browser's sessionStorage. Values are kept as JSON strings so whatever is read
back is a fresh copy, never a live reference into another object.
Contents disappear when the session is dropped from the registry.
"""

import json
from typing import Any


class SessionStorage:
    """Key-value storage for one browsing session."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def put(self, key: str, value: Any) -> None:
        self._items[key] = json.dumps(value)

    def get(self, key: str) -> Any | None:
        raw = self._items.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
