from __future__ import annotations

import json
from typing import Protocol


class CachePort(Protocol):
    """Byte store with per-entry expiry. The JSON helpers build on get/set."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None when absent or expired."""

    def set(self, key: str, value: bytes, ttl_seconds: int | None = None) -> None:
        """Store bytes; ``ttl_seconds=None`` applies the store's default expiry."""

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""

    def get_json(self, key: str) -> dict | None:
        raw = self.get(key)
        if raw is None:
            return None
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise TypeError(f"Cached value for {key!r} is not a JSON object")
        return data

    def set_json(self, key: str, value: dict, ttl_seconds: int | None = None) -> None:
        self.set(key, json.dumps(value, separators=(",", ":")).encode("utf-8"), ttl_seconds)
