from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import diskcache as dc
from platformdirs import user_cache_dir

from ..core.ports.cache_port import CachePort

logger = logging.getLogger(__name__)

CACHE_DIR_ENV = "TRUSTED_CONTENT_CACHE_DIR"


def cache_root(base_dir: Optional[str] = None) -> Path:
    """``base_dir``, else $TRUSTED_CONTENT_CACHE_DIR, else the platform user cache directory."""
    return Path(base_dir or os.getenv(CACHE_DIR_ENV) or user_cache_dir("trusted_content"))


class DiskCacheAdapter(CachePort):
    """CachePort over a diskcache directory at ``<cache root>/<namespace>``."""

    def __init__(self, namespace: str, default_ttl_seconds: int = 0, base_dir: Optional[str] = None) -> None:
        self.path = cache_root(base_dir) / namespace
        self.path.mkdir(parents=True, exist_ok=True)
        self._cache = dc.Cache(str(self.path))
        self._default_ttl = default_ttl_seconds
        logger.debug("Opened cache at %s", self.path)

    def _expire(self, ttl_seconds: int | None) -> int | None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        # diskcache keeps entries forever when expire is None
        return ttl if ttl > 0 else None

    def get(self, key: str) -> bytes | None:
        value = self._cache.get(key)
        if value is not None and not isinstance(value, bytes):
            raise TypeError(f"Cached value for {key!r} is not bytes")
        return value

    def set(self, key: str, value: bytes, ttl_seconds: int | None = None) -> None:
        self._cache.set(key, value, expire=self._expire(ttl_seconds))

    def clear(self) -> int:
        removed = self._cache.clear()
        logger.info("Removed %d entries from %s", removed, self.path)
        return removed

    def __len__(self) -> int:
        return len(self._cache)

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> DiskCacheAdapter:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
