"""
Memoized dashboard views keyed by path.

Mutations call `revalidate_path` so the next read of that view is rebuilt from
the database instead of served from the cache. Backed by diskcache so the
entries are shared between worker processes.

diskcache is synchronous; its reads and writes are small local SQLite calls
made directly from the async handlers. A load that started before a
`revalidate_path` can still store the rows it read, so every entry also
carries an expiry that bounds how long such a stale view is served.
"""
import logging
from functools import cache
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import diskcache

from invoicedash.config import settings

logger = logging.getLogger(__name__)

class ViewCache:
    def __init__(self, cache_dir: str | Path, expire: Optional[int] = None):
        self.cache_dir = Path(cache_dir)
        self.expire = expire
        self._cache = diskcache.Cache(str(self.cache_dir))

    async def get_or_load(self, path: str, loader: Callable[[], Awaitable[Any]], expire: Optional[int] = None) -> Any:
        """Return the cached view for `path`, building it with `loader` on a miss."""
        cached = self._cache.get(path, default=None)
        if cached is not None:
            return cached

        value = await loader()
        self._cache.set(path, value, expire=expire if expire is not None else self.expire)
        return value

    def revalidate_path(self, path: str) -> None:
        """Drop any memoized render of `path`."""
        self._cache.delete(path)
        logger.info(f"Revalidated {path}")

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

@cache
def get_view_cache() -> ViewCache:
    """Process-wide cache, created on first use. Also a FastAPI dependency."""
    return ViewCache(settings.CACHE_DIR, expire=settings.VIEW_CACHE_TTL)
