import asyncio

from src.config.logger_config import logger
from src.scraper.application.ports import DocumentStorePort
from src.scraper.domain.rules import build_url


class HtmlFetcher:
    """Cache-backed fetcher with a coalesced path and a direct path.

    ``fetch`` holds one lock over the whole cache for the duration of the
    underlying request: coalesced fetches on one instance run strictly one
    at a time and each key reaches the store at most once. This doubles as
    the politeness limit towards the wiki. ``per_key_locks=True`` narrows the
    lock to one key so different keys may be fetched concurrently.

    ``fetch_direct`` never locks or caches and is meant for the concurrent
    secondary fetches.
    """

    def __init__(self, store: DocumentStorePort, base_url: str = "", per_key_locks: bool = False) -> None:
        self.store = store
        self.base_url = base_url
        self.per_key_locks = per_key_locks
        self._cache: dict[str, str] = {}
        self._lock = asyncio.Lock()
        self._key_locks: dict[str, asyncio.Lock] = {}

    async def fetch(self, key: str) -> str:
        lock = self._key_locks.setdefault(key, asyncio.Lock()) if self.per_key_locks else self._lock
        async with lock:
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            html = await self.store.fetch(build_url(self.base_url, key))
            self._cache[key] = html
            logger.debug("Cached {}", key)
            return html

    async def fetch_direct(self, key: str) -> str:
        return await self.store.fetch(build_url(self.base_url, key))

    def is_cached(self, key: str) -> bool:
        return key in self._cache

    def cached_keys(self) -> list[str]:
        return sorted(self._cache)
