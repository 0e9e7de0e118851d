"""Search index cache.

Holds one built index (for the most recently requested vault) for a fixed
TTL. Builds are single-flight: callers asking for a vault whose index is
already being built wait for that build instead of starting another.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from concurrent.futures import Future
from pathlib import Path
from threading import Lock

from vaultcmd.core.config import DEFAULT_INDEX_TTL_SECONDS
from vaultcmd.core.types import CacheEntry, SearchIndex
from vaultcmd.vault.search import build_search_index

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = DEFAULT_INDEX_TTL_SECONDS

IndexBuilder = Callable[[Path], SearchIndex]


class IndexCache:
    """Process-lifetime cache for the vault search index."""

    def __init__(
        self,
        builder: IndexBuilder | None = None,
        clock: Callable[[], float] | None = None,
        ttl_seconds: float = CACHE_TTL_SECONDS,
    ):
        """
        Initialize the cache.

        Args:
            builder: Builds an index for a vault path (defaults to build_search_index)
            clock: Monotonic time source in seconds (defaults to time.monotonic)
            ttl_seconds: How long a built index stays valid
        """
        self._builder = builder or build_search_index
        self._clock = clock or time.monotonic
        self.ttl_seconds = ttl_seconds
        self._lock = Lock()
        self._entry: CacheEntry | None = None
        self._in_flight: dict[Path, Future[SearchIndex]] = {}
        self._generation = 0
        self.build_count = 0

    def _valid_entry(self, vault_path: Path) -> CacheEntry | None:
        entry = self._entry
        if entry is None or entry.vault_path != vault_path:
            return None
        if self._clock() - entry.built_at >= self.ttl_seconds:
            return None
        return entry

    def get(self, vault_path: Path | str) -> SearchIndex | None:
        """Return the cached index if it is for this vault and not expired."""
        with self._lock:
            entry = self._valid_entry(Path(vault_path))
        return entry.index if entry else None

    def get_or_build(self, vault_path: Path | str) -> SearchIndex:
        """
        Return the cached index, building it if missing or stale.

        Concurrent callers for the same vault share a single build.

        Args:
            vault_path: Vault root

        Returns:
            The search index

        Raises:
            Whatever the builder raises; waiting callers see the same error.
        """
        path = Path(vault_path)
        with self._lock:
            entry = self._valid_entry(path)
            if entry is not None:
                logger.debug(f"Index cache hit for {path}")
                return entry.index
            future = self._in_flight.get(path)
            owner = future is None
            if future is None:
                future = Future()
                self._in_flight[path] = future
            generation = self._generation

        if not owner:
            logger.debug(f"Waiting for in-flight index build of {path}")
            return future.result()

        try:
            index = self._builder(path)
        except BaseException as exc:
            with self._lock:
                self._release(path, future)
            future.set_exception(exc)
            raise

        with self._lock:
            self.build_count += 1
            # An invalidate() during the build means the result may be stale
            if generation == self._generation:
                self._entry = CacheEntry(
                    index=index, vault_path=path, built_at=self._clock()
                )
            self._release(path, future)
        future.set_result(index)
        return index

    def _release(self, path: Path, future: Future) -> None:
        if self._in_flight.get(path) is future:
            del self._in_flight[path]

    async def get_or_build_async(self, vault_path: Path | str) -> SearchIndex:
        """Like get_or_build, but runs a blocking build off the event loop."""
        cached = self.get(vault_path)
        if cached is not None:
            return cached
        return await asyncio.to_thread(self.get_or_build, vault_path)

    def refresh(self, vault_path: Path | str) -> SearchIndex:
        """Drop the cached index and build a fresh one."""
        self.invalidate()
        return self.get_or_build(vault_path)

    def invalidate(self) -> None:
        """Clear the cache. Call after anything that changes vault content."""
        with self._lock:
            self._entry = None
            self._generation += 1
            # Later callers start a fresh build instead of joining a stale one
            self._in_flight.clear()
        logger.debug("Index cache invalidated")
