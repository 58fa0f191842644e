from datetime import timedelta
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from cinefind.core.core import Service
from cinefind.core.modules.movie.models import CacheEntry, CacheKind, details_cache_key, search_cache_key
from cinefind.core.storage import Storage
from cinefind.errors import StorageError, ValidationError
from cinefind.utils import now

logger = structlog.get_logger(__name__)

MOVIE_CACHE_KEY = "movie-cache"


class MovieService(Service):
    """Read-through cache over OMDB search and detail lookups.

    Entries expire lazily by age. Concurrent misses on the same key each hit
    the network; the later write wins.
    """

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._entries: dict[str, CacheEntry] = {}

    async def on_start(self) -> None:
        """Load cached responses from storage."""
        try:
            data = await self.storage.read(MOVIE_CACHE_KEY) or {}
        except StorageError:
            logger.warning("movie_cache_load_failed", exc_info=True)
            return

        try:
            entries = {key: CacheEntry.model_validate(item) for key, item in data.items()}
        except (AttributeError, PydanticValidationError):
            logger.warning("movie_cache_invalid", exc_info=True)
            return
        self._entries = entries
        logger.debug("movie_service_started", entry_count=len(self._entries))

    def ttl(self, kind: CacheKind) -> timedelta:
        config = self.core.config
        seconds = config.search_ttl_seconds if kind == CacheKind.SEARCH else config.details_ttl_seconds
        return timedelta(seconds=seconds)

    def get_cached(self, key: str) -> CacheEntry | None:
        """Return the entry for key if it is still fresh."""
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self.ttl(entry.kind), now()):
            return None
        return entry

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    async def search_movies(
        self, term: str, type: str | None = None, year: str | None = None, page: int = 1
    ) -> dict[str, Any]:
        """Search by title; raises FetchFailedError when OMDB cannot be reached or rejects the query."""
        if not term.strip():
            raise ValidationError("Search term cannot be empty")
        if page < 1:
            raise ValidationError("Page must be at least 1")

        params = {"s": term, "type": type or "", "y": year or "", "page": str(page)}
        return await self._read_through(search_cache_key(term, type, year, page), CacheKind.SEARCH, params)

    async def get_movie_details(self, imdb_id: str, plot: str = "short") -> dict[str, Any]:
        """Fetch a single title by IMDb ID."""
        if not imdb_id.strip():
            raise ValidationError("Movie ID cannot be empty")

        return await self._read_through(details_cache_key(imdb_id, plot), CacheKind.DETAILS, {"i": imdb_id, "plot": plot})

    async def _read_through(self, key: str, kind: CacheKind, params: dict[str, str]) -> dict[str, Any]:
        entry = self.get_cached(key)
        if entry is not None:
            logger.debug("movie_cache_hit", kind=kind, key=key)
            return entry.payload

        logger.debug("movie_cache_miss", kind=kind, key=key)
        payload = await self.core.omdb_client.fetch(params)
        await self._store(key, CacheEntry(kind=kind, payload=payload, stored_at=now()))
        return payload

    async def _store(self, key: str, entry: CacheEntry) -> None:
        entries = {**self._entries, key: entry}

        max_entries = self.core.config.cache_max_entries
        if max_entries is not None and len(entries) > max_entries:
            oldest = sorted(entries, key=lambda k: entries[k].stored_at)
            for stale_key in oldest[: len(entries) - max_entries]:
                del entries[stale_key]

        await self.storage.write(MOVIE_CACHE_KEY, {k: e.model_dump(mode="json") for k, e in entries.items()})
        self._entries = entries
