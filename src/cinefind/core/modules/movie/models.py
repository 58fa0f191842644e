import json
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

from cinefind.utils import now

MovieType = Literal["movie", "series", "episode"]
PlotLength = Literal["short", "full"]


class CacheKind(StrEnum):
    """Kinds of cached responses, each with its own freshness window."""

    SEARCH = "search"
    DETAILS = "details"


class CacheEntry(BaseModel):
    """Raw API response plus the moment it was stored."""

    kind: CacheKind
    payload: dict[str, Any]
    stored_at: datetime = Field(default_factory=now)

    def is_fresh(self, ttl: timedelta, at: datetime | None = None) -> bool:
        return (at or now()) - self.stored_at < ttl


def search_cache_key(term: str, type: str | None = None, year: str | None = None, page: int = 1) -> str:
    """Cache key for a search. Missing filters and empty strings map to the same key."""
    return json.dumps([CacheKind.SEARCH.value, term, type or "", year or "", page])


def details_cache_key(imdb_id: str, plot: str = "short") -> str:
    return json.dumps([CacheKind.DETAILS.value, imdb_id, plot])

