from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, Field

from cinefind.utils import now


def _present(value: Any) -> str | None:
    """OMDB uses "N/A" for missing values."""
    if not value or value == "N/A":
        return None
    return str(value)


class Favorite(BaseModel):
    """Movie saved by a user."""

    imdb_id: str = Field(..., description="IMDb ID")
    title: str = Field(..., description="Movie title")
    year: str | None = Field(None, description="Release year as reported by OMDB")
    poster: str | None = Field(None, description="Poster URL")
    added_at: datetime = Field(default_factory=now)

    @classmethod
    def from_details(cls, imdb_id: str, details: dict[str, Any]) -> Self:
        """Build from an OMDB detail payload."""
        return cls(
            imdb_id=imdb_id,
            title=_present(details.get("Title")) or imdb_id,
            year=_present(details.get("Year")),
            poster=_present(details.get("Poster")),
            added_at=now(),
        )
