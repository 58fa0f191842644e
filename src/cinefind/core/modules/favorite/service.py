import structlog

from cinefind.core.core import Service
from cinefind.core.modules.favorite.models import Favorite
from cinefind.errors import NotFoundError

logger = structlog.get_logger(__name__)


def favorites_key(user_id: str) -> str:
    return f"favorites:{user_id}"


class FavoriteService(Service):
    """Per-user saved movies. Every operation requires a signed-in user."""

    async def list_favorites(self) -> list[Favorite]:
        """List favorites of the current user, newest first."""
        user = self.core.services.session.get_current_user()
        favorites = await self._load(user.user_id)
        return sorted(favorites.values(), key=lambda f: f.added_at, reverse=True)

    async def is_favorite(self, imdb_id: str) -> bool:
        user = self.core.services.session.get_current_user()
        return imdb_id in await self._load(user.user_id)

    async def add_favorite(self, imdb_id: str) -> Favorite:
        """Save a movie; adding an existing favorite returns it unchanged."""
        user = self.core.services.session.get_current_user()
        favorites = await self._load(user.user_id)
        if imdb_id in favorites:
            return favorites[imdb_id]

        details = await self.core.services.movie.get_movie_details(imdb_id)
        favorite = Favorite.from_details(imdb_id, details)
        favorites[imdb_id] = favorite
        await self._save(user.user_id, favorites)
        logger.info("favorite_added", user_id=user.user_id, imdb_id=imdb_id)
        return favorite

    async def remove_favorite(self, imdb_id: str) -> None:
        user = self.core.services.session.get_current_user()
        favorites = await self._load(user.user_id)
        if imdb_id not in favorites:
            raise NotFoundError(f"Movie '{imdb_id}' is not in favorites")

        del favorites[imdb_id]
        await self._save(user.user_id, favorites)
        logger.info("favorite_removed", user_id=user.user_id, imdb_id=imdb_id)

    async def _load(self, user_id: str) -> dict[str, Favorite]:
        data = await self.storage.read(favorites_key(user_id)) or []
        favorites = [Favorite.model_validate(item) for item in data]
        return {f.imdb_id: f for f in favorites}

    async def _save(self, user_id: str, favorites: dict[str, Favorite]) -> None:
        await self.storage.write(favorites_key(user_id), [f.model_dump(mode="json") for f in favorites.values()])
