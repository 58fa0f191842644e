from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from cinefind.config import Config
from cinefind.core.core import Core
from cinefind.core.modules.favorite.models import Favorite
from cinefind.core.modules.session.models import AuthResult, Session, SessionUser
from cinefind.core.storage import Storage


class App:
    """Facade used by the UI layer, delegates to Core services."""

    def __init__(self, config: Config, storage: Storage | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._core = Core(config, storage=storage, transport=transport)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Session ===
    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate and start a session."""
        return await self._core.services.session.login(email, password)

    async def register(self, email: str, display_name: str, password: str) -> AuthResult:
        """Create an account and start a session for it."""
        return await self._core.services.session.register(email, display_name, password)

    async def logout(self) -> None:
        await self._core.services.session.logout()

    def check_auth(self) -> bool:
        """Whether the held token is well formed and unexpired."""
        return self._core.services.session.check_auth()

    def get_current_session(self) -> Session | None:
        if not self.check_auth():
            return None
        return self._core.services.session.current_session

    def get_current_user(self) -> SessionUser:
        """Get the signed-in user (raises AuthenticationError when logged out)."""
        return self._core.services.session.get_current_user()

    # === Movies ===
    async def search_movies(
        self, term: str, type: str | None = None, year: str | None = None, page: int = 1
    ) -> dict[str, Any]:
        """Search OMDB by title, served from cache while fresh."""
        return await self._core.services.movie.search_movies(term, type, year, page)

    async def get_movie_details(self, imdb_id: str, plot: str = "short") -> dict[str, Any]:
        """Get a single OMDB record, served from cache while fresh."""
        return await self._core.services.movie.get_movie_details(imdb_id, plot)

    # === Favorites ===
    async def list_favorites(self) -> list[Favorite]:
        return await self._core.services.favorite.list_favorites()

    async def add_favorite(self, imdb_id: str) -> Favorite:
        return await self._core.services.favorite.add_favorite(imdb_id)

    async def remove_favorite(self, imdb_id: str) -> None:
        await self._core.services.favorite.remove_favorite(imdb_id)

    async def is_favorite(self, imdb_id: str) -> bool:
        return await self._core.services.favorite.is_favorite(imdb_id)
