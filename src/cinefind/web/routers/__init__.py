from cinefind.web.routers.auth import router as auth_router
from cinefind.web.routers.favorites import router as favorites_router
from cinefind.web.routers.movies import router as movies_router

__all__ = [
    "auth_router",
    "favorites_router",
    "movies_router",
]
