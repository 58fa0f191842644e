from fastapi import APIRouter

from cinefind.core.modules.favorite.models import Favorite
from cinefind.web.deps import AppDep, CurrentUserDep
from cinefind.web.openapi import ErrorResponse

router = APIRouter(tags=["favorites"])


@router.get(
    "/favorites",
    summary="List favorites",
    description="List movies saved by the signed-in user, newest first.",
    operation_id="listFavorites",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_favorites(app: AppDep, _: CurrentUserDep) -> list[Favorite]:
    return await app.list_favorites()


@router.put(
    "/favorites/{imdb_id}",
    summary="Add favorite",
    description="Save a movie for the signed-in user. Saving it twice is harmless.",
    operation_id="addFavorite",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        502: {"model": ErrorResponse, "description": "Movie service failure"},
    },
)
async def add_favorite(imdb_id: str, app: AppDep, _: CurrentUserDep) -> Favorite:
    return await app.add_favorite(imdb_id)


@router.delete(
    "/favorites/{imdb_id}",
    summary="Remove favorite",
    description="Remove a saved movie.",
    operation_id="removeFavorite",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Movie is not a favorite"},
    },
)
async def remove_favorite(imdb_id: str, app: AppDep, _: CurrentUserDep) -> None:
    await app.remove_favorite(imdb_id)
