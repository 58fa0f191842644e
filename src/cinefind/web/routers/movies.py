from typing import Annotated, Any

from fastapi import APIRouter, Query

from cinefind.core.modules.movie.models import MovieType, PlotLength
from cinefind.web.deps import AppDep
from cinefind.web.openapi import ErrorResponse

router = APIRouter(tags=["movies"])


@router.get(
    "/movies/search",
    summary="Search movies",
    description="Search OMDB by title. Responses are cached for an hour.",
    operation_id="searchMovies",
    responses={
        200: {"description": "Raw OMDB search response"},
        400: {"model": ErrorResponse, "description": "Invalid query"},
        502: {"model": ErrorResponse, "description": "Movie service failure"},
    },
)
async def search_movies(
    app: AppDep,
    s: Annotated[str, Query(description="Search term")],
    type: Annotated[MovieType | None, Query(description="Result type filter")] = None,
    y: Annotated[str | None, Query(description="Release year filter")] = None,
    page: Annotated[int, Query(ge=1, description="Result page")] = 1,
) -> dict[str, Any]:
    return await app.search_movies(s, type, y, page)


@router.get(
    "/movies/{imdb_id}",
    summary="Get movie details",
    description="Get a single OMDB record by IMDb ID. Responses are cached for a day.",
    operation_id="getMovieDetails",
    responses={
        200: {"description": "Raw OMDB detail record"},
        502: {"model": ErrorResponse, "description": "Movie service failure"},
    },
)
async def get_movie_details(
    imdb_id: str,
    app: AppDep,
    plot: Annotated[PlotLength, Query(description="Plot length")] = "short",
) -> dict[str, Any]:
    return await app.get_movie_details(imdb_id, plot)
