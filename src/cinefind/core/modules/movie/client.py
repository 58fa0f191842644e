"""Thin async client for the OMDB API."""

from typing import Any

import httpx
import structlog

from cinefind.errors import FetchFailedError

logger = structlog.get_logger(__name__)

DEFAULT_OMDB_BASE_URL = "https://www.omdbapi.com/"


class OmdbClient(httpx.AsyncClient):
    """Issues GET requests with the API key attached and unwraps the JSON body.

    The key is passed through as-is; when it is missing or wrong, OMDB
    answers 401 and the caller gets a FetchFailedError.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: httpx.URL | str = DEFAULT_OMDB_BASE_URL,
        timeout: float = 10.0,
        **kwargs: Any,
    ):
        self.api_key = api_key
        super().__init__(base_url=base_url, timeout=timeout, **kwargs)

    async def fetch(self, params: dict[str, str]) -> dict[str, Any]:
        """GET the API root with params and return the decoded payload.

        Raises:
            FetchFailedError: transport failure, non-2xx status, non-JSON body,
                or a body with ``"Response": "False"``.
        """
        try:
            response = await self.get("", params={"apikey": self.api_key, **params})
        except httpx.HTTPError as e:
            logger.warning("omdb_transport_error", error=str(e))
            raise FetchFailedError(f"Failed to reach movie service: {e}") from e

        if not response.is_success:
            logger.warning("omdb_bad_status", status_code=response.status_code)
            raise FetchFailedError(f"Movie service returned HTTP {response.status_code}", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchFailedError("Movie service returned malformed JSON", status_code=response.status_code) from e

        if not isinstance(payload, dict):
            raise FetchFailedError("Movie service returned an unexpected payload", status_code=response.status_code)

        if payload.get("Response") == "False":
            message = payload.get("Error") or "Movie service reported an error"
            raise FetchFailedError(message, status_code=response.status_code)

        return payload
