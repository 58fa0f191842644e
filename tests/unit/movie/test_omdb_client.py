"""Tests for the OMDB HTTP client."""

import httpx
import pytest

from cinefind.core.modules.movie.client import OmdbClient
from cinefind.errors import FetchFailedError


def make_client(response: httpx.Response, seen: list[httpx.Request] | None = None) -> OmdbClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return response

    return OmdbClient(api_key="k", base_url="https://omdb.test/", transport=httpx.MockTransport(handler))


class TestFetch:
    """Tests for OmdbClient.fetch."""

    async def test_returns_payload_and_sends_key(self):
        seen: list[httpx.Request] = []
        async with make_client(httpx.Response(200, json={"Title": "Heat", "Response": "True"}), seen) as client:
            payload = await client.fetch({"i": "tt0113277"})

        assert payload["Title"] == "Heat"
        assert seen[0].url.host == "omdb.test"
        assert seen[0].url.params["apikey"] == "k"
        assert seen[0].url.params["i"] == "tt0113277"

    async def test_missing_key_is_passed_through(self):
        """Test that an empty key is sent as-is and the upstream 401 surfaces."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(401, json={"Response": "False", "Error": "No API key provided."})

        async with OmdbClient(api_key="", base_url="https://omdb.test/", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(FetchFailedError) as exc_info:
                await client.fetch({"s": "heat"})

        assert exc_info.value.status_code == 401
        assert seen[0].url.params["apikey"] == ""

    async def test_malformed_json(self):
        async with make_client(httpx.Response(200, content=b"<html>oops</html>")) as client:
            with pytest.raises(FetchFailedError, match="malformed JSON"):
                await client.fetch({"s": "heat"})

    async def test_non_object_payload(self):
        async with make_client(httpx.Response(200, json=["not", "an", "object"])) as client:
            with pytest.raises(FetchFailedError, match="unexpected payload"):
                await client.fetch({"s": "heat"})

    async def test_response_false_uses_upstream_message(self):
        async with make_client(httpx.Response(200, json={"Response": "False", "Error": "Too many results."})) as client:
            with pytest.raises(FetchFailedError, match="Too many results.") as exc_info:
                await client.fetch({"s": "a"})

        assert exc_info.value.status_code == 200

    async def test_server_error(self):
        async with make_client(httpx.Response(500, text="boom")) as client:
            with pytest.raises(FetchFailedError, match="HTTP 500"):
                await client.fetch({"s": "heat"})
