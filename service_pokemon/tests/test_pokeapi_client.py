"""
Unit tests for the PokeAPI client.
"""

import pytest
import httpx

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_pokemon.app.adapters.pokeapi_client import PokeApiClient
from service_pokemon.app.domain.models import NotFound, Success, Unavailable
from shared.metrics import MetricsCollector


POKEAPI_URL = "http://pokeapi.test/api/v2/"


def species_body(*entries):
    return {
        "flavor_text_entries": [
            {"flavor_text": text, "language": {"name": language}}
            for text, language in entries
        ]
    }


def make_client(handler, **kwargs) -> PokeApiClient:
    return PokeApiClient(POKEAPI_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestPokeApiClient:
    """Test cases for PokeApiClient."""

    @pytest.fixture
    def requests(self):
        return []

    @pytest.mark.asyncio
    async def test_single_english_description(self, requests):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=species_body(("This one!", "en")))

        client = make_client(handler)
        result = await client.get_description("pikachu")

        assert result == Success("This one!")
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "http://pokeapi.test/api/v2/pokemon-species/pikachu"

    @pytest.mark.asyncio
    async def test_name_is_lowercased(self, requests):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=species_body(("This one!", "en")))

        client = make_client(handler)
        await client.get_description(" Pikachu ")

        assert requests[0].url.path == "/api/v2/pokemon-species/pikachu"

    @pytest.mark.asyncio
    async def test_first_english_description_wins(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=species_body(
                ("Non questa qui", "it"),
                ("This one!", "en"),
                ("Not this one", "en"),
            ))

        result = await make_client(handler).get_description("pikachu")

        assert result == Success("This one!")

    @pytest.mark.asyncio
    async def test_flavor_text_whitespace_is_collapsed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=species_body(("It can\ngenerate\felectric  attacks.", "en")))

        result = await make_client(handler).get_description("pikachu")

        assert result == Success("It can generate electric attacks.")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        species_body(("Non questa qui", "it")),
        species_body(),
        {},
        [],
    ])
    async def test_no_english_description(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        result = await make_client(handler).get_description("pikachu")

        assert isinstance(result, Unavailable)

    @pytest.mark.asyncio
    async def test_species_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Not found")

        result = await make_client(handler).get_description("missingno")

        assert result == NotFound()

    @pytest.mark.asyncio
    async def test_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="Internal server error")

        result = await make_client(handler).get_description("pikachu")

        assert result == Unavailable("HTTP error: 500")

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        result = await make_client(handler).get_description("pikachu")

        assert result == Unavailable("malformed response")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        result = await make_client(handler).get_description("pikachu")

        assert isinstance(result, Unavailable)
        assert "Connection refused" in result.reason

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        result = await make_client(handler).get_description("pikachu")

        assert result == Unavailable("timeout")

    @pytest.mark.asyncio
    async def test_requests_are_counted(self):
        metrics = MetricsCollector("pokemon")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        client = make_client(handler, metrics=metrics)
        await client.get_description("missingno")
        await client.close()

        assert metrics.get_counter_value("pokeapi_requests_total", outcome="notfound") == 1

    @pytest.mark.asyncio
    async def test_redirect_is_followed(self, requests):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if not request.url.path.endswith("/"):
                return httpx.Response(301, headers={"Location": f"{request.url}/"})
            return httpx.Response(200, json=species_body(("This one!", "en")))

        result = await make_client(handler).get_description("pikachu")

        assert result == Success("This one!")
        assert [request.url.path for request in requests] == [
            "/api/v2/pokemon-species/pikachu",
            "/api/v2/pokemon-species/pikachu/",
        ]
