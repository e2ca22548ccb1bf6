"""
PokeAPI client for the Pokemon service.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from service_pokemon.app.domain.models import EntityResult, NotFound, Success, Unavailable

DESCRIPTION_LANGUAGE = "en"


class PokeApiClient:
    """Client for retrieving species descriptions from PokeAPI."""

    def __init__(
        self,
        pokeapi_endpoint: str,
        *,
        timeout: float = 10.0,
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = pokeapi_endpoint.rstrip('/')
        self.metrics = metrics
        self.logger = get_logger("pokemon.pokeapi_client")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True)

    async def get_description(self, name: str) -> EntityResult:
        """Fetch the first English flavor text of the species ``name``."""
        species = name.strip().lower()
        url = f"{self.base_url}/pokemon-species/{quote(species, safe='')}"

        self.logger.debug("Sending HTTP request", url=url)
        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as exc:
            self.logger.warning("PokeAPI request timed out", species=species, error=str(exc))
            return self._record(Unavailable("timeout"))
        except httpx.HTTPError as exc:
            self.logger.error("Cannot send request to PokeAPI", species=species, error=str(exc))
            return self._record(Unavailable(f"transport error: {exc}"))

        self.logger.debug("Got HTTP response", status_code=response.status_code)

        if response.status_code == 404:
            self.logger.info("Species not found", species=species)
            return self._record(NotFound())

        if response.status_code != 200:
            self.logger.error(
                "PokeAPI request failed",
                species=species,
                status_code=response.status_code,
                response=response.text
            )
            return self._record(Unavailable(f"HTTP error: {response.status_code}"))

        try:
            body = response.json()
        except ValueError:
            self.logger.error("Cannot parse response from PokeAPI", species=species)
            return self._record(Unavailable("malformed response"))

        text = self._select_flavor_text(body)
        if text is None:
            self.logger.error("No english description is available", species=species)
            return self._record(Unavailable("No english description is available"))

        return self._record(Success(text))

    @staticmethod
    def _select_flavor_text(body: Any) -> Optional[str]:
        """Return the first flavor text in the description language."""
        if not isinstance(body, dict):
            return None

        entries = body.get("flavor_text_entries") or []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            language: Dict[str, Any] = entry.get("language") or {}
            text = entry.get("flavor_text")
            if language.get("name") == DESCRIPTION_LANGUAGE and isinstance(text, str):
                # Flavor texts carry hard line breaks and form feeds from the games
                return " ".join(text.split())
        return None

    def _record(self, result: EntityResult) -> EntityResult:
        if self.metrics:
            self.metrics.increment_counter(
                "pokeapi_requests_total",
                outcome=type(result).__name__.lower()
            )
        return result

    async def close(self) -> None:
        await self._client.aclose()
