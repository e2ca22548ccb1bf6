"""
Pokemon description service.

Serves ``GET /pokemon/{name}`` with the Shakespearean translation of the
species' PokeAPI description.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from shared.base_service import BaseService
from service_pokemon.app.adapters.pokeapi_client import PokeApiClient
from service_pokemon.app.adapters.shakespeare_client import ShakespeareClient
from service_pokemon.app.caching.lru_cache import BoundedCache
from service_pokemon.app.domain.models import Description, LookupKey
from service_pokemon.app.domain.orchestrator import LookupOrchestrator


class PokemonDescriptionResponse(BaseModel):
    """Response body of ``GET /pokemon/{name}``."""

    name: str
    description: str


class PokemonService(BaseService):
    """Pokemon description service implementation."""

    def __init__(
        self,
        *,
        pokeapi_transport: Optional[httpx.AsyncBaseTransport] = None,
        shakespeare_transport: Optional[httpx.AsyncBaseTransport] = None,
        **config_overrides,
    ):
        super().__init__("pokemon", **config_overrides)

        timeout = self.config.upstream_timeout_seconds
        self.cache: BoundedCache[LookupKey, Description] = BoundedCache(self.config.pokeapi_cache_size)
        self.pokeapi_client = PokeApiClient(
            self.config.pokeapi_endpoint,
            timeout=timeout,
            metrics=self.metrics,
            transport=pokeapi_transport,
        )
        self.shakespeare_client = ShakespeareClient(
            self.config.shakespeare_translator_endpoint,
            timeout=timeout,
            metrics=self.metrics,
            transport=shakespeare_transport,
        )
        self.orchestrator = LookupOrchestrator(
            self.cache,
            self.pokeapi_client,
            self.shakespeare_client,
            upstream_timeout=timeout,
            metrics=self.metrics,
        )

        self._setup_pokemon_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.pokemon_service = self

    def _setup_pokemon_routes(self):
        """Set up lookup routes."""

        @self.app.get("/pokemon/{name}", response_model=PokemonDescriptionResponse)
        async def get_pokemon(name: str):
            """Return the Shakespearean description of a Pokemon."""
            description = await self.orchestrator.resolve(name)
            return PokemonDescriptionResponse(name=name, description=description.text)

    def _health_details(self) -> Dict[str, Any]:
        return {"cache": self.cache.stats()}

    async def _on_shutdown(self) -> None:
        await self.pokeapi_client.close()
        await self.shakespeare_client.close()


def create_app():
    """Create the FastAPI application."""
    return PokemonService().app


def main():
    PokemonService().run()


if __name__ == "__main__":
    main()
