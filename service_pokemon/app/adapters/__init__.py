"""
Adapters package for the Pokemon Service.

Contains HTTP client wrappers for the upstream providers. Adapters never
raise on upstream failures; they return a typed outcome
(Success/NotFound/Unavailable/RateLimited) for the orchestrator to act on.
"""

from .pokeapi_client import PokeApiClient
from .shakespeare_client import ShakespeareClient

__all__ = [
    "PokeApiClient",
    "ShakespeareClient",
]
