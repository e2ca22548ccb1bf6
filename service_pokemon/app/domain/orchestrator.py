"""
Lookup orchestration: cache, species description, Shakespearean translation.
"""

import asyncio
from typing import Awaitable, Optional, Protocol, TypeVar

from shared.errors import SpeciesNotFoundError, UpstreamUnavailableError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from service_pokemon.app.caching.lru_cache import BoundedCache
from service_pokemon.app.domain.models import (
    Description,
    EntityResult,
    LookupKey,
    NotFound,
    Provenance,
    RateLimited,
    Success,
    TransformResult,
    Unavailable,
)

ENTITY_STAGE = "entity"
STYLE_STAGE = "style"

R = TypeVar("R")


class EntityProvider(Protocol):
    async def get_description(self, name: str) -> EntityResult: ...


class StyleTransformer(Protocol):
    async def translate(self, text: str) -> TransformResult: ...


class LookupOrchestrator:
    """Resolve species names into (possibly translated) descriptions.

    A resolution is served from the cache when possible. Otherwise the entity
    provider is asked for the base description and the style transformer for
    its translation; a failing transformer degrades to the base text instead
    of failing the request. Only fully resolved descriptions are cached, and
    a cancelled resolution never reaches the cache.

    Concurrent misses for the same key are not coalesced: each caller does its
    own upstream calls and the last write wins.
    """

    def __init__(
        self,
        cache: BoundedCache[LookupKey, Description],
        entity_provider: EntityProvider,
        style_transformer: StyleTransformer,
        *,
        upstream_timeout: float = 10.0,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.cache = cache
        self.entity_provider = entity_provider
        self.style_transformer = style_transformer
        self.upstream_timeout = upstream_timeout
        self.metrics = metrics
        self.logger = get_logger("pokemon.orchestrator")

    async def resolve(self, name: str) -> Description:
        """Return the description for ``name``.

        Raises:
            InvalidInputError: ``name`` is empty after trimming.
            SpeciesNotFoundError: PokeAPI has no such species.
            UpstreamUnavailableError: PokeAPI failed or timed out.
        """
        key = LookupKey.from_name(name)

        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Cache hit", key=key.value)
            self._count("cache_hits_total")
            return cached

        self._count("cache_misses_total")

        base_text = await self._fetch_base_text(name, key)
        description = await self._transform(base_text, key)

        self.cache.put(key, description)
        return description

    async def _fetch_base_text(self, name: str, key: LookupKey) -> str:
        result = await self._call_stage(ENTITY_STAGE, self.entity_provider.get_description(name))

        if isinstance(result, Success):
            return result.value
        if isinstance(result, NotFound):
            raise SpeciesNotFoundError(key.value)
        if isinstance(result, Unavailable):
            raise UpstreamUnavailableError(ENTITY_STAGE, details={"reason": result.reason})
        raise UpstreamUnavailableError(ENTITY_STAGE, f"Unexpected result {result!r}")

    async def _transform(self, base_text: str, key: LookupKey) -> Description:
        result = await self._call_stage(STYLE_STAGE, self.style_transformer.translate(base_text))

        if isinstance(result, Success):
            return Description(result.value, Provenance.TRANSFORMED)
        if isinstance(result, (Unavailable, RateLimited)):
            reason = "rate_limited" if isinstance(result, RateLimited) else "unavailable"
            self.logger.warning(
                "Translation unavailable, serving original description",
                key=key.value,
                reason=result.reason
            )
            self._count("translation_fallbacks_total", reason=reason)
            return Description(base_text, Provenance.ORIGINAL)
        raise UpstreamUnavailableError(STYLE_STAGE, f"Unexpected result {result!r}")

    async def _call_stage(self, stage: str, call: Awaitable[R]) -> R:
        """Await an upstream call, mapping a timeout to ``Unavailable``.

        Unexpected client exceptions become ``UpstreamUnavailableError``.
        Cancellation propagates untouched.
        """
        try:
            if self.metrics:
                with self.metrics.time_operation("upstream_duration_seconds", stage=stage):
                    return await asyncio.wait_for(call, timeout=self.upstream_timeout)
            return await asyncio.wait_for(call, timeout=self.upstream_timeout)
        except asyncio.TimeoutError:
            self.logger.warning("Upstream call timed out", stage=stage, timeout=self.upstream_timeout)
            return Unavailable("timeout")  # type: ignore[return-value]
        except Exception as exc:
            self.logger.error("Upstream call failed", stage=stage, error=str(exc), exc_info=True)
            raise UpstreamUnavailableError(stage, str(exc)) from exc

    def _count(self, metric_name: str, **labels) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, **labels)
