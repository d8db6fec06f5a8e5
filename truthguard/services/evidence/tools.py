# truthguard/services/evidence/tools.py
import asyncio
import hashlib
import logging
from functools import lru_cache
from typing import Optional

from truthguard.core.cache import cache_delete, cache_get, cache_set
from truthguard.core.config import Config, config
from truthguard.core.errors import LookupPanelUnavailableError
from truthguard.core.models import Source, SourceOutcome
from truthguard.services.evidence.aggregator import LookupFn, bind_outcome

log = logging.getLogger(__name__)


class SimulatedLookup:
    """
    Offline stand-in for a real coverage search, for demos and tests.

    Whether a source "covers" a claim is a pseudo-random draw seeded by the
    claim and the source domain, so the same claim always gets the same
    answer from the same source.
    """

    def __init__(self, hit_rate: float = config.SIMULATED_HIT_RATE, latency: float = config.SIMULATED_LATENCY):
        if not 0.0 <= hit_rate <= 1.0:
            raise ValueError("hit_rate must be between 0 and 1")
        self.hit_rate = hit_rate
        self.latency = latency

    @staticmethod
    def _draw(claim: str, source: Source) -> float:
        digest = hashlib.sha256(f"{source.domain_id}|{claim.lower().strip()}".encode()).digest()
        return int.from_bytes(digest[:8], "big") / 2**64

    async def __call__(self, claim: str, source: Source) -> SourceOutcome:
        if self.latency:
            await asyncio.sleep(self.latency)

        if self._draw(claim, source) >= self.hit_rate:
            return SourceOutcome.not_found(source)
        return SourceOutcome(
            source=source,
            found=True,
            url=f"https://{source.domain_id}/news/claim-related-article",
            snippet=f"{source.display_name} reported on this claim with relevant coverage.",
        )


class CachedLookup:
    """Wraps a lookup with the Redis outcome cache. Failed lookups are not cached."""

    def __init__(self, lookup: LookupFn, ttl: int = config.CACHE_TTL):
        self.lookup = lookup
        self.ttl = ttl

    @staticmethod
    def cache_key(claim: str, source: Source) -> str:
        claim_hash = hashlib.sha256(claim.lower().strip().encode()).hexdigest()
        return f"outcome:{source.domain_id}:{claim_hash}"

    async def __call__(self, claim: str, source: Source) -> SourceOutcome:
        key = self.cache_key(claim, source)
        cached = cache_get(key)
        if cached is not None:
            try:
                return SourceOutcome.model_validate_json(cached)
            except ValueError as e:
                log.warning(f"Discarding unreadable cache entry {key}: {e}")
                cache_delete(key)

        raw = await self.lookup(claim, source)
        outcome = bind_outcome(source, raw)
        cache_set(key, outcome.model_dump_json(), ttl=self.ttl)
        return outcome


def build_lookup(settings: Optional[Config] = None) -> LookupFn:
    """Creates the lookup provider selected by LOOKUP_PROVIDER, cached when CACHE_ENABLED."""
    settings = settings or config
    provider = settings.LOOKUP_PROVIDER.lower()

    if provider == "simulated":
        lookup: LookupFn = SimulatedLookup(
            hit_rate=settings.SIMULATED_HIT_RATE,
            latency=settings.SIMULATED_LATENCY,
        )
    elif provider == "tavily":
        if not settings.TAVILY_API_KEY:
            raise LookupPanelUnavailableError("Tavily lookup selected but TAVILY_API_KEY is not configured.")
        from truthguard.services.evidence.tavily import TavilySiteLookup

        lookup = TavilySiteLookup(api_key=settings.TAVILY_API_KEY, max_results=settings.TAVILY_MAX_RESULTS)
    else:
        raise LookupPanelUnavailableError(f"Unknown lookup provider: {settings.LOOKUP_PROVIDER}")

    if settings.CACHE_ENABLED:
        lookup = CachedLookup(lookup, ttl=settings.CACHE_TTL)
    log.info(f"Using {provider} lookup (cache {'on' if settings.CACHE_ENABLED else 'off'})")
    return lookup


@lru_cache(maxsize=1)
def get_default_lookup() -> LookupFn:
    """Process-wide lookup built from configuration on first use."""
    return build_lookup()
