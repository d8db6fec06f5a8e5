import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from truthguard.core.models import Source, SourceOutcome
from truthguard.services.sources.panel import SourcePanel

log = logging.getLogger(__name__)

# async (claim, source) -> SourceOutcome, or a {found, url, snippet} mapping
LookupFn = Callable[[str, Source], Awaitable[Union[SourceOutcome, Mapping[str, Any]]]]


def bind_outcome(source: Source, raw: Any) -> SourceOutcome:
    """Binds whatever the lookup returned to the source that was queried."""
    if isinstance(raw, SourceOutcome):
        return SourceOutcome(source=source, found=raw.found, url=raw.url, snippet=raw.snippet)
    if isinstance(raw, Mapping):
        return SourceOutcome(
            source=source,
            found=bool(raw.get("found")),
            url=raw.get("url"),
            snippet=raw.get("snippet"),
        )
    raise TypeError(f"lookup returned {type(raw).__name__}, expected SourceOutcome or mapping")


async def query_source(
    claim: str,
    source: Source,
    lookup: LookupFn,
    timeout: Optional[float] = None,
    retries: int = 0,
) -> SourceOutcome:
    """
    Asks one source whether it covers the claim.

    Never raises for a lookup failure: a lookup that errors, times out or
    returns something unusable yields a "not found" outcome. Cancellation
    is not a failure and propagates.
    """
    attempts = max(retries, 0) + 1
    for attempt in range(1, attempts + 1):
        try:
            raw = await asyncio.wait_for(lookup(claim, source), timeout)
            return bind_outcome(source, raw)
        except Exception as e:
            log.warning(
                f"Lookup failed for {source.domain_id} (attempt {attempt}/{attempts}): {type(e).__name__}: {e}"
            )
    return SourceOutcome.not_found(source)


async def aggregate(
    claim: str,
    panel: SourcePanel,
    lookup: LookupFn,
    *,
    timeout: Optional[float] = None,
    retries: int = 0,
    concurrent: bool = True,
) -> List[SourceOutcome]:
    """
    Collects one outcome per panel source for a claim, in panel order.

    Lookups are independent of one another and fan out concurrently unless
    `concurrent` is False; the result order is the panel order either way.
    """
    log.info(f"Checking claim against {len(panel)} sources: {claim[:60]}...")

    if concurrent:
        outcomes = await asyncio.gather(
            *(query_source(claim, source, lookup, timeout, retries) for source in panel.sources)
        )
    else:
        outcomes = []
        for source in panel.sources:
            outcomes.append(await query_source(claim, source, lookup, timeout, retries))

    found = [o.source.domain_id for o in outcomes if o.found]
    log.info(f"Claim found on {len(found)}/{len(panel)} sources: {found}")
    return list(outcomes)
