# truthguard/services/evidence/tavily.py
import logging
from typing import Any, Dict

from langchain_community.tools.tavily_search import TavilySearchResults

from truthguard.core.config import config
from truthguard.core.domains import registered_domain
from truthguard.core.models import Source, SourceOutcome

log = logging.getLogger(__name__)

SNIPPET_LENGTH = 300


class TavilySiteLookup:
    """
    Coverage lookup backed by Tavily web search.

    Each source gets its own search client restricted to the source's
    domain; the source counts as covering the claim when a result URL
    belongs to that domain.
    """

    def __init__(self, api_key: str = config.TAVILY_API_KEY, max_results: int = config.TAVILY_MAX_RESULTS):
        self.api_key = api_key
        self.max_results = max_results
        self.clients: Dict[str, TavilySearchResults] = {}

    def _client(self, source: Source) -> TavilySearchResults:
        client = self.clients.get(source.domain_id)
        if client is None:
            client = TavilySearchResults(
                max_results=self.max_results,
                tavily_api_key=self.api_key,
                search_depth="basic",
                include_domains=[source.domain_id],
                include_answer=False,
                include_raw_content=False,
            )
            self.clients[source.domain_id] = client
        return client

    async def __call__(self, claim: str, source: Source) -> SourceOutcome:
        # include_domains already limits results to the source
        raw = await self._client(source).ainvoke({"query": claim})
        return self._parse(raw, source)

    def _parse(self, raw_results: Any, source: Source) -> SourceOutcome:
        if not isinstance(raw_results, list):
            # The tool reports API errors as a string instead of raising
            raise RuntimeError(f"Tavily search failed for {source.domain_id}: {raw_results}")

        wanted = registered_domain(f"https://{source.domain_id}") or source.domain_id.lower()
        for item in raw_results:
            if not isinstance(item, dict):
                continue
            url = item.get("url", "")
            if url and registered_domain(url) == wanted:
                snippet = (item.get("content") or "").strip()[:SNIPPET_LENGTH] or None
                log.info(f"Tavily found coverage on {source.domain_id}: {url}")
                return SourceOutcome(source=source, found=True, url=url, snippet=snippet)

        return SourceOutcome.not_found(source)
