import asyncio
from typing import Iterable

import pytest

from truthguard.core.models import Source, SourceOutcome
from truthguard.services.sources.panel import DEFAULT_SOURCES, SourcePanel


class StubLookup:
    """Reports coverage for a fixed set of domains and records every call."""

    def __init__(self, found_domains: Iterable[str] = (), failing_domains: Iterable[str] = (), delays=None):
        self.found_domains = set(found_domains)
        self.failing_domains = set(failing_domains)
        self.delays = delays or {}
        self.calls = []

    async def __call__(self, claim: str, source: Source) -> SourceOutcome:
        self.calls.append((claim, source.domain_id))
        delay = self.delays.get(source.domain_id)
        if delay:
            await asyncio.sleep(delay)
        if source.domain_id in self.failing_domains:
            raise ConnectionError(f"{source.domain_id} unreachable")
        if source.domain_id in self.found_domains:
            return SourceOutcome(
                source=source,
                found=True,
                url=f"https://{source.domain_id}/story",
                snippet=f"{source.display_name} covered this.",
            )
        return SourceOutcome.not_found(source)


@pytest.fixture
def panel() -> SourcePanel:
    return SourcePanel()


@pytest.fixture
def domains():
    return [s.domain_id for s in DEFAULT_SOURCES]


@pytest.fixture
def stub_lookup():
    return StubLookup


def outcomes_with(found: int, total: int = 5):
    sources = [Source(display_name=f"Source {i}", domain_id=f"source{i}.com") for i in range(total)]
    return [
        SourceOutcome(source=s, found=True, url=f"https://{s.domain_id}/a", snippet="covered")
        if i < found
        else SourceOutcome.not_found(s)
        for i, s in enumerate(sources)
    ]


@pytest.fixture
def make_outcomes():
    return outcomes_with
