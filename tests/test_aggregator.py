import asyncio

import pytest

from truthguard.core.models import Source, SourceOutcome
from truthguard.services.evidence.aggregator import aggregate, bind_outcome


@pytest.mark.asyncio
async def test_one_outcome_per_source_in_panel_order(panel, domains, stub_lookup):
    lookup = stub_lookup(found_domains={"ndtv.com", "news18.com"})
    outcomes = await aggregate("claim", panel, lookup)

    assert [o.source.domain_id for o in outcomes] == domains
    assert [o.found for o in outcomes] == [False, False, True, True, False]
    assert sorted(d for _, d in lookup.calls) == sorted(domains)


@pytest.mark.asyncio
async def test_order_is_panel_order_not_completion_order(panel, domains, stub_lookup):
    # First source finishes last
    lookup = stub_lookup(found_domains=set(domains), delays={domains[0]: 0.05})
    outcomes = await aggregate("claim", panel, lookup)
    assert [o.source.domain_id for o in outcomes] == domains


@pytest.mark.asyncio
async def test_failing_sources_degrade_to_not_found(panel, domains, stub_lookup):
    lookup = stub_lookup(found_domains=set(domains), failing_domains={domains[1], domains[3]})
    outcomes = await aggregate("claim", panel, lookup)

    assert len(outcomes) == len(panel)
    assert [o.found for o in outcomes] == [True, False, True, False, True]
    failed = outcomes[1]
    assert failed.url is None and failed.snippet is None


@pytest.mark.asyncio
async def test_all_sources_failing_still_returns_full_list(panel, domains, stub_lookup):
    lookup = stub_lookup(failing_domains=set(domains))
    outcomes = await aggregate("claim", panel, lookup)
    assert len(outcomes) == 5
    assert not any(o.found for o in outcomes)


@pytest.mark.asyncio
async def test_sequential_and_concurrent_agree(panel, stub_lookup):
    found = {"indiatimes.com", "indianexpress.com"}
    concurrent = await aggregate("claim", panel, stub_lookup(found_domains=found))
    sequential = await aggregate("claim", panel, stub_lookup(found_domains=found), concurrent=False)
    assert concurrent == sequential


@pytest.mark.asyncio
async def test_slow_lookup_times_out_as_not_found(panel, domains, stub_lookup):
    lookup = stub_lookup(found_domains=set(domains), delays={domains[2]: 1.0})
    outcomes = await aggregate("claim", panel, lookup, timeout=0.05)
    assert [o.found for o in outcomes] == [True, True, False, True, True]


@pytest.mark.asyncio
async def test_retries_are_bounded(panel):
    attempts = []

    async def flaky(claim, source):
        attempts.append(source.domain_id)
        if attempts.count(source.domain_id) == 1:
            raise TimeoutError("first attempt fails")
        return {"found": True, "url": f"https://{source.domain_id}/x", "snippet": "ok"}

    outcomes = await aggregate("claim", panel, flaky, retries=1)
    assert all(o.found for o in outcomes)
    assert len(attempts) == 2 * len(panel)


@pytest.mark.asyncio
async def test_no_retries_means_exactly_one_call_per_source(panel, domains, stub_lookup):
    lookup = stub_lookup(failing_domains=set(domains))
    await aggregate("claim", panel, lookup)
    assert len(lookup.calls) == len(panel)


@pytest.mark.asyncio
async def test_mapping_results_and_invalid_results(panel):
    async def lookup(claim, source):
        if source.domain_id == "ndtv.com":
            return {"found": True, "url": "https://ndtv.com/a", "snippet": "NDTV story"}
        if source.domain_id == "news18.com":
            # found=False with a url breaks the outcome invariant
            return {"found": False, "url": "https://news18.com/a", "snippet": None}
        return None

    outcomes = await aggregate("claim", panel, lookup)
    by_domain = {o.source.domain_id: o for o in outcomes}
    assert by_domain["ndtv.com"].found is True
    assert by_domain["ndtv.com"].url == "https://ndtv.com/a"
    assert by_domain["news18.com"] == SourceOutcome.not_found(by_domain["news18.com"].source)
    assert sum(o.found for o in outcomes) == 1


@pytest.mark.asyncio
async def test_cancellation_propagates(panel, domains, stub_lookup):
    lookup = stub_lookup(delays={d: 5.0 for d in domains})
    task = asyncio.ensure_future(aggregate("claim", panel, lookup))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


def test_bind_outcome_rebinds_to_queried_source():
    queried = Source(display_name="NDTV", domain_id="ndtv.com")
    other = Source(display_name="Other", domain_id="other.com")
    raw = SourceOutcome(source=other, found=True, url="https://ndtv.com/a", snippet="x")
    assert bind_outcome(queried, raw).source == queried


def test_bind_outcome_rejects_unknown_types():
    with pytest.raises(TypeError):
        bind_outcome(Source(display_name="NDTV", domain_id="ndtv.com"), "found")
