import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, TypedDict

from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END

from truthguard.core.config import config
from truthguard.core.errors import EmptyInputError, LookupPanelUnavailableError, VerificationTimeoutError
from truthguard.core.models import NormalizationResult, SourceOutcome, VerdictDecision, VerificationResult
from truthguard.services.evidence.aggregator import LookupFn, aggregate
from truthguard.services.evidence.tools import get_default_lookup
from truthguard.services.normalizer.normalizer import normalize
from truthguard.services.sources.panel import SourcePanel, get_default_panel
from truthguard.services.verdict.engine import decide


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class VerificationState(TypedDict, total=False):
    raw_input: str
    use_original_text: bool
    normalization: NormalizationResult
    claim_text: str
    evidence: List[SourceOutcome]
    decision: VerdictDecision


# === Pipeline Nodes ===
async def normalize_node(state: VerificationState) -> VerificationState:
    raw_input = state["raw_input"]
    normalization = normalize(raw_input)
    if state.get("use_original_text"):
        claim_text = raw_input.strip()
    else:
        claim_text = normalization.normalized
    logger.info(f"Normalized claim (corrected={normalization.was_corrected}): {claim_text[:60]}...")
    return {"normalization": normalization, "claim_text": claim_text}


async def evidence_node(state: VerificationState, config: RunnableConfig) -> VerificationState:
    options = config["configurable"]
    evidence = await aggregate(
        state["claim_text"],
        options["panel"],
        options["lookup"],
        timeout=options.get("lookup_timeout"),
        retries=options.get("lookup_retries", 0),
        concurrent=options.get("concurrent", True),
    )
    return {"evidence": evidence}


async def verdict_node(state: VerificationState) -> VerificationState:
    return {"decision": decide(state["evidence"])}


# === Orchestrator ===
workflow = StateGraph(state_schema=VerificationState)

workflow.add_node("normalize_node", normalize_node)
workflow.add_node("evidence_node", evidence_node)
workflow.add_node("verdict_node", verdict_node)

workflow.set_entry_point("normalize_node")
workflow.add_edge("normalize_node", "evidence_node")
workflow.add_edge("evidence_node", "verdict_node")
workflow.add_edge("verdict_node", END)

# No checkpointer: every verification is independent and nothing is persisted
graph = workflow.compile()


async def verify(
    raw_input: str,
    panel: Optional[SourcePanel] = None,
    lookup: Optional[LookupFn] = None,
    *,
    use_original_text: bool = False,
) -> VerificationResult:
    """
    Verifies one claim: normalize, check every panel source, decide.

    Raises EmptyInputError for blank input before any lookup runs, and
    LookupPanelUnavailableError when there is nothing to check against.
    Per-source lookup failures never surface here. Cancelling the call
    cancels the in-flight lookups and no result is produced.
    """
    if not raw_input or not raw_input.strip():
        raise EmptyInputError()

    panel = panel if panel is not None else get_default_panel()
    if len(panel) == 0:
        raise LookupPanelUnavailableError("The source panel is empty; there is nothing to check the claim against.")
    lookup = lookup if lookup is not None else get_default_lookup()

    initial_state: VerificationState = {
        "raw_input": raw_input,
        "use_original_text": use_original_text,
    }
    final_state = await graph.ainvoke(
        initial_state,
        config={
            "configurable": {
                "panel": panel,
                "lookup": lookup,
                "lookup_timeout": config.LOOKUP_TIMEOUT,
                "lookup_retries": config.LOOKUP_RETRIES,
                "concurrent": config.CONCURRENT_LOOKUPS,
            }
        },
    )

    normalization = final_state["normalization"]
    decision = final_state["decision"]
    evidence = final_state["evidence"]

    return VerificationResult(
        verdict=decision.verdict,
        confidence=decision.confidence,
        rationale=decision.rationale,
        evidence=tuple(evidence),
        found_count=sum(1 for o in evidence if o.found),
        total_sources=len(evidence),
        claim_text=final_state["claim_text"],
        original_text=raw_input,
        had_correction=normalization.was_corrected and not use_original_text,
        checked_at=datetime.now(timezone.utc),
    )


async def verify_with_timeout(
    raw_input: str,
    panel: Optional[SourcePanel] = None,
    lookup: Optional[LookupFn] = None,
    *,
    use_original_text: bool = False,
    timeout: Optional[float] = config.VERIFY_TIMEOUT,
) -> VerificationResult:
    """Runs verify() under a deadline; on expiry the lookups are cancelled and VerificationTimeoutError raised."""
    try:
        return await asyncio.wait_for(
            verify(raw_input, panel, lookup, use_original_text=use_original_text),
            timeout,
        )
    except asyncio.TimeoutError:
        logger.error(f"Verification timed out after {timeout}s")
        raise VerificationTimeoutError(f"Verification did not finish within {timeout} seconds.")


# Example usage
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    test_claim = "teh goverment announced a new policy for rural schools"

    result = asyncio.run(verify(test_claim))
    logger.info(f"Final Verdict: {result.verdict.value} ({result.confidence}%) - {result.rationale}")
