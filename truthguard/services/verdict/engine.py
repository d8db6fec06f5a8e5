"""
Verdict policy: turns per-source outcomes into a label, a confidence and a
rationale.

The policy is count based. On the default five-source panel a claim needs
three corroborating sources to be called true, two for partial
verification, and one to be unclear. Panels of another size keep the same
proportions (3/5 and 2/5 of the panel, rounded up), so the five-source
bands come out unchanged.

On panels of one to three sources a single corroborating source already
reaches the partial threshold (or the true one, for a single source), so
those panels never produce an Unclear verdict. Unclear first appears at
four sources.
"""

import logging
from typing import Sequence, Tuple

from truthguard.core.models import SourceOutcome, VerdictDecision, VerdictLabel

log = logging.getLogger(__name__)

REFERENCE_PANEL_SIZE = 5
TRUE_BAND = 3  # corroborating sources out of REFERENCE_PANEL_SIZE
PARTIAL_BAND = 2

TRUE_BASE_CONFIDENCE = 85
TRUE_CONFIDENCE_STEP = 5
PARTIAL_CONFIDENCE = 65
UNCLEAR_CONFIDENCE = 30


def _ceil_share(band: int, total_sources: int) -> int:
    return -(-band * total_sources // REFERENCE_PANEL_SIZE)


def thresholds(total_sources: int) -> Tuple[int, int]:
    """Returns (true_threshold, partial_threshold) corroboration counts for a panel size."""
    true_threshold = max(_ceil_share(TRUE_BAND, total_sources), 1)
    partial_threshold = max(_ceil_share(PARTIAL_BAND, total_sources), 1)
    if total_sources >= 2 and partial_threshold >= true_threshold:
        partial_threshold = true_threshold - 1
    return true_threshold, partial_threshold


def decide(outcomes: Sequence[SourceOutcome]) -> VerdictDecision:
    total = len(outcomes)
    found = sum(1 for o in outcomes if o.found)
    true_threshold, partial_threshold = thresholds(total)

    if found >= true_threshold and found > 0:
        confidence = TRUE_BASE_CONFIDENCE + TRUE_CONFIDENCE_STEP * (found - true_threshold)
        decision = VerdictDecision(
            verdict=VerdictLabel.TRUE,
            confidence=min(max(confidence, TRUE_BASE_CONFIDENCE), 100),
            rationale=f"Verified: reported consistently by {found} out of {total} trusted sources.",
        )
    elif found >= partial_threshold and found > 0:
        decision = VerdictDecision(
            verdict=VerdictLabel.PARTIALLY_VERIFIED,
            confidence=PARTIAL_CONFIDENCE,
            rationale=(
                f"Partially verified: only {found} out of {total} trusted sources reported this. "
                "Exercise caution."
            ),
        )
    elif found > 0:
        decision = VerdictDecision(
            verdict=VerdictLabel.UNCLEAR,
            confidence=UNCLEAR_CONFIDENCE,
            rationale=(
                f"Unclear: only {found} out of {total} trusted sources reported this. "
                "Insufficient evidence for verification."
            ),
        )
    else:
        decision = VerdictDecision(
            verdict=VerdictLabel.NOT_FOUND,
            confidence=0,
            rationale=f"Not found: {found} out of {total} trusted sources have reported this claim.",
        )

    log.info(f"Verdict {decision.verdict.value} ({decision.confidence}%) from {found}/{total} sources")
    return decision
