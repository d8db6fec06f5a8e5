"""
Presentation mapping for verdict labels.

The engine only ever emits the four canonical labels. Results imported from
elsewhere (older checks, external fact-checkers) use a wider vocabulary;
those aliases are resolved here and never reach the engine.
"""

from typing import Dict, NamedTuple

from truthguard.core.models import VerdictLabel


class VerdictDisplay(NamedTuple):
    label: str
    style_hint: str


CANONICAL_DISPLAY: Dict[VerdictLabel, VerdictDisplay] = {
    VerdictLabel.TRUE: VerdictDisplay("True", "default"),
    VerdictLabel.PARTIALLY_VERIFIED: VerdictDisplay("Partially Verified", "secondary"),
    VerdictLabel.UNCLEAR: VerdictDisplay("Unclear", "outline"),
    VerdictLabel.NOT_FOUND: VerdictDisplay("Not Found", "outline"),
}

UNDETERMINED = VerdictDisplay("Undetermined", "outline")

ALIAS_DISPLAY: Dict[str, VerdictDisplay] = {
    "true": VerdictDisplay("Likely True", "default"),
    "false": VerdictDisplay("Likely False", "destructive"),
    "mixed": VerdictDisplay("Mixed", "secondary"),
    "undetermined": UNDETERMINED,
    "Mostly True": VerdictDisplay("Mostly True", "default"),
    "Misleading": VerdictDisplay("Misleading", "destructive"),
    "Partially False": VerdictDisplay("Partially False", "destructive"),
    "False": VerdictDisplay("False", "destructive"),
    "Unverified": VerdictDisplay("Unverified", "outline"),
}


def display_for(label: str) -> VerdictDisplay:
    """Resolves a canonical label or a known alias; anything else is undetermined."""
    try:
        return CANONICAL_DISPLAY[VerdictLabel(label)]
    except ValueError:
        return ALIAS_DISPLAY.get(label, UNDETERMINED)


def confidence_style(confidence: float) -> str:
    if confidence >= 85:
        return "success"
    if confidence >= 70:
        return "warning"
    return "destructive"


def share_text(label: str, confidence: float) -> str:
    """One-line summary offered when a result is shared."""
    return f"Claim verified as {display_for(label).label} with {round(confidence)}% confidence."
