# truthguard/api/v1/endpoints.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from truthguard.api.v1.display import confidence_style, display_for, share_text
from truthguard.api.v1.models import (
    ErrorResponse,
    NormalizeRequest,
    SourceListing,
    VerdictDisplayResponse,
    VerifyRequest,
)
from truthguard.core.config import config
from truthguard.core.errors import VerificationError
from truthguard.core.models import NormalizationResult, VerificationResult
from truthguard.services.evidence.aggregator import LookupFn
from truthguard.services.normalizer.normalizer import normalize
from truthguard.services.orchestrator import verify_with_timeout
from truthguard.services.sources.panel import SourcePanel, get_default_panel

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix=config.API_PREFIX, tags=["v1"])


def get_panel() -> SourcePanel:
    return get_default_panel()


def get_lookup() -> Optional[LookupFn]:
    """Lookup override for the request; None lets the orchestrator use the configured provider."""
    return None


@router.post(
    "/verify",
    response_model=VerificationResult,
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def verify_claim(
    request: VerifyRequest,
    panel: SourcePanel = Depends(get_panel),
    lookup: Optional[LookupFn] = Depends(get_lookup),
) -> VerificationResult:
    """
    Main endpoint: verify a claim against the trusted source panel.
    Returns the verdict, confidence, rationale and per-source evidence.
    """
    logger.info(f"Received verification request ({len(request.text)} chars, original={request.use_original_text})")

    try:
        return await verify_with_timeout(
            request.text,
            panel,
            lookup,
            use_original_text=request.use_original_text,
            timeout=config.VERIFY_TIMEOUT,
        )
    except VerificationError:
        raise
    except Exception as e:
        logger.error(f"Verification failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Verification failed: {str(e)}"
        )


@router.post("/normalize", response_model=NormalizationResult)
async def normalize_text(request: NormalizeRequest) -> NormalizationResult:
    """Preview of the auto-correction applied before verification."""
    return normalize(request.text)


@router.get("/sources", response_model=List[SourceListing], response_model_exclude_none=True)
async def list_sources(
    claim: Optional[str] = Query(None, description="Adds a per-source search link for this claim."),
    panel: SourcePanel = Depends(get_panel),
) -> List[SourceListing]:
    claim = claim.strip() if claim else ""
    return [
        SourceListing(
            display_name=source.display_name,
            domain_id=source.domain_id,
            search_url=source.search_url(claim) if claim else None,
        )
        for source in panel.sources
    ]


@router.get("/verdicts/display", response_model=VerdictDisplayResponse)
async def verdict_display(
    label: str = Query(..., description="Canonical verdict label or a known alias."),
    confidence: Optional[float] = Query(None, ge=0, le=100),
) -> VerdictDisplayResponse:
    display = display_for(label)
    return VerdictDisplayResponse(
        label=display.label,
        style_hint=display.style_hint,
        confidence_style=confidence_style(confidence) if confidence is not None else None,
        share_text=share_text(label, confidence) if confidence is not None else None,
    )
