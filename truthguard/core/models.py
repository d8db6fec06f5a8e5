from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Immutable value object serialized with camelCase field names."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class VerdictLabel(str, Enum):
    TRUE = "True"
    PARTIALLY_VERIFIED = "Partially Verified"
    UNCLEAR = "Unclear"
    NOT_FOUND = "Not Found"


class Source(DomainModel):
    display_name: str = Field(..., min_length=1, description="Name of the trusted outlet.")
    domain_id: str = Field(..., min_length=1, description="Registered domain of the outlet, e.g. ndtv.com.")

    def search_url(self, claim: str) -> str:
        """Site-restricted web search link for a claim on this source."""
        return f"https://www.google.com/search?q={quote_plus(claim)}+site:{self.domain_id}"


class SourceOutcome(DomainModel):
    source: Source
    found: bool = Field(..., description="Whether the source has coverage of the claim.")
    url: Optional[str] = Field(None, description="Link to the covering article, if found.")
    snippet: Optional[str] = Field(None, description="Excerpt of the covering article, if found.")

    @model_validator(mode="after")
    def _no_evidence_when_not_found(self) -> "SourceOutcome":
        if not self.found and (self.url is not None or self.snippet is not None):
            raise ValueError("an outcome that was not found cannot carry a url or snippet")
        return self

    @classmethod
    def not_found(cls, source: Source) -> "SourceOutcome":
        return cls(source=source, found=False, url=None, snippet=None)


class NormalizationResult(DomainModel):
    original: str
    normalized: str
    was_corrected: bool = Field(False, description="True when at least one dictionary correction fired.")


class VerdictDecision(DomainModel):
    verdict: VerdictLabel
    confidence: int = Field(..., ge=0, le=100)
    rationale: str


class VerificationResult(DomainModel):
    verdict: VerdictLabel
    confidence: int = Field(..., ge=0, le=100)
    rationale: str
    evidence: Tuple[SourceOutcome, ...] = Field(..., description="One outcome per source, in panel order.")
    found_count: int = Field(..., ge=0)
    total_sources: int = Field(..., ge=0)
    claim_text: str = Field(..., description="The text that was checked against the sources.")
    original_text: str = Field(..., description="The text as the user submitted it.")
    had_correction: bool
    checked_at: datetime

    @model_validator(mode="after")
    def _counts_match_evidence(self) -> "VerificationResult":
        if self.total_sources != len(self.evidence):
            raise ValueError("total_sources must equal the number of evidence entries")
        if self.found_count != sum(1 for o in self.evidence if o.found):
            raise ValueError("found_count must equal the number of found evidence entries")
        return self
