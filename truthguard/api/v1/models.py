from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VerifyRequest(CamelModel):
    text: str = Field(..., description="The claim or news text to verify.")
    use_original_text: bool = Field(
        False,
        description="Check the text exactly as typed instead of the auto-corrected version.",
    )


class NormalizeRequest(CamelModel):
    text: str = Field(..., description="Text to preview the auto-correction for.")


class ErrorResponse(CamelModel):
    error: str = Field(..., description="EmptyInput | LookupPanelUnavailable | VerificationTimeout")
    message: str


class VerdictDisplayResponse(CamelModel):
    label: str
    style_hint: str = Field(..., description="default | secondary | destructive | outline")
    confidence_style: Optional[str] = Field(None, description="success | warning | destructive")
    share_text: Optional[str] = Field(None, description="Summary line for sharing; present when a confidence is given.")


class SourceListing(CamelModel):
    display_name: str
    domain_id: str
    search_url: Optional[str] = Field(None, description="Site-restricted search link for the claim, when one is given.")
