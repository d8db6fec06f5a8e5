import logging
from functools import lru_cache
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from truthguard.core.config import config
from truthguard.core.models import Source

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: Tuple[Source, ...] = (
    Source(display_name="India Times", domain_id="indiatimes.com"),
    Source(display_name="Hindustan Times", domain_id="hindustantimes.com"),
    Source(display_name="News18", domain_id="news18.com"),
    Source(display_name="NDTV", domain_id="ndtv.com"),
    Source(display_name="Indian Express", domain_id="indianexpress.com"),
)


class SourcePanel(BaseModel):
    """
    Fixed, ordered set of trusted sources a claim is checked against.

    The order is the canonical evidence order everywhere downstream. The
    panel is immutable and shared read-only between concurrent requests.
    """

    model_config = ConfigDict(frozen=True)

    sources: Tuple[Source, ...] = Field(default=DEFAULT_SOURCES)

    @field_validator("sources")
    @classmethod
    def _unique_domains(cls, sources: Tuple[Source, ...]) -> Tuple[Source, ...]:
        seen = set()
        for source in sources:
            domain = source.domain_id.lower()
            if domain in seen:
                raise ValueError(f"duplicate source domain in panel: {source.domain_id}")
            seen.add(domain)
        return sources

    def __len__(self) -> int:
        return len(self.sources)

    @property
    def domains(self) -> Tuple[str, ...]:
        return tuple(s.domain_id for s in self.sources)


@lru_cache(maxsize=1)
def get_default_panel() -> SourcePanel:
    """Builds the process-wide panel once, from SOURCE_PANEL or the built-in sources."""
    if config.SOURCE_PANEL:
        panel = SourcePanel(sources=tuple(Source(**entry) for entry in config.SOURCE_PANEL))
    else:
        panel = SourcePanel()
    logger.info(f"Source panel ready with {len(panel)} sources: {', '.join(panel.domains)}")
    return panel
