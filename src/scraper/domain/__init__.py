"""Domain models, enums and URL-key rules for the scraper."""

from src.scraper.domain.errors import CrawlError, ScraperError, StructureError, TransportError
from src.scraper.domain.models import (
    DevilFruit,
    DfTypeInfo,
    EnrichmentOutcome,
    EnrichmentResult,
    NamedJpEn,
    NamedUrl,
    PageMedia,
    Pirate,
    ScrapeSummary,
    Ship,
)
from src.scraper.domain.types import DfSubType, DfType, EntityFamily

__all__ = [
    "CrawlError",
    "DevilFruit",
    "DfSubType",
    "DfType",
    "DfTypeInfo",
    "EnrichmentOutcome",
    "EnrichmentResult",
    "EntityFamily",
    "NamedJpEn",
    "NamedUrl",
    "PageMedia",
    "Pirate",
    "ScrapeSummary",
    "ScraperError",
    "Ship",
    "StructureError",
    "TransportError",
]
