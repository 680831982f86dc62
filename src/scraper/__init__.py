"""One Piece wiki scraper package."""

from src.scraper.domain.models import ScrapeSummary
from src.scraper.scrape import run_scrape, run_scrape_async, scrape_families

__all__ = [
    "ScrapeSummary",
    "run_scrape",
    "run_scrape_async",
    "scrape_families",
]
